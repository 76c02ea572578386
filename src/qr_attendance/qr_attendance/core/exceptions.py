class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class DecodeError(ValidationError):
    """Raised when a token bundle cannot be decoded from query parameters."""

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason


class BadRequestError(ValidationError):
    """User-correctable receiver failure, rendered as HTTP 400."""

    MISSING_PARAMETERS = "missing_parameters"
    INVALID_TIMESTAMP = "invalid_timestamp"
    EXPIRED = "expired"
    DEVICE_NOT_REGISTERED = "device_not_registered"
    USERNAME_REQUIRED = "username_required"

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason


class ConfigurationIncomplete(DomainError):
    """Raised when issuer settings lack a device id, passkey or target URL."""


class GenerationError(DomainError):
    """Raised when the token hash cannot be computed."""


class RenderError(DomainError):
    """Raised when a QR code image cannot be drawn."""


class SettingsDecodeError(DomainError):
    """Raised when stored issuer settings are corrupt."""


class DeviceStoreError(DomainError):
    """Raised when the device passkey file exists but cannot be read."""
