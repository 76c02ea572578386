"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_EXPIRY_MINUTES = 5
TOKEN_LENGTH = 32
TOKEN_SEPARATOR = "|"

UNKNOWN_USERNAME = "unknown"
USERNAME_MAX_LENGTH = 50

IDENTITY_COOKIE_NAME = "username"
IDENTITY_COOKIE_DAYS = 365

MIN_PASSKEY_LENGTH = 8
QR_MARGIN = 2
QR_BOX_SIZE = 10
