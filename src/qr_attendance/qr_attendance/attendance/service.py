"""Receiving side of the check-in flow.

parse params -> check expiry -> resolve device -> verify token ->
resolve identity (or ask for registration) -> log -> outcome.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Mapping, Optional, Union

from ..common.datetime_utils import ms_to_iso, now_utc, to_iso
from ..common.validators import require_max_length
from ..core.constants import UNKNOWN_USERNAME, USERNAME_MAX_LENGTH
from ..core.enums import OutcomeKind, action_label
from ..core.exceptions import BadRequestError, DecodeError, ValidationError
from ..devices.repository import DeviceKeyStore
from ..tokens.codec import TokenCodec
from ..tokens.expiry import ExpiryPolicy
from ..tokens.model import TokenBundle
from .model import AttendanceEntry, LogRecord
from .repository import AttendanceLogStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegistrationRequired:
    """No identity on the request: show the registration form."""

    bundle: TokenBundle
    token_valid: bool


@dataclass(frozen=True)
class Recorded:
    username: str
    action: str
    is_valid: bool
    record: LogRecord
    newly_registered: bool = False

    @property
    def message(self) -> str:
        label = action_label(self.action).lower()
        if self.newly_registered:
            if self.is_valid:
                return f"{self.username}, you are registered and your {label} has been recorded."
            return f"{self.username}, you are registered, but the token is invalid."
        if self.is_valid:
            return f"{self.username}, your {label} has been recorded."
        return f"{self.username}, your {label} was received, but the token is invalid."

    @property
    def css_class(self) -> str:
        return "success" if self.is_valid else "warning"


ReceiveOutcome = Union[RegistrationRequired, Recorded]

_DECODE_MESSAGES = {
    BadRequestError.MISSING_PARAMETERS: "Invalid QR code: required parameters are missing.",
    BadRequestError.INVALID_TIMESTAMP: "Invalid timestamp.",
}


class ReceiverService:
    def __init__(
        self,
        codec: TokenCodec,
        expiry: ExpiryPolicy,
        devices: DeviceKeyStore,
        logs: AttendanceLogStore,
        *,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._codec = codec
        self._expiry = expiry
        self._devices = devices
        self._logs = logs
        self._clock = clock

    def receive(self, params: Mapping[str, str], *, username: Optional[str] = None) -> ReceiveOutcome:
        """GET /receive. `username` is the returning-visitor identity, if any."""
        username = (username or "").strip() or None
        bundle, passkey = self._admit(params, username=username)
        is_valid = self._codec.verify(bundle, passkey)

        if username is None:
            return RegistrationRequired(bundle=bundle, token_valid=is_valid)

        record = self._record(bundle, username=username, is_valid=is_valid)
        return Recorded(username=username, action=bundle.action_type, is_valid=is_valid, record=record)

    def normalize_username(self, value: Optional[str]) -> str:
        username = (value or "").strip()
        if not username:
            raise BadRequestError(BadRequestError.USERNAME_REQUIRED, "Please enter a user name.")
        try:
            return require_max_length(username, "User name", USERNAME_MAX_LENGTH)
        except ValidationError as e:
            raise BadRequestError(BadRequestError.USERNAME_REQUIRED, str(e)) from e

    def register(self, form: Mapping[str, str]) -> Recorded:
        """POST /register: first-time visitor submits a name with the original bundle."""
        username = self.normalize_username(form.get("username"))
        bundle, passkey = self._admit(form, username=username)
        is_valid = self._codec.verify(bundle, passkey)
        record = self._record(bundle, username=username, is_valid=is_valid)
        return Recorded(
            username=username,
            action=bundle.action_type,
            is_valid=is_valid,
            record=record,
            newly_registered=True,
        )

    def _admit(self, params: Mapping[str, str], *, username: Optional[str]) -> tuple[TokenBundle, str]:
        """Steps that may reject the request before verification."""
        try:
            bundle = self._codec.from_params(params)
        except DecodeError as e:
            logger.info("receive rejected: %s", e.reason)
            raise BadRequestError(e.reason, _DECODE_MESSAGES[e.reason]) from e

        # Expiry is checked before the device lookup: an expired token for an
        # unknown device reports "expired" and writes nothing.
        if not self._expiry.is_valid(bundle.timestamp):
            logger.info("receive rejected: expired (device=%s)", bundle.device_id)
            raise BadRequestError(BadRequestError.EXPIRED, "This QR code has expired. Please scan a new one.")

        passkey = self._devices.get_passkey(bundle.device_id)
        if not passkey:
            self._record(bundle, username=username or UNKNOWN_USERNAME, is_valid=False)
            logger.info("receive rejected: device not registered (device=%s)", bundle.device_id)
            raise BadRequestError(BadRequestError.DEVICE_NOT_REGISTERED, "This device is not registered.")

        return bundle, passkey

    def _record(self, bundle: TokenBundle, *, username: str, is_valid: bool) -> LogRecord:
        now = self._clock()
        entry = AttendanceEntry(
            username=username,
            device_id=bundle.device_id,
            action=bundle.action_type,
            token_timestamp=ms_to_iso(bundle.timestamp),
            request_timestamp=to_iso(now),
        )
        return self._logs.append(OutcomeKind.of(is_valid), entry, write_time=now)
