from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from ..common.validators import require_http_url, require_min_length, require_non_empty
from ..core.constants import MIN_PASSKEY_LENGTH
from ..core.exceptions import SettingsDecodeError

logger = logging.getLogger(__name__)

_FIELDS = {"deviceId": "device_id", "passkey": "passkey", "targetUrl": "target_url"}


@dataclass(frozen=True)
class IssuerSettings:
    """What the issuing device needs to build a QR URL."""

    device_id: str = ""
    passkey: str = ""
    target_url: str = ""

    @property
    def is_configured(self) -> bool:
        return bool(self.device_id and self.passkey and self.target_url)

    def to_dict(self) -> dict[str, str]:
        return {wire: getattr(self, attr) for wire, attr in _FIELDS.items()}


def decode_settings(raw: str) -> IssuerSettings:
    """Parse stored settings; missing keys become empty strings."""
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise SettingsDecodeError("Stored settings are not valid JSON") from e

    if not isinstance(data, dict):
        raise SettingsDecodeError("Stored settings must be a JSON object")

    values = {}
    for wire, attr in _FIELDS.items():
        value = data.get(wire, "")
        if not isinstance(value, str):
            raise SettingsDecodeError(f"Setting {wire} must be a string")
        values[attr] = value
    return IssuerSettings(**values)


def validate_settings_form(device_id: str, passkey: str, target_url: str) -> IssuerSettings:
    """Validate the settings form; raises ValidationError on the first bad field."""
    return IssuerSettings(
        device_id=require_non_empty(device_id, "Device ID"),
        passkey=require_min_length(passkey, "Passkey", MIN_PASSKEY_LENGTH),
        target_url=require_http_url(target_url, "Target URL"),
    )


class JsonSettingsStore:
    """Key-value persistence of the issuer settings in a small JSON file.

    Policy: a missing file yields empty settings. A corrupt file also yields
    empty settings (with a warning) unless `fallback_on_corrupt` is False, in
    which case SettingsDecodeError propagates.
    """

    def __init__(self, path: Union[str, Path], *, fallback_on_corrupt: bool = True):
        self._path = Path(path)
        self._fallback_on_corrupt = fallback_on_corrupt

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> IssuerSettings:
        if not self._path.exists():
            return IssuerSettings()

        try:
            return decode_settings(self._path.read_text(encoding="utf-8"))
        except SettingsDecodeError:
            if not self._fallback_on_corrupt:
                raise
            logger.warning("issuer settings at %s are corrupt, using empty defaults", self._path)
            return IssuerSettings()

    def save(self, settings: IssuerSettings) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(settings.to_dict(), ensure_ascii=False), encoding="utf-8")

    def reset(self) -> None:
        self._path.unlink(missing_ok=True)
