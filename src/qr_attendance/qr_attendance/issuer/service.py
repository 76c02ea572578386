from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ..core.enums import ActionType
from ..core.exceptions import ConfigurationIncomplete
from ..tokens.codec import TokenCodec
from ..tokens.expiry import ExpiryPolicy
from ..tokens.model import TokenBundle
from .renderer import QrRenderer
from .settings_store import IssuerSettings, JsonSettingsStore


@dataclass(frozen=True)
class IssuedCode:
    bundle: TokenBundle
    url: str


class IssuerService:
    """Issuing side: settings -> token -> URL -> QR image."""

    def __init__(
        self,
        settings: JsonSettingsStore,
        codec: TokenCodec,
        expiry: ExpiryPolicy,
        renderer: QrRenderer,
    ):
        self._settings = settings
        self._codec = codec
        self._expiry = expiry
        self._renderer = renderer

    @property
    def expiry(self) -> ExpiryPolicy:
        return self._expiry

    def current_settings(self) -> IssuerSettings:
        return self._settings.load()

    def issue(self, action: Union[ActionType, str], *, now: Optional[int] = None) -> IssuedCode:
        settings = self._settings.load()
        if not settings.is_configured:
            raise ConfigurationIncomplete("Device ID, passkey and target URL must be configured first")

        bundle = self._codec.generate(settings.device_id, settings.passkey, action, now=now)
        return IssuedCode(bundle=bundle, url=self._codec.build_url(settings.target_url, bundle))

    def remaining_seconds(self, code: IssuedCode) -> int:
        return self._expiry.remaining_seconds(code.bundle.timestamp)

    def render_png(self, code: IssuedCode) -> bytes:
        return self._renderer.render_png(code.url)

    def render_ascii(self, code: IssuedCode) -> str:
        return self._renderer.render_ascii(code.url)
