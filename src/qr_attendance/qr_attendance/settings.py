from __future__ import annotations

import importlib
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType

from dotenv import load_dotenv

from config import get_settings_module

from .core.constants import DEFAULT_EXPIRY_MINUTES


@dataclass(frozen=True)
class AppSettings:
    """Explicit configuration handed to the container and the Flask app."""

    secret_key: str
    devices_file: Path
    log_dir: Path
    issuer_settings_file: Path
    token_expiry_minutes: int = DEFAULT_EXPIRY_MINUTES
    debug: bool = False
    testing: bool = False
    cookie_secure: bool = False
    log_level: str = "INFO"
    issuer_enabled: bool = True


def load_settings(settings: ModuleType) -> AppSettings:
    """Build AppSettings from one of the `config.<env>` modules."""
    return AppSettings(
        secret_key=str(getattr(settings, "SECRET_KEY")),
        devices_file=Path(getattr(settings, "DEVICES_FILE")),
        log_dir=Path(getattr(settings, "ATTENDANCE_LOG_DIR")),
        issuer_settings_file=Path(getattr(settings, "ISSUER_SETTINGS_FILE")),
        token_expiry_minutes=int(getattr(settings, "TOKEN_EXPIRY_MINUTES", DEFAULT_EXPIRY_MINUTES)),
        debug=bool(getattr(settings, "DEBUG", False)),
        testing=bool(getattr(settings, "TESTING", False)),
        cookie_secure=bool(getattr(settings, "COOKIE_SECURE", False)),
        log_level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        issuer_enabled=bool(getattr(settings, "ISSUER_ENABLED", True)),
    )


def settings_from_env() -> AppSettings:
    """Load `.env`, pick the settings module from APP_ENV and build AppSettings."""
    load_dotenv(override=False)
    return load_settings(importlib.import_module(get_settings_module()))
