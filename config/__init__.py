"""Settings modules, selected by APP_ENV.

Every module defines the same upper-case names; `qr_attendance.settings`
turns the selected one into an AppSettings value.
"""
import os

_ALIASES = {
    "prod": "production",
    "production": "production",
    "test": "testing",
    "testing": "testing",
}


def get_settings_module() -> str:
    env = os.getenv("APP_ENV", "development").strip().lower()
    # Anything unrecognised runs with development settings.
    return f"config.{_ALIASES.get(env, 'development')}"
