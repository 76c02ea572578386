from __future__ import annotations

from urllib.parse import urlsplit

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_max_length(value: str, field_name: str, max_len: int) -> str:
    if len(value) > max_len:
        raise ValidationError(f"{field_name} must be at most {max_len} characters")
    return value


def require_http_url(value: str, field_name: str) -> str:
    value = require_non_empty(value, field_name)
    parts = urlsplit(value)
    if parts.scheme not in {"http", "https"} or not parts.netloc:
        raise ValidationError(f"{field_name} must be an http(s) URL")
    return value
