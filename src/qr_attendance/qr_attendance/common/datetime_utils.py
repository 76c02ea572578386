from __future__ import annotations

from datetime import datetime, timedelta, timezone

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def now_utc() -> datetime:
    """Current wall-clock time (UTC).

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def now_ms() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return to_epoch_ms(now_utc())


def to_epoch_ms(value: datetime) -> int:
    delta = value - _EPOCH
    return (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000


def from_epoch_ms(ms: int) -> datetime:
    """Epoch milliseconds -> aware UTC datetime.

    Raises OverflowError for values outside the datetime range.
    """
    return _EPOCH + timedelta(milliseconds=ms)


def to_iso(value: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision, e.g. 2025-01-31T08:00:00.123Z."""
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def ms_to_iso(ms: int) -> str:
    return to_iso(from_epoch_ms(ms))


def year_month(value: datetime) -> str:
    """YYYY-MM partition key."""
    return f"{value.year:04d}-{value.month:02d}"
