from __future__ import annotations

from typing import Callable, Optional

from ..common.datetime_utils import now_ms
from ..core.constants import DEFAULT_EXPIRY_MINUTES


class ExpiryPolicy:
    """Pure time arithmetic over token timestamps (epoch milliseconds)."""

    def __init__(self, expiry_minutes: int = DEFAULT_EXPIRY_MINUTES, *, clock: Callable[[], int] = now_ms):
        self.expiry_minutes = int(expiry_minutes)
        self._clock = clock

    def _window_ms(self, expiry_minutes: Optional[int]) -> int:
        minutes = self.expiry_minutes if expiry_minutes is None else int(expiry_minutes)
        return minutes * 60 * 1000

    def is_valid(self, timestamp: int, expiry_minutes: Optional[int] = None) -> bool:
        # Exactly at the boundary counts as expired.
        return (self._clock() - timestamp) < self._window_ms(expiry_minutes)

    def remaining_seconds(self, timestamp: int, expiry_minutes: Optional[int] = None) -> int:
        remaining_ms = self._window_ms(expiry_minutes) - (self._clock() - timestamp)
        return max(0, remaining_ms // 1000)
