"""Countdown shown while a QR code is on screen.

A display owns at most one live ticker; showing a new code stops the
previous ticker before starting the next one.
"""
from __future__ import annotations

import threading
from typing import Callable, Optional

from ..tokens.expiry import ExpiryPolicy
from .service import IssuedCode


def format_remaining(seconds: int) -> str:
    """`m:ss`, e.g. 4:05."""
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes}:{secs:02d}"


class TickerHandle:
    def __init__(self, stop: threading.Event, thread: threading.Thread):
        self._stop = stop
        self._thread = thread

    @property
    def active(self) -> bool:
        return self._thread.is_alive() and not self._stop.is_set()

    def stop(self) -> None:
        """Signal the ticker to stop without waiting for its thread."""
        self._stop.set()

    def cancel(self) -> None:
        """Stop ticking; returns once the ticker thread has exited."""
        self.stop()
        if self._thread is not threading.current_thread():
            self._thread.join()


class CountdownTicker:
    def __init__(self, expiry: ExpiryPolicy, *, interval: float = 1.0):
        self._expiry = expiry
        self._interval = float(interval)

    def start(
        self,
        timestamp: int,
        on_tick: Callable[[int], None],
        on_expire: Callable[[], None],
    ) -> TickerHandle:
        stop = threading.Event()

        def run() -> None:
            while not stop.is_set():
                remaining = self._expiry.remaining_seconds(timestamp)
                if remaining <= 0:
                    on_expire()
                    return
                on_tick(remaining)
                if stop.wait(self._interval):
                    return

        thread = threading.Thread(target=run, name="qr-countdown", daemon=True)
        handle = TickerHandle(stop, thread)
        thread.start()
        return handle


class IssuerDisplay:
    """One QR display session."""

    def __init__(
        self,
        ticker: CountdownTicker,
        *,
        on_tick: Callable[[int], None],
        on_expire: Callable[[], None],
    ):
        self._ticker = ticker
        self._on_tick = on_tick
        self._on_expire = on_expire
        self._lock = threading.Lock()
        self._handle: Optional[TickerHandle] = None
        self._generation = 0
        self.current: Optional[IssuedCode] = None

    @property
    def active(self) -> bool:
        with self._lock:
            return self._handle is not None and self._handle.active

    def show(self, code: IssuedCode) -> None:
        with self._lock:
            self._generation += 1
            generation = self._generation
            previous = self._handle
            if previous is not None:
                previous.stop()
            self.current = code
            self._handle = self._ticker.start(
                code.bundle.timestamp,
                self._on_tick,
                lambda: self._expired(generation),
            )
        # Joined outside the lock: the old ticker may be waiting on it in _expired.
        if previous is not None:
            previous.cancel()

    def close(self) -> None:
        with self._lock:
            handle, self._handle = self._handle, None
            self.current = None
            self._generation += 1
        if handle is not None:
            handle.cancel()

    def _expired(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._handle = None
            self.current = None
        self._on_expire()
