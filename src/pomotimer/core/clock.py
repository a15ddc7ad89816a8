"""Elapsed-time tracking for a single session attempt."""

from __future__ import annotations

import time
from typing import Callable


class ElapsedClock:
    """Measures elapsed seconds since the current session started.

    Uses ``time.monotonic()`` so the value is immune to system clock changes,
    and never reports less than it reported before within one session.
    """

    def __init__(self, monotonic: Callable[[], float] | None = None) -> None:
        self._monotonic = monotonic
        self._start_time: float | None = None
        self._offset: float = 0.0
        self._last_elapsed: float = 0.0

    def start(self, offset: float = 0.0) -> None:
        """Start measuring; *offset* seconds count as already elapsed."""
        if offset < 0:
            raise ValueError(f"offset must not be negative, got {offset}")
        self._start_time = self._now()
        self._offset = float(offset)
        self._last_elapsed = self._offset

    def elapsed(self) -> float:
        """Return elapsed seconds, or 0.0 before :meth:`start`."""
        if self._start_time is None:
            return 0.0
        current = self._offset + (self._now() - self._start_time)
        self._last_elapsed = max(self._last_elapsed, current)
        return self._last_elapsed

    def _now(self) -> float:
        if self._monotonic is not None:
            return self._monotonic()
        return time.monotonic()
