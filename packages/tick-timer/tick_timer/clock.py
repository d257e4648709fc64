"""Millisecond time sources: a real monotonic clock and a manual one."""
from __future__ import annotations

import time


class MonotonicClock:
    def now_ms(self) -> int:
        return time.monotonic_ns() // 1_000_000


class ManualClock:
    """Virtual clock that only moves when told to."""

    def __init__(self, start: int = 0) -> None:
        self._now = start

    def now_ms(self) -> int:
        return self._now

    def advance(self, ms: int) -> int:
        if ms < 0:
            raise ValueError("cannot advance by a negative amount")
        self._now += ms
        return self._now

    def set(self, ms: int) -> None:
        if ms < self._now:
            raise ValueError(f"cannot move clock backwards ({ms} < {self._now})")
        self._now = ms
