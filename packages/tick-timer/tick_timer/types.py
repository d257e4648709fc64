"""Shared constants, enums, and protocols for tick-timer."""
from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Protocol, runtime_checkable

UNBOUNDED = -1
DEFAULT_RESOLUTION = 1000
DEFAULT_CHECK_INTERVAL = 50

# Receives milliseconds elapsed since start().
TickCallback = Callable[[int], None]
WakeFn = Callable[[], None]


class TimerState(Enum):
    IDLE = "idle"
    RUNNING = "running"


class StopReason(Enum):
    """Why a running session ended."""

    STOPPED = "stopped"
    EXPIRED = "expired"


@runtime_checkable
class Clock(Protocol):
    """Time source in integer milliseconds."""

    def now_ms(self) -> int:
        ...


@runtime_checkable
class Scheduler(Protocol):
    """Recurring wake-up facility that can be cancelled by handle.

    ``cancel`` must be idempotent and accept ``None`` or an already
    cancelled handle without raising.
    """

    def schedule_periodic(self, interval_ms: int, fn: WakeFn) -> Any:
        """Call ``fn`` every ``interval_ms`` until cancelled; return a handle."""
        ...

    def cancel(self, handle: Any) -> None:
        ...
