"""tick-timer - Repeating callback timer with elapsed time and auto-stop."""
from __future__ import annotations

from tick_timer.clock import ManualClock, MonotonicClock
from tick_timer.config import TimerConfig
from tick_timer.scheduler import SimulatedScheduler, ThreadScheduler
from tick_timer.timer import Timer
from tick_timer.types import (
    DEFAULT_CHECK_INTERVAL,
    DEFAULT_RESOLUTION,
    UNBOUNDED,
    Clock,
    Scheduler,
    StopReason,
    TimerState,
)

__all__ = [
    "Timer",
    "TimerConfig",
    "TimerState",
    "StopReason",
    "Clock",
    "Scheduler",
    "MonotonicClock",
    "ManualClock",
    "ThreadScheduler",
    "SimulatedScheduler",
    "UNBOUNDED",
    "DEFAULT_RESOLUTION",
    "DEFAULT_CHECK_INTERVAL",
]
