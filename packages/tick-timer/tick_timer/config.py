"""Timer configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass

from tick_timer.types import DEFAULT_CHECK_INTERVAL, DEFAULT_RESOLUTION, UNBOUNDED


@dataclass(frozen=True)
class TimerConfig:
    """Immutable timer settings.

    Attributes:
        resolution: Minimum milliseconds between ticks.
        duration: Milliseconds before the timer stops itself, or -1 to run
            until stopped.
        check_interval: Polling period of the underlying wake-up, in ms.
            Ticks can never be spaced closer than this, whatever the
            resolution.
    """

    resolution: int = DEFAULT_RESOLUTION
    duration: int = UNBOUNDED
    check_interval: int = DEFAULT_CHECK_INTERVAL

    def __post_init__(self) -> None:
        if self.check_interval <= 0:
            raise ValueError("check_interval must be positive")

    @property
    def unbounded(self) -> bool:
        return self.duration == UNBOUNDED
