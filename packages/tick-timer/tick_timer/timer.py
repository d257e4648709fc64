"""Timer - repeating callback with elapsed time and optional auto-stop."""
from __future__ import annotations

import logging
import threading
from typing import Any, Callable

from tick_timer.clock import MonotonicClock
from tick_timer.config import TimerConfig
from tick_timer.scheduler import ThreadScheduler
from tick_timer.types import (
    DEFAULT_CHECK_INTERVAL,
    DEFAULT_RESOLUTION,
    UNBOUNDED,
    Clock,
    Scheduler,
    StopReason,
    TickCallback,
    TimerState,
)

logger = logging.getLogger(__name__)

StartHook = Callable[["Timer"], None]
StopHook = Callable[["Timer", StopReason], None]


class _Session:
    """State of one start()..stop() run. Wake-ups hold on to their session."""

    __slots__ = ("start", "last_tick", "ticks", "handle")

    def __init__(self, start: int) -> None:
        self.start = start
        self.last_tick = start
        self.ticks = 0
        self.handle: Any = None


class Timer:
    """Calls ``callback(elapsed_ms)`` at least ``resolution`` ms apart.

    A recurring wake-up polls every ``check_interval`` ms. When at least
    ``resolution`` ms have passed since the last tick, the tick boundary
    moves to the current time (drift is not corrected) and the callback is
    called with the milliseconds elapsed since ``start()``. Once that
    elapsed time reaches ``duration`` the timer stops itself instead of
    calling back. ``duration == -1`` runs until ``stop()``.

    Ticks are never closer together than ``check_interval``, so a
    resolution below the polling period ticks at the polling period.

    Without an explicit ``clock`` the timer reads the scheduler's own
    ``clock`` attribute when it has one (``SimulatedScheduler`` does), and a
    ``MonotonicClock`` otherwise.

    Arguments are not validated; a non-callable ``callback`` fails at the
    first tick, not here.
    """

    def __init__(
        self,
        callback: TickCallback,
        resolution: int = DEFAULT_RESOLUTION,
        duration: int = UNBOUNDED,
        *,
        check_interval: int = DEFAULT_CHECK_INTERVAL,
        scheduler: Scheduler | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._callback = callback
        self._resolution = resolution
        self._duration = duration
        self._check_interval = check_interval
        self._scheduler: Scheduler = (
            scheduler if scheduler is not None else ThreadScheduler()
        )
        if clock is None:
            clock = getattr(self._scheduler, "clock", None) or MonotonicClock()
        self._clock: Clock = clock
        # Re-entrant so the callback (which runs under the lock) may stop().
        self._lock = threading.RLock()
        self._session: _Session | None = None
        self._last_ticks = 0
        self._start_hooks: list[StartHook] = []
        self._stop_hooks: list[StopHook] = []

    @classmethod
    def from_config(
        cls,
        callback: TickCallback,
        config: TimerConfig,
        *,
        scheduler: Scheduler | None = None,
        clock: Clock | None = None,
    ) -> Timer:
        return cls(
            callback,
            config.resolution,
            config.duration,
            check_interval=config.check_interval,
            scheduler=scheduler,
            clock=clock,
        )

    # --- Read-only settings ---

    @property
    def callback(self) -> TickCallback:
        return self._callback

    @property
    def resolution(self) -> int:
        return self._resolution

    @property
    def duration(self) -> int:
        return self._duration

    @property
    def check_interval(self) -> int:
        return self._check_interval

    # --- Session state ---

    @property
    def state(self) -> TimerState:
        return TimerState.RUNNING if self._session is not None else TimerState.IDLE

    @property
    def running(self) -> bool:
        return self._session is not None

    @property
    def handle(self) -> Any:
        """Scheduler handle of the active wake-up, or None when idle."""
        session = self._session
        return session.handle if session is not None else None

    @property
    def ticks(self) -> int:
        """Callbacks delivered in the current session, or the last one if idle."""
        session = self._session
        return session.ticks if session is not None else self._last_ticks

    @property
    def elapsed(self) -> int | None:
        """Milliseconds since the current session started; None when idle."""
        session = self._session
        if session is None:
            return None
        return self._clock.now_ms() - session.start

    # --- Hooks ---

    def on_start(self, hook: StartHook) -> None:
        """Register ``hook(timer)``, called after each session starts."""
        self._start_hooks.append(hook)

    def on_stop(self, hook: StopHook) -> None:
        """Register ``hook(timer, reason)``, called after each session ends."""
        self._stop_hooks.append(hook)

    # --- Lifecycle ---

    def start(self) -> None:
        """Begin a session. Does nothing if one is already running."""
        with self._lock:
            if self._session is not None:
                logger.debug("start() ignored, timer already running")
                return
            session = _Session(self._clock.now_ms())
            session.handle = self._scheduler.schedule_periodic(
                self._check_interval, lambda: self._wake(session)
            )
            self._session = session
            logger.debug(
                "timer started: resolution=%sms duration=%sms",
                self._resolution,
                self._duration,
            )
            for hook in self._start_hooks:
                hook(self)

    def stop(self) -> None:
        """End the running session, if any. Safe to call at any time."""
        with self._lock:
            if self._session is None:
                return
            self._end(self._session, StopReason.STOPPED)

    def _wake(self, session: _Session) -> None:
        with self._lock:
            # Stale wake-up from a session that has already ended.
            if self._session is not session:
                return
            now = self._clock.now_ms()
            if now - session.last_tick < self._resolution:
                return
            session.last_tick = now
            elapsed = now - session.start
            if elapsed < self._duration or self._duration == UNBOUNDED:
                session.ticks += 1
                self._callback(elapsed)
            else:
                self._end(session, StopReason.EXPIRED)

    def _end(self, session: _Session, reason: StopReason) -> None:
        self._scheduler.cancel(session.handle)
        self._session = None
        self._last_ticks = session.ticks
        logger.debug("timer %s after %d ticks", reason.value, session.ticks)
        for hook in self._stop_hooks:
            hook(self, reason)

    # --- Context manager ---

    def __enter__(self) -> Timer:
        self.start()
        return self

    def __exit__(self, *args: object) -> None:
        self.stop()
