"""Recurring wake-up schedulers: real threads and simulated virtual time.

Both implement the ``Scheduler`` protocol from ``tick_timer.types``. A
``Timer`` only ever asks for "call this every N ms" and "stop calling it",
so any host that can do both can drive one.
"""
from __future__ import annotations

import heapq
import itertools
import logging
import threading
from dataclasses import dataclass, field
from typing import Callable

from tick_timer.clock import ManualClock
from tick_timer.types import WakeFn

logger = logging.getLogger(__name__)

ErrorHandler = Callable[[BaseException], None]


class _PeriodicThread(threading.Thread):
    """Daemon thread that calls ``fn`` every ``interval_ms`` until cancelled."""

    def __init__(
        self,
        interval_ms: int,
        fn: WakeFn,
        on_error: ErrorHandler | None,
        on_exit: Callable[[_PeriodicThread], None],
    ) -> None:
        super().__init__(name=f"tick-timer-{interval_ms}ms", daemon=True)
        self._interval = interval_ms / 1000.0
        self._fn = fn
        self._on_error = on_error
        self._on_exit = on_exit
        self._cancelled = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        self._cancelled.set()

    def run(self) -> None:
        try:
            while not self._cancelled.wait(self._interval):
                try:
                    self._fn()
                except Exception as exc:
                    # A failing wake-up does not end the recurrence.
                    self._report(exc)
        finally:
            self._on_exit(self)

    def _report(self, exc: Exception) -> None:
        if self._on_error is not None:
            try:
                self._on_error(exc)
                return
            except Exception:
                logger.exception("error handler on %s raised", self.name)
        logger.exception("wake-up on %s raised", self.name, exc_info=exc)


class ThreadScheduler:
    """Runs each recurring wake-up on its own daemon thread.

    ``cancel`` only signals the thread and never joins it, so it is safe to
    call from inside the wake-up itself. A wake-up already running when
    ``cancel`` is called finishes normally; callers that need a hard
    "nothing after cancel" guarantee must check for it themselves (``Timer``
    does).

    Args:
        on_error: Called with any exception raised by a wake-up. When None,
            the exception is logged. A handler that raises is logged too.
            Either way the recurrence continues.
    """

    def __init__(self, on_error: ErrorHandler | None = None) -> None:
        self._on_error = on_error
        self._lock = threading.Lock()
        self._threads: set[_PeriodicThread] = set()

    @property
    def active(self) -> int:
        """Number of registrations not yet cancelled."""
        with self._lock:
            return sum(1 for t in self._threads if not t.cancelled)

    def schedule_periodic(self, interval_ms: int, fn: WakeFn) -> _PeriodicThread:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        thread = _PeriodicThread(interval_ms, fn, self._on_error, self._discard)
        with self._lock:
            self._threads.add(thread)
        thread.start()
        logger.debug("scheduled %s", thread.name)
        return thread

    def cancel(self, handle: _PeriodicThread | None) -> None:
        if handle is None:
            return
        handle.cancel()

    def _discard(self, thread: _PeriodicThread) -> None:
        with self._lock:
            self._threads.discard(thread)


@dataclass(order=True)
class _Registration:
    due: int
    seq: int
    interval: int = field(compare=False)
    fn: WakeFn = field(compare=False)
    cancelled: bool = field(default=False, compare=False)


class SimulatedScheduler:
    """Virtual-time scheduler for deterministic tests and simulations.

    Nothing happens until ``advance`` is called. Due wake-ups fire in due
    time order, ties broken by registration order, and the clock reads each
    wake-up's due time while it runs. A wake-up left overdue because the
    clock was moved directly fires once, at the current time. Exceptions
    from a wake-up propagate out of ``advance``.
    """

    def __init__(self, clock: ManualClock | None = None) -> None:
        self.clock: ManualClock = clock if clock is not None else ManualClock()
        self._heap: list[_Registration] = []
        self._live: dict[int, _Registration] = {}
        self._counter = itertools.count(1)

    @property
    def pending(self) -> int:
        """Number of registrations not yet cancelled."""
        return len(self._live)

    def schedule_periodic(self, interval_ms: int, fn: WakeFn) -> int:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        reg = _Registration(
            due=self.clock.now_ms() + interval_ms,
            seq=next(self._counter),
            interval=interval_ms,
            fn=fn,
        )
        self._live[reg.seq] = reg
        heapq.heappush(self._heap, reg)
        return reg.seq

    def cancel(self, handle: int | None) -> None:
        if handle is None:
            return
        reg = self._live.pop(handle, None)
        if reg is not None:
            reg.cancelled = True

    def advance(self, ms: int) -> None:
        """Move virtual time forward by ``ms``, firing every due wake-up."""
        if ms < 0:
            raise ValueError("cannot advance by a negative amount")
        target = self.clock.now_ms() + ms
        while self._heap and self._heap[0].due <= target:
            reg = heapq.heappop(self._heap)
            if reg.cancelled:
                continue
            # Overdue wake-ups (the clock was moved directly) fire at the
            # current time.
            fired_at = max(reg.due, self.clock.now_ms())
            self.clock.set(fired_at)
            reg.due = fired_at + reg.interval
            heapq.heappush(self._heap, reg)
            reg.fn()
        self.clock.set(target)
