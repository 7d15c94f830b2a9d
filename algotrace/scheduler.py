"""Cancellable repeating timers that drive playback auto-advance."""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable

from . import constants

logger = logging.getLogger(__name__)

TickCallback = Callable[["ScheduledTask"], None]


class ScheduledTask(ABC):
    """Handle for one repeating callback. ``cancel()`` is synchronous and idempotent."""

    @abstractmethod
    def cancel(self) -> None:
        ...

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        ...


class Scheduler(ABC):
    @abstractmethod
    def schedule_repeating(self, interval: float, callback: TickCallback) -> ScheduledTask:
        """Call ``callback(task)`` every *interval* seconds until the task is cancelled."""
        ...


def _require_interval(interval: float) -> float:
    if interval <= 0:
        raise ValueError(f"interval must be positive, got {interval}")
    return interval


# ── threading.Timer chain ────────────────────────────────────────


class _TimerTask(ScheduledTask):
    def __init__(self, interval: float, callback: TickCallback):
        self._interval = interval
        self._callback = callback
        self._lock = threading.Lock()
        self._cancelled = False
        self._timer: threading.Timer | None = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def arm(self) -> None:
        with self._lock:
            if self._cancelled:
                return
            self._timer = threading.Timer(self._interval, self._fire)
            self._timer.daemon = True
            self._timer.start()

    def _fire(self) -> None:
        if self._cancelled:
            return
        try:
            self._callback(self)
        except Exception:
            # no caller to propagate to on a timer thread
            logger.exception("Timer callback failed; task keeps running")
        self.arm()

    def cancel(self) -> None:
        with self._lock:
            self._cancelled = True
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None


class ThreadingScheduler(Scheduler):
    """Real-time scheduler; callbacks run on ``threading.Timer`` threads."""

    def schedule_repeating(self, interval: float, callback: TickCallback) -> ScheduledTask:
        task = _TimerTask(_require_interval(interval), callback)
        task.arm()
        logger.debug("Armed timer task every %.3fs", interval)
        return task


# ── virtual clock ────────────────────────────────────────────────


class _ManualTask(ScheduledTask):
    def __init__(self, interval: float, callback: TickCallback, due: float, seq: int):
        self.interval = interval
        self.callback = callback
        self.due = due
        self.seq = seq
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class ManualScheduler(Scheduler):
    """Deterministic scheduler driven by ``advance(seconds)``.

    Due callbacks fire in order of due time, then of scheduling order,
    on the caller's thread.
    """

    def __init__(self):
        self._now = 0.0
        self._seq = 0
        self._tasks: list[_ManualTask] = []

    @property
    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        """Number of live (uncancelled) tasks."""
        return sum(1 for t in self._tasks if not t.cancelled)

    def schedule_repeating(self, interval: float, callback: TickCallback) -> ScheduledTask:
        task = _ManualTask(_require_interval(interval), callback, self._now + interval, self._seq)
        self._seq += 1
        self._tasks.append(task)
        return task

    def advance(self, seconds: float) -> int:
        """Move the clock forward and fire every due callback; returns the fire count."""
        if seconds < 0:
            raise ValueError(f"cannot move the clock backwards ({seconds})")
        deadline = self._now + seconds
        fired = 0
        while True:
            self._tasks = [t for t in self._tasks if not t.cancelled]
            due = [t for t in self._tasks if t.due <= deadline + 1e-9]
            if not due:
                break
            task = min(due, key=lambda t: (t.due, t.seq))
            self._now = max(self._now, task.due)
            task.due += task.interval
            task.callback(task)
            fired += 1
        self._now = deadline
        return fired


def get_scheduler(kind: str = constants.SCHEDULER_THREADING) -> Scheduler:
    """Instantiate a scheduler by name (``threading`` or ``manual``)."""
    if kind == constants.SCHEDULER_THREADING:
        return ThreadingScheduler()
    if kind == constants.SCHEDULER_MANUAL:
        return ManualScheduler()
    raise ValueError(f"Unknown scheduler: {kind}")
