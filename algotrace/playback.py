"""PlaybackController — position state machine over a loaded Trace.

States are IDLE (nothing loaded), READY (loaded, stationary) and PLAYING
(auto-advancing). The controller owns at most one scheduled task; every
transition out of PLAYING cancels it synchronously, and ticks from a task
that is no longer the owned one are dropped.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

from .playback_types import PlaybackConfig, PlaybackState
from .scheduler import ScheduledTask, Scheduler, ThreadingScheduler
from .trace_types import Step, Trace

logger = logging.getLogger(__name__)

Listener = Callable[["PlaybackController"], None]


class PlaybackController:
    def __init__(
        self,
        scheduler: Scheduler | None = None,
        config: PlaybackConfig = PlaybackConfig(),
    ):
        self._scheduler = scheduler or ThreadingScheduler()
        self._config = config
        self._lock = threading.RLock()
        self._trace: Trace | None = None
        self._position = 0
        self._state = PlaybackState.IDLE
        self._speed = config.default_speed
        self._task: ScheduledTask | None = None
        self._listeners: list[Listener] = []

    # ── read-only views ──────────────────────────────────────────

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def position(self) -> int:
        return self._position

    @property
    def trace(self) -> Trace | None:
        return self._trace

    @property
    def current_step(self) -> Step | None:
        with self._lock:
            return None if self._trace is None else self._trace[self._position]

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def interval(self) -> float:
        return self._config.base_interval / self._speed

    @property
    def config(self) -> PlaybackConfig:
        return self._config

    @property
    def is_at_end(self) -> bool:
        return self._trace is not None and self._position == len(self._trace) - 1

    def add_listener(self, listener: Listener) -> None:
        """Register *listener*; it is called with the controller after every change."""
        self._listeners.append(listener)

    # ── commands ─────────────────────────────────────────────────

    def load(self, trace: Trace) -> None:
        with self._lock:
            self._cancel_task()
            self._trace = trace
            self._position = 0
            self._state = PlaybackState.READY
            logger.debug("Loaded %s (%d steps)", trace.algorithm_id, len(trace))
        self._notify()

    def play(self) -> None:
        with self._lock:
            if self._state != PlaybackState.READY or self.is_at_end:
                logger.debug("play() ignored in %s at %d", self._state.value, self._position)
                return
            self._state = PlaybackState.PLAYING
            self._start_task()
        self._notify()

    def pause(self) -> None:
        with self._lock:
            if self._state != PlaybackState.PLAYING:
                logger.debug("pause() ignored in %s", self._state.value)
                return
            self._cancel_task()
            self._state = PlaybackState.READY
        self._notify()

    def step_forward(self) -> None:
        with self._lock:
            if self._state != PlaybackState.READY or self.is_at_end:
                logger.debug(
                    "step_forward() ignored in %s at %d", self._state.value, self._position
                )
                return
            self._position += 1
        self._notify()

    def step_backward(self) -> None:
        with self._lock:
            if self._state != PlaybackState.READY or self._position == 0:
                logger.debug(
                    "step_backward() ignored in %s at %d", self._state.value, self._position
                )
                return
            self._position -= 1
        self._notify()

    def reset(self) -> None:
        with self._lock:
            if self._state == PlaybackState.IDLE:
                logger.debug("reset() ignored with no trace loaded")
                return
            self._cancel_task()
            self._position = 0
            self._state = PlaybackState.READY
        self._notify()

    def seek(self, position: int) -> None:
        """Jump to *position*, clamped into the trace; READY only."""
        with self._lock:
            if self._state != PlaybackState.READY:
                logger.debug("seek() ignored in %s", self._state.value)
                return
            self._position = max(0, min(position, len(self._trace) - 1))
        self._notify()

    def set_speed(self, multiplier: float) -> None:
        if multiplier <= 0:
            raise ValueError(f"Speed multiplier must be positive, got {multiplier}")
        with self._lock:
            self._speed = multiplier
            if self._state == PlaybackState.PLAYING:
                self._cancel_task()
                self._start_task()
            logger.debug("Speed set to %sx (interval %.3fs)", multiplier, self.interval)

    def close(self) -> None:
        with self._lock:
            self._cancel_task()
            self._trace = None
            self._position = 0
            self._state = PlaybackState.IDLE
        self._notify()

    # ── auto-advance ─────────────────────────────────────────────

    def _start_task(self) -> None:
        self._task = self._scheduler.schedule_repeating(self.interval, self._on_tick)

    def _cancel_task(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    def _on_tick(self, task: ScheduledTask) -> None:
        with self._lock:
            if task is not self._task or self._state != PlaybackState.PLAYING:
                logger.debug("Dropped stale tick")
                task.cancel()
                return
            self._position += 1
            if self.is_at_end:
                self._cancel_task()
                self._state = PlaybackState.READY
                logger.debug("Reached final step %d, auto-paused", self._position)
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
