"""Trace recorder — the accumulator threaded through an algorithm run.

A fresh recorder is created for every ``generate_steps`` call and passed
explicitly into each (recursive) helper, so no step buffer or counter ever
lives on a visualizer instance or at module level.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from . import constants
from .step_data import StepData
from .trace_types import Step, Trace, TraceInvariantError

logger = logging.getLogger(__name__)


def _freeze(value: Any) -> Any:
    """Recursively copy *value* into immutable containers."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(value)
    return copy.deepcopy(value)


class TraceRecorder:
    """Appends Steps in execution order and owns the backtrack counter.

    With ``track_backtracks`` enabled every recorded Step carries the
    current ``backtrackCount`` in its metadata; the counter only moves
    forward through ``backtrack()``.
    """

    def __init__(self, algorithm_id: str, track_backtracks: bool = False):
        self._algorithm_id = algorithm_id
        self._track_backtracks = track_backtracks
        self._steps: list[Step] = []
        self._backtracks = 0
        self._finished = False

    @property
    def backtrack_count(self) -> int:
        return self._backtracks

    def __len__(self) -> int:
        return len(self._steps)

    def record(
        self,
        description: str,
        data: StepData,
        metadata: Mapping[str, Any] | None = None,
        *,
        highlights: Iterable = (),
        comparisons: Iterable = (),
        mutations: Iterable = (),
        completed: Iterable = (),
    ) -> Step:
        metadata = dict(metadata or {})
        if self._finished:
            raise TraceInvariantError(
                f"Recorder for '{self._algorithm_id}' is already finished"
            )
        if not description:
            raise TraceInvariantError(
                f"Step {len(self._steps)} of '{self._algorithm_id}' has no description"
            )
        if self._track_backtracks:
            metadata[constants.BACKTRACK_COUNT_KEY] = self._backtracks

        step = Step(
            id=len(self._steps),
            description=description,
            data=copy.deepcopy(data),
            highlights=frozenset(highlights),
            comparisons=frozenset(comparisons),
            mutations=frozenset(mutations),
            completed=frozenset(completed),
            metadata=_freeze(metadata),
        )
        self._steps.append(step)
        return step

    def backtrack(self) -> int:
        """Count one rejected branch and return the new total."""
        self._backtracks += 1
        return self._backtracks

    def finish(self) -> Trace:
        self._finished = True
        trace = Trace(algorithm_id=self._algorithm_id, steps=tuple(self._steps))
        logger.debug(
            "Recorded %d steps for %s (backtracks=%d)",
            len(trace),
            self._algorithm_id,
            self._backtracks,
        )
        return trace
