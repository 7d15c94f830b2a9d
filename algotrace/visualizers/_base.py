"""AlgorithmVisualizer — shared instrumentation contract for every family.

Subclasses set ``ALGORITHM_ID`` and ``DESCRIPTOR``, validate and copy their
input in ``__init__``, and implement ``_run`` against the recorder they are
handed. ``generate_steps`` builds a fresh recorder per call, which keeps
repeated calls independent of each other.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from ..descriptor import AlgorithmDescriptor
from ..recorder import TraceRecorder
from ..trace_types import Trace

logger = logging.getLogger(__name__)


class AlgorithmVisualizer(ABC):

    # ── overridable constants ────────────────────────────────────

    ALGORITHM_ID: str = ""
    DESCRIPTOR: AlgorithmDescriptor
    TRACK_BACKTRACKS: bool = False

    # ── public contract ──────────────────────────────────────────

    def generate_steps(self, *args: Any, **kwargs: Any) -> Trace:
        recorder = TraceRecorder(self.ALGORITHM_ID, track_backtracks=self.TRACK_BACKTRACKS)
        self._run(recorder, *args, **kwargs)
        trace = recorder.finish()
        logger.info("Generated %d steps for %s", len(trace), self.ALGORITHM_ID)
        return trace

    def get_algorithm_info(self) -> AlgorithmDescriptor:
        return self.DESCRIPTOR

    @abstractmethod
    def _run(self, recorder: TraceRecorder, *args: Any, **kwargs: Any) -> None:
        ...


# ── input validation helpers ─────────────────────────────────────


def require_int(value: Any, name: str) -> int:
    """Reject non-integers (including bools) with a descriptive TypeError."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}: {value!r}")
    return value


def require_non_negative(value: Any, name: str) -> int:
    require_int(value, name)
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


def require_int_sequence(values: Any, name: str) -> tuple[int, ...]:
    """Validate *values* as a sequence of ints and return a private copy."""
    if isinstance(values, (str, bytes)) or not isinstance(values, Sequence):
        raise TypeError(f"{name} must be a sequence of ints, got {type(values).__name__}")
    for i, v in enumerate(values):
        require_int(v, f"{name}[{i}]")
    return tuple(values)


def require_square_matrix(rows: Any, name: str) -> tuple[tuple[int, ...], ...]:
    if isinstance(rows, (str, bytes)) or not isinstance(rows, Sequence):
        raise TypeError(f"{name} must be a sequence of rows, got {type(rows).__name__}")
    frozen = tuple(require_int_sequence(row, f"{name}[{i}]") for i, row in enumerate(rows))
    for i, row in enumerate(frozen):
        if len(row) != len(frozen):
            raise ValueError(
                f"{name} must be square: row {i} has {len(row)} entries, expected {len(frozen)}"
            )
    return frozen
