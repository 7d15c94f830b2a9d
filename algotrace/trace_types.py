"""Trace data types for step-by-step algorithm replay."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .step_data import StepData, step_data_to_dict


class TraceInvariantError(ValueError):
    """Raised when a Trace would violate its structural invariants."""


def _sorted_ids(ids: frozenset) -> list:
    return sorted(ids, key=lambda v: (isinstance(v, str), v))


def _plain(value: Any) -> Any:
    """Convert frozen containers back into JSON-friendly builtins."""
    if isinstance(value, Mapping):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (tuple, list)):
        return [_plain(v) for v in value]
    if isinstance(value, frozenset):
        return _sorted_ids(value)
    return value


@dataclass(frozen=True)
class Step:
    """A single snapshot in an algorithm trace.

    ``data`` is an immutable copy of the algorithm's working state taken at
    capture time; the id sets name indices (or node keys) that a renderer
    should emphasise. ``mutations`` holds positions just written or exchanged.
    """

    id: int
    description: str
    data: StepData
    highlights: frozenset = frozenset()
    comparisons: frozenset = frozenset()
    mutations: frozenset = frozenset()
    completed: frozenset = frozenset()
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        for name in ("highlights", "comparisons", "mutations", "completed"):
            object.__setattr__(self, name, frozenset(getattr(self, name)))
        if not isinstance(self.metadata, MappingProxyType):
            object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def content(self) -> tuple:
        """Everything except ``id``, for comparing regenerated traces."""
        return (
            self.description,
            self.data,
            self.highlights,
            self.comparisons,
            self.mutations,
            self.completed,
            dict(self.metadata),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "description": self.description,
            "data": step_data_to_dict(self.data),
            "highlights": _sorted_ids(self.highlights),
            "comparisons": _sorted_ids(self.comparisons),
            "mutations": _sorted_ids(self.mutations),
            "completed": _sorted_ids(self.completed),
            "metadata": _plain(self.metadata),
        }


@dataclass(frozen=True)
class Trace:
    """Complete, ordered record of one algorithm run against one input.

    A Trace is never empty and its step ids run 0, 1, 2, ... without gaps.
    Violations raise ``TraceInvariantError`` at construction time.
    """

    algorithm_id: str
    steps: tuple[Step, ...]

    def __post_init__(self):
        object.__setattr__(self, "steps", tuple(self.steps))
        if not self.steps:
            raise TraceInvariantError(f"Trace for '{self.algorithm_id}' has no steps")
        for expected, step in enumerate(self.steps):
            if step.id != expected:
                raise TraceInvariantError(
                    f"Trace for '{self.algorithm_id}': step at index {expected} "
                    f"has id {step.id}"
                )

    def __len__(self) -> int:
        return len(self.steps)

    def __getitem__(self, index: int) -> Step:
        return self.steps[index]

    def __iter__(self) -> Iterator[Step]:
        return iter(self.steps)

    @property
    def final_step(self) -> Step:
        return self.steps[-1]

    def to_dict(self) -> dict:
        return {
            "algorithm_id": self.algorithm_id,
            "steps": [s.to_dict() for s in self.steps],
        }
