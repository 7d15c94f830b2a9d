"""Composable API functions for generating and inspecting algorithm traces.

Each function corresponds to a CLI workflow (trace dump, --json, --list)
but is callable programmatically without argparse.
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from typing import Any, Mapping

from .descriptor import AlgorithmDescriptor
from .trace_types import Trace
from .visualizers import get_visualizer, get_visualizer_class
from . import constants

logger = logging.getLogger(__name__)


def generate_trace(
    algorithm_id: str,
    params: Mapping[str, Any] | None = None,
    **gen_params: Any,
) -> Trace:
    """Construct the visualizer for *algorithm_id* and run it once.

    Args:
        algorithm_id: Registered algorithm id (e.g. "bubble-sort").
        params: Constructor parameters (input array, target, board size, ...).
        **gen_params: Parameters for ``generate_steps`` (tree operation and
            value, Hamiltonian start vertex).

    Returns:
        The complete Trace.
    """
    logger.info("Generating trace for %s", algorithm_id)
    visualizer = get_visualizer(algorithm_id, **dict(params or {}))
    return visualizer.generate_steps(**gen_params)


def describe_algorithm(algorithm_id: str) -> AlgorithmDescriptor:
    """Return the static descriptor for *algorithm_id* without running it."""
    return get_visualizer_class(algorithm_id).DESCRIPTOR


def dump_trace(trace: Trace) -> str:
    """Render a trace as text, one step per line.

    Args:
        trace: The trace to render.

    Returns:
        A multi-line string with the step id, description and any non-empty
        id sets of each step.
    """
    lines = [f"# {trace.algorithm_id} ({len(trace)} steps)"]
    for step in trace:
        marks = [
            f"{name}={sorted(ids, key=str)}"
            for name, ids in (
                ("highlights", step.highlights),
                ("comparisons", step.comparisons),
                ("mutations", step.mutations),
                ("completed", step.completed),
            )
            if ids
        ]
        suffix = f"  [{', '.join(marks)}]" if marks else ""
        lines.append(f"  {step.id:>4}  {step.description}{suffix}")
    return "\n".join(lines)


def trace_to_json(trace: Trace, indent: int | None = 2) -> str:
    """Serialize a trace to JSON (sets become sorted lists)."""
    return json.dumps(trace.to_dict(), indent=indent, ensure_ascii=False)


def trace_summary(trace: Trace) -> dict[str, Any]:
    """Summarise a trace's size and outcome.

    Returns:
        A dict with the step count, how many steps carried each kind of
        id set, the final step's metadata and its outcome flags.
    """
    final = trace.final_step
    touched = Counter()
    for step in trace:
        for name in ("highlights", "comparisons", "mutations", "completed"):
            if getattr(step, name):
                touched[name] += 1
    metadata = final.to_dict()["metadata"]
    return {
        "algorithm_id": trace.algorithm_id,
        "steps": len(trace),
        "steps_with": dict(touched),
        "final_metadata": metadata,
        "not_found": bool(metadata.get(constants.NOT_FOUND_KEY, False)),
        "completed": sorted(final.completed, key=str),
        "backtracks": metadata.get(constants.BACKTRACK_COUNT_KEY),
    }
