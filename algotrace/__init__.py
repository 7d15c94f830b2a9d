"""Instrumented execution trace engine for classic algorithms."""

from .trace_types import Step, Trace, TraceInvariantError  # noqa: F401
from .playback import PlaybackController  # noqa: F401
from .playback_types import PlaybackConfig, PlaybackState  # noqa: F401
from .visualizers import get_visualizer, SUPPORTED_ALGORITHMS  # noqa: F401
from .api import (  # noqa: F401
    generate_trace,
    describe_algorithm,
    dump_trace,
    trace_to_json,
    trace_summary,
)
