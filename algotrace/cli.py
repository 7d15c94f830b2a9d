"""Command line entry point: generate, print and replay algorithm traces."""

from __future__ import annotations

import argparse
import logging
import sys
import threading
from typing import Any

from . import constants
from .api import describe_algorithm, dump_trace, generate_trace, trace_to_json
from .input_parsing import clamp_target, parse_array, parse_int_prefix, parse_target
from .playback import PlaybackController
from .playback_types import PlaybackConfig
from .visualizers import SUPPORTED_ALGORITHMS, SUPPORTED_CATEGORIES, algorithms_in_category

logger = logging.getLogger(__name__)

_ARRAY_INPUT = frozenset(
    algorithms_in_category(constants.CATEGORY_SORTING)
    + algorithms_in_category(constants.CATEGORY_SEARCHING)
)
_TREE_INPUT = frozenset({constants.BINARY_SEARCH_TREE, constants.B_TREE_SEARCH})


def build_params(algorithm_id: str, args: argparse.Namespace) -> tuple[dict, dict]:
    """Map parsed CLI flags onto (constructor params, generate_steps params)."""
    params: dict[str, Any] = {}
    gen_params: dict[str, Any] = {}
    array = parse_array(args.array) if args.array is not None else None

    if algorithm_id in _ARRAY_INPUT:
        if array is not None:
            params["array"] = array
        if args.target is not None and algorithm_id not in algorithms_in_category(
            constants.CATEGORY_SORTING
        ):
            params["target"] = parse_target(args.target)
    elif algorithm_id in _TREE_INPUT:
        if array is not None:
            params["values" if algorithm_id == constants.BINARY_SEARCH_TREE else "keys"] = array
    elif algorithm_id == constants.TRIE_SEARCH:
        if args.words is not None:
            params["words"] = [w.strip() for w in args.words.split(",") if w.strip()]
    elif algorithm_id == constants.N_QUEENS:
        if args.n is not None:
            params["n"] = args.n
    elif algorithm_id == constants.HAMILTONIAN_PATH:
        if args.n is not None:
            params["vertices"] = args.n
        if args.start is not None:
            gen_params["start_vertex"] = args.start
    elif algorithm_id == constants.SUBSET_SUM:
        if array is not None:
            params["numbers"] = array
        if args.target is not None:
            params["target"] = parse_target(args.target)

    if algorithm_id in _TREE_INPUT or algorithm_id == constants.TRIE_SEARCH:
        if args.operation is not None:
            gen_params["operation"] = args.operation
        if args.value is not None:
            if algorithm_id == constants.TRIE_SEARCH:
                gen_params["value"] = args.value
            else:
                value = parse_int_prefix(args.value)
                if value is None:
                    raise ValueError(f"--value must be an integer for {algorithm_id}")
                gen_params["value"] = value
    return params, gen_params


def list_algorithms() -> str:
    lines = []
    for category in SUPPORTED_CATEGORIES:
        lines.append(f"{category}:")
        for algorithm_id in algorithms_in_category(category):
            lines.append(f"  {algorithm_id:<22} {describe_algorithm(algorithm_id).name}")
    return "\n".join(lines)


def resolve_speed(requested: float, config: PlaybackConfig | None = None) -> float:
    """Clamp a requested multiplier into the speed range the controller offers."""
    config = config or PlaybackConfig()
    speed = clamp_target(requested, config.min_speed, config.max_speed)
    if speed != requested:
        logger.info("Speed %sx outside [%s, %s]; using %sx",
                    requested, config.min_speed, config.max_speed, speed)
    return speed


def replay(trace, speed: float) -> None:
    """Auto-play *trace* in real time, printing each step as it is reached."""
    controller = PlaybackController(config=PlaybackConfig(default_speed=speed))
    reached_end = threading.Event()
    last_printed = -1

    def on_change(ctl: PlaybackController) -> None:
        nonlocal last_printed
        step = ctl.current_step
        if step is not None and step.id != last_printed:
            last_printed = step.id
            print(f"  {step.id:>4}  {step.description}", flush=True)
        if ctl.is_at_end:
            reached_end.set()

    controller.add_listener(on_change)
    controller.load(trace)
    controller.play()
    reached_end.wait()
    controller.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="algotrace", description="Instrumented algorithm trace engine"
    )
    parser.add_argument("algorithm", nargs="?", choices=SUPPORTED_ALGORITHMS,
                        help="Algorithm id to trace")
    parser.add_argument("--array", "-a", default=None,
                        help="Comma-separated integers (array, tree keys or numbers)")
    parser.add_argument("--target", "-t", default=None,
                        help="Search or subset-sum target (leading integer, else 0)")
    parser.add_argument("--n", type=int, default=None,
                        help="Board size for n-queens, vertex count for hamiltonian-path")
    parser.add_argument("--start", type=int, default=None,
                        help="Start vertex for hamiltonian-path")
    parser.add_argument("--words", default=None,
                        help="Comma-separated words for trie-search")
    parser.add_argument("--operation", "-o", default=None,
                        choices=[constants.OP_SEARCH, constants.OP_INSERT, constants.OP_DELETE],
                        help="Tree operation (default: search)")
    parser.add_argument("--value", default=None,
                        help="Key (or word, for trie-search) the tree operation acts on")
    parser.add_argument("--json", action="store_true",
                        help="Print the trace as JSON")
    parser.add_argument("--play", action="store_true",
                        help="Replay the trace in real time")
    parser.add_argument("--speed", type=float, default=constants.DEFAULT_SPEED,
                        help="Playback speed multiplier, clamped to 0.5-3 (default: 1.0)")
    parser.add_argument("--list", action="store_true",
                        help="List supported algorithms and exit")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log trace generation and playback transitions")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.list:
        print(list_algorithms())
        return 0
    if not args.algorithm:
        parser.error("an algorithm id is required (see --list)")

    try:
        params, gen_params = build_params(args.algorithm, args)
        logger.debug("params=%s gen_params=%s", params, gen_params)
        trace = generate_trace(args.algorithm, params, **gen_params)
    except (TypeError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.json:
        print(trace_to_json(trace))
    elif args.play:
        if args.speed <= 0:
            parser.error("--speed must be positive")
        print(describe_algorithm(args.algorithm))
        replay(trace, resolve_speed(args.speed))
    else:
        print(describe_algorithm(args.algorithm))
        print(dump_trace(trace))
    return 0
