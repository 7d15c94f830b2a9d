"""Sanitizers for user-typed input, applied before a visualizer is constructed.

Integer parsing follows the lenient prefix rule web forms use: surrounding
whitespace is ignored, an optional sign and leading digits are read, and
anything after them is discarded (``"12abc"`` parses as 12). Tokens without
a leading integer are dropped.
"""

from __future__ import annotations

import re

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


def parse_int_prefix(token: str) -> int | None:
    match = _INT_PREFIX.match(token)
    return int(match.group(1)) if match else None


def parse_array(text: str) -> list[int]:
    """Split *text* on commas and keep every token with a leading integer."""
    values = (parse_int_prefix(token) for token in text.split(","))
    return [v for v in values if v is not None]


def parse_target(text: str, default: int = 0) -> int:
    value = parse_int_prefix(text)
    return default if value is None else value


def clamp_target(value: float, low: float, high: float) -> float:
    """Pull *value* into [low, high]; used for slider-style inputs such as speed."""
    if low > high:
        raise ValueError(f"Empty clamp range [{low}, {high}]")
    return max(low, min(value, high))
