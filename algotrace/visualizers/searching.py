"""Searching visualizers over int arrays.

Every search ends on one of two terminal steps: a ``found`` step whose
``completed`` set holds the matching index, or a ``notFound`` step with an
empty ``completed`` set.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from .. import constants
from ..descriptor import AlgorithmDescriptor, Difficulty
from ..recorder import TraceRecorder
from ..step_data import SearchStepData
from ._base import AlgorithmVisualizer, require_int, require_int_sequence


class ArraySearchVisualizer(AlgorithmVisualizer):
    """Base for visualizers that look for ``target`` in an int array."""

    DEFAULTS: tuple[tuple[int, ...], int] = ((), 0)

    def __init__(self, array: Sequence[int] | None = None, target: int | None = None):
        default_array, default_target = self.DEFAULTS
        self._array = self._prepare(
            require_int_sequence(default_array if array is None else array, "array")
        )
        self._target = require_int(default_target if target is None else target, "target")

    def _prepare(self, array: tuple[int, ...]) -> tuple[int, ...]:
        return array

    @property
    def array(self) -> tuple[int, ...]:
        return self._array

    @property
    def target(self) -> int:
        return self._target

    def _snap(self, position: int = -1, search_range=None, probe=None) -> SearchStepData:
        return SearchStepData(
            array=self._array,
            target=self._target,
            position=position,
            search_range=search_range,
            probe=probe,
        )

    def _found(self, recorder: TraceRecorder, index: int, comparisons: int, **extra) -> None:
        recorder.record(
            f"Found target {self._target} at index {index}!",
            self._snap(position=index, probe=index),
            {
                "comparisons": comparisons,
                "found": True,
                "foundIndex": index,
                "position": index,
                **extra,
            },
            highlights=(index,),
            completed=(index,),
        )

    def _not_found(self, recorder: TraceRecorder, comparisons: int, reason: str) -> None:
        recorder.record(
            f"Target {self._target} not found in the array. {reason}",
            self._snap(),
            {"comparisons": comparisons, constants.NOT_FOUND_KEY: True},
        )


# ── linear search ────────────────────────────────────────────────


class LinearSearchVisualizer(ArraySearchVisualizer):
    ALGORITHM_ID = constants.LINEAR_SEARCH
    DEFAULTS = constants.DEFAULT_LINEAR_SEARCH
    DESCRIPTOR = AlgorithmDescriptor(
        id=constants.LINEAR_SEARCH,
        name="Linear Search",
        category=constants.CATEGORY_SEARCHING,
        description=(
            "Checks every element of the list in order until the target is found "
            "or the list is exhausted."
        ),
        time_complexity="O(n)",
        space_complexity="O(1)",
        difficulty=Difficulty.EASY,
        code="""\
def linear_search(arr, target):
    for i, value in enumerate(arr):
        if value == target:
            return i
    return -1
""",
    )

    def _run(self, recorder: TraceRecorder) -> None:
        arr = self._array
        target = self._target
        comparisons = 0
        recorder.record(
            f"Starting Linear Search for target {target} in array of {len(arr)} elements",
            self._snap(),
            {"comparisons": 0},
        )
        for i, value in enumerate(arr):
            comparisons += 1
            recorder.record(
                f"Checking element at index {i}: {value}",
                self._snap(probe=i),
                {"comparisons": comparisons},
                highlights=(i,),
                comparisons=(i,),
            )
            if value == target:
                self._found(recorder, i, comparisons)
                return
            recorder.record(
                f"{value} ≠ {target}, continue searching",
                self._snap(probe=i),
                {"comparisons": comparisons},
            )
        self._not_found(recorder, comparisons, f"Checked all {len(arr)} elements.")


# ── binary search ────────────────────────────────────────────────


class BinarySearchVisualizer(ArraySearchVisualizer):
    """Binary search; the array is sorted once at construction."""

    ALGORITHM_ID = constants.BINARY_SEARCH
    DEFAULTS = constants.DEFAULT_BINARY_SEARCH
    DESCRIPTOR = AlgorithmDescriptor(
        id=constants.BINARY_SEARCH,
        name="Binary Search",
        category=constants.CATEGORY_SEARCHING,
        description=(
            "Searches a sorted array by repeatedly halving the search interval "
            "around the middle element."
        ),
        time_complexity="O(log n)",
        space_complexity="O(1)",
        difficulty=Difficulty.EASY,
        code="""\
def binary_search(arr, target):
    left, right = 0, len(arr) - 1
    while left <= right:
        mid = (left + right) // 2
        if arr[mid] == target:
            return mid
        if arr[mid] < target:
            left = mid + 1
        else:
            right = mid - 1
    return -1
""",
    )

    def _prepare(self, array: tuple[int, ...]) -> tuple[int, ...]:
        return tuple(sorted(array))

    def _run(self, recorder: TraceRecorder) -> None:
        arr = self._array
        target = self._target
        left, right = 0, len(arr) - 1
        comparisons = 0
        recorder.record(
            f"Starting Binary Search for target {target} in sorted array",
            self._snap(search_range=(left, right)),
            {"comparisons": 0, "searchRange": (left, right)},
            highlights=range(len(arr)),
        )
        while left <= right:
            mid = (left + right) // 2
            comparisons += 1
            recorder.record(
                f"Checking middle element at index {mid}: {arr[mid]} "
                f"(range [{left}, {right}])",
                self._snap(search_range=(left, right), probe=mid),
                {"comparisons": comparisons, "midIndex": mid, "searchRange": (left, right)},
                highlights=(mid,),
                comparisons=(mid,),
            )
            if arr[mid] == target:
                self._found(recorder, mid, comparisons, searchRange=(left, right))
                return
            if arr[mid] < target:
                recorder.record(
                    f"{arr[mid]} < {target}, searching right half",
                    self._snap(search_range=(mid + 1, right), probe=mid),
                    {
                        "comparisons": comparisons,
                        "searchRange": (mid + 1, right),
                        "eliminated": (left, mid),
                    },
                    highlights=range(mid + 1, right + 1),
                )
                left = mid + 1
            else:
                recorder.record(
                    f"{arr[mid]} > {target}, searching left half",
                    self._snap(search_range=(left, mid - 1), probe=mid),
                    {
                        "comparisons": comparisons,
                        "searchRange": (left, mid - 1),
                        "eliminated": (mid, right),
                    },
                    highlights=range(left, mid),
                )
                right = mid - 1
        self._not_found(recorder, comparisons, "Search range is empty.")


# ── jump search ──────────────────────────────────────────────────


class JumpSearchVisualizer(ArraySearchVisualizer):
    ALGORITHM_ID = constants.JUMP_SEARCH
    DEFAULTS = constants.DEFAULT_JUMP_SEARCH
    DESCRIPTOR = AlgorithmDescriptor(
        id=constants.JUMP_SEARCH,
        name="Jump Search",
        category=constants.CATEGORY_SEARCHING,
        description=(
            "Searches a sorted array by jumping ahead in blocks of √n elements and "
            "then scanning linearly inside the block that may hold the target."
        ),
        time_complexity="O(√n)",
        space_complexity="O(1)",
        difficulty=Difficulty.MEDIUM,
        code="""\
import math


def jump_search(arr, target):
    n = len(arr)
    step = int(math.sqrt(n))
    prev = 0
    while prev < n and arr[min(step, n) - 1] < target:
        prev = step
        step += int(math.sqrt(n))
    for i in range(prev, min(step, n)):
        if arr[i] == target:
            return i
    return -1
""",
    )

    def _prepare(self, array: tuple[int, ...]) -> tuple[int, ...]:
        return tuple(sorted(array))

    def _run(self, recorder: TraceRecorder) -> None:
        arr = self._array
        target = self._target
        n = len(arr)
        jump_size = math.isqrt(n)
        comparisons = 0
        recorder.record(
            f"Starting Jump Search for target {target}. Jump size = √{n} = {jump_size}",
            self._snap(),
            {"comparisons": 0, "jumpSize": jump_size},
        )
        if n == 0:
            self._not_found(recorder, 0, "The array is empty.")
            return

        prev = 0
        step = jump_size
        while True:
            block_end = min(step, n) - 1
            comparisons += 1
            recorder.record(
                f"Checking block end at index {block_end}: {arr[block_end]}",
                self._snap(search_range=(prev, block_end), probe=block_end),
                {"comparisons": comparisons, "jumpSize": jump_size, "blockEnd": block_end},
                highlights=(block_end,),
                comparisons=(block_end,),
            )
            if arr[block_end] >= target:
                break
            prev = step
            step += jump_size
            if prev >= n:
                self._not_found(recorder, comparisons, "Jumped past the end of the array.")
                return
            recorder.record(
                f"{arr[block_end]} < {target}, moving to next block starting at index {prev}",
                self._snap(search_range=(prev, min(step, n) - 1)),
                {"comparisons": comparisons, "jumpSize": jump_size},
                highlights=range(prev, min(step, n)),
            )

        block_end = min(step, n) - 1
        recorder.record(
            f"Target may be in block [{prev}, {block_end}], performing linear search",
            self._snap(search_range=(prev, block_end)),
            {"comparisons": comparisons, "jumpSize": jump_size, "linearSearch": True},
            highlights=range(prev, block_end + 1),
        )
        for i in range(prev, block_end + 1):
            comparisons += 1
            recorder.record(
                f"Checking element at index {i}: {arr[i]}",
                self._snap(search_range=(prev, block_end), probe=i),
                {"comparisons": comparisons, "jumpSize": jump_size},
                highlights=(i,),
                comparisons=(i,),
            )
            if arr[i] == target:
                self._found(recorder, i, comparisons, jumpSize=jump_size)
                return
        self._not_found(recorder, comparisons, f"Target is not in block [{prev}, {block_end}].")


# ── interpolation search ─────────────────────────────────────────


class InterpolationSearchVisualizer(ArraySearchVisualizer):
    ALGORITHM_ID = constants.INTERPOLATION_SEARCH
    DEFAULTS = constants.DEFAULT_INTERPOLATION_SEARCH
    DESCRIPTOR = AlgorithmDescriptor(
        id=constants.INTERPOLATION_SEARCH,
        name="Interpolation Search",
        category=constants.CATEGORY_SEARCHING,
        description=(
            "Estimates the target's position from the values at the ends of the "
            "search range; efficient on uniformly distributed sorted data."
        ),
        time_complexity="O(log log n) average, O(n) worst",
        space_complexity="O(1)",
        difficulty=Difficulty.MEDIUM,
        code="""\
def interpolation_search(arr, target):
    low, high = 0, len(arr) - 1
    while low <= high and arr[low] <= target <= arr[high]:
        if low == high:
            return low if arr[low] == target else -1
        pos = low + (target - arr[low]) * (high - low) // (arr[high] - arr[low])
        if arr[pos] == target:
            return pos
        if arr[pos] < target:
            low = pos + 1
        else:
            high = pos - 1
    return -1
""",
    )

    def _prepare(self, array: tuple[int, ...]) -> tuple[int, ...]:
        return tuple(sorted(array))

    def _run(self, recorder: TraceRecorder) -> None:
        arr = self._array
        target = self._target
        low, high = 0, len(arr) - 1
        comparisons = 0
        recorder.record(
            f"Starting Interpolation Search for target {target}",
            self._snap(search_range=(low, high)),
            {"comparisons": 0, "searchRange": (low, high)},
        )

        while low <= high and arr[low] <= target <= arr[high]:
            if low == high:
                comparisons += 1
                recorder.record(
                    f"Single element left at index {low}: {arr[low]}",
                    self._snap(search_range=(low, high), probe=low),
                    {"comparisons": comparisons, "searchRange": (low, high)},
                    highlights=(low,),
                    comparisons=(low,),
                )
                if arr[low] == target:
                    self._found(recorder, low, comparisons)
                    return
                break

            if arr[high] == arr[low]:
                # flat range: every value equals the target
                comparisons += 1
                self._found(recorder, low, comparisons)
                return

            pos = low + (target - arr[low]) * (high - low) // (arr[high] - arr[low])
            formula = (
                f"pos = {low} + (({target} - {arr[low]}) × ({high} - {low})) / "
                f"({arr[high]} - {arr[low]}) = {pos}"
            )
            comparisons += 1
            recorder.record(
                f"Interpolated position {pos}: {arr[pos]}",
                self._snap(search_range=(low, high), probe=pos),
                {
                    "comparisons": comparisons,
                    "searchRange": (low, high),
                    "interpolatedIndex": pos,
                    "formula": formula,
                },
                highlights=(pos,),
                comparisons=(pos,),
            )
            if arr[pos] == target:
                self._found(recorder, pos, comparisons, interpolatedIndex=pos)
                return
            if arr[pos] < target:
                low = pos + 1
                recorder.record(
                    f"{arr[pos]} < {target}, searching right part [{low}, {high}]",
                    self._snap(search_range=(low, high)),
                    {"comparisons": comparisons, "searchRange": (low, high)},
                    highlights=range(low, high + 1),
                )
            else:
                high = pos - 1
                recorder.record(
                    f"{arr[pos]} > {target}, searching left part [{low}, {high}]",
                    self._snap(search_range=(low, high)),
                    {"comparisons": comparisons, "searchRange": (low, high)},
                    highlights=range(low, high + 1),
                )

        self._not_found(recorder, comparisons, "Target is outside the remaining value range.")
