"""Sorting visualizers — bubble, insertion, selection, quick and merge sort."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from .. import constants
from ..descriptor import AlgorithmDescriptor, Difficulty
from ..recorder import TraceRecorder
from ..step_data import SortStepData
from ._base import AlgorithmVisualizer, require_int_sequence


@dataclass
class SortCounters:
    """Running totals shared by the recursive helpers of one sort run."""

    comparisons: int = 0
    swaps: int = 0
    merges: int = 0


def _span(low: int, high: int) -> range:
    return range(low, high + 1)


def _snap(
    arr: list[int], left_run: Sequence[int] = (), right_run: Sequence[int] = ()
) -> SortStepData:
    return SortStepData(array=tuple(arr), left_run=tuple(left_run), right_run=tuple(right_run))


class ArraySortVisualizer(AlgorithmVisualizer):
    """Base for visualizers that sort a private copy of an int array."""

    def __init__(self, array: Sequence[int] = constants.DEFAULT_SORT_ARRAY):
        self._array = require_int_sequence(array, "array")

    @property
    def array(self) -> tuple[int, ...]:
        return self._array

    def _run(self, recorder: TraceRecorder) -> None:
        self._sort(recorder, list(self._array))

    @abstractmethod
    def _sort(self, recorder: TraceRecorder, arr: list[int]) -> None: ...


# ── bubble sort ──────────────────────────────────────────────────


class BubbleSortVisualizer(ArraySortVisualizer):
    ALGORITHM_ID = constants.BUBBLE_SORT
    DESCRIPTOR = AlgorithmDescriptor(
        id=constants.BUBBLE_SORT,
        name="Bubble Sort",
        category=constants.CATEGORY_SORTING,
        description=(
            "A simple sorting algorithm that repeatedly steps through the list, "
            "compares adjacent elements and swaps them if they are in the wrong order."
        ),
        time_complexity="O(n²)",
        space_complexity="O(1)",
        difficulty=Difficulty.EASY,
        code="""\
def bubble_sort(arr):
    n = len(arr)
    for i in range(n - 1):
        swapped = False
        for j in range(n - i - 1):
            if arr[j] > arr[j + 1]:
                arr[j], arr[j + 1] = arr[j + 1], arr[j]
                swapped = True
        if not swapped:
            break
    return arr
""",
    )

    def _sort(self, recorder: TraceRecorder, arr: list[int]) -> None:
        n = len(arr)
        comparisons = 0
        swaps = 0
        passes = 0
        completed: set[int] = set()

        def counts(**extra) -> dict:
            return {"comparisons": comparisons, "swaps": swaps, "passes": passes, **extra}

        recorder.record(f"Starting Bubble Sort with array of {n} elements", _snap(arr), counts())

        for i in range(n - 1):
            passes = i + 1
            recorder.record(
                f"Pass {passes}: Finding the largest element and bubbling it "
                f"to position {n - 1 - i}",
                _snap(arr),
                counts(),
                completed=completed,
            )
            swapped = False
            for j in range(n - i - 1):
                comparisons += 1
                recorder.record(
                    f"Comparing elements at positions {j} and {j + 1}: {arr[j]} vs {arr[j + 1]}",
                    _snap(arr),
                    counts(),
                    comparisons=(j, j + 1),
                    completed=completed,
                )
                if arr[j] > arr[j + 1]:
                    arr[j], arr[j + 1] = arr[j + 1], arr[j]
                    swaps += 1
                    swapped = True
                    recorder.record(
                        f"{arr[j + 1]} > {arr[j]}, swapping positions {j} and {j + 1}",
                        _snap(arr),
                        counts(),
                        mutations=(j, j + 1),
                        completed=completed,
                    )
                else:
                    recorder.record(
                        f"{arr[j]} ≤ {arr[j + 1]}, no swap needed",
                        _snap(arr),
                        counts(),
                        completed=completed,
                    )

            completed.add(n - 1 - i)
            recorder.record(
                f"Pass {passes} complete. Element {arr[n - 1 - i]} is now in its final position",
                _snap(arr),
                counts(),
                highlights=(n - 1 - i,),
                completed=completed,
            )

            if not swapped:
                completed.update(range(n - i - 1))
                recorder.record(
                    "No swaps in this pass - array is already sorted!",
                    _snap(arr),
                    counts(earlyTermination=True),
                    completed=completed,
                )
                break

        recorder.record(
            f"Bubble Sort complete! Array sorted in {comparisons} comparisons and {swaps} swaps",
            _snap(arr),
            counts(final=True),
            completed=range(n),
        )


# ── insertion sort ───────────────────────────────────────────────


class InsertionSortVisualizer(ArraySortVisualizer):
    ALGORITHM_ID = constants.INSERTION_SORT
    DESCRIPTOR = AlgorithmDescriptor(
        id=constants.INSERTION_SORT,
        name="Insertion Sort",
        category=constants.CATEGORY_SORTING,
        description=(
            "Builds the final sorted array one item at a time by repeatedly inserting "
            "the next element into the sorted portion."
        ),
        time_complexity="O(n²)",
        space_complexity="O(1)",
        difficulty=Difficulty.EASY,
        code="""\
def insertion_sort(arr):
    for i in range(1, len(arr)):
        key = arr[i]
        j = i - 1
        while j >= 0 and arr[j] > key:
            arr[j + 1] = arr[j]
            j -= 1
        arr[j + 1] = key
    return arr
""",
    )

    def _sort(self, recorder: TraceRecorder, arr: list[int]) -> None:
        n = len(arr)
        comparisons = 0
        shifts = 0
        sorted_portion = [0] if n else []

        def counts(**extra) -> dict:
            return {
                "comparisons": comparisons,
                "shifts": shifts,
                "sortedPortion": list(sorted_portion),
                **extra,
            }

        if n == 0:
            recorder.record("Starting Insertion Sort on an empty array", _snap(arr), counts())
        else:
            recorder.record(
                f"Starting Insertion Sort. First element {arr[0]} is considered sorted",
                _snap(arr),
                counts(),
                highlights=(0,),
            )

        for i in range(1, n):
            key = arr[i]
            j = i - 1
            recorder.record(
                f"Taking element {key} at position {i} to insert into sorted portion",
                _snap(arr),
                counts(key=key, keyPosition=i),
                highlights=(i,),
            )
            while j >= 0:
                comparisons += 1
                recorder.record(
                    f"Comparing key {key} with element {arr[j]} at position {j}",
                    _snap(arr),
                    counts(key=key, keyPosition=i),
                    highlights=(i,),
                    comparisons=(j,),
                )
                if arr[j] <= key:
                    recorder.record(
                        f"{arr[j]} ≤ {key}, found correct position for {key}",
                        _snap(arr),
                        counts(key=key, keyPosition=i),
                        highlights=(i,),
                    )
                    break
                recorder.record(
                    f"{arr[j]} > {key}, shifting {arr[j]} one position to the right",
                    _snap(arr),
                    counts(key=key, keyPosition=i),
                    highlights=(i,),
                    mutations=(j, j + 1),
                )
                arr[j + 1] = arr[j]
                shifts += 1
                j -= 1
                recorder.record(
                    f"Element {arr[j + 2]} shifted to position {j + 2}",
                    _snap(arr),
                    counts(key=key, keyPosition=i),
                    highlights=(i,),
                )

            arr[j + 1] = key
            sorted_portion.append(i)
            recorder.record(
                f"Inserting {key} at position {j + 1}. Sorted portion now includes "
                f"positions 0 to {i}",
                _snap(arr),
                counts(inserted=True),
                highlights=(j + 1,),
                mutations=(j + 1,),
            )

        recorder.record(
            f"Insertion Sort complete! Array sorted in {comparisons} comparisons "
            f"and {shifts} shifts",
            _snap(arr),
            counts(final=True),
            completed=range(n),
        )


# ── selection sort ───────────────────────────────────────────────


class SelectionSortVisualizer(ArraySortVisualizer):
    ALGORITHM_ID = constants.SELECTION_SORT
    DESCRIPTOR = AlgorithmDescriptor(
        id=constants.SELECTION_SORT,
        name="Selection Sort",
        category=constants.CATEGORY_SORTING,
        description=(
            "Divides the input into a sorted and an unsorted region and repeatedly "
            "moves the smallest unsorted element to the end of the sorted region."
        ),
        time_complexity="O(n²)",
        space_complexity="O(1)",
        difficulty=Difficulty.EASY,
        code="""\
def selection_sort(arr):
    n = len(arr)
    for i in range(n - 1):
        min_index = i
        for j in range(i + 1, n):
            if arr[j] < arr[min_index]:
                min_index = j
        if min_index != i:
            arr[i], arr[min_index] = arr[min_index], arr[i]
    return arr
""",
    )

    def _sort(self, recorder: TraceRecorder, arr: list[int]) -> None:
        n = len(arr)
        comparisons = 0
        swaps = 0
        completed: list[int] = []

        def counts(**extra) -> dict:
            return {"comparisons": comparisons, "swaps": swaps, **extra}

        recorder.record(f"Starting Selection Sort with array of {n} elements", _snap(arr), counts())

        for i in range(n - 1):
            min_index = i
            recorder.record(
                f"Pass {i + 1}: Finding minimum element in unsorted portion "
                f"(positions {i} to {n - 1})",
                _snap(arr),
                counts(currentMin=arr[i], minIndex=i),
                highlights=(i,),
                completed=completed,
            )
            recorder.record(
                f"Assuming element {arr[i]} at position {i} is the minimum",
                _snap(arr),
                counts(currentMin=arr[i], minIndex=i),
                highlights=(i,),
                completed=completed,
            )
            for j in range(i + 1, n):
                comparisons += 1
                recorder.record(
                    f"Comparing current minimum {arr[min_index]} with element {arr[j]} "
                    f"at position {j}",
                    _snap(arr),
                    counts(currentMin=arr[min_index], minIndex=min_index),
                    highlights=(min_index,),
                    comparisons=(j,),
                    completed=completed,
                )
                if arr[j] < arr[min_index]:
                    min_index = j
                    recorder.record(
                        f"Found new minimum: {arr[j]} at position {j}",
                        _snap(arr),
                        counts(currentMin=arr[j], minIndex=j, newMin=True),
                        highlights=(j,),
                        completed=completed,
                    )
                else:
                    recorder.record(
                        f"{arr[j]} ≥ {arr[min_index]}, current minimum unchanged",
                        _snap(arr),
                        counts(currentMin=arr[min_index], minIndex=min_index),
                        highlights=(min_index,),
                        completed=completed,
                    )

            if min_index != i:
                recorder.record(
                    f"Swapping minimum element {arr[min_index]} at position {min_index} "
                    f"with element {arr[i]} at position {i}",
                    _snap(arr),
                    counts(currentMin=arr[min_index], minIndex=min_index),
                    mutations=(i, min_index),
                    completed=completed,
                )
                arr[i], arr[min_index] = arr[min_index], arr[i]
                swaps += 1
                recorder.record(
                    f"Swap complete. Element {arr[i]} is now in its final sorted position",
                    _snap(arr),
                    counts(currentMin=arr[i], minIndex=i),
                    highlights=(i,),
                    completed=completed,
                )
            else:
                recorder.record(
                    f"Minimum element {arr[i]} is already in correct position {i}",
                    _snap(arr),
                    counts(currentMin=arr[i], minIndex=i, noSwapNeeded=True),
                    highlights=(i,),
                    completed=completed,
                )

            completed.append(i)
            recorder.record(
                f"Position {i} is now sorted. Sorted portion: positions 0 to {i}",
                _snap(arr),
                counts(passComplete=True),
                completed=completed,
            )

        recorder.record(
            f"Selection Sort complete! Array sorted in {comparisons} comparisons "
            f"and {swaps} swaps",
            _snap(arr),
            counts(final=True),
            completed=range(n),
        )


# ── quick sort ───────────────────────────────────────────────────


class QuickSortVisualizer(ArraySortVisualizer):
    """Lomuto partitioning with the last element of each range as pivot."""

    ALGORITHM_ID = constants.QUICK_SORT
    DESCRIPTOR = AlgorithmDescriptor(
        id=constants.QUICK_SORT,
        name="Quick Sort",
        category=constants.CATEGORY_SORTING,
        description=(
            "An efficient divide and conquer sort that partitions the array around a "
            "pivot and recursively sorts the partitions."
        ),
        time_complexity="O(n log n) average, O(n²) worst",
        space_complexity="O(log n)",
        difficulty=Difficulty.MEDIUM,
        code="""\
def quick_sort(arr, low=0, high=None):
    if high is None:
        high = len(arr) - 1
    if low < high:
        p = partition(arr, low, high)
        quick_sort(arr, low, p - 1)
        quick_sort(arr, p + 1, high)
    return arr


def partition(arr, low, high):
    pivot = arr[high]
    i = low - 1
    for j in range(low, high):
        if arr[j] < pivot:
            i += 1
            arr[i], arr[j] = arr[j], arr[i]
    arr[i + 1], arr[high] = arr[high], arr[i + 1]
    return i + 1
""",
    )

    def _sort(self, recorder: TraceRecorder, arr: list[int]) -> None:
        n = len(arr)
        counters = SortCounters()
        recorder.record(
            f"Starting Quick Sort with array of {n} elements",
            _snap(arr),
            {"comparisons": 0, "swaps": 0, "recursionDepth": 0},
        )
        if n <= 1:
            recorder.record(
                f"Array has {n} element(s), already sorted",
                _snap(arr),
                {"comparisons": 0, "swaps": 0, "final": True},
                highlights=range(n),
                completed=range(n),
            )
            return

        completed: set[int] = set()
        self._quick_sort(recorder, arr, 0, n - 1, counters, completed, 0)
        recorder.record(
            f"Quick Sort complete! Array sorted in {counters.comparisons} comparisons "
            f"and {counters.swaps} swaps",
            _snap(arr),
            {"comparisons": counters.comparisons, "swaps": counters.swaps, "final": True},
            completed=range(n),
        )

    def _quick_sort(
        self,
        recorder: TraceRecorder,
        arr: list[int],
        low: int,
        high: int,
        counters: SortCounters,
        completed: set[int],
        depth: int,
    ) -> None:
        def counts(**extra) -> dict:
            return {
                "comparisons": counters.comparisons,
                "swaps": counters.swaps,
                "recursionDepth": depth,
                **extra,
            }

        if low < high:
            recorder.record(
                f"Recursion depth {depth}: Sorting range [{low}, {high}]",
                _snap(arr),
                counts(partitionRange=(low, high)),
                completed=completed,
            )
            pivot_index = self._partition(recorder, arr, low, high, counters, completed, depth)
            recorder.record(
                f"Recursively sorting left subarray [{low}, {pivot_index - 1}] and "
                f"right subarray [{pivot_index + 1}, {high}]",
                _snap(arr),
                counts(recursiveCall=True),
                highlights=(pivot_index,),
                completed=completed,
            )
            self._quick_sort(recorder, arr, low, pivot_index - 1, counters, completed, depth + 1)
            self._quick_sort(recorder, arr, pivot_index + 1, high, counters, completed, depth + 1)
        elif low == high:
            completed.add(low)
            recorder.record(
                f"Single element {arr[low]} at position {low} is already sorted",
                _snap(arr),
                counts(singleElement=True),
                highlights=(low,),
                completed=completed,
            )

    def _partition(
        self,
        recorder: TraceRecorder,
        arr: list[int],
        low: int,
        high: int,
        counters: SortCounters,
        completed: set[int],
        depth: int,
    ) -> int:
        pivot = arr[high]

        def counts(**extra) -> dict:
            return {
                "comparisons": counters.comparisons,
                "swaps": counters.swaps,
                "recursionDepth": depth,
                "pivot": pivot,
                "partitionRange": (low, high),
                **extra,
            }

        recorder.record(
            f"Partitioning range [{low}, {high}]. Choosing pivot: {pivot} at position {high}",
            _snap(arr),
            counts(),
            highlights=(high,),
            completed=completed,
        )
        i = low - 1
        for j in range(low, high):
            counters.comparisons += 1
            recorder.record(
                f"Comparing element {arr[j]} at position {j} with pivot {pivot}",
                _snap(arr),
                counts(),
                highlights=(high,),
                comparisons=(j,),
                completed=completed,
            )
            if arr[j] >= pivot:
                recorder.record(
                    f"{arr[j]} ≥ {pivot}, element stays in place",
                    _snap(arr),
                    counts(),
                    highlights=(high,),
                    completed=completed,
                )
                continue
            i += 1
            if i == j:
                recorder.record(
                    f"{arr[j]} < {pivot}, element is already in correct relative position",
                    _snap(arr),
                    counts(),
                    highlights=(high,),
                    completed=completed,
                )
                continue
            recorder.record(
                f"{arr[j]} < {pivot}, swapping {arr[j]} at position {j} with "
                f"{arr[i]} at position {i}",
                _snap(arr),
                counts(),
                highlights=(high,),
                mutations=(i, j),
                completed=completed,
            )
            arr[i], arr[j] = arr[j], arr[i]
            counters.swaps += 1
            recorder.record(
                f"Swap complete. Elements below the pivot now end at position {i}",
                _snap(arr),
                counts(),
                highlights=(high,),
                completed=completed,
            )

        pivot_position = i + 1
        recorder.record(
            f"Placing pivot {pivot} in its final position {pivot_position}",
            _snap(arr),
            counts(),
            highlights=(high,),
            mutations=(pivot_position, high),
            completed=completed,
        )
        arr[pivot_position], arr[high] = arr[high], arr[pivot_position]
        counters.swaps += 1
        completed.add(pivot_position)
        recorder.record(
            f"Partition complete. Pivot {pivot} is in its final sorted position {pivot_position}",
            _snap(arr),
            counts(partitionComplete=True),
            highlights=(pivot_position,),
            completed=completed,
        )
        return pivot_position


# ── merge sort ───────────────────────────────────────────────────


class MergeSortVisualizer(ArraySortVisualizer):
    ALGORITHM_ID = constants.MERGE_SORT
    DESCRIPTOR = AlgorithmDescriptor(
        id=constants.MERGE_SORT,
        name="Merge Sort",
        category=constants.CATEGORY_SORTING,
        description=(
            "A divide and conquer algorithm that splits the array in halves, sorts "
            "each half recursively and merges the sorted halves."
        ),
        time_complexity="O(n log n)",
        space_complexity="O(n)",
        difficulty=Difficulty.MEDIUM,
        code="""\
def merge_sort(arr, left=0, right=None):
    if right is None:
        right = len(arr) - 1
    if left < right:
        mid = (left + right) // 2
        merge_sort(arr, left, mid)
        merge_sort(arr, mid + 1, right)
        merge(arr, left, mid, right)
    return arr


def merge(arr, left, mid, right):
    lo, hi = arr[left:mid + 1], arr[mid + 1:right + 1]
    i = j = 0
    k = left
    while i < len(lo) and j < len(hi):
        if lo[i] <= hi[j]:
            arr[k] = lo[i]
            i += 1
        else:
            arr[k] = hi[j]
            j += 1
        k += 1
    arr[k:right + 1] = lo[i:] + hi[j:]
""",
    )

    def _sort(self, recorder: TraceRecorder, arr: list[int]) -> None:
        n = len(arr)
        counters = SortCounters()
        recorder.record(
            f"Starting Merge Sort with array of {n} elements",
            _snap(arr),
            {"comparisons": 0, "merges": 0, "recursionDepth": 0},
        )
        if n <= 1:
            recorder.record(
                f"Array has {n} element(s), already sorted",
                _snap(arr),
                {"comparisons": 0, "merges": 0, "final": True},
                highlights=range(n),
                completed=range(n),
            )
            return

        self._merge_sort(recorder, arr, 0, n - 1, counters, 0)
        recorder.record(
            f"Merge Sort complete! Array sorted in {counters.comparisons} comparisons "
            f"and {counters.merges} merge operations",
            _snap(arr),
            {"comparisons": counters.comparisons, "merges": counters.merges, "final": True},
            completed=range(n),
        )

    def _merge_sort(
        self,
        recorder: TraceRecorder,
        arr: list[int],
        left: int,
        right: int,
        counters: SortCounters,
        depth: int,
    ) -> None:
        def counts(**extra) -> dict:
            return {
                "comparisons": counters.comparisons,
                "merges": counters.merges,
                "recursionDepth": depth,
                **extra,
            }

        if left >= right:
            recorder.record(
                f"Base case: Single element {arr[left]} at position {left} is already sorted",
                _snap(arr),
                counts(baseCase=True),
                highlights=(left,),
            )
            return

        mid = (left + right) // 2
        recorder.record(
            f"Recursion depth {depth}: Dividing array [{left}, {right}] at midpoint {mid}",
            _snap(arr),
            counts(dividing=(left, mid, right)),
        )
        recorder.record(
            f"Recursively sorting left half [{left}, {mid}]",
            _snap(arr),
            counts(sortingLeft=(left, mid)),
            highlights=_span(left, mid),
        )
        self._merge_sort(recorder, arr, left, mid, counters, depth + 1)
        recorder.record(
            f"Recursively sorting right half [{mid + 1}, {right}]",
            _snap(arr),
            counts(sortingRight=(mid + 1, right)),
            highlights=_span(mid + 1, right),
        )
        self._merge_sort(recorder, arr, mid + 1, right, counters, depth + 1)
        self._merge(recorder, arr, left, mid, right, counters, depth)

    def _merge(
        self,
        recorder: TraceRecorder,
        arr: list[int],
        left: int,
        mid: int,
        right: int,
        counters: SortCounters,
        depth: int,
    ) -> None:
        lo = arr[left : mid + 1]
        hi = arr[mid + 1 : right + 1]

        def counts(**extra) -> dict:
            return {
                "comparisons": counters.comparisons,
                "merges": counters.merges,
                "recursionDepth": depth,
                "mergeRange": (left, right),
                **extra,
            }

        recorder.record(
            f"Merging subarrays: {lo} and {hi}",
            _snap(arr, lo, hi),
            counts(),
        )
        i = j = 0
        k = left
        while i < len(lo) and j < len(hi):
            counters.comparisons += 1
            recorder.record(
                f"Comparing {lo[i]} from left array with {hi[j]} from right array",
                _snap(arr, lo, hi),
                counts(comparing=(lo[i], hi[j])),
                comparisons=(left + i, mid + 1 + j),
            )
            if lo[i] <= hi[j]:
                arr[k] = lo[i]
                recorder.record(
                    f"{lo[i]} ≤ {hi[j]}, placing {lo[i]} at position {k}",
                    _snap(arr, lo, hi),
                    counts(placed=lo[i]),
                    highlights=(k,),
                    mutations=(k,),
                )
                i += 1
            else:
                arr[k] = hi[j]
                recorder.record(
                    f"{hi[j]} < {lo[i]}, placing {hi[j]} at position {k}",
                    _snap(arr, lo, hi),
                    counts(placed=hi[j]),
                    highlights=(k,),
                    mutations=(k,),
                )
                j += 1
            k += 1

        for side, run, start in (("left", lo, i), ("right", hi, j)):
            for value in run[start:]:
                arr[k] = value
                recorder.record(
                    f"Copying remaining element {value} from {side} array to position {k}",
                    _snap(arr, lo, hi),
                    counts(remaining=side),
                    highlights=(k,),
                    mutations=(k,),
                )
                k += 1

        counters.merges += 1
        recorder.record(
            f"Merge complete. Subarray [{left}, {right}] is now sorted: {arr[left : right + 1]}",
            _snap(arr),
            counts(mergeComplete=True),
            highlights=_span(left, right),
        )
