"""Tests for the sorting visualizers."""

import pytest

from algotrace.visualizers.sorting import (
    ArraySortVisualizer,
    BubbleSortVisualizer,
    InsertionSortVisualizer,
    MergeSortVisualizer,
    QuickSortVisualizer,
    SelectionSortVisualizer,
)

DEFAULT = [64, 34, 25, 12, 22, 11, 90]
SORTED_DEFAULT = (11, 12, 22, 25, 34, 64, 90)

ALL_SORTS = [
    BubbleSortVisualizer,
    InsertionSortVisualizer,
    SelectionSortVisualizer,
    QuickSortVisualizer,
    MergeSortVisualizer,
]


@pytest.mark.parametrize("cls", ALL_SORTS)
class TestEverySort:
    def test_default_input_ends_sorted_with_all_positions_completed(self, cls):
        trace = cls().generate_steps()
        final = trace.final_step
        assert final.data.array == SORTED_DEFAULT
        assert final.completed == frozenset(range(7))
        assert final.metadata["final"] is True

    def test_handles_duplicates_and_negatives(self, cls):
        trace = cls([3, -1, 3, 0, -1]).generate_steps()
        assert trace.final_step.data.array == (-1, -1, 0, 3, 3)

    def test_empty_array_yields_non_empty_trace(self, cls):
        trace = cls([]).generate_steps()
        assert len(trace) >= 1
        assert trace.final_step.data.array == ()

    def test_single_element(self, cls):
        trace = cls([7]).generate_steps()
        assert trace.final_step.data.array == (7,)
        assert trace.final_step.completed == frozenset({0})

    def test_ids_are_contiguous(self, cls):
        trace = cls().generate_steps()
        assert [s.id for s in trace] == list(range(len(trace)))

    def test_generation_is_deterministic(self, cls):
        vis = cls()
        first = [s.content() for s in vis.generate_steps()]
        second = [s.content() for s in vis.generate_steps()]
        assert first == second

    def test_caller_list_is_copied(self, cls):
        values = [3, 1, 2]
        vis = cls(values)
        values.append(0)
        values[0] = 100
        assert vis.generate_steps().final_step.data.array == (1, 2, 3)
        assert values == [100, 1, 2, 0]

    def test_snapshots_are_independent(self, cls):
        trace = cls().generate_steps()
        assert trace[0].data.array == tuple(DEFAULT)

    def test_rejects_non_integer_elements(self, cls):
        with pytest.raises(TypeError, match="array\\[1\\]"):
            cls([1, "2", 3])

    def test_rejects_bools(self, cls):
        with pytest.raises(TypeError):
            cls([1, True])

    def test_rejects_string_input(self, cls):
        with pytest.raises(TypeError):
            cls("123")


class TestArraySortBase:
    def test_cannot_instantiate_without_sort(self):
        with pytest.raises(TypeError):
            ArraySortVisualizer([1, 2])


class TestBubbleSort:
    def test_swap_count_equals_inversions(self):
        trace = BubbleSortVisualizer().generate_steps()
        assert trace.final_step.metadata["swaps"] == 14

    def test_swap_steps_mark_mutated_positions(self):
        trace = BubbleSortVisualizer([2, 1]).generate_steps()
        swap_steps = [s for s in trace if s.mutations]
        assert len(swap_steps) == 1
        assert swap_steps[0].mutations == frozenset({0, 1})
        assert swap_steps[0].data.array == (1, 2)

    def test_already_sorted_terminates_early(self):
        trace = BubbleSortVisualizer([1, 2, 3, 4]).generate_steps()
        assert any(s.metadata.get("earlyTermination") for s in trace)
        assert trace.final_step.metadata["comparisons"] == 3

    def test_compare_steps_name_the_pair(self):
        trace = BubbleSortVisualizer([5, 4]).generate_steps()
        compare = [s for s in trace if s.comparisons]
        assert compare[0].comparisons == frozenset({0, 1})


class TestInsertionSort:
    def test_shift_count_equals_inversions(self):
        trace = InsertionSortVisualizer().generate_steps()
        assert trace.final_step.metadata["shifts"] == 14

    def test_completed_only_on_final_step(self):
        trace = InsertionSortVisualizer([3, 2, 1]).generate_steps()
        assert all(not s.completed for s in trace.steps[:-1])


class TestSelectionSort:
    def test_no_swap_needed_is_reported(self):
        trace = SelectionSortVisualizer([1, 3, 2]).generate_steps()
        assert any(s.metadata.get("noSwapNeeded") for s in trace)

    def test_completed_grows_one_position_per_pass(self):
        trace = SelectionSortVisualizer([4, 3, 2, 1]).generate_steps()
        pass_ends = [s for s in trace if s.metadata.get("passComplete")]
        assert [s.completed for s in pass_ends] == [
            frozenset({0}),
            frozenset({0, 1}),
            frozenset({0, 1, 2}),
        ]


class TestQuickSort:
    def test_pivot_is_last_element_of_range(self):
        trace = QuickSortVisualizer().generate_steps()
        first_partition = next(s for s in trace if "pivot" in s.metadata)
        assert first_partition.metadata["pivot"] == 90
        assert first_partition.metadata["partitionRange"] == (0, 6)

    def test_partition_complete_marks_pivot_completed(self):
        trace = QuickSortVisualizer([3, 1, 2]).generate_steps()
        done = next(s for s in trace if s.metadata.get("partitionComplete"))
        assert done.data.array == (1, 2, 3)
        assert 1 in done.completed

    def test_recursion_step_precedes_subrange(self):
        trace = QuickSortVisualizer([3, 1, 2, 5, 4]).generate_steps()
        descriptions = [s.description for s in trace]
        recurse = next(i for i, d in enumerate(descriptions) if d.startswith("Recursively"))
        assert any(d.startswith("Recursion depth 1") for d in descriptions[recurse:])


class TestMergeSort:
    def test_merge_count_is_n_minus_one(self):
        trace = MergeSortVisualizer().generate_steps()
        assert trace.final_step.metadata["merges"] == 6

    def test_merge_steps_carry_runs(self):
        trace = MergeSortVisualizer([2, 1]).generate_steps()
        merging = next(s for s in trace if s.description.startswith("Merging"))
        assert merging.data.left_run == (2,)
        assert merging.data.right_run == (1,)

    def test_comparisons_point_at_original_positions(self):
        trace = MergeSortVisualizer([2, 1]).generate_steps()
        compare = next(s for s in trace if s.comparisons)
        assert compare.comparisons == frozenset({0, 1})
