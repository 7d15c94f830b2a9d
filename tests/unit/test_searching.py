"""Tests for the array searching visualizers."""

import pytest

from algotrace.visualizers.searching import (
    BinarySearchVisualizer,
    InterpolationSearchVisualizer,
    JumpSearchVisualizer,
    LinearSearchVisualizer,
)

ALL_SEARCHES = [
    LinearSearchVisualizer,
    BinarySearchVisualizer,
    JumpSearchVisualizer,
    InterpolationSearchVisualizer,
]


def _found_steps(trace):
    return [s for s in trace if s.metadata.get("found")]


@pytest.mark.parametrize("cls", ALL_SEARCHES)
class TestEverySearch:
    def test_default_input_finds_target(self, cls):
        trace = cls().generate_steps()
        final = trace.final_step
        assert final.metadata["found"] is True
        assert final.completed == frozenset({final.metadata["position"]})
        assert final.data.array[final.metadata["position"]] == final.data.target

    def test_absent_target_ends_not_found_with_empty_completed(self, cls):
        trace = cls([1, 3, 5, 7, 9], 4).generate_steps()
        final = trace.final_step
        assert final.metadata["notFound"] is True
        assert final.completed == frozenset()
        assert not _found_steps(trace)

    def test_target_beyond_range(self, cls):
        trace = cls([1, 3, 5], 100).generate_steps()
        assert trace.final_step.metadata["notFound"] is True

    def test_empty_array(self, cls):
        trace = cls([], 5).generate_steps()
        assert len(trace) >= 1
        assert trace.final_step.metadata["notFound"] is True

    def test_single_element_hit(self, cls):
        trace = cls([5], 5).generate_steps()
        assert trace.final_step.metadata["found"] is True
        assert trace.final_step.metadata["position"] == 0

    def test_deterministic(self, cls):
        vis = cls()
        assert [s.content() for s in vis.generate_steps()] == [
            s.content() for s in vis.generate_steps()
        ]

    def test_rejects_non_integer_target(self, cls):
        with pytest.raises(TypeError, match="target"):
            cls([1, 2, 3], "2")

    def test_rejects_bool_target(self, cls):
        with pytest.raises(TypeError):
            cls([1, 2, 3], True)


class TestLinearSearch:
    def test_found_step_reports_five_comparisons(self):
        trace = LinearSearchVisualizer([64, 34, 25, 12, 22, 11, 90], 22).generate_steps()
        (found,) = _found_steps(trace)
        assert found.metadata["comparisons"] == 5
        assert found.metadata["foundIndex"] == 4

    def test_checks_every_element_when_absent(self):
        trace = LinearSearchVisualizer([1, 2, 3], 9).generate_steps()
        checks = [s for s in trace if s.description.startswith("Checking")]
        assert [min(s.comparisons) for s in checks] == [0, 1, 2]
        assert trace.final_step.metadata["comparisons"] == 3

    def test_returns_first_occurrence(self):
        trace = LinearSearchVisualizer([4, 7, 7], 7).generate_steps()
        assert trace.final_step.metadata["position"] == 1


class TestBinarySearch:
    def test_found_at_position_three_with_no_earlier_found(self):
        trace = BinarySearchVisualizer([11, 12, 22, 25, 34, 64, 90], 25).generate_steps()
        found_ids = [s.id for s in _found_steps(trace)]
        assert found_ids
        first = trace[found_ids[0]]
        assert first.metadata["position"] == 3
        assert all(not s.metadata.get("found") for s in trace.steps[: found_ids[0]])

    def test_input_is_sorted_on_construction(self):
        vis = BinarySearchVisualizer([90, 11, 64, 25], 64)
        assert vis.array == (11, 25, 64, 90)
        assert vis.generate_steps().final_step.metadata["position"] == 2

    def test_mid_steps_report_search_range(self):
        trace = BinarySearchVisualizer([1, 2, 3, 4, 5, 6, 7], 7).generate_steps()
        mids = [s.metadata["midIndex"] for s in trace if "midIndex" in s.metadata]
        assert mids == [3, 5, 6]


class TestJumpSearch:
    def test_jump_size_is_floor_sqrt(self):
        trace = JumpSearchVisualizer().generate_steps()
        assert trace[0].metadata["jumpSize"] == 3
        assert trace.final_step.metadata["position"] == 8

    def test_linear_phase_is_recorded(self):
        trace = JumpSearchVisualizer().generate_steps()
        assert any(s.metadata.get("linearSearch") for s in trace)


class TestInterpolationSearch:
    def test_probes_converge_on_target(self):
        trace = InterpolationSearchVisualizer().generate_steps()
        probes = [s.metadata["interpolatedIndex"] for s in trace if "formula" in s.metadata]
        assert probes == [4, 5, 6, 7, 8]
        assert trace.final_step.metadata["position"] == 8

    def test_flat_range_does_not_divide_by_zero(self):
        trace = InterpolationSearchVisualizer([5, 5, 5, 5], 5).generate_steps()
        assert trace.final_step.metadata["found"] is True
