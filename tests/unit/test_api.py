"""Tests for the composable API functions in algotrace.api."""

import json

import pytest

from algotrace.api import (
    describe_algorithm,
    dump_trace,
    generate_trace,
    trace_summary,
    trace_to_json,
)


class TestGenerateTrace:
    def test_constructor_params(self):
        trace = generate_trace("bubble-sort", {"array": [3, 1, 2]})
        assert trace.algorithm_id == "bubble-sort"
        assert trace.final_step.data.array == (1, 2, 3)

    def test_generate_params(self):
        trace = generate_trace("binary-search-tree", operation="insert", value=45)
        assert trace.final_step.metadata["inserted"] is True

    def test_defaults_when_no_params(self):
        trace = generate_trace("linear-search")
        assert trace.final_step.metadata["found"] is True

    def test_unknown_algorithm(self):
        with pytest.raises(ValueError, match="Unsupported algorithm"):
            generate_trace("bogo-sort")

    def test_construction_errors_propagate(self):
        with pytest.raises(TypeError):
            generate_trace("binary-search", {"array": [1, 2], "target": "x"})


class TestDescribeAlgorithm:
    def test_descriptor_fields(self):
        info = describe_algorithm("n-queens")
        assert info.name == "N-Queens Problem"
        assert info.category == "Backtracking"


class TestDumpTrace:
    def test_header_and_one_line_per_step(self):
        trace = generate_trace("bubble-sort", {"array": [2, 1]})
        lines = dump_trace(trace).splitlines()
        assert lines[0] == f"# bubble-sort ({len(trace)} steps)"
        assert len(lines) == len(trace) + 1
        assert "completed=[0, 1]" in lines[-1]


class TestTraceToJson:
    def test_round_trips_through_json(self):
        trace = generate_trace("trie-search")
        decoded = json.loads(trace_to_json(trace))
        assert decoded["algorithm_id"] == "trie-search"
        assert len(decoded["steps"]) == len(trace)
        final = decoded["steps"][-1]
        assert final["data"]["kind"] == "trie"
        assert final["data"]["nodes"][0] == {"id": "root", "label": "", "is_end_of_word": False}
        assert final["completed"] == ["root-a", "root-a-p", "root-a-p-p"]

    def test_compact_output(self):
        trace = generate_trace("linear-search", {"array": [1], "target": 1})
        assert "\n" not in trace_to_json(trace, indent=None)


class TestTraceSummary:
    def test_successful_backtracking_run(self):
        summary = trace_summary(generate_trace("subset-sum"))
        assert summary["algorithm_id"] == "subset-sum"
        assert summary["not_found"] is False
        assert summary["completed"] == [0, 2, 5]
        assert summary["backtracks"] == 3
        assert summary["final_metadata"]["found"] is True

    def test_unsuccessful_search(self):
        trace = generate_trace("linear-search", {"array": [1, 2], "target": 9})
        summary = trace_summary(trace)
        assert summary["not_found"] is True
        assert summary["completed"] == []
        assert summary["backtracks"] is None
        assert summary["steps"] == len(trace)

    def test_counts_steps_with_each_id_set(self):
        trace = generate_trace("bubble-sort", {"array": [2, 1]})
        summary = trace_summary(trace)
        assert summary["steps_with"]["mutations"] == 1
        assert summary["steps_with"]["completed"] >= 1
