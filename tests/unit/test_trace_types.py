"""Tests for Step / Trace structure, immutability and serialization."""

import dataclasses
import json
from types import MappingProxyType

import pytest

from algotrace.step_data import SearchStepData, SortStepData, step_data_to_dict
from algotrace.trace_types import Step, Trace, TraceInvariantError


def _step(i, **kw):
    return Step(id=i, description=f"step {i}", data=SortStepData(array=(i,)), **kw)


class TestTraceInvariants:
    def test_empty_trace_is_rejected(self):
        with pytest.raises(TraceInvariantError, match="no steps"):
            Trace(algorithm_id="demo", steps=())

    def test_ids_must_start_at_zero(self):
        with pytest.raises(TraceInvariantError, match="has id 1"):
            Trace(algorithm_id="demo", steps=(_step(1),))

    def test_ids_must_increase_by_one(self):
        with pytest.raises(TraceInvariantError):
            Trace(algorithm_id="demo", steps=(_step(0), _step(2)))

    def test_invariant_error_is_a_value_error(self):
        assert issubclass(TraceInvariantError, ValueError)

    def test_sequence_protocol(self):
        trace = Trace(algorithm_id="demo", steps=(_step(0), _step(1), _step(2)))
        assert len(trace) == 3
        assert trace[1].id == 1
        assert [s.id for s in trace] == [0, 1, 2]
        assert trace.final_step.id == 2


class TestStepImmutability:
    def test_step_fields_cannot_be_reassigned(self):
        step = _step(0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            step.description = "changed"

    def test_payload_cannot_be_reassigned(self):
        step = _step(0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            step.data.array = (9,)

    def test_content_ignores_id(self):
        a = Step(id=0, description="x", data=SortStepData(array=(1, 2)))
        b = Step(id=5, description="x", data=SortStepData(array=(1, 2)))
        assert a.content() == b.content()


class TestSerialization:
    def test_to_dict_sorts_id_sets(self):
        step = _step(0, highlights=frozenset({3, 1, 2}), completed=frozenset({0}))
        d = step.to_dict()
        assert d["highlights"] == [1, 2, 3]
        assert d["completed"] == [0]
        assert d["comparisons"] == []

    def test_to_dict_flattens_frozen_metadata(self):
        step = _step(0, metadata=MappingProxyType({"range": (0, 4), "nested": {"a": (1,)}}))
        d = step.to_dict()
        assert d["metadata"] == {"range": [0, 4], "nested": {"a": [1]}}

    def test_step_data_carries_kind_tag(self):
        data = SearchStepData(array=(1, 2, 3), target=2, position=1)
        d = step_data_to_dict(data)
        assert d["kind"] == "search"
        assert d["array"] == (1, 2, 3)
        assert d["position"] == 1

    def test_trace_to_dict_is_json_serializable(self):
        trace = Trace(algorithm_id="demo", steps=(_step(0), _step(1)))
        decoded = json.loads(json.dumps(trace.to_dict()))
        assert decoded["algorithm_id"] == "demo"
        assert [s["id"] for s in decoded["steps"]] == [0, 1]
        assert decoded["steps"][1]["data"] == {
            "kind": "sort",
            "array": [1],
            "left_run": [],
            "right_run": [],
        }

    def test_mixed_id_types_sort_deterministically(self):
        step = _step(0, completed=frozenset({"root-a", 3, "root"}))
        assert step.to_dict()["completed"] == [3, "root", "root-a"]


class TestInputCoercion:
    def test_steps_list_is_stored_as_tuple(self):
        steps = [_step(0)]
        trace = Trace(algorithm_id="demo", steps=steps)
        steps.append(_step(1))
        assert isinstance(trace.steps, tuple)
        assert len(trace) == 1
        with pytest.raises(AttributeError):
            trace.steps.append(_step(1))

    def test_id_sets_are_frozen(self):
        highlights = {1, 2}
        step = _step(0, highlights=highlights, completed=[0])
        highlights.add(3)
        assert step.highlights == frozenset({1, 2})
        assert isinstance(step.completed, frozenset)

    def test_plain_metadata_becomes_read_only(self):
        source = {"found": True}
        step = _step(0, metadata=source)
        source["found"] = False
        assert step.metadata["found"] is True
        with pytest.raises(TypeError):
            step.metadata["found"] = False
