"""Tests for the plan tree models."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from plan_editor.plans.models import PlanNode, Transition
from tests.helpers import make_plan, sample_tree


class TestPlanNode:
	"""Tests for PlanNode construction and helpers."""

	def test_new_stub_populates_required_fields(self):
		"""A fresh node has name, behaviour, transitions and plans."""
		plan = PlanNode.new_stub("fresh")
		assert plan.name == "fresh"
		assert plan.behaviour == {}
		assert plan.transitions == []
		assert plan.plans == []
		assert plan.active is True
		assert plan.run_interval == 0

	def test_from_document_builds_children_in_order(self):
		root = PlanNode.from_document(sample_tree())
		assert [p.name for p in root.plans] == ["child", "other"]
		assert [p.name for p in root.plans[0].plans] == ["leaf_a", "leaf_b"]
		assert root.plans[0].run_interval == 5
		assert root.plans[0].plans[1].active is False

	def test_behaviour_value_may_be_null(self):
		plan = PlanNode.from_document(make_plan("p", behaviour={"Patrol": None}))
		assert plan.behaviour == {"Patrol": None}

	def test_negative_run_interval_rejected(self):
		with pytest.raises(PydanticValidationError):
			PlanNode.from_document(make_plan("p", run_interval=-1))

	def test_integer_run_interval_kept_as_int(self):
		plan = PlanNode.from_document(make_plan("p", run_interval=5))
		assert plan.to_document()["run_interval"] == 5
		assert isinstance(plan.to_document()["run_interval"], int)

	def test_extra_keys_survive_export(self):
		"""Unknown keys such as 'data' are preserved."""
		document = make_plan("p", data={"speed": 3})
		plan = PlanNode.from_document(document)
		assert plan.to_document()["data"] == {"speed": 3}

	def test_to_document_round_trip(self):
		root = PlanNode.from_document(sample_tree())
		assert PlanNode.from_document(root.to_document()) == root

	def test_get_returns_first_match(self):
		root = PlanNode.from_document(make_plan("root", plans=[
			make_plan("dup", run_interval=1),
			make_plan("dup", run_interval=2),
		]))
		assert root.get("dup").run_interval == 1
		assert root.get("missing") is None

	def test_insert_replaces_same_name(self):
		root = PlanNode.from_document(sample_tree())
		replacement = PlanNode.new_stub("child")
		root.insert(replacement)
		assert [p.name for p in root.plans] == ["child", "other"]
		assert root.get("child") is replacement

	def test_insert_appends_new_name(self):
		root = PlanNode.from_document(sample_tree())
		root.insert(PlanNode.new_stub("third"))
		assert [p.name for p in root.plans] == ["child", "other", "third"]

	def test_remove(self):
		root = PlanNode.from_document(sample_tree())
		removed = root.remove("other")
		assert removed.name == "other"
		assert [p.name for p in root.plans] == ["child"]
		assert root.remove("other") is None

	def test_walk_is_preorder_with_paths(self):
		root = PlanNode.from_document(sample_tree())
		paths = [path for path, _ in root.walk()]
		assert paths == [
			(),
			("child",),
			("child", "leaf_a"),
			("child", "leaf_b"),
			("other",),
		]

	def test_count(self):
		assert PlanNode.from_document(sample_tree()).count() == 5


class TestTransition:
	"""Tests for the typed transition view."""

	def test_parse_src_dst_payload(self):
		transition = Transition.parse({"src": ["a"], "dst": ["b", "c"], "predicate": {"Not": "True"}})
		assert transition.src == ["a"]
		assert transition.dst == ["b", "c"]
		assert transition.predicate == {"Not": "True"}

	def test_parse_other_shapes_returns_none(self):
		assert Transition.parse("opaque") is None
		assert Transition.parse({"from": "a"}) is None
		assert Transition.parse({"src": "not-a-list", "dst": 3}) is None

	def test_transition_views_skip_opaque_payloads(self):
		plan = PlanNode.from_document(make_plan("p", transitions=[
			"opaque",
			{"src": ["a"], "dst": ["b"], "predicate": "True"},
		]))
		views = plan.transition_views()
		assert len(views) == 1
		assert views[0].dst == ["b"]
