"""Shared test fixtures and helpers for plan-editor tests."""

import copy
from pathlib import Path
from typing import Any, Iterator, Optional

from plan_editor.plans.settings import PLAN_TREE_KEY, SCHEMA_KEY, JsonFileSettings
from plan_editor.plans.store import PlanTreeStore

SAMPLE_SCHEMA = {
	"BehaviourEnum": {"ENUM": {"0": ["Idle"], "1": ["Patrol", "Roam"], "2": ["DefaultBehaviour"]}},
	"PredicateEnum": {"ENUM": {"0": ["Always"]}},
}


def make_plan(
	name: str,
	plans: Optional[list[dict]] = None,
	behaviour: Optional[dict] = None,
	transitions: Optional[list] = None,
	**extra: Any,
) -> dict:
	"""Build a plan document with every required field present."""
	document = {
		"name": name,
		"active": True,
		"run_interval": 0,
		"behaviour": behaviour if behaviour is not None else {"Idle": None},
		"transitions": transitions if transitions is not None else [],
		"plans": plans if plans is not None else [],
	}
	document.update(extra)
	return document


def sample_tree() -> dict:
	"""A three-level tree with unique sibling names."""
	return make_plan(
		"root",
		behaviour={"DefaultBehaviour": None},
		plans=[
			make_plan("child", behaviour={"Patrol": None}, run_interval=5, plans=[
				make_plan("leaf_a"),
				make_plan("leaf_b", active=False),
			]),
			make_plan("other", transitions=[{"src": ["x"], "dst": ["y"], "predicate": "Always"}]),
		],
	)


def iter_documents(document: dict, path: tuple = ()) -> Iterator[tuple[tuple, dict]]:
	"""Yield (index path, node document) for every node in pre-order."""
	yield path, document
	for i, child in enumerate(document["plans"]):
		yield from iter_documents(child, path + (i,))


def without_field(document: dict, index_path: tuple, field: str) -> dict:
	"""Deep copy of `document` with `field` removed from the node at `index_path`."""
	result = copy.deepcopy(document)
	node = result
	for i in index_path:
		node = node["plans"][i]
	del node[field]
	return result


class MemorySettings:
	"""Dict-backed settings source."""

	def __init__(self, documents: Optional[dict] = None):
		self.documents = dict(documents or {})
		self.saved: list[str] = []

	def load(self, key: str) -> Optional[Any]:
		return copy.deepcopy(self.documents.get(key))

	def save(self, key: str, value: Any) -> None:
		self.documents[key] = copy.deepcopy(value)
		self.saved.append(key)


def make_store(
	tmp_path: Path,
	plan_tree: Optional[dict] = None,
	schema: Optional[dict] = None,
) -> PlanTreeStore:
	"""Create an initialized store whose user data lives under tmp_path."""
	settings = JsonFileSettings(tmp_path / "data")
	settings.save(PLAN_TREE_KEY, plan_tree if plan_tree is not None else sample_tree())
	settings.save(SCHEMA_KEY, schema if schema is not None else SAMPLE_SCHEMA)
	store = PlanTreeStore(settings, defaults=MemorySettings())
	store.init()
	return store
