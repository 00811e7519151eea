"""
Validation of imported plan tree and schema documents.

The plan check is depth-first and pre-order, and stops at the first
failure. Whole trees and single plan imports go through the same entry
point.
"""

from collections import Counter
from typing import Any

from ..errors import MalformedDocument, MissingField, MissingSchemaKey
from .models import PlanNode
from .schema import REQUIRED_SCHEMA_KEYS, Schema

REQUIRED_PLAN_FIELDS = ("name", "behaviour", "transitions", "plans")
NESTED_TOO_DEEPLY = "Plan tree nested too deeply"


def validate(candidate: Any) -> None:
	"""
	Check a parsed plan document.

	Raises:
		MalformedDocument: If a node is not an object or its plans are not a list
		MissingField: On the first absent (or null) required field
	"""
	try:
		_validate_node(candidate, parent_name="")
	except RecursionError as e:
		raise MalformedDocument(NESTED_TOO_DEEPLY) from e


def _validate_node(node: Any, parent_name: str) -> None:
	if not isinstance(node, dict):
		if parent_name:
			raise MalformedDocument(f"Child plan of '{parent_name}' must be a JSON object")
		raise MalformedDocument("Plan must be a JSON object")

	# node name is only known once the name field itself is confirmed
	node_name = ""
	for field in REQUIRED_PLAN_FIELDS:
		if node.get(field) is None:
			raise MissingField(field, node_name)
		if field == "name":
			node_name = str(node["name"])

	plans = node["plans"]
	if not isinstance(plans, list):
		raise MalformedDocument("'plans' must be a list", node_name)

	for child in plans:
		_validate_node(child, node_name)


def validate_schema(candidate: Any) -> None:
	"""
	Check a parsed schema document.

	Raises:
		MalformedDocument: If the document is not an object
		MissingSchemaKey: If BehaviourEnum or PredicateEnum is absent
	"""
	if not isinstance(candidate, dict):
		raise MalformedDocument("Schema must be a JSON object")
	for key in REQUIRED_SCHEMA_KEYS:
		if key not in candidate:
			raise MissingSchemaKey(key)


def lint_plan_tree(root: PlanNode, schema: Schema) -> list[str]:
	"""
	Report non-blocking problems in a plan tree.

	Returns:
		Human-readable warnings for unknown behaviour names and
		duplicate sibling names, in pre-order.
	"""
	known = set(schema.behaviour_enum.names())
	warnings = []
	for path, node in root.walk():
		where = "/".join(path) or node.name
		for behaviour in node.behaviour:
			if behaviour not in known:
				warnings.append(f"{where}: unknown behaviour '{behaviour}'")
		counts = Counter(plan.name for plan in node.plans)
		for name, count in counts.items():
			if count > 1:
				warnings.append(f"{where}: {count} child plans named '{name}'")
	return warnings
