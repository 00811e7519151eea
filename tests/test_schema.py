"""Tests for the schema model and fingerprint."""

from plan_editor.plans.schema import Schema, schema_fingerprint
from tests.helpers import SAMPLE_SCHEMA


def test_schema_reads_enums():
	schema = Schema.from_document(SAMPLE_SCHEMA)
	assert schema.behaviour_enum.enum == {"0": ["Idle"], "1": ["Patrol", "Roam"], "2": ["DefaultBehaviour"]}
	assert schema.predicate_enum.enum == {"0": ["Always"]}


def test_integer_indices_and_single_alias_normalized():
	schema = Schema.from_document({
		"BehaviourEnum": {"ENUM": {0: "Idle", 1: ["Patrol"]}},
		"PredicateEnum": {"ENUM": {}},
	})
	assert schema.behaviour_enum.enum == {"0": ["Idle"], "1": ["Patrol"]}


def test_missing_enum_defaults_to_empty():
	schema = Schema.from_document({"BehaviourEnum": {}, "PredicateEnum": {}})
	assert schema.behaviour_enum.enum == {}


def test_to_document_preserves_extras():
	document = dict(SAMPLE_SCHEMA, Version={"major": 1})
	schema = Schema.from_document(document)
	assert schema.to_document() == document


def test_index_of_first_match_wins():
	schema = Schema.from_document({
		"BehaviourEnum": {"ENUM": {"0": ["Idle", "Wait"], "1": ["Wait"]}},
		"PredicateEnum": {"ENUM": {}},
	})
	assert schema.behaviour_enum.index_of("Wait") == "0"
	assert schema.behaviour_enum.index_of("Fly") is None


def test_names_flattened_in_order():
	schema = Schema.from_document(SAMPLE_SCHEMA)
	assert schema.behaviour_enum.names() == ["Idle", "Patrol", "Roam", "DefaultBehaviour"]


def test_fingerprint_stable_and_key_order_independent():
	reordered = {
		"PredicateEnum": SAMPLE_SCHEMA["PredicateEnum"],
		"BehaviourEnum": SAMPLE_SCHEMA["BehaviourEnum"],
	}
	a = schema_fingerprint(Schema.from_document(SAMPLE_SCHEMA))
	b = schema_fingerprint(Schema.from_document(reordered))
	assert a == b
	assert len(a) == 64


def test_fingerprint_changes_with_content():
	changed = {
		"BehaviourEnum": {"ENUM": {"0": ["Idle"]}},
		"PredicateEnum": SAMPLE_SCHEMA["PredicateEnum"],
	}
	assert schema_fingerprint(Schema.from_document(SAMPLE_SCHEMA)) != schema_fingerprint(Schema.from_document(changed))
