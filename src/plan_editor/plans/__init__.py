"""Plans module - plan tree model, schema, validation and storage."""

from .models import PlanNode, Transition
from .schema import EnumSpec, Schema, schema_fingerprint
from .settings import BundledSettings, JsonFileSettings
from .store import PlanTreeStore, StoreEvent
from .validation import lint_plan_tree, validate, validate_schema

__all__ = [
	"PlanNode",
	"Transition",
	"EnumSpec",
	"Schema",
	"schema_fingerprint",
	"BundledSettings",
	"JsonFileSettings",
	"PlanTreeStore",
	"StoreEvent",
	"lint_plan_tree",
	"validate",
	"validate_schema",
]
