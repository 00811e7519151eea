"""plan-editor: editor core for hierarchical behaviour plan trees."""

from .editor import PlanEditor
from .errors import (
	MalformedDocument,
	MissingField,
	MissingSchemaKey,
	ParseError,
	PersistenceError,
	PlanEditorError,
	StartupDataMissing,
	ValidationError,
)
from .plans import PlanNode, PlanTreeStore, Schema, StoreEvent

__all__ = [
	"PlanEditor",
	"MalformedDocument",
	"MissingField",
	"MissingSchemaKey",
	"ParseError",
	"PersistenceError",
	"PlanEditorError",
	"StartupDataMissing",
	"ValidationError",
	"PlanNode",
	"PlanTreeStore",
	"Schema",
	"StoreEvent",
]
