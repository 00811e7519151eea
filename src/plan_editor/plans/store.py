"""
Plan Tree Store - single source of truth for the plan tree and schema.

Features:
- Load at startup from the user data directory, falling back to bundled defaults
- Validation gate on every replace (all-or-nothing)
- Synchronous persistence on every successful replace
- Change notifications to subscribed views
"""

import logging
import threading
from enum import Enum
from typing import Any, Callable, Optional

from pydantic import ValidationError as PydanticValidationError

from ..errors import MalformedDocument, PersistenceError, StartupDataMissing, ValidationError
from .models import PlanNode
from .schema import Schema, schema_fingerprint
from .settings import PLAN_TREE_KEY, SCHEMA_KEY, BundledSettings, JsonFileSettings, SettingsSource
from .validation import NESTED_TOO_DEEPLY, lint_plan_tree, validate, validate_schema

logger = logging.getLogger(__name__)


class StoreEvent(str, Enum):
	"""Notifications emitted by the store."""
	PLAN_TREE_CHANGED = "plan_tree_changed"
	SCHEMA_CHANGED = "schema_changed"


Observer = Callable[[Any], None]


class PlanTreeStore:
	"""
	Holds the current plan tree and schema.

	Usage:
		store = PlanTreeStore(JsonFileSettings(config.data_dir))
		store.init()

		store.subscribe(StoreEvent.PLAN_TREE_CHANGED, tree_view.on_plan_tree_changed)

		# Raises ValidationError and leaves the tree untouched on failure
		store.replace_plan_tree(json.loads(text))
	"""

	def __init__(self, user_settings: JsonFileSettings, defaults: Optional[SettingsSource] = None):
		self.user_settings = user_settings
		self.defaults = defaults if defaults is not None else BundledSettings()
		self._lock = threading.RLock()
		self._observers: dict[StoreEvent, list[Observer]] = {event: [] for event in StoreEvent}
		self._plan_tree: Optional[PlanNode] = None
		self._schema: Optional[Schema] = None
		self._fingerprint = ""

	def init(self) -> None:
		"""
		Load the plan tree and schema.

		Raises:
			StartupDataMissing: If no source yields a usable document
		"""
		with self._lock:
			self._schema = self._load_startup(SCHEMA_KEY, validate_schema, Schema.from_document)
			self._fingerprint = schema_fingerprint(self._schema)
			self._plan_tree = self._load_startup(PLAN_TREE_KEY, validate, PlanNode.from_document)

		logger.info(
			f"Plan store initialized: {self._plan_tree.count()} plans, "
			f"schema {self._fingerprint[:12]}"
		)
		self._log_lint()

	def _load_startup(self, key: str, check: Callable[[Any], None], build: Callable[[dict], Any]) -> Any:
		"""Try the user location first, then the bundled defaults."""
		for label, source in (("user", self.user_settings), ("bundled", self.defaults)):
			document = source.load(key)
			if document is None:
				continue
			try:
				check(document)
				return build(document)
			except (ValidationError, PydanticValidationError) as e:
				logger.warning(f"Skipping {label} {key}: {e}")
		raise StartupDataMissing(key)

	def _ensure_loaded(self) -> None:
		if self._plan_tree is None or self._schema is None:
			self.init()

	# -- reads --

	def get_plan_tree(self) -> PlanNode:
		"""Get the current root plan."""
		self._ensure_loaded()
		return self._plan_tree

	def get_schema(self) -> Schema:
		"""Get the current schema."""
		self._ensure_loaded()
		return self._schema

	@property
	def schema_fingerprint(self) -> str:
		self._ensure_loaded()
		return self._fingerprint

	# -- writes --

	def replace_plan_tree(self, candidate: Any) -> PlanNode:
		"""
		Replace the whole plan tree.

		Args:
			candidate: Parsed JSON document for the new root plan

		Returns:
			The new root PlanNode

		Raises:
			ValidationError: If the candidate fails validation (tree unchanged)
			PersistenceError: If the document cannot be saved (tree unchanged)
		"""
		self._ensure_loaded()
		validate(candidate)
		plan_tree = _build(PlanNode.from_document, candidate)

		# the validated document is saved as given, so defaults are not written back
		with self._lock:
			self._persist(PLAN_TREE_KEY, candidate)
			self._plan_tree = plan_tree

		logger.info(f"Plan tree replaced: root '{plan_tree.name}', {plan_tree.count()} plans")
		self._log_lint()
		self._notify(StoreEvent.PLAN_TREE_CHANGED, plan_tree)
		return plan_tree

	def replace_schema(self, candidate: Any) -> Schema:
		"""
		Replace the schema.

		Raises:
			MissingSchemaKey: If BehaviourEnum or PredicateEnum is absent (schema unchanged)
			MalformedDocument: If the document has the wrong shape (schema unchanged)
			PersistenceError: If the document cannot be saved (schema unchanged)
		"""
		self._ensure_loaded()
		validate_schema(candidate)
		schema = _build(Schema.from_document, candidate)

		with self._lock:
			self._persist(SCHEMA_KEY, schema.to_document())
			self._schema = schema
			self._fingerprint = schema_fingerprint(schema)

		logger.info(f"Schema replaced: fingerprint {self._fingerprint[:12]}")
		self._log_lint()
		self._notify(StoreEvent.SCHEMA_CHANGED, schema)
		return schema

	def _persist(self, key: str, document: dict) -> None:
		try:
			self.user_settings.save(key, document)
		except OSError as e:
			logger.warning(f"Failed to persist {key}: {e}")
			raise PersistenceError(key, str(e)) from e

	def _log_lint(self) -> None:
		for warning in lint_plan_tree(self._plan_tree, self._schema):
			logger.warning(warning)

	# -- observers --

	def subscribe(self, event: StoreEvent, callback: Observer) -> None:
		"""Register a callback that receives the new snapshot after each change."""
		self._observers[event].append(callback)

	def unsubscribe(self, event: StoreEvent, callback: Observer) -> None:
		if callback in self._observers[event]:
			self._observers[event].remove(callback)

	def _notify(self, event: StoreEvent, snapshot: Any) -> None:
		for callback in list(self._observers[event]):
			callback(snapshot)


def _build(factory: Callable[[dict], Any], document: dict) -> Any:
	"""Run a model factory, reporting type errors as MalformedDocument."""
	try:
		return factory(document)
	except PydanticValidationError as e:
		error = e.errors()[0]
		if error.get("type") == "recursion_loop":
			raise MalformedDocument(NESTED_TOO_DEEPLY) from e
		message, node_name = _describe(error, document)
		raise MalformedDocument(message, node_name) from e


def _describe(error: dict, document: dict) -> tuple[str, str]:
	"""Turn a pydantic error into a message plus the name of the plan it occurred in."""
	loc = error.get("loc", ())
	node = document
	node_name = document.get("name", "") if isinstance(document, dict) else ""
	for part in loc:
		try:
			node = node[part]
		except (KeyError, IndexError, TypeError):
			break
		if isinstance(node, dict) and isinstance(node.get("name"), str):
			node_name = node["name"]
	names = [part for part in loc if isinstance(part, str)]
	field = names[-1] if names else "document"
	return f"Invalid '{field}': {error.get('msg', 'invalid value')}", str(node_name)
