"""Error types raised by the plan editor core."""


class PlanEditorError(Exception):
	"""Base class for all plan editor errors."""
	pass


class ParseError(PlanEditorError):
	"""Raised when imported text is not valid JSON."""

	def __init__(self, message: str, line: int = 0):
		self.message = message
		self.line = line
		super().__init__(f"Invalid JSON at line {line}: {message}" if line else f"Invalid JSON: {message}")


class ValidationError(PlanEditorError):
	"""Raised when a parsed document does not satisfy the plan tree contract."""

	def __init__(self, message: str, node_name: str = ""):
		self.message = message
		self.node_name = node_name
		super().__init__(f"{message} (in plan '{node_name}')" if node_name else message)


class MalformedDocument(ValidationError):
	"""The document (or a nested plan) is not a JSON object of the expected shape."""
	pass


class MissingField(ValidationError):
	"""A required plan field is absent or null."""

	def __init__(self, field: str, node_name: str = ""):
		self.field = field
		super().__init__(f"Missing required field: {field}", node_name)


class MissingSchemaKey(ValidationError):
	"""A schema import lacks BehaviourEnum or PredicateEnum."""

	def __init__(self, key: str):
		self.key = key
		super().__init__(f"Missing required schema key: {key}")


class StartupDataMissing(PlanEditorError):
	"""Neither user data nor bundled defaults exist for a document."""

	def __init__(self, key: str):
		self.key = key
		super().__init__(f"No user or bundled data found for '{key}'")


class PersistenceError(PlanEditorError):
	"""Writing a document to the user-writable location failed."""

	def __init__(self, key: str, reason: str):
		self.key = key
		self.reason = reason
		super().__init__(f"Failed to save '{key}': {reason}")
