"""Schema model: enumerations of valid behaviour and predicate names."""

import hashlib
import json
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

BEHAVIOUR_ENUM = "BehaviourEnum"
PREDICATE_ENUM = "PredicateEnum"
REQUIRED_SCHEMA_KEYS = (BEHAVIOUR_ENUM, PREDICATE_ENUM)


class EnumSpec(BaseModel):
	"""An enumeration: index -> alias names for that enumerated value."""
	model_config = ConfigDict(extra="allow", populate_by_name=True)

	enum: dict[str, list[str]] = Field(default_factory=dict, alias="ENUM")

	@field_validator("enum", mode="before")
	@classmethod
	def _normalize(cls, value: Any) -> Any:
		if not isinstance(value, dict):
			return value
		normalized = {}
		for index, aliases in value.items():
			if isinstance(aliases, str):
				aliases = [aliases]
			normalized[str(index)] = aliases
		return normalized

	def index_of(self, name: str) -> Optional[str]:
		"""Get the first index whose alias set contains `name`."""
		for index, aliases in self.enum.items():
			if name in aliases:
				return index
		return None

	def names(self) -> list[str]:
		"""All alias names, flattened in mapping order."""
		return [alias for aliases in self.enum.values() for alias in aliases]


class Schema(BaseModel):
	"""The schema document. Extra top-level keys are preserved."""
	model_config = ConfigDict(extra="allow", populate_by_name=True)

	behaviour_enum: EnumSpec = Field(alias=BEHAVIOUR_ENUM)
	predicate_enum: EnumSpec = Field(alias=PREDICATE_ENUM)

	@classmethod
	def from_document(cls, document: dict) -> "Schema":
		return cls.model_validate(document)

	def to_document(self) -> dict:
		return self.model_dump(mode="json", by_alias=True)


def schema_fingerprint(schema: Schema) -> str:
	"""Stable hash of the schema's structural content."""
	canonical = json.dumps(schema.to_document(), sort_keys=True, separators=(",", ":"))
	return hashlib.sha256(canonical.encode()).hexdigest()
