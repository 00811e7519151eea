"""Behaviour selector: the options offered by the schema's BehaviourEnum."""

import logging
from dataclasses import dataclass
from typing import Optional

from ..plans.schema import EnumSpec, Schema, schema_fingerprint
from ..plans.store import PlanTreeStore, StoreEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectorOption:
	"""One selectable behaviour name."""
	index: str
	label: str
	aliases: tuple[str, ...]


class BehaviourSelector:
	"""
	Flattened list of behaviour names with a current selection.

	Every alias of every enum index is its own option, in mapping order.
	"""

	def __init__(self, schema: Optional[Schema] = None):
		self.options: list[SelectorOption] = []
		self.selected_position: Optional[int] = None
		self.fingerprint = ""
		self.behaviours = EnumSpec()
		if schema is not None:
			self.refresh(schema)

	@classmethod
	def bound_to(cls, store: PlanTreeStore) -> "BehaviourSelector":
		"""Create a selector that refreshes on every schema change in the store."""
		selector = cls(store.get_schema())
		store.subscribe(StoreEvent.SCHEMA_CHANGED, selector.refresh)
		return selector

	@property
	def selected(self) -> Optional[SelectorOption]:
		if self.selected_position is None:
			return None
		return self.options[self.selected_position]

	def labels(self) -> list[str]:
		return [option.label for option in self.options]

	def refresh(self, schema: Schema) -> bool:
		"""
		Rebuild the options if the schema changed since the last refresh.

		Returns:
			True if the options were rebuilt
		"""
		fingerprint = schema_fingerprint(schema)
		if fingerprint == self.fingerprint:
			return False

		previous = self.selected.label if self.selected is not None else None
		options = []
		for index, aliases in schema.behaviour_enum.enum.items():
			for alias in aliases:
				options.append(SelectorOption(index=index, label=alias, aliases=tuple(aliases)))

		self.options = options
		self.behaviours = schema.behaviour_enum
		self.fingerprint = fingerprint
		self.selected_position = 0 if options else None
		if previous is not None:
			for i, option in enumerate(options):
				if option.label == previous:
					self.selected_position = i
					break
		logger.debug(f"Behaviour selector rebuilt with {len(options)} options")
		return True

	def select_by_name(self, name: str) -> bool:
		"""
		Select the option for a stored behaviour name.

		The first enum index whose aliases contain `name` wins.

		Returns:
			False (selection unchanged) if no index lists `name`
		"""
		index = self.behaviours.index_of(name)
		if index is None:
			return False

		for i, option in enumerate(self.options):
			if option.index == index and option.label == name:
				self.selected_position = i
				return True
		return False
