"""
Plan Models - Pydantic schemas for the behaviour plan tree.

A plan tree is a recursive structure: each PlanNode owns its child plans,
a behaviour selection, and an ordered list of transition payloads.
"""

from typing import Any, Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError


class Transition(BaseModel):
	"""Typed view of a transition payload: move from `src` plans to `dst` plans."""
	src: list[str] = Field(default_factory=list, description="Plans exited by the transition")
	dst: list[str] = Field(default_factory=list, description="Plans entered by the transition")
	predicate: Any = Field(default=None, description="Predicate payload, not interpreted")

	@classmethod
	def parse(cls, payload: Any) -> Optional["Transition"]:
		"""Return a Transition for payloads shaped like one, else None."""
		if not isinstance(payload, dict) or "src" not in payload or "dst" not in payload:
			return None
		try:
			return cls.model_validate(payload)
		except PydanticValidationError:
			return None


class PlanNode(BaseModel):
	"""
	One node of the plan tree.

	Unknown keys found in imported documents are kept so that an
	import followed by an export does not lose data.
	"""
	model_config = ConfigDict(extra="allow")

	name: str = Field(description="Identifier, unique among siblings")
	active: bool = Field(default=True, description="Whether the plan is enabled")
	run_interval: int | float = Field(default=0, description="Ticks between runs")
	behaviour: dict[str, Any] = Field(default_factory=dict, description="Behaviour name -> parameters")
	transitions: list[Any] = Field(default_factory=list, description="Opaque transition payloads")
	plans: list["PlanNode"] = Field(default_factory=list, description="Child plans in order")

	@field_validator("run_interval")
	@classmethod
	def _non_negative(cls, value: int | float) -> int | float:
		if value < 0:
			raise ValueError("run_interval must be non-negative")
		return value

	@classmethod
	def new_stub(cls, name: str = "new_plan") -> "PlanNode":
		"""Create a fresh plan with every required field populated."""
		return cls(name=name, behaviour={}, transitions=[], plans=[])

	@classmethod
	def from_document(cls, document: dict) -> "PlanNode":
		"""Build a tree from an already-validated JSON document."""
		return cls.model_validate(document)

	def to_document(self) -> dict:
		"""Serialize to a plain JSON-compatible dict."""
		return self.model_dump(mode="json")

	def get(self, name: str) -> Optional["PlanNode"]:
		"""Get the first child plan with the given name."""
		for plan in self.plans:
			if plan.name == name:
				return plan
		return None

	def insert(self, plan: "PlanNode") -> "PlanNode":
		"""Insert a child plan, replacing an existing child with the same name."""
		for i, existing in enumerate(self.plans):
			if existing.name == plan.name:
				self.plans[i] = plan
				return plan
		self.plans.append(plan)
		return plan

	def remove(self, name: str) -> Optional["PlanNode"]:
		"""Remove a child plan by name and return it."""
		for i, plan in enumerate(self.plans):
			if plan.name == name:
				return self.plans.pop(i)
		return None

	def walk(self, path: tuple[str, ...] = ()) -> Iterator[tuple[tuple[str, ...], "PlanNode"]]:
		"""Yield (label path, node) pairs in pre-order. The root's path is empty."""
		yield path, self
		for plan in self.plans:
			yield from plan.walk(path + (plan.name,))

	def transition_views(self) -> list[Transition]:
		"""Transitions of this plan that have the src/dst shape."""
		views = []
		for payload in self.transitions:
			transition = Transition.parse(payload)
			if transition is not None:
				views.append(transition)
		return views

	def count(self) -> int:
		"""Number of plans in this subtree, including this one."""
		return 1 + sum(plan.count() for plan in self.plans)
