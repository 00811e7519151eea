"""Tree projection of the plan tree and path resolution back to plans."""

import logging
from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence

from ..plans.models import PlanNode
from ..plans.store import PlanTreeStore, StoreEvent

logger = logging.getLogger(__name__)


@dataclass
class DisplayNode:
	"""One row of the display tree."""
	label: str
	plan: PlanNode
	path: tuple[str, ...] = ()
	children: list["DisplayNode"] = field(default_factory=list)

	def iter_nodes(self) -> Iterator["DisplayNode"]:
		"""Yield this node and its descendants in pre-order."""
		yield self
		for child in self.children:
			yield from child.iter_nodes()


def project(root: PlanNode, path: tuple[str, ...] = ()) -> DisplayNode:
	"""Build a display tree with one node per plan, children in `plans` order."""
	node = DisplayNode(label=root.name, plan=root, path=path)
	for plan in root.plans:
		node.children.append(project(plan, path + (plan.name,)))
	return node


def resolve(root: PlanNode, path: Sequence[str]) -> Optional[PlanNode]:
	"""
	Walk a label path from the root.

	The path excludes the root's own label. At each step the first child
	with a matching name wins, so sibling names must be unique for the
	result to be unambiguous.
	"""
	node = root
	for label in path:
		node = node.get(label)
		if node is None:
			return None
	return node


class TreeView:
	"""Display tree kept in sync with the store, plus the current selection."""

	def __init__(self, store: PlanTreeStore):
		self.store = store
		self.display = project(store.get_plan_tree())
		self.selected_path: Optional[tuple[str, ...]] = None
		store.subscribe(StoreEvent.PLAN_TREE_CHANGED, self.on_plan_tree_changed)

	def on_plan_tree_changed(self, root: PlanNode) -> None:
		self.display = project(root)
		if self.selected_path is not None and resolve(root, self.selected_path) is None:
			logger.debug(f"Selection {'/'.join(self.selected_path)} no longer exists")
			self.selected_path = None

	def select(self, path: Sequence[str]) -> Optional[PlanNode]:
		"""Select a plan by label path. Returns None (and keeps the old selection) on a miss."""
		plan = resolve(self.store.get_plan_tree(), path)
		if plan is not None:
			self.selected_path = tuple(path)
		return plan

	@property
	def selected(self) -> Optional[PlanNode]:
		if self.selected_path is None:
			return None
		return resolve(self.store.get_plan_tree(), self.selected_path)

	def paths(self) -> list[tuple[str, ...]]:
		"""Label paths of every displayed plan, in display order."""
		return [node.path for node in self.display.iter_nodes()]
