"""
Graph projection of a single plan, one editing tab per opened plan.

A tab shows the plan's child plans as nodes and its transitions as
edges. Edits made in a tab (scratch nodes, new connections) are kept
in the tab only and never written back to the store.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from ..plans.models import PlanNode
from ..plans.store import PlanTreeStore, StoreEvent

logger = logging.getLogger(__name__)

GRID_SPACING = 160.0
GRID_COLUMNS = 4


@dataclass
class GraphNode:
	"""A node on the canvas."""
	id: int
	label: str
	position: tuple[float, float]
	plan: Optional[PlanNode] = None
	scratch: bool = False


@dataclass(frozen=True)
class GraphEdge:
	"""A connection between two node ports."""
	from_node: int
	from_port: int
	to_node: int
	to_port: int


class GraphTab:
	"""Editing surface for one plan."""

	def __init__(self, plan: PlanNode, steps: Optional[Sequence[tuple[str, int]]] = None):
		self.plan = plan
		self.steps = tuple(steps) if steps is not None else None
		self.nodes: dict[int, GraphNode] = {}
		self.edges: list[GraphEdge] = []
		self._next_id = 0
		self._build()

	@property
	def title(self) -> str:
		return self.plan.name

	@property
	def path(self) -> Optional[tuple[str, ...]]:
		"""Label path of the plan, or None for a plan outside the stored tree."""
		if self.steps is None:
			return None
		return tuple(name for name, _ in self.steps)

	def _build(self) -> None:
		by_name: dict[str, int] = {}
		for plan in self.plan.plans:
			node = self._add(plan.name, self._grid_position(len(self.nodes)), plan=plan)
			by_name.setdefault(plan.name, node.id)

		for transition in self.plan.transition_views():
			# transitions may name plans that do not exist yet
			for name in transition.src + transition.dst:
				if name not in by_name:
					by_name[name] = self._add(name, self._grid_position(len(self.nodes))).id
			for src in transition.src:
				for dst in transition.dst:
					self.edges.append(GraphEdge(by_name[src], 0, by_name[dst], 0))

	def _grid_position(self, i: int) -> tuple[float, float]:
		return (float(i % GRID_COLUMNS) * GRID_SPACING, float(i // GRID_COLUMNS) * GRID_SPACING)

	def _add(self, label: str, position: tuple[float, float], plan: Optional[PlanNode] = None,
			scratch: bool = False) -> GraphNode:
		node = GraphNode(id=self._next_id, label=label, position=position, plan=plan, scratch=scratch)
		self.nodes[node.id] = node
		self._next_id += 1
		return node

	def add_node_at(self, position: tuple[float, float]) -> GraphNode:
		"""Add a scratch node bound to a fresh plan. The store is not touched."""
		stub = PlanNode.new_stub()
		return self._add(stub.name, (float(position[0]), float(position[1])), plan=stub, scratch=True)

	def connect(self, from_node: int, from_port: int, to_node: int, to_port: int) -> GraphEdge:
		"""Connect two ports. Every request is accepted."""
		edge = GraphEdge(from_node, from_port, to_node, to_port)
		self.edges.append(edge)
		return edge

	def rebind(self, plan: PlanNode) -> None:
		"""Point the tab at a new snapshot of its plan and rebuild the graph."""
		self.plan = plan
		self.nodes = {}
		self.edges = []
		self._next_id = 0
		self._build()

	def edge_labels(self) -> list[tuple[str, str]]:
		"""Edges as (from label, to label) pairs."""
		return [(self.nodes[e.from_node].label, self.nodes[e.to_node].label)
				for e in self.edges if e.from_node in self.nodes and e.to_node in self.nodes]


@dataclass
class PlanDetails:
	"""Scalar fields of the currently selected plan."""
	name: str = ""
	behaviour: dict[str, Any] = field(default_factory=dict)
	run_interval: int | float = 0
	active: bool = False
	empty: bool = True

	def update(self, plan: PlanNode) -> None:
		self.name = plan.name
		self.behaviour = dict(plan.behaviour)
		self.run_interval = plan.run_interval
		self.active = plan.active
		self.empty = False

	def clear(self) -> None:
		self.name = ""
		self.behaviour = {}
		self.run_interval = 0
		self.active = False
		self.empty = True


class TabManager:
	"""
	Open tabs, at most one per plan.

	Usage:
		tabs = TabManager(store)
		tab = tabs.open(plan)
		tab.connect(0, 0, 1, 0)
		tabs.close()
	"""

	def __init__(self, store: PlanTreeStore):
		self.store = store
		self.tabs: list[GraphTab] = []
		self.active_index: Optional[int] = None
		self.details = PlanDetails()
		store.subscribe(StoreEvent.PLAN_TREE_CHANGED, self.on_plan_tree_changed)

	@property
	def active_tab(self) -> Optional[GraphTab]:
		if self.active_index is None:
			return None
		return self.tabs[self.active_index]

	def open(self, plan: PlanNode) -> GraphTab:
		"""Focus the tab for `plan` (by identity), creating it if needed."""
		for i, tab in enumerate(self.tabs):
			if tab.plan is plan:
				self.active_index = i
				self.details.update(plan)
				return tab

		tab = GraphTab(plan, _steps_of(self.store.get_plan_tree(), plan))
		self.tabs.append(tab)
		self.active_index = len(self.tabs) - 1
		self.details.update(plan)
		logger.debug(f"Opened tab for plan '{plan.name}'")
		return tab

	def close(self) -> Optional[GraphTab]:
		"""Discard the active tab and its edits."""
		if self.active_index is None:
			return None
		tab = self.tabs.pop(self.active_index)
		if not self.tabs:
			self.active_index = None
		else:
			self.active_index = min(self.active_index, len(self.tabs) - 1)
		self._sync_details()
		return tab

	def on_plan_tree_changed(self, root: PlanNode) -> None:
		active = self.active_tab
		kept = []
		for tab in self.tabs:
			plan = _resolve_steps(root, tab.steps) if tab.steps is not None else None
			if plan is None:
				logger.info(f"Closing tab '{tab.title}': plan no longer exists")
				continue
			tab.rebind(plan)
			kept.append(tab)
		self.tabs = kept

		if active in kept:
			self.active_index = kept.index(active)
		else:
			self.active_index = 0 if kept else None
		self._sync_details()

	def _sync_details(self) -> None:
		if self.active_tab is None:
			self.details.clear()
		else:
			self.details.update(self.active_tab.plan)


def _steps_of(root: PlanNode, plan: PlanNode) -> Optional[tuple[tuple[str, int], ...]]:
	"""
	Locate `plan` by identity as (name, occurrence) steps from the root.

	The occurrence counts earlier siblings with the same name, so two
	children that share a name keep distinct locations.
	"""
	if root is plan:
		return ()
	seen: dict[str, int] = {}
	for child in root.plans:
		occurrence = seen.get(child.name, 0)
		seen[child.name] = occurrence + 1
		rest = _steps_of(child, plan)
		if rest is not None:
			return ((child.name, occurrence),) + rest
	return None


def _resolve_steps(root: PlanNode, steps: Sequence[tuple[str, int]]) -> Optional[PlanNode]:
	node = root
	for name, occurrence in steps:
		matches = [child for child in node.plans if child.name == name]
		if occurrence >= len(matches):
			return None
		node = matches[occurrence]
	return node
