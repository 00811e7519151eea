"""Views package - projections of the store consumed by a UI."""

from .graph import GraphEdge, GraphNode, GraphTab, PlanDetails, TabManager
from .selector import BehaviourSelector, SelectorOption
from .tree import DisplayNode, TreeView, project, resolve

__all__ = [
	"GraphEdge",
	"GraphNode",
	"GraphTab",
	"PlanDetails",
	"TabManager",
	"BehaviourSelector",
	"SelectorOption",
	"DisplayNode",
	"TreeView",
	"project",
	"resolve",
]
