"""Rich views for the plan tree, plan details and graph tabs."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.tree import Tree

from ..plans.models import PlanNode
from ..views.graph import GraphTab
from ..views.tree import DisplayNode, project

ACTIVE_ICONS = {
	True: "[green]●[/green]",
	False: "[dim]○[/dim]",
}


def _label(plan: PlanNode) -> str:
	icon = ACTIVE_ICONS[plan.active]
	behaviours = escape(", ".join(plan.behaviour) or "-")
	return f"{icon} [bold]{escape(plan.name)}[/bold] [dim]({behaviours}, every {plan.run_interval})[/dim]"


def _add_children(branch: Tree, node: DisplayNode, depth: int, max_depth: Optional[int]) -> None:
	if max_depth is not None and depth >= max_depth:
		if node.children:
			branch.add(f"[dim]... {len(node.children)} more[/dim]")
		return
	for child in node.children:
		_add_children(branch.add(_label(child.plan)), child, depth + 1, max_depth)


def render_plan_tree(root: PlanNode, console: Optional[Console] = None, max_depth: Optional[int] = None) -> None:
	"""Render the plan tree as a Rich Tree."""
	console = console or Console()

	display = project(root)
	tree = Tree(_label(root))
	_add_children(tree, display, 0, max_depth)
	console.print(tree)


def render_plan_details(plan: PlanNode, console: Optional[Console] = None) -> None:
	"""Render a detail panel for one plan."""
	console = console or Console()

	lines = []
	lines.append(f"[bold]Name:[/bold] {escape(plan.name)}")
	lines.append(f"[bold]Active:[/bold] {'yes' if plan.active else 'no'}")
	lines.append(f"[bold]Run interval:[/bold] {plan.run_interval}")
	lines.append(f"[bold]Behaviour:[/bold] {escape(', '.join(plan.behaviour) or '-')}")
	lines.append(f"[bold]Transitions:[/bold] {len(plan.transitions)}")
	lines.append(f"[bold]Sub-plans:[/bold] {len(plan.plans)}")

	console.print(Panel("\n".join(lines), title=f"Plan: {escape(plan.name)}", border_style="cyan"))


def render_graph(tab: GraphTab, console: Optional[Console] = None) -> None:
	"""Render a graph tab as its node list and edge list."""
	console = console or Console()

	tree = Tree(f"[bold]{escape(tab.title)}[/bold]  [dim]({len(tab.nodes)} nodes, {len(tab.edges)} edges)[/dim]")
	nodes_branch = tree.add("[bold]Nodes[/bold]")
	for node in tab.nodes.values():
		x, y = node.position
		marker = " [yellow](scratch)[/yellow]" if node.scratch else ""
		nodes_branch.add(f"#{node.id} {escape(node.label)} [dim]@ ({x:.0f}, {y:.0f})[/dim]{marker}")

	edges_branch = tree.add("[bold]Edges[/bold]")
	for src, dst in tab.edge_labels():
		edges_branch.add(escape(f"{src} -> {dst}"))

	console.print(tree)
