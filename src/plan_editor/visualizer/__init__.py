"""Visualizer package - Rich terminal views for the plan editor."""

from .plan_tree import render_graph, render_plan_details, render_plan_tree
from .schema_table import render_schema

__all__ = [
	"render_graph",
	"render_plan_details",
	"render_plan_tree",
	"render_schema",
]
