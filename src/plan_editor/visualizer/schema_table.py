"""Rich table for the schema enumerations."""

from typing import Optional

from rich.console import Console
from rich.table import Table

from ..plans.schema import EnumSpec, Schema


def _enum_table(title: str, enum_spec: EnumSpec) -> Table:
	table = Table(title=title, show_header=True, header_style="bold")
	table.add_column("Index", justify="right")
	table.add_column("Aliases")
	for index, aliases in enum_spec.enum.items():
		table.add_row(index, ", ".join(aliases))
	return table


def render_schema(schema: Schema, fingerprint: str = "", console: Optional[Console] = None) -> None:
	"""Render BehaviourEnum and PredicateEnum as tables."""
	console = console or Console()

	console.print(_enum_table("BehaviourEnum", schema.behaviour_enum))
	console.print(_enum_table("PredicateEnum", schema.predicate_enum))
	if fingerprint:
		console.print(f"[dim]fingerprint {fingerprint[:12]}[/dim]")
