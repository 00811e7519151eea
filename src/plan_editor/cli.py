"""CLI for plan-editor: browse, import and export behaviour plan trees."""

import argparse
import sys
from pathlib import Path

from importlib.metadata import version as pkg_version

from rich.console import Console

from .config import load_config
from .editor import PlanEditor
from .errors import PlanEditorError, StartupDataMissing
from .logging_config import setup_logging
from .plans.settings import PLAN_TREE_KEY, SCHEMA_KEY, JsonFileSettings
from .plans.store import PlanTreeStore
from .plans.validation import lint_plan_tree


def _open_editor() -> PlanEditor:
	"""Load config and the store, exiting with code 1 if startup data is missing."""
	config = load_config()
	setup_logging(config.log_level, config.log_dir)
	store = PlanTreeStore(JsonFileSettings(config.data_dir))
	try:
		store.init()
	except StartupDataMissing as e:
		print(f"Error: {e}", file=sys.stderr)
		sys.exit(1)
	return PlanEditor(store, notice=lambda message: print(f"Error: {message}", file=sys.stderr))


def _read_input(path: str) -> str:
	if path == "-":
		return sys.stdin.read()
	try:
		return Path(path).read_text(encoding="utf-8")
	except (OSError, UnicodeDecodeError) as e:
		print(f"Error: cannot read {path}: {e}", file=sys.stderr)
		sys.exit(1)


def _write_output(text: str, output: str | None) -> None:
	if not output:
		print(text)
		return
	try:
		Path(output).write_text(text + "\n")
	except OSError as e:
		print(f"Error: cannot write {output}: {e}", file=sys.stderr)
		sys.exit(1)
	print(f"Wrote {output}")


def cmd_show(args: argparse.Namespace) -> None:
	"""Print the plan tree."""
	from .visualizer.plan_tree import render_plan_tree

	editor = _open_editor()
	render_plan_tree(editor.store.get_plan_tree(), console=Console(), max_depth=getattr(args, "depth", None))


def cmd_plan(args: argparse.Namespace) -> None:
	"""Print the detail panel for one plan."""
	from .visualizer.plan_tree import render_plan_details

	editor = _open_editor()
	path = getattr(args, "path", None) or []
	plan = editor.tree_view.select(path)
	if plan is None:
		print(f"No plan at path: {'/'.join(path)}")
		sys.exit(1)
	render_plan_details(plan, console=Console())


def cmd_graph(args: argparse.Namespace) -> None:
	"""Print the transition graph for one plan."""
	from .visualizer.plan_tree import render_graph

	editor = _open_editor()
	path = getattr(args, "path", None) or []
	tab = editor.open_plan(path)
	if tab is None:
		print(f"No plan at path: {'/'.join(path)}")
		sys.exit(1)
	render_graph(tab, console=Console())


def cmd_schema(args: argparse.Namespace) -> None:
	"""Print the schema enumerations."""
	from .visualizer.schema_table import render_schema

	editor = _open_editor()
	render_schema(editor.store.get_schema(), editor.store.schema_fingerprint, console=Console())


def cmd_import_tree(args: argparse.Namespace) -> None:
	"""Import a plan tree from a JSON file."""
	editor = _open_editor()
	if editor.import_plan_tree(_read_input(args.file)) is not None:
		sys.exit(1)
	root = editor.store.get_plan_tree()
	print(f"Imported plan tree '{root.name}' ({root.count()} plans)")


def cmd_import_schema(args: argparse.Namespace) -> None:
	"""Import a schema from a JSON file."""
	editor = _open_editor()
	if editor.import_schema(_read_input(args.file)) is not None:
		sys.exit(1)
	print(f"Imported schema ({len(editor.selector.options)} behaviours)")


def cmd_export_tree(args: argparse.Namespace) -> None:
	editor = _open_editor()
	_write_output(editor.export_plan_tree(), getattr(args, "output", None))


def cmd_export_schema(args: argparse.Namespace) -> None:
	editor = _open_editor()
	_write_output(editor.export_schema(), getattr(args, "output", None))


def cmd_doctor(args: argparse.Namespace) -> None:
	"""Health check - verify configuration and stored documents."""
	print("plan-editor doctor")
	print(f"{'=' * 40}")

	config = load_config()
	settings = JsonFileSettings(config.data_dir)
	issues: list[str] = []

	print("  Core deps:")
	for dep in ["pydantic", "platformdirs", "rich"]:
		try:
			print(f"    {dep:14s} {pkg_version(dep)}")
		except Exception:
			print(f"    {dep:14s} NOT INSTALLED")
			issues.append(f"{dep} package not installed")
	print()

	print("  Paths:")
	print(f"    Config dir:  {config.config_dir}")
	print(f"    Data dir:    {config.data_dir}")
	for key in (PLAN_TREE_KEY, SCHEMA_KEY):
		path = settings.path_for(key)
		status = "user copy" if path.exists() else "using bundled default"
		print(f"    {key + '.json':12s} {status}")
	print()

	store = PlanTreeStore(settings)
	try:
		store.init()
	except PlanEditorError as e:
		issues.append(str(e))
	else:
		warnings = lint_plan_tree(store.get_plan_tree(), store.get_schema())
		print(f"  Plan tree: {store.get_plan_tree().count()} plans, {len(warnings)} warning(s)")
		for warning in warnings:
			print(f"    - {warning}")
			issues.append(warning)
	print()

	if issues:
		print(f"  {len(issues)} issue(s) found:")
		for issue in issues:
			print(f"    - {issue}")
		sys.exit(1)
	else:
		print("  All checks passed.")


def main() -> None:
	"""CLI entry point."""
	parser = argparse.ArgumentParser(
		prog="plan-editor",
		description="Editor for hierarchical behaviour plan trees",
	)
	subparsers = parser.add_subparsers(dest="command")

	# show
	show_parser = subparsers.add_parser("show", help="Show the plan tree")
	show_parser.add_argument("--depth", type=int, default=None, help="Limit displayed depth")
	show_parser.set_defaults(func=cmd_show)

	# plan
	plan_parser = subparsers.add_parser("plan", help="Show one plan's details")
	plan_parser.add_argument("path", nargs="*", help="Plan names from the root (root itself if omitted)")
	plan_parser.set_defaults(func=cmd_plan)

	# graph
	graph_parser = subparsers.add_parser("graph", help="Show one plan's transition graph")
	graph_parser.add_argument("path", nargs="*", help="Plan names from the root (root itself if omitted)")
	graph_parser.set_defaults(func=cmd_graph)

	# schema
	schema_parser = subparsers.add_parser("schema", help="Show the behaviour/predicate schema")
	schema_parser.set_defaults(func=cmd_schema)

	# import-tree / import-schema
	import_tree = subparsers.add_parser("import-tree", help="Replace the plan tree from a JSON file")
	import_tree.add_argument("file", help="JSON file, or - for stdin")
	import_tree.set_defaults(func=cmd_import_tree)

	import_schema = subparsers.add_parser("import-schema", help="Replace the schema from a JSON file")
	import_schema.add_argument("file", help="JSON file, or - for stdin")
	import_schema.set_defaults(func=cmd_import_schema)

	# export-tree / export-schema
	export_tree = subparsers.add_parser("export-tree", help="Write the plan tree as JSON")
	export_tree.add_argument("-o", "--output", type=str, default=None, help="Output file (default: stdout)")
	export_tree.set_defaults(func=cmd_export_tree)

	export_schema = subparsers.add_parser("export-schema", help="Write the schema as JSON")
	export_schema.add_argument("-o", "--output", type=str, default=None, help="Output file (default: stdout)")
	export_schema.set_defaults(func=cmd_export_schema)

	# doctor
	doctor_parser = subparsers.add_parser("doctor", help="Health check")
	doctor_parser.set_defaults(func=cmd_doctor)

	args = parser.parse_args()

	if not args.command:
		parser.print_help()
		sys.exit(1)

	args.func(args)


if __name__ == "__main__":
	main()
