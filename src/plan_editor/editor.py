"""
Plan editor session - the import/export boundary.

Text comes in from import dialogs, gets parsed and routed to the store,
and any failure comes back as a single displayable line. Nothing raised
while importing propagates past this module.
"""

import json
import logging
from typing import Any, Callable, Optional, Sequence

from .errors import ParseError, PlanEditorError
from .plans.models import PlanNode
from .plans.store import PlanTreeStore
from .views.graph import GraphTab, TabManager
from .views.selector import BehaviourSelector
from .views.tree import TreeView

logger = logging.getLogger(__name__)

NoticeSink = Callable[[str], None]


def parse_json(text: str) -> Any:
	"""
	Parse JSON text from an import dialog.

	Raises:
		ParseError: With the line number of the first syntax error, or
			line 0 when the document is nested too deeply to decode
	"""
	try:
		return json.loads(text)
	except json.JSONDecodeError as e:
		raise ParseError(e.msg, e.lineno) from e
	except RecursionError as e:
		raise ParseError("document nested too deeply", 0) from e


class PlanEditor:
	"""
	Wires the store to the tree view, graph tabs and behaviour selector.

	Usage:
		editor = PlanEditor(store, notice=print)
		error = editor.import_plan_tree(text)
		if error:
			show(error)
	"""

	def __init__(self, store: PlanTreeStore, notice: Optional[NoticeSink] = None):
		self.store = store
		self.notice = notice
		self.tree_view = TreeView(store)
		self.tabs = TabManager(store)
		self.selector = BehaviourSelector.bound_to(store)

	def _report(self, error: PlanEditorError) -> str:
		message = str(error)
		logger.info(f"Import rejected: {message}")
		if self.notice is not None:
			self.notice(message)
		return message

	def import_plan_tree(self, text: str) -> Optional[str]:
		"""Import a whole plan tree. Returns None on success, else the error message."""
		try:
			self.store.replace_plan_tree(parse_json(text))
		except PlanEditorError as e:
			return self._report(e)
		return None

	def import_schema(self, text: str) -> Optional[str]:
		"""Import a schema. Returns None on success, else the error message."""
		try:
			self.store.replace_schema(parse_json(text))
		except PlanEditorError as e:
			return self._report(e)
		return None

	def export_plan_tree(self) -> str:
		return json.dumps(self.store.get_plan_tree().to_document(), indent=2)

	def export_schema(self) -> str:
		return json.dumps(self.store.get_schema().to_document(), indent=2)

	def open_plan(self, path: Sequence[str]) -> Optional[GraphTab]:
		"""Select a plan by label path and open (or focus) its tab."""
		plan = self.tree_view.select(path)
		if plan is None:
			return None
		self.select_behaviour(plan)
		return self.tabs.open(plan)

	def select_behaviour(self, plan: PlanNode) -> bool:
		"""Point the behaviour selector at the plan's first behaviour."""
		self.selector.refresh(self.store.get_schema())
		names = list(plan.behaviour)
		if not names:
			return False
		return self.selector.select_by_name(names[0])
