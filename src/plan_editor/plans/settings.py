"""
Key/value persistence for plan editor documents.

Each key maps to one JSON file. The user-writable location is a
directory on disk; bundled defaults ship as package data.
"""

import json
import logging
import os
import tempfile
from importlib import resources
from pathlib import Path
from typing import Any, Optional, Protocol

logger = logging.getLogger(__name__)

PLAN_TREE_KEY = "plan_tree"
SCHEMA_KEY = "schema"


class SettingsSource(Protocol):
	"""Anything the store can load documents from."""

	def load(self, key: str) -> Optional[Any]:
		...


class JsonFileSettings:
	"""
	Documents stored as `<directory>/<key>.json`.

	Usage:
		settings = JsonFileSettings(config.data_dir)
		settings.save("plan_tree", document)
		document = settings.load("plan_tree")
	"""

	def __init__(self, directory: Path | str):
		self.directory = Path(directory)

	def path_for(self, key: str) -> Path:
		return self.directory / f"{key}.json"

	def load(self, key: str) -> Optional[Any]:
		"""Load a document, or None if it does not exist or cannot be read."""
		path = self.path_for(key)
		if not path.exists():
			return None
		try:
			with open(path, encoding="utf-8") as f:
				return json.load(f)
		except (ValueError, OSError) as e:
			logger.warning(f"Ignoring unreadable {path}: {e}")
			return None

	def save(self, key: str, value: Any) -> None:
		"""
		Write a document, replacing the previous file in one step.

		Raises:
			OSError: If the directory or file cannot be written
		"""
		self.directory.mkdir(parents=True, exist_ok=True)
		path = self.path_for(key)
		fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
		try:
			with os.fdopen(fd, "w", encoding="utf-8") as f:
				json.dump(value, f, indent=2)
				f.write("\n")
			os.replace(tmp_name, path)
		except BaseException:
			Path(tmp_name).unlink(missing_ok=True)
			raise
		logger.debug(f"Saved {key} to {path}")


class BundledSettings:
	"""Read-only documents shipped inside a package (default: plan_editor.defaults)."""

	def __init__(self, package: str = "plan_editor.defaults"):
		self.package = package

	def load(self, key: str) -> Optional[Any]:
		resource = resources.files(self.package) / f"{key}.json"
		if not resource.is_file():
			return None
		return json.loads(resource.read_text(encoding="utf-8"))
