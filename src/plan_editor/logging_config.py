"""Centralized logging configuration for plan-editor."""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "plan_editor"


def setup_logging(
	level: str | None = None,
	log_dir: Path | str | None = None,
) -> logging.Logger:
	"""
	Set up logging with console and file handlers.

	Args:
		level: Console log level (DEBUG, INFO, WARNING, ERROR). Defaults to env var or WARNING.
		log_dir: Directory for the rotating log file. No file handler if omitted.

	Returns:
		Configured package logger
	"""
	level = level or os.getenv("PLAN_EDITOR_LOG_LEVEL", "WARNING")
	log_level = getattr(logging, level.upper(), logging.WARNING)

	logger = logging.getLogger(LOGGER_NAME)
	logger.setLevel(logging.DEBUG)

	# Avoid duplicate handlers
	if logger.handlers:
		return logger

	console_handler = RichHandler(console=Console(stderr=True), show_time=False, show_path=False)
	console_handler.setLevel(log_level)
	logger.addHandler(console_handler)

	if log_dir:
		log_path = Path(log_dir)
		log_path.mkdir(parents=True, exist_ok=True)
		file_handler = RotatingFileHandler(
			log_path / "plan_editor.log",
			maxBytes=1024 * 1024,
			backupCount=3,
		)
		# File gets all logs
		file_handler.setLevel(logging.DEBUG)
		file_handler.setFormatter(logging.Formatter(
			"%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s",
			datefmt="%Y-%m-%d %H:%M:%S",
		))
		logger.addHandler(file_handler)

	return logger
