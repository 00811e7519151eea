"""Tests for the configuration system."""

import os
from pathlib import Path
from unittest.mock import patch

from plan_editor.config import Config, _apply_env_overrides, _apply_toml, load_config


def test_config_defaults():
	"""Config should have sensible defaults."""
	config = Config()
	assert config.config_dir.is_absolute()
	assert config.data_dir.is_absolute()
	assert config.log_dir == config.data_dir / "logs"
	assert config.log_level == "WARNING"


def test_config_env_overrides():
	"""Environment variables should override defaults."""
	config = Config()
	with patch.dict(os.environ, {
		"PLAN_EDITOR_DATA_DIR": "/tmp/test-data",
		"PLAN_EDITOR_CONFIG_DIR": "/tmp/test-config",
		"PLAN_EDITOR_LOG_LEVEL": "debug",
	}):
		config = _apply_env_overrides(config)
		assert config.data_dir == Path("/tmp/test-data")
		assert config.config_dir == Path("/tmp/test-config")
		assert config.log_level == "DEBUG"
		# Derived paths should be recomputed
		assert config.log_dir == Path("/tmp/test-data/logs")


def test_config_toml_overrides(tmp_path: Path):
	"""config.toml values apply and derived paths follow."""
	config_dir = tmp_path / "config"
	config_dir.mkdir()
	(config_dir / "config.toml").write_text(
		f'data_dir = "{(tmp_path / "elsewhere").as_posix()}"\n'
		'log_level = "ERROR"\n'
	)
	config = _apply_toml(Config(config_dir=config_dir, data_dir=tmp_path / "data"))
	assert config.data_dir == tmp_path / "elsewhere"
	assert config.log_dir == tmp_path / "elsewhere" / "logs"
	assert config.log_level == "ERROR"


def test_config_ensure_dirs(tmp_path: Path):
	"""ensure_dirs should create all required directories."""
	config = Config(
		config_dir=tmp_path / "config",
		data_dir=tmp_path / "data",
	)
	assert not config.config_dir.exists()
	assert not config.data_dir.exists()

	config.ensure_dirs()

	assert config.config_dir.exists()
	assert config.data_dir.exists()
	assert config.log_dir.exists()


def test_load_config_creates_dirs(tmp_path: Path):
	"""load_config should create directories."""
	with patch.dict(os.environ, {
		"PLAN_EDITOR_DATA_DIR": str(tmp_path / "data"),
		"PLAN_EDITOR_CONFIG_DIR": str(tmp_path / "config"),
	}):
		config = load_config()
		assert config.data_dir.exists()
		assert config.config_dir.exists()


def test_load_config_env_beats_toml(tmp_path: Path):
	config_dir = tmp_path / "config"
	config_dir.mkdir()
	(config_dir / "config.toml").write_text('log_level = "ERROR"\n')
	with patch.dict(os.environ, {
		"PLAN_EDITOR_DATA_DIR": str(tmp_path / "data"),
		"PLAN_EDITOR_CONFIG_DIR": str(config_dir),
		"PLAN_EDITOR_LOG_LEVEL": "DEBUG",
	}):
		config = load_config()
		assert config.log_level == "DEBUG"
