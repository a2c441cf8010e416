"""Tests for configuration functionality."""

from datetime import datetime
from pathlib import Path

import pytest

from gitcommitlint.config import Config, DEFAULT_CONFIG_FILENAME
from gitcommitlint.models import Level


def test_default_config():
    """Test default configuration values."""
    config = Config()
    assert config.ignore_merges is True
    assert config.always_log is False
    assert config.log_file is None
    assert config.rules.get("subject-empty").level == Level.ERROR
    assert config.rules.get("type-enum").level == Level.IGNORE


def test_config_load_nonexistent(tmp_path):
    """Test loading configuration when file doesn't exist."""
    config = Config.load(tmp_path)
    assert config.ignore_merges is True


def test_config_load_rules(tmp_path):
    """Test loading rule settings from TOML tables."""
    (tmp_path / DEFAULT_CONFIG_FILENAME).write_text(
        'ignore_merges = false\n'
        '\n'
        '[rules.type-enum]\n'
        'level = "error"\n'
        'options = ["feat", "fix"]\n'
        '\n'
        '[rules.subject-max-length]\n'
        'length = 50\n'
    )

    config = Config.load(tmp_path)
    assert config.ignore_merges is False
    assert config.rules.get("type-enum").level == Level.ERROR
    assert config.rules.get("type-enum").allowed == ["feat", "fix"]
    assert config.rules.get("subject-max-length").length == 50


def test_config_load_explicit_path(tmp_path):
    """Test loading from a config file outside the repository."""
    custom = tmp_path / "lint.toml"
    custom.write_text('[rules.scope-empty]\nlevel = "warning"\n')

    config = Config.load(tmp_path / "missing", custom)
    assert config.rules.get("scope-empty").level == Level.WARNING


def test_config_load_and_save(tmp_path):
    """Test saving and loading configuration."""
    config = Config(
        ignore_merges=False,
        always_log=True,
        log_file="custom.log",
        rules={"scope-enum": {"level": "error", "options": ["cli"]}},
    )

    config.save(tmp_path)
    loaded_config = Config.load(tmp_path)

    assert loaded_config.ignore_merges is False
    assert loaded_config.always_log is True
    assert loaded_config.log_file == "custom.log"
    assert loaded_config.rules.to_dict() == config.rules.to_dict()


def test_config_load_invalid(tmp_path, capsys):
    """Test loading invalid configuration file."""
    (tmp_path / DEFAULT_CONFIG_FILENAME).write_text("invalid [ toml")

    config = Config.load(tmp_path)
    assert config.ignore_merges is True
    assert "Error reading config file" in capsys.readouterr().out


def test_config_load_unknown_rule(tmp_path, capsys):
    """Test that unknown rules fall back to defaults with a warning."""
    (tmp_path / DEFAULT_CONFIG_FILENAME).write_text('[rules.made-up]\nlevel = "error"\n')

    config = Config.load(tmp_path)
    assert config.rules.get("made-up") is None
    assert "Unknown rule" in capsys.readouterr().out


def test_config_load_unsafe_log_file(tmp_path):
    """Test that log file paths escaping the repository are dropped."""
    (tmp_path / DEFAULT_CONFIG_FILENAME).write_text('log_file = "../outside.log"\n')

    config = Config.load(tmp_path)
    assert config.log_file is None


def test_get_log_file_disabled():
    """Test get_log_file when logging is disabled."""
    config = Config(always_log=False, log_file=None)
    assert config.get_log_file() is None


def test_get_log_file_custom():
    config = Config(log_file="lint.log")
    assert config.get_log_file() == Path("lint.log")


def test_get_log_file_always_log():
    config = Config(always_log=True)
    log_file = config.get_log_file()
    assert log_file.name.startswith("gcl_log-")
    timestamp = log_file.stem[len("gcl_log-"):]
    assert datetime.strptime(timestamp, "%Y-%m-%d_%H-%M-%S")


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("GIT_COMMIT_LINT_IGNORE_MERGES", "no")
    monkeypatch.setenv("GIT_COMMIT_LINT_LOG_FILE", "env.log\x07")

    config = Config()
    assert config.ignore_merges is False
    assert config.log_file == "env.log"

    # Explicit values win over the environment
    assert Config(ignore_merges=True).ignore_merges is True
