"""Functional tests for configuration loading and precedence."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from formbuilder import config as config_module
from formbuilder.config import DEFAULT_DSN, load_config


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Run load_config from an empty directory with no overriding env."""
    for key in ("TEST_DATABASE_URL", "DATABASE_URL", "AUTO_APPLY_MIGRATIONS", "MIGRATIONS_DIR", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(config_module, "CONFIG_DIR", tmp_path / "config")
    monkeypatch.setattr(config_module, "ROOT_CONFIG", tmp_path / "formbuilder_config.json")
    return tmp_path


def test_defaults(isolated_config):
    cfg = load_config()
    assert cfg.database.dsn == DEFAULT_DSN
    assert cfg.database.auto_apply_migrations is True
    assert cfg.logging.level == "INFO"


def test_json_file_then_text_override_then_env(isolated_config, monkeypatch):
    (isolated_config / "formbuilder_config.json").write_text(
        json.dumps({"database": {"dsn": "sqlite:///from-json.db"}, "logging": {"level": "warning"}}),
        encoding="utf-8",
    )
    assert load_config().database.dsn == "sqlite:///from-json.db"
    assert load_config().logging.level == "WARNING"

    (isolated_config / "config").mkdir()
    (isolated_config / "config" / "database.url").write_text("sqlite:///from-file.db\n", encoding="utf-8")
    assert load_config().database.dsn == "sqlite:///from-file.db"

    monkeypatch.setenv("DATABASE_URL", "sqlite:///from-env.db")
    assert load_config().database.dsn == "sqlite:///from-env.db"

    monkeypatch.setenv("TEST_DATABASE_URL", "sqlite:///from-test-env.db")
    assert load_config().database.dsn == "sqlite:///from-test-env.db"


@pytest.mark.parametrize("text, expected", [("0", False), ("false", False), ("yes", True), ("1", True)])
def test_auto_apply_migrations_flag(isolated_config, monkeypatch, text, expected):
    monkeypatch.setenv("AUTO_APPLY_MIGRATIONS", text)
    assert load_config().database.auto_apply_migrations is expected


def test_unknown_log_level_is_rejected(isolated_config, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    with pytest.raises(ValidationError):
        load_config()
