"""Tests for settings, user .env handling and logging setup."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from rich.logging import RichHandler

from core.config import AppSettings, _parse_env_lines, write_user_env_vars
from core.logging_setup import configure_logging


def test_defaults() -> None:
    settings = AppSettings(_env_file=None)

    assert settings.http_timeout_seconds == 30.0
    assert settings.network_debug is False
    assert settings.store_path is None


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("NETSPM_NETWORK_DEBUG", "true")
    monkeypatch.setenv("NETSPM_STORE_PATH", str(tmp_path / "db.json"))
    monkeypatch.setenv("NETSPM_HTTP_TIMEOUT_SECONDS", "2.5")

    settings = AppSettings(_env_file=None)

    assert settings.network_debug is True
    assert settings.store_path == tmp_path / "db.json"
    assert settings.http_timeout_seconds == 2.5


def test_env_file_is_read(tmp_path: Path) -> None:
    env = tmp_path / ".env"
    env.write_text("NETSPM_USER_AGENT=custom/1.0\n", encoding="utf-8")

    assert AppSettings(_env_file=env).user_agent == "custom/1.0"


def test_parse_env_lines() -> None:
    text = "# comment\n\nA=1\nB = 'two'\nbroken\nC=\"x=y\"\n"

    assert _parse_env_lines(text) == {"A": "1", "B": "two", "C": "x=y"}


def test_write_user_env_vars_merges(tmp_path: Path) -> None:
    env = tmp_path / "cfg" / ".env"
    write_user_env_vars({"NETSPM_LOG_LEVEL": "DEBUG"}, env_path=env)
    write_user_env_vars({"NETSPM_NETWORK_DEBUG": "true"}, env_path=env)

    assert _parse_env_lines(env.read_text(encoding="utf-8")) == {
        "NETSPM_LOG_LEVEL": "DEBUG",
        "NETSPM_NETWORK_DEBUG": "true",
    }


def test_configure_logging_is_idempotent() -> None:
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    try:
        configure_logging("debug")
        configure_logging("info")
        rich_handlers = [h for h in root.handlers if isinstance(h, RichHandler)]
        assert len(rich_handlers) == 1
        assert root.level == logging.INFO
    finally:
        for handler in root.handlers[:]:
            if handler not in before:
                root.removeHandler(handler)
        root.setLevel(level)
