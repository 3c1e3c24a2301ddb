"""Tests for the Typer CLI."""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest
from typer.testing import CliRunner

from cli import doctor
from cli import main as cli_main
from core import config
from core.config import _parse_env_lines

from .helpers import RecordingHandler

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Run every command from an empty directory with no NETSPM_* overrides."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("NETSPM_LOG_LEVEL", "WARNING")


def _patch_client(monkeypatch: pytest.MonkeyPatch, module: object, handler: RecordingHandler) -> None:
    def _build(settings=None, *, extra_headers=None, transport=None):  # type: ignore[no-untyped-def]
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    monkeypatch.setattr(module, "build_async_client", _build)


def test_parse_value() -> None:
    assert cli_main._parse_value("1") == 1
    assert cli_main._parse_value("true") is True
    assert cli_main._parse_value("[1, 2]") == [1, 2]
    assert cli_main._parse_value("hello world") == "hello world"
    assert cli_main._parse_value('{"a": 1}') == '{"a": 1}'


def test_request_prints_decoded_body(monkeypatch: pytest.MonkeyPatch) -> None:
    handler = RecordingHandler(json={"name": "netspm"})
    _patch_client(monkeypatch, cli_main, handler)

    result = runner.invoke(
        cli_main.app,
        ["request", "post", "https://api.test/items", "-p", "ids=[1,2]", "-p", "q=a b", "-H", "X-Key=k"],
    )

    assert result.exit_code == 0, result.output
    assert "netspm" in result.output
    assert json.loads(handler.last.content) == {"ids": [1, 2], "q": "a b"}
    assert handler.last.headers["X-Key"] == "k"


def test_request_query_mode(monkeypatch: pytest.MonkeyPatch) -> None:
    handler = RecordingHandler(204)
    _patch_client(monkeypatch, cli_main, handler)

    result = runner.invoke(
        cli_main.app,
        ["request", "GET", "https://api.test/items", "-p", "q=a b", "--query", "--empty"],
    )

    assert result.exit_code == 0, result.output
    assert handler.last.url.query == b"q=a%20b"
    assert "empty response" in result.output


def test_request_server_error_exits_non_zero(monkeypatch: pytest.MonkeyPatch) -> None:
    handler = RecordingHandler(500, json={"errorMessage": "exploded"})
    _patch_client(monkeypatch, cli_main, handler)

    result = runner.invoke(cli_main.app, ["request", "GET", "https://api.test/items"])

    assert result.exit_code == 1
    assert "server_error: exploded" in result.output


def test_request_rejects_malformed_pairs() -> None:
    result = runner.invoke(cli_main.app, ["request", "GET", "https://api.test/items", "-p", "novalue"])

    assert result.exit_code != 0


def test_doctor_reports_checks(monkeypatch: pytest.MonkeyPatch) -> None:
    handler = RecordingHandler(200, content=b"<html></html>")
    _patch_client(monkeypatch, doctor, handler)

    result = runner.invoke(cli_main.app, ["doctor", "run", "--url", "https://probe.test"])

    assert result.exit_code == 0, result.output
    assert "HTTP connectivity" in result.output
    assert "InMemoryContext" in result.output


def test_doctor_fails_when_offline(monkeypatch: pytest.MonkeyPatch) -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    monkeypatch.setattr(
        doctor,
        "build_async_client",
        lambda settings=None, **_: httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )

    result = runner.invoke(cli_main.app, ["doctor", "run"])

    assert result.exit_code == 1
    assert "FAIL" in result.output


def test_doctor_configure_writes_user_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    env_path = tmp_path / "cfg" / ".env"
    monkeypatch.setattr(config, "get_user_env_file", lambda: env_path)

    result = runner.invoke(
        cli_main.app,
        ["doctor", "configure", "--timeout", "2.5", "--no-debug", "--store-path", str(tmp_path / "db.json")],
    )

    assert result.exit_code == 0, result.output
    assert _parse_env_lines(env_path.read_text(encoding="utf-8")) == {
        "NETSPM_HTTP_TIMEOUT_SECONDS": "2.5",
        "NETSPM_NETWORK_DEBUG": "false",
        "NETSPM_STORE_PATH": str(tmp_path / "db.json"),
    }

    settings = config.AppSettings(_env_file=env_path)
    assert settings.http_timeout_seconds == 2.5
    assert settings.store_path == tmp_path / "db.json"


def test_doctor_configure_requires_a_setting(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    env_path = tmp_path / ".env"
    monkeypatch.setattr(config, "get_user_env_file", lambda: env_path)

    result = runner.invoke(cli_main.app, ["doctor", "configure"])

    assert result.exit_code != 0
    assert not env_path.exists()
