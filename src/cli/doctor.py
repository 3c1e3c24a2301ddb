"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from adapters.http_client import build_async_client
from cli.ui_components import build_checks_table
from core.config import AppSettings, write_user_env_vars
from core.domain.errors import NetworkError, NetworkErrorKind, StoreError
from core.domain.models import HttpMethod, ResponseExpectation
from core.services.network_controller import NetworkController
from core.services.persistence import build_persistence

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()

_UNREACHABLE = (NetworkErrorKind.NO_INTERNET, NetworkErrorKind.INVALID_URL, NetworkErrorKind.NO_RESPONSE)


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    async with build_async_client(settings) as client:
        controller = NetworkController(client, debug=settings.network_debug)
        try:
            await controller.request(HttpMethod.GET, url, expect=ResponseExpectation.EMPTY)
        except NetworkError as exc:
            # server_error/decode still prove the host answered
            if exc.kind in _UNREACHABLE:
                return False, str(exc)
            return True, f"reachable ({exc.kind.value})"
        except Exception as exc:
            return False, f"{type(exc).__name__}: {exc}"
    return True, "OK"


def _check_store(settings: AppSettings) -> tuple[bool, str]:
    controller = build_persistence(settings)
    try:
        controller.save_data()
    except StoreError as exc:
        return False, exc.description
    return True, type(controller.context).__name__


@app.command()
def run(url: str = typer.Option("https://www.example.com", help="URL used for the connectivity check.")) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = build_checks_table("netspm Doctor")
    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds}s")
    table.add_row("Network debug", "ON" if settings.network_debug else "OFF", "NETSPM_NETWORK_DEBUG")

    ok_http, detail_http = asyncio.run(_check_http(url, settings))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    ok_store, detail_store = _check_store(settings)
    table.add_row("Store", "OK" if ok_store else "FAIL", detail_store)

    _console.print(table)

    if not ok_http or not ok_store:
        raise typer.Exit(code=1)


@app.command()
def configure(
    timeout: Optional[float] = typer.Option(None, "--timeout", min=0.001, help="HTTP timeout in seconds."),
    user_agent: Optional[str] = typer.Option(None, "--user-agent", help="Default User-Agent."),
    debug: Optional[bool] = typer.Option(None, "--debug/--no-debug", help="Per-request debug logging."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Root log level (DEBUG, INFO...)."),
    store_path: Optional[Path] = typer.Option(None, "--store-path", help="JSON file used by the persistent store."),
) -> None:
    """Store settings in the user config .env (no manual editing)."""

    values: dict[str, str] = {}
    if timeout is not None:
        values["NETSPM_HTTP_TIMEOUT_SECONDS"] = str(timeout)
    if user_agent:
        values["NETSPM_USER_AGENT"] = user_agent.strip()
    if debug is not None:
        values["NETSPM_NETWORK_DEBUG"] = "true" if debug else "false"
    if log_level:
        values["NETSPM_LOG_LEVEL"] = log_level.strip().upper()
    if store_path is not None:
        values["NETSPM_STORE_PATH"] = str(store_path.expanduser())

    if not values:
        raise typer.BadParameter("pass at least one setting to store")

    env_path = write_user_env_vars(values)
    _console.print(f"[green]Saved config to:[/green] {env_path}")
