"""CLI de netspm (Typer + Rich).

Comandos:
- `request`: ejecuta una petición con la fachada de red y muestra el JSON.
- `doctor`: diagnósticos de entorno.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Optional

import typer
from rich.console import Console

from adapters.http_client import build_async_client
from cli import doctor
from cli.ui_components import build_result_panel, print_error
from core.config import AppSettings
from core.domain.errors import NetworkError
from core.domain.models import BodyType, HttpMethod, ParamValue, ResponseExpectation
from core.logging_setup import configure_logging
from core.services.network_controller import NetworkController

app = typer.Typer(no_args_is_help=True, help="netspm: HTTP request pipeline and typed store facade.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def _parse_value(raw: str) -> ParamValue:
    """`1` -> 1, `true` -> True, `[1,2]` -> [1, 2]; cualquier otra cosa es str."""

    try:
        value = json.loads(raw)
    except ValueError:
        return raw
    if isinstance(value, (str, bool, int, float, list)):
        return value
    return raw


def _parse_pairs(items: list[str], *, typed: bool) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for item in items:
        if "=" not in item:
            raise typer.BadParameter(f"expected key=value, got {item!r}")
        key, value = item.split("=", 1)
        out[key.strip()] = _parse_value(value) if typed else value
    return out


@app.command()
def request(
    method: HttpMethod = typer.Argument(..., case_sensitive=False, help="GET, POST, PUT or DELETE."),
    url: str = typer.Argument(..., help="Target URL."),
    param: list[str] = typer.Option([], "--param", "-p", help="Parameter key=value (repeatable)."),
    header: list[str] = typer.Option([], "--header", "-H", help="Header key=value (repeatable)."),
    query: bool = typer.Option(False, "--query", help="Send parameters as query items."),
    form: bool = typer.Option(False, "--form", help="Form-url-encode parameters in the body."),
    empty: bool = typer.Option(False, "--empty", help="Expect no body; skip decoding."),
    debug: Optional[bool] = typer.Option(None, "--debug/--no-debug", help="Verbose per-request log."),
) -> None:
    """Send one request and print the decoded JSON body."""

    settings = AppSettings()
    configure_logging(settings.log_level)

    params = _parse_pairs(param, typed=True) or None
    headers = _parse_pairs(header, typed=False)
    verbose = settings.network_debug if debug is None else debug

    async def _run() -> Any:
        async with build_async_client(settings) as client:
            controller = NetworkController.print_changes(client) if verbose else NetworkController(client)
            return await controller.request(
                method,
                url,
                headers=headers,
                params=params,
                must_encode_params=form,
                body_type=BodyType.IN_QUERY if query else BodyType.IN_BODY,
                expect=ResponseExpectation.EMPTY if empty else ResponseExpectation.BODY,
            )

    try:
        value = asyncio.run(_run())
    except NetworkError as exc:
        print_error(_console, exc)
        raise typer.Exit(code=1)

    if empty:
        _console.print("[green]OK[/green] (empty response)")
        return
    _console.print(build_result_panel(value, title=f"{method.value} {url}"))


def run() -> None:
    app()
