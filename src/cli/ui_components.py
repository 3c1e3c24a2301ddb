"""Componentes de UI para CLI (Rich).

Separa la presentación (paneles/tablas) de los comandos.
"""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from core.domain.errors import NetworkError, StoreError


def build_result_panel(value: Any, *, title: str = "Response") -> Panel:
    """Panel con el cuerpo decodificado renderizado como JSON."""

    body = json.dumps(value, ensure_ascii=False, indent=2, default=str)
    return Panel(Syntax(body, "json", word_wrap=True), title=Text(title, style="bold cyan"), border_style="cyan")


def build_checks_table(title: str) -> Table:
    table = Table(title=title)
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    return table


def print_error(console: Console, error: BaseException) -> None:
    """Muestra un error estructurado (o desconocido) en rojo."""

    if isinstance(error, NetworkError):
        label = f"{error.kind.value}: {error.message}" if error.message else error.kind.value
    elif isinstance(error, StoreError):
        label = f"{error.kind.value}: {error.description}"
    else:
        label = f"{type(error).__name__}: {error}"
    console.print(f"[red]Error[/red] {label}")
