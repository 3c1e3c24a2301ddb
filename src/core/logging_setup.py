"""Logging de la librería (stdlib `logging` + Rich).

Cada módulo usa `logging.getLogger(__name__)`; aquí solo se instala el
handler de consola para los entry-points (CLI, scripts).
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: str | int = "INFO", *, console: Console | None = None) -> None:
    """Configura el logger raíz con un `RichHandler`.

    Idempotente: si ya hay un `RichHandler` instalado solo ajusta el nivel.
    """

    root = logging.getLogger()
    root.setLevel(level if isinstance(level, int) else level.upper())

    if any(isinstance(h, RichHandler) for h in root.handlers):
        return

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    root.addHandler(handler)
