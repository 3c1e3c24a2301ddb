"""Contrato del transporte HTTP inyectado.

Por qué Protocol:
- `httpx.AsyncClient` lo cumple tal cual, y en tests basta con un
  `httpx.MockTransport` o un doble mínimo.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import httpx


@runtime_checkable
class HttpTransport(Protocol):
    """Transporte capaz de enviar una `httpx.Request`.

    Reglas:
    - Devuelve la respuesta, o `None` si no hubo objeto respuesta.
    - Fallos de red se lanzan como `httpx.TransportError`; `httpx.ConnectError`
      es la condición distinguida de "sin conexión".
    - Cancelar la tarea que espera `send` aborta la llamada en curso.
    """

    async def send(self, request: httpx.Request) -> httpx.Response | None:
        ...
