"""Decodificador JSON tipado (pydantic `TypeAdapter`)."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, TypeVar

from pydantic import TypeAdapter

T = TypeVar("T")


@lru_cache(maxsize=256)
def _adapter_for(target: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target)


class JsonDecoder:
    """Decodifica bytes JSON al tipo pedido.

    Fechas: cadenas ISO-8601 (comportamiento por defecto de pydantic).
    `strict=True` activa el modo estricto de pydantic (sin coerciones).
    Los fallos se propagan como `pydantic.ValidationError`.
    """

    def __init__(self, *, strict: bool = False) -> None:
        self.strict = strict

    def decode(self, target: type[T] | Any, data: bytes) -> T:
        return _adapter_for(target).validate_json(data, strict=True if self.strict else None)

    def __repr__(self) -> str:
        return f"JsonDecoder(strict={self.strict})"


def new_json_decoder() -> JsonDecoder:
    return JsonDecoder()
