"""Contrato del contexto persistente inyectado.

El contexto es dueño del ciclo de vida de los registros; la fachada
(`core.services.persistence`) nunca los retiene entre llamadas.
"""

from __future__ import annotations

from typing import Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel

R = TypeVar("R", bound=BaseModel)


def entity_name(record_type: type[BaseModel]) -> str:
    """Nombre de entidad de un tipo de registro (nombre de la clase)."""

    return record_type.__name__


@runtime_checkable
class PersistentContext(Protocol):
    """Contexto con cambios pendientes y confirmación explícita.

    - `insert`/`remove`/`replace` dejan cambios pendientes (`has_changes`).
    - `fetch` ve los cambios pendientes.
    - `batch_delete` actúa directamente sobre el almacén.
    - Todas las operaciones pueden lanzar `OSError` o `ValueError`.
    """

    @property
    def has_changes(self) -> bool:
        ...

    def insert(self, record: BaseModel) -> None:
        ...

    def remove(self, record: BaseModel) -> None:
        ...

    def replace(self, old: BaseModel, new: BaseModel) -> None:
        ...

    def fetch(self, record_type: type[R]) -> list[R]:
        ...

    def batch_delete(self, entity: str) -> None:
        ...

    def save(self) -> None:
        ...
