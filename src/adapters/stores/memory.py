"""Contexto persistente en memoria (tests y uso sin disco)."""

from __future__ import annotations

from pydantic import BaseModel

from core.interfaces.store import R, entity_name


class InMemoryContext:
    """Conjunto de trabajo + instantánea confirmada, ambos en memoria."""

    def __init__(self) -> None:
        self._committed: dict[str, list[BaseModel]] = {}
        self._working: dict[str, list[BaseModel]] = {}
        self._dirty = False

    @property
    def has_changes(self) -> bool:
        return self._dirty

    def insert(self, record: BaseModel) -> None:
        self._working.setdefault(entity_name(type(record)), []).append(record)
        self._dirty = True

    def remove(self, record: BaseModel) -> None:
        bucket = self._working.get(entity_name(type(record)), [])
        self._working[entity_name(type(record))] = [r for r in bucket if r is not record]
        self._dirty = True

    def replace(self, old: BaseModel, new: BaseModel) -> None:
        bucket = self._working.get(entity_name(type(old)), [])
        self._working[entity_name(type(old))] = [new if r is old else r for r in bucket]
        self._dirty = True

    def fetch(self, record_type: type[R]) -> list[R]:
        bucket = self._working.get(entity_name(record_type), [])
        return [r for r in bucket if isinstance(r, record_type)]

    def batch_delete(self, entity: str) -> None:
        self._working.pop(entity, None)
        self._committed.pop(entity, None)

    def save(self) -> None:
        self._committed = {name: list(bucket) for name, bucket in self._working.items()}
        self._dirty = False

    def rollback(self) -> None:
        """Descarta los cambios pendientes."""

        self._working = {name: list(bucket) for name, bucket in self._committed.items()}
        self._dirty = False
