"""Contexto persistente sobre un fichero JSON.

Formato del fichero: `{"<Entidad>": [ {registro}, ... ], ...}` en UTF-8,
indentado y con claves ordenadas. Los registros se materializan con
`model_validate` al hacer `fetch` del tipo correspondiente.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from core.interfaces.store import R, entity_name


class JsonFileContext:
    def __init__(self, path: Path) -> None:
        self._path = path
        self._working: dict[str, list[BaseModel | dict[str, Any]]] | None = None
        self._dirty = False

    @property
    def path(self) -> Path:
        return self._path

    @property
    def has_changes(self) -> bool:
        return self._dirty

    def insert(self, record: BaseModel) -> None:
        self._bucket(entity_name(type(record))).append(record)
        self._dirty = True

    def remove(self, record: BaseModel) -> None:
        bucket = self._bucket(entity_name(type(record)))
        bucket[:] = [r for r in bucket if r is not record]
        self._dirty = True

    def replace(self, old: BaseModel, new: BaseModel) -> None:
        bucket = self._bucket(entity_name(type(old)))
        bucket[:] = [new if r is old else r for r in bucket]
        self._dirty = True

    def fetch(self, record_type: type[R]) -> list[R]:
        bucket = self._bucket(entity_name(record_type))
        # Materializa en sitio: el contexto es dueño de las instancias.
        for index, item in enumerate(bucket):
            if isinstance(item, dict):
                bucket[index] = record_type.model_validate(item)
        return [r for r in bucket if isinstance(r, record_type)]

    def batch_delete(self, entity: str) -> None:
        stored = self._read()
        stored.pop(entity, None)
        self._write(stored)
        if self._working is not None:
            self._working.pop(entity, None)

    def save(self) -> None:
        working = self._load()
        payload = {
            name: [item if isinstance(item, dict) else item.model_dump(mode="json") for item in bucket]
            for name, bucket in working.items()
        }
        self._write(payload)
        self._dirty = False

    def _bucket(self, entity: str) -> list[BaseModel | dict[str, Any]]:
        return self._load().setdefault(entity, [])

    def _load(self) -> dict[str, list[BaseModel | dict[str, Any]]]:
        if self._working is None:
            self._working = {name: list(items) for name, items in self._read().items()}
        return self._working

    def _read(self) -> dict[str, list[dict[str, Any]]]:
        if not self._path.exists():
            return {}
        data = json.loads(self._path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"invalid store document: {self._path}")
        return data

    def _write(self, payload: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
            encoding="utf-8",
        )
        os.replace(tmp, self._path)
