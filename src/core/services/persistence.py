"""Fachada de persistencia sobre un `PersistentContext` inyectado.

El contexto lo crea la raíz de composición (`build_persistence`) y se pasa
por constructor; la fachada no guarda registros entre llamadas ni añade
sincronización propia.

Errores: todo fallo del contexto (`OSError`, `ValueError`) se traduce a
`StoreError` con su `StoreErrorKind`.
"""

from __future__ import annotations

import logging
from typing import Callable

from pydantic import BaseModel

from adapters.stores import InMemoryContext, JsonFileContext
from core.config import AppSettings
from core.domain.errors import StoreError, StoreErrorKind
from core.interfaces.store import PersistentContext, R, entity_name

logger = logging.getLogger(__name__)

Predicate = Callable[[R], bool]

_CONTEXT_ERRORS = (OSError, ValueError)


class PersistenceController:
    def __init__(self, context: PersistentContext) -> None:
        self._context = context

    @property
    def context(self) -> PersistentContext:
        return self._context

    def save_data(self) -> None:
        """Confirma los cambios pendientes (no-op si no hay)."""

        if not self._context.has_changes:
            return
        try:
            self._context.save()
        except _CONTEXT_ERRORS as exc:
            logger.error("[STORE] [SAVEDATA][ERROR]: [%s]", exc)
            raise StoreError(StoreErrorKind.SAVE) from exc
        logger.info("[STORE]: [SAVEDATA SUCCESS]")

    def get_saved_data(self, record_type: type[R]) -> list[R]:
        """Todos los registros del tipo; lista vacía si no hay ninguno."""

        try:
            records = self._context.fetch(record_type)
        except _CONTEXT_ERRORS as exc:
            logger.error("[STORE] [GET-SAVEDATA][ERROR]: [%s]", exc)
            raise StoreError(StoreErrorKind.FETCH) from exc
        logger.info("[STORE]: [GET-SAVEDATA SUCCESS] [%s: %d]", entity_name(record_type), len(records))
        return records

    def delete_saved_data(self, record_type: type[BaseModel]) -> None:
        """Borrado masivo de todos los registros del tipo."""

        try:
            self._context.batch_delete(entity_name(record_type))
        except _CONTEXT_ERRORS as exc:
            logger.error("[STORE] [DELETE-SAVEDATA][ERROR]: [%s]", exc)
            raise StoreError(StoreErrorKind.DELETE) from exc
        logger.info("[STORE]: [DELETE-SAVEDATA SUCCESS] [%s]", entity_name(record_type))

    # CRUD

    def create(self, record: R) -> R:
        """Inserta un registro como cambio pendiente (confirmar con `save_data`)."""

        self._context.insert(record)
        return record

    def get(self, record_type: type[R], predicate: Predicate[R] | None = None) -> list[R]:
        records = self.get_saved_data(record_type)
        if predicate is None:
            return records
        return [r for r in records if predicate(r)]

    def get_first(self, record_type: type[R], predicate: Predicate[R]) -> R | None:
        """Primer registro que cumple `predicate`, o None.

        Igual que `get_saved_data`: "no hay coincidencias" no es un error.
        """

        matches = self.get(record_type, predicate)
        return matches[0] if matches else None

    def exists(self, record_type: type[R], predicate: Predicate[R]) -> bool:
        return self.get_first(record_type, predicate) is not None

    def count(self, record_type: type[BaseModel]) -> int:
        return len(self.get_saved_data(record_type))

    def delete(self, record_type: type[R], predicate: Predicate[R]) -> int:
        """Borra los registros que cumplen `predicate` y confirma. Devuelve cuántos."""

        matches = self.get(record_type, predicate)
        try:
            for record in matches:
                self._context.remove(record)
        except _CONTEXT_ERRORS as exc:
            logger.error("[STORE] [DELETE][ERROR]: [%s]", exc)
            raise StoreError(StoreErrorKind.DELETE) from exc
        self.save_data()
        return len(matches)

    def update_first(self, record_type: type[R], predicate: Predicate[R], **changes: object) -> R:
        """Aplica `changes` al primer registro que cumple `predicate` y confirma.

        Sin coincidencia no hay nada que actualizar: `StoreError(UPDATE)`.
        Un cambio que no valida contra el modelo también es `StoreError(UPDATE)`
        y deja el registro intacto.
        """

        current = self.get_first(record_type, predicate)
        if current is None:
            logger.error("[STORE] [UPDATE][ERROR]: [no %s matches]", entity_name(record_type))
            raise StoreError(StoreErrorKind.UPDATE)

        try:
            updated = record_type.model_validate({**current.model_dump(), **changes})
            self._context.replace(current, updated)
            self._context.save()
        except _CONTEXT_ERRORS as exc:
            logger.error("[STORE] [UPDATE][ERROR]: [%s]", exc)
            raise StoreError(StoreErrorKind.UPDATE) from exc
        logger.info("[STORE]: [UPDATE SUCCESS] [%s]", entity_name(record_type))
        return updated


def build_persistence(settings: AppSettings | None = None) -> PersistenceController:
    """Raíz de composición: fichero JSON si hay `store_path`, si no memoria."""

    settings = settings or AppSettings()
    if settings.store_path is not None:
        context: PersistentContext = JsonFileContext(settings.store_path)
    else:
        context = InMemoryContext()
    logger.info("[STORE]: [CONFIGURED] [%s]", type(context).__name__)
    return PersistenceController(context)
