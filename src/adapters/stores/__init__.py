"""Contextos persistentes concretos.

Cada módulo implementa `core.interfaces.store.PersistentContext`.
"""

from adapters.stores.json_file import JsonFileContext
from adapters.stores.memory import InMemoryContext

__all__ = [
	"InMemoryContext",
	"JsonFileContext",
]
