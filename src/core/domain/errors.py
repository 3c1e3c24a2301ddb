"""Taxonomía cerrada de errores de la librería.

Red:
- `NetworkError` y subclases, una por `NetworkErrorKind`.
- Cualquier otra excepción del transporte se propaga tal cual (tipo opaco).

Persistencia:
- `StoreError` con `StoreErrorKind` y una descripción fija por tipo.
"""

from __future__ import annotations

from enum import Enum

DEFAULT_ERROR_MESSAGE = "default.error.message"
DEFAULT_CONNECTION_ERROR_MESSAGE = "default.connection.error.message"
DECODING_ERROR_MESSAGE = "decoding error"


class NetworkErrorKind(str, Enum):
    INVALID_URL = "invalid_url"
    NO_RESPONSE = "no_response"
    DECODE = "decode"
    SERVER_ERROR = "server_error"
    NO_INTERNET = "no_internet"


class NetworkError(Exception):
    """Error estructurado de la fachada de red."""

    kind: NetworkErrorKind

    def __init__(self, message: str | None = None) -> None:
        self.message = message
        super().__init__(message or self.kind.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NetworkError):
            return NotImplemented
        return self.kind is other.kind and self.message == other.message

    def __hash__(self) -> int:
        return hash((self.kind, self.message))

    def __repr__(self) -> str:
        if self.message is None:
            return f"{type(self).__name__}()"
        return f"{type(self).__name__}({self.message!r})"


class InvalidURLError(NetworkError):
    kind = NetworkErrorKind.INVALID_URL


class NoResponseError(NetworkError):
    kind = NetworkErrorKind.NO_RESPONSE


class DecodeError(NetworkError):
    """Fallo de decodificación JSON; el sub-tipo estructural no se conserva."""

    kind = NetworkErrorKind.DECODE

    def __init__(self, message: str = DECODING_ERROR_MESSAGE) -> None:
        super().__init__(message)


class ServerError(NetworkError):
    kind = NetworkErrorKind.SERVER_ERROR

    def __init__(self, message: str = DEFAULT_ERROR_MESSAGE) -> None:
        super().__init__(message)


class NoInternetError(NetworkError):
    kind = NetworkErrorKind.NO_INTERNET

    def __init__(self, message: str = DEFAULT_CONNECTION_ERROR_MESSAGE) -> None:
        super().__init__(message)


class StoreErrorKind(str, Enum):
    SAVE = "save"
    DELETE = "delete"
    FETCH = "fetch"
    UPDATE = "update"

    @property
    def description(self) -> str:
        return _STORE_DESCRIPTIONS[self]


_STORE_DESCRIPTIONS: dict[StoreErrorKind, str] = {
    StoreErrorKind.SAVE: "Failed to save changes.",
    StoreErrorKind.DELETE: "Failed to delete object.",
    StoreErrorKind.FETCH: "Failed to fetch objects.",
    StoreErrorKind.UPDATE: "Failed to update object.",
}


class StoreError(Exception):
    """Error de la fachada de persistencia."""

    def __init__(self, kind: StoreErrorKind) -> None:
        self.kind = kind
        super().__init__(kind.description)

    @property
    def description(self) -> str:
        return self.kind.description
