"""Modelos del dominio (Pydantic v2).

Describen *qué* viaja por la fachada de red (petición, sobre de error,
respuesta vacía), no *cómo* se envía.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict
from typing_extensions import TypeAliasType

ParamValue = TypeAliasType(
    "ParamValue",
    "Union[str, bool, int, float, list[ParamValue]]",
)
"""Valor admitido en un mapa de parámetros: escalar o lista (anidable)."""

Params = dict[str, ParamValue]
Headers = dict[str, Any]


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class BodyType(str, Enum):
    """Dónde viajan los parámetros de la petición."""

    IN_BODY = "body"
    IN_QUERY = "query"


class ResponseExpectation(str, Enum):
    """Qué espera el llamante del cuerpo de una respuesta exitosa.

    - BODY: decodificar el JSON al tipo pedido.
    - EMPTY: no tocar el cuerpo y devolver `EmptyResponse`.
    """

    BODY = "body"
    EMPTY = "empty"


class RequestDescriptor(BaseModel):
    """Petición HTTP inmutable, construida por llamada y descartada al terminar."""

    model_config = ConfigDict(frozen=True)

    method: HttpMethod = Field(default=HttpMethod.GET)
    url: str | None = Field(
        default=None,
        description="URL destino. Su ausencia produce `InvalidURLError` antes de cualquier I/O.",
    )
    headers: Headers = Field(
        default_factory=dict,
        description="Cabeceras; solo se copian los valores `str`.",
    )
    params: Params | None = Field(
        default=None,
        description="Parámetros de la petición (cuerpo o query según `body_type`).",
    )
    must_encode_params: bool = Field(
        default=False,
        description="True: cuerpo form-url-encoded; False: cuerpo JSON.",
    )
    body_type: BodyType = Field(default=BodyType.IN_BODY)


class EmptyResponse(BaseModel):
    """Marcador de respuesta sin contenido."""

    model_config = ConfigDict(frozen=True)


class ErrorResponse(BaseModel):
    """Sobre de error estándar devuelto por el servidor en respuestas no-2xx."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    error_message: str | None = Field(default=None, alias="errorMessage")
    description: str | None = None
    code: int | None = None
