"""Codificación de parámetros y utilidades de cuerpo.

Reglas:
- Escapado RFC 3986: solo los caracteres no reservados (`A-Z a-z 0-9 - . _ ~`)
  y la coma quedan literales; el espacio es `%20`.
- Listas se aplanan a `a,b,c`; booleanos se escriben `true`/`false`.
- Cualquier otro tipo de valor es un `TypeError`.
"""

from __future__ import annotations

import json
from urllib.parse import quote

import httpx

from core.domain.models import ParamValue, Params

_SAFE_CHARS = "-._~,"


def stringify(value: ParamValue) -> str:
    """Representación textual de un parámetro."""

    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(item) for item in value)
    raise TypeError(f"unsupported parameter value: {type(value).__name__}")


def percent_escape(text: str) -> str:
    return quote(text, safe=_SAFE_CHARS)


def query_items(params: Params) -> list[tuple[str, str]]:
    return [(key, stringify(value)) for key, value in params.items()]


def encode_pairs(items: list[tuple[str, str]]) -> str:
    return "&".join(f"{percent_escape(k)}={percent_escape(v)}" for k, v in items)


def build_url_with_query(url: httpx.URL, params: Params | None) -> httpx.URL:
    """Añade `params` como query items, conservando la query existente."""

    if not params:
        return url

    encoded = encode_pairs(query_items(params))
    existing = url.query.decode("ascii")
    query = f"{existing}&{encoded}" if existing else encoded
    return url.copy_with(query=query.encode("ascii"))


def form_encode(params: Params) -> bytes:
    """Cuerpo `application/x-www-form-urlencoded` (`k=v&k2=v2`)."""

    return encode_pairs(query_items(params)).encode("utf-8")


def json_encode(params: Params) -> bytes:
    for value in params.values():
        stringify(value)
    return json.dumps(params, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def pretty_json(data: bytes) -> str:
    """JSON indentado para logs; cadena vacía si el cuerpo no es JSON."""

    if not data:
        return ""
    try:
        parsed = json.loads(data)
    except ValueError:
        return ""
    return json.dumps(parsed, ensure_ascii=False, indent=2)
