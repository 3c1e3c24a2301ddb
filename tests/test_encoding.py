"""Tests for parameter encoding helpers."""

from __future__ import annotations

import json

import httpx
import pytest

from adapters.encoding import (
    build_url_with_query,
    form_encode,
    json_encode,
    percent_escape,
    pretty_json,
    stringify,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("a b", "a b"),
        (3, "3"),
        (1.5, "1.5"),
        (True, "true"),
        (False, "false"),
        ([1, 2, 3], "1,2,3"),
        (["x", [True, 2]], "x,true,2"),
    ],
)
def test_stringify(value: object, expected: str) -> None:
    assert stringify(value) == expected  # type: ignore[arg-type]


def test_stringify_rejects_unsupported_values() -> None:
    with pytest.raises(TypeError):
        stringify({"nested": "dict"})  # type: ignore[arg-type]


def test_percent_escape_is_rfc3986() -> None:
    assert percent_escape("a b") == "a%20b"
    assert percent_escape("1,2,3") == "1,2,3"
    assert percent_escape("a&b=c") == "a%26b%3Dc"
    assert percent_escape("-._~") == "-._~"
    assert percent_escape("ñ") == "%C3%B1"


def test_query_flattens_arrays_and_escapes_values() -> None:
    url = build_url_with_query(httpx.URL("https://api.test/search"), {"ids": [1, 2, 3], "q": "a b"})

    assert url.query == b"ids=1,2,3&q=a%20b"


def test_query_keeps_existing_items() -> None:
    url = build_url_with_query(httpx.URL("https://api.test/search?page=2"), {"q": "x"})

    assert url.query == b"page=2&q=x"


def test_query_without_params_returns_same_url() -> None:
    url = httpx.URL("https://api.test/search")

    assert build_url_with_query(url, None) is url
    assert build_url_with_query(url, {}) is url


def test_form_encode() -> None:
    assert form_encode({"a": "1", "b": "x y"}) == b"a=1&b=x%20y"


def test_json_encode_round_trips() -> None:
    params = {"name": "ana", "tags": ["a", "b"], "active": True, "score": 2.5}

    assert json.loads(json_encode(params)) == params


def test_pretty_json() -> None:
    assert pretty_json(b'{"a":1}') == '{\n  "a": 1\n}'
    assert pretty_json(b"not json") == ""
    assert pretty_json(b"") == ""
