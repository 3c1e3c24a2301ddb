"""Test doubles shared by the pipeline tests."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from datetime import datetime

import httpx
from pydantic import BaseModel

Handler = Callable[[httpx.Request], Awaitable[httpx.Response]]


class Item(BaseModel):
    """Payload used by pipeline tests."""

    id: int
    name: str
    created: datetime


class RecordingHandler:
    """MockTransport handler that stores every request and replies with a fixed response."""

    def __init__(self, status_code: int = 200, *, json: object = None, content: bytes | None = None) -> None:
        self.status_code = status_code
        self.json = json
        self.content = content
        self.requests: list[httpx.Request] = []

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        if self.json is not None:
            return httpx.Response(self.status_code, json=self.json)
        return httpx.Response(self.status_code)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


class NoResponseTransport:
    """Transport double whose `send` yields no response object."""

    def __init__(self) -> None:
        self.calls = 0

    async def send(self, request: httpx.Request) -> httpx.Response | None:
        self.calls += 1
        return None


def make_client(handler: Handler) -> httpx.AsyncClient:
    """Return an `httpx.AsyncClient` wired to a `MockTransport`."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))
