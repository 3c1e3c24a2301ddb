"""Tests for the httpx client builder."""

from __future__ import annotations

import asyncio

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import HttpMethod
from core.interfaces.transport import HttpTransport
from core.services.network_controller import NetworkController

from .helpers import RecordingHandler


def test_client_defaults_reach_the_request() -> None:
    settings = AppSettings(_env_file=None, user_agent="netspm-test/1", http_timeout_seconds=3)
    handler = RecordingHandler(json={"ok": True})

    async def _run() -> object:
        async with build_async_client(
            settings,
            extra_headers={"X-Trace": "t1"},
            transport=httpx.MockTransport(handler),
        ) as client:
            assert isinstance(client, HttpTransport)
            assert client.timeout.read == 3
            return await NetworkController(client).request(HttpMethod.GET, "https://api.test/ping")

    assert asyncio.run(_run()) == {"ok": True}
    headers = handler.last.headers
    assert headers["User-Agent"] == "netspm-test/1"
    assert headers["Accept"] == "application/json"
    assert headers["X-Trace"] == "t1"
    assert headers["Content-Type"] == "application/json"
