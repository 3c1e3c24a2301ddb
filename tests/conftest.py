"""Shared test fixtures for netspm tests."""

from __future__ import annotations

import pytest

from core.config import AppSettings


@pytest.fixture
def settings(tmp_path) -> AppSettings:
    """Settings isolated from the developer's `.env` files."""
    return AppSettings(_env_file=None, store_path=tmp_path / "store.json")
