"""Shared test fixtures for Ferret test suite."""

from __future__ import annotations

import asyncio
import os
from collections.abc import AsyncIterator, Callable
from typing import Any
from unittest.mock import AsyncMock

import pytest

from ferret.domain.providers import Provider, RawEntry
from ferret.infrastructure.providers.registry import ProviderRegistry

from fakes import StaticCapability

# ---------------------------------------------------------------------------
# Domain fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def entries() -> list[RawEntry]:
    return [
        {"link": "https://example.com/c", "title": "charlie"},
        {"link": "https://example.com/a", "title": "alpha", "description": "first"},
        {"link": "https://example.com/b", "title": "bravo"},
    ]


@pytest.fixture()
def make_provider() -> Callable[..., Provider]:
    def _make(name: str = "fake", capability: Any = None, **kwargs: Any) -> Provider:
        return Provider(
            name=name,
            capability=capability if capability is not None else StaticCapability(),
            **kwargs,
        )

    return _make


@pytest.fixture()
def registry() -> ProviderRegistry:
    return ProviderRegistry()


@pytest.fixture()
def goto_action() -> AsyncMock:
    mock = AsyncMock()
    mock.open.return_value = None
    return mock


@pytest.fixture()
async def silent_server() -> AsyncIterator[str]:
    """Local HTTP endpoint that accepts connections and never answers."""

    async def _handle(
        reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        try:
            await reader.read()
        finally:
            writer.close()

    server = await asyncio.start_server(_handle, "127.0.0.1", 0)
    host, port = server.sockets[0].getsockname()[:2]
    try:
        yield f"http://{host}:{port}/"
    finally:
        server.close()
        await server.wait_closed()


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _clean_ferret_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """FERRET_* variables from the developer's shell must not leak into tests."""
    for key in list(os.environ):
        if key.startswith("FERRET_"):
            monkeypatch.delenv(key, raising=False)
