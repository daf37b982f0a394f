"""Fake provider capabilities shared by the tests."""

from __future__ import annotations

import asyncio
from typing import Any

from ferret.domain.context import SearchContext
from ferret.domain.providers import RawEntry


class StaticCapability:
    """Returns a fixed list of entries and records every call."""

    def __init__(self, entries: list[Any] | None = None) -> None:
        self.entries = entries or []
        self.calls: list[tuple[str, int, int]] = []

    async def search(
        self, ctx: SearchContext, keyword: str, page: int, limit: int
    ) -> list[RawEntry]:
        self.calls.append((keyword, page, limit))
        return list(self.entries)


class HangingCapability:
    """Never returns; records whether it was cancelled."""

    def __init__(self) -> None:
        self.started = asyncio.Event()
        self.cancelled = False

    async def search(
        self, ctx: SearchContext, keyword: str, page: int, limit: int
    ) -> list[RawEntry]:
        self.started.set()
        try:
            await asyncio.sleep(3600)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return []


class FailingCapability:
    def __init__(self, exc: Exception) -> None:
        self.exc = exc

    async def search(
        self, ctx: SearchContext, keyword: str, page: int, limit: int
    ) -> list[RawEntry]:
        raise self.exc

