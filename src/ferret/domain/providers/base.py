"""Domain models and protocols for search providers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, TypedDict

from ferret.domain.context import SearchContext


class RawEntry(TypedDict, total=False):
    """Entry returned by a provider before normalization.

    ``link`` and ``title`` are required by contract; a provider that
    omits them fails the query.
    """

    link: str
    title: str
    description: str
    date: datetime | None


class SearchCapability(Protocol):
    """What a provider adapter must implement to answer one query.

    Implementations perform their outbound calls through the cancellable
    fetch so that ``ctx`` bounds them.
    """

    async def search(
        self, ctx: SearchContext, keyword: str, page: int, limit: int
    ) -> list[RawEntry]: ...


@dataclass(frozen=True)
class Provider:
    """Registration record for one backend."""

    name: str
    capability: SearchCapability
    title: str = ""
    enabled: bool = True
    noui: bool = False  # Hidden from the default UI provider list
    priority: int = 0
    rewrite: str = ""  # "link|<pattern>|<replacement>"
