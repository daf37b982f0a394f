"""Trello provider for Ferret.

Card search via the REST API:
- GET /search?modelTypes=cards&cards_page=<page-1>&cards_limit=&query=

Requires an API key and token.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from ferret.domain.context import SearchContext
from ferret.domain.providers import RawEntry
from ferret.infrastructure.providers.constants import DEFAULT_TRELLO_URL, truncate
from ferret.infrastructure.providers.httpx_base import HttpxProviderBase


class TrelloProvider(HttpxProviderBase):
    """Provider for Trello cards."""

    kind = "trello"
    default_url = DEFAULT_TRELLO_URL

    def __init__(self, *, key: str = "", token: str = "", **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._key = key
        self._token = token

    async def search(
        self, ctx: SearchContext, keyword: str, page: int, limit: int
    ) -> list[RawEntry]:
        data = await self._fetch_json(
            ctx,
            f"{self.url}/search",
            params={
                "key": self._key,
                "token": self._token,
                "partial": "true",
                "modelTypes": "cards",
                "card_fields": "name,shortUrl,desc,dateLastActivity",
                "cards_page": page - 1,  # Trello pages are 0-based
                "cards_limit": limit,
                "query": keyword,
            },
            context="search",
        )

        entries: list[RawEntry] = []
        for card in (data or {}).get("cards") or []:
            entries.append(
                {
                    "link": card.get("shortUrl", ""),
                    "title": card.get("name", ""),
                    "description": truncate(card.get("desc") or ""),
                    "date": _parse_date(card.get("dateLastActivity")),
                }
            )
        return entries


def _parse_date(value: Any) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        # e.g. 2016-03-01T10:20:30.000Z
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
