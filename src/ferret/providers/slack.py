"""Slack provider for Ferret.

Message search via the Web API:
- GET /search.all?page=&count=&query=<keyword>

Requires a user token with the ``search:read`` scope.
"""

from __future__ import annotations

from typing import Any

from ferret.domain.context import SearchContext
from ferret.domain.providers import RawEntry
from ferret.infrastructure.providers.constants import DEFAULT_SLACK_URL
from ferret.infrastructure.providers.httpx_base import (
    HttpxProviderBase,
    ProviderFetchError,
)

_MAX_TEXT = 120


class SlackProvider(HttpxProviderBase):
    """Provider for Slack messages."""

    kind = "slack"
    default_url = DEFAULT_SLACK_URL

    def __init__(self, *, token: str = "", **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._token = token

    async def search(
        self, ctx: SearchContext, keyword: str, page: int, limit: int
    ) -> list[RawEntry]:
        data = await self._fetch_json(
            ctx,
            f"{self.url}/search.all",
            params={"page": page, "count": limit, "query": keyword},
            headers={"Authorization": f"Bearer {self._token}"},
            context="search",
        )
        data = data or {}
        # Slack reports API errors with HTTP 200 and ok=false.
        if data.get("ok") is False:
            raise ProviderFetchError(f"slack error: {data.get('error', 'unknown')}")

        entries: list[RawEntry] = []
        for match in (data.get("messages") or {}).get("matches") or []:
            text = match.get("text") or ""
            entries.append(
                {
                    "link": match.get("permalink", ""),
                    "title": f"{match.get('username', '')}: {text[:_MAX_TEXT]}",
                }
            )
        return entries
