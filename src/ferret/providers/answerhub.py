"""AnswerHub provider for Ferret.

Searches an AnswerHub (Q&A) instance via its REST API:
- GET /services/v2/node.json?page=&pageSize=&q=<keyword>*

Optional HTTP basic auth (username/password).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import httpx

from ferret.domain.context import SearchContext
from ferret.domain.providers import RawEntry
from ferret.infrastructure.providers.constants import truncate
from ferret.infrastructure.providers.httpx_base import HttpxProviderBase


class AnswerHubProvider(HttpxProviderBase):
    """Provider for AnswerHub questions."""

    kind = "answerhub"

    def __init__(self, *, username: str = "", password: str = "", **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._auth = httpx.BasicAuth(username, password) if username or password else None

    async def search(
        self, ctx: SearchContext, keyword: str, page: int, limit: int
    ) -> list[RawEntry]:
        data = await self._fetch_json(
            ctx,
            f"{self.url}/services/v2/node.json",
            params={"page": page, "pageSize": limit, "q": f"{keyword}*"},
            auth=self._auth,
            context="search",
        )

        entries: list[RawEntry] = []
        for item in (data or {}).get("list") or []:
            entries.append(
                {
                    "link": f"{self.url}/questions/{item.get('id')}/",
                    "title": item.get("title", ""),
                    "description": _describe(item),
                    "date": _from_epoch_ms(item.get("creationDate")),
                }
            )
        return entries


def _describe(item: dict[str, Any]) -> str:
    body = truncate(item.get("body") or "")
    if body:
        return body
    author = item.get("author") or {}
    return f"Asked by {author.get('realname') or author.get('username') or 'unknown'}"


def _from_epoch_ms(value: Any) -> datetime | None:
    if not isinstance(value, (int, float)) or value <= 0:
        return None
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
