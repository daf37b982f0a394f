"""GitHub provider for Ferret.

Code search via the REST API:
- GET /search/code?page=&per_page=&q=<keyword>[+user:<user>]

Token auth is optional for public instances but required by
github.com for code search.
"""

from __future__ import annotations

from typing import Any

from ferret.domain.context import SearchContext
from ferret.domain.providers import RawEntry
from ferret.infrastructure.providers.constants import DEFAULT_GITHUB_URL
from ferret.infrastructure.providers.httpx_base import HttpxProviderBase


class GitHubProvider(HttpxProviderBase):
    """Provider for GitHub code search."""

    kind = "github"
    default_url = DEFAULT_GITHUB_URL

    def __init__(
        self,
        *,
        token: str = "",
        search_user: str = "",
        query: str = "",
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self._token = token
        self._search_user = search_user
        self._query = query

    async def search(
        self, ctx: SearchContext, keyword: str, page: int, limit: int
    ) -> list[RawEntry]:
        q = keyword
        if self._search_user:
            q += f" user:{self._search_user}"
        if self._query:
            q += f" {self._query}"

        headers = {"Accept": "application/vnd.github+json"}
        if self._token:
            headers["Authorization"] = f"token {self._token}"

        data = await self._fetch_json(
            ctx,
            f"{self.url}/search/code",
            params={"page": page, "per_page": limit, "q": q},
            headers=headers,
            context="search",
        )

        entries: list[RawEntry] = []
        for item in (data or {}).get("items") or []:
            repo = item.get("repository") or {}
            entries.append(
                {
                    "link": item.get("html_url", ""),
                    "title": f"{repo.get('full_name', '')}: {item.get('path', '')}",
                    "description": repo.get("description") or "",
                }
            )
        return entries
