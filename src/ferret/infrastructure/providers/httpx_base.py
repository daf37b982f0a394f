"""Shared base class for httpx-based provider adapters.

Holds what every adapter needs: client lifecycle, cleanup, and a
JSON fetch that goes through the cancellable fetch and turns bad
statuses and undecodable bodies into ``ProviderFetchError``.

Adapters structurally satisfy ``SearchCapability``; the domain layer
only knows that Protocol.
"""

from __future__ import annotations

import json
from typing import Any

import httpx
import structlog

from ferret.domain.context import SearchContext
from ferret.domain.providers import RawEntry

from .constants import DEFAULT_CLIENT_TIMEOUT, DEFAULT_USER_AGENT
from .fetch import fetch


class ProviderFetchError(Exception):
    """Transport, status or decoding failure inside an adapter."""


class HttpxProviderBase:
    """Shared base for httpx-based provider adapters.

    Subclasses **must** set:
    - ``kind`` (adapter type, e.g. ``"github"``)

    Subclasses **must** override:
    - ``search()``

    Subclasses **may** override:
    - ``default_url``, ``_timeout``, ``_user_agent``
    """

    kind: str = ""
    default_url: str = ""

    _timeout: float = DEFAULT_CLIENT_TIMEOUT
    _user_agent: str = DEFAULT_USER_AGENT

    def __init__(
        self,
        *,
        url: str = "",
        client: httpx.AsyncClient | None = None,
        user_agent: str | None = None,
    ) -> None:
        self.url: str = (url or self.default_url).rstrip("/")
        self._client = client
        self._owns_client = client is None
        if user_agent:
            self._user_agent = user_agent
        self._log = structlog.get_logger(self.kind or __name__)

    # ------------------------------------------------------------------
    # Client lifecycle
    # ------------------------------------------------------------------

    def _ensure_client(self) -> httpx.AsyncClient:
        """Create httpx client if not already running."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
                headers={"User-Agent": self._user_agent},
            )
            self._owns_client = True
        return self._client

    async def cleanup(self) -> None:
        """Close the httpx client if this adapter created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------
    # Convenience helpers
    # ------------------------------------------------------------------

    async def _fetch_json(
        self,
        ctx: SearchContext,
        url: str,
        *,
        method: str = "GET",
        context: str = "",
        auth: httpx.Auth | None = None,
        **kwargs: Any,
    ) -> Any:
        """Fetch *url* through the cancellable fetch and decode the JSON body.

        Raises:
            DeadlineExceeded / Canceled: *ctx* finished first.
            ProviderFetchError: Transport error, non-2xx status or invalid JSON.
        """
        client = self._ensure_client()
        request = client.build_request(method, url, **kwargs)
        try:
            resp = await fetch(ctx, client, request, auth=auth)
        except httpx.HTTPError as exc:
            self._log.warning(
                f"{self.kind}_fetch_error",
                url=url,
                error=str(exc),
                context=context,
            )
            raise ProviderFetchError(f"failed to fetch data. Error: {exc}") from exc

        if not 200 <= resp.status_code <= 299:
            self._log.warning(
                f"{self.kind}_http_error",
                url=url,
                status=resp.status_code,
                context=context,
            )
            raise ProviderFetchError(f"bad response: {resp.status_code}")

        try:
            return resp.json()
        except (json.JSONDecodeError, ValueError) as exc:
            self._log.warning(
                f"{self.kind}_invalid_json",
                url=url,
                context=context,
            )
            raise ProviderFetchError(
                f"failed to unmarshal JSON data. Error: {exc}"
            ) from exc

    # ------------------------------------------------------------------
    # Abstract search (subclass must implement)
    # ------------------------------------------------------------------

    async def search(
        self, ctx: SearchContext, keyword: str, page: int, limit: int
    ) -> list[RawEntry]:
        """Search the backend and return raw entries for one page.

        Subclasses **must** override this method.
        """
        raise NotImplementedError(f"{type(self).__name__}.search() not implemented")
