"""Search use case: validate, dispatch, normalize, rewrite, sort, goto."""

from __future__ import annotations

import time
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

import structlog

from ferret.domain.context import (
    Canceled,
    DeadlineExceeded,
    SearchContext,
    run_cancellable,
)
from ferret.domain.entities import (
    DEFAULT_TIMEOUT_SECONDS,
    Query,
    Result,
    RewriteRule,
    sort_results,
)
from ferret.domain.exceptions import (
    GotoActionError,
    InvalidGotoIndexError,
    InvalidParameterError,
    InvalidProviderError,
    MalformedResultError,
    MissingKeywordError,
    ProviderError,
    ProviderNotFoundError,
    SearchCanceledError,
    SearchError,
    SearchTimeoutError,
)
from ferret.domain.ports import GotoActionPort, ProviderRegistryPort
from ferret.domain.providers import Provider

log = structlog.get_logger(__name__)


class SearchUseCase:
    """Executes one search query against one provider.

    Flow:
        1. Validate provider, keyword, page and limit (no network access)
        2. Call the provider's search capability bounded by the query timeout
        3. Normalize raw entries into Results
        4. Apply the provider's rewrite rule
        5. Sort by title
        6. Optionally hand the selected link to the goto action

    Every terminal state sets ``query.http_status``.  Failures raise a
    ``SearchError`` subclass; cancelled or timed-out queries carry no
    results.
    """

    def __init__(
        self,
        *,
        providers: ProviderRegistryPort,
        goto_action: GotoActionPort | None = None,
        default_timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._providers = providers
        self._goto_action = goto_action
        self._default_timeout = default_timeout

    async def execute(self, query: Query, ctx: SearchContext | None = None) -> Query:
        """Run *query* to completion and return it.

        Args:
            query: Query with provider, keyword, page, limit, goto and timeout.
            ctx: Parent context; cancelling it cancels the query.

        Raises:
            InvalidProviderError, MissingKeywordError, InvalidParameterError:
                Validation failed.
            SearchTimeoutError: Provider did not answer within the timeout.
            SearchCanceledError: *ctx* was cancelled.
            ProviderError: Provider failed.
            MalformedResultError: Provider returned an entry without link/title.
            RewriteError: Provider rewrite rule is invalid.
            InvalidGotoIndexError, GotoActionError: Goto failed.
        """
        try:
            provider = self._validate(query)
            raw_entries = await self._dispatch(provider, query, ctx)
            results = self._normalize(provider, raw_entries)

            rule = RewriteRule.parse(provider.rewrite)
            if rule is not None:
                rule.apply(results)

            query.results = sort_results(results)

            if query.goto != 0:
                await self._goto(query)
        except SearchError as e:
            query.http_status = e.http_status
            log.info(
                "search_failed",
                provider=query.provider,
                keyword=query.keyword,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise

        query.http_status = 200
        log.info(
            "search_completed",
            provider=query.provider,
            keyword=query.keyword,
            page=query.page,
            limit=query.limit,
            result_count=len(query.results),
            elapsed_ms=query.elapsed_ms,
            goto=query.goto or None,
        )
        return query

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def _validate(self, query: Query) -> Provider:
        try:
            provider = self._providers.get(query.provider)
        except ProviderNotFoundError as e:
            names = self._providers.list_names()
            raise InvalidProviderError(
                "invalid search provider. Possible search providers are "
                f"{', '.join(names) or '(none)'}",
                provider_names=names,
            ) from e

        if not query.keyword:
            raise MissingKeywordError("missing keyword")
        if query.page < 1:
            raise InvalidParameterError("invalid page #. It should be greater than 0")
        if query.limit < 1:
            raise InvalidParameterError("invalid limit. It should be greater than 0")

        return provider

    async def _dispatch(
        self,
        provider: Provider,
        query: Query,
        parent: SearchContext | None,
    ) -> list[Any]:
        timeout = query.timeout if query.timeout > 0 else self._default_timeout
        parent = parent or SearchContext.background()

        query.start = datetime.now(timezone.utc)
        started = time.perf_counter()

        with parent.with_timeout(timeout) as ctx:
            try:
                raw_entries = await run_cancellable(
                    ctx,
                    provider.capability.search(
                        ctx, query.keyword, query.page, query.limit
                    ),
                )
            except DeadlineExceeded as e:
                raise SearchTimeoutError(
                    "request exceeded the configured timeout "
                    f"({timeout * 1000:.0f}ms)"
                ) from e
            except Canceled as e:
                raise SearchCanceledError("canceled") from e
            except Exception as e:
                raise ProviderError(
                    f"failed to search {provider.name} due to {e}",
                    provider=provider.name,
                    stage="search",
                ) from e

        query.elapsed = time.perf_counter() - started
        return list(raw_entries or [])

    def _normalize(self, provider: Provider, raw_entries: list[Any]) -> list[Result]:
        title = provider.title or provider.name
        results: list[Result] = []
        for index, entry in enumerate(raw_entries, start=1):
            if not isinstance(entry, Mapping):
                raise MalformedResultError(
                    f"provider {provider.name} returned a non-mapping entry "
                    f"#{index}: {type(entry).__name__}"
                )
            link = entry.get("link")
            entry_title = entry.get("title")
            if not link or not isinstance(link, str):
                raise MalformedResultError(
                    f"provider {provider.name} returned entry #{index} without a link"
                )
            if not entry_title or not isinstance(entry_title, str):
                raise MalformedResultError(
                    f"provider {provider.name} returned entry #{index} without a title"
                )
            date = entry.get("date")
            if date is not None and not isinstance(date, datetime):
                raise MalformedResultError(
                    f"provider {provider.name} returned entry #{index} with an "
                    f"invalid date: {type(date).__name__}"
                )

            results.append(
                Result(
                    link=link,
                    title=entry_title,
                    description=entry.get("description") or "",
                    date=date,
                    source=title,
                )
            )
        return results

    async def _goto(self, query: Query) -> None:
        count = len(query.results)
        if query.goto < 1 or query.goto > count:
            raise InvalidGotoIndexError(
                f"invalid result # to go. It should be between 1 and {count}"
            )

        link = query.results[query.goto - 1].link
        if self._goto_action is None:
            raise GotoActionError(f"failed to go to {link}: no goto action configured")

        query.goto_link = link
        try:
            await self._goto_action.open(link)
        except Exception as e:
            raise GotoActionError(f"failed to go to {link} due to {e}") from e
