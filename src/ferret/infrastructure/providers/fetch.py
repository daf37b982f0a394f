"""Cancellable HTTP fetch for provider adapters.

Every adapter sends its outbound requests through ``fetch()`` so that
the query's ``SearchContext`` bounds them.  The request is sent and its
body read inside the raced task; when the context finishes first the
task is cancelled, which makes httpx drop the connection instead of
returning it to the pool, and the task is drained before
``DeadlineExceeded`` / ``Canceled`` propagates.

When the context has a deadline, the request's httpx timeout is
replaced by the time left plus ``DEADLINE_GRACE``, so the context
always fires before the client's own (fixed) timeout does.
"""

from __future__ import annotations

import httpx
import structlog

from ferret.domain.context import ContextError, SearchContext, run_cancellable

log = structlog.get_logger(__name__)

DEADLINE_GRACE = 1.0


def _bound_to_deadline(ctx: SearchContext, request: httpx.Request) -> None:
    left = ctx.time_left()
    if left is not None:
        request.extensions["timeout"] = httpx.Timeout(left + DEADLINE_GRACE).as_dict()


async def _send(
    client: httpx.AsyncClient,
    request: httpx.Request,
    auth: httpx.Auth | None,
) -> httpx.Response:
    kwargs = {"auth": auth} if auth is not None else {}
    response = await client.send(request, stream=True, **kwargs)
    try:
        await response.aread()
    finally:
        await response.aclose()
    return response


async def fetch(
    ctx: SearchContext,
    client: httpx.AsyncClient,
    request: httpx.Request,
    *,
    auth: httpx.Auth | None = None,
) -> httpx.Response:
    """Send *request* with *client*, bounded by *ctx*.

    Returns:
        The fully read response (any status code).

    Raises:
        DeadlineExceeded / Canceled: *ctx* finished before the response
            was read; the request has been aborted.
        httpx.HTTPError: Transport error, unchanged.
    """
    if not ctx.done:
        _bound_to_deadline(ctx, request)
    try:
        return await run_cancellable(ctx, _send(client, request, auth))
    except ContextError as e:
        log.debug(
            "fetch_aborted",
            method=request.method,
            url=str(request.url.copy_with(query=None)),
            reason=str(e),
        )
        raise
