"""FastAPI application factory (create_app)."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

import structlog
from fastapi import FastAPI, Request
from starlette.responses import Response

from ferret.infrastructure.config import AppConfig
from ferret.interfaces.app_state import AppState
from ferret.interfaces.composition import lifespan

log = structlog.get_logger(__name__)


def create_app(config: AppConfig) -> FastAPI:
    """Create FastAPI app, configuration only.

    Resources (HTTP client, providers, use cases) are created in lifespan().
    """
    app = FastAPI(
        title="Ferret",
        description="Search engine that unifies search results from different resources",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state = AppState()
    app.state.config = config

    from ferret.interfaces.api.search.router import router as search_router

    app.include_router(search_router)

    @app.get("/healthz")
    async def healthz() -> dict[str, str | int]:
        """Liveness probe."""
        providers = getattr(app.state, "providers", None)
        return {"status": "ok", "providers": len(providers) if providers else 0}

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ):
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration_ms = (time.perf_counter() - start) * 1000.0
            log.info(
                "http_request",
                method=request.method,
                path=request.url.path,
                query=str(request.url.query),
                status_code=status_code,
                duration_ms=round(duration_ms, 2),
                client_host=(request.client.host if request.client else None),
            )

    return app
