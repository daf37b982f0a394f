"""Composition root: dependency wiring for the HTTP API and the CLI."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import httpx
import structlog
from fastapi import FastAPI

from ferret.application.use_cases import ListProvidersUseCase, SearchUseCase
from ferret.domain.ports import GotoActionPort
from ferret.infrastructure.config import AppConfig
from ferret.infrastructure.providers import HttpxProviderBase, ProviderRegistry
from ferret.infrastructure.providers.constants import DEFAULT_CLIENT_TIMEOUT
from ferret.infrastructure.providers.factory import (
    cleanup_adapters,
    register_providers,
)
from ferret.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


def build_http_client(config: AppConfig) -> httpx.AsyncClient:
    """Shared outbound client for all provider adapters."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(DEFAULT_CLIENT_TIMEOUT),
        headers={"User-Agent": config.http_user_agent},
        follow_redirects=True,
    )


def build_registry(
    config: AppConfig, client: httpx.AsyncClient | None = None
) -> tuple[ProviderRegistry, list[HttpxProviderBase]]:
    registry = ProviderRegistry()
    adapters = register_providers(
        registry,
        config.providers,
        client=client,
        user_agent=config.http_user_agent,
    )
    return registry, adapters


def build_search_use_case(
    config: AppConfig,
    registry: ProviderRegistry,
    goto_action: GotoActionPort | None = None,
) -> SearchUseCase:
    return SearchUseCase(
        providers=registry,
        goto_action=goto_action,
        default_timeout=config.timeout_seconds,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan Hook: Initialize and cleanup all resources (DI Composition Root).

    Order matters:
        1. HTTP client (shared by every adapter)
        2. Provider registry (adapters built from config)
        3. UI provider list (fails startup on unknown names)
        4. Search use case (no goto action over HTTP)
    """
    state = cast(AppState, app.state)
    config = state.config

    # 1) HTTP client
    state.http_client = build_http_client(config)
    log.info("http_client_initialized", user_agent=config.http_user_agent)

    try:
        # 2) Provider registry
        state.providers, state.adapters = build_registry(config, state.http_client)

        # 3) UI providers
        state.ui_providers = ListProvidersUseCase(
            providers=state.providers, selection=config.listen_providers
        ).execute()
        log.info(
            "ui_providers_resolved",
            providers=[p.name for p in state.ui_providers],
        )

        # 4) Search use case
        state.search_uc = build_search_use_case(config, state.providers)

        log.info("app_started", providers=len(state.providers))
        yield
    finally:
        await cleanup_adapters(getattr(state, "adapters", []))
        await state.http_client.aclose()
        log.info("app_stopped")
