"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from starlette.datastructures import State

from ferret.infrastructure.config import AppConfig

if TYPE_CHECKING:
    from ferret.application.use_cases import SearchUseCase
    from ferret.domain.entities import ProviderInfo
    from ferret.infrastructure.providers import HttpxProviderBase, ProviderRegistry


class AppState(State):
    """FastAPI application state with all DI resources.

    Lifecycle managed by composition.py::lifespan().
    """

    # Configuration
    config: AppConfig

    # Infrastructure
    http_client: httpx.AsyncClient
    adapters: list[HttpxProviderBase]

    # Domain
    providers: ProviderRegistry

    # Application Services
    search_uc: SearchUseCase

    # Providers exposed over HTTP (resolved once at startup)
    ui_providers: list[ProviderInfo]
