"""Builds registry records from ``providers:`` config entries."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

import httpx
import structlog

from ferret.domain.exceptions import InvalidProviderError
from ferret.domain.providers import Provider
from ferret.infrastructure.config.schema import ProviderConfig
from ferret.providers import (
    AnswerHubProvider,
    ConsulProvider,
    GitHubProvider,
    SlackProvider,
    TrelloProvider,
)

from .httpx_base import HttpxProviderBase
from .registry import ProviderRegistry

log = structlog.get_logger(__name__)

AdapterBuilder = Callable[..., HttpxProviderBase]

# provider type -> builder(config, **common)
ADAPTERS: dict[str, AdapterBuilder] = {
    AnswerHubProvider.kind: lambda cfg, **common: AnswerHubProvider(
        username=cfg.username, password=cfg.password, **common
    ),
    ConsulProvider.kind: lambda cfg, **common: ConsulProvider(**common),
    GitHubProvider.kind: lambda cfg, **common: GitHubProvider(
        token=cfg.token, search_user=cfg.search_user, query=cfg.query, **common
    ),
    SlackProvider.kind: lambda cfg, **common: SlackProvider(token=cfg.token, **common),
    TrelloProvider.kind: lambda cfg, **common: TrelloProvider(
        key=cfg.key, token=cfg.token, **common
    ),
}


def build_adapter(
    config: ProviderConfig,
    *,
    client: httpx.AsyncClient | None = None,
    user_agent: str | None = None,
) -> HttpxProviderBase:
    builder = ADAPTERS.get(config.provider)
    if builder is None:
        raise InvalidProviderError(
            f"unknown provider type {config.provider!r}",
            provider_names=sorted(ADAPTERS),
        )
    common: dict[str, Any] = {
        "url": config.url,
        "client": client,
        "user_agent": user_agent,
    }
    return builder(config, **common)


def build_provider(
    config: ProviderConfig,
    *,
    client: httpx.AsyncClient | None = None,
    user_agent: str | None = None,
) -> Provider:
    """Turn one config entry into a registry record.

    Raises:
        InvalidProviderError: Unknown provider type.
    """
    adapter = build_adapter(config, client=client, user_agent=user_agent)

    enabled = config.enabled
    if config.provider == "trello" and not config.token:
        enabled = False

    return Provider(
        name=config.name,
        capability=adapter,
        title=config.title,
        enabled=enabled,
        noui=config.noui,
        priority=config.priority,
        rewrite=config.rewrite,
    )


def register_providers(
    registry: ProviderRegistry,
    configs: Iterable[ProviderConfig],
    *,
    client: httpx.AsyncClient | None = None,
    user_agent: str | None = None,
) -> list[HttpxProviderBase]:
    """Build and register every configured provider.

    Returns the adapters so the caller can ``cleanup()`` them.
    """
    adapters: list[HttpxProviderBase] = []
    for cfg in configs:
        provider = build_provider(cfg, client=client, user_agent=user_agent)
        registry.register(provider)
        adapters.append(provider.capability)
    log.info("providers_registered", count=len(adapters))
    return adapters


async def cleanup_adapters(adapters: Iterable[HttpxProviderBase]) -> None:
    for adapter in adapters:
        try:
            await adapter.cleanup()
        except Exception:
            log.warning("provider_cleanup_failed", kind=adapter.kind, exc_info=True)
