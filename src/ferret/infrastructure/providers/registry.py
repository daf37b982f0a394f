"""Append-only provider registry."""

from __future__ import annotations

from dataclasses import replace

import structlog

from ferret.domain.exceptions import (
    DuplicateProviderError,
    InvalidProviderError,
    ProviderNotFoundError,
)
from ferret.domain.providers import Provider

log = structlog.get_logger(__name__)


class ProviderRegistry:
    """
    Name -> Provider store.

    register():
      - the only mutator; populated once at startup
      - rejects empty and duplicate names (the first registration wins)

    get()/list_names()/list_providers():
      - read-only, safe to call from concurrent queries
    """

    def __init__(self) -> None:
        self._providers: dict[str, Provider] = {}

    def register(self, provider: Provider) -> Provider:
        if not provider.name:
            raise InvalidProviderError("invalid provider name")
        if provider.name in self._providers:
            raise DuplicateProviderError(
                f"search provider {provider.name} is already registered"
            )

        if not provider.title:
            provider = replace(provider, title=provider.name)

        self._providers[provider.name] = provider
        log.info(
            "provider_registered",
            provider=provider.name,
            title=provider.title,
            enabled=provider.enabled,
            priority=provider.priority,
        )
        return provider

    def get(self, name: str) -> Provider:
        try:
            return self._providers[name]
        except KeyError:
            raise ProviderNotFoundError(f"provider {name} couldn't be found") from None

    def list_names(self) -> list[str]:
        return sorted(self._providers)

    def list_providers(self) -> list[Provider]:
        return [self._providers[name] for name in self.list_names()]

    def __contains__(self, name: object) -> bool:
        return name in self._providers

    def __len__(self) -> int:
        return len(self._providers)
