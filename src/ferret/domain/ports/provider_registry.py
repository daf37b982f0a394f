"""Port for provider registration and lookup."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ferret.domain.providers.base import Provider


@runtime_checkable
class ProviderRegistryPort(Protocol):
    """Append-only provider store: written at startup, read afterwards."""

    def register(self, provider: Provider) -> Provider: ...
    def get(self, name: str) -> Provider: ...
    def list_names(self) -> list[str]: ...
    def list_providers(self) -> list[Provider]: ...
