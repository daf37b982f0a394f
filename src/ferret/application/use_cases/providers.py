"""Use case for listing the providers exposed to the UI."""

from __future__ import annotations

import structlog

from ferret.domain.entities import ProviderInfo
from ferret.domain.exceptions import ProviderNotFoundError
from ferret.domain.ports import ProviderRegistryPort

log = structlog.get_logger(__name__)


class ListProvidersUseCase:
    """Resolves the UI provider list.

    With an explicit comma-separated *selection*, every listed name must
    be registered.  Without one, all enabled providers not flagged
    ``noui`` are returned in name order.
    """

    def __init__(self, *, providers: ProviderRegistryPort, selection: str = "") -> None:
        self._providers = providers
        self._selection = selection

    def execute(self) -> list[ProviderInfo]:
        names = [n.strip() for n in self._selection.strip().strip(",").split(",")]
        names = [n for n in names if n]

        if not names:
            return [
                _info(p)
                for p in self._providers.list_providers()
                if p.enabled and not p.noui
            ]

        out: list[ProviderInfo] = []
        for name in names:
            try:
                out.append(_info(self._providers.get(name)))
            except ProviderNotFoundError:
                log.warning("ui_provider_not_registered", provider=name)
                raise
        return out


def _info(provider) -> ProviderInfo:
    return ProviderInfo(
        name=provider.name,
        title=provider.title or provider.name,
        enabled=provider.enabled,
        priority=provider.priority,
    )
