"""Consul provider for Ferret.

Searches the service catalog of every datacenter:
- GET /v1/catalog/datacenters
- GET /v1/catalog/services?dc=<dc>   (one call per datacenter)

The catalog API has no server-side search or paging, so matches from
all datacenters are merged, sorted by title and paginated here.
"""

from __future__ import annotations

from ferret.domain.context import SearchContext
from ferret.domain.entities import paginate
from ferret.domain.providers import RawEntry
from ferret.infrastructure.providers.httpx_base import (
    HttpxProviderBase,
    ProviderFetchError,
)


class ConsulProvider(HttpxProviderBase):
    """Provider for Consul catalog services."""

    kind = "consul"

    async def search(
        self, ctx: SearchContext, keyword: str, page: int, limit: int
    ) -> list[RawEntry]:
        datacenters = await self._fetch_json(
            ctx, f"{self.url}/v1/catalog/datacenters", context="datacenters"
        )
        if not isinstance(datacenters, list):
            raise ProviderFetchError("unexpected datacenter list")

        entries: list[RawEntry] = []
        for dc in datacenters:
            services = await self._fetch_json(
                ctx,
                f"{self.url}/v1/catalog/services",
                params={"dc": dc},
                context="services",
            )
            entries.extend(self._match(dc, services or {}, keyword))

        self._log.debug(
            "consul_search",
            keyword=keyword,
            datacenters=len(datacenters),
            matches=len(entries),
        )
        entries.sort(key=lambda e: e["title"])
        return paginate(entries, page, limit)

    def _match(
        self, dc: str, services: dict[str, list[str]], keyword: str
    ) -> list[RawEntry]:
        out: list[RawEntry] = []
        for service, tags in services.items():
            link = f"{self.url}/ui/#/{dc}/services/{service}"
            if not tags:
                if keyword in service:
                    out.append({"link": link, "title": f"{service}.service.{dc}.consul"})
                continue
            for tag in tags:
                if keyword in tag or keyword in service:
                    out.append(
                        {"link": link, "title": f"{tag}.{service}.service.{dc}.consul"}
                    )
        return out
