"""
Concurrent catalog section loader.

Every section is fetched at the same time and awaited jointly. A section
that fails to fetch or parse is reported as errored on its own; the others
still load, register their items and render.
"""

import asyncio
import json
from collections.abc import Callable, Iterable
from typing import Any, Optional

import httpx

from ..errors import CatalogDataError, CatalogFetchError, MalformedCatalogError
from ..logging.config import get_logger
from .index import CatalogIndex
from .models import CatalogSection, SectionResult, SectionStatus
from .parsers import parse_section_payload

logger = get_logger(__name__)

SectionCallback = Callable[[SectionResult], None]


class CatalogLoader:
    """Fetches catalog sections and populates the catalog index."""

    def __init__(
        self,
        index: CatalogIndex,
        base_url: str = "",
        timeout_seconds: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.index = index
        self.base_url = base_url
        self.timeout_seconds = timeout_seconds
        self.transport = transport
        self.logger = logger

    def _create_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout_seconds,
            transport=self.transport,
        )

    async def load_all(
        self,
        sections: Iterable[CatalogSection],
        on_settled: Optional[SectionCallback] = None
    ) -> list[SectionResult]:
        """
        Load every section concurrently.

        Args:
            sections: Sections to load
            on_settled: Called with each section's result as soon as it settles

        Returns:
            One SectionResult per section, in the order the sections were given
        """
        sections = list(sections)

        async with self._create_client() as client:
            results = await asyncio.gather(
                *(self._load_section(client, section, on_settled) for section in sections)
            )

        self.logger.info(
            "Catalog sections settled",
            sections=len(results),
            loaded=sum(1 for r in results if r.status == SectionStatus.LOADED),
            errored=sum(1 for r in results if r.status == SectionStatus.ERRORED),
            indexed_items=len(self.index)
        )
        return list(results)

    async def _load_section(
        self,
        client: httpx.AsyncClient,
        section: CatalogSection,
        on_settled: Optional[SectionCallback]
    ) -> SectionResult:
        result = await self._fetch_and_parse(client, section)

        for item in result.items:
            self.index.register(item, section=section.name)

        if on_settled is not None:
            on_settled(result)

        return result

    async def _fetch_and_parse(self, client: httpx.AsyncClient, section: CatalogSection) -> SectionResult:
        if not section.resource:
            return SectionResult(section=section, status=SectionStatus.SKIPPED)

        try:
            payload = await self._fetch_json(client, section.resource)
        except CatalogDataError as e:
            self.logger.error(
                "Failed to load catalog section",
                section=section.name,
                resource=section.resource,
                error=str(e)
            )
            return SectionResult(
                section=section,
                status=SectionStatus.ERRORED,
                error=str(e),
                context=e.context
            )

        title, description, items, dropped = parse_section_payload(payload)

        if dropped:
            self.logger.debug(
                "Dropped catalog items without an identifier",
                section=section.name,
                dropped=dropped
            )

        return SectionResult(
            section=section,
            status=SectionStatus.LOADED if items else SectionStatus.EMPTY,
            items=tuple(items),
            title=title,
            description=description,
            dropped_count=dropped
        )

    async def _fetch_json(self, client: httpx.AsyncClient, resource: str) -> Any:
        try:
            response = await client.get(resource)
        except httpx.HTTPError as e:
            raise CatalogFetchError(
                f"Network error: {e}",
                resource=resource
            ) from e

        if not response.is_success:
            raise CatalogFetchError(
                f"Status {response.status_code}",
                status_code=response.status_code,
                resource=resource,
                context={"status_code": response.status_code}
            )

        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedCatalogError(
                f"Invalid JSON: {e}",
                raw_data=response.text[:200],
                resource=resource
            ) from e
