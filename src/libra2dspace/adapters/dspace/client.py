"""HTTP client for the DSpace REST API."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from tqdm import tqdm

from libra2dspace.adapters.http_resilience import ResilientClient
from libra2dspace.config.dspace import DSPACE_PAGE_SIZE, api_base_url, get_dspace_config

from .schema import CollectionsResponse, SearchResponse

if TYPE_CHECKING:
    from collections.abc import Callable

    from libra2dspace.config.dspace import DSpaceConfig
    from libra2dspace.config.http_resilience import ResilienceConfig

    from .schema import DSpaceObject, PagedResponse

log = getLogger(__name__)

SEARCH_PATH = "discover/search/objects"
COLLECTIONS_PATH = "core/collections"


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


class DSpaceAPIError(RuntimeError):
    """Raised when the DSpace API answers with an unusable payload."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


@dataclass(slots=True)
class DSpaceClient:
    """Pages through DSpace search and collection listings."""

    config: DSpaceConfig = field(default_factory=get_dspace_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    show_progress: bool = True

    def entities(self, entity_type: str) -> list[DSpaceObject]:
        """All items whose ``dspace.entity.type`` is ``entity_type``."""

        params = {"dsoType": "item", "query": f"dspace.entity.type:{entity_type}"}
        return asyncio.run(self._fetch_all(SEARCH_PATH, params, SearchResponse, entity_type))

    def collections(self) -> list[DSpaceObject]:
        return asyncio.run(self._fetch_all(COLLECTIONS_PATH, {}, CollectionsResponse, "Collection"))

    async def _fetch_all(
        self,
        path: str,
        params: dict[str, str],
        model: type[PagedResponse],
        label: str,
    ) -> list[DSpaceObject]:
        objects: list[DSpaceObject] = []
        async with self.client_factory(self.config.resilience) as client:
            first = await self._request_page(client, path, params, model, page=0)
            objects.extend(first.objects)
            pages = max(first.total_pages, 1)
            with tqdm(
                total=pages,
                initial=1,
                desc=f"DSpace {label}",
                unit="page",
                leave=False,
                disable=not self.show_progress or pages == 1,
            ) as progress:
                for page in range(1, pages):
                    response = await self._request_page(client, path, params, model, page=page)
                    objects.extend(response.objects)
                    progress.update(1)
        log.info("Fetched %s %s objects from DSpace", len(objects), label)
        return objects

    async def _request_page(
        self,
        client: ResilientClient,
        path: str,
        params: dict[str, str],
        model: type[PagedResponse],
        *,
        page: int,
    ) -> PagedResponse:
        size = self.config.page_size or DSPACE_PAGE_SIZE
        query = httpx.QueryParams({**params, "size": size, "page": page})
        url = self._url(path)
        try:
            response = await client.get(url, params=query)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            log.error(f"DSpace API error {status} for {exc.request.url}")
            raise DSpaceAPIError(f"DSpace API request failed: {status}", status=status) from exc

        try:
            return model.model_validate(response.json())
        except ValueError as exc:
            raise DSpaceAPIError(f"Unexpected DSpace response payload from {url}") from exc

    def _url(self, path: str) -> str:
        if self.config.resilience.base_url is not None:
            return path
        return f"{api_base_url(self.config.api_host)}{path}"
