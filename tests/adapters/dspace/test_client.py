from __future__ import annotations

from collections.abc import Callable  # noqa: TC003

import httpx
import pytest

from libra2dspace.adapters.dspace import DSpaceAPIError, DSpaceClient
from libra2dspace.adapters.http_resilience import ResilienceConfig, ResilientClient
from libra2dspace.config.dspace import CollectionNames, DSpaceConfig, api_base_url

HOST = "dspace.example.edu"


def _config(*, base_url: str | None = api_base_url(HOST)) -> DSpaceConfig:
    return DSpaceConfig(
        api_host=HOST,
        collections=CollectionNames(),
        resilience=ResilienceConfig(name="dspace", base_url=base_url, cache=None),
        page_size=2,
    )


def _make_client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
) -> Callable[[ResilienceConfig], ResilientClient]:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = ResilientClient(resilience)
        client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
            base_url=resilience.base_url or "",
            transport=httpx.MockTransport(async_handler),
        )
        return client

    return factory


def _item(uuid: str) -> dict[str, object]:
    return {"uuid": uuid, "name": f"Item {uuid}", "metadata": {}}


def _search_page(uuids: list[str], *, number: int, total_pages: int) -> dict[str, object]:
    return {
        "_embedded": {
            "searchResult": {
                "_embedded": {
                    "objects": [{"_embedded": {"indexableObject": _item(uuid)}} for uuid in uuids]
                },
                "page": {"size": 2, "number": number, "totalPages": total_pages},
            }
        }
    }


def test_entities_fetches_every_page() -> None:
    pages = {"0": ["a", "b"], "1": ["c"]}
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        page = request.url.params["page"]
        return httpx.Response(200, json=_search_page(pages[page], number=int(page), total_pages=2))

    client = DSpaceClient(
        config=_config(), client_factory=_make_client_factory(handler), show_progress=False
    )

    objects = client.entities("Person")

    assert [item.uuid for item in objects] == ["a", "b", "c"]
    assert [request.url.params["page"] for request in requests] == ["0", "1"]
    first = requests[0]
    assert first.url.path == "/server/api/discover/search/objects"
    assert first.url.params["query"] == "dspace.entity.type:Person"
    assert first.url.params["dsoType"] == "item"
    assert first.url.params["size"] == "2"


def test_collections() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/server/api/core/collections"
        payload = {
            "_embedded": {"collections": [_item("c1"), _item("c2")]},
            "page": {"totalPages": 1},
        }
        return httpx.Response(200, json=payload)

    client = DSpaceClient(
        config=_config(), client_factory=_make_client_factory(handler), show_progress=False
    )

    assert [item.name for item in client.collections()] == ["Item c1", "Item c2"]


def test_http_error_raises_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        del request
        return httpx.Response(404, json={"message": "not found"})

    client = DSpaceClient(
        config=_config(), client_factory=_make_client_factory(handler), show_progress=False
    )

    with pytest.raises(DSpaceAPIError) as excinfo:
        client.entities("OrgUnit")

    assert excinfo.value.status == 404


def test_unexpected_payload_raises_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        del request
        payload = {"_embedded": {"searchResult": {"_embedded": {"objects": [{"_embedded": {}}]}}}}
        return httpx.Response(200, json=payload)

    client = DSpaceClient(
        config=_config(), client_factory=_make_client_factory(handler), show_progress=False
    )

    with pytest.raises(DSpaceAPIError):
        client.entities("OrgUnit")


def test_absolute_url_without_base_url() -> None:
    client = DSpaceClient(config=_config(base_url=None))

    assert client._url("core/collections") == (  # noqa: SLF001
        "https://dspace.example.edu/server/api/core/collections"
    )
