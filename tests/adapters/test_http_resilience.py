from __future__ import annotations

import asyncio

import httpx

from libra2dspace.adapters.http_resilience import (
    RateLimit,
    ResilienceConfig,
    ResilientClient,
    RetryPolicy,
    build_retry,
)


def test_build_retry_only_retries_reads() -> None:
    retry = build_retry(RetryPolicy(total=2))

    assert retry.total == 2
    assert "GET" in retry.allowed_methods
    assert "POST" not in retry.allowed_methods


def test_get_goes_through_rate_limiter() -> None:
    seen: list[str] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json={"ok": True})

    config = ResilienceConfig(
        name="test",
        base_url="https://dspace.example.edu/server/api/",
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
        cache=None,
    )

    async def fetch() -> list[object]:
        client = ResilientClient(config)
        client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
            base_url=config.base_url or "",
            transport=httpx.MockTransport(handler),
        )
        async with client:
            responses = [await client.get("core/collections") for _ in range(3)]
        return [response.json() for response in responses]

    assert asyncio.run(fetch()) == [{"ok": True}] * 3
    assert seen == ["https://dspace.example.edu/server/api/core/collections"] * 3
