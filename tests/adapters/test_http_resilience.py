from __future__ import annotations

import asyncio

import httpx

from stagewatch.adapters.http_resilience import ResilientClient
from stagewatch.config import RateLimit, ResilienceConfig, RetryPolicy


def test_client_applies_base_url_headers_and_rate_limit() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, text="ok")

    config = ResilienceConfig(
        name="backend",
        base_url="http://backend.test",
        retry=RetryPolicy(total=0),
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
        default_headers={"Accept": "application/json"},
    )

    async def fetch() -> list[httpx.Response]:
        async with ResilientClient(config, transport=httpx.MockTransport(handler)) as client:
            return [await client.get("/api/one"), await client.get("/api/two")]

    responses = asyncio.run(fetch())

    assert [response.text for response in responses] == ["ok", "ok"]
    assert [str(request.url) for request in seen] == [
        "http://backend.test/api/one",
        "http://backend.test/api/two",
    ]
    assert all(request.headers["Accept"] == "application/json" for request in seen)
