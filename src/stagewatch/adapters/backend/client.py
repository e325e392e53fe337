"""HTTP client for the processing backend status endpoints."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from stagewatch.adapters.http_resilience import ResilientClient
from stagewatch.config.backend import BackendConfig, get_backend_config
from stagewatch.domain.ports.fetching import (
    UpstreamSnapshot,
    UpstreamStatusFetcher,
    UpstreamUnavailableError,
)

from .translator import to_upstream_response

if TYPE_CHECKING:
    from collections.abc import Callable

    from stagewatch.config.http_resilience import ResilienceConfig
    from stagewatch.domain.ports.fetching import UpstreamResponse

log = getLogger(__name__)


class BackendAPIError(RuntimeError):
    """Raised when a backend request cannot be built for the given document."""


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class BackendStatusFetcher:
    """Fetch the cleansed context and the pipeline status of one document.

    Both requests are issued concurrently so the pair describes the same moment.
    Non-2xx responses are returned as-is; only transport failures raise.
    """

    config: BackendConfig = field(default_factory=get_backend_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def __call__(self, document_id: str) -> UpstreamSnapshot:
        if not document_id or not document_id.strip():
            raise BackendAPIError("Missing document id")
        return asyncio.run(self._fetch_async(document_id.strip()))

    async def _fetch_async(self, document_id: str) -> UpstreamSnapshot:
        log.debug("Fetching status of %s from %s", document_id, self.config.base_url)

        context_path = self.config.context_path.format(document_id=document_id)
        status_path = self.config.status_path.format(document_id=document_id)

        async with self.client_factory(self.config.resilience) as client:
            try:
                context, pipeline = await asyncio.gather(
                    self._perform_request(client=client, path=context_path),
                    self._perform_request(client=client, path=status_path),
                )
            except httpx.HTTPError as exc:
                log.warning(f"Backend unreachable for document {document_id}: {exc}")
                raise UpstreamUnavailableError(
                    f"Unable to reach enrichment status backing services: {exc}"
                ) from exc

        log.info(
            "Fetched status for %s: context=%s pipeline=%s",
            document_id,
            context.status_code,
            pipeline.status_code,
        )
        return UpstreamSnapshot(document_id=document_id, context=context, pipeline=pipeline)

    async def _perform_request(
        self,
        *,
        client: ResilientClient,
        path: str,
    ) -> UpstreamResponse:
        response = await client.get(path)
        return to_upstream_response(response)


if TYPE_CHECKING:
    _fetcher_check: UpstreamStatusFetcher = BackendStatusFetcher()
