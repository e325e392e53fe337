"""Ports for fetching raw pipeline status from the processing backend."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


class UpstreamUnavailableError(RuntimeError):
    """Raised when the processing backend cannot be reached at all."""


@dataclass(slots=True, frozen=True)
class UpstreamResponse:
    """One raw response from the backend.

    ``body`` is the decoded JSON value, or ``raw_body`` itself when the payload is not JSON.
    """

    status_code: int
    raw_body: str
    body: object = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass(slots=True, frozen=True)
class UpstreamSnapshot:
    """Context and pipeline status fetched together for one document."""

    document_id: str
    context: UpstreamResponse
    pipeline: UpstreamResponse


@runtime_checkable
class UpstreamStatusFetcher(Protocol):
    """Callable port for retrieving the raw status inputs of one document."""

    def __call__(self, document_id: str) -> UpstreamSnapshot: ...


__all__ = [
    "UpstreamResponse",
    "UpstreamSnapshot",
    "UpstreamStatusFetcher",
    "UpstreamUnavailableError",
]
