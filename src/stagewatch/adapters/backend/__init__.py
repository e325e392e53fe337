"""Public interface for the processing backend adapter."""

from __future__ import annotations

from .client import BackendAPIError, BackendStatusFetcher
from .schema import CleansedContextPayload
from .translator import context_record, decode_body, parse_context, to_upstream_response

__all__ = [
    "BackendAPIError",
    "BackendStatusFetcher",
    "CleansedContextPayload",
    "context_record",
    "decode_body",
    "parse_context",
    "to_upstream_response",
]
