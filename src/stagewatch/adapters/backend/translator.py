"""Translate raw backend responses into port values."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import TYPE_CHECKING, cast

from stagewatch.domain.ports.fetching import UpstreamResponse

from .schema import CleansedContextPayload

if TYPE_CHECKING:
    import httpx


def decode_body(raw_body: str) -> object:
    """Return the JSON value of ``raw_body``, or the text itself when it is not JSON."""

    try:
        return json.loads(raw_body)
    except ValueError:
        return raw_body


def to_upstream_response(response: httpx.Response) -> UpstreamResponse:
    raw_body = response.text
    return UpstreamResponse(
        status_code=response.status_code,
        raw_body=raw_body,
        body=decode_body(raw_body),
    )


def context_record(body: object) -> dict[str, object]:
    if isinstance(body, Mapping):
        return dict(cast("Mapping[str, object]", body))
    return {}


def parse_context(body: object) -> CleansedContextPayload:
    return CleansedContextPayload.model_validate(context_record(body))
