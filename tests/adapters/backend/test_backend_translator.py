from __future__ import annotations

import httpx
import pytest

from stagewatch.adapters.backend import (
    context_record,
    decode_body,
    parse_context,
    to_upstream_response,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ('"ENRICHED"', "ENRICHED"),
        ("ENRICHED", "ENRICHED"),
        ('{"status": "ENRICHED"}', {"status": "ENRICHED"}),
        ("", ""),
    ],
)
def test_decode_body_falls_back_to_text(raw: str, expected: object) -> None:
    assert decode_body(raw) == expected


def test_to_upstream_response_keeps_raw_text() -> None:
    response = httpx.Response(202, text='{"status": "queued"}')

    upstream = to_upstream_response(response)

    assert upstream.status_code == 202
    assert upstream.ok
    assert upstream.raw_body == '{"status": "queued"}'
    assert upstream.body == {"status": "queued"}


def test_context_record_ignores_non_objects() -> None:
    assert context_record(["a"]) == {}
    assert context_record("text") == {}
    assert context_record({"id": "x"}) == {"id": "x"}


def test_parse_context_reads_started_at_and_history() -> None:
    payload = parse_context(
        {"startedAt": "1700", "statusHistory": [{"status": "ENRICHED"}], "title": "doc"}
    )

    assert payload.resolved_started_at == 1700
    assert payload.status_history == [{"status": "ENRICHED"}]
    assert payload.model_extra == {"title": "doc"}


def test_parse_context_falls_back_to_metadata_started_at() -> None:
    payload = parse_context({"startedAt": "soon", "metadata": {"startedAt": 2500.5}})

    assert payload.started_at is None
    assert payload.resolved_started_at == 2500


def test_parse_context_tolerates_malformed_values() -> None:
    payload = parse_context({"metadata": "n/a", "statusHistory": "broken"})

    assert payload.metadata is None
    assert payload.resolved_started_at is None
    assert payload.status_history == "broken"


def test_parse_context_of_non_object_is_empty() -> None:
    payload = parse_context("plain text")

    assert payload.resolved_started_at is None
    assert payload.status_history is None


def test_parse_context_ignores_snake_case_keys() -> None:
    payload = parse_context(
        {
            "started_at": 7,
            "status_history": [{"status": "ENRICHED"}],
            "metadata": {"started_at": 8},
        }
    )

    assert payload.resolved_started_at is None
    assert payload.status_history is None
    assert payload.model_extra == {
        "started_at": 7,
        "status_history": [{"status": "ENRICHED"}],
    }
