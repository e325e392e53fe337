"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, TypedDict

from stagewatch.adapters.backend import BackendStatusFetcher, context_record, parse_context
from stagewatch.adapters.sqlalchemy import SqlAlchemySnapshotStore, is_started, startup
from stagewatch.domain.reconciliation import StatusReconciler

if TYPE_CHECKING:
    from collections.abc import Mapping

    from stagewatch.domain.ports.fetching import (
        UpstreamResponse,
        UpstreamSnapshot,
        UpstreamStatusFetcher,
    )
    from stagewatch.domain.ports.snapshots import SnapshotStore

log = getLogger(__name__)


class UpstreamOutcome(TypedDict):
    status: int
    ok: bool


class UpstreamSummary(TypedDict):
    context: UpstreamOutcome
    pipeline: UpstreamOutcome


class StatusReportPayload(TypedDict):
    upstream: UpstreamSummary
    body: dict[str, object]
    rawBody: str
    pipelineRawBody: str


@dataclass(slots=True, frozen=True)
class StatusReport:
    """Status envelope for the timeline UI plus the HTTP-style code to answer with."""

    status_code: int
    payload: StatusReportPayload


def _outcome(response: UpstreamResponse) -> UpstreamOutcome:
    return {"status": response.status_code, "ok": response.ok}


def build_status_report(
    snapshot: UpstreamSnapshot,
    *,
    reconciler: StatusReconciler | None = None,
) -> StatusReport:
    """Reconcile a fetched snapshot into the report the status endpoint serves."""

    active = reconciler or StatusReconciler()
    context, pipeline = snapshot.context, snapshot.pipeline
    raw_status = pipeline.body if pipeline.ok else None
    upstream: UpstreamSummary = {"context": _outcome(context), "pipeline": _outcome(pipeline)}

    if not context.ok:
        log.info(
            "Context for %s unavailable (HTTP %s); reporting synthesized timeline",
            snapshot.document_id,
            context.status_code,
        )
        result = active(raw_status, None, active.now())
        return StatusReport(
            status_code=200 if pipeline.ok else pipeline.status_code,
            payload={
                "upstream": upstream,
                "body": dict(result.to_payload()),
                "rawBody": context.raw_body,
                "pipelineRawBody": pipeline.raw_body,
            },
        )

    parsed = parse_context(context.body)
    result = active(raw_status, parsed.status_history, parsed.resolved_started_at)
    body: dict[str, object] = {**context_record(context.body), **result.to_payload()}
    return StatusReport(
        status_code=200,
        payload={
            "upstream": upstream,
            "body": body,
            "rawBody": context.raw_body,
            "pipelineRawBody": pipeline.raw_body,
        },
    )


def report_enrichment_status(
    document_id: str,
    *,
    fetcher: UpstreamStatusFetcher | None = None,
    reconciler: StatusReconciler | None = None,
) -> StatusReport:
    """Fetch the raw status of ``document_id`` and reconcile it for display."""

    effective_fetcher = fetcher or BackendStatusFetcher()
    snapshot = effective_fetcher(document_id)
    report = build_status_report(snapshot, reconciler=reconciler)
    log.info(
        "Status for %s: latest=%s, code=%s",
        document_id,
        report.payload["body"].get("latestStatus"),
        report.status_code,
    )
    return report


def _default_snapshot_store() -> SnapshotStore:
    if not is_started():
        startup()
    return SqlAlchemySnapshotStore()


def save_snapshot(
    snapshot_id: str,
    payload: Mapping[str, object],
    *,
    store: SnapshotStore | None = None,
) -> None:
    (store or _default_snapshot_store()).put(snapshot_id, payload)
    log.info("Saved snapshot %s", snapshot_id)


def load_snapshot(
    snapshot_id: str,
    *,
    store: SnapshotStore | None = None,
) -> dict[str, object] | None:
    return (store or _default_snapshot_store()).get(snapshot_id)


def delete_snapshot(snapshot_id: str, *, store: SnapshotStore | None = None) -> None:
    (store or _default_snapshot_store()).delete(snapshot_id)
    log.info("Deleted snapshot %s", snapshot_id)
