"""Value types exchanged between the reconciliation stages.

This module intentionally holds only:
- the history entry value
- the reconciliation result and its JSON payload shape
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeAlias, TypedDict

if TYPE_CHECKING:
    from stagewatch.domain.stages import PipelineStage


class HistoryEntryPayload(TypedDict):
    stage: str
    timestamp: int


class ReconciliationPayload(TypedDict):
    statusHistory: list[HistoryEntryPayload]
    latestStatus: str | None
    startedAt: int


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """One stage of the timeline, stamped in epoch milliseconds.

    ``stage`` is normally a ``PipelineStage``; plain strings are tolerated so that
    callers handing in foreign stages still get a well-formed timeline.
    """

    stage: str
    timestamp: int

    def to_payload(self) -> HistoryEntryPayload:
        return {"stage": str(self.stage), "timestamp": self.timestamp}


History: TypeAlias = list[HistoryEntry]


@dataclass(frozen=True, slots=True, kw_only=True)
class ReconciliationResult:
    """Ordered timeline plus the resolved live status."""

    status_history: tuple[HistoryEntry, ...] = field(default_factory=tuple)
    latest_status: PipelineStage | None = None
    started_at: int

    def to_payload(self) -> ReconciliationPayload:
        return {
            "statusHistory": [entry.to_payload() for entry in self.status_history],
            "latestStatus": None if self.latest_status is None else str(self.latest_status),
            "startedAt": self.started_at,
        }


__all__ = [
    "History",
    "HistoryEntry",
    "HistoryEntryPayload",
    "ReconciliationPayload",
    "ReconciliationResult",
]
