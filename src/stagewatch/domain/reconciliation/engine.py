"""Entry point for the status reconciliation subsystem.

The engine composes the pure stages; it owns no state beyond the vocabulary
and clock it was configured with, so one instance can serve any number of
concurrent callers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from stagewatch.domain.clock import epoch_millis
from stagewatch.domain.stages import DEFAULT_VOCABULARY

from .contracts import ReconciliationResult
from .derive import derive_history
from .normalize import normalize_status
from .sanitize import sanitize_history

if TYPE_CHECKING:
    from stagewatch.domain.clock import Clock
    from stagewatch.domain.stages import StageVocabulary


def reconcile(
    raw_status: object,
    raw_history: object,
    baseline: int | None = None,
    *,
    clock: Clock = epoch_millis,
    vocabulary: StageVocabulary = DEFAULT_VOCABULARY,
) -> ReconciliationResult:
    """Reconcile a raw live status and raw history into one display timeline."""

    started_at = clock() if baseline is None else baseline
    latest_status = normalize_status(raw_status, vocabulary=vocabulary)
    sanitized = sanitize_history(raw_history, started_at, vocabulary=vocabulary)
    timeline = derive_history(
        sanitized,
        latest_status,
        started_at,
        clock=clock,
        vocabulary=vocabulary,
    )
    return ReconciliationResult(
        status_history=tuple(timeline),
        latest_status=latest_status,
        started_at=started_at,
    )


@dataclass(slots=True, frozen=True)
class StatusReconciler:
    """Reconciliation bound to one vocabulary and clock."""

    vocabulary: StageVocabulary = DEFAULT_VOCABULARY
    clock: Clock = field(default=epoch_millis)

    def __call__(
        self,
        raw_status: object,
        raw_history: object,
        baseline: int | None = None,
    ) -> ReconciliationResult:
        return reconcile(
            raw_status,
            raw_history,
            baseline,
            clock=self.clock,
            vocabulary=self.vocabulary,
        )

    def now(self) -> int:
        return self.clock()
