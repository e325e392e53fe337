"""Timeline derivation stage.

Merges a sanitized history with the freshly normalized live status and emits
the display timeline. The sequencing matters and is kept in one place:

1) empty history: synthesize the stages up to the live one from ``baseline``
2) otherwise: append the live stage if absent, then sort by timestamp
3) guarantee an ``ERROR`` entry when the live status is ``ERROR``
4) reorder into pipeline order, then ``ERROR``, then foreign stages
5) fall back to the minimal two-stage default if nothing is left
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from stagewatch.domain.clock import epoch_millis
from stagewatch.domain.stages import DEFAULT_VOCABULARY, PipelineStage

from .contracts import HistoryEntry

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from stagewatch.domain.clock import Clock
    from stagewatch.domain.stages import StageVocabulary

    from .contracts import History

log = logging.getLogger(__name__)


def synthesize_history(
    live_status: PipelineStage | None,
    baseline: int,
    *,
    vocabulary: StageVocabulary = DEFAULT_VOCABULARY,
) -> History:
    """Fabricate the stages that must have happened before ``live_status``.

    Without a usable live stage the first two stages are assumed.
    """

    index = vocabulary.index_of(live_status)
    stages = vocabulary.order[: index + 1] if index >= 0 else vocabulary.order[:2]
    synthesized = [
        HistoryEntry(stage=stage, timestamp=baseline + offset * vocabulary.interval_ms)
        for offset, stage in enumerate(stages)
    ]
    if live_status == PipelineStage.ERROR:
        synthesized.append(
            HistoryEntry(
                stage=PipelineStage.ERROR,
                timestamp=baseline + len(stages) * vocabulary.interval_ms,
            )
        )
    return synthesized


def order_history(
    history: Iterable[HistoryEntry],
    *,
    vocabulary: StageVocabulary = DEFAULT_VOCABULARY,
) -> History:
    """Order entries by pipeline stage, then ``ERROR``, then foreign stages.

    Keeps the first entry per stage; foreign stages keep their relative order.
    """

    entries = list(history)
    first_by_stage: dict[str, HistoryEntry] = {}
    for entry in entries:
        first_by_stage.setdefault(str(entry.stage), entry)

    ordered: History = []
    emitted: set[str] = set()
    for stage in (*vocabulary.order, PipelineStage.ERROR):
        entry = first_by_stage.get(str(stage))
        if entry is not None:
            ordered.append(entry)
            emitted.add(str(stage))
    for entry in entries:
        if str(entry.stage) not in emitted:
            ordered.append(entry)
            emitted.add(str(entry.stage))
    return ordered


def minimal_history(
    baseline: int,
    *,
    vocabulary: StageVocabulary = DEFAULT_VOCABULARY,
) -> History:
    first, second = vocabulary.order[:2]
    return [
        HistoryEntry(stage=first, timestamp=baseline),
        HistoryEntry(stage=second, timestamp=baseline + vocabulary.interval_ms),
    ]


def derive_history(
    history: Sequence[HistoryEntry],
    live_status: PipelineStage | None,
    baseline: int | None,
    *,
    clock: Clock = epoch_millis,
    vocabulary: StageVocabulary = DEFAULT_VOCABULARY,
) -> History:
    """Produce the display timeline for ``history`` and ``live_status``.

    ``baseline`` anchors synthesized entries; ``None`` means now. Entries added for
    an observed live status are stamped with ``clock()``.
    """

    anchor = clock() if baseline is None else baseline
    derived: History = list(history)

    if not derived:
        derived = synthesize_history(live_status, anchor, vocabulary=vocabulary)
        log.debug(
            "Synthesized %s history entries for live status %s from baseline %s",
            len(derived),
            live_status,
            anchor,
        )
    else:
        if live_status is not None and all(entry.stage != live_status for entry in derived):
            derived.append(HistoryEntry(stage=live_status, timestamp=clock()))
        derived.sort(key=lambda entry: entry.timestamp)

    if live_status == PipelineStage.ERROR and all(
        entry.stage != PipelineStage.ERROR for entry in derived
    ):
        derived.append(HistoryEntry(stage=PipelineStage.ERROR, timestamp=clock()))

    return order_history(derived, vocabulary=vocabulary) or minimal_history(
        anchor, vocabulary=vocabulary
    )


__all__ = ["derive_history", "minimal_history", "order_history", "synthesize_history"]
