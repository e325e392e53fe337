"""Canonical enrichment pipeline stages and the vocabulary used to recognise them."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Final


class PipelineStage(StrEnum):
    TRIGGERED = "ENRICHMENT_TRIGGERED"
    WAITING = "WAITING_FOR_RESULTS"
    RUNNING = "ENRICHMENT_RUNNING"
    PARTIAL = "PARTIALLY_ENRICHED"
    COMPLETE = "ENRICHMENT_COMPLETE"

    # Out-of-band, never part of the pipeline order.
    ERROR = "ERROR"


PIPELINE_ORDER: Final[tuple[PipelineStage, ...]] = (
    PipelineStage.TRIGGERED,
    PipelineStage.WAITING,
    PipelineStage.RUNNING,
    PipelineStage.PARTIAL,
    PipelineStage.COMPLETE,
)

STAGE_ALIASES: Final[Mapping[str, PipelineStage]] = MappingProxyType(
    {
        "CLEANSED_PENDING_ENRICHMENT": PipelineStage.TRIGGERED,
        "QUEUED_FOR_ENRICHMENT": PipelineStage.TRIGGERED,
        "ENRICHMENT_QUEUED": PipelineStage.TRIGGERED,
        "WAITING_FOR_AI_OUTPUT": PipelineStage.WAITING,
        "AWAITING_AI_OUTPUT": PipelineStage.WAITING,
        "WAITING_FOR_RESULTS": PipelineStage.WAITING,
        "ENRICHMENT_IN_PROGRESS": PipelineStage.RUNNING,
        "ENRICHMENT_PROCESSING": PipelineStage.RUNNING,
        "AI_ENRICHMENT_IN_PROGRESS": PipelineStage.RUNNING,
        "ENRICHMENT_STARTED": PipelineStage.RUNNING,
        "ENRICHMENT_DONE": PipelineStage.COMPLETE,
        "ENRICHED": PipelineStage.COMPLETE,
        "COMPLETED": PipelineStage.COMPLETE,
    }
)

GAP_FILL_INTERVAL_MS: Final[int] = 60_000


@dataclass(frozen=True, slots=True, kw_only=True)
class StageVocabulary:
    """Immutable lookup data shared by the reconciliation functions.

    ``order`` defines the pipeline order index; ``ERROR`` must not appear in it.
    ``aliases`` maps already-normalised spellings (upper case, underscores) to stages.
    """

    order: tuple[PipelineStage, ...] = PIPELINE_ORDER
    aliases: Mapping[str, PipelineStage] = field(default_factory=lambda: STAGE_ALIASES)
    interval_ms: int = GAP_FILL_INTERVAL_MS

    def __post_init__(self) -> None:
        if PipelineStage.ERROR in self.order:
            raise ValueError("ERROR cannot be part of the pipeline order")
        if len(self.order) < 2:
            raise ValueError("Pipeline order needs at least two stages")

    def index_of(self, stage: str | None) -> int:
        """Return the pipeline order index of ``stage`` or -1 when it has none."""

        if stage is None:
            return -1
        for index, candidate in enumerate(self.order):
            if candidate == stage:
                return index
        return -1

    def lookup(self, token: str) -> PipelineStage | None:
        alias = self.aliases.get(token)
        if alias is not None:
            return alias
        for stage in self.order:
            if stage == token:
                return stage
        if token == PipelineStage.ERROR:
            return PipelineStage.ERROR
        return None


DEFAULT_VOCABULARY: Final[StageVocabulary] = StageVocabulary()


__all__ = [
    "DEFAULT_VOCABULARY",
    "GAP_FILL_INTERVAL_MS",
    "PIPELINE_ORDER",
    "STAGE_ALIASES",
    "PipelineStage",
    "StageVocabulary",
]
