"""History sanitization stage.

Responsibilities of this stage:
- accept an untrusted history blob as delivered by the upstream context
- keep only entries whose stage normalizes to a canonical stage (``ERROR`` included)
- keep the first entry per stage in input order
- give every surviving entry a concrete epoch-millis timestamp

Malformed input is dropped, never raised. Output keeps the input order;
pipeline ordering is the deriver's job.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, cast

from stagewatch.domain.stages import DEFAULT_VOCABULARY

from .contracts import HistoryEntry
from .normalize import normalize_status

if TYPE_CHECKING:
    from stagewatch.domain.stages import PipelineStage, StageVocabulary

    from .contracts import History

log = logging.getLogger(__name__)


def coerce_epoch_millis(value: object) -> int | None:
    """Return ``value`` as integer epoch millis when it is a finite number.

    Numeric strings are accepted. Booleans are not numbers here.
    """

    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            return None
        return int(parsed) if math.isfinite(parsed) else None
    return None


def _entry_stage(entry: Mapping[object, object], vocabulary: StageVocabulary) -> PipelineStage | None:
    # ``stage`` is only consulted when ``status`` is absent; a present but
    # unrecognized ``status`` drops the entry.
    name = "status" if "status" in entry else "stage"
    return normalize_status(entry.get(name), vocabulary=vocabulary)


def sanitize_history(
    raw_entries: object,
    fallback_timestamp: int,
    *,
    vocabulary: StageVocabulary = DEFAULT_VOCABULARY,
) -> History:
    """Clean ``raw_entries`` into a deduplicated, timestamp-complete history."""

    if isinstance(raw_entries, (str, bytes, bytearray, Mapping)) or not isinstance(
        raw_entries, Sequence
    ):
        if raw_entries is not None:
            log.debug("Ignoring non-sequence history of type %s", type(raw_entries).__name__)
        return []

    sanitized: History = []
    seen: set[PipelineStage] = set()
    for position, raw_entry in enumerate(cast("Sequence[object]", raw_entries)):
        if not isinstance(raw_entry, Mapping):
            log.debug("Dropping history entry %s: not a mapping", position)
            continue
        entry = cast("Mapping[object, object]", raw_entry)
        stage = _entry_stage(entry, vocabulary)
        if stage is None:
            log.debug("Dropping history entry %s: unrecognized stage", position)
            continue
        if stage in seen:
            log.debug("Dropping history entry %s: duplicate stage %s", position, stage)
            continue
        timestamp = coerce_epoch_millis(entry.get("timestamp"))
        sanitized.append(
            HistoryEntry(
                stage=stage,
                timestamp=fallback_timestamp if timestamp is None else timestamp,
            )
        )
        seen.add(stage)

    return sanitized


__all__ = ["coerce_epoch_millis", "sanitize_history"]
