"""Status normalization stage.

Responsibilities of this stage:
- pick a status token out of a bare string or a structured status value
- fold spelling differences (case, whitespace, hyphens)
- resolve the token to one canonical stage, or to ``None`` when unrecognized

The function is total: malformed input yields ``None`` and never raises.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Final, cast

from stagewatch.domain.stages import DEFAULT_VOCABULARY

if TYPE_CHECKING:
    from stagewatch.domain.stages import PipelineStage, StageVocabulary

STATUS_FIELDS: Final[tuple[str, ...]] = ("status", "currentStatus", "pipelineStatus")

_WHITESPACE_RUN = re.compile(r"\s+")
_HYPHEN_RUN = re.compile(r"-+")


def pick_string(value: object) -> str | None:
    """Return ``value`` stripped, or ``None`` when it is not a non-blank string."""

    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None


def status_candidate(raw: object) -> str | None:
    """Extract the first usable status string from ``raw``."""

    direct = pick_string(raw)
    if direct is not None:
        return direct
    if not isinstance(raw, Mapping):
        return None
    mapping = cast("Mapping[object, object]", raw)
    for name in STATUS_FIELDS:
        candidate = pick_string(mapping.get(name))
        if candidate is not None:
            return candidate
    return None


def normalize_token(token: str) -> str:
    collapsed = _WHITESPACE_RUN.sub("_", token.strip())
    return _HYPHEN_RUN.sub("_", collapsed).upper()


def normalize_status(
    raw: object,
    *,
    vocabulary: StageVocabulary = DEFAULT_VOCABULARY,
) -> PipelineStage | None:
    """Map a raw upstream status to a canonical stage.

    Lookup order is alias table, canonical stage name, then ``ERROR``.
    Anything else is unrecognized and maps to ``None``.
    """

    candidate = status_candidate(raw)
    if candidate is None:
        return None
    return vocabulary.lookup(normalize_token(candidate))


__all__ = [
    "STATUS_FIELDS",
    "normalize_status",
    "normalize_token",
    "pick_string",
    "status_candidate",
]
