from __future__ import annotations

import pytest

from stagewatch.domain.stages import (
    DEFAULT_VOCABULARY,
    PIPELINE_ORDER,
    STAGE_ALIASES,
    PipelineStage,
    StageVocabulary,
)


def test_pipeline_order_excludes_error() -> None:
    assert PipelineStage.ERROR not in PIPELINE_ORDER
    assert PIPELINE_ORDER[0] is PipelineStage.TRIGGERED
    assert PIPELINE_ORDER[-1] is PipelineStage.COMPLETE


def test_index_of_reports_pipeline_position() -> None:
    assert DEFAULT_VOCABULARY.index_of(PipelineStage.RUNNING) == 2
    assert DEFAULT_VOCABULARY.index_of(PipelineStage.ERROR) == -1
    assert DEFAULT_VOCABULARY.index_of(None) == -1


def test_aliases_cannot_be_mutated() -> None:
    with pytest.raises(TypeError):
        STAGE_ALIASES["NEW"] = PipelineStage.RUNNING  # type: ignore[index]


def test_vocabulary_rejects_error_in_order() -> None:
    with pytest.raises(ValueError, match="ERROR"):
        StageVocabulary(order=(PipelineStage.TRIGGERED, PipelineStage.ERROR))


def test_vocabulary_requires_two_stages() -> None:
    with pytest.raises(ValueError, match="two stages"):
        StageVocabulary(order=(PipelineStage.TRIGGERED,))


def test_lookup_prefers_alias_over_stage_name() -> None:
    vocabulary = StageVocabulary(aliases={"ENRICHMENT_RUNNING": PipelineStage.PARTIAL})

    assert vocabulary.lookup("ENRICHMENT_RUNNING") is PipelineStage.PARTIAL
    assert vocabulary.lookup("ERROR") is PipelineStage.ERROR
    assert vocabulary.lookup("UNKNOWN") is None
