from __future__ import annotations

from typing import TYPE_CHECKING

from stagewatch.domain.reconciliation import HistoryEntry, derive_history
from stagewatch.domain.reconciliation.derive import order_history, synthesize_history
from stagewatch.domain.stages import PIPELINE_ORDER, PipelineStage, StageVocabulary

if TYPE_CHECKING:
    from stagewatch.domain.clock import Clock

T = 1_000_000


def _entry(stage: str, timestamp: int) -> HistoryEntry:
    return HistoryEntry(stage=stage, timestamp=timestamp)


def test_empty_inputs_yield_minimal_default(clock: Clock) -> None:
    assert derive_history([], None, 1000, clock=clock) == [
        _entry(PipelineStage.TRIGGERED, 1000),
        _entry(PipelineStage.WAITING, 61000),
    ]


def test_gap_fill_synthesizes_stages_up_to_live_status(clock: Clock) -> None:
    derived = derive_history([], PipelineStage.RUNNING, T, clock=clock)

    assert derived == [
        _entry(PipelineStage.TRIGGERED, T),
        _entry(PipelineStage.WAITING, T + 60_000),
        _entry(PipelineStage.RUNNING, T + 120_000),
    ]


def test_gap_fill_for_complete_covers_whole_pipeline(clock: Clock) -> None:
    derived = derive_history([], PipelineStage.COMPLETE, T, clock=clock)

    assert [entry.stage for entry in derived] == list(PIPELINE_ORDER)
    assert [entry.timestamp for entry in derived] == [T + i * 60_000 for i in range(5)]


def test_gap_fill_for_error_appends_single_error_after_default_prefix(clock: Clock) -> None:
    derived = derive_history([], PipelineStage.ERROR, T, clock=clock)

    assert derived == [
        _entry(PipelineStage.TRIGGERED, T),
        _entry(PipelineStage.WAITING, T + 60_000),
        _entry(PipelineStage.ERROR, T + 120_000),
    ]


def test_error_guarantee_is_stable_across_invocations(clock: Clock) -> None:
    results = [derive_history([], PipelineStage.ERROR, T, clock=clock) for _ in range(3)]

    for derived in results:
        assert sum(1 for entry in derived if entry.stage == PipelineStage.ERROR) == 1
    assert results[0] == results[1] == results[2]


def test_live_status_is_appended_with_current_time(clock: Clock, now_ms: int) -> None:
    history = [_entry(PipelineStage.TRIGGERED, T)]

    derived = derive_history(history, PipelineStage.RUNNING, T, clock=clock)

    assert derived == [
        _entry(PipelineStage.TRIGGERED, T),
        _entry(PipelineStage.RUNNING, now_ms),
    ]


def test_live_status_already_present_is_not_duplicated(clock: Clock) -> None:
    history = [_entry(PipelineStage.TRIGGERED, T), _entry(PipelineStage.RUNNING, T + 5)]

    derived = derive_history(history, PipelineStage.RUNNING, T, clock=clock)

    assert derived == history


def test_error_live_status_added_once_to_existing_history(clock: Clock, now_ms: int) -> None:
    history = [_entry(PipelineStage.WAITING, T)]

    derived = derive_history(history, PipelineStage.ERROR, T, clock=clock)

    assert derived == [
        _entry(PipelineStage.WAITING, T),
        _entry(PipelineStage.ERROR, now_ms),
    ]


def test_final_order_follows_pipeline_not_timestamps(clock: Clock) -> None:
    history = [
        _entry(PipelineStage.ERROR, T - 100),
        _entry(PipelineStage.COMPLETE, T),
        _entry(PipelineStage.TRIGGERED, T + 500),
        _entry(PipelineStage.WAITING, T + 100),
    ]

    derived = derive_history(history, None, T, clock=clock)

    assert [entry.stage for entry in derived] == [
        PipelineStage.TRIGGERED,
        PipelineStage.WAITING,
        PipelineStage.COMPLETE,
        PipelineStage.ERROR,
    ]


def test_foreign_stages_follow_error_in_relative_order(clock: Clock) -> None:
    history = [
        _entry("ARCHIVED", T + 3),
        _entry(PipelineStage.ERROR, T + 2),
        _entry("REVIEWED", T + 1),
        _entry(PipelineStage.RUNNING, T),
    ]

    derived = derive_history(history, None, T, clock=clock)

    assert [entry.stage for entry in derived] == [
        PipelineStage.RUNNING,
        PipelineStage.ERROR,
        "REVIEWED",
        "ARCHIVED",
    ]


def test_missing_baseline_falls_back_to_clock(clock: Clock, now_ms: int) -> None:
    derived = derive_history([], None, None, clock=clock)

    assert derived[0] == _entry(PipelineStage.TRIGGERED, now_ms)


def test_derive_does_not_mutate_input(clock: Clock) -> None:
    history = [_entry(PipelineStage.COMPLETE, T), _entry(PipelineStage.TRIGGERED, T + 1)]
    snapshot = list(history)

    derive_history(history, PipelineStage.ERROR, T, clock=clock)

    assert history == snapshot


def test_derive_is_idempotent(clock: Clock) -> None:
    history = [_entry(PipelineStage.WAITING, T + 7), _entry(PipelineStage.TRIGGERED, T)]

    first = derive_history(history, PipelineStage.PARTIAL, T, clock=clock)
    second = derive_history(history, PipelineStage.PARTIAL, T, clock=clock)

    assert first == second


def test_order_history_keeps_first_entry_per_stage() -> None:
    ordered = order_history(
        [
            _entry(PipelineStage.WAITING, 2),
            _entry(PipelineStage.WAITING, 1),
            _entry("CUSTOM", 4),
            _entry("CUSTOM", 3),
        ]
    )

    assert ordered == [_entry(PipelineStage.WAITING, 2), _entry("CUSTOM", 4)]


def test_synthesis_honours_vocabulary_interval() -> None:
    vocabulary = StageVocabulary(interval_ms=1_000)

    synthesized = synthesize_history(PipelineStage.WAITING, 0, vocabulary=vocabulary)

    assert [entry.timestamp for entry in synthesized] == [0, 1_000]
