"""Injectable wall clock expressed in epoch milliseconds."""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    def __call__(self) -> int: ...


def epoch_millis() -> int:
    return time.time_ns() // 1_000_000


def fixed_clock(value: int) -> Clock:
    """Return a clock that always reports ``value``."""

    def _clock() -> int:
        return value

    return _clock


__all__ = ["Clock", "epoch_millis", "fixed_clock"]
