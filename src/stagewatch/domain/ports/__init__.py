"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import (
    UpstreamResponse,
    UpstreamSnapshot,
    UpstreamStatusFetcher,
    UpstreamUnavailableError,
)
from .snapshots import SnapshotStore, require_snapshot_id

__all__ = [
    "SnapshotStore",
    "UpstreamResponse",
    "UpstreamSnapshot",
    "UpstreamStatusFetcher",
    "UpstreamUnavailableError",
    "require_snapshot_id",
]
