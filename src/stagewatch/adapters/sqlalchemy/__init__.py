"""SQLAlchemy adapter package for stagewatch."""

from __future__ import annotations

from .engine import StartupError, is_started, shutdown, startup
from .snapshots import SqlAlchemySnapshotStore
from .tables import metadata, snapshot_table

__all__ = [
    "SqlAlchemySnapshotStore",
    "StartupError",
    "is_started",
    "metadata",
    "shutdown",
    "snapshot_table",
    "startup",
]
