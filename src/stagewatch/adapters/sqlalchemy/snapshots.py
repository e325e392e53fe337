"""Snapshot store backed by a single SQLAlchemy table."""

from __future__ import annotations

from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING, cast

from sqlalchemy import delete, select
from sqlalchemy.dialects import mysql, postgresql, sqlite

from stagewatch.domain.ports.snapshots import SnapshotStore, require_snapshot_id

from .engine import session_factory
from .tables import snapshot_table

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlalchemy.orm import Session, sessionmaker
    from sqlalchemy.sql.dml import Insert

log = getLogger(__name__)


def _upsert_statement(dialect: str, key: str, values: dict[str, object]) -> Insert:
    """Build a single insert-or-replace statement for ``dialect``."""

    if dialect in {"sqlite", "postgresql"}:
        module = sqlite if dialect == "sqlite" else postgresql
        stmt = module.insert(snapshot_table).values(id=key, **values)
        return stmt.on_conflict_do_update(
            index_elements=[snapshot_table.c.id],
            set_={name: stmt.excluded[name] for name in values},
        )
    if dialect in {"mysql", "mariadb"}:
        stmt = mysql.insert(snapshot_table).values(id=key, **values)
        return stmt.on_duplicate_key_update({name: stmt.inserted[name] for name in values})
    raise NotImplementedError(f"Snapshot store does not support the {dialect} dialect")


class SqlAlchemySnapshotStore:
    """Key/value snapshot store; one short-lived session per operation.

    Writes are last-writer-wins.
    """

    def __init__(self, sessions: sessionmaker[Session] | None = None) -> None:
        self._sessions = sessions or session_factory()

    def put(self, snapshot_id: str, payload: Mapping[str, object]) -> None:
        key = require_snapshot_id(snapshot_id)
        values: dict[str, object] = {"payload": dict(payload), "updated_at": datetime.now(UTC)}
        with self._sessions.begin() as session:
            dialect = session.get_bind().dialect.name
            session.execute(_upsert_statement(dialect, key, values))
        log.debug("Stored snapshot %s", key)

    def get(self, snapshot_id: str) -> dict[str, object] | None:
        key = require_snapshot_id(snapshot_id)
        with self._sessions() as session:
            payload = session.execute(
                select(snapshot_table.c.payload).where(snapshot_table.c.id == key)
            ).scalar_one_or_none()
        if payload is None:
            return None
        return dict(cast("Mapping[str, object]", payload))

    def delete(self, snapshot_id: str) -> None:
        key = require_snapshot_id(snapshot_id)
        with self._sessions.begin() as session:
            session.execute(delete(snapshot_table).where(snapshot_table.c.id == key))
        log.debug("Deleted snapshot %s", key)


if TYPE_CHECKING:
    _store_check: SnapshotStore = SqlAlchemySnapshotStore()
