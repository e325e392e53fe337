"""Port for the key/value snapshot store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping


@runtime_checkable
class SnapshotStore(Protocol):
    """Opaque JSON documents keyed by id.

    ``get`` returns ``None`` for unknown ids and ``delete`` of an unknown id is a no-op.
    Implementations reject blank ids with ``ValueError``.
    """

    def put(self, snapshot_id: str, payload: Mapping[str, object]) -> None: ...

    def get(self, snapshot_id: str) -> dict[str, object] | None: ...

    def delete(self, snapshot_id: str) -> None: ...


def require_snapshot_id(snapshot_id: str) -> str:
    if not snapshot_id or not snapshot_id.strip():
        raise ValueError("Snapshot id is required")
    return snapshot_id


__all__ = ["SnapshotStore", "require_snapshot_id"]
