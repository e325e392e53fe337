"""Pipeline status reconciliation.

Layered flow, every stage pure:
1) normalize the live status token
2) sanitize the persisted history blob
3) derive the ordered display timeline
"""

from __future__ import annotations

from .contracts import History, HistoryEntry, ReconciliationPayload, ReconciliationResult
from .derive import derive_history
from .engine import StatusReconciler, reconcile
from .normalize import normalize_status
from .sanitize import sanitize_history

__all__ = [
    "History",
    "HistoryEntry",
    "ReconciliationPayload",
    "ReconciliationResult",
    "StatusReconciler",
    "derive_history",
    "normalize_status",
    "reconcile",
    "sanitize_history",
]
