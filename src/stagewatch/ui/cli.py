from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING, cast

from dotenv import load_dotenv

from stagewatch.app import (
    delete_snapshot,
    load_snapshot,
    report_enrichment_status,
    save_snapshot,
)
from stagewatch.config import configure_logging
from stagewatch.domain.ports.snapshots import require_snapshot_id

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Track enrichment pipeline progress")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug output, including dropped history entries",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    status = subparsers.add_parser("status", help="Print the reconciled status of a document")
    status.add_argument("document_id", type=str, help="Document id known to the backend")
    status.add_argument(
        "--indent",
        type=int,
        default=None,
        help="Pretty-print the JSON report with this indent",
    )

    snapshot = subparsers.add_parser("snapshot", help="Extraction snapshot commands")
    snapshot_sub = snapshot.add_subparsers(dest="snapshot_command", required=True)
    snapshot_put = snapshot_sub.add_parser("put", help="Store a JSON snapshot")
    snapshot_put.add_argument("snapshot_id", type=str, help="Snapshot id")
    snapshot_put.add_argument("path", type=Path, help="Path to a JSON object file")
    snapshot_get = snapshot_sub.add_parser("get", help="Print a stored snapshot")
    snapshot_get.add_argument("snapshot_id", type=str, help="Snapshot id")
    snapshot_delete = snapshot_sub.add_parser("delete", help="Delete a stored snapshot")
    snapshot_delete.add_argument("snapshot_id", type=str, help="Snapshot id")

    return parser.parse_args(list(argv))


def _read_snapshot_file(path: Path) -> dict[str, object]:
    try:
        loaded = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ValueError(f"Cannot read snapshot file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"Snapshot file {path} is not valid JSON: {exc}") from exc
    if not isinstance(loaded, dict):
        raise ValueError(f"Snapshot file {path} must contain a JSON object")
    return cast("dict[str, object]", loaded)


def _emit(payload: object, *, indent: int | None = None) -> None:
    print(json.dumps(payload, indent=indent))  # noqa: T201


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    snapshot_payload: dict[str, object] | None = None
    try:
        if parsed_args.command == "snapshot":
            require_snapshot_id(parsed_args.snapshot_id)
        if parsed_args.command == "snapshot" and parsed_args.snapshot_command == "put":
            snapshot_payload = _read_snapshot_file(parsed_args.path)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "status":
            report = report_enrichment_status(parsed_args.document_id)
            _emit(report.payload, indent=parsed_args.indent)
            if report.status_code >= 400:
                sys.exit(1)
        elif parsed_args.command == "snapshot" and parsed_args.snapshot_command == "put":
            save_snapshot(parsed_args.snapshot_id, snapshot_payload or {})
        elif parsed_args.command == "snapshot" and parsed_args.snapshot_command == "get":
            stored = load_snapshot(parsed_args.snapshot_id)
            if stored is None:
                log.error("Snapshot %s not found", parsed_args.snapshot_id)
                sys.exit(1)
            _emit(stored)
        elif parsed_args.command == "snapshot" and parsed_args.snapshot_command == "delete":
            delete_snapshot(parsed_args.snapshot_id)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error while running %s", parsed_args.command)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
