from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from catalogsync.app import TARGETS, load_drafts, sync_drafts
from catalogsync.config import ConfigurationError, configure_logging
from catalogsync.domain.sync import KINDS

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid integer: {value}") from exc
    if parsed < 1:
        raise argparse.ArgumentTypeError(f"Batch size must be positive, got {parsed}")
    return parsed


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Synchronise catalog drafts into a target")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    sync = subparsers.add_parser("sync", help="Create or update resources from a drafts file")
    sync.add_argument("kind", choices=sorted(KINDS), help="Resource kind of the drafts")
    sync.add_argument("drafts", type=Path, help="JSON file holding an array of drafts")
    sync.add_argument(
        "--target",
        choices=TARGETS,
        default="http",
        help="Where to sync to: the commerce API (http) or the local database (sql)",
    )
    sync.add_argument(
        "--batch-size",
        type=_positive_int,
        default=None,
        help="Number of drafts per batch (defaults to config)",
    )
    sync.add_argument(
        "--database-uri",
        type=str,
        default=None,
        help="SQLAlchemy URI for the sql target (defaults to config)",
    )

    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        drafts = load_drafts(parsed_args.kind, parsed_args.drafts)
    except (OSError, ValueError):
        log.exception("Could not read drafts from %s", parsed_args.drafts)
        sys.exit(2)

    try:
        statistics = sync_drafts(
            parsed_args.kind,
            drafts,
            target=parsed_args.target,
            batch_size=parsed_args.batch_size,
            database_uri=parsed_args.database_uri,
        )
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during sync")
        sys.exit(1)

    log.info(statistics.report_message)


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
