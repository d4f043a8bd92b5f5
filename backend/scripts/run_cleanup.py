#!/usr/bin/env python3
"""
Cleanup and fix issues in database.

Scans group memberships, favorites, comments, permissions and secrets for
rows pointing at deleted or missing users, groups, resources or permissions.

Usage:
    python run_cleanup.py               # dry run: report only (default)
    python run_cleanup.py --no-dry-run  # fix mode: delete the orphaned rows

Environment:
    - DATABASE_URL: Database connection string
    - Or uses .env file if available

Exit status is 0 when the run completes (issues found or not) and 1 when a
table or cleanup operation can't be resolved or a cleanup job fails.
"""

import argparse
import logging
import sys
import os
from typing import Callable, List, Optional

# Add the parent directory to sys.path to allow imports from src
sys.path.append(os.path.join(os.path.dirname(__file__), '../src'))

from core.database import SessionLocal  # noqa: E402
from services.cleanup_registry import CleanupError  # noqa: E402
from services.cleanup_service import (  # noqa: E402
    CleanupRunner,
    get_cleanup_locator,
    get_cleanup_registry,
)

logger = logging.getLogger(__name__)

RULE = "-" * 63


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Cleanup and fix issues in database.")
    parser.add_argument(
        "--dry-run",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Don't fix only display report (default). Use --no-dry-run to fix.",
    )
    return parser


def main(argv: Optional[List[str]] = None, echo: Callable[[str], None] = print) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )

    dry_run: bool = args.dry_run
    echo(" Cleanup shell (dry-run)" if dry_run else " Cleanup shell (fix mode)")
    echo(RULE)

    db = SessionLocal()
    try:
        runner = CleanupRunner(db, registry=get_cleanup_registry(), locator=get_cleanup_locator())
        result = runner.run(dry_run=dry_run)
    except CleanupError as e:
        echo(f"Error during cleanup: {e}")
        return 1
    finally:
        db.close()

    for line in result.messages():
        echo(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
