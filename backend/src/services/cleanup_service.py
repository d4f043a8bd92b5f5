"""
Database cleanup runner.

Runs every job of a CleanupRegistry against the table handles of a
CleanupTableLocator, in registry order, and aggregates the number of
inconsistent rows found (dry run) or fixed (fix mode).

Each job is its own transaction in fix mode: the session is committed after
every successful job, so a failure partway through leaves the earlier jobs'
repairs in place. In dry run the handlers only count and the runner does not
touch the transaction.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Mapping, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from services.cleanup_registry import (
    CleanupError,
    CleanupJobError,
    CleanupLookupError,
    CleanupRegistry,
)
from services.cleanup_tables import CleanupTable, CleanupTableLocator, build_default_locator

logger = logging.getLogger(__name__)

CLEAN_MESSAGE = "No issue found, data looks squeaky clean!"

# Process-wide registry and locator shared by every cleanup surface
_cleanup_registry: Optional[CleanupRegistry] = None
_cleanup_locator: Optional[CleanupTableLocator] = None


@dataclass
class CleanupJobResult:
    """Outcome of one cleanup job."""
    table: str
    job: str
    count: int

    def as_tuple(self) -> tuple[str, str, int]:
        return (self.table, self.job, self.count)


@dataclass
class CleanupRunResult:
    """Outcome of a full cleanup run."""
    dry_run: bool
    jobs: List[CleanupJobResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(job.count for job in self.jobs)

    def messages(self) -> List[str]:
        """Human readable report: one line per job with issues, then a summary."""
        lines = [format_job_line(job, self.dry_run) for job in self.jobs if job.count]
        lines.append(format_summary(self.total, self.dry_run))
        return lines


def format_job_line(job: CleanupJobResult, dry_run: bool) -> str:
    verb = "found" if dry_run else "fixed"
    return f"{job.count} issues {verb} in table {job.table} ({job.job.lower()})"


def format_summary(total: int, dry_run: bool) -> str:
    if not total:
        return CLEAN_MESSAGE
    if dry_run:
        return f"{total} issues detected, please run the same command without --dry-run to fix them."
    return f"{total} issues fixed!"


class CleanupRunner:
    """
    Executes the jobs of a cleanup registry.

    Attributes:
        db: Database session handed to every job
        registry: Jobs to run, defaults to the built-in cleanups
        locator: Table handles, defaults to the built-in tables
    """

    def __init__(
        self,
        db: Session,
        registry: Optional[CleanupRegistry] = None,
        locator: Optional[CleanupTableLocator] = None,
    ):
        self.db = db
        self.registry = registry if registry is not None else CleanupRegistry()
        self.locator = locator if locator is not None else build_default_locator()

    def run(self, dry_run: bool = True) -> CleanupRunResult:
        """
        Run every registered job.

        Args:
            dry_run: Only count issues when True, repair them when False

        Returns:
            CleanupRunResult with one entry per job, zero counts included

        Raises:
            CleanupLookupError: A table or operation could not be resolved.
                The remaining jobs are not run.
            CleanupJobError: A job failed. Its work is rolled back, earlier
                jobs stay committed, the remaining jobs are not run.
        """
        result = CleanupRunResult(dry_run=dry_run)
        mode = "dry-run" if dry_run else "fix mode"
        logger.info(f"Starting database cleanup ({mode}, {len(self.registry)} jobs)")

        for table_name, jobs in self.registry.snapshot():
            table = self.locator.get(table_name)
            for job_name in jobs:
                handler = table.resolve(job_name)
                count = self._run_job(handler, table_name, job_name, dry_run)
                result.jobs.append(CleanupJobResult(table=table_name, job=job_name, count=count))

        logger.info(f"Database cleanup finished ({mode}): {result.total} issue(s)")
        return result

    def _run_job(
        self,
        handler: Callable[[Session, bool], int],
        table_name: str,
        job_name: str,
        dry_run: bool,
    ) -> int:
        try:
            count = handler(self.db, dry_run)
        except CleanupError:
            if not dry_run:
                self.db.rollback()
            raise
        except Exception as e:
            if not dry_run:
                self.db.rollback()
            logger.exception(f"Cleanup job '{job_name}' failed on table {table_name}")
            raise CleanupJobError(table_name, job_name, str(e)) from e

        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            if not dry_run:
                self.db.rollback()
            raise CleanupJobError(
                table_name, job_name, f"expected a non-negative issue count, got {count!r}"
            )

        if not dry_run:
            try:
                self.db.commit()
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.exception(f"Commit of cleanup job '{job_name}' failed on table {table_name}")
                raise CleanupJobError(table_name, job_name, str(e)) from e
        logger.debug(f"Cleanup job '{job_name}' on table {table_name}: {count} issue(s)")
        return count


def get_cleanup_registry() -> CleanupRegistry:
    """
    Get the process-wide cleanup registry.

    Created on first use with the default jobs. Plugins merge their jobs into
    it at startup; the API, the scheduler and the console script all run it.
    """
    global _cleanup_registry
    if _cleanup_registry is None:
        _cleanup_registry = CleanupRegistry()
    return _cleanup_registry


def get_cleanup_locator() -> CleanupTableLocator:
    """Get the process-wide table locator, created on first use with the default tables."""
    global _cleanup_locator
    if _cleanup_locator is None:
        _cleanup_locator = build_default_locator()
    return _cleanup_locator


def register_cleanups(
    cleanups: Mapping[str, Sequence[str]],
    tables: Iterable[CleanupTable] = (),
) -> None:
    """
    Extend the process-wide cleanup with a plugin's jobs.

    Args:
        cleanups: Table identifier -> job names, merged with add_cleanups()
        tables: Table handles providing the operations of new tables
    """
    locator = get_cleanup_locator()
    for table in tables:
        locator.register(table)
    get_cleanup_registry().add_cleanups(cleanups)


__all__ = [
    "CLEAN_MESSAGE",
    "CleanupError",
    "CleanupJobError",
    "CleanupLookupError",
    "CleanupJobResult",
    "CleanupRunResult",
    "CleanupRunner",
    "format_job_line",
    "format_summary",
    "get_cleanup_locator",
    "get_cleanup_registry",
    "register_cleanups",
]
