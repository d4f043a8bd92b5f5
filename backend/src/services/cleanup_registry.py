"""
Cleanup job registry.

The registry maps a table identifier to the ordered list of cleanup jobs to
run on that table. Job names are human readable phrases ("Soft Deleted Users")
that translate to an operation name ("cleanupSoftDeletedUsers") looked up on
the table handle.

A registry is created once per process (or per test) and handed to the
runner. Plugins extend it with add_cleanups() before the run starts.
"""

import logging
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

CLEANUP_OPERATION_PREFIX = "cleanup"

DEFAULT_CLEANUPS: Dict[str, List[str]] = {
    "GroupsUsers": [
        "Soft Deleted Users",
        "Hard Deleted Users",
        "Soft Deleted Groups",
        "Hard Deleted Groups",
    ],
    "Favorites": [
        "Soft Deleted Users",
        "Hard Deleted Users",
        "Soft Deleted Resources",
        "Hard Deleted Resources",
    ],
    "Comments": [
        "Soft Deleted Users",
        "Hard Deleted Users",
        "Soft Deleted Resources",
        "Hard Deleted Resources",
    ],
    "Permissions": [
        "Soft Deleted Users",
        "Hard Deleted Users",
        "Soft Deleted Groups",
        "Hard Deleted Groups",
        "Soft Deleted Resources",
        "Hard Deleted Resources",
    ],
    "Secrets": [
        "Soft Deleted Users",
        "Hard Deleted Users",
        "Soft Deleted Resources",
        "Hard Deleted Resources",
        "Hard Deleted Permissions",
    ],
}


class CleanupError(Exception):
    """Base exception for database cleanup failures."""
    pass


class CleanupLookupError(CleanupError):
    """Raised when a table or a cleanup operation cannot be resolved."""
    pass


class CleanupJobError(CleanupError):
    """Raised when a cleanup operation fails while running."""

    def __init__(self, table_name: str, job_name: str, message: str):
        self.table_name = table_name
        self.job_name = job_name
        super().__init__(f"Cleanup '{job_name}' failed on table {table_name}: {message}")


def cleanup_operation_name(job_name: str) -> str:
    """
    Translate a job name into the operation name registered on a table.

    All whitespace is removed and the fixed "cleanup" prefix added:
    "Soft Deleted Users" -> "cleanupSoftDeletedUsers".
    """
    return CLEANUP_OPERATION_PREFIX + "".join(job_name.split())


class CleanupRegistry:
    """
    Ordered mapping of table identifier -> cleanup job names.

    Tables run in insertion order and jobs in the order listed. Job names are
    not deduplicated: a job added twice runs twice.
    """

    def __init__(self, cleanups: Optional[Mapping[str, Sequence[str]]] = None):
        """
        Args:
            cleanups: Initial jobs. Defaults to DEFAULT_CLEANUPS. Pass an empty
                mapping to start from an empty registry.
        """
        seed = DEFAULT_CLEANUPS if cleanups is None else cleanups
        self._cleanups: Dict[str, List[str]] = {
            table_name: list(jobs) for table_name, jobs in seed.items()
        }

    def add_cleanups(self, cleanups: Mapping[str, Sequence[str]]) -> None:
        """
        Merge additional jobs into the registry.

        Unknown tables are registered with an empty job list first; the new
        jobs are then appended after the existing ones.
        """
        for table_name, table_cleanups in cleanups.items():
            if table_name not in self._cleanups:
                self._cleanups[table_name] = []
            self._cleanups[table_name].extend(table_cleanups)
            logger.debug(f"Registered {len(table_cleanups)} cleanup job(s) for table {table_name}")

    def tables(self) -> List[str]:
        return list(self._cleanups)

    def jobs(self, table_name: str) -> List[str]:
        """Get a copy of the jobs registered for a table (empty if unknown)."""
        return list(self._cleanups.get(table_name, []))

    def snapshot(self) -> List[Tuple[str, Tuple[str, ...]]]:
        """
        Freeze the current content for a run.

        The runner iterates over this copy so the registry stays read-only
        for the duration of the run.
        """
        return [(table_name, tuple(jobs)) for table_name, jobs in self._cleanups.items()]

    def to_dict(self) -> Dict[str, List[str]]:
        return {table_name: list(jobs) for table_name, jobs in self._cleanups.items()}

    def __len__(self) -> int:
        return sum(len(jobs) for jobs in self._cleanups.values())

    def __repr__(self) -> str:
        return f"<CleanupRegistry(tables={len(self._cleanups)}, jobs={len(self)})>"
