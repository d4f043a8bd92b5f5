"""
Services package for the vault backend.

This package contains the database cleanup (registry, table handles, runner
and nightly scheduler) and the permission history service.
"""

from .cleanup_registry import CleanupRegistry
from .cleanup_service import (
    CleanupRunner,
    get_cleanup_locator,
    get_cleanup_registry,
    register_cleanups,
)

__all__ = [
    "CleanupRegistry",
    "CleanupRunner",
    "get_cleanup_locator",
    "get_cleanup_registry",
    "register_cleanups",
]
