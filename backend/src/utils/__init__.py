"""
Utility modules for the vault backend.

This package contains shared helpers used across the application,
including datetime utilities and id helpers.
"""

from utils.datetime_utils import utc_now
from utils.id_utils import new_uuid

__all__ = ['utc_now', 'new_uuid']
