"""
Permission history service.

Records every change made to a permission so access changes can be audited
after the fact, including permissions removed by the database cleanup.
"""

import logging
from typing import Any, List

from sqlalchemy.orm import Session

from core.constants import PERMISSION_HISTORY_ACTIONS
from models import Permission, PermissionHistory

logger = logging.getLogger(__name__)


def record_permission_history(db: Session, permission: Permission, action: str) -> PermissionHistory:
    """
    Append a history entry for a permission change.

    The entry is added to the session but not committed; it is committed (or
    rolled back) together with the change it describes.

    Args:
        db: Database session
        permission: Permission that was created, updated or deleted
        action: One of "create", "update", "delete"

    Returns:
        The new PermissionHistory entry

    Raises:
        ValueError: If action is not a known history action
    """
    if action not in PERMISSION_HISTORY_ACTIONS:
        raise ValueError(f"Unknown permission history action: {action}")

    entry = PermissionHistory(
        permission_id=permission.id,
        aco=permission.aco,
        aco_foreign_key=permission.aco_foreign_key,
        aro=permission.aro,
        aro_foreign_key=permission.aro_foreign_key,
        type=permission.type,
        action=action,
    )
    db.add(entry)
    logger.debug(f"Recorded permission history: {action} {permission!r}")
    return entry


def get_permission_history(db: Session, **conditions: Any) -> List[PermissionHistory]:
    """Get history entries matching the given column values, oldest first."""
    return db.query(PermissionHistory).filter_by(**conditions).order_by(
        PermissionHistory.created_at
    ).all()
