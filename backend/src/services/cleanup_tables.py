"""
Cleanup operations per table.

Each CleanupTable is the handle the runner resolves from a table identifier.
It holds an explicit mapping of operation name -> handler, where a handler is
``handler(db, dry_run) -> int``: it counts the inconsistent rows and, unless
dry_run is set, deletes them. Handlers never commit; the runner owns the
transaction.

Naming of the checks:
- "Soft Deleted X": the row references an X that still exists but is flagged
  is_deleted.
- "Hard Deleted X": the row references an X that does not exist anymore.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Type

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from core.constants import ACO_RESOURCE, ARO_GROUP, ARO_USER
from models import Comment, Favorite, Group, GroupsUser, Permission, Resource, Secret, User
from services.cleanup_registry import CleanupLookupError, cleanup_operation_name
from services.permission_history_service import record_permission_history

logger = logging.getLogger(__name__)

CleanupHandler = Callable[[Session, bool], int]
RowDeleter = Callable[[Session, Type[Any], Sequence[Any]], None]

HISTORY_BATCH_SIZE = 500


def delete_rows(db: Session, model: Type[Any], criteria: Sequence[Any]) -> None:
    """Bulk delete the rows of a model matching criteria."""
    db.execute(
        delete(model).where(*criteria).execution_options(synchronize_session=False)
    )


def delete_permissions(db: Session, model: Type[Any], criteria: Sequence[Any]) -> None:
    """Delete permissions, keeping a "delete" history entry for each one."""
    permissions = db.scalars(
        select(Permission).where(*criteria).execution_options(yield_per=HISTORY_BATCH_SIZE)
    )
    for permission in permissions:
        record_permission_history(db, permission, "delete")
    delete_rows(db, Permission, criteria)


def _apply(
    db: Session,
    model: Type[Any],
    criteria: Sequence[Any],
    dry_run: bool,
    deleter: RowDeleter,
) -> int:
    """Count the rows matching criteria, delete them unless dry_run, return the count."""
    count = db.scalar(select(func.count()).select_from(model).where(*criteria)) or 0
    if count and not dry_run:
        deleter(db, model, criteria)
        logger.debug(f"Deleted {count} row(s) from {model.__tablename__}")
    return count


def soft_deleted_cleanup(
    model: Type[Any],
    column: Any,
    target: Type[Any],
    *extra_criteria: Any,
    deleter: RowDeleter = delete_rows,
) -> CleanupHandler:
    """Build a handler for rows whose ``column`` points at a soft deleted ``target``."""
    def handler(db: Session, dry_run: bool) -> int:
        deleted_ids = select(target.id).where(target.is_deleted.is_(True))
        return _apply(db, model, [column.in_(deleted_ids), *extra_criteria], dry_run, deleter)
    return handler


def hard_deleted_cleanup(
    model: Type[Any],
    column: Any,
    target: Type[Any],
    *extra_criteria: Any,
    deleter: RowDeleter = delete_rows,
) -> CleanupHandler:
    """Build a handler for rows whose ``column`` points at a missing ``target``."""
    def handler(db: Session, dry_run: bool) -> int:
        existing_ids = select(target.id)
        return _apply(db, model, [column.not_in(existing_ids), *extra_criteria], dry_run, deleter)
    return handler


def cleanup_secrets_without_permission(db: Session, dry_run: bool) -> int:
    """
    Remove secrets whose owner cannot read the resource anymore.

    A user can read a resource through a direct permission or through a
    permission given to one of their groups.
    """
    direct_permission = select(Permission.id).where(
        Permission.aco == ACO_RESOURCE,
        Permission.aco_foreign_key == Secret.resource_id,
        Permission.aro == ARO_USER,
        Permission.aro_foreign_key == Secret.user_id,
    ).correlate(Secret)
    group_permission = select(Permission.id).join(
        GroupsUser, GroupsUser.group_id == Permission.aro_foreign_key
    ).where(
        Permission.aco == ACO_RESOURCE,
        Permission.aco_foreign_key == Secret.resource_id,
        Permission.aro == ARO_GROUP,
        GroupsUser.user_id == Secret.user_id,
    ).correlate(Secret)
    return _apply(
        db,
        Secret,
        [~direct_permission.exists(), ~group_permission.exists()],
        dry_run,
        delete_rows,
    )


class CleanupTable:
    """
    Handle on one table exposing its cleanup operations.

    Handlers are registered under a job name and stored under the matching
    operation name, so any spelling of a job that collapses to the same
    operation resolves to the same handler.
    """

    def __init__(self, name: str, handlers: Optional[Mapping[str, CleanupHandler]] = None):
        self.name = name
        self._operations: Dict[str, CleanupHandler] = {}
        for job_name, handler in (handlers or {}).items():
            self.register(job_name, handler)

    def register(self, job_name: str, handler: CleanupHandler) -> None:
        self._operations[cleanup_operation_name(job_name)] = handler

    def operations(self) -> List[str]:
        return list(self._operations)

    def resolve(self, job_name: str) -> CleanupHandler:
        """
        Get the handler for a job.

        Raises:
            CleanupLookupError: If the table has no such operation
        """
        operation = cleanup_operation_name(job_name)
        try:
            return self._operations[operation]
        except KeyError:
            raise CleanupLookupError(
                f"Table {self.name} has no cleanup operation {operation} (job '{job_name}')"
            ) from None

    def __repr__(self) -> str:
        return f"<CleanupTable(name='{self.name}', operations={len(self._operations)})>"


class CleanupTableLocator:
    """Resolves table identifiers to CleanupTable handles."""

    def __init__(self, tables: Iterable[CleanupTable] = ()):
        self._tables: Dict[str, CleanupTable] = {}
        for table in tables:
            self.register(table)

    def register(self, table: CleanupTable) -> None:
        self._tables[table.name] = table

    def get(self, table_name: str) -> CleanupTable:
        """
        Get the handle of a table.

        Raises:
            CleanupLookupError: If no table is registered under that name
        """
        table = self._tables.get(table_name)
        if table is None:
            raise CleanupLookupError(f"Unknown cleanup table: '{table_name}'")
        return table


def build_groups_users_table() -> CleanupTable:
    return CleanupTable("GroupsUsers", {
        "Soft Deleted Users": soft_deleted_cleanup(GroupsUser, GroupsUser.user_id, User),
        "Hard Deleted Users": hard_deleted_cleanup(GroupsUser, GroupsUser.user_id, User),
        "Soft Deleted Groups": soft_deleted_cleanup(GroupsUser, GroupsUser.group_id, Group),
        "Hard Deleted Groups": hard_deleted_cleanup(GroupsUser, GroupsUser.group_id, Group),
    })


def build_favorites_table() -> CleanupTable:
    on_resource = Favorite.foreign_model == ACO_RESOURCE
    return CleanupTable("Favorites", {
        "Soft Deleted Users": soft_deleted_cleanup(Favorite, Favorite.user_id, User),
        "Hard Deleted Users": hard_deleted_cleanup(Favorite, Favorite.user_id, User),
        "Soft Deleted Resources": soft_deleted_cleanup(Favorite, Favorite.foreign_key, Resource, on_resource),
        "Hard Deleted Resources": hard_deleted_cleanup(Favorite, Favorite.foreign_key, Resource, on_resource),
    })


def build_comments_table() -> CleanupTable:
    on_resource = Comment.foreign_model == ACO_RESOURCE
    return CleanupTable("Comments", {
        "Soft Deleted Users": soft_deleted_cleanup(Comment, Comment.user_id, User),
        "Hard Deleted Users": hard_deleted_cleanup(Comment, Comment.user_id, User),
        "Soft Deleted Resources": soft_deleted_cleanup(Comment, Comment.foreign_key, Resource, on_resource),
        "Hard Deleted Resources": hard_deleted_cleanup(Comment, Comment.foreign_key, Resource, on_resource),
    })


def build_permissions_table() -> CleanupTable:
    aro_user = Permission.aro == ARO_USER
    aro_group = Permission.aro == ARO_GROUP
    aco_resource = Permission.aco == ACO_RESOURCE
    aro_column = Permission.aro_foreign_key
    aco_column = Permission.aco_foreign_key
    return CleanupTable("Permissions", {
        "Soft Deleted Users": soft_deleted_cleanup(
            Permission, aro_column, User, aro_user, deleter=delete_permissions),
        "Hard Deleted Users": hard_deleted_cleanup(
            Permission, aro_column, User, aro_user, deleter=delete_permissions),
        "Soft Deleted Groups": soft_deleted_cleanup(
            Permission, aro_column, Group, aro_group, deleter=delete_permissions),
        "Hard Deleted Groups": hard_deleted_cleanup(
            Permission, aro_column, Group, aro_group, deleter=delete_permissions),
        "Soft Deleted Resources": soft_deleted_cleanup(
            Permission, aco_column, Resource, aco_resource, deleter=delete_permissions),
        "Hard Deleted Resources": hard_deleted_cleanup(
            Permission, aco_column, Resource, aco_resource, deleter=delete_permissions),
    })


def build_secrets_table() -> CleanupTable:
    return CleanupTable("Secrets", {
        "Soft Deleted Users": soft_deleted_cleanup(Secret, Secret.user_id, User),
        "Hard Deleted Users": hard_deleted_cleanup(Secret, Secret.user_id, User),
        "Soft Deleted Resources": soft_deleted_cleanup(Secret, Secret.resource_id, Resource),
        "Hard Deleted Resources": hard_deleted_cleanup(Secret, Secret.resource_id, Resource),
        "Hard Deleted Permissions": cleanup_secrets_without_permission,
    })


def build_default_locator() -> CleanupTableLocator:
    """Locator with a handle for every table of the default cleanup registry."""
    return CleanupTableLocator([
        build_groups_users_table(),
        build_favorites_table(),
        build_comments_table(),
        build_permissions_table(),
        build_secrets_table(),
    ])
