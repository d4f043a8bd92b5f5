"""
Test utilities for vault backend tests.

Row factories for the vault tables and permission history assertions.
"""

from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from core.constants import ACO_RESOURCE, ARO_GROUP, ARO_USER, PERMISSION_READ
from models import (
    Comment,
    Favorite,
    Group,
    GroupsUser,
    Permission,
    PermissionHistory,
    Resource,
    Secret,
    User,
)
from utils.id_utils import new_uuid


def create_user(db: Session, username: str, is_deleted: bool = False) -> User:
    user = User(username=username, is_deleted=is_deleted)
    db.add(user)
    db.flush()
    return user


def create_group(db: Session, name: str, is_deleted: bool = False) -> Group:
    group = Group(name=name, is_deleted=is_deleted)
    db.add(group)
    db.flush()
    return group


def create_resource(db: Session, name: str, is_deleted: bool = False) -> Resource:
    resource = Resource(name=name, username="admin", uri="https://example.com", is_deleted=is_deleted)
    db.add(resource)
    db.flush()
    return resource


def add_group_member(db: Session, group_id: str, user_id: str, is_admin: bool = False) -> GroupsUser:
    membership = GroupsUser(group_id=group_id, user_id=user_id, is_admin=is_admin)
    db.add(membership)
    db.flush()
    return membership


def add_favorite(db: Session, user_id: str, resource_id: str) -> Favorite:
    favorite = Favorite(user_id=user_id, foreign_model=ACO_RESOURCE, foreign_key=resource_id)
    db.add(favorite)
    db.flush()
    return favorite


def add_comment(db: Session, user_id: str, resource_id: str, content: str = "Rotated last week") -> Comment:
    comment = Comment(user_id=user_id, foreign_model=ACO_RESOURCE, foreign_key=resource_id, content=content)
    db.add(comment)
    db.flush()
    return comment


def grant_user(db: Session, user_id: str, resource_id: str, type: int = PERMISSION_READ) -> Permission:
    permission = Permission(
        aco=ACO_RESOURCE, aco_foreign_key=resource_id,
        aro=ARO_USER, aro_foreign_key=user_id, type=type,
    )
    db.add(permission)
    db.flush()
    return permission


def grant_group(db: Session, group_id: str, resource_id: str, type: int = PERMISSION_READ) -> Permission:
    permission = Permission(
        aco=ACO_RESOURCE, aco_foreign_key=resource_id,
        aro=ARO_GROUP, aro_foreign_key=group_id, type=type,
    )
    db.add(permission)
    db.flush()
    return permission


def add_secret(db: Session, user_id: str, resource_id: str) -> Secret:
    secret = Secret(user_id=user_id, resource_id=resource_id, data="-----BEGIN PGP MESSAGE-----")
    db.add(secret)
    db.flush()
    return secret


def missing_id() -> str:
    """An id that no row uses, to simulate a hard deleted reference."""
    return new_uuid()


def count_rows(db: Session, model: Any) -> int:
    return db.scalar(select(func.count()).select_from(model))


# Permission history assertions

def assert_permission_history_exists(db: Session, **conditions: Any) -> PermissionHistory:
    """Assert a history entry matching the conditions exists and return it."""
    entry: Optional[PermissionHistory] = db.query(PermissionHistory).filter_by(**conditions).first()
    assert entry is not None, "No corresponding permissions history could be found"
    return entry


def assert_permissions_history_count(db: Session, count: int, **conditions: Any) -> None:
    actual = db.query(PermissionHistory).filter_by(**conditions).count()
    assert actual == count, f"Expected {count} permissions history entries, found {actual}"


def assert_one_permission_history(db: Session, **conditions: Any) -> PermissionHistory:
    assert_permissions_history_count(db, 1, **conditions)
    return assert_permission_history_exists(db, **conditions)


def assert_permissions_history_empty(db: Session) -> None:
    assert_permissions_history_count(db, 0)
