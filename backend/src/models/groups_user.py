"""
Group membership model.

Note: user_id and group_id are plain columns, not foreign keys. Memberships
may outlive a hard deleted user or group; the cleanup removes them.
"""

from datetime import datetime
from sqlalchemy import String, Boolean, TIMESTAMP, Index
from sqlalchemy.orm import Mapped, mapped_column

from core.constants import UUID_LENGTH
from core.database import Base
from utils.id_utils import new_uuid


class GroupsUser(Base):
    """Membership of a user in a group."""

    __tablename__ = "groups_users"

    id: Mapped[str] = mapped_column(String(UUID_LENGTH), primary_key=True, default=new_uuid)
    group_id: Mapped[str] = mapped_column(String(UUID_LENGTH), nullable=False)
    user_id: Mapped[str] = mapped_column(String(UUID_LENGTH), nullable=False)
    is_admin: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False)

    __table_args__ = (
        Index("idx_groups_users_group", "group_id"),
        Index("idx_groups_users_user", "user_id"),
    )
