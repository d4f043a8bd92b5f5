"""
Permission history model.

Append-only audit trail of permission changes. Entries copy the permission's
fields at the time of the change, so they stay readable after the permission
itself is gone.
"""

from datetime import datetime
from sqlalchemy import String, Integer, TIMESTAMP, Index
from sqlalchemy.orm import Mapped, mapped_column

from core.constants import UUID_LENGTH
from core.database import Base
from utils.id_utils import new_uuid


class PermissionHistory(Base):
    """One recorded change of a permission."""

    __tablename__ = "permissions_history"

    id: Mapped[str] = mapped_column(String(UUID_LENGTH), primary_key=True, default=new_uuid)
    permission_id: Mapped[str] = mapped_column(String(UUID_LENGTH), nullable=False)
    aco: Mapped[str] = mapped_column(String(30), nullable=False)
    aco_foreign_key: Mapped[str] = mapped_column(String(UUID_LENGTH), nullable=False)
    aro: Mapped[str] = mapped_column(String(30), nullable=False)
    aro_foreign_key: Mapped[str] = mapped_column(String(UUID_LENGTH), nullable=False)
    type: Mapped[int] = mapped_column(Integer, nullable=False)
    action: Mapped[str] = mapped_column(String(20), nullable=False)  # create, update or delete

    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False)

    __table_args__ = (
        Index("idx_permissions_history_permission", "permission_id"),
    )
