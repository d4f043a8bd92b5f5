"""
Permission model.

A permission grants an aro (a User or a Group) access of a given type on an
aco (a Resource). Both sides are referenced by model name plus id, so rows
can end up pointing at deleted or missing records.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy import String, Integer, TIMESTAMP, Index
from sqlalchemy.orm import Mapped, mapped_column

from core.constants import ACO_RESOURCE, PERMISSION_READ, UUID_LENGTH
from core.database import Base
from utils.id_utils import new_uuid


class Permission(Base):
    """Access grant of a user or group on a resource."""

    __tablename__ = "permissions"

    id: Mapped[str] = mapped_column(String(UUID_LENGTH), primary_key=True, default=new_uuid)
    aco: Mapped[str] = mapped_column(String(30), nullable=False, default=ACO_RESOURCE)
    aco_foreign_key: Mapped[str] = mapped_column(String(UUID_LENGTH), nullable=False)
    aro: Mapped[str] = mapped_column(String(30), nullable=False)  # "User" or "Group"
    aro_foreign_key: Mapped[str] = mapped_column(String(UUID_LENGTH), nullable=False)
    type: Mapped[int] = mapped_column(Integer, nullable=False, default=PERMISSION_READ)

    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False)
    updated_at: Mapped[Optional[datetime]] = mapped_column(TIMESTAMP(timezone=True), nullable=True)

    __table_args__ = (
        Index("idx_permissions_aco", "aco", "aco_foreign_key"),
        Index("idx_permissions_aro", "aro", "aro_foreign_key"),
    )

    def __repr__(self) -> str:
        return (
            f"<Permission(id={self.id}, aro={self.aro}:{self.aro_foreign_key}, "
            f"aco={self.aco}:{self.aco_foreign_key}, type={self.type})>"
        )
