"""
Group model.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy import String, Boolean, TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column

from core.constants import MAX_STRING_LENGTH, UUID_LENGTH
from core.database import Base
from utils.id_utils import new_uuid


class Group(Base):
    """Group of users sharing permissions on resources."""

    __tablename__ = "groups"

    id: Mapped[str] = mapped_column(String(UUID_LENGTH), primary_key=True, default=new_uuid)
    name: Mapped[str] = mapped_column(String(MAX_STRING_LENGTH), nullable=False)
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False)
    updated_at: Mapped[Optional[datetime]] = mapped_column(TIMESTAMP(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<Group(id={self.id}, name='{self.name}', is_deleted={self.is_deleted})>"
