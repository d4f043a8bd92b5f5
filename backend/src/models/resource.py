"""
Resource model.

A resource is one stored credential entry (name, login, uri). The encrypted
password itself lives in Secret, one row per user with access.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy import String, Boolean, TIMESTAMP, Text
from sqlalchemy.orm import Mapped, mapped_column

from core.constants import MAX_STRING_LENGTH, UUID_LENGTH
from core.database import Base
from utils.id_utils import new_uuid


class Resource(Base):
    """Password entry shared through permissions."""

    __tablename__ = "resources"

    id: Mapped[str] = mapped_column(String(UUID_LENGTH), primary_key=True, default=new_uuid)
    name: Mapped[str] = mapped_column(String(MAX_STRING_LENGTH), nullable=False)
    username: Mapped[Optional[str]] = mapped_column(String(MAX_STRING_LENGTH), nullable=True)
    uri: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False)
    updated_at: Mapped[Optional[datetime]] = mapped_column(TIMESTAMP(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<Resource(id={self.id}, name='{self.name}', is_deleted={self.is_deleted})>"
