"""
User model.

Users are soft deleted: the row stays with is_deleted set so that audit
records keep pointing at something. Rows in other tables that reference a
soft deleted (or missing) user are repaired by the database cleanup.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy import String, Boolean, TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column

from core.constants import MAX_STRING_LENGTH, UUID_LENGTH
from core.database import Base
from utils.id_utils import new_uuid


class User(Base):
    """Vault user account."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(UUID_LENGTH), primary_key=True, default=new_uuid)
    username: Mapped[str] = mapped_column(String(MAX_STRING_LENGTH), unique=True)
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False)
    updated_at: Mapped[Optional[datetime]] = mapped_column(TIMESTAMP(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}', is_deleted={self.is_deleted})>"
