"""
Comment model.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy import String, TIMESTAMP, Text, Index
from sqlalchemy.orm import Mapped, mapped_column

from core.constants import ACO_RESOURCE, UUID_LENGTH
from core.database import Base
from utils.id_utils import new_uuid


class Comment(Base):
    """Comment left by a user on a resource."""

    __tablename__ = "comments"

    id: Mapped[str] = mapped_column(String(UUID_LENGTH), primary_key=True, default=new_uuid)
    parent_id: Mapped[Optional[str]] = mapped_column(String(UUID_LENGTH), nullable=True)
    user_id: Mapped[str] = mapped_column(String(UUID_LENGTH), nullable=False)
    foreign_model: Mapped[str] = mapped_column(String(36), nullable=False, default=ACO_RESOURCE)
    foreign_key: Mapped[str] = mapped_column(String(UUID_LENGTH), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False)

    __table_args__ = (
        Index("idx_comments_user", "user_id"),
        Index("idx_comments_foreign_key", "foreign_key"),
    )
