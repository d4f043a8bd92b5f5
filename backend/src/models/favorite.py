"""
Favorite model.
"""

from datetime import datetime
from sqlalchemy import String, TIMESTAMP, Index
from sqlalchemy.orm import Mapped, mapped_column

from core.constants import ACO_RESOURCE, UUID_LENGTH
from core.database import Base
from utils.id_utils import new_uuid


class Favorite(Base):
    """A user's favorite mark on a resource."""

    __tablename__ = "favorites"

    id: Mapped[str] = mapped_column(String(UUID_LENGTH), primary_key=True, default=new_uuid)
    user_id: Mapped[str] = mapped_column(String(UUID_LENGTH), nullable=False)
    foreign_model: Mapped[str] = mapped_column(String(36), nullable=False, default=ACO_RESOURCE)
    foreign_key: Mapped[str] = mapped_column(String(UUID_LENGTH), nullable=False)

    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False)

    __table_args__ = (
        Index("idx_favorites_user", "user_id"),
        Index("idx_favorites_foreign_key", "foreign_key"),
    )
