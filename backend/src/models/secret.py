"""
Secret model.

One encrypted copy of a resource password per user who can read it. The
data column is stored as given; encryption happens client side.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy import String, TIMESTAMP, Text, Index
from sqlalchemy.orm import Mapped, mapped_column

from core.constants import UUID_LENGTH
from core.database import Base
from utils.id_utils import new_uuid


class Secret(Base):
    """Per-user encrypted secret of a resource."""

    __tablename__ = "secrets"

    id: Mapped[str] = mapped_column(String(UUID_LENGTH), primary_key=True, default=new_uuid)
    user_id: Mapped[str] = mapped_column(String(UUID_LENGTH), nullable=False)
    resource_id: Mapped[str] = mapped_column(String(UUID_LENGTH), nullable=False)
    data: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False)
    updated_at: Mapped[Optional[datetime]] = mapped_column(TIMESTAMP(timezone=True), nullable=True)

    __table_args__ = (
        Index("idx_secrets_user_resource", "user_id", "resource_id"),
    )
