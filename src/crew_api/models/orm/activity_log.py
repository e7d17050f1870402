"""Activity log ORM model."""

from datetime import datetime

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from crew_api.models.orm.base import Base


class ActivityLogORM(Base):
    """Activity log database model (append-only)."""

    __tablename__ = "activity_logs"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    user: Mapped[str] = mapped_column(String(255), nullable=False)
    action: Mapped[str] = mapped_column(String(100), nullable=False)
    details: Mapped[str] = mapped_column(Text, nullable=False, default="")
    category: Mapped[str] = mapped_column(String(20), nullable=False)

    __table_args__ = (
        Index("idx_activity_logs_timestamp", "timestamp"),
        Index("idx_activity_logs_category", "category"),
    )
