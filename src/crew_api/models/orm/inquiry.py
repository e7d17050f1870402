"""Support inquiry ORM model."""

from sqlalchemy import Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from crew_api.models.orm.base import Base, TimestampMixin, UUIDMixin


class InquiryORM(Base, UUIDMixin, TimestampMixin):
    """Support inquiry database model."""

    __tablename__ = "inquiries"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="open")

    __table_args__ = (Index("idx_inquiries_status", "status"),)
