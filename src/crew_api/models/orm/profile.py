"""User profile ORM model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from crew_api.models.orm.base import Base, TimestampMixin


class ProfileORM(Base, TimestampMixin):
    """Profile attached to an auth provider user id."""

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    role: Mapped[str | None] = mapped_column(String(100), nullable=True)
