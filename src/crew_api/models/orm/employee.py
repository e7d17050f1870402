"""Employee ORM model."""

from datetime import date
from typing import Any

from sqlalchemy import Boolean, Date, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from crew_api.models.orm.base import Base, TimestampMixin


class EmployeeORM(Base, TimestampMixin):
    """Employee database model.

    Skills, certifications and availability are stored as JSONB arrays, as
    they are always read and written together with the employee.
    """

    __tablename__ = "employees"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    role: Mapped[str] = mapped_column(String(50), nullable=False)
    department: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    skills: Mapped[list[dict[str, Any]]] = mapped_column(JSONB, nullable=False, default=list)
    certifications: Mapped[list[dict[str, Any]]] = mapped_column(JSONB, nullable=False, default=list)
    availability: Mapped[list[dict[str, Any]]] = mapped_column(JSONB, nullable=False, default=list)
    entry_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    contract_end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    contract_type: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Lifecycle flags
    is_archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    archived_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    archived_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    deleted_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index("idx_employees_name", "name"),
        Index("idx_employees_lifecycle", "is_archived", "is_deleted"),
    )
