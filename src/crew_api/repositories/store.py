"""Record store: the persistence collaborator used by the services.

``RecordStore`` is the interface the services depend on. ``SQLRecordStore``
implements it over the SQLAlchemy repositories; every write runs inside a
SAVEPOINT so a failed write leaves the request session usable.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from crew_api.exceptions import PersistenceError, VersionConflictError
from crew_api.models.domain.activity import ActivityLog
from crew_api.models.domain.employee import Employee, Partition
from crew_api.models.domain.inquiry import Inquiry
from crew_api.models.domain.user import UserProfile
from crew_api.models.orm.activity_log import ActivityLogORM
from crew_api.models.orm.employee import EmployeeORM
from crew_api.models.orm.inquiry import InquiryORM
from crew_api.models.orm.profile import ProfileORM
from crew_api.repositories.activity_log_repository import ActivityLogRepository
from crew_api.repositories.employee_repository import EmployeeRepository
from crew_api.repositories.inquiry_repository import InquiryRepository
from crew_api.repositories.profile_repository import ProfileRepository
from crew_api.repositories.settings_repository import SettingsRepository

logger = logging.getLogger(__name__)


class RecordStore(ABC):
    """Abstract remote record store."""

    @abstractmethod
    async def fetch_employees(self, partition: Partition) -> list[Employee]:
        """Fetch the employees of one partition, sorted by name ascending."""

    @abstractmethod
    async def get_employee(self, employee_id: str) -> Employee | None:
        """Fetch one employee by id, whatever its partition."""

    @abstractmethod
    async def upsert_employees(self, employees: list[Employee]) -> list[Employee]:
        """Insert or overwrite employees keyed by id.

        The stored version of an existing id must equal the version carried
        by the given record; the written records are returned with their
        version incremented.

        Raises:
            VersionConflictError: If a record is based on a stale version
            PersistenceError: If the write fails
        """

    @abstractmethod
    async def delete_employee(self, employee_id: str) -> None:
        """Hard-delete one employee by id."""

    @abstractmethod
    async def delete_employees(self, employee_ids: list[str]) -> None:
        """Hard-delete several employees in a single write."""

    @abstractmethod
    async def add_log(self, entry: ActivityLog) -> ActivityLog:
        """Append an activity log entry."""

    @abstractmethod
    async def get_logs(
        self,
        limit: int = 100,
        offset: int = 0,
        category: str | None = None,
    ) -> list[ActivityLog]:
        """Fetch activity log entries, newest first."""

    @abstractmethod
    async def count_logs(self, category: str | None = None) -> int:
        """Count activity log entries, optionally within one category."""

    @abstractmethod
    async def get_setting(self, key: str) -> Any | None:
        """Fetch a settings blob by key."""

    @abstractmethod
    async def save_setting(self, key: str, value: Any) -> None:
        """Replace a settings blob."""

    @abstractmethod
    async def get_profile(self, user_id: str) -> UserProfile | None:
        """Fetch the profile attached to an auth user id."""

    @abstractmethod
    async def update_profile(
        self,
        user_id: str,
        first_name: str | None,
        last_name: str | None,
        role: str | None = None,
    ) -> UserProfile:
        """Set first / last name (and optionally role) on a profile."""

    @abstractmethod
    async def add_inquiry(self, inquiry: Inquiry) -> Inquiry:
        """Persist a support inquiry."""


def employee_to_row(employee: Employee) -> dict[str, Any]:
    """Column values for an employee (JSON-ready nested collections)."""
    data = employee.model_dump(mode="json")
    return {
        "id": employee.id,
        "name": employee.name,
        "email": employee.email,
        "role": employee.role.value,
        "department": employee.department,
        "skills": data["skills"],
        "certifications": data["certifications"],
        "availability": data["availability"],
        "entry_date": employee.entry_date,
        "contract_end_date": employee.contract_end_date,
        "phone_number": employee.phone_number,
        "contract_type": employee.contract_type,
        "is_archived": employee.is_archived,
        "archived_date": employee.archived_date,
        "archived_reason": employee.archived_reason,
        "is_deleted": employee.is_deleted,
        "deleted_date": employee.deleted_date,
        "version": employee.version,
    }


def employee_from_orm(row: EmployeeORM) -> Employee:
    """Build the domain employee from its row."""
    return Employee(
        id=row.id,
        name=row.name,
        email=row.email,
        role=row.role,
        department=row.department,
        skills=row.skills or [],
        certifications=row.certifications or [],
        availability=row.availability or [],
        entry_date=row.entry_date,
        contract_end_date=row.contract_end_date,
        phone_number=row.phone_number,
        contract_type=row.contract_type,
        is_archived=row.is_archived,
        archived_date=row.archived_date,
        archived_reason=row.archived_reason,
        is_deleted=row.is_deleted,
        deleted_date=row.deleted_date,
        version=row.version,
    )


def _log_from_orm(row: ActivityLogORM) -> ActivityLog:
    return ActivityLog(
        id=row.id,
        timestamp=row.timestamp,
        user=row.user,
        action=row.action,
        details=row.details,
        category=row.category,
    )


def _profile_from_orm(row: ProfileORM) -> UserProfile:
    return UserProfile(
        id=row.id,
        first_name=row.first_name,
        last_name=row.last_name,
        role=row.role,
    )


def _inquiry_from_orm(row: InquiryORM) -> Inquiry:
    return Inquiry(
        id=str(row.id),
        name=row.name,
        email=row.email,
        subject=row.subject,
        message=row.message,
        status=row.status,
        created_at=row.created_at,
    )


class SQLRecordStore(RecordStore):
    """Record store backed by the SQLAlchemy async session."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize store with database session."""
        self.session = session
        self.employee_repo = EmployeeRepository(session)
        self.log_repo = ActivityLogRepository(session)
        self.settings_repo = SettingsRepository(session)
        self.profile_repo = ProfileRepository(session)
        self.inquiry_repo = InquiryRepository(session)

    @asynccontextmanager
    async def _write(self, operation: str) -> AsyncIterator[None]:
        """Run a write inside a SAVEPOINT, wrapping database errors."""
        try:
            async with self.session.begin_nested():
                yield
        except SQLAlchemyError as e:
            logger.error("Record store write failed (%s): %s", operation, e)
            raise PersistenceError(operation, str(e)) from e

    @asynccontextmanager
    async def _read(self, operation: str) -> AsyncIterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            logger.error("Record store read failed (%s): %s", operation, e)
            raise PersistenceError(operation, str(e)) from e

    async def fetch_employees(self, partition: Partition) -> list[Employee]:
        async with self._read("fetch_employees"):
            rows = await self.employee_repo.get_by_partition(partition)
        return [employee_from_orm(row) for row in rows]

    async def get_employee(self, employee_id: str) -> Employee | None:
        async with self._read("get_employee"):
            row = await self.employee_repo.get(employee_id)
        return employee_from_orm(row) if row else None

    async def upsert_employees(self, employees: list[Employee]) -> list[Employee]:
        if not employees:
            return []

        written: list[Employee] = []
        async with self._write("upsert_employees"):
            existing = await self.employee_repo.get_by_ids([emp.id for emp in employees])
            for employee in employees:
                row = existing.get(employee.id)
                if row is not None and row.version != employee.version:
                    raise VersionConflictError(employee.id, employee.version, row.version)

                bumped = employee.model_copy(update={"version": employee.version + 1})
                await self.employee_repo.upsert(row, employee_to_row(bumped))
                written.append(bumped)

        logger.debug("Upserted %d employee(s)", len(written))
        return written

    async def delete_employee(self, employee_id: str) -> None:
        async with self._write("delete_employee"):
            await self.employee_repo.delete(employee_id)

    async def delete_employees(self, employee_ids: list[str]) -> None:
        if not employee_ids:
            return
        async with self._write("delete_employees"):
            deleted = await self.employee_repo.delete_many(employee_ids)
        logger.debug("Deleted %d of %d employee(s)", deleted, len(employee_ids))

    async def add_log(self, entry: ActivityLog) -> ActivityLog:
        async with self._write("add_log"):
            await self.log_repo.create(
                id=entry.id,
                timestamp=entry.timestamp,
                user=entry.user,
                action=entry.action,
                details=entry.details,
                category=entry.category.value,
            )
        return entry

    async def get_logs(
        self,
        limit: int = 100,
        offset: int = 0,
        category: str | None = None,
    ) -> list[ActivityLog]:
        async with self._read("get_logs"):
            rows = await self.log_repo.get_recent(limit=limit, offset=offset, category=category)
        return [_log_from_orm(row) for row in rows]

    async def count_logs(self, category: str | None = None) -> int:
        async with self._read("count_logs"):
            return await self.log_repo.count_by_category(category)

    async def get_setting(self, key: str) -> Any | None:
        async with self._read("get_setting"):
            return await self.settings_repo.get(key)

    async def save_setting(self, key: str, value: Any) -> None:
        async with self._write("save_setting"):
            await self.settings_repo.set(key, value)

    async def get_profile(self, user_id: str) -> UserProfile | None:
        async with self._read("get_profile"):
            row = await self.profile_repo.get(user_id)
        return _profile_from_orm(row) if row else None

    async def update_profile(
        self,
        user_id: str,
        first_name: str | None,
        last_name: str | None,
        role: str | None = None,
    ) -> UserProfile:
        async with self._write("update_profile"):
            row = await self.profile_repo.upsert_names(user_id, first_name, last_name, role)
        return _profile_from_orm(row)

    async def add_inquiry(self, inquiry: Inquiry) -> Inquiry:
        async with self._write("add_inquiry"):
            row = await self.inquiry_repo.create(
                name=inquiry.name,
                email=str(inquiry.email),
                subject=inquiry.subject,
                message=inquiry.message,
                status=inquiry.status,
            )
        return _inquiry_from_orm(row)
