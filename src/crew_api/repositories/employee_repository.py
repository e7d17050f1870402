"""Employee repository."""

from typing import Any

from sqlalchemy import select

from crew_api.models.domain.employee import Partition
from crew_api.models.orm.employee import EmployeeORM
from crew_api.repositories.base import BaseRepository


class EmployeeRepository(BaseRepository[EmployeeORM]):
    """Repository for employee operations."""

    model = EmployeeORM

    async def get_by_partition(self, partition: Partition) -> list[EmployeeORM]:
        """Get the employees of one roster partition, sorted by name.

        Args:
            partition: Roster partition to fetch

        Returns:
            List of employees ordered by name ascending
        """
        query = select(EmployeeORM)
        if partition == Partition.TRASHED:
            query = query.where(EmployeeORM.is_deleted.is_(True))
        elif partition == Partition.ARCHIVED:
            query = query.where(
                EmployeeORM.is_archived.is_(True),
                EmployeeORM.is_deleted.is_(False),
            )
        else:
            query = query.where(
                EmployeeORM.is_archived.is_(False),
                EmployeeORM.is_deleted.is_(False),
            )

        result = await self.session.execute(query.order_by(EmployeeORM.name.asc()))
        return list(result.scalars().all())

    async def get_by_ids(self, ids: list[str]) -> dict[str, EmployeeORM]:
        """Get multiple employees by their IDs in a single query.

        Args:
            ids: List of employee IDs

        Returns:
            Dict mapping employee ID to EmployeeORM
        """
        if not ids:
            return {}
        result = await self.session.execute(
            select(EmployeeORM).where(EmployeeORM.id.in_(ids))
        )
        return {emp.id: emp for emp in result.scalars().all()}

    async def upsert(self, existing: EmployeeORM | None, values: dict[str, Any]) -> EmployeeORM:
        """Insert a new employee or overwrite an existing row.

        Args:
            existing: Row already loaded for this id, if any
            values: Column values, including ``id``

        Returns:
            The written EmployeeORM
        """
        if existing is None:
            instance = EmployeeORM(**values)
            self.session.add(instance)
        else:
            instance = existing
            for key, value in values.items():
                setattr(instance, key, value)

        await self.session.flush()
        return instance
