"""Base repository shared by the record store repositories."""

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from crew_api.models.orm.base import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """Lookup, insert and hard-delete by primary key."""

    model: type[T]

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    async def get(self, id: Any) -> T | None:
        """Get a record by primary key.

        Args:
            id: Employee / profile id or inquiry UUID

        Returns:
            Record or None if not found
        """
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def create(self, **kwargs: Any) -> T:
        """Insert a record and load its server-side defaults.

        Args:
            **kwargs: Column values

        Returns:
            Created record
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete(self, id: Any) -> bool:
        """Hard-delete a record by primary key.

        Returns:
            True if deleted, False if no such record
        """
        instance = await self.get(id)
        if instance is None:
            return False

        await self.session.delete(instance)
        await self.session.flush()
        return True

    async def delete_many(self, ids: Sequence[Any]) -> int:
        """Hard-delete several records in one statement.

        Returns:
            Number of rows deleted
        """
        if not ids:
            return 0
        result = await self.session.execute(
            delete(self.model).where(self.model.id.in_(list(ids)))
        )
        await self.session.flush()
        return result.rowcount
