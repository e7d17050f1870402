"""Activity log repository."""

from sqlalchemy import func, select

from crew_api.models.orm.activity_log import ActivityLogORM
from crew_api.repositories.base import BaseRepository


class ActivityLogRepository(BaseRepository[ActivityLogORM]):
    """Repository for activity log operations."""

    model = ActivityLogORM

    async def get_recent(
        self,
        limit: int = 100,
        offset: int = 0,
        category: str | None = None,
    ) -> list[ActivityLogORM]:
        """Get log entries, newest first.

        Args:
            limit: Maximum results
            offset: Number of entries to skip
            category: Optional category filter

        Returns:
            List of log entries
        """
        query = select(ActivityLogORM)
        if category:
            query = query.where(ActivityLogORM.category == category)
        query = query.order_by(ActivityLogORM.timestamp.desc()).offset(offset).limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count_by_category(self, category: str | None = None) -> int:
        """Count entries, optionally restricted to one category."""
        query = select(func.count()).select_from(ActivityLogORM)
        if category:
            query = query.where(ActivityLogORM.category == category)
        result = await self.session.execute(query)
        return result.scalar_one()
