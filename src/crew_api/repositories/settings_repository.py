"""Settings repository."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from crew_api.models.orm.settings import AppSettingORM


class SettingsRepository:
    """Repository for keyed application settings."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    async def get(self, key: str) -> Any | None:
        """Get a setting by key.

        Args:
            key: Setting key

        Returns:
            Setting value or None if not found
        """
        result = await self.session.execute(
            select(AppSettingORM).where(AppSettingORM.key == key)
        )
        setting = result.scalar_one_or_none()
        return setting.value if setting else None

    async def set(self, key: str, value: Any) -> AppSettingORM:
        """Create or replace a setting value.

        Args:
            key: Setting key
            value: JSON-serializable setting value

        Returns:
            Created or updated AppSettingORM
        """
        result = await self.session.execute(select(AppSettingORM).where(AppSettingORM.key == key))
        existing = result.scalar_one_or_none()

        if existing:
            existing.value = value
            await self.session.flush()
            return existing

        setting = AppSettingORM(key=key, value=value)
        self.session.add(setting)
        await self.session.flush()
        return setting
