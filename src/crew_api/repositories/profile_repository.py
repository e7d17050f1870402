"""Profile repository."""

from crew_api.models.orm.profile import ProfileORM
from crew_api.repositories.base import BaseRepository


class ProfileRepository(BaseRepository[ProfileORM]):
    """Repository for user profiles."""

    model = ProfileORM

    async def upsert_names(
        self,
        user_id: str,
        first_name: str | None,
        last_name: str | None,
        role: str | None = None,
    ) -> ProfileORM:
        """Set the names on a profile, creating the row if missing.

        Args:
            user_id: Auth provider user ID
            first_name: New first name
            last_name: New last name
            role: Role to set; None keeps the current one

        Returns:
            Updated ProfileORM
        """
        profile = await self.get(user_id)
        if profile is None:
            return await self.create(id=user_id, first_name=first_name, last_name=last_name, role=role)

        profile.first_name = first_name
        profile.last_name = last_name
        if role is not None:
            profile.role = role
        await self.session.flush()
        return profile
