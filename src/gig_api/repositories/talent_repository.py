"""Repository for the ``talent_profiles`` table."""

from typing import Any

from .base import BaseRepository


class TalentRepository(BaseRepository):
    """Talent profiles, one per user with the talent role."""

    table = "talent_profiles"

    async def find_by_user_id(self, user_id: str) -> dict[str, Any] | None:
        """Return the talent profile of a user, if any."""
        profiles = await self.find_many(filters={"userId": user_id}, page=1, page_size=1)
        return profiles[0] if profiles else None

    async def create_profile(self, user_id: str) -> dict[str, Any]:
        """Create the talent profile of a user, or return the existing one."""
        existing = await self.find_by_user_id(user_id)
        if existing is not None:
            return existing
        return await self.create({"userId": user_id})
