"""Service for user-related operations."""

from typing import Any

from loguru import logger

from gig_api.authorization.enums import Role
from gig_api.event_bus import EventBus
from gig_api.events.types import EventName, GetTalentByUserIdPayload
from gig_api.exceptions import NotFoundError
from gig_api.repositories import UserRepository


class UserService:
    """Service for user-related operations."""

    def __init__(self, user_repository: UserRepository, event_bus: EventBus):
        """Initialize the user service.

        Args:
            user_repository: Repository of local users
            event_bus: Bus used to reach the talent module
        """
        self.user_repository = user_repository
        self.event_bus = event_bus

    async def get_user(self, user_id: str) -> dict[str, Any]:
        """Get a user by ID.

        Raises:
            NotFoundError: If the user does not exist
        """
        logger.debug(f"Service: get_user with id={user_id}")
        user = await self.user_repository.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    async def get_profile(self, user_id: str) -> dict[str, Any]:
        """Get a user together with their talent profile, when they are a talent."""
        user = await self.get_user(user_id)
        if str(user.get("role") or "").lower() == Role.TALENT:
            results = await self.event_bus.dispatch(EventName.TALENT_GET_BY_USER_ID, GetTalentByUserIdPayload(user_id=user_id))
            user["talentProfile"] = results[0] if results else None
        return user

    async def list_users(
        self,
        page: int | None = None,
        page_size: int | None = None,
        role: str | None = None,
        search: str | None = None,
    ) -> list[dict[str, Any]]:
        """List one page of users, newest first.

        Args:
            page: 1-based page number
            page_size: Users per page
            role: Only list users with this role
            search: Case-insensitive match on first name, last name or username
        """
        logger.debug(f"Service: list_users page={page} page_size={page_size} role={role} search={search!r}")
        return await self.user_repository.find_many(
            filters={"role": role} if role else None,
            page=page,
            page_size=page_size,
            order_by="createdAt",
            ascending=False,
            search=search,
        )

    async def update_user(self, user_id: str, updates: dict[str, Any]) -> dict[str, Any]:
        """Apply profile updates to a user.

        Args:
            user_id: ID of the user to update
            updates: camelCased fields to change

        Raises:
            NotFoundError: If the user does not exist
        """
        logger.debug(f"Service: update_user id={user_id} fields={sorted(updates)}")
        if not updates:
            return await self.get_user(user_id)
        user = await self.user_repository.update_by_id(user_id, updates)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    async def delete_user(self, user_id: str) -> None:
        """Delete a user.

        Raises:
            NotFoundError: If the user does not exist
        """
        if not await self.user_repository.delete_by_id(user_id):
            raise NotFoundError("User", user_id)
        logger.info(f"User {user_id} deleted")
