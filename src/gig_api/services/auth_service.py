"""Service for account onboarding operations."""

from typing import Any

from loguru import logger

from gig_api.authorization.enums import Role
from gig_api.event_bus import EventBus
from gig_api.events.types import CreateTalentPayload, EventName
from gig_api.exceptions import ConflictError, NotFoundError
from gig_api.repositories import UserRepository


class AuthService:
    """Onboarding steps that follow sign-up at the identity provider."""

    def __init__(self, user_repository: UserRepository, event_bus: EventBus):
        self.user_repository = user_repository
        self.event_bus = event_bus

    async def set_role(self, user_id: str, role: Role) -> dict[str, Any]:
        """Assign the role of a freshly registered user.

        The role can be chosen once. Picking the talent role also creates the
        user's talent profile, before the role is written.

        Args:
            user_id: ID of the user picking a role
            role: The chosen role

        Returns:
            The updated user

        Raises:
            NotFoundError: If the user does not exist
            ConflictError: If the user already has a role
            RuntimeError: If the talent profile could not be created
        """
        user = await self.user_repository.find_by_id(user_id, fields=["id", "role"])
        if user is None:
            raise NotFoundError("User", user_id)
        if user.get("role"):
            raise ConflictError("User role already set")

        # Role is written last so a failed profile creation can be retried.
        if role == Role.TALENT:
            results = await self.event_bus.dispatch(EventName.TALENT_CREATE, CreateTalentPayload(user_id=user_id))
            if not results:
                raise RuntimeError(f"No talent profile created for user {user_id}")

        updated = await self.user_repository.update_by_id(user_id, {"role": role.value})
        if updated is None:
            raise NotFoundError("User", user_id)
        logger.info(f"User {user_id} picked role {role.value}")

        return updated
