"""Permission evaluation for users.

The user's role is resolved through the ``user:get-by-id`` event so this
module never imports the user module. Every negative or unresolvable outcome
evaluates to ``False``.
"""

from collections.abc import Iterable

from loguru import logger

from gig_api.event_bus import EventBus
from gig_api.events.types import EventName, GetUserByIdPayload

from .enums import Permission, Role
from .model import AuthorizationModel
from .models import Identity


class PermissionEvaluator:
    """Decides whether a user holds a set of permissions."""

    def __init__(self, model: AuthorizationModel, event_bus: EventBus):
        self.model = model
        self.event_bus = event_bus

    async def _resolve_role(self, user_id: str) -> Role | None:
        users = await self.event_bus.dispatch(EventName.USER_GET_BY_ID, GetUserByIdPayload(id=user_id, fields=["role"]))
        if not users:
            logger.debug(f"Permission check: user '{user_id}' not found")
            return None

        identity = Identity.model_validate({"id": user_id, **users[0]})
        if identity.role is None:
            logger.debug(f"Permission check: user '{user_id}' has no role")
        return identity.role

    async def user_has_permission(self, user_id: str, permission: Permission) -> bool:
        """Check a single permission."""
        role = await self._resolve_role(user_id)
        if role is None:
            return False

        return permission in await self.model.permissions_for_role(role)

    async def user_has_all_permissions(self, user_id: str, required: Iterable[Permission]) -> bool:
        """Check that the user holds every permission in ``required``.

        An empty ``required`` always passes without any lookup.
        """
        required = tuple(required)
        if not required:
            return True

        role = await self._resolve_role(user_id)
        if role is None:
            return False

        granted = await self.model.permissions_for_role(role)
        missing = [p for p in required if p not in granted]
        if missing:
            logger.debug(f"User '{user_id}' ({role}) is missing permissions: {missing}")
            return False
        return True
