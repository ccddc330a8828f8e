"""Resource ownership checks."""

from loguru import logger

from gig_api.exceptions import ForbiddenError

from .enums import Resource, Role
from .model import AuthorizationModel
from .models import Identity

OWNERSHIP_DENIED_MESSAGE = "You can only access your own resources"


class OwnershipEvaluator:
    """Verifies that a caller owns the resource they are acting on."""

    def __init__(self, model: AuthorizationModel):
        self.model = model

    async def verify_ownership(
        self,
        identity: Identity,
        resource_type: Resource,
        resource_id: str,
        admin_can_bypass: bool = True,
    ) -> None:
        """Raise unless ``identity`` owns the resource.

        Missing resources and foreign resources are denied with the same
        message so the response does not reveal whether the resource exists.

        Args:
            identity: Authenticated caller
            resource_type: Type of the resource
            resource_id: Primary key of the resource
            admin_can_bypass: Let admins through without an ownership lookup

        Raises:
            ForbiddenError: If the caller is not the owner
        """
        if admin_can_bypass and identity.role == Role.ADMIN:
            logger.trace(f"Ownership check bypassed for admin '{identity.id}'")
            return

        owner_id = await self.model.owner_of(resource_type, resource_id)
        if owner_id is None or owner_id != identity.id:
            logger.info(f"Ownership denied: user '{identity.id}' on {resource_type} '{resource_id}'")
            raise ForbiddenError(OWNERSHIP_DENIED_MESSAGE)
