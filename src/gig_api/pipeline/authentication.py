"""Caller authentication for private endpoints.

A bearer token is exchanged for an external user at the identity provider,
then resolved to the local user through the ``user:get-by-id`` event. The
resolved identity is cached on ``request.state.user`` so later middleware in
the same request lifecycle can reuse it.
"""

from loguru import logger

from gig_api.authorization import Identity
from gig_api.constants import AUTHORIZATION_HEADER, BEARER_PREFIX
from gig_api.event_bus import EventBus
from gig_api.events.types import EventName, GetUserByIdPayload
from gig_api.exceptions import UnauthorizedError
from gig_api.identity import IdentityProvider

from .models import RequestContext


class Authenticator:
    """Resolves the identity of the caller of a private endpoint."""

    def __init__(self, identity_provider: IdentityProvider, event_bus: EventBus):
        self.identity_provider = identity_provider
        self.event_bus = event_bus

    @staticmethod
    def extract_token(ctx: RequestContext) -> str | None:
        """Return the bearer token from the Authorization header, if well formed."""
        header = ctx.headers.get(AUTHORIZATION_HEADER)
        if not header or not header.startswith(BEARER_PREFIX):
            return None
        token = header[len(BEARER_PREFIX) :].strip()
        return token or None

    async def authenticate(self, ctx: RequestContext) -> Identity:
        """Resolve, attach and return the caller identity.

        Args:
            ctx: Request context; ``ctx.user`` is set on success

        Returns:
            The authenticated identity

        Raises:
            UnauthorizedError: If the token is missing, malformed or invalid,
                or no local user matches the external identity
        """
        if ctx.user is not None:
            logger.trace(f"Reusing identity '{ctx.user.id}' attached to the request")
            return ctx.user

        token = self.extract_token(ctx)
        if token is None:
            raise UnauthorizedError("Authorization header missing or invalid")

        external_user = await self.identity_provider.get_user(token)
        if external_user is None:
            raise UnauthorizedError("Invalid or expired token")

        users = await self.event_bus.dispatch(EventName.USER_GET_BY_ID, GetUserByIdPayload(id=external_user.id))
        if not users:
            logger.info(f"No local profile for external user '{external_user.id}'")
            raise UnauthorizedError("User profile not found")

        identity = Identity.model_validate({"id": external_user.id, **users[0]})
        ctx.user = identity
        if ctx.request is not None:
            ctx.request.state.user = identity

        logger.debug(f"Authenticated user '{identity.id}' with role '{identity.role}'")
        return identity
