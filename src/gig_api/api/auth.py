"""
Auth API - onboarding steps after sign-up at the identity provider.

Sign-up, sign-in and token refresh are handled by the identity provider
itself. This API only completes the local account.
"""

from fastapi import APIRouter

from gig_api.api.dependencies import service
from gig_api.authorization import Role
from gig_api.models.api_model import SetRoleInput
from gig_api.pipeline import ControlBuilder, HandlerResult, RequestContext
from gig_api.services.auth_service import AuthService

router = APIRouter()
auth = service(AuthService)


async def set_role(ctx: RequestContext) -> HandlerResult:
    """Set the caller's role; allowed once per account.

    Choosing ``talent`` also creates the caller's talent profile.
    """
    body: SetRoleInput = ctx.validated["input"]  # type: ignore[assignment]
    user = await auth().set_role(ctx.caller.id, Role(body.role))
    return HandlerResult(code=201, message="Role set successfully", data=user)


router.add_api_route(
    "/set-role",
    ControlBuilder.builder().mark_private().set_validator(input=SetRoleInput).set_handler(set_role).handle(),
    methods=["POST"],
)
