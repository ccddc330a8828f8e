"""
User API - profile and administration endpoints.

Every endpoint is declared with ControlBuilder, so authentication and
authorization happen in the request pipeline before the handler runs:
- ``GET /users/me``: any authenticated user
- ``GET /users``: admins only, paginated, filterable by role and name
- ``GET /users/{id}``: requires ``user:read``
- ``PATCH /users/{id}``: requires ``user:update`` on one's own record
- ``DELETE /users/{id}``: admins only

All handlers delegate to UserService for business logic.
"""

from fastapi import APIRouter

from gig_api.api.dependencies import service
from gig_api.authorization import Permission, Resource, Role
from gig_api.models.api_model import ListUsersQuery, UpdateUserInput, UserIdParams
from gig_api.pipeline import ControlBuilder, HandlerResult, RequestContext
from gig_api.services.user_service import UserService

router = APIRouter()
users = service(UserService)


async def get_me(ctx: RequestContext) -> HandlerResult:
    """Return the caller's profile."""
    return HandlerResult(message="User profile retrieved", data=await users().get_profile(ctx.caller.id))


async def list_users(ctx: RequestContext) -> HandlerResult:
    """List users one page at a time."""
    query: ListUsersQuery = ctx.validated["query"]  # type: ignore[assignment]
    data = await users().list_users(page=query.page, page_size=query.page_size, role=query.role, search=query.search)
    return HandlerResult(message="Users retrieved", data=data)


async def get_user_by_id(ctx: RequestContext) -> HandlerResult:
    """Return a user by ID."""
    return HandlerResult(message="User retrieved", data=await users().get_user(ctx.params["id"]))


async def update_user_by_id(ctx: RequestContext) -> HandlerResult:
    """Update the profile fields of a user."""
    body: UpdateUserInput = ctx.validated["input"]  # type: ignore[assignment]
    user = await users().update_user(ctx.params["id"], body.to_updates())
    return HandlerResult(message="User updated", data=user)


async def delete_user_by_id(ctx: RequestContext) -> HandlerResult:
    """Delete a user."""
    await users().delete_user(ctx.params["id"])
    return HandlerResult(code=204, message="User deleted")


router.add_api_route(
    "/me",
    ControlBuilder.builder().mark_private().set_handler(get_me).handle(),
    methods=["GET"],
)
router.add_api_route(
    "",
    ControlBuilder.builder().only(Role.ADMIN).set_validator(query=ListUsersQuery).set_handler(list_users).handle(),
    methods=["GET"],
)
router.add_api_route(
    "/{id}",
    ControlBuilder.builder()
    .mark_private()
    .require_permissions(Permission.USER_READ)
    .set_validator(params=UserIdParams)
    .set_handler(get_user_by_id)
    .handle(),
    methods=["GET"],
)
router.add_api_route(
    "/{id}",
    ControlBuilder.builder()
    .mark_private()
    .require_permissions(Permission.USER_UPDATE)
    .check_resource_ownership(Resource.USER, "id")
    .set_validator(input=UpdateUserInput, params=UserIdParams)
    .set_handler(update_user_by_id)
    .handle(),
    methods=["PATCH"],
)
router.add_api_route(
    "/{id}",
    ControlBuilder.builder().only(Role.ADMIN).set_validator(params=UserIdParams).set_handler(delete_user_by_id).handle(),
    methods=["DELETE"],
)
