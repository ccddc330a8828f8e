"""Service lookup helpers for API endpoints."""

from collections.abc import Callable
from typing import TypeVar

from gig_api.services.registry import get_service_registry

T = TypeVar("T")


def service[T](service_type: type[T]) -> Callable[[], T]:
    """Return a getter resolving a service by type on each call.

    The lookup happens at request time, so services registered (or replaced)
    after the routes were declared are picked up.

    Args:
        service_type: The type of service to retrieve from the registry

    Returns:
        A callable that returns the requested service instance

    Example:
        ```python
        users = service(UserService)

        async def get_user_by_id(ctx: RequestContext) -> HandlerResult:
            user = await users().get_user(ctx.params["id"])
            return HandlerResult(message="User retrieved", data=user)
        ```
    """

    def get_service() -> T:
        registry = get_service_registry()
        return registry.get(service_type)

    return get_service
