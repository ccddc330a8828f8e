"""Fluent builder for endpoint pipelines."""

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel

from gig_api.authorization import Permission, Resource, Role

from .endpoint import create_endpoint
from .models import Handler, PipelineConfiguration, ResourceOwnershipCheck, ValidationSchema


class ControlBuilder:
    """Builder for endpoint pipelines with a fluent interface.

    Methods can be chained in any order. ``build()`` returns an immutable
    PipelineConfiguration; ``handle()`` turns it into a FastAPI endpoint.

    Example:
        ```python
        router.add_api_route(
            "/users/{id}",
            ControlBuilder.builder()
            .mark_private()
            .require_permissions(Permission.USER_UPDATE)
            .check_resource_ownership(Resource.USER, "id")
            .set_validator(ValidationSchema(input=UpdateUserInput))
            .set_handler(update_user_by_id)
            .handle(),
            methods=["PATCH"],
        )
        ```
    """

    def __init__(self):
        """Initialize the builder."""
        self._handler: Handler | None = None
        self._schema: ValidationSchema | None = None
        self._is_private = False
        self._allowed_roles: frozenset[Role] = frozenset()
        self._required_permissions: tuple[Permission, ...] = ()
        self._resource_ownership: ResourceOwnershipCheck | None = None

    @classmethod
    def builder(cls) -> "ControlBuilder":
        """Return a new builder."""
        return cls()

    def set_handler(self, handler: Handler) -> "ControlBuilder":
        """Set the function that handles the request.

        Args:
            handler: Sync or async callable taking a RequestContext and
                returning a HandlerResult (or an equivalent dict)

        Returns:
            This builder for method chaining
        """
        self._handler = handler
        return self

    def set_validator(
        self,
        schema: ValidationSchema | None = None,
        *,
        input: type[BaseModel] | None = None,  # noqa: A002
        query: type[BaseModel] | None = None,
        params: type[BaseModel] | None = None,
    ) -> "ControlBuilder":
        """Set the validation schema, either whole or per request part.

        Returns:
            This builder for method chaining
        """
        self._schema = schema or ValidationSchema(input=input, query=query, params=params)
        return self

    def mark_private(self) -> "ControlBuilder":
        """Require an authenticated caller.

        Returns:
            This builder for method chaining
        """
        self._is_private = True
        return self

    def require_permissions(self, *permissions: Permission | str) -> "ControlBuilder":
        """Require every given permission; replaces earlier requirements.

        Returns:
            This builder for method chaining
        """
        self._required_permissions = tuple(dict.fromkeys(Permission(p) for p in permissions))
        return self

    def check_resource_ownership(
        self,
        resource_type: Resource | str,
        param_name: str = "id",
        admin_can_bypass: bool = True,
    ) -> "ControlBuilder":
        """Require the caller to own the resource addressed by a path parameter.

        Args:
            resource_type: Type of resource (user, gig, review, payment, talent)
            param_name: Path parameter holding the resource id
            admin_can_bypass: Let admins through without an ownership lookup

        Returns:
            This builder for method chaining
        """
        self._resource_ownership = ResourceOwnershipCheck(
            resource_type=Resource(resource_type),
            param_name=param_name,
            admin_can_bypass=admin_can_bypass,
        )
        return self

    def only(self, *roles: Role | str) -> "ControlBuilder":
        """Restrict the endpoint to the given roles; marks it private.

        Returns:
            This builder for method chaining
        """
        self._allowed_roles = frozenset(Role(str(r).lower()) for r in roles)
        self._is_private = True
        return self

    def build(self) -> PipelineConfiguration:
        """Build the immutable pipeline configuration.

        Role, permission and ownership gates need a caller, so any of them
        marks the endpoint private.

        Raises:
            ValueError: If no handler was set
        """
        if self._handler is None:
            raise ValueError("No handler set. Call set_handler() first.")

        gated = bool(self._allowed_roles or self._required_permissions or self._resource_ownership)
        return PipelineConfiguration(
            handler=self._handler,
            validation_schema=self._schema,
            is_private=self._is_private or gated,
            allowed_roles=self._allowed_roles,
            required_permissions=self._required_permissions,
            resource_ownership=self._resource_ownership,
        )

    def handle(self) -> Callable[..., Any]:
        """Build the configuration and return it as a FastAPI endpoint."""
        return create_endpoint(self.build())

    def __str__(self) -> str:
        """String representation of the builder."""
        handler = getattr(self._handler, "__name__", None)
        return f"ControlBuilder(handler={handler}, private={self._is_private}, roles={sorted(self._allowed_roles)})"

