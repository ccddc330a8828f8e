"""Data models for the request pipeline.

This module contains the Pydantic models shared by the builder, the executor
and the handlers to avoid circular dependencies between components.
"""

from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from starlette.datastructures import UploadFile
from starlette.requests import Request

from gig_api.authorization import Identity, Permission, Resource, Role
from gig_api.exceptions import UnauthorizedError


class ValidationSchema(BaseModel):
    """Pydantic models validating the parts of a request."""

    model_config = ConfigDict(frozen=True)

    input: type[BaseModel] | None = None
    query: type[BaseModel] | None = None
    params: type[BaseModel] | None = None


class ResourceOwnershipCheck(BaseModel):
    """Ownership gate configuration."""

    model_config = ConfigDict(frozen=True)

    resource_type: Resource
    param_name: str = "id"
    admin_can_bypass: bool = True


class RequestContext(BaseModel):
    """Everything a handler gets to see about one request.

    Created fresh for every request and never shared between requests.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    params: dict[str, Any] = Field(default_factory=dict)
    query: dict[str, Any] = Field(default_factory=dict)
    input: Any = Field(default_factory=dict)
    files: dict[str, UploadFile | list[UploadFile]] | None = None
    headers: dict[str, str] = Field(default_factory=dict)
    user: Identity | None = None
    request: Request | None = None
    response_headers: dict[str, str] = Field(default_factory=dict)
    validated: dict[str, BaseModel] = Field(default_factory=dict)

    @property
    def caller(self) -> Identity:
        """The authenticated caller of a private endpoint."""
        if self.user is None:
            raise UnauthorizedError("Authentication required")
        return self.user


class HandlerResult(BaseModel):
    """What a handler returns; shaped into the response envelope."""

    code: int = 200
    message: str
    data: Any = None
    headers: dict[str, str] | None = None


Handler = Callable[[RequestContext], Awaitable[HandlerResult | dict[str, Any]] | HandlerResult | dict[str, Any]]


class PipelineConfiguration(BaseModel):
    """Immutable description of one endpoint's pipeline."""

    model_config = ConfigDict(frozen=True)

    handler: Callable[..., Any]
    validation_schema: ValidationSchema | None = None
    is_private: bool = False
    allowed_roles: frozenset[Role] = frozenset()
    required_permissions: tuple[Permission, ...] = ()
    resource_ownership: ResourceOwnershipCheck | None = None

    @model_validator(mode="after")
    def check_private_gates(self) -> "PipelineConfiguration":
        """Role, permission and ownership gates need an authenticated caller."""
        if not self.is_private:
            if self.allowed_roles:
                raise ValueError("allowed_roles requires is_private")
            if self.required_permissions:
                raise ValueError("required_permissions requires is_private")
            if self.resource_ownership is not None:
                raise ValueError("resource_ownership requires is_private")
        return self
