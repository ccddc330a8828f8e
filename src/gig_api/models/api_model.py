"""API models for the gig API.

Request bodies and query strings use ``camelCase`` field names; the models
expose them under ``snake_case`` attributes.
"""

from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base model accepting camelCase input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class SetRoleInput(ApiModel):
    """Role picked right after sign-up. Admins are never self-assigned."""

    role: Literal["talent", "employer"]


class UserIdParams(BaseModel):
    """Path parameters addressing a user."""

    id: UUID


class PaginationQuery(ApiModel):
    """Page selection; out of range values are clamped downstream."""

    model_config = ConfigDict(extra="ignore")

    page: int | None = None
    page_size: int | None = None


class ListUsersQuery(PaginationQuery):
    """User listing filters: exact role and a free-text name search."""

    role: Literal["talent", "employer"] | None = None
    search: str | None = Field(default=None, max_length=100)


class UpdateUserInput(ApiModel):
    """Editable user profile fields."""

    first_name: str | None = None
    last_name: str | None = None
    gender: str | None = None
    phone_number: str | None = None
    full_address: str | None = None
    location_city: str | None = None
    location_country: str | None = None
    post_code: str | None = None
    avatar_url: str | None = None

    def to_updates(self) -> dict[str, Any]:
        """Return the fields the caller actually sent, camelCased."""
        return self.model_dump(exclude_unset=True, by_alias=True)
