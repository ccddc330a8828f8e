"""Event names and payload definitions for the gig API.

Events are the primary way feature modules call into each other without a
direct import. Names follow the ``<domain>:<action>`` convention.
"""

from enum import StrEnum

from pydantic import BaseModel


class EventName(StrEnum):
    """Names of all events dispatched in the application."""

    APP_UP = "app:up"
    REGISTRATION_SUCCESSFUL = "event:registration:successful"
    USER_GET_BY_ID = "user:get-by-id"
    TALENT_CREATE = "talent:create-talent"
    TALENT_GET_BY_USER_ID = "talent:get-by-user-id"


class GetUserByIdPayload(BaseModel):
    """Look up a local user; result is a camelCased user dict."""

    id: str
    fields: list[str] | None = None


class CreateTalentPayload(BaseModel):
    """Create the talent profile of a user; result is the created profile."""

    user_id: str


class GetTalentByUserIdPayload(BaseModel):
    """Look up the talent profile of a user."""

    user_id: str
