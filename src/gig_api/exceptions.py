"""Common exceptions for the server.

Every exception here is an ``ApiError``: it carries the HTTP status code the
pipeline writes to the response and a message that is safe to show to the
client. Anything that is not an ``ApiError`` is treated as an internal error.
"""

from fastapi import status


class ApiError(Exception):
    """Base class for errors that translate into a response envelope."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class BadRequestError(ApiError):
    """Raised when a request is missing identifiers the schema did not cover."""

    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(ApiError):
    """Raised when the caller cannot be authenticated."""

    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(ApiError):
    """Raised when an authenticated caller is not allowed to proceed."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(ApiError):
    """Raised when a resource doesn't exist."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource_type: str, identifier: str):
        self.resource_type = resource_type
        self.identifier = identifier
        super().__init__(f"{resource_type} not found: {identifier}")


class ConflictError(ApiError):
    """Raised by handlers when the requested change conflicts with current state."""

    status_code = status.HTTP_409_CONFLICT


class UnprocessableError(ApiError):
    """Raised when request data fails schema validation."""

    status_code = 422


class TooManyRequestsError(ApiError):
    """Raised when a collaborator signals rate limiting."""

    status_code = status.HTTP_429_TOO_MANY_REQUESTS


def map_identity_provider_error(
    status_code: int | None,
    code: str | None = None,
    message: str | None = None,
    fallback_message: str | None = None,
) -> ApiError:
    """Classify an identity provider failure.

    Args:
        status_code: HTTP status returned by the provider, if any
        code: Provider specific error code (e.g. ``over_email_send_rate_limit``)
        message: Provider error message
        fallback_message: Message used when nothing more specific matches

    Returns:
        The ``ApiError`` to raise for this failure
    """
    if status_code == status.HTTP_429_TOO_MANY_REQUESTS or code == "over_email_send_rate_limit":
        return TooManyRequestsError("Too many attempts. Please wait a few minutes before trying again.")

    if message == "Email not confirmed":
        return UnauthorizedError("Please verify your email before logging in.")

    if status_code == status.HTTP_400_BAD_REQUEST:
        return BadRequestError(message or "Invalid request")

    if status_code == status.HTTP_409_CONFLICT:
        return ConflictError("User already exists")

    if status_code == status.HTTP_401_UNAUTHORIZED:
        return UnauthorizedError("Invalid email or password")

    return ForbiddenError(fallback_message or "Authentication failed")
