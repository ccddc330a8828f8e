"""External identity provider client.

The identity provider owns passwords and session tokens. The request pipeline
only needs one operation from it: exchange a bearer token for the external
user it belongs to. ``HttpIdentityProvider`` talks to a GoTrue compatible
``/auth/v1/user`` endpoint.
"""

from functools import lru_cache
from typing import Any, Protocol

import httpx
from loguru import logger
from pydantic import BaseModel, ConfigDict, field_validator

from gig_api.exceptions import map_identity_provider_error
from gig_api.settings import Settings, get_settings

# Statuses meaning "this token does not identify anybody"
_REJECTED_TOKEN_STATUSES = frozenset({401, 403, 404})


class ExternalUser(BaseModel):
    """User as known by the identity provider."""

    model_config = ConfigDict(extra="ignore")

    id: str
    email: str | None = None
    role: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: object) -> str:
        return str(v)


class IdentityProvider(Protocol):
    """Contract of the identity provider collaborator."""

    async def get_user(self, token: str) -> ExternalUser | None: ...


class HttpIdentityProvider:
    """Identity provider reached over HTTP."""

    def __init__(self, base_url: str, api_key: str | None = None, timeout: float = 10.0, client: httpx.AsyncClient | None = None):
        """Initialize the client.

        Args:
            base_url: Base URL of the provider, e.g. ``https://project.supabase.co``
            api_key: Service key sent as the ``apikey`` header
            timeout: Request timeout in seconds
            client: Optional preconfigured ``httpx.AsyncClient``
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def get_user(self, token: str) -> ExternalUser | None:
        """Exchange a bearer token for the external user.

        Args:
            token: Bearer token presented by the caller

        Returns:
            The external user, or None if the token is invalid, expired or the
            provider could not be reached

        Raises:
            ApiError: For classified provider failures such as rate limiting
        """
        headers = {"Authorization": f"Bearer {token}"}
        if self.api_key:
            headers["apikey"] = self.api_key

        try:
            response = await self._client.get(f"{self.base_url}/auth/v1/user", headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"Identity provider request failed: {e}")
            return None

        if response.status_code in _REJECTED_TOKEN_STATUSES:
            logger.debug(f"Identity provider rejected token with status {response.status_code}")
            return None

        if response.is_error:
            body = _json_or_empty(response)
            logger.warning(f"Identity provider error {response.status_code}: {body}")
            raise map_identity_provider_error(
                response.status_code,
                code=body.get("error_code") or body.get("code"),
                message=body.get("msg") or body.get("message"),
            )

        return ExternalUser.model_validate(response.json())

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()


def _json_or_empty(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def create_identity_provider(settings: Settings) -> HttpIdentityProvider:
    """Create the HTTP identity provider from settings.

    Raises:
        ValueError: If the provider URL is not configured
    """
    if not settings.identity_provider_url:
        raise ValueError("Identity provider URL missing: provide GIG_API_IDENTITY_PROVIDER_URL env")
    return HttpIdentityProvider(
        settings.identity_provider_url,
        api_key=settings.identity_provider_key,
        timeout=settings.identity_provider_timeout,
    )


@lru_cache
def get_identity_provider() -> HttpIdentityProvider:
    """Get the singleton identity provider configured from settings."""
    return create_identity_provider(get_settings())
