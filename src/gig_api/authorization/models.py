"""Data models and static tables for the authorization model."""

from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, field_validator

from .enums import Permission, Resource, Role


class Identity(BaseModel):
    """Authenticated caller, resolved from the local user record."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    role: Role | None = None
    email: str | None = None
    status: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: object) -> str:
        """Accept UUIDs and other identifiers as strings."""
        return str(v)

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, v: object) -> object:
        """Storage may hold roles in any casing; unknown roles grant nothing."""
        if isinstance(v, str):
            v = v.lower()
            return v if v in Role._value2member_map_ else None
        return v


class ResourceTable(BaseModel):
    """Where the owner of a resource type is stored."""

    model_config = ConfigDict(frozen=True)

    table: str
    owner_column: str


DEFAULT_ROLE_PERMISSIONS: MappingProxyType[Role, frozenset[Permission]] = MappingProxyType(
    {
        Role.TALENT: frozenset(
            {
                Permission.USER_READ,
                Permission.USER_UPDATE,
                Permission.GIG_CREATE,
                Permission.GIG_READ,
                Permission.GIG_UPDATE,
                Permission.PAYOUT_REQUEST,
                Permission.REVIEW_CREATE,
                Permission.REVIEW_READ,
                Permission.VIEW_EARNINGS,
            }
        ),
        Role.EMPLOYER: frozenset(
            {
                Permission.USER_READ,
                Permission.USER_UPDATE,
                Permission.GIG_CREATE,
                Permission.GIG_READ,
                Permission.GIG_UPDATE,
                Permission.PAYMENT_PROCESS,
                Permission.REVIEW_CREATE,
                Permission.REVIEW_READ,
            }
        ),
        Role.ADMIN: frozenset(Permission),
    }
)

RESOURCE_TABLES: MappingProxyType[Resource, ResourceTable] = MappingProxyType(
    {
        Resource.USER: ResourceTable(table="users", owner_column="id"),
        Resource.GIG: ResourceTable(table="gigs", owner_column="user_id"),
        Resource.REVIEW: ResourceTable(table="talent_reviews", owner_column="user_id"),
        Resource.PAYMENT: ResourceTable(table="users", owner_column="user_id"),
        Resource.TALENT: ResourceTable(table="talent_profiles", owner_column="user_id"),
    }
)

_unmapped = set(Resource) - set(RESOURCE_TABLES)
if _unmapped:
    raise RuntimeError(f"Resource types without an ownership table: {sorted(_unmapped)}")
