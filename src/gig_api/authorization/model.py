"""Authorization model: role permissions and resource ownership.

The persistent store is the authoritative source for role permissions; the
compiled-in defaults are used only when the store holds no rows for a role.
Ownership is looked up in the table configured for each resource type.
"""

from collections.abc import Mapping

from loguru import logger

from gig_api.constants import ROLE_PERMISSIONS_TABLE
from gig_api.store import RowStore

from .enums import Permission, Resource, Role
from .models import DEFAULT_ROLE_PERMISSIONS, RESOURCE_TABLES, ResourceTable


class AuthorizationModel:
    """Source of truth for role permissions and resource ownership."""

    def __init__(
        self,
        store: RowStore,
        default_permissions: Mapping[Role, frozenset[Permission]] = DEFAULT_ROLE_PERMISSIONS,
        resource_tables: Mapping[Resource, ResourceTable] = RESOURCE_TABLES,
    ):
        """Initialize the model.

        Args:
            store: Row store holding the permission overrides and resources
            default_permissions: Fallback permission set per role
            resource_tables: Ownership table for every resource type

        Raises:
            ValueError: If a resource type has no ownership table
        """
        missing = set(Resource) - set(resource_tables)
        if missing:
            raise ValueError(f"Resource types without an ownership table: {sorted(missing)}")

        self.store = store
        self.default_permissions = default_permissions
        self.resource_tables = resource_tables

    async def permissions_for_role(self, role: Role) -> frozenset[Permission]:
        """Return the permission set for a role.

        Rows in the override table win; if there are none the compiled-in
        default for the role is used (empty if the role has no default).

        Args:
            role: Role to resolve

        Returns:
            The permissions granted to the role
        """
        try:
            rows = await self.store.find_many(ROLE_PERMISSIONS_TABLE, filters={"role": str(role)})
        except Exception as e:
            logger.warning(f"Role permission override lookup failed for '{role}', using defaults: {e}")
            rows = []

        if rows:
            permissions = set()
            for row in rows:
                value = row.get("permission")
                try:
                    permissions.add(Permission(value))
                except ValueError:
                    logger.warning(f"Ignoring unknown permission '{value}' for role '{role}'")
            logger.trace(f"Using {len(permissions)} stored permissions for role '{role}'")
            return frozenset(permissions)

        return self.default_permissions.get(role, frozenset())

    async def owner_of(self, resource_type: Resource, resource_id: str) -> str | None:
        """Return the id of the user owning a resource.

        Args:
            resource_type: Type of the resource
            resource_id: Primary key of the resource

        Returns:
            Owner user id, or None if the resource does not exist or the lookup failed
        """
        config = self.resource_tables[resource_type]

        try:
            row = await self.store.find_by_id(config.table, resource_id, fields=[config.owner_column])
        except Exception as e:
            # Operational failure; callers still only see "no owner"
            logger.warning(f"Owner lookup failed for {resource_type} '{resource_id}' in '{config.table}': {e}")
            return None

        if row is None:
            logger.debug(f"No {resource_type} found with id '{resource_id}'")
            return None

        owner = row.get(config.owner_column)
        return str(owner) if owner is not None else None
