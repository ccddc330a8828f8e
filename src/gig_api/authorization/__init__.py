"""Authorization: roles, permissions and resource ownership.

Evaluation order used by the request pipeline is fixed: authentication, then
role, then permission, then ownership.
"""

from .enums import Permission, Resource, Role
from .model import AuthorizationModel
from .models import DEFAULT_ROLE_PERMISSIONS, RESOURCE_TABLES, Identity, ResourceTable
from .ownership import OWNERSHIP_DENIED_MESSAGE, OwnershipEvaluator
from .permissions import PermissionEvaluator

__all__ = [
    "AuthorizationModel",
    "DEFAULT_ROLE_PERMISSIONS",
    "Identity",
    "OWNERSHIP_DENIED_MESSAGE",
    "OwnershipEvaluator",
    "Permission",
    "PermissionEvaluator",
    "RESOURCE_TABLES",
    "Resource",
    "ResourceTable",
    "Role",
]
