"""Enums for the authorization model.

This module contains basic enums to avoid circular dependencies.
"""

from enum import StrEnum


class Role(StrEnum):
    """Coarse-grained identity category."""

    TALENT = "talent"
    EMPLOYER = "employer"
    ADMIN = "admin"


class Permission(StrEnum):
    """Fine-grained capability, namespaced as ``resource:action``."""

    # User management
    USER_CREATE = "user:create"
    USER_READ = "user:read"
    USER_UPDATE = "user:update"
    USER_DELETE = "user:delete"

    # Gig management
    GIG_CREATE = "gig:create"
    GIG_READ = "gig:read"
    GIG_UPDATE = "gig:update"
    GIG_DELETE = "gig:delete"
    GIG_VIEW_ALL = "gig:view:all"

    # Payment / finance
    PAYOUT_REQUEST = "payout:request"
    PAYMENT_PROCESS = "payment:process"
    VIEW_EARNINGS = "view:earnings"

    # Reviews
    REVIEW_CREATE = "review:create"
    REVIEW_READ = "review:read"
    REVIEW_DELETE = "review:delete"
    REVIEW_MODERATE = "review:moderate"

    # Admin
    SUSPEND_USER = "suspend:user"
    VIEW_AUDIT_LOGS = "view:audit:logs"


class Resource(StrEnum):
    """Resource types that support ownership checks."""

    USER = "user"
    GIG = "gig"
    REVIEW = "review"
    PAYMENT = "payment"
    TALENT = "talent"
