"""Global constants for the gig API.

This module defines constants used throughout the application to avoid
hardcoded strings and make the codebase more maintainable.
"""

# Request headers
AUTHORIZATION_HEADER = "authorization"
BEARER_PREFIX = "Bearer "
REQUEST_ID_HEADER = "x-request-id"

# Role-permission override table
ROLE_PERMISSIONS_TABLE = "role_permissions"

# Envelope messages
INTERNAL_ERROR_MESSAGE = "Internal server error"
