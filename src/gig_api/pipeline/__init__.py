"""Request pipeline: declarative validation and authorization around handlers.

An endpoint is declared with the fluent ``ControlBuilder`` and executed by
the ``PipelineExecutor``:

- Parse the request into a ``RequestContext``
- Validate body, query and path parameters against Pydantic models
- Authenticate the caller (private endpoints)
- Check role, then permissions, then resource ownership
- Invoke the handler and shape the ``{message, data?}`` envelope

Any classified error ends the run immediately and is translated into the
same envelope; unclassified errors become a generic 500.
"""

from .authentication import Authenticator
from .builder import ControlBuilder
from .endpoint import create_endpoint
from .enums import PipelineStage
from .executor import PERMISSION_DENIED_MESSAGE, ROLE_DENIED_MESSAGE, PipelineExecutor
from .models import HandlerResult, PipelineConfiguration, RequestContext, ResourceOwnershipCheck, ValidationSchema
from .request import parse_request
from .validation import validate_request

__all__ = [
    "Authenticator",
    "ControlBuilder",
    "HandlerResult",
    "PERMISSION_DENIED_MESSAGE",
    "PipelineConfiguration",
    "PipelineExecutor",
    "PipelineStage",
    "ROLE_DENIED_MESSAGE",
    "RequestContext",
    "ResourceOwnershipCheck",
    "ValidationSchema",
    "create_endpoint",
    "parse_request",
    "validate_request",
]
