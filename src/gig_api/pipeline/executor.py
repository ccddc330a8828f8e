"""Pipeline execution for a single request.

This module provides the PipelineExecutor class which runs the stages of a
PipelineConfiguration against one request:

1. Parse the request into a RequestContext
2. Validate the configured request parts
3. Authenticate the caller (private endpoints only)
4. Check the caller's role
5. Check the caller's permissions
6. Check ownership of the addressed resource
7. Invoke the handler
8. Shape the response envelope

Stages run strictly in this order and the first failing stage ends the run.
Every error, whether raised by a stage or by the handler, is translated into
the same ``{message, data?}`` envelope at one place.
"""

import inspect
from typing import Any

from fastapi.encoders import jsonable_encoder
from loguru import logger
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from gig_api.authorization import Identity, OwnershipEvaluator, PermissionEvaluator
from gig_api.constants import INTERNAL_ERROR_MESSAGE, REQUEST_ID_HEADER
from gig_api.event_bus import EventBus
from gig_api.exceptions import ApiError, BadRequestError, ForbiddenError, UnauthorizedError
from gig_api.identity import IdentityProvider
from gig_api.logging import request_logging_context

from .authentication import Authenticator
from .enums import PipelineStage
from .models import HandlerResult, PipelineConfiguration, RequestContext
from .request import parse_request
from .validation import validate_request

ROLE_DENIED_MESSAGE = "You do not have access to the requested resource"
PERMISSION_DENIED_MESSAGE = "You do not have the required permissions to perform this action"


class PipelineExecutor:
    """Runs endpoint pipelines.

    The executor is stateless between requests; all per-request state lives in
    the RequestContext. Collaborators are injected so tests can substitute them.

    Attributes:
        authenticator: Resolves the caller of private endpoints
        permission_evaluator: Evaluates required permissions
        ownership_evaluator: Evaluates resource ownership
    """

    def __init__(
        self,
        event_bus: EventBus,
        identity_provider: IdentityProvider,
        permission_evaluator: PermissionEvaluator,
        ownership_evaluator: OwnershipEvaluator,
    ):
        self.authenticator = Authenticator(identity_provider, event_bus)
        self.permission_evaluator = permission_evaluator
        self.ownership_evaluator = ownership_evaluator

    async def execute(self, config: PipelineConfiguration, request: Request) -> Response:
        """Run the pipeline for one request and return the response.

        Args:
            config: Pipeline configuration of the endpoint
            request: The incoming request

        Returns:
            The response to send, either the handler's result or an error envelope
        """
        with request_logging_context(request.method, request.url.path, request.headers.get(REQUEST_ID_HEADER)) as request_id:
            response = await self.run_stages(config, request)
            logger.debug(f"Responded {response.status_code}")
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    async def run_stages(self, config: PipelineConfiguration, request: Request) -> Response:
        """Run the stages in order; the first failing stage decides the response."""
        stage = PipelineStage.PARSE
        handler_name = getattr(config.handler, "__name__", repr(config.handler))
        try:
            ctx = await parse_request(request)

            stage = PipelineStage.VALIDATE
            validate_request(config.validation_schema, ctx)

            if config.is_private:
                stage = PipelineStage.AUTHENTICATE
                identity = await self.authenticator.authenticate(ctx)

                stage = PipelineStage.ROLE
                self.check_role(config, identity)

                stage = PipelineStage.PERMISSION
                await self.check_permissions(config, identity)

                stage = PipelineStage.OWNERSHIP
                await self.check_ownership(config, ctx, identity)

            stage = PipelineStage.HANDLER
            result = await self.invoke_handler(config, ctx)

            stage = PipelineStage.RESPOND
            return build_response(result, ctx)

        except ApiError as e:
            logger.info(f"{e.status_code} at {stage} ({handler_name}): {e.message}")
            return error_response(e)
        except Exception:
            logger.exception(f"Unhandled error at {stage} ({handler_name})")
            return JSONResponse(status_code=500, content={"message": INTERNAL_ERROR_MESSAGE})

    def check_role(self, config: PipelineConfiguration, identity: Identity) -> None:
        """Deny callers whose role is not allowed; case-insensitive."""
        if not config.allowed_roles:
            return

        allowed = {str(role).upper() for role in config.allowed_roles}
        if identity.role is None or str(identity.role).upper() not in allowed:
            raise ForbiddenError(ROLE_DENIED_MESSAGE)

    async def check_permissions(self, config: PipelineConfiguration, identity: Identity) -> None:
        """Deny callers missing any required permission."""
        if not config.required_permissions:
            return

        if not await self.permission_evaluator.user_has_all_permissions(identity.id, config.required_permissions):
            raise ForbiddenError(PERMISSION_DENIED_MESSAGE)

    async def check_ownership(self, config: PipelineConfiguration, ctx: RequestContext, identity: Identity) -> None:
        """Deny callers that do not own the addressed resource."""
        check = config.resource_ownership
        if check is None:
            return

        resource_id = ctx.params.get(check.param_name)
        if not resource_id:
            raise BadRequestError(f"Missing path parameter: {check.param_name}")

        await self.ownership_evaluator.verify_ownership(identity, check.resource_type, str(resource_id), check.admin_can_bypass)

    async def invoke_handler(self, config: PipelineConfiguration, ctx: RequestContext) -> HandlerResult:
        """Call the handler (sync or async) and coerce its result."""
        result = config.handler(ctx)
        if inspect.isawaitable(result):
            result = await result

        if isinstance(result, HandlerResult):
            return result
        if isinstance(result, dict):
            return HandlerResult.model_validate(result)
        raise TypeError(f"Handler returned {type(result).__name__}, expected HandlerResult or dict")


def build_response(result: HandlerResult, ctx: RequestContext) -> Response:
    """Write a handler result as the response envelope."""
    headers = {**ctx.response_headers, **(result.headers or {})}

    if result.code == 204:
        return Response(status_code=204, headers=headers)

    content: dict[str, Any] = {"message": result.message}
    if result.data is not None:
        content["data"] = jsonable_encoder(result.data)
    return JSONResponse(status_code=result.code, content=content, headers=headers)


def error_response(error: ApiError) -> JSONResponse:
    """Translate a classified error into the response envelope."""
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(error, UnauthorizedError) else None
    return JSONResponse(status_code=error.status_code, content={"message": error.message}, headers=headers)
