"""Global exception handlers for the FastAPI application.

This module contains custom exception handlers that convert application
exceptions into the ``{"message": ...}`` response envelope. Pipeline
endpoints already answer with the envelope themselves; these handlers cover
plain FastAPI routes and framework errors such as unknown paths.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from gig_api.constants import INTERNAL_ERROR_MESSAGE
from gig_api.exceptions import ApiError
from gig_api.pipeline.executor import error_response
from gig_api.pipeline.validation import format_validation_error


async def api_error_handler(_request: Request, exc: ApiError) -> JSONResponse:
    """Translate a classified error."""
    logger.info(f"{type(exc).__name__}: {exc.message}")
    return error_response(exc)


async def request_validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    """Translate FastAPI request validation errors."""
    return JSONResponse(status_code=422, content={"message": format_validation_error(exc)})


async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Translate framework HTTP errors, keeping their status and headers."""
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)}, headers=exc.headers)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Hide unexpected failures behind a generic 500."""
    logger.opt(exception=exc).error(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"message": INTERNAL_ERROR_MESSAGE})


def register_exception_handlers(app: FastAPI) -> None:
    """Register all custom exception handlers with the FastAPI app.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(ApiError, api_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
    logger.debug("Registered exception handlers")
