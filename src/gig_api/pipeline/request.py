"""Parse an incoming Starlette request into a RequestContext."""

from typing import Any

from loguru import logger
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException
from starlette.requests import Request

from gig_api.authorization import Identity

from .models import RequestContext

_FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


def _query_params(request: Request) -> dict[str, Any]:
    query: dict[str, Any] = {}
    for key in request.query_params.keys():
        values = request.query_params.getlist(key)
        query[key] = values[0] if len(values) == 1 else values
    return query


async def _json_body(request: Request) -> Any:
    body = await request.body()
    if not body:
        return {}
    try:
        return await request.json()
    except ValueError:
        # Malformed bodies are left to validation
        logger.debug("Request body is not valid JSON, treating it as empty")
        return {}


async def _form_body(request: Request) -> tuple[dict[str, Any], dict[str, UploadFile | list[UploadFile]] | None]:
    try:
        form = await request.form()
    except (MultiPartException, HTTPException) as e:
        logger.debug(f"Request form could not be parsed, treating it as empty: {e}")
        return {}, None

    fields: dict[str, Any] = {}
    files: dict[str, UploadFile | list[UploadFile]] = {}
    for key in form.keys():
        values = form.getlist(key)
        uploads = [v for v in values if isinstance(v, UploadFile)]
        plain = [v for v in values if not isinstance(v, UploadFile)]
        if uploads:
            files[key] = uploads[0] if len(uploads) == 1 else uploads
        if plain:
            fields[key] = plain[0] if len(plain) == 1 else plain
    return fields, files or None


async def parse_request(request: Request) -> RequestContext:
    """Extract params, query, body, headers and uploaded files.

    Missing or malformed parts produce empty values; deciding whether they
    are acceptable is the job of validation.

    Args:
        request: The incoming request

    Returns:
        A fresh RequestContext for this request
    """
    content_type = request.headers.get("content-type", "")
    files = None
    if content_type.startswith(_FORM_CONTENT_TYPES):
        body, files = await _form_body(request)
    else:
        body = await _json_body(request)

    user = getattr(request.state, "user", None)
    if not isinstance(user, Identity):
        user = None

    return RequestContext(
        params=dict(request.path_params),
        query=_query_params(request),
        input=body,
        files=files,
        headers=dict(request.headers),
        user=user,
        request=request,
    )
