"""Ping API endpoint."""

from fastapi import APIRouter

from gig_api.pipeline import ControlBuilder, HandlerResult, RequestContext

router = APIRouter(tags=["System"])


def ping(_ctx: RequestContext) -> HandlerResult:
    """
    Simple ping endpoint that returns a pong response.

    This endpoint is used for basic connectivity testing and does not require
    any database access or authentication.
    """
    return HandlerResult(message="pong")


router.add_api_route("/ping", ControlBuilder.builder().set_handler(ping).handle(), methods=["GET"])
