"""Transport adapter turning a PipelineConfiguration into a FastAPI endpoint."""

from collections.abc import Awaitable, Callable

from starlette.requests import Request
from starlette.responses import Response

from gig_api.services.registry import get_service_registry

from .executor import PipelineExecutor
from .models import PipelineConfiguration

Endpoint = Callable[[Request], Awaitable[Response]]


def create_endpoint(config: PipelineConfiguration, executor: PipelineExecutor | None = None) -> Endpoint:
    """Create an endpoint running ``config`` for every request.

    Without an explicit executor, the one registered in the service registry
    is looked up when the first request arrives, so routes can be declared
    at import time and wired at startup.

    Args:
        config: Pipeline configuration of the endpoint
        executor: Executor to use instead of the registered one

    Returns:
        An async endpoint usable with ``APIRouter.add_api_route``
    """

    async def endpoint(request: Request) -> Response:
        pipeline_executor = executor or get_service_registry().get(PipelineExecutor)
        return await pipeline_executor.execute(config, request)

    endpoint.__name__ = getattr(config.handler, "__name__", "endpoint")
    endpoint.__doc__ = getattr(config.handler, "__doc__", None)
    return endpoint
