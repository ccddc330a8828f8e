"""Main FastAPI application module."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from gig_api import __version__
from gig_api.api.api_router import router as api_router
from gig_api.api.ping import router as ping_router
from gig_api.constants import REQUEST_ID_HEADER
from gig_api.database import dispose_db
from gig_api.event_bus import EventBus
from gig_api.events import EventName, register_event_handlers
from gig_api.exception_handlers import register_exception_handlers
from gig_api.identity import IdentityProvider
from gig_api.logging import setup_logging, setup_sqlalchemy_logging
from gig_api.services.di import register_all_services
from gig_api.services.registry import get_service_registry
from gig_api.settings import Settings, get_settings

API_PREFIX = "/api/v1"


def _log_server_endpoints_summary(settings: Settings) -> None:
    """Log the server URL and the main endpoints.

    Args:
        settings: Application settings containing host and port
    """
    server_url = f"http://{settings.host}:{settings.port}"
    logger.info(f"Server running at: {server_url}")

    endpoints = [
        ("Ping", "/ping"),
        ("REST API", API_PREFIX),
        ("OpenAPI Schema", "/openapi.json"),
        ("API Docs", "/docs"),
        ("ReDoc", "/redoc"),
    ]
    logger.info("Available endpoints:")
    for name, path in endpoints:
        logger.info(f"   {name}: {server_url}{path}")


async def startup(settings: Settings) -> None:
    """Wire services and event handlers, then announce the app is up.

    This is the same sequence the ``check`` command runs without serving.

    Args:
        settings: Application settings

    Raises:
        ValueError: If a required collaborator is not configured
    """
    setup_logging(log_level=settings.log_level)
    setup_sqlalchemy_logging()

    logger.info("Registering services in the service registry")
    registry = get_service_registry()
    register_all_services(registry)

    # Resolve the identity provider now so a missing configuration fails at startup
    registry.get(IdentityProvider)

    bus = registry.get(EventBus)
    if not bus.frozen:
        register_event_handlers(bus)
        bus.freeze()
    await bus.dispatch(EventName.REGISTRATION_SUCCESSFUL, {"events": bus.get_registered_events()})
    await bus.dispatch(EventName.APP_UP)


async def shutdown() -> None:
    """Release network and database resources."""
    logger.info("API server shutting down")
    registry = get_service_registry()
    if registry.is_registered(IdentityProvider):
        provider = registry.get(IdentityProvider)
        aclose = getattr(provider, "aclose", None)
        if aclose is not None:
            await aclose()
    dispose_db()


@asynccontextmanager
async def app_lifespan(_app: FastAPI):
    """Handle startup and shutdown events for the main application."""
    settings = get_settings()
    _app.state.settings = settings  # type: ignore[attr-defined]

    await startup(settings)
    _log_server_endpoints_summary(settings)

    yield

    await shutdown()


app = FastAPI(
    lifespan=app_lifespan,
    title="Gig API",
    description="Gig marketplace backend with declarative, role and permission based endpoint authorization",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, replace with specific origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[REQUEST_ID_HEADER],
)

# Register exception handlers
register_exception_handlers(app)

app.include_router(ping_router, prefix="")
app.include_router(api_router, prefix=API_PREFIX)


def get_app_settings() -> Settings:
    """FastAPI dependency helper returning current app Settings."""
    return get_settings()
