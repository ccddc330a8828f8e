"""Main entry point for the gig API using Typer and Pydantic Settings."""

import asyncio

import typer
import uvicorn
from loguru import logger

from gig_api.logging import setup_logging
from gig_api.settings import get_settings

app = typer.Typer()


HOST_OPTION = typer.Option(
    None,
    help="Host to bind the server to (overrides GIG_API_HOST)",
    metavar="<server>",
)  # fmt: skip
PORT_OPTION = typer.Option(
    None,
    help="Port to bind the server to (overrides GIG_API_PORT)",
    metavar="<port>",
)  # fmt: skip
RELOAD_OPTION = typer.Option(
    None,
    help="Enable/disable auto-reload (overrides GIG_API_RELOAD)",
)  # fmt: skip
LOG_LEVEL_OPTION = typer.Option(
    None,
    help="Log level (overrides GIG_API_LOG_LEVEL)",
    metavar="<level>",
    case_sensitive=False,
)  # fmt: skip
SQL_LOG_OPTION = typer.Option(
    None,
    help="Enable/disable SQL query logging (overrides GIG_API_SQL_LOG)",
)  # fmt: skip
DATABASE_URL_OPTION = typer.Option(
    None,
    help="Database URL (overrides GIG_API_DATABASE_URL)",
    metavar="<dsn>",
)  # fmt: skip
IDENTITY_PROVIDER_URL_OPTION = typer.Option(
    None,
    help="Identity provider base URL (overrides GIG_API_IDENTITY_PROVIDER_URL)",
    metavar="<url>",
)  # fmt: skip


def _update_settings(
    host: str | None,
    port: int | None,
    log_level: str | None,
    reload: bool | None,
    sql_log: bool | None,
    database_url: str | None,
    identity_provider_url: str | None,
) -> None:
    """Update settings with CLI overrides."""
    settings = get_settings()

    if host is not None:
        settings.host = host
    if port is not None:
        settings.port = port
    if log_level is not None:
        settings.log_level = log_level.upper()  # type: ignore[assignment]
    if reload is not None:
        settings.reload = reload
    if sql_log is not None:
        settings.sql_log = sql_log
    if database_url is not None:
        settings.database_url = database_url
    if identity_provider_url is not None:
        settings.identity_provider_url = identity_provider_url


@app.command()
def run(
    host: str = HOST_OPTION,
    port: int = PORT_OPTION,
    log_level: str = LOG_LEVEL_OPTION,
    reload: bool = RELOAD_OPTION,
    sql_log: bool = SQL_LOG_OPTION,
    database_url: str = DATABASE_URL_OPTION,
    identity_provider_url: str = IDENTITY_PROVIDER_URL_OPTION,
) -> None:
    """Run the API server."""
    _update_settings(host, port, log_level, reload, sql_log, database_url, identity_provider_url)
    settings = get_settings()

    setup_logging(settings.log_level)

    logger.info(f"Starting gig API on {settings.host}:{settings.port}")
    logger.info(f"Reload: {settings.reload}")

    # Run the app - use import string for reload mode
    if settings.reload:
        uvicorn.run(
            "gig_api.app:app",
            host=settings.host,
            port=settings.port,
            reload=True,
            log_level=settings.log_level.lower(),
        )
    else:
        from gig_api.app import app as fastapi_app

        uvicorn.run(
            fastapi_app,
            host=settings.host,
            port=settings.port,
            reload=False,
            log_level=settings.log_level.lower(),
        )


@app.command()
def check(
    log_level: str = LOG_LEVEL_OPTION,
    sql_log: bool = SQL_LOG_OPTION,
    database_url: str = DATABASE_URL_OPTION,
    identity_provider_url: str = IDENTITY_PROVIDER_URL_OPTION,
) -> None:
    """Wire services and event handlers, check the database, then exit."""
    _update_settings(None, None, log_level, False, sql_log, database_url, identity_provider_url)
    settings = get_settings()

    setup_logging(settings.log_level)
    logger.info("Running startup checks only")

    from gig_api.app import shutdown, startup
    from gig_api.database import check_db_connection

    async def _check() -> None:
        try:
            await startup(settings)
            await asyncio.to_thread(check_db_connection)
        finally:
            await shutdown()

    try:
        asyncio.run(_check())
        logger.info("Startup checks completed successfully")
    except Exception as e:
        logger.error(f"Startup checks failed: {e}")
        raise SystemExit(1) from None


if __name__ == "__main__":
    app()
