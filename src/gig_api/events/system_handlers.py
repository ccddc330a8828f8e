"""Application lifecycle event handlers."""

from loguru import logger


def announce_app_up(_payload: object = None) -> None:
    """Log that the application finished starting."""
    logger.info("🚀 Gig API is up and accepting requests")


def announce_registration(payload: object = None) -> None:
    """Log that startup wiring of event handlers completed."""
    logger.debug(f"Event handler registration finished: {payload}")
