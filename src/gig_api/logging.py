"""Logging configuration for the gig API.

Everything is written through loguru. Standard library loggers (uvicorn, httpx,
SQLAlchemy) are intercepted so their records end up in the same sink.

Records emitted while the request pipeline runs carry the request line and a
request ID, see ``request_logging_context``. Outside a request both show ``-``.
"""

import logging
import re
import sys
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from uuid import uuid4

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<magenta>{extra[request_id]}</magenta> {extra[request]} | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)
NO_REQUEST = "-"

# Third-party loggers follow the application level
FOLLOWING_LOGGERS = ("httpcore", "httpx", "uvicorn", "uvicorn.error", "uvicorn.access", "asyncio", "gig_api")
SQLALCHEMY_LOGGERS = ("sqlalchemy", "sqlalchemy.engine", "sqlalchemy.engine.base", "sqlalchemy.dialects", "sqlalchemy.pool")

_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


class InterceptHandler(logging.Handler):
    """Forward standard logging records to loguru, keeping the caller's location."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _intercept(names: Iterable[str]) -> None:
    handler = InterceptHandler()
    for name in names:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [handler]
        std_logger.propagate = False


def setup_logging(log_level: str) -> None:
    """Configure loguru for the whole service.

    Args:
        log_level: Level name from settings (env var or CLI option)
    """
    log_level = log_level.upper()

    logger.configure(
        handlers=[{"sink": sys.stderr, "level": log_level, "format": LOG_FORMAT, "colorize": True}],
        extra={"request": NO_REQUEST, "request_id": NO_REQUEST},
    )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    _intercept(list(logging.Logger.manager.loggerDict))
    for name in FOLLOWING_LOGGERS:
        logging.getLogger(name).setLevel(log_level)

    logger.info(f"Log level set to: {log_level}")


def setup_sqlalchemy_logging() -> None:
    """Route SQLAlchemy engine and pool logs through loguru."""
    _intercept(SQLALCHEMY_LOGGERS)


@contextmanager
def request_logging_context(method: str, path: str, request_id: str | None = None) -> Iterator[str]:
    """Tag every record logged inside the block with the request line and an ID.

    A caller-supplied ``request_id`` is kept when it looks like an ID; otherwise
    a fresh one is generated.

    Yields:
        The request ID in effect
    """
    if not request_id or not _REQUEST_ID.match(request_id):
        request_id = uuid4().hex[:12]
    with logger.contextualize(request=f"{method} {path}", request_id=request_id):
        yield request_id
