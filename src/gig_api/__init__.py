"""The gig API package."""

from .settings import Settings, get_settings  # noqa: F401

__version__ = "0.1.0"

__all__ = ["get_settings", "Settings", "__version__"]
