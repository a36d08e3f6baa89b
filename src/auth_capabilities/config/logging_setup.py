"""Logging configuration for applications embedding auth capabilities."""

import logging
from typing import Optional

from .settings import Settings, get_settings

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
JSON_FORMAT = (
    '{"time": "%(asctime)s", "logger": "%(name)s", '
    '"level": "%(levelname)s", "message": "%(message)s"}'
)


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging from settings.

    Applications that already configure logging should not call this;
    library modules only ever use ``logging.getLogger(__name__)``.
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    fmt = JSON_FORMAT if settings.log_format == "json" else TEXT_FORMAT

    logging.basicConfig(level=level, format=fmt, force=True)
    logging.getLogger(__name__).debug(
        f"Logging configured for {settings.service_name} ({settings.log_format})"
    )
