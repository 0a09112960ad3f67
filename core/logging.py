"""Logging configuration"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from core.config import Settings

# request logging middleware already covers /api calls
QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


def setup_logging(settings: Settings) -> None:
    """Route all logging through one Rich handler at the configured level"""
    handler = RichHandler(
        console=Console(width=120),
        show_path=False,
        rich_tracebacks=True,
        log_time_format="[%Y-%m-%d %H:%M:%S]",
    )

    # uvicorn configures the root logger before the app is built
    logging.basicConfig(
        level=settings.log_level,
        format="%(name)s: %(message)s",
        handlers=[handler],
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(
        f"Logging at {settings.log_level} for {settings.environment}"
    )
