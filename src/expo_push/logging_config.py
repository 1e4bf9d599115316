"""
Structured logging setup for applications using the Expo push client.

The client only emits events through structlog; configuring output is left
to the application. These helpers route the client's events through stdlib
logging with either a console or a JSON renderer.
"""

import logging
import sys
from typing import List, Optional, TextIO

import structlog
from structlog.types import Processor

from expo_push.config import ClientConfig


def build_processors(json_format: bool = False) -> List[Processor]:
    """Processor chain for client events, ending in the chosen renderer."""
    renderer = (
        structlog.processors.JSONRenderer()
        if json_format
        else structlog.dev.ConsoleRenderer()
    )
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        renderer,
    ]


def setup_logging(
    level: str = "INFO",
    json_format: bool = False,
    stream: TextIO = sys.stdout,
) -> None:
    """
    Configure structured logging.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        json_format: Render events as JSON lines instead of console output
        stream: Stream the stdlib handler writes to
    """
    structlog.configure(
        processors=build_processors(json_format),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper()),
        stream=stream,
    )


def setup_logging_from_config(
    config: Optional[ClientConfig] = None,
    stream: TextIO = sys.stdout,
) -> None:
    """Configure logging from the log_level and log_json settings."""
    config = config or ClientConfig()
    setup_logging(config.log_level, config.log_json, stream)
