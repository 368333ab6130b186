"""
structlog setup for DIDI.

Importing this module installs a stdlib-backed default, so a program that
uses the codec without calling ``configure_logging`` gets standard library
logging behaviour: debug events are dropped, warnings reach stderr through
logging's last-resort handler, and nothing is written to stdout.
"""
from __future__ import annotations

import logging
import os
import sys
from contextlib import contextmanager
from typing import Any, Iterator, Optional, TextIO, cast

import structlog
from structlog.dev import ConsoleRenderer
from structlog.stdlib import BoundLogger
from structlog.types import Processor

DIDI_VERSION = os.getenv("APP_VERSION", "1.0.0")


def _level_number(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Invalid log level: {level}")
    return resolved


def _base_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
    ]


def install_library_defaults() -> None:
    """Route structlog through stdlib logging without adding any handler."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_base_processors(),
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def configure_logging(
    level: str | int = "INFO",
    json_output: bool = True,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Install a handler for DIDI events and pick the renderer.

    Args:
        level: Level name or number
        json_output: JSON lines when true, console rendering otherwise
        stream: Destination, stderr by default; stdout belongs to command output
    """
    numeric_level = _level_number(level)
    pre_chain = [*_base_processors(), structlog.processors.TimeStamper(fmt="iso")]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *pre_chain,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer() if json_output else ConsoleRenderer(),
            foreign_pre_chain=pre_chain,
        )
    )
    logging.basicConfig(level=numeric_level, handlers=[handler], force=True)


def get_logger(name: str) -> BoundLogger:
    """Lazy structlog logger carrying service name and version."""
    service_name = os.getenv("SERVICE_NAME", "didi")
    return cast(
        BoundLogger,
        structlog.get_logger(name, service_name=service_name, version=DIDI_VERSION),
    )


@contextmanager
def log_context(**kwargs: Any) -> Iterator[None]:
    """Bind context variables for a block; previous values come back on exit."""
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield


if not structlog.is_configured():
    install_library_defaults()
