"""Structured logging setup for quizsource using structlog."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from quizsource.config import settings


def configure_logging(level: str | None = None, json: bool | None = None) -> None:
    """Route structlog through the stdlib logging module.

    Console rendering is used by default; ``json=True`` (or ``LOG_JSON=1``)
    switches to one JSON object per line for log shipping.  Output goes to
    stderr so CLI commands can keep stdout for extracted text.
    """
    level = (level or settings.log_level).upper()
    json = settings.log_json if json is None else json

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    renderer: Any
    if json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=shared_processors,
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
