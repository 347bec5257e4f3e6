"""Structured logging via structlog.

The library itself only logs through ``logging.getLogger(__name__)``.
Host tools that want structured output call ``configure_structlog`` once
at startup; the stdlib bridge then routes detector logs through the same
renderer.

Renderer selection:
  debug=True  -> ``ConsoleRenderer`` for local use.
  debug=False -> ``JSONRenderer`` for machine-parseable output.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

from pmdetect.core.config import get_settings


def configure_structlog(debug: bool | None = None, stream: TextIO | None = None) -> None:
    """Configure structlog and the stdlib bridge.

    ``debug`` defaults to ``Settings.debug`` (``PMDETECT_DEBUG``).
    Calling multiple times is safe; the last call wins.
    """
    if debug is None:
        debug = get_settings().debug
    stream = stream or sys.stderr

    shared_processors: list = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if debug:
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if debug else logging.INFO
        ),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=stream),
        cache_logger_on_first_use=False,
    )

    # Route ``pmdetect.*`` stdlib loggers through structlog's renderer.
    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=shared_processors,
        )
    )
    package_logger = logging.getLogger("pmdetect")
    package_logger.handlers = [handler]
    package_logger.setLevel(logging.DEBUG if debug else logging.INFO)
    package_logger.propagate = False
