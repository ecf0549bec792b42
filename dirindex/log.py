"""structlog setup for the command-line tool."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

import structlog


def debug_requested(verbose: bool, environ: Mapping[str, str] | None = None) -> bool:
    """Return whether debug logging is on via ``--verbose`` or ``RUNNER_DEBUG``."""
    env = os.environ if environ is None else environ
    return verbose or env.get("RUNNER_DEBUG") == "1"


def configure_logging(verbose: bool = False, environ: Mapping[str, str] | None = None) -> int:
    """Route structlog events to stderr; returns the active level."""
    level = logging.DEBUG if debug_requested(verbose, environ) else logging.INFO
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)
    structlog.configure(
        context_class=dict,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
            structlog.processors.StackInfoRenderer(),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        cache_logger_on_first_use=False,
    )
    return level


__all__ = ["configure_logging", "debug_requested"]
