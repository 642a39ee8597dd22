"""
Structured logging setup.

Diagnostics go to stderr through structlog so that stdout stays reserved for
command output (the object owners JSON document, the publish summary).
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

import structlog


def resolve_level(
    default: str = "INFO", verbose: bool = False, quiet: bool = False
) -> int:
    """Map the configured level and the -v/-q flags to a logging level."""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    level = logging.getLevelName(default.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(
    level: int = logging.INFO,
    fmt: str = "console",
    stream: Optional[TextIO] = None,
) -> None:
    """Configure structlog for one CLI invocation.

    Args:
        level: Minimum level that is emitted
        fmt: "console" for human-readable lines, "json" for one JSON object per line
        stream: Output stream (default: stderr)
    """
    renderer = (
        structlog.processors.JSONRenderer()
        if fmt == "json"
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        # Resolve sys.stderr per logger, not once at configure time
        logger_factory=lambda *args: structlog.PrintLogger(stream or sys.stderr),
        cache_logger_on_first_use=False,
    )
