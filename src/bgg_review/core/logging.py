"""Structured logging setup shared by the CLI and library code."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def _processors(json_output: bool) -> list[Any]:
    common: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    if json_output:
        return common + [structlog.processors.JSONRenderer()]
    return common + [structlog.dev.ConsoleRenderer(colors=False)]


def configure_logging(level: str = "WARNING", *, json_output: bool = False) -> None:
    """Route structlog through stdlib logging on stderr.

    stdout is left alone so `--json` output stays machine-readable.
    """

    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(numeric_level)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)

    structlog.configure(
        processors=_processors(json_output),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
