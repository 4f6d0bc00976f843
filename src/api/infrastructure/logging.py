"""Structlog configuration for the API and the property CLI.

Console rendering for development, JSON lines everywhere else. Domain
probes log through ``structlog.get_logger()`` and pick this up.
"""

import logging
import os
import sys

import structlog

LOG_FORMATS = ("auto", "console", "json")


def _use_console(log_format: str) -> bool:
    if log_format == "console":
        return True
    if log_format == "json":
        return False
    # FORCE_COLOR=1 enables colors even in non-TTY environments (like Docker)
    force_color = os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes")
    return force_color or sys.stdout.isatty()


def configure_logging(level: str = "INFO", log_format: str = "auto") -> None:
    """Configure structlog processors and the minimum level.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ...). Unknown names
            fall back to INFO.
        log_format: ``console``, ``json`` or ``auto`` (console on a TTY)

    Raises:
        ValueError: If log_format is not one of LOG_FORMATS
    """
    if log_format not in LOG_FORMATS:
        raise ValueError(f"Unknown log format {log_format!r}; expected one of {LOG_FORMATS}")

    min_level = logging.getLevelName(level.upper())
    if not isinstance(min_level, int):
        min_level = logging.INFO

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if _use_console(log_format):
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.extend(
            [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
