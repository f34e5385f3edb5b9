"""
Structured logging: timestamp, slot, event_type, stage counters.

structlog renders JSON (LOG_FORMAT=json, default) or a console view
(LOG_FORMAT=console). Every record carries event_type and the module
name under "logger_name"; stages add slot and counts as keyword fields.
Output goes to stderr so CLI JSON on stdout stays machine-readable.

Only structlog, the stdlib and jupiter_dex.config.env are imported here
so any jupiter_dex module can import it without cycles.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

from jupiter_dex.config.env import get_log_format, get_log_level


def _add_timestamp(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Ensure timestamp is always present (ISO 8601, UTC)."""
    event_dict.setdefault("timestamp", datetime.now(timezone.utc).isoformat())
    return event_dict


def _event_type(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Rename structlog 'event' to event_type."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    return event_dict


def _stderr_logger(*args: Any) -> structlog.PrintLogger:
    # sys.stderr is looked up per logger so redirected streams are picked up
    return structlog.PrintLogger(file=sys.stderr)


def configure_structlog(level: str | None = None, fmt: str | None = None) -> None:
    """
    Configure structlog processors, level filter and renderer.

    Runs at import with LOG_LEVEL / LOG_FORMAT (environment or .env); the
    CLI calls it again with its Settings. Loggers from get_logger are lazy,
    so a later call applies to all of them.
    """
    level_name = (level or get_log_level()).strip().upper()
    level_value = getattr(logging, level_name, logging.INFO)
    fmt = (fmt or get_log_format()).strip().lower()

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.format_exc_info,
        _add_timestamp,
        _event_type,
    ]
    if fmt == "console":
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    else:
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        context_class=dict,
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> Any:
    """
    Return a structured logger for the given module name.

        logger = get_logger(__name__)
        logger.info("block_processed", slot=250_000_000, swap_count=3)
    """
    return structlog.get_logger(name, logger_name=name)


def bind_slot(slot: int) -> Any:
    """Return a logger with slot bound to all subsequent log calls."""
    return get_logger("jupiter_dex").bind(slot=slot)
