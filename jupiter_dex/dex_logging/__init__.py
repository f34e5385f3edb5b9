"""
Structured logging for Jupiter DEX.

JSON logs with timestamp, slot, event_type and stage counters.
Use get_logger() in all modules for aggregation-friendly output.
"""

from jupiter_dex.dex_logging.logger import bind_slot, configure_structlog, get_logger

__all__ = ["bind_slot", "configure_structlog", "get_logger"]
