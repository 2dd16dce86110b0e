"""
Logging utilities for the Sözlük aggregation client.

The base logging configuration is in ``sozluk.core.config.logging``.

Usage:
    >>> from sozluk.core.logging import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info("Lookup aggregated", term="kalem")
"""

from sozluk.core.config.logging import (
    clear_log_context,
    configure_logging,
    get_logger,
    logging_config,
    set_log_context,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "set_log_context",
    "clear_log_context",
    "logging_config",
]
