"""
Logging configuration for the Sözlük aggregation client.

This module provides logging setup:
- Structured JSON logging (``LOG_FORMAT=json``)
- Human-readable text logging (default)
- Context injection (the term being looked up)
- Quiet third-party loggers

Log Structure:
    {
        "timestamp": "2026-10-18T12:00:00Z",
        "level": "info",
        "logger": "sozluk.services.dictionary_service",
        "event": "Lookup aggregated",
        "term": "merhaba",
        "complete": true,
        "elapsed_ms": 412.3
    }
"""
import logging
import sys
from typing import Any

import structlog
from pythonjsonlogger import jsonlogger

from sozluk.core.config.settings import Settings, get_settings


class LoggingConfig:
    """
    Logging configuration and setup.

    Configures the standard library root logger once and layers structlog
    on top of it so that every module logs through ``get_logger``.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._configured = False

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    # =========================================================================
    # SETUP
    # =========================================================================

    def configure(self) -> None:
        """
        Configure application logging.

        Example:
            >>> from sozluk.core.config.logging import logging_config
            >>> logging_config.configure()
        """
        if self._configured:
            return

        self._configure_standard_logging()
        self._configure_structlog()

        self._configured = True

    def _configure_standard_logging(self) -> None:
        """Configure Python's standard logging module."""
        root_logger = logging.getLogger()
        root_logger.setLevel(self._get_log_level())

        root_logger.handlers.clear()
        root_logger.addHandler(self._create_console_handler())

        self._configure_third_party_loggers()

    def _configure_structlog(self) -> None:
        """Configure structlog for structured logging."""
        processors: list[Any] = [
            structlog.stdlib.filter_by_level,
            structlog.contextvars.merge_contextvars,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
        ]

        # Level, logger name and timestamp come from the stdlib formatter
        if self.settings.LOG_FORMAT == "json":
            processors.append(structlog.stdlib.render_to_log_kwargs)
        else:
            processors.append(
                structlog.processors.KeyValueRenderer(
                    key_order=["event"],
                    drop_missing=True,
                )
            )

        structlog.configure(
            processors=processors,
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

    # =========================================================================
    # HANDLERS & FORMATTERS
    # =========================================================================

    def _create_console_handler(self) -> logging.StreamHandler:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(self._get_log_level())

        if self.settings.LOG_FORMAT == "json":
            handler.setFormatter(self._create_json_formatter())
        else:
            handler.setFormatter(self._create_text_formatter())

        return handler

    def _create_json_formatter(self) -> jsonlogger.JsonFormatter:
        return jsonlogger.JsonFormatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={
                "levelname": "level",
                "name": "logger",
                "asctime": "timestamp",
            },
        )

    def _create_text_formatter(self) -> logging.Formatter:
        return logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    # =========================================================================
    # THIRD-PARTY LOGGERS
    # =========================================================================

    def _configure_third_party_loggers(self) -> None:
        noisy_loggers = {
            "httpx": logging.WARNING,
            "httpcore": logging.WARNING,
            "asyncio": logging.WARNING,
        }

        for logger_name, level in noisy_loggers.items():
            logging.getLogger(logger_name).setLevel(level)

    # =========================================================================
    # UTILITIES
    # =========================================================================

    def _get_log_level(self) -> int:
        return logging.getLevelName(self.settings.LOG_LEVEL)

    def get_logger(self, name: str) -> structlog.stdlib.BoundLogger:
        """
        Get a structured logger.

        Example:
            >>> logger = logging_config.get_logger(__name__)
            >>> logger.info("Lookup aggregated", term="merhaba", complete=True)
        """
        if not self._configured:
            self.configure()

        return structlog.get_logger(name)


# =============================================================================
# GLOBAL LOGGING CONFIG INSTANCE
# =============================================================================

logging_config = LoggingConfig()


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def configure_logging() -> None:
    """
    Configure application logging.

    Should be called once at application startup; ``get_logger`` calls it
    lazily otherwise.
    """
    logging_config.configure()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a configured logger.

    Example:
        >>> from sozluk.core.config.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Cache invalidated", removed=3)
    """
    return logging_config.get_logger(name)


def set_log_context(**kwargs: Any) -> None:
    """Bind context variables to every subsequent log line in this task."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_log_context() -> None:
    """Clear all logging context variables."""
    structlog.contextvars.clear_contextvars()


__all__ = [
    "LoggingConfig",
    "logging_config",
    "configure_logging",
    "get_logger",
    "set_log_context",
    "clear_log_context",
]
