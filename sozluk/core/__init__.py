"""
Core module for the Sözlük aggregation client.

This module provides foundational components:
- Configuration management
- Logging configuration
- Exception handling
- Data models
- Cache management

Usage:
    >>> from sozluk.core import settings, get_logger
    >>> from sozluk.core import ValidationError
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info("Client started", version=settings.APP_VERSION)
"""

# =============================================================================
# VERSION INFO
# =============================================================================

from sozluk.core.version import __version__, get_full_version

# =============================================================================
# CONFIGURATION
# =============================================================================

from sozluk.core.config import Settings, get_settings, settings

# =============================================================================
# LOGGING
# =============================================================================

from sozluk.core.logging import configure_logging, get_logger

# =============================================================================
# EXCEPTIONS
# =============================================================================

from sozluk.core.exceptions import (
    ErrorKind,
    RemoteError,
    RequestTimeoutError,
    SourceError,
    SozlukError,
    TransportError,
    ValidationError,
)

# =============================================================================
# CACHE
# =============================================================================

from sozluk.core.cache import MemoryCache

__all__ = [
    "__version__",
    "get_full_version",
    "Settings",
    "get_settings",
    "settings",
    "configure_logging",
    "get_logger",
    "ErrorKind",
    "SozlukError",
    "ValidationError",
    "SourceError",
    "TransportError",
    "RequestTimeoutError",
    "RemoteError",
    "MemoryCache",
]
