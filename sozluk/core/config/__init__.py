"""
Configuration management for the Sözlük aggregation client.

Available configurations:
- settings: Main application settings
- logging: Logging configuration

Usage:
    >>> from sozluk.core.config import settings
    >>> print(settings.BASE_URL)
    https://sozluk.gov.tr/
"""

from sozluk.core.config.settings import (
    Settings,
    get_settings,
    settings,
)

__all__ = [
    "Settings",
    "get_settings",
    "settings",
]
