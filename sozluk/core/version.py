"""
Semantic versioning for the Sözlük aggregation client.

Version Format: MAJOR.MINOR.PATCH (e.g., "1.4.0")

Usage:
    >>> from sozluk.core.version import __version__, get_full_version
    >>> __version__
    '1.4.0'
"""
import sys
from typing import Final

__version__: Final[str] = "1.4.0"

VERSION_INFO: Final[tuple[int, int, int]] = tuple(  # type: ignore[assignment]
    int(part) for part in __version__.split(".")
)


def get_full_version() -> str:
    """
    Version string with interpreter details, used in log banners.

    Example:
        >>> get_full_version()
        '1.4.0 | python=3.12.1'
    """
    python = ".".join(str(part) for part in sys.version_info[:3])
    return f"{__version__} | python={python}"


__all__ = ["__version__", "VERSION_INFO", "get_full_version"]
