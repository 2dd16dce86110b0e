"""
Custom exceptions for the Sözlük aggregation client.

This module provides the exception hierarchy:
- Base exception class
- Validation exceptions (rejected before any remote call)
- Source exceptions (transport, timeout, remote) raised by a single
  sub-dictionary query

All exceptions include:
- Error code
- Status code
- Detailed error message
- Additional context (details dict)
- Serialization support

Source exceptions are retried by the retry policy and, once retries are
exhausted, absorbed into a failed ``SourceOutcome``. Only ``ValidationError``
reaches the caller of a lookup.

Usage:
    >>> from sozluk.core.exceptions import ValidationError
    >>>
    >>> if not term:
    ...     raise ValidationError(
    ...         message="Geçersiz arama terimi",
    ...         details={"term": raw}
    ...     )
"""
from enum import Enum
from typing import Any

from sozluk.core.constants import (
    ERR_INVALID_INPUT,
    ERR_REMOTE,
    ERR_TIMEOUT,
    ERR_TRANSPORT,
    HTTP_BAD_GATEWAY,
    HTTP_BAD_REQUEST,
    HTTP_GATEWAY_TIMEOUT,
    HTTP_SERVICE_UNAVAILABLE,
)


class ErrorKind(str, Enum):
    """Classification of a failed sub-dictionary query."""

    TRANSPORT = "transport"  # Network unreachable
    TIMEOUT = "timeout"      # Deadline exceeded
    REMOTE = "remote"        # Non-2xx status or malformed payload


# =============================================================================
# BASE EXCEPTION
# =============================================================================

class SozlukError(Exception):
    """
    Base exception for all application exceptions.

    Attributes:
        message: Human-readable error message
        code: Machine-readable error code
        details: Additional error context
        status_code: HTTP status code (if applicable)
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
        status_code: int | None = None,
    ) -> None:
        self.message = message
        self.code = code or "UNKNOWN_ERROR"
        self.details = details or {}
        self.status_code = status_code

        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for serialization.

        Example:
            >>> exc = ValidationError(message="Geçersiz arama terimi")
            >>> exc.to_dict()
            {'error': 'Geçersiz arama terimi', 'code': 'INVALID_INPUT', 'details': {}}
        """
        return {
            "error": self.message,
            "code": self.code,
            "details": self.details,
        }

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (code: {self.code}, details: {self.details})"
        return f"{self.message} (code: {self.code})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code!r}, "
            f"details={self.details!r}, "
            f"status_code={self.status_code})"
        )


# =============================================================================
# VALIDATION
# =============================================================================

class ValidationError(SozlukError):
    """
    Invalid caller input: empty term, bad pattern, page, limit or source name.

    Example:
        >>> raise ValidationError(
        ...     message="Sayfa numarası 1 veya daha büyük olmalı",
        ...     details={"page": 0}
        ... )
    """

    def __init__(
        self,
        message: str = "Geçersiz girdi",
        code: str = ERR_INVALID_INPUT,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=code,
            details=details,
            status_code=HTTP_BAD_REQUEST,
        )


# =============================================================================
# SOURCE EXCEPTIONS
# =============================================================================

class SourceError(SozlukError):
    """Base class for failures of a single remote sub-dictionary query."""

    kind: ErrorKind = ErrorKind.REMOTE


class TransportError(SourceError):
    """Network unreachable, connection refused or reset."""

    kind = ErrorKind.TRANSPORT

    def __init__(
        self,
        message: str = "Sözlük servisine ulaşılamadı",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ERR_TRANSPORT,
            details=details,
            status_code=HTTP_SERVICE_UNAVAILABLE,
        )


class RequestTimeoutError(SourceError):
    """The remote call exceeded its deadline."""

    kind = ErrorKind.TIMEOUT

    def __init__(
        self,
        message: str = "Sözlük servisi zaman aşımına uğradı",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ERR_TIMEOUT,
            details=details,
            status_code=HTTP_GATEWAY_TIMEOUT,
        )


class RemoteError(SourceError):
    """
    Non-success status or malformed payload from a sub-dictionary.

    Attributes:
        http_status: Status returned by the remote service, if any
    """

    kind = ErrorKind.REMOTE

    def __init__(
        self,
        message: str = "Sözlük servisi geçersiz yanıt döndü",
        http_status: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.http_status = http_status
        details = dict(details or {})
        if http_status is not None:
            details.setdefault("status", http_status)

        super().__init__(
            message=message,
            code=ERR_REMOTE,
            details=details,
            status_code=HTTP_BAD_GATEWAY,
        )


def classify_error(error: BaseException) -> ErrorKind:
    """
    Map any exception raised inside a leg to its ``ErrorKind``.

    Exceptions outside the source hierarchy (decoding, unexpected shapes)
    count as a malformed payload.
    """
    if isinstance(error, SourceError):
        return error.kind
    return ErrorKind.REMOTE


__all__ = [
    "ErrorKind",
    "SozlukError",
    "ValidationError",
    "SourceError",
    "TransportError",
    "RequestTimeoutError",
    "RemoteError",
    "classify_error",
]
