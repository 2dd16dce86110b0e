"""
HTTP transport for the remote dictionary service.

This module provides the request/response collaborator used by every
sub-dictionary leg:

- httpx async client with base address and default timeout
- Turkish Accept-Language and browser User-Agent headers
- Mapping of httpx failures into the source exception hierarchy
- JSON payload decoding and shape check
- Request timing logs

The transport performs exactly one attempt per call; retries belong to the
retry policy wrapped around it by the fan-out dispatcher.

Example:
    >>> async with HttpTransport(base_url="https://sozluk.gov.tr/") as transport:
    ...     response = await transport.get("gts", {"ara": "kalem"})
    ...     print(response.status, len(response.body))
"""

import time
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol

import httpx

from sozluk.core.config.settings import Settings
from sozluk.core.constants import (
    DEFAULT_ACCEPT_LANGUAGE,
    DEFAULT_MAX_REDIRECTS,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_USER_AGENT,
)
from sozluk.core.exceptions import RemoteError, RequestTimeoutError, TransportError
from sozluk.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    """Decoded response of one remote call."""

    status: int
    body: Any


class Transport(Protocol):
    """Request/response collaborator consumed by the dispatcher."""

    async def get(
        self,
        path: str,
        params: Optional[Mapping[str, str]] = None,
    ) -> TransportResponse:
        ...


class HttpTransport:
    """
    ``Transport`` implementation on ``httpx.AsyncClient``.

    Attributes:
        base_url: Base address of the dictionary service
        timeout: Default per-call timeout in seconds
        user_agent: User-Agent header
        accept_language: Accept-Language header
        max_redirects: Redirect limit
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        accept_language: str = DEFAULT_ACCEPT_LANGUAGE,
        max_redirects: int = DEFAULT_MAX_REDIRECTS,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize transport.

        Args:
            base_url: Base address; endpoint paths are resolved against it
            timeout: Per-call timeout in seconds (default: 15)
            user_agent: User-Agent header
            accept_language: Accept-Language header
            max_redirects: Redirect limit (default: 5)
            client: Pre-built client (tests inject one with a mock transport)
        """
        self.base_url = base_url if base_url.endswith("/") else f"{base_url}/"
        self.timeout = timeout
        self.user_agent = user_agent
        self.accept_language = accept_language
        self.max_redirects = max_redirects

        self.client: Optional[httpx.AsyncClient] = client
        self._owns_client = client is None

        self.request_count = 0
        self.error_count = 0

    @classmethod
    def from_settings(cls, settings: Settings) -> "HttpTransport":
        return cls(
            base_url=settings.BASE_URL,
            timeout=settings.REQUEST_TIMEOUT,
            user_agent=settings.USER_AGENT,
            accept_language=settings.ACCEPT_LANGUAGE,
            max_redirects=settings.MAX_REDIRECTS,
        )

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def initialize(self) -> None:
        """Create the HTTP client if none was injected."""
        if self.client is None:
            self.client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={
                    "User-Agent": self.user_agent,
                    "Accept": "application/json, text/html, application/xhtml+xml",
                    "Accept-Language": self.accept_language,
                    "Cache-Control": "no-cache",
                },
                follow_redirects=True,
                max_redirects=self.max_redirects,
            )
            self._owns_client = True

    async def close(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self.client is not None and self._owns_client:
            await self.client.aclose()
            self.client = None

        logger.debug(
            "Transport closed",
            requests=self.request_count,
            errors=self.error_count,
        )

    async def get(
        self,
        path: str,
        params: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> TransportResponse:
        """
        Single GET attempt returning the decoded JSON body.

        Args:
            path: Endpoint path relative to the base address
            params: Query parameters
            timeout: Override of the default timeout

        Returns:
            TransportResponse: Status and decoded body

        Raises:
            RequestTimeoutError: Deadline exceeded
            TransportError: Network failure
            RemoteError: Non-2xx status or malformed body
        """
        await self.initialize()

        started = time.monotonic()
        self.request_count += 1

        try:
            response = await self.client.get(
                path,
                params=dict(params or {}),
                timeout=self.timeout if timeout is None else timeout,
            )
        except httpx.TimeoutException as e:
            self.error_count += 1
            logger.warning("Remote call timed out", path=path, duration_ms=self._since(started))
            raise RequestTimeoutError(
                message=f"Timed out: {path}",
                details={"path": path, "timeout": self.timeout if timeout is None else timeout},
            ) from e
        except httpx.RequestError as e:
            self.error_count += 1
            logger.warning(
                "Remote call failed",
                path=path,
                error=str(e),
                duration_ms=self._since(started),
            )
            raise TransportError(
                message=f"Request failed: {path}",
                details={"path": path, "error": str(e)},
            ) from e

        duration_ms = self._since(started)

        if not response.is_success:
            self.error_count += 1
            logger.warning(
                "Remote call returned error status",
                path=path,
                status=response.status_code,
                duration_ms=duration_ms,
            )
            raise RemoteError(
                message=f"HTTP error {response.status_code}: {path}",
                http_status=response.status_code,
                details={"path": path},
            )

        try:
            body = response.json()
        except ValueError as e:
            self.error_count += 1
            raise RemoteError(
                message=f"Malformed payload: {path}",
                http_status=response.status_code,
                details={"path": path, "error": str(e)},
            ) from e

        if body is not None and not isinstance(body, (list, dict)):
            self.error_count += 1
            raise RemoteError(
                message=f"Unexpected payload type: {path}",
                http_status=response.status_code,
                details={"path": path, "type": type(body).__name__},
            )

        logger.debug(
            "Remote call completed",
            path=path,
            status=response.status_code,
            duration_ms=duration_ms,
        )

        return TransportResponse(status=response.status_code, body=body)

    @staticmethod
    def _since(started: float) -> float:
        return round((time.monotonic() - started) * 1000, 2)


__all__ = ["Transport", "TransportResponse", "HttpTransport"]
