"""Retry Utilities
Bounded retry with fixed or exponential backoff for remote calls.
"""
import asyncio
from typing import Any, Awaitable, Callable, Optional, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_fixed,
)

from sozluk.core.config.settings import Settings
from sozluk.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[Any]]


class RetryPolicy:
    """
    Wraps a zero-argument async operation with bounded retry.

    Every exception is retried identically; after ``max_attempts`` tries the
    last exception propagates unchanged. Each retry calls the operation
    afresh, nothing from a failed attempt is carried over.

    Args:
        max_attempts: Total tries including the first one
        backoff: Delay before the first retry in seconds
        backoff_max: Upper bound for exponential delays
        exponential: Double the delay after each failure instead of keeping it fixed
        sleep: Awaitable sleep (injectable for tests)
    """

    def __init__(
        self,
        max_attempts: int = 3,
        backoff: float = 0.5,
        backoff_max: float = 4.0,
        exponential: bool = True,
        sleep: Optional[Sleep] = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")

        self.max_attempts = max_attempts
        self.backoff = backoff
        self.backoff_max = backoff_max
        self.exponential = exponential
        self._sleep = sleep or asyncio.sleep

    @classmethod
    def from_settings(cls, settings: Settings, sleep: Optional[Sleep] = None) -> "RetryPolicy":
        return cls(
            max_attempts=settings.RETRY_MAX_ATTEMPTS,
            backoff=settings.RETRY_BACKOFF,
            backoff_max=settings.RETRY_BACKOFF_MAX,
            exponential=settings.RETRY_EXPONENTIAL,
            sleep=sleep,
        )

    def _wait(self):
        if self.exponential:
            return wait_exponential(multiplier=self.backoff, min=0, max=self.backoff_max)
        return wait_fixed(self.backoff)

    async def call(self, operation: Callable[[], Awaitable[T]], label: str = "operation") -> T:
        """
        Run ``operation`` until it succeeds or attempts run out.

        Raises:
            Exception: The last failure once every attempt has failed
        """

        def log_retry(retry_state: RetryCallState) -> None:
            error = retry_state.outcome.exception() if retry_state.outcome else None
            logger.warning(
                "Retrying remote call",
                label=label,
                attempt=retry_state.attempt_number,
                max_attempts=self.max_attempts,
                delay=retry_state.next_action.sleep if retry_state.next_action else None,
                error=str(error),
                error_type=type(error).__name__,
            )

        async for attempt in AsyncRetrying(
            sleep=self._sleep,
            stop=stop_after_attempt(self.max_attempts),
            wait=self._wait(),
            retry=retry_if_exception_type(Exception),
            before_sleep=log_retry,
            reraise=True,
        ):
            with attempt:
                return await operation()


__all__ = ["RetryPolicy", "Sleep"]
