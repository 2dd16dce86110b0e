"""
Fan-out Dispatcher - concurrent sub-dictionary queries.

Issues one query per requested sub-dictionary, each wrapped by the retry
policy, and waits for every leg to settle:

    [LookupKey] → [SourceQuery × N] → [RetryPolicy(Transport.get)] × N
                                              ↓
                         [SourceOutcome × N, in issue order]

Contract:
    - Wait-for-all: never returns on first success or first failure
    - Fail-independently: a failing or timed-out leg neither cancels nor
      delays its siblings
    - Remote failures are absorbed into failed outcomes after retries;
      nothing but cancellation propagates out of ``dispatch``
"""

import asyncio
import time
from typing import Iterable, Optional, Sequence

from sozluk.adapters.sources import SourceRegistry, SubDictionary, get_registry
from sozluk.adapters.transport import Transport
from sozluk.core.exceptions import RemoteError, classify_error
from sozluk.core.logging import get_logger
from sozluk.core.models import FanOut, SourceOutcome, SourceQuery
from sozluk.utils.retry_utils import RetryPolicy

logger = get_logger(__name__)


class FanOutDispatcher:
    """
    Runs sub-dictionary queries concurrently with independent failure.

    Args:
        transport: Request/response collaborator
        retry_policy: Policy wrapped around every leg
        registry: Sub-dictionary registry used to build queries
    """

    def __init__(
        self,
        transport: Transport,
        retry_policy: Optional[RetryPolicy] = None,
        registry: Optional[SourceRegistry] = None,
    ):
        self.transport = transport
        self.retry_policy = retry_policy or RetryPolicy()
        self.registry = registry or get_registry()

    def build_queries(
        self,
        term: Optional[str],
        sources: Iterable[SubDictionary],
    ) -> list[SourceQuery]:
        return [self.registry.build_query(source, term) for source in sources]

    async def dispatch(
        self,
        term: Optional[str],
        sources: Sequence[SubDictionary],
    ) -> FanOut:
        """
        Query every source for ``term`` and collect one outcome per source.

        Returns:
            FanOut: Outcomes in the order the sources were given
        """
        return await self.run(self.build_queries(term, sources))

    async def run(self, queries: Sequence[SourceQuery]) -> FanOut:
        """Execute prepared queries concurrently; outcomes keep query order."""
        started = time.monotonic()

        # gather keeps argument order regardless of completion order
        outcomes = await asyncio.gather(*(self._run_leg(query) for query in queries))

        fanout = FanOut(
            outcomes=tuple(outcomes),
            started_at=started,
            finished_at=time.monotonic(),
        )

        failed = [outcome.source for outcome in fanout.outcomes if not outcome.ok]
        logger.debug(
            "Fan-out settled",
            legs=len(queries),
            failed=failed,
            elapsed_ms=fanout.elapsed_ms,
        )
        return fanout

    async def _run_leg(self, query: SourceQuery) -> SourceOutcome:
        """One leg: retried remote call, caught into an outcome."""
        attempts = 0
        started = time.monotonic()

        async def attempt():
            nonlocal attempts
            attempts += 1
            response = await self.transport.get(query.path, query.params_dict())
            if not 200 <= response.status < 300:
                raise RemoteError(
                    message=f"HTTP error {response.status}: {query.path}",
                    http_status=response.status,
                    details={"path": query.path},
                )
            return response.body

        try:
            payload = await self.retry_policy.call(attempt, label=query.source)
        except Exception as e:
            elapsed_ms = round((time.monotonic() - started) * 1000, 2)
            kind = classify_error(e)
            logger.warning(
                "Sub-dictionary query failed",
                source=query.source,
                attempts=attempts,
                error_kind=kind.value,
                error=str(e),
            )
            return SourceOutcome.failure(
                query,
                error_kind=kind,
                error_message=str(e),
                attempts=attempts,
                elapsed_ms=elapsed_ms,
            )

        return SourceOutcome.success(
            query,
            payload,
            attempts=attempts,
            elapsed_ms=round((time.monotonic() - started) * 1000, 2),
        )


__all__ = ["FanOutDispatcher"]
