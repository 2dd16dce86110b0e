"""
Dictionary Service - public operations of the Sözlük aggregation client.

Wires the pipeline together and exposes every caller-facing operation:

    [raw term] → [normalize_term] → [LookupKey] → [MemoryCache]
                                                     ↓ miss
                         [FanOutDispatcher] → [RetryPolicy(Transport)] × N
                                                     ↓
                                  [MergeEngine] → [AggregatedRecord]

Operations:
    - lookup: aggregated record over the requested sub-dictionaries
    - spell_check: per-word correctness with suggestions
    - find_proverbs: proverbs and idioms for a term
    - similar_words, words_by_letter, wildcard_search: approximate matching
      over the candidate universe
    - word_of_the_day, popular_terms, random_word, pronunciation,
      batch_lookup
    - cache_stats, invalidate_cache

Only ``ValidationError`` propagates out of a lookup; sub-dictionary
failures yield ``complete=False`` records.

Usage:
    >>> from sozluk.services.dictionary_service import DictionaryService
    >>>
    >>> async with DictionaryService() as service:
    ...     record = await service.lookup("kalem", include_pronunciation=True)
    ...     report = await service.spell_check("kitap okuyorm")
    ...     print(record.complete, report.accuracy)
"""

import asyncio
import random
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from structlog.contextvars import bound_contextvars

from sozluk.adapters.sources import SourceRegistry, SubDictionary, get_registry
from sozluk.adapters.transport import HttpTransport, Transport
from sozluk.core.cache import MemoryCache
from sozluk.core.config.settings import Settings, get_settings
from sozluk.core.constants import (
    CACHE_KEY_SEPARATOR,
    CANDIDATE_UNIVERSE_LIMIT,
    DAILY_WORD_KEY,
    DEFAULT_PAGE_SIZE,
    DEFAULT_POPULAR_LIMIT,
    DEFAULT_SIMILAR_LIMIT,
    LETTER_KEY_PREFIX,
    POPULAR_KEY_PREFIX,
    POPULAR_TERMS,
    PROVERB_KEY_PREFIX,
)
from sozluk.core.exceptions import ValidationError
from sozluk.core.logging import get_logger
from sozluk.core.models import (
    AggregatedRecord,
    BatchItem,
    CacheStats,
    DailyWord,
    LookupKey,
    LookupOptions,
    Pronunciation,
    ProverbResult,
    SpellCheckReport,
    WordCheck,
    WordPage,
    utc_now,
)
from sozluk.core.version import get_full_version
from sozluk.services.dispatcher import FanOutDispatcher
from sozluk.services.matching_service import CandidatePool, compile_wildcard, rank_similar
from sozluk.services.merge_engine import MergeEngine, coerce_entries
from sozluk.utils.retry_utils import RetryPolicy, Sleep
from sozluk.utils.text_utils import normalize_term, tokenize_words, turkish_lower

logger = get_logger(__name__)


def _cache_key(*parts: Any) -> str:
    return CACHE_KEY_SEPARATOR.join(str(part) for part in parts)


def _require_positive(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(
            message=f"{name} 1 veya daha büyük bir tam sayı olmalıdır",
            details={name: value},
        )
    return value


class DictionaryService:
    """
    Resilient aggregation client for the remote dictionary service.

    Every collaborator is injectable; anything not given is built from
    ``settings``. Instances share no state with each other.

    Args:
        settings: Configuration (default: ``get_settings()``)
        transport: Request/response collaborator (default: ``HttpTransport``)
        cache: Keyed TTL store (default: ``MemoryCache`` from settings)
        retry_policy: Per-leg retry policy (default: from settings)
        registry: Sub-dictionary registry
        candidate_terms: Candidate universe for the matching operations
            (default: the popular-term seed list)
        sleep: Awaitable sleep used for retry delays
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[Transport] = None,
        cache: Optional[MemoryCache] = None,
        retry_policy: Optional[RetryPolicy] = None,
        registry: Optional[SourceRegistry] = None,
        candidate_terms: Optional[Iterable[str]] = None,
        sleep: Optional[Sleep] = None,
    ):
        self.settings = settings or get_settings()

        self._owns_transport = transport is None
        self.transport = transport or HttpTransport.from_settings(self.settings)

        self.cache = cache or MemoryCache(
            default_ttl=self.settings.CACHE_DEFAULT_TTL,
            check_period=self.settings.CACHE_CHECK_PERIOD,
            enabled=self.settings.CACHE_ENABLED,
        )
        self.registry = registry or get_registry()
        self.dispatcher = FanOutDispatcher(
            transport=self.transport,
            retry_policy=retry_policy or RetryPolicy.from_settings(self.settings, sleep=sleep),
            registry=self.registry,
        )
        self.merge_engine = MergeEngine(base_url=self.settings.BASE_URL)

        self.candidate_terms: Tuple[str, ...] = tuple(
            POPULAR_TERMS if candidate_terms is None else candidate_terms
        )

        # In-flight fan-outs keyed by cache key (request coalescing)
        self._inflight: Dict[str, "asyncio.Future[AggregatedRecord]"] = {}

        logger.debug(
            "Dictionary service initialized",
            version=get_full_version(),
            base_url=self.settings.BASE_URL,
            cache_enabled=self.cache.enabled,
        )

    async def __aenter__(self):
        initialize = getattr(self.transport, "initialize", None)
        if initialize is not None:
            await initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self) -> None:
        """Close the transport if this service created it."""
        if self._owns_transport:
            await self.transport.close()

    # =========================================================================
    # LOOKUP
    # =========================================================================

    def build_key(self, term: Any, options: LookupOptions) -> LookupKey:
        """
        Normalize the term and resolve the requested legs.

        Raises:
            ValidationError: Empty term, unknown source or bad TTL override
        """
        normalized = normalize_term(term)
        if not normalized:
            raise ValidationError(message="Aranacak kelime boş olamaz", details={"term": term})

        if options.cache_ttl is not None and (
            isinstance(options.cache_ttl, bool)
            or not isinstance(options.cache_ttl, (int, float))
            or options.cache_ttl <= 0
        ):
            raise ValidationError(
                message="Önbellek süresi pozitif olmalıdır",
                details={"cache_ttl": options.cache_ttl},
            )

        sources = self.registry.resolve_lookup_sources(
            options.sources,
            include_pronunciation=options.include_pronunciation,
        )
        return LookupKey(
            term=normalized,
            sources=tuple(source.value for source in sources),
            include_pronunciation=SubDictionary.PRONUNCIATION in sources,
        )

    async def lookup(
        self,
        term: Any,
        options: Optional[LookupOptions] = None,
        *,
        sources: Optional[Sequence[str]] = None,
        include_pronunciation: bool = False,
        cache_ttl: Optional[int] = None,
    ) -> AggregatedRecord:
        """
        Aggregated record for ``term`` across the requested sub-dictionaries.

        Args:
            term: Raw search term
            options: Lookup options; the keyword arguments are used when omitted
            sources: Sub-dictionary names (default: the eight lookup sources)
            include_pronunciation: Add the pronunciation leg
            cache_ttl: TTL override for the stored record

        Returns:
            AggregatedRecord: ``complete=False`` when any leg failed

        Raises:
            ValidationError: Invalid term or options (before any remote call)
        """
        if options is None:
            options = LookupOptions(
                sources=tuple(sources) if sources is not None else None,
                include_pronunciation=include_pronunciation,
                cache_ttl=cache_ttl,
            )

        key = self.build_key(term, options)
        cache_key = key.cache_key

        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug("Cache hit", key=cache_key)
            return cached

        ttl = options.cache_ttl or self.settings.LOOKUP_CACHE_TTL

        if not self.settings.COALESCE_REQUESTS:
            return await self._aggregate(key, ttl)

        task = self._inflight.get(cache_key)
        if task is None:
            task = asyncio.ensure_future(self._aggregate(key, ttl))
            self._inflight[cache_key] = task
            task.add_done_callback(lambda done: self._forget(cache_key, done))
        else:
            logger.debug("Joining in-flight lookup", key=cache_key)

        # A cancelled waiter must not cancel the shared fan-out
        return await asyncio.shield(task)

    def _forget(self, cache_key: str, task: "asyncio.Future[AggregatedRecord]") -> None:
        if self._inflight.get(cache_key) is task:
            del self._inflight[cache_key]

    async def _aggregate(self, key: LookupKey, ttl: float) -> AggregatedRecord:
        with bound_contextvars(term=key.term):
            sources = [SubDictionary(name) for name in key.sources]
            fanout = await self.dispatcher.dispatch(key.term, sources)
            record = self.merge_engine.merge(key, fanout)

            logger.info(
                "Lookup aggregated",
                complete=record.complete,
                sources_succeeded=record.sources_succeeded,
                failed=dict(record.failed_sources),
                elapsed_ms=record.elapsed_ms,
            )

            if record.complete or self.settings.CACHE_PARTIAL_RESULTS:
                self.cache.set(key.cache_key, record, ttl=ttl)

            return record

    async def batch_lookup(self, terms: Sequence[Any]) -> List[BatchItem]:
        """
        Look up several terms concurrently.

        An invalid term yields an item carrying the validation error; the
        rest of the batch is unaffected.

        Raises:
            ValidationError: More than ``MAX_BATCH_SIZE`` terms
        """
        terms = list(terms or ())
        if len(terms) > self.settings.MAX_BATCH_SIZE:
            raise ValidationError(
                message=f"En fazla {self.settings.MAX_BATCH_SIZE} kelime aranabilir",
                details={"count": len(terms), "max": self.settings.MAX_BATCH_SIZE},
            )

        async def one(term: Any) -> BatchItem:
            try:
                record = await self.lookup(term, cache_ttl=self.settings.BATCH_CACHE_TTL)
            except ValidationError as e:
                return BatchItem(term=str(term), error=e.to_dict())
            return BatchItem(term=str(term), record=record)

        return list(await asyncio.gather(*(one(term) for term in terms)))

    async def pronunciation(self, term: Any) -> Optional[Pronunciation]:
        """Pronunciation data for ``term``; None when unavailable."""
        record = await self.lookup(term, sources=(SubDictionary.PRONUNCIATION.value,))
        return record.pronunciation

    # =========================================================================
    # PROVERBS & SPELLING
    # =========================================================================

    async def find_proverbs(self, term: Any) -> ProverbResult:
        """
        Proverbs and idioms containing ``term``.

        Raises:
            ValidationError: Empty term
        """
        normalized = normalize_term(term)
        if not normalized:
            raise ValidationError(message="Aranacak kelime boş olamaz", details={"term": term})

        cache_key = _cache_key(PROVERB_KEY_PREFIX, normalized)
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        fanout = await self.dispatcher.dispatch(
            normalized,
            (SubDictionary.PROVERBS, SubDictionary.IDIOMS),
        )
        outcomes = fanout.by_source()
        proverbs = outcomes[SubDictionary.PROVERBS.value]
        idioms = outcomes[SubDictionary.IDIOMS.value]

        result = ProverbResult(
            term=normalized,
            proverbs=tuple(coerce_entries(proverbs.payload)) if proverbs.ok else (),
            idioms=tuple(coerce_entries(idioms.payload)) if idioms.ok else (),
            complete=proverbs.ok and idioms.ok,
        )

        if result.complete or self.settings.CACHE_PARTIAL_RESULTS:
            self.cache.set(cache_key, result, ttl=self.settings.PROVERB_CACHE_TTL)

        return result

    async def spell_check(self, text: Any) -> SpellCheckReport:
        """
        Check every word of ``text`` against the primary dictionary.

        A word is correct when the primary dictionary has at least one
        entry for it. Incorrect words carry similar-word suggestions; a word
        whose check failed remotely is incorrect without suggestions.

        Raises:
            ValidationError: Empty text
        """
        if not isinstance(text, str) or not text.strip():
            raise ValidationError(message="Denetlenecek metin boş olamaz", details={"text": text})

        words = [word for word in map(normalize_term, tokenize_words(text)) if word]

        async def check(word: str) -> WordCheck:
            fanout = await self.dispatcher.dispatch(word, (SubDictionary.GENERAL,))
            outcome = fanout.outcomes[0]
            if not outcome.ok:
                return WordCheck(term=word, is_correct=False)

            if coerce_entries(outcome.payload):
                return WordCheck(term=word, is_correct=True)

            suggestions = await self.similar_words(word, self.settings.SUGGESTION_COUNT)
            return WordCheck(term=word, is_correct=False, suggestions=tuple(suggestions))

        results = await asyncio.gather(*(check(word) for word in words))
        report = SpellCheckReport(text=text, results=tuple(results))

        logger.info(
            "Spell check completed",
            total=report.total_words,
            incorrect=report.incorrect_words,
            accuracy=report.accuracy,
        )
        return report

    # =========================================================================
    # APPROXIMATE MATCHING
    # =========================================================================

    async def popular_terms(self, limit: int = DEFAULT_POPULAR_LIMIT) -> List[str]:
        """The first ``limit`` terms of the candidate universe, in order."""
        _require_positive("limit", limit)

        cache_key = _cache_key(POPULAR_KEY_PREFIX, limit)
        cached = self.cache.get(cache_key)
        if cached is None:
            cached = self.candidate_terms[:limit]
            self.cache.set(cache_key, cached, ttl=self.settings.POPULAR_CACHE_TTL)
        return list(cached)

    async def words_by_letter(
        self,
        letter: Any,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> WordPage:
        """
        One page of candidate terms starting with ``letter``.

        Raises:
            ValidationError: Not a single letter, or page/page size below 1
        """
        folded = turkish_lower(letter.strip()) if isinstance(letter, str) else ""
        if len(folded) != 1 or not folded.isalnum():
            raise ValidationError(message="Tek bir harf girilmelidir", details={"letter": letter})
        _require_positive("page", page)
        _require_positive("page_size", page_size)

        cache_key = _cache_key(LETTER_KEY_PREFIX, folded, page, page_size)
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        universe = await self.popular_terms(CANDIDATE_UNIVERSE_LIMIT)
        matches = CandidatePool.from_items(universe).starting_with(folded).terms
        start = (page - 1) * page_size

        result = WordPage(
            letter=folded,
            page=page,
            page_size=page_size,
            terms=tuple(matches[start:start + page_size]),
            total=len(matches),
        )
        self.cache.set(cache_key, result, ttl=self.settings.LETTER_CACHE_TTL)
        return result

    async def similar_words(self, term: Any, limit: int = DEFAULT_SIMILAR_LIMIT) -> List[str]:
        """
        Terms similar to ``term`` from its first letter's listing.

        Never contains ``term`` itself.

        Raises:
            ValidationError: Empty term or limit below 1
        """
        normalized = normalize_term(term)
        if not normalized:
            raise ValidationError(message="Aranacak kelime boş olamaz", details={"term": term})
        _require_positive("limit", limit)

        if not normalized[0].isalnum():
            return []

        listing = await self.words_by_letter(normalized[0], 1, self.settings.SIMILAR_POOL_SIZE)
        pool = CandidatePool.from_items(listing.terms)
        return [candidate.term for candidate in rank_similar(normalized, pool, limit)]

    async def wildcard_search(self, pattern: Any) -> List[str]:
        """
        Candidate terms matching a wildcard pattern (``?``, ``*``, ``,N``).

        Raises:
            ValidationError: Empty pattern or invalid length clause
        """
        matcher = compile_wildcard(pattern)
        universe = await self.popular_terms(CANDIDATE_UNIVERSE_LIMIT)
        return matcher.filter(universe)

    async def random_word(
        self,
        rng: Optional[random.Random] = None,
    ) -> Optional[Tuple[str, AggregatedRecord]]:
        """A random candidate term and its aggregated record."""
        universe = await self.popular_terms(CANDIDATE_UNIVERSE_LIMIT)
        if not universe:
            return None
        term = (rng or random.Random()).choice(universe)
        return term, await self.lookup(term)

    async def word_of_the_day(self) -> Optional[DailyWord]:
        """Word of the day; None when the remote leg fails."""
        cached = self.cache.get(DAILY_WORD_KEY)
        if cached is not None:
            return cached

        fanout = await self.dispatcher.dispatch(None, (SubDictionary.DAILY,))
        outcome = fanout.outcomes[0]
        if not outcome.ok:
            return None

        entries = [entry for entry in coerce_entries(outcome.payload) if isinstance(entry, dict)]
        term = (entries[0].get("madde") or entries[0].get("kelime")) if entries else None
        if not term:
            logger.warning("Word of the day payload has no term")
            return None

        daily = DailyWord(
            term=term,
            meaning=entries[0].get("anlam"),
            date=utc_now().date().isoformat(),
        )
        self.cache.set(DAILY_WORD_KEY, daily, ttl=self.settings.DAILY_WORD_CACHE_TTL)
        return daily

    # =========================================================================
    # CACHE MANAGEMENT
    # =========================================================================

    def cache_stats(self) -> CacheStats:
        return self.cache.stats()

    def invalidate_cache(self, key_or_prefix: Optional[str] = None) -> int:
        """
        Remove cached entries.

        Args:
            key_or_prefix: Exact key, key prefix, or None for everything

        Returns:
            int: Number of entries removed
        """
        return self.cache.invalidate(key_or_prefix)


__all__ = ["DictionaryService"]
