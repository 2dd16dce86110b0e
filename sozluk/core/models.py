"""
Data models for the Sözlük aggregation client.

All models are frozen dataclasses with tuple-valued sequences: a record is
immutable after construction and can be cached and shared by value.

Models:
    - LookupOptions / LookupKey: cache identity of a lookup
    - SourceQuery / SourceOutcome / FanOut: one remote leg and its result
    - Headword / Sense / Pronunciation / AggregatedRecord: merged result
    - ProverbResult, WordCheck, SpellCheckReport, WordPage, DailyWord,
      BatchItem: results of the derived operations
    - CacheEntry / CacheStats: cache layer bookkeeping
    - SuggestionCandidate: transient approximate-matching result
"""
import json
import time
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from sozluk.core.constants import CACHE_KEY_SEPARATOR, LOOKUP_KEY_PREFIX
from sozluk.core.exceptions import ErrorKind


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# LOOKUP IDENTITY
# =============================================================================


@dataclass(frozen=True)
class LookupOptions:
    """
    Caller options for a lookup.

    Attributes:
        sources: Sub-dictionary names to query (None = default set)
        include_pronunciation: Add the pronunciation leg
        cache_ttl: TTL override in seconds for the stored record
    """

    sources: Optional[tuple[str, ...]] = None
    include_pronunciation: bool = False
    cache_ttl: Optional[int] = None


@dataclass(frozen=True)
class LookupKey:
    """
    Normalized term plus the options that change the result.

    ``cache_ttl`` does not change the result and is not part of the key.
    """

    term: str
    sources: tuple[str, ...]
    include_pronunciation: bool = False

    @property
    def options_fingerprint(self) -> str:
        return json.dumps(
            {
                "pronunciation": self.include_pronunciation,
                "sources": sorted(self.sources),
            },
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
        )

    @property
    def cache_key(self) -> str:
        """
        Example:
            >>> LookupKey("kalem", ("general",)).cache_key
            'lookup:kalem:{"pronunciation":false,"sources":["general"]}'
        """
        return CACHE_KEY_SEPARATOR.join(
            (LOOKUP_KEY_PREFIX, self.term, self.options_fingerprint)
        )

    @staticmethod
    def term_prefix(term: str) -> str:
        """Prefix shared by every option variant of one term."""
        return CACHE_KEY_SEPARATOR.join((LOOKUP_KEY_PREFIX, term, ""))


# =============================================================================
# FAN-OUT
# =============================================================================


@dataclass(frozen=True)
class SourceQuery:
    """One sub-dictionary request derived from a lookup key."""

    source: str
    path: str
    params: tuple[tuple[str, str], ...] = ()

    def params_dict(self) -> dict[str, str]:
        return dict(self.params)


@dataclass(frozen=True)
class SourceOutcome:
    """
    Result of executing one ``SourceQuery``: a payload or an error kind.

    Exactly one outcome exists per query per lookup attempt.
    """

    query: SourceQuery
    payload: Any = None
    error_kind: Optional[ErrorKind] = None
    error_message: Optional[str] = None
    attempts: int = 1
    elapsed_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    @property
    def source(self) -> str:
        return self.query.source

    @classmethod
    def success(
        cls,
        query: SourceQuery,
        payload: Any,
        attempts: int = 1,
        elapsed_ms: float = 0.0,
    ) -> "SourceOutcome":
        return cls(query=query, payload=payload, attempts=attempts, elapsed_ms=elapsed_ms)

    @classmethod
    def failure(
        cls,
        query: SourceQuery,
        error_kind: ErrorKind,
        error_message: str,
        attempts: int = 1,
        elapsed_ms: float = 0.0,
    ) -> "SourceOutcome":
        return cls(
            query=query,
            error_kind=error_kind,
            error_message=error_message,
            attempts=attempts,
            elapsed_ms=elapsed_ms,
        )


@dataclass(frozen=True)
class FanOut:
    """Every outcome of one fan-out, in issue order, with its wall-clock span."""

    outcomes: tuple[SourceOutcome, ...]
    started_at: float
    finished_at: float

    @property
    def elapsed_ms(self) -> float:
        return round((self.finished_at - self.started_at) * 1000, 2)

    def by_source(self) -> dict[str, SourceOutcome]:
        return {outcome.source: outcome for outcome in self.outcomes}


# =============================================================================
# AGGREGATED RECORD
# =============================================================================


@dataclass(frozen=True)
class Headword:
    """Header of the primary dictionary entry."""

    headword: str
    origin_language: Optional[str] = None
    is_proper_noun: bool = False
    is_plural: bool = False
    compounds_raw: Optional[str] = None


@dataclass(frozen=True)
class Sense:
    """One numbered sense of the primary dictionary entry."""

    order: int
    text: str
    examples: tuple[str, ...] = ()
    category: Optional[str] = None
    verbs: tuple[Any, ...] = ()
    proverbs: tuple[Any, ...] = ()


@dataclass(frozen=True)
class Pronunciation:
    term: str
    audio_file: Optional[str] = None
    pronunciation: Optional[str] = None
    link: Optional[str] = None


@dataclass(frozen=True)
class AggregatedRecord:
    """
    Unified best-effort result for one ``LookupKey``.

    ``complete`` is False iff at least one requested leg failed; failed legs
    leave their field at the default (empty tuple or None).
    """

    term: str
    headword: Optional[Headword] = None
    senses: tuple[Sense, ...] = ()
    examples: tuple[str, ...] = ()
    usage_categories: tuple[str, ...] = ()
    compounds: tuple[str, ...] = ()
    proverbs: tuple[Any, ...] = ()
    idioms: tuple[Any, ...] = ()
    compiled: tuple[Any, ...] = ()
    terminology: tuple[Any, ...] = ()
    foreign: tuple[Any, ...] = ()
    guide: tuple[Any, ...] = ()
    etymology: tuple[Any, ...] = ()
    pronunciation: Optional[Pronunciation] = None
    dictionaries_queried: tuple[str, ...] = ()
    failed_sources: tuple[tuple[str, str], ...] = ()
    sources_succeeded: int = 0
    complete: bool = True
    elapsed_ms: float = 0.0
    timestamp: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["failed_sources"] = dict(self.failed_sources)
        data["timestamp"] = self.timestamp.isoformat()
        return data

    def content(self) -> dict[str, Any]:
        """Result content without timing fields."""
        data = self.to_dict()
        data.pop("timestamp")
        data.pop("elapsed_ms")
        return data


# =============================================================================
# DERIVED RESULTS
# =============================================================================


@dataclass(frozen=True)
class ProverbResult:
    term: str
    proverbs: tuple[Any, ...] = ()
    idioms: tuple[Any, ...] = ()
    complete: bool = True

    @property
    def total(self) -> int:
        return len(self.proverbs) + len(self.idioms)


@dataclass(frozen=True)
class WordCheck:
    term: str
    is_correct: bool
    suggestions: tuple[str, ...] = ()


@dataclass(frozen=True)
class SpellCheckReport:
    text: str
    results: tuple[WordCheck, ...] = ()

    @property
    def total_words(self) -> int:
        return len(self.results)

    @property
    def correct_words(self) -> int:
        return sum(1 for check in self.results if check.is_correct)

    @property
    def incorrect_words(self) -> int:
        return self.total_words - self.correct_words

    @property
    def accuracy(self) -> float:
        if not self.results:
            return 0.0
        return round(self.correct_words / self.total_words * 100, 2)


@dataclass(frozen=True)
class WordPage:
    letter: str
    page: int
    page_size: int
    terms: tuple[str, ...] = ()
    total: int = 0

    @property
    def has_more(self) -> bool:
        return self.page * self.page_size < self.total


@dataclass(frozen=True)
class DailyWord:
    term: str
    meaning: Optional[str]
    date: str
    source: str = "gunun-sozu"


@dataclass(frozen=True)
class BatchItem:
    term: str
    record: Optional[AggregatedRecord] = None
    error: Optional[dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        return self.record is not None


# =============================================================================
# CACHE & MATCHING
# =============================================================================


@dataclass(frozen=True)
class CacheEntry:
    key: str
    value: Any
    created_at: float
    ttl: float

    @property
    def expires_at(self) -> float:
        return self.created_at + self.ttl

    def is_expired(self, now: Optional[float] = None) -> bool:
        return (time.monotonic() if now is None else now) >= self.expires_at


@dataclass(frozen=True)
class CacheStats:
    hits: int
    misses: int
    live_entries: int
    enabled: bool = True

    @property
    def hit_rate(self) -> float:
        lookups = self.hits + self.misses
        return round(self.hits / lookups, 4) if lookups else 0.0


@dataclass(frozen=True)
class SuggestionCandidate:
    """Transient ranked candidate; never persisted."""

    term: str
    score: float
    rank: int


__all__ = [
    "utc_now",
    "LookupOptions",
    "LookupKey",
    "SourceQuery",
    "SourceOutcome",
    "FanOut",
    "Headword",
    "Sense",
    "Pronunciation",
    "AggregatedRecord",
    "ProverbResult",
    "WordCheck",
    "SpellCheckReport",
    "WordPage",
    "DailyWord",
    "BatchItem",
    "CacheEntry",
    "CacheStats",
    "SuggestionCandidate",
]
