"""
Approximate Matching Engine - suggestions, similar words, wildcard search.

Three operations over a shared candidate pool (popular terms, a per-letter
listing, ...):

    Spelling suggestion:
        candidates sharing the input's first three characters, or
        containing its characters 2-4, in pool order, input excluded

    Similarity ranking:
        same rule, pool restricted to the input's first letter

    Wildcard compilation:
        "?" = exactly one character, "*" = zero or more characters,
        trailing ",N" = exact length N; Turkish case-insensitive

The shared-fragment rule is a plain substring heuristic, not an edit
distance. Filtering and ranking are deterministic for a fixed pool.

Usage:
    >>> pool = CandidatePool.from_items(["kitap", "kitabe", "kalem"])
    >>> [c.term for c in suggest_spelling("kitab", pool)]
    ['kitap', 'kitabe']
    >>>
    >>> matcher = compile_wildcard("k?tap")
    >>> matcher.filter(["kitap", "katap", "kiitap"])
    ['kitap', 'katap']
"""

import re
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, List, Optional, Tuple

from sozluk.core.constants import (
    DEFAULT_SIMILAR_LIMIT,
    DEFAULT_SUGGESTION_COUNT,
    MIDDLE_FRAGMENT_SLICE,
    PREFIX_FRAGMENT_LENGTH,
)
from sozluk.core.exceptions import ValidationError
from sozluk.core.models import SuggestionCandidate
from sozluk.utils.text_utils import normalize_term, turkish_lower


# Score per matched rule; informational only, pool order is kept
PREFIX_SCORE = 1.0
MIDDLE_SCORE = 0.5

_LENGTH_CLAUSE = re.compile(r"^(?P<body>.*),\s*(?P<length>-?\d+)\s*$", re.DOTALL)


# =============================================================================
# CANDIDATE POOL
# =============================================================================


@dataclass(frozen=True)
class CandidatePool:
    """
    Ordered, de-duplicated list of candidate terms.

    Each entry keeps the display form next to its normalized form; matching
    always compares normalized forms.
    """

    entries: Tuple[Tuple[str, str], ...] = ()

    @classmethod
    def from_items(cls, items: Iterable[Any]) -> "CandidatePool":
        """
        Build a pool from plain strings or entry objects.

        Objects contribute their ``kelime`` or ``madde`` field; anything
        without a usable term is skipped.
        """
        seen = set()
        entries = []
        for item in items or ():
            if isinstance(item, dict):
                item = item.get("kelime") or item.get("madde")
            if not isinstance(item, str):
                continue
            normalized = normalize_term(item)
            if not normalized or normalized in seen:
                continue
            seen.add(normalized)
            entries.append((item, normalized))
        return cls(entries=tuple(entries))

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def terms(self) -> List[str]:
        return [display for display, _ in self.entries]

    def starting_with(self, letter: str) -> "CandidatePool":
        """Sub-pool of terms whose normalized form starts with ``letter``."""
        folded = turkish_lower(letter)
        if not folded:
            return CandidatePool()
        return CandidatePool(
            entries=tuple(entry for entry in self.entries if entry[1].startswith(folded))
        )


# =============================================================================
# SHARED-FRAGMENT RULE
# =============================================================================


def fragment_score(term: str, candidate: str) -> float:
    """
    Score of ``candidate`` against normalized ``term`` (0.0 = no match).

    An empty middle fragment (terms shorter than two characters) matches
    nothing; such terms rely on the prefix rule alone.

    Example:
        >>> fragment_score("kitab", "kitap")
        1.0
        >>> fragment_score("sevgi", "özevgin")
        0.5
    """
    if not term or not candidate or candidate == term:
        return 0.0

    if candidate.startswith(term[:PREFIX_FRAGMENT_LENGTH]):
        return PREFIX_SCORE

    start, end = MIDDLE_FRAGMENT_SLICE
    middle = term[start:end]
    if middle and middle in candidate:
        return MIDDLE_SCORE

    return 0.0


def shares_fragment(term: str, candidate: str) -> bool:
    return fragment_score(term, candidate) > 0


def _rank(term: str, pool: CandidatePool, limit: int) -> List[SuggestionCandidate]:
    results: List[SuggestionCandidate] = []
    if limit <= 0:
        return results

    for display, normalized in pool:
        score = fragment_score(term, normalized)
        if score <= 0:
            continue
        results.append(SuggestionCandidate(term=display, score=score, rank=len(results) + 1))
        if len(results) >= limit:
            break

    return results


def suggest_spelling(
    term: str,
    pool: CandidatePool,
    limit: int = DEFAULT_SUGGESTION_COUNT,
) -> List[SuggestionCandidate]:
    """
    Ordered spelling corrections for ``term`` from ``pool``.

    Returns:
        List of candidates in pool order; empty for an empty pool or term
    """
    normalized = normalize_term(term)
    if not normalized:
        return []
    return _rank(normalized, pool, limit)


def rank_similar(
    term: str,
    pool: CandidatePool,
    limit: int = DEFAULT_SIMILAR_LIMIT,
) -> List[SuggestionCandidate]:
    """Similar words: the suggestion rule on the input's first-letter sub-pool."""
    normalized = normalize_term(term)
    if not normalized:
        return []
    return _rank(normalized, pool.starting_with(normalized[0]), limit)


# =============================================================================
# WILDCARD MATCHER
# =============================================================================


class WildcardMatcher:
    """
    Compiled wildcard pattern, reusable across any number of candidates.

    Attributes:
        pattern: Pattern as given
        regex: Compiled full-match expression over Turkish-lowered text
        length: Exact length constraint, if any
    """

    def __init__(self, pattern: str, regex: "re.Pattern[str]", length: Optional[int] = None):
        self.pattern = pattern
        self.regex = regex
        self.length = length

    def matches(self, candidate: Any) -> bool:
        if not isinstance(candidate, str):
            return False
        folded = turkish_lower(candidate.strip())
        if self.length is not None and len(folded) != self.length:
            return False
        return self.regex.fullmatch(folded) is not None

    def filter(self, candidates: Iterable[Any]) -> List[str]:
        """Matching candidates in input order."""
        return [candidate for candidate in candidates if self.matches(candidate)]

    def __repr__(self) -> str:
        return f"WildcardMatcher(pattern={self.pattern!r}, length={self.length})"


def compile_wildcard(pattern: str) -> WildcardMatcher:
    """
    Compile a wildcard pattern.

    Raises:
        ValidationError: Empty pattern or a length clause below 1

    Example:
        >>> compile_wildcard("k*p,5").matches("kalıp")
        True
    """
    if not isinstance(pattern, str) or not pattern.strip():
        raise ValidationError(message="Arama deseni boş olamaz", details={"pattern": pattern})

    body = pattern.strip()
    length: Optional[int] = None

    clause = _LENGTH_CLAUSE.match(body)
    if clause:
        length = int(clause.group("length"))
        if length < 1:
            raise ValidationError(
                message="Uzunluk en az 1 olmalıdır",
                details={"pattern": pattern, "length": length},
            )
        body = clause.group("body").strip()

    if not body:
        raise ValidationError(message="Arama deseni boş olamaz", details={"pattern": pattern})

    parts = []
    for char in turkish_lower(body):
        if char == "?":
            parts.append(".")
        elif char == "*":
            parts.append(".*")
        else:
            parts.append(re.escape(char))

    return WildcardMatcher(pattern=pattern, regex=re.compile("".join(parts), re.DOTALL), length=length)


__all__ = [
    "CandidatePool",
    "WildcardMatcher",
    "compile_wildcard",
    "fragment_score",
    "rank_similar",
    "shares_fragment",
    "suggest_spelling",
]
