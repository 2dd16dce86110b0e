"""
Merge Engine - per-source payloads into one AggregatedRecord.

Source-specific extraction rules:
    general        → headword, origin language, proper-noun/plural flags,
                     numbered senses (text, examples, grammatical category),
                     compound words
    proverbs, idioms, compiled, terminology, foreign, guide, etymology
                   → carried through as ordered lists
    pronunciation  → audio file, pronunciation text, listening link

A failed leg leaves its field at the default (empty tuple, or None for the
headword and pronunciation); the merge never aborts because of a sibling.
``complete`` is the logical AND over every leg's success.

Payload conventions of the remote service:
    - ``{"error": "..."}`` answers "no result" and merges as an empty list
    - a bare object is carried as a one-element list
"""

from typing import Any, Optional
from urllib.parse import quote

from sozluk.adapters.sources import SubDictionary
from sozluk.core.constants import (
    COMPOUND_DELIMITER,
    DEFAULT_BASE_URL,
    GRAMMATICAL_CATEGORY_ORDER,
    NO_RESULT_KEY,
)
from sozluk.core.logging import get_logger
from sozluk.core.models import (
    AggregatedRecord,
    FanOut,
    Headword,
    LookupKey,
    Pronunciation,
    Sense,
    SourceOutcome,
)

logger = get_logger(__name__)


# Record field receiving each carried-through list source
LIST_FIELDS: dict[str, str] = {
    SubDictionary.PROVERBS.value: "proverbs",
    SubDictionary.IDIOMS.value: "idioms",
    SubDictionary.COMPILED.value: "compiled",
    SubDictionary.TERMINOLOGY.value: "terminology",
    SubDictionary.FOREIGN.value: "foreign",
    SubDictionary.GUIDE.value: "guide",
    SubDictionary.ETYMOLOGY.value: "etymology",
}


# =============================================================================
# PAYLOAD HELPERS
# =============================================================================


def coerce_entries(payload: Any) -> list[Any]:
    """
    Normalize a payload into an ordered list of entries.

    Example:
        >>> coerce_entries({"error": "Sonuç bulunamadı"})
        []
        >>> coerce_entries({"madde": "kalem"})
        [{'madde': 'kalem'}]
    """
    if payload is None:
        return []
    if isinstance(payload, list):
        return list(payload)
    if isinstance(payload, dict):
        if NO_RESULT_KEY in payload:
            return []
        return [payload]
    return []


def _as_list(value: Any) -> list[Any]:
    """Payload field expected to be a list; anything else counts as empty."""
    return value if isinstance(value, list) else []


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "evet"}
    return bool(value)


def split_compounds(raw: Any) -> tuple[str, ...]:
    """
    Example:
        >>> split_compounds("kurşun kalem, dolma kalem,, ")
        ('kurşun kalem', 'dolma kalem')
    """
    if not isinstance(raw, str):
        return ()
    parts = (part.strip() for part in raw.split(COMPOUND_DELIMITER))
    return tuple(part for part in parts if part)


def grammatical_category(sense: dict[str, Any]) -> Optional[str]:
    """
    First category marker (noun, adjective, adverb, verb, preposition,
    conjunction, interjection) found in the sense's property names.
    """
    names = [
        prop.get("tam_adi")
        for prop in _as_list(sense.get("ozelliklerListe"))
        if isinstance(prop, dict) and isinstance(prop.get("tam_adi"), str)
    ]
    for marker in GRAMMATICAL_CATEGORY_ORDER:
        if any(marker in name for name in names):
            return marker
    return None


def _examples(sense: dict[str, Any]) -> tuple[str, ...]:
    examples = []
    for item in _as_list(sense.get("orneklerListe")):
        if isinstance(item, dict) and item.get("ornek"):
            examples.append(item["ornek"])
        elif isinstance(item, str) and item:
            examples.append(item)
    return tuple(examples)


# =============================================================================
# MERGE ENGINE
# =============================================================================


class MergeEngine:
    """
    Merges one fan-out into an ``AggregatedRecord``.

    Args:
        base_url: Base address used to build default pronunciation links
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL):
        self.base_url = base_url if base_url.endswith("/") else f"{base_url}/"

    def merge(self, key: LookupKey, fanout: FanOut) -> AggregatedRecord:
        fields: dict[str, Any] = {}

        for outcome in fanout.outcomes:
            if not outcome.ok:
                continue
            self._apply(key, outcome, fields)

        failed = tuple(
            (outcome.source, outcome.error_kind.value)
            for outcome in fanout.outcomes
            if not outcome.ok
        )

        return AggregatedRecord(
            term=key.term,
            dictionaries_queried=tuple(outcome.source for outcome in fanout.outcomes),
            failed_sources=failed,
            sources_succeeded=len(fanout.outcomes) - len(failed),
            complete=not failed,
            elapsed_ms=fanout.elapsed_ms,
            **fields,
        )

    def _apply(self, key: LookupKey, outcome: SourceOutcome, fields: dict[str, Any]) -> None:
        source = outcome.source

        if source == SubDictionary.GENERAL.value:
            fields.update(self.extract_primary(outcome.payload))
        elif source == SubDictionary.PRONUNCIATION.value:
            fields["pronunciation"] = self.extract_pronunciation(key.term, outcome.payload)
        elif source in LIST_FIELDS:
            fields[LIST_FIELDS[source]] = tuple(coerce_entries(outcome.payload))
        else:
            logger.debug("No merge rule for source", source=source)

    # =========================================================================
    # SOURCE-SPECIFIC EXTRACTION
    # =========================================================================

    def extract_primary(self, payload: Any) -> dict[str, Any]:
        """
        Headword, senses and compounds from the first primary entry.

        Returns:
            dict: Record fields; empty when there is no entry
        """
        entries = [entry for entry in coerce_entries(payload) if isinstance(entry, dict)]
        if not entries:
            return {}

        entry = entries[0]

        headword = Headword(
            headword=entry.get("madde") or "",
            origin_language=entry.get("lisan") or None,
            is_proper_noun=_flag(entry.get("ozel_mi")),
            is_plural=_flag(entry.get("cogul_mu")),
            compounds_raw=entry.get("birlesikler"),
        )

        senses = tuple(
            Sense(
                order=index,
                text=sense.get("anlam") or "",
                examples=_examples(sense),
                category=grammatical_category(sense),
                verbs=tuple(_as_list(sense.get("fiiller"))),
                proverbs=tuple(_as_list(sense.get("atasozleri"))),
            )
            for index, sense in enumerate(
                (s for s in _as_list(entry.get("anlamlarListe")) if isinstance(s, dict)),
                start=1,
            )
        )

        categories: list[str] = []
        for sense in senses:
            if sense.category and sense.category not in categories:
                categories.append(sense.category)

        return {
            "headword": headword,
            "senses": senses,
            "examples": tuple(example for sense in senses for example in sense.examples),
            "usage_categories": tuple(categories),
            "compounds": split_compounds(entry.get("birlesikler")),
        }

    def extract_pronunciation(self, term: str, payload: Any) -> Optional[Pronunciation]:
        entries = [entry for entry in coerce_entries(payload) if isinstance(entry, dict)]
        if not entries:
            return None

        data = entries[0]
        return Pronunciation(
            term=term,
            audio_file=data.get("sesDosyasi"),
            pronunciation=data.get("telaffuz"),
            link=data.get("link") or f"{self.base_url}ses/{quote(term)}",
        )


__all__ = [
    "LIST_FIELDS",
    "MergeEngine",
    "coerce_entries",
    "split_compounds",
    "grammatical_category",
]
