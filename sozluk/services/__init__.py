"""
Services of the Sözlük aggregation client.

- dispatcher: concurrent fan-out over sub-dictionaries
- merge_engine: per-source payloads into one record
- matching_service: spelling suggestions, similar words, wildcard search
- dictionary_service: public operations
"""

from sozluk.services.dictionary_service import DictionaryService
from sozluk.services.dispatcher import FanOutDispatcher
from sozluk.services.matching_service import (
    CandidatePool,
    WildcardMatcher,
    compile_wildcard,
    rank_similar,
    suggest_spelling,
)
from sozluk.services.merge_engine import MergeEngine

__all__ = [
    "DictionaryService",
    "FanOutDispatcher",
    "MergeEngine",
    "CandidatePool",
    "WildcardMatcher",
    "compile_wildcard",
    "rank_similar",
    "suggest_spelling",
]
