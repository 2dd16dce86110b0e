"""
Approximate matching: shared-fragment suggestions and wildcard patterns.
"""

import pytest

from sozluk.core.exceptions import ValidationError
from sozluk.services.matching_service import (
    CandidatePool,
    compile_wildcard,
    fragment_score,
    rank_similar,
    suggest_spelling,
)
from sozluk.tests.conftest import CANDIDATE_TERMS


@pytest.fixture
def pool():
    return CandidatePool.from_items(CANDIDATE_TERMS)


class TestCandidatePool:
    def test_dict_items_and_duplicates(self):
        pool = CandidatePool.from_items(
            [{"kelime": "kalem"}, {"madde": "kitap"}, "KALEM", {"aramaSayisi": 3}, None]
        )
        assert pool.terms == ["kalem", "kitap"]

    def test_starting_with_folds_turkish_case(self, pool):
        assert pool.starting_with("İ").terms == ["İstanbul"]
        assert pool.starting_with("I").terms == ["ışık"]


class TestSpellingSuggestion:
    def test_prefix_and_middle_rules_in_pool_order(self):
        pool = CandidatePool.from_items(["kalem", "kitabe", "okitapu", "kitap", "ktp"])
        suggestions = suggest_spelling("kitab", pool)

        assert [s.term for s in suggestions] == ["kitabe", "okitapu", "kitap"]
        assert [s.rank for s in suggestions] == [1, 2, 3]
        assert suggestions[1].score < suggestions[0].score

    def test_input_excluded(self, pool):
        assert "kitap" not in [s.term for s in suggest_spelling("kitap", pool)]

    def test_limit(self, pool):
        assert len(suggest_spelling("a", pool, limit=3)) == 3

    def test_empty_pool(self):
        assert suggest_spelling("kitap", CandidatePool()) == []

    def test_short_term_uses_prefix_only(self):
        assert fragment_score("k", "ak") == 0.0
        assert fragment_score("k", "kap") == 1.0


class TestSimilarityRanking:
    def test_excludes_self(self, pool):
        terms = [c.term for c in rank_similar("sevgi", pool, 5)]
        assert "sevgi" not in terms
        assert terms == ["sevgili", "sevinç"]

    def test_restricted_to_first_letter(self):
        pool = CandidatePool.from_items(["özevgi", "sevgili", "yevgi"])
        assert [c.term for c in rank_similar("sevgi", pool, 10)] == ["sevgili"]

    def test_deterministic(self, pool):
        first = rank_similar("kalem", pool, 10)
        second = rank_similar("kalem", pool, 10)
        assert first == second

    def test_empty_pool(self):
        assert rank_similar("sevgi", CandidatePool(), 5) == []


class TestWildcard:
    def test_question_mark_is_one_character(self):
        matcher = compile_wildcard("k?tap")
        assert matcher.matches("kitap")
        assert matcher.matches("katap")
        assert not matcher.matches("kiitap")
        assert not matcher.matches("ktap")

    def test_star_with_length_clause(self):
        matcher = compile_wildcard("k*p,5")
        assert matcher.length == 5
        assert matcher.matches("kitap")
        assert matcher.matches("kalıp")
        assert not matcher.matches("kap")
        assert not matcher.matches("kitapp")
        assert not matcher.matches("kitabe")

    def test_turkish_case_insensitive(self):
        matcher = compile_wildcard("İST*")
        assert matcher.matches("istanbul")
        assert matcher.matches("İSTANBUL")
        assert not compile_wildcard("ı*").matches("ikra")

    def test_regex_metacharacters_are_literal(self):
        assert not compile_wildcard("k.p").matches("kap")
        assert compile_wildcard("k.p").matches("k.p")

    def test_matcher_is_reusable(self):
        matcher = compile_wildcard("s*")
        assert matcher.filter(CANDIDATE_TERMS) == ["sevgi", "sevgili", "sevinç", "ses", "su", "sanat"]
        assert matcher.filter(["su", "ay"]) == ["su"]

    @pytest.mark.parametrize("pattern", ["", "   ", ",5", "k*,0", "k*,-2", None])
    def test_invalid_patterns(self, pattern):
        with pytest.raises(ValidationError):
            compile_wildcard(pattern)
