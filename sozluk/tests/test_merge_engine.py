"""
Merge engine: per-source extraction and partial-failure records.
"""

import pytest

from sozluk.adapters.sources import DEFAULT_LOOKUP_SOURCES, get_registry
from sozluk.core.exceptions import ErrorKind
from sozluk.core.models import FanOut, LookupKey, SourceOutcome
from sozluk.services.merge_engine import (
    MergeEngine,
    coerce_entries,
    grammatical_category,
    split_compounds,
)
from sozluk.tests.conftest import GENERAL_ENTRIES, NO_RESULT


SEVEN_SOURCES = DEFAULT_LOOKUP_SOURCES[1:]  # every leg except the primary dictionary


def make_fanout(term, results):
    """``results`` maps source name → payload, or → ErrorKind for a failed leg."""
    registry = get_registry()
    outcomes = []
    for name, result in results.items():
        query = registry.build_query(registry.resolve(name), term)
        if isinstance(result, ErrorKind):
            outcomes.append(SourceOutcome.failure(query, error_kind=result, error_message="x"))
        else:
            outcomes.append(SourceOutcome.success(query, result))
    return FanOut(outcomes=tuple(outcomes), started_at=10.0, finished_at=10.25)


def key_for(term, names):
    return LookupKey(term=term, sources=tuple(names))


@pytest.fixture
def engine():
    return MergeEngine(base_url="https://sozluk.gov.tr")


class TestPartialFailure:
    def test_three_of_seven_failing(self, engine):
        results = {
            "proverbs": [{"madde": "kalem kılıçtan keskindir"}],
            "idioms": ErrorKind.TIMEOUT,
            "compiled": [{"madde": "kalem"}],
            "terminology": ErrorKind.REMOTE,
            "foreign": [{"madde": "pencil"}],
            "guide": [{"sozu": "kalem"}],
            "etymology": ErrorKind.TRANSPORT,
        }
        assert tuple(results) == tuple(s.value for s in SEVEN_SOURCES)

        record = engine.merge(key_for("kalem", results), make_fanout("kalem", results))

        assert record.complete is False
        assert record.sources_succeeded == 4
        assert dict(record.failed_sources) == {
            "idioms": "timeout",
            "terminology": "remote",
            "etymology": "transport",
        }

        # Succeeded fields populated
        assert record.proverbs == ({"madde": "kalem kılıçtan keskindir"},)
        assert record.compiled == ({"madde": "kalem"},)
        assert record.foreign == ({"madde": "pencil"},)
        assert record.guide == ({"sozu": "kalem"},)

        # Failed fields present at their defaults
        data = record.to_dict()
        for field in ("idioms", "terminology", "etymology"):
            assert field in data
            assert data[field] == ()

    def test_failed_primary_leaves_headword_empty(self, engine):
        results = {"general": ErrorKind.TRANSPORT, "proverbs": NO_RESULT}
        record = engine.merge(key_for("kalem", results), make_fanout("kalem", results))

        assert record.headword is None
        assert record.senses == ()
        assert record.compounds == ()
        assert record.proverbs == ()
        assert record.complete is False

    def test_all_legs_succeeding_is_complete(self, engine):
        results = {"general": GENERAL_ENTRIES["merhaba"], "proverbs": NO_RESULT}
        record = engine.merge(key_for("merhaba", results), make_fanout("merhaba", results))

        assert record.complete is True
        assert record.failed_sources == ()
        assert record.dictionaries_queried == ("general", "proverbs")
        assert record.elapsed_ms == 250.0


class TestPrimaryExtraction:
    def test_headword_and_senses(self, engine):
        fields = engine.extract_primary(GENERAL_ENTRIES["kalem"])

        headword = fields["headword"]
        assert headword.headword == "kalem"
        assert headword.origin_language == "Arapça ḳalem"
        assert headword.is_proper_noun is False
        assert headword.is_plural is False

        senses = fields["senses"]
        assert [sense.order for sense in senses] == [1, 2]
        assert senses[0].examples == ("Kalemi masaya bıraktı.",)
        assert senses[0].category == "isim"
        assert fields["examples"] == ("Kalemi masaya bıraktı.",)
        assert fields["usage_categories"] == ("isim",)
        assert fields["compounds"] == ("kurşun kalem", "dolma kalem", "kalem açacağı")

    def test_uses_first_entry_only(self, engine):
        payload = [{"madde": "yüz", "ozel_mi": "1"}, {"madde": "yüz", "cogul_mu": "1"}]
        fields = engine.extract_primary(payload)

        assert fields["headword"].is_proper_noun is True
        assert fields["headword"].is_plural is False

    def test_no_result_payload(self, engine):
        assert engine.extract_primary(NO_RESULT) == {}

    @pytest.mark.parametrize(
        "entry",
        [
            {"madde": "kalem", "anlamlarListe": 5},
            {"madde": "kalem", "anlamlarListe": [{"anlam": "araç", "ozelliklerListe": 1}]},
            {"madde": "kalem", "anlamlarListe": [{"anlam": "araç", "orneklerListe": 7}]},
            {"madde": "kalem", "anlamlarListe": [{"anlam": "araç", "fiiller": "yazmak"}]},
        ],
    )
    def test_scalar_list_fields_count_as_empty(self, engine, entry):
        fields = engine.extract_primary([entry])

        assert fields["headword"].headword == "kalem"
        for sense in fields["senses"]:
            assert sense.examples == ()
            assert sense.category is None
            assert sense.verbs == ()


class TestPronunciation:
    def test_default_link(self, engine):
        pronunciation = engine.extract_pronunciation("kalem", {"telaffuz": "ka'lem"})

        assert pronunciation.pronunciation == "ka'lem"
        assert pronunciation.link == "https://sozluk.gov.tr/ses/kalem"

    def test_given_link_kept(self, engine):
        pronunciation = engine.extract_pronunciation(
            "kalem",
            [{"sesDosyasi": "k.wav", "link": "https://cdn.example/k.wav"}],
        )
        assert pronunciation.audio_file == "k.wav"
        assert pronunciation.link == "https://cdn.example/k.wav"

    def test_empty_payload(self, engine):
        assert engine.extract_pronunciation("kalem", NO_RESULT) is None


class TestPayloadHelpers:
    @pytest.mark.parametrize(
        "payload, expected",
        [
            (None, []),
            (NO_RESULT, []),
            ({"madde": "kalem"}, [{"madde": "kalem"}]),
            ([1, 2], [1, 2]),
        ],
    )
    def test_coerce_entries(self, payload, expected):
        assert coerce_entries(payload) == expected

    def test_split_compounds_drops_blanks(self):
        assert split_compounds(" a, ,b ,") == ("a", "b")
        assert split_compounds(None) == ()

    def test_category_priority(self):
        sense = {"ozelliklerListe": [{"tam_adi": "zarf"}, {"tam_adi": "sıfat"}]}
        assert grammatical_category(sense) == "sıfat"

    def test_category_absent(self):
        assert grammatical_category({"ozelliklerListe": [{"tam_adi": "mecaz"}]}) is None
