"""
Shared fixtures for the Sözlük test suite.

Remote calls never leave the process: ``FakeTransport`` answers every
endpoint from an in-memory route table, and retry delays are zero.
"""

import asyncio
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

import pytest

from sozluk.adapters.transport import TransportResponse
from sozluk.core.config.settings import Settings
from sozluk.core.exceptions import TransportError
from sozluk.services.dictionary_service import DictionaryService


NO_RESULT = {"error": "Sonuç bulunamadı"}


# =============================================================================
# SAMPLE PAYLOADS
# =============================================================================


GENERAL_ENTRIES: Dict[str, List[Dict[str, Any]]] = {
    "merhaba": [
        {
            "madde": "merhaba",
            "lisan": "Arapça marḥabā",
            "ozel_mi": "0",
            "cogul_mu": "0",
            "birlesikler": "merhabalaşmak, merhabalaşma",
            "anlamlarListe": [
                {
                    "anlam": "Karşılaşıldığında söylenen bir selamlaşma sözü",
                    "orneklerListe": [{"ornek": "Merhaba, nasılsınız?"}],
                    "ozelliklerListe": [{"tam_adi": "ünlem"}],
                },
                {
                    "anlam": "Selam",
                    "ozelliklerListe": [{"tam_adi": "isim"}],
                },
            ],
        }
    ],
    "kalem": [
        {
            "madde": "kalem",
            "lisan": "Arapça ḳalem",
            "ozel_mi": "0",
            "cogul_mu": "0",
            "birlesikler": "kurşun kalem, dolma kalem, kalem açacağı",
            "anlamlarListe": [
                {
                    "anlam": "Yazı yazmaya, çizim yapmaya yarayan araç",
                    "orneklerListe": [{"ornek": "Kalemi masaya bıraktı."}],
                    "ozelliklerListe": [{"tam_adi": "isim"}],
                },
                {
                    "anlam": "Resmî dairelerde yazı işlerinin yürütüldüğü bölüm",
                    "ozelliklerListe": [{"tam_adi": "isim"}, {"tam_adi": "mecaz"}],
                },
            ],
        }
    ],
    "kitap": [{"madde": "kitap", "anlamlarListe": [{"anlam": "Ciltli veya ciltsiz yapıt"}]}],
    "okuyorum": [{"madde": "okumak", "anlamlarListe": [{"anlam": "Bir yazıyı söylemek"}]}],
}

PROVERB_ENTRIES: Dict[str, List[Dict[str, Any]]] = {
    "kalem": [{"madde": "kalem kılıçtan keskindir"}],
}

IDIOM_ENTRIES: Dict[str, List[Dict[str, Any]]] = {
    "kalem": [{"madde": "kalem oynatmak"}, {"madde": "kaleme almak"}],
}

CANDIDATE_TERMS: Tuple[str, ...] = (
    "ağaç", "ay", "aşk", "anne", "araba", "ateş", "ayna", "akşam",
    "altın", "arı", "armut", "ayva", "ada", "ağız",
    "kitap", "katap", "kalıp", "kalem", "kap", "kitabe", "kütüphane",
    "sevgi", "sevgili", "sevinç", "ses", "su", "sanat",
    "İstanbul", "ışık", "merhaba",
)


def lookup_by_term(table: Mapping[str, Any]) -> Callable[[Dict[str, str]], Any]:
    """Route answering from ``table`` by the ``ara`` parameter."""

    def route(params: Dict[str, str]) -> Any:
        return table.get(params.get("ara", ""), NO_RESULT)

    return route


def healthy_routes() -> Dict[str, Any]:
    return {
        "gts": lookup_by_term(GENERAL_ENTRIES),
        "atasozu": lookup_by_term(PROVERB_ENTRIES),
        "deyim": lookup_by_term(IDIOM_ENTRIES),
        "derleme": NO_RESULT,
        "terim": [{"madde": "kalem", "anlam": "Terim anlamı"}],
        "bati": NO_RESULT,
        "kilavuz": [{"sozu": "kalem"}],
        "etms": {"madde": "kalem", "koken": "Arapça"},
        "ses": {"sesDosyasi": "k/kalem.wav", "telaffuz": "ka'lem"},
        "gunun-sozu": [{"madde": "sözcük", "anlam": "Kelime"}],
    }


# =============================================================================
# FAKE TRANSPORT
# =============================================================================


class FakeTransport:
    """
    In-memory ``Transport``.

    A route is a payload, a ready ``TransportResponse``, an exception instance
    (raised on every call) or a callable taking the query parameters and
    returning any of these. Unknown paths answer "no result".
    """

    def __init__(
        self,
        routes: Optional[Dict[str, Any]] = None,
        delays: Optional[Dict[str, float]] = None,
    ):
        self.routes = dict(routes or {})
        self.delays = dict(delays or {})
        self.calls: List[Tuple[str, Dict[str, str]]] = []

    async def get(self, path: str, params: Optional[Mapping[str, str]] = None) -> TransportResponse:
        params = dict(params or {})
        self.calls.append((path, params))

        delay = self.delays.get(path)
        if delay:
            await asyncio.sleep(delay)

        route = self.routes.get(path, NO_RESULT)
        if callable(route):
            route = route(params)
        if isinstance(route, BaseException):
            raise route
        if isinstance(route, TransportResponse):
            return route

        return TransportResponse(status=200, body=route)

    def calls_to(self, path: str) -> List[Dict[str, str]]:
        return [params for called, params in self.calls if called == path]


class FlakyRoute:
    """Route failing the first ``failures`` calls, then answering ``payload``."""

    def __init__(self, failures: int, payload: Any = NO_RESULT):
        self.failures = failures
        self.payload = payload
        self.calls = 0

    def __call__(self, params: Dict[str, str]) -> Any:
        self.calls += 1
        if self.calls <= self.failures:
            return TransportError(message="Bağlantı kurulamadı")
        return self.payload


async def no_sleep(delay: float) -> None:
    return None


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        RETRY_MAX_ATTEMPTS=3,
        RETRY_BACKOFF=0.0,
        RETRY_BACKOFF_MAX=0.0,
        CACHE_ENABLED=True,
        CACHE_PARTIAL_RESULTS=False,
        COALESCE_REQUESTS=True,
    )


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport(routes=healthy_routes())


@pytest.fixture
def service(test_settings, fake_transport) -> DictionaryService:
    return DictionaryService(
        settings=test_settings,
        transport=fake_transport,
        candidate_terms=CANDIDATE_TERMS,
        sleep=no_sleep,
    )
