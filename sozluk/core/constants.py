"""
Global constants for the Sözlük aggregation client.

Constants are organized by category:
- Application metadata
- Remote service
- Retry & timeouts
- Cache
- Dictionary payload conventions
- Approximate matching
- Error codes
"""
from typing import Final

from sozluk.core.version import __version__

# =============================================================================
# APPLICATION METADATA
# =============================================================================

APP_NAME: Final[str] = "Sözlük"
"""Application display name."""

APP_SLUG: Final[str] = "sozluk"
"""Application slug, also the settings environment prefix."""

APP_VERSION: Final[str] = __version__

ENV_PREFIX: Final[str] = "SOZLUK_"
"""Environment variable prefix for settings."""

# =============================================================================
# REMOTE SERVICE
# =============================================================================

DEFAULT_BASE_URL: Final[str] = "https://sozluk.gov.tr/"

DEFAULT_USER_AGENT: Final[str] = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

DEFAULT_ACCEPT_LANGUAGE: Final[str] = "tr-TR,tr;q=0.9,en-US;q=0.8,en;q=0.7"

SEARCH_PARAM: Final[str] = "ara"
"""Query parameter carrying the search term on every endpoint."""

NO_RESULT_KEY: Final[str] = "error"
"""Object key the remote service uses to answer "no result"."""

# =============================================================================
# RETRY & TIMEOUTS
# =============================================================================

DEFAULT_REQUEST_TIMEOUT: Final[float] = 15.0
DEFAULT_MAX_REDIRECTS: Final[int] = 5

DEFAULT_RETRY_MAX_ATTEMPTS: Final[int] = 3
"""First try plus two retries."""

DEFAULT_RETRY_BACKOFF: Final[float] = 0.5
DEFAULT_RETRY_BACKOFF_MAX: Final[float] = 4.0

# =============================================================================
# CACHE
# =============================================================================

CACHE_SHORT_TTL: Final[int] = 300
CACHE_MEDIUM_TTL: Final[int] = 1800
CACHE_LONG_TTL: Final[int] = 3600
CACHE_DAILY_TTL: Final[int] = 86400
CACHE_CHECK_PERIOD: Final[int] = 600

CACHE_KEY_SEPARATOR: Final[str] = ":"

LOOKUP_KEY_PREFIX: Final[str] = "lookup"
PROVERB_KEY_PREFIX: Final[str] = "proverbs"
LETTER_KEY_PREFIX: Final[str] = "letter"
POPULAR_KEY_PREFIX: Final[str] = "popular"
DAILY_WORD_KEY: Final[str] = "daily:word"

# =============================================================================
# DICTIONARY PAYLOAD CONVENTIONS
# =============================================================================

COMPOUND_DELIMITER: Final[str] = ","

GRAMMATICAL_CATEGORY_ORDER: Final[tuple[str, ...]] = (
    "isim",
    "sıfat",
    "zarf",
    "fiil",
    "edat",
    "bağlaç",
    "ünlem",
)
"""Category markers checked in priority order; the first match wins."""

MAX_BATCH_SIZE: Final[int] = 50

# =============================================================================
# APPROXIMATE MATCHING
# =============================================================================

DEFAULT_SUGGESTION_COUNT: Final[int] = 5
DEFAULT_SIMILAR_LIMIT: Final[int] = 10
DEFAULT_SIMILAR_POOL_SIZE: Final[int] = 50
DEFAULT_PAGE_SIZE: Final[int] = 50
DEFAULT_POPULAR_LIMIT: Final[int] = 20
CANDIDATE_UNIVERSE_LIMIT: Final[int] = 100

PREFIX_FRAGMENT_LENGTH: Final[int] = 3
MIDDLE_FRAGMENT_SLICE: Final[tuple[int, int]] = (1, 4)

POPULAR_TERMS: Final[tuple[str, ...]] = (
    "merhaba", "teşekkür", "sevgi", "aşk", "mutluluk", "kelime",
    "türkçe", "dil", "edebiyat", "şiir", "roman", "hikaye",
    "bilim", "teknoloji", "sanat", "müzik", "resim", "heykel",
    "doğa", "hayvan", "bitki", "ağaç", "çiçek", "su", "hava",
    "toprak", "güneş", "ay", "yıldız", "gezegen", "evren",
)
"""Seed list of popular search terms forming the default candidate universe."""

# =============================================================================
# ERROR CODES
# =============================================================================

ERR_INVALID_INPUT: Final[str] = "INVALID_INPUT"
ERR_TRANSPORT: Final[str] = "TRANSPORT_ERROR"
ERR_TIMEOUT: Final[str] = "TIMEOUT"
ERR_REMOTE: Final[str] = "REMOTE_ERROR"

HTTP_BAD_REQUEST: Final[int] = 400
HTTP_BAD_GATEWAY: Final[int] = 502
HTTP_SERVICE_UNAVAILABLE: Final[int] = 503
HTTP_GATEWAY_TIMEOUT: Final[int] = 504


__all__ = [
    "APP_NAME",
    "APP_SLUG",
    "APP_VERSION",
    "ENV_PREFIX",
    "DEFAULT_BASE_URL",
    "DEFAULT_USER_AGENT",
    "DEFAULT_ACCEPT_LANGUAGE",
    "SEARCH_PARAM",
    "NO_RESULT_KEY",
    "DEFAULT_REQUEST_TIMEOUT",
    "DEFAULT_MAX_REDIRECTS",
    "DEFAULT_RETRY_MAX_ATTEMPTS",
    "DEFAULT_RETRY_BACKOFF",
    "DEFAULT_RETRY_BACKOFF_MAX",
    "CACHE_SHORT_TTL",
    "CACHE_MEDIUM_TTL",
    "CACHE_LONG_TTL",
    "CACHE_DAILY_TTL",
    "CACHE_CHECK_PERIOD",
    "CACHE_KEY_SEPARATOR",
    "LOOKUP_KEY_PREFIX",
    "PROVERB_KEY_PREFIX",
    "LETTER_KEY_PREFIX",
    "POPULAR_KEY_PREFIX",
    "DAILY_WORD_KEY",
    "COMPOUND_DELIMITER",
    "GRAMMATICAL_CATEGORY_ORDER",
    "MAX_BATCH_SIZE",
    "DEFAULT_SUGGESTION_COUNT",
    "DEFAULT_SIMILAR_LIMIT",
    "DEFAULT_SIMILAR_POOL_SIZE",
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_POPULAR_LIMIT",
    "CANDIDATE_UNIVERSE_LIMIT",
    "PREFIX_FRAGMENT_LENGTH",
    "MIDDLE_FRAGMENT_SLICE",
    "POPULAR_TERMS",
    "ERR_INVALID_INPUT",
    "ERR_TRANSPORT",
    "ERR_TIMEOUT",
    "ERR_REMOTE",
    "HTTP_BAD_REQUEST",
    "HTTP_BAD_GATEWAY",
    "HTTP_SERVICE_UNAVAILABLE",
    "HTTP_GATEWAY_TIMEOUT",
]
