"""
Text Processing Utilities

Turkish-aware text handling for dictionary lookups.

Features:
    - Turkish case folding (İ→i, I→ı) that ``str.lower`` gets wrong
    - Search term canonicalization into a stable lookup key
    - Whitespace tokenization for spell checking
"""

import re
import unicodedata
from typing import Any, List


# ============================================================================
# TURKISH CASE MAPS
# ============================================================================

TURKISH_LOWER_MAP = str.maketrans({"İ": "i", "I": "ı"})
TURKISH_UPPER_MAP = str.maketrans({"i": "İ", "ı": "I"})

TURKISH_LETTERS = "çğıöşüÇĞİÖŞÜ"

_DISALLOWED_CHARS = re.compile(rf"[^\w\s{TURKISH_LETTERS}\-]")
_WHITESPACE = re.compile(r"\s+")


# ============================================================================
# CASE FOLDING
# ============================================================================

def turkish_lower(text: str) -> str:
    """
    Lower-case text with Turkish rules for the dotted/dotless I pair.

    Example:
        >>> turkish_lower("IŞIK İSTANBUL")
        'ışık istanbul'
    """
    return text.translate(TURKISH_LOWER_MAP).lower()


def turkish_upper(text: str) -> str:
    """
    Upper-case text with Turkish rules for the dotted/dotless I pair.

    Example:
        >>> turkish_upper("ışık istanbul")
        'IŞIK İSTANBUL'
    """
    return text.translate(TURKISH_UPPER_MAP).upper()


# ============================================================================
# NORMALIZATION
# ============================================================================

def normalize_term(text: Any) -> str:
    """
    Canonicalize a raw search term into a stable lookup key.

    Steps: NFKC normalization, Turkish lower-casing, removal of everything
    except word characters, Turkish letters, hyphens and whitespace, a second
    NFKC pass (removals can leave composable neighbours, e.g. Hangul jamo),
    then whitespace collapsing and trimming. Pure and idempotent.

    Args:
        text: Raw input; anything that is not a string yields ""

    Returns:
        Normalized term ("" means invalid input)

    Example:
        >>> normalize_term("  İSTANBUL'un   güzel  ")
        'istanbulun güzel'
    """
    if not isinstance(text, str) or not text:
        return ""

    text = unicodedata.normalize("NFKC", text)
    text = turkish_lower(text)
    text = _DISALLOWED_CHARS.sub("", text)
    text = unicodedata.normalize("NFKC", text)
    text = _WHITESPACE.sub(" ", text)
    return text.strip()


def tokenize_words(text: str) -> List[str]:
    """
    Split text on whitespace runs, dropping empty tokens.

    Example:
        >>> tokenize_words("  kitap  okuyorum ")
        ['kitap', 'okuyorum']
    """
    return [token for token in _WHITESPACE.split(text) if token.strip()]


__all__ = [
    "TURKISH_LETTERS",
    "turkish_lower",
    "turkish_upper",
    "normalize_term",
    "tokenize_words",
]
