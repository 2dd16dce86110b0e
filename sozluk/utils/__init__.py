"""Text and retry utilities."""
from .text_utils import *
from .retry_utils import *

__all__ = [
    'TURKISH_LETTERS', 'turkish_lower', 'turkish_upper', 'normalize_term', 'tokenize_words',
    'RetryPolicy', 'Sleep',
]
