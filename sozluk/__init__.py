"""
Sözlük - resilient aggregation client for the Turkish dictionary service.

Usage:
    >>> from sozluk import DictionaryService
    >>>
    >>> async with DictionaryService() as service:
    ...     record = await service.lookup("merhaba")
    ...     print(record.complete, len(record.senses))
"""
from sozluk.core.version import __version__
from sozluk.services.dictionary_service import DictionaryService

__all__ = ["__version__", "DictionaryService"]
