"""
Adapters for the remote dictionary service.

- transport: httpx request/response collaborator
- sources: sub-dictionary registry and query construction
"""

from sozluk.adapters.sources import (
    DEFAULT_LOOKUP_SOURCES,
    LOOKUP_SOURCES,
    SourceRegistry,
    SourceSpec,
    SubDictionary,
    get_registry,
)
from sozluk.adapters.transport import HttpTransport, Transport, TransportResponse

__all__ = [
    "DEFAULT_LOOKUP_SOURCES",
    "LOOKUP_SOURCES",
    "SourceRegistry",
    "SourceSpec",
    "SubDictionary",
    "get_registry",
    "HttpTransport",
    "Transport",
    "TransportResponse",
]
