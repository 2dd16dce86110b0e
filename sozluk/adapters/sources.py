"""
Sub-dictionary Registry

Central registry of the sub-dictionaries exposed by the remote dictionary
service. Maps stable source names to endpoints and fixed query parameters,
and builds the ``SourceQuery`` for each leg of a lookup.

Supported Sources:
    Lookup legs (default fan-out):
        - general      (gts)         Güncel Türkçe Sözlük, primary dictionary
        - proverbs     (atasozu)     Atasözleri
        - idioms       (deyim)       Deyimler
        - compiled     (derleme)     Derleme Sözlüğü
        - terminology  (terim)       Terim sözlükleri, all works
        - foreign      (bati)        Batı kökenli kelimelere karşılıklar
        - guide        (kilavuz)     Yazım kılavuzu
        - etymology    (etms)        Etimolojik sözlük

    Optional legs:
        - pronunciation (ses)        Sesli telaffuz

    Term-less:
        - daily        (gunun-sozu)  Günün sözü
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from sozluk.core.constants import SEARCH_PARAM
from sozluk.core.exceptions import ValidationError
from sozluk.core.models import SourceQuery


class SubDictionary(str, Enum):
    """Stable names of the sub-dictionaries."""

    GENERAL = "general"
    PROVERBS = "proverbs"
    IDIOMS = "idioms"
    COMPILED = "compiled"
    TERMINOLOGY = "terminology"
    FOREIGN = "foreign"
    GUIDE = "guide"
    ETYMOLOGY = "etymology"
    PRONUNCIATION = "pronunciation"
    DAILY = "daily"


@dataclass(frozen=True)
class SourceSpec:
    """Endpoint metadata for one sub-dictionary."""

    name: SubDictionary
    endpoint: str
    display_name: str
    fixed_params: Tuple[Tuple[str, str], ...] = ()
    takes_term: bool = True
    description: str = ""


_SPECS: Tuple[SourceSpec, ...] = (
    SourceSpec(
        name=SubDictionary.GENERAL,
        endpoint="gts",
        display_name="Güncel Türkçe Sözlük",
        description="Primary dictionary: headword, senses, compounds",
    ),
    SourceSpec(
        name=SubDictionary.PROVERBS,
        endpoint="atasozu",
        display_name="Atasözleri",
    ),
    SourceSpec(
        name=SubDictionary.IDIOMS,
        endpoint="deyim",
        display_name="Deyimler",
    ),
    SourceSpec(
        name=SubDictionary.COMPILED,
        endpoint="derleme",
        display_name="Derleme Sözlüğü",
    ),
    SourceSpec(
        name=SubDictionary.TERMINOLOGY,
        endpoint="terim",
        display_name="Terim Sözlükleri",
        fixed_params=(("eser_ad", "tümü"),),
    ),
    SourceSpec(
        name=SubDictionary.FOREIGN,
        endpoint="bati",
        display_name="Batı Kökenli Kelimelere Karşılıklar",
    ),
    SourceSpec(
        name=SubDictionary.GUIDE,
        endpoint="kilavuz",
        display_name="Yazım Kılavuzu",
        fixed_params=(("prm", "ysk"),),
    ),
    SourceSpec(
        name=SubDictionary.ETYMOLOGY,
        endpoint="etms",
        display_name="Etimolojik Sözlük",
    ),
    SourceSpec(
        name=SubDictionary.PRONUNCIATION,
        endpoint="ses",
        display_name="Sesli Telaffuz",
    ),
    SourceSpec(
        name=SubDictionary.DAILY,
        endpoint="gunun-sozu",
        display_name="Günün Sözü",
        takes_term=False,
    ),
)

DEFAULT_LOOKUP_SOURCES: Tuple[SubDictionary, ...] = (
    SubDictionary.GENERAL,
    SubDictionary.PROVERBS,
    SubDictionary.IDIOMS,
    SubDictionary.COMPILED,
    SubDictionary.TERMINOLOGY,
    SubDictionary.FOREIGN,
    SubDictionary.GUIDE,
    SubDictionary.ETYMOLOGY,
)

LOOKUP_SOURCES: Tuple[SubDictionary, ...] = DEFAULT_LOOKUP_SOURCES + (
    SubDictionary.PRONUNCIATION,
)
"""Sources accepted in a lookup's option list."""


class SourceRegistry:
    """
    Registry of sub-dictionary endpoints.

    Names resolve case-insensitively from the stable name or the endpoint.
    """

    def __init__(self, specs: Iterable[SourceSpec] = _SPECS):
        self._specs: Dict[SubDictionary, SourceSpec] = {}
        self._aliases: Dict[str, SubDictionary] = {}
        for spec in specs:
            self.register(spec)

    def register(self, spec: SourceSpec) -> None:
        self._specs[spec.name] = spec
        self._aliases[spec.name.value] = spec.name
        self._aliases[spec.endpoint] = spec.name

    def get(self, name: SubDictionary) -> SourceSpec:
        return self._specs[name]

    def resolve(self, name: str) -> SubDictionary:
        """
        Resolve a caller-supplied name.

        Raises:
            ValidationError: Unknown name
        """
        key = name.strip().lower() if isinstance(name, str) else ""
        if key not in self._aliases:
            raise ValidationError(
                message=f"Bilinmeyen sözlük: {name}",
                details={"source": name, "known": sorted(s.value for s in self._specs)},
            )
        return self._aliases[key]

    def resolve_lookup_sources(
        self,
        names: Optional[Iterable[str]],
        include_pronunciation: bool = False,
    ) -> Tuple[SubDictionary, ...]:
        """
        Resolve the ordered, de-duplicated legs of a lookup.

        ``None`` or an empty selection means the default set. Pronunciation
        is appended when requested.

        Raises:
            ValidationError: Unknown name or a term-less source
        """
        resolved: List[SubDictionary] = []
        for name in names or ():
            source = self.resolve(name)
            if source not in LOOKUP_SOURCES:
                raise ValidationError(
                    message=f"Bu sözlük kelime aramasında kullanılamaz: {name}",
                    details={"source": name},
                )
            if source not in resolved:
                resolved.append(source)

        if not resolved:
            resolved = list(DEFAULT_LOOKUP_SOURCES)

        if include_pronunciation and SubDictionary.PRONUNCIATION not in resolved:
            resolved.append(SubDictionary.PRONUNCIATION)

        return tuple(resolved)

    def build_query(self, name: SubDictionary, term: Optional[str] = None) -> SourceQuery:
        """Build the immutable query for one leg."""
        spec = self._specs[name]
        params = list(spec.fixed_params)
        if spec.takes_term:
            params.append((SEARCH_PARAM, term or ""))
        return SourceQuery(source=spec.name.value, path=spec.endpoint, params=tuple(params))

    def list_sources(self) -> List[SourceSpec]:
        return list(self._specs.values())


# Global registry instance
_registry: Optional[SourceRegistry] = None


def get_registry() -> SourceRegistry:
    """Get global source registry instance."""
    global _registry
    if _registry is None:
        _registry = SourceRegistry()
    return _registry


__all__ = [
    "SubDictionary",
    "SourceSpec",
    "SourceRegistry",
    "DEFAULT_LOOKUP_SOURCES",
    "LOOKUP_SOURCES",
    "get_registry",
]
