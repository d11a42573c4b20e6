"""
ontograph Identifier Model
==========================
Normalised PREFIX:LOCAL concept identifiers (CURIEs) and cross-references.

Accepted raw forms:
- CURIEs: HP:0001250, MONDO:0007739
- Underscore ids: HP_0001250 (normalised to HP:0001250)
- Path-style ids: obo/HP_0001250, orcid.org/0000-0001-5208-3432
- URLs (via Identifier.from_url): http://purl.obolibrary.org/obo/HP_0001250,
  http://identifiers.org/hgnc/2214
- ICD10 codes without separator: ICD10Q87.1

Version: 1.0.0
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from ontograph.core.exceptions import MalformedIdentifier


_URL_MARKERS = ("http://", "https://")


# =============================================================================
# Identifier
# =============================================================================
@dataclass(frozen=True, order=True)
class Identifier:
    """
    Immutable concept identifier

    Equality, hashing and ordering use the normalised value only, so an
    Identifier is safe as a dict key and as a sort key. Build instances with
    Identifier.parse / Identifier.from_url. Direct construction only accepts a
    value parse would return unchanged: a non-empty PREFIX:LOCAL pair whose
    prefix has no path component.
    """
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise MalformedIdentifier(self.value)
        prefix, sep, local = self.value.partition(":")
        if not sep or not prefix or not local or "/" in prefix:
            raise MalformedIdentifier(self.value)

    # =========================================================================
    # Accessors
    # =========================================================================
    @property
    def prefix(self) -> str:
        """Substring before the separator (e.g. "HP")"""
        return self.value.partition(":")[0]

    @property
    def local(self) -> str:
        """Substring after the separator (e.g. "0001250")"""
        return self.value.partition(":")[2]

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Identifier({self.value!r})"

    # =========================================================================
    # Factories
    # =========================================================================
    @classmethod
    def parse(cls, raw: Any) -> "Identifier":
        """
        Normalise a raw identifier string

        Raises:
            MalformedIdentifier: no separator and no known scheme matched
        """
        if not isinstance(raw, str) or not raw:
            raise MalformedIdentifier(raw)

        candidate = raw
        slash = candidate.rfind("/")
        colon = candidate.find(":")
        if slash != -1 and (colon == -1 or slash < colon):
            candidate = candidate[slash + 1:]

        if ":" in candidate:
            return cls._normalised(candidate, raw)

        underscore = candidate.find("_")
        if underscore != -1:
            return cls._normalised(f"{candidate[:underscore]}:{candidate[underscore + 1:]}", raw)

        # Scheme recognisers look at the raw string
        if "orcid.org/" in raw:
            return cls._normalised(f"ORCID:{candidate}", raw)

        hgnc = raw.find("hgnc/")
        if hgnc != -1:
            return cls._normalised(f"HGNC:{raw[hgnc + len('hgnc/'):]}", raw)

        if raw.startswith("ICD10"):
            return cls._normalised(f"ICD10:{raw[len('ICD10'):]}", raw)

        raise MalformedIdentifier(raw)

    @classmethod
    def from_url(cls, url: Any) -> "Identifier":
        """
        Normalise an IRI such as http://purl.obolibrary.org/obo/HP_0001250

        Raises:
            MalformedIdentifier: no path segment or the segment is not an id
        """
        if not isinstance(url, str) or not url:
            raise MalformedIdentifier(url, "Malformed term id URL")

        hgnc = url.find("hgnc/")
        if hgnc != -1:
            return cls._normalised(f"HGNC:{url[hgnc + len('hgnc/'):]}", url)

        orcid = url.find("orcid.org/")
        if orcid != -1:
            return cls._normalised(f"ORCID:{url[orcid + len('orcid.org/'):]}", url)

        slash = url.rfind("/")
        if slash == -1:
            raise MalformedIdentifier(url, "Malformed term id URL")

        return cls.parse(url[slash + 1:])

    @classmethod
    def _normalised(cls, value: str, raw: Any) -> "Identifier":
        # Report the caller's string, not the intermediate candidate
        try:
            return cls(value)
        except MalformedIdentifier:
            raise MalformedIdentifier(raw) from None

    @classmethod
    def resolve(cls, raw: Any) -> "Identifier":
        """Parse either a bare identifier or an http(s) URL"""
        if isinstance(raw, str) and any(marker in raw for marker in _URL_MARKERS):
            return cls.from_url(raw)
        return cls.parse(raw)


# =============================================================================
# Cross-References
# =============================================================================
class XrefOrigin(str, Enum):
    """Where a cross-reference was cited"""
    DEFINITION = "definition"  # meta.definition.xrefs
    ANNOTATION = "annotation"  # meta.xrefs


@dataclass(frozen=True)
class CrossReference:
    """An identifier cited by a term's definition or metadata"""
    identifier: Identifier
    origin: XrefOrigin = XrefOrigin.ANNOTATION

    @classmethod
    def parse(cls, raw: Any, origin: XrefOrigin = XrefOrigin.ANNOTATION) -> "CrossReference":
        return cls(Identifier.resolve(raw), origin)

    @property
    def value(self) -> str:
        return self.identifier.value

    def __str__(self) -> str:
        return f"[{self.origin.value}-xref] {self.identifier}"


__all__ = [
    "Identifier",
    "XrefOrigin",
    "CrossReference",
]
