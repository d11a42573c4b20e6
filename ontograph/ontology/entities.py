"""
ontograph Ontology Entities
===========================
Immutable value objects produced by ingestion and held by OntologyStore.

Version: 1.0.0
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ontograph.ontology.identifiers import CrossReference, Identifier
from ontograph.ontology.vocabulary import EdgeKind, Predicate, PropertyKind, SynonymScope


# =============================================================================
# Annotations
# =============================================================================
@dataclass(frozen=True)
class PredicateValue:
    """A (predicate, value) annotation on the ontology or on a term"""
    predicate: Predicate
    value: str

    @property
    def is_alternate_id(self) -> bool:
        return self.predicate is Predicate.HAS_ALTERNATIVE_ID


@dataclass(frozen=True)
class Property:
    """A PROPERTY node declared by the ontology"""
    kind: PropertyKind
    source_id: str

    @property
    def label(self) -> str:
        return self.kind.label


@dataclass(frozen=True)
class Synonym:
    predicate: str
    label: str

    @property
    def scope(self) -> SynonymScope:
        return SynonymScope.from_predicate(self.predicate)

    @property
    def is_exact(self) -> bool:
        return self.scope is SynonymScope.EXACT


# =============================================================================
# Term
# =============================================================================
@dataclass(frozen=True)
class Term:
    """
    Ontology concept

    Attributes:
        id: canonical identifier
        label: display name ("" when the source had none)
        definition: free-text definition
        definition_xrefs: citations backing the definition
        xrefs: general cross-references
        synonyms: alternative labels
        alternative_ids: secondary identifiers resolving to this term
        predicate_values: remaining basicPropertyValues annotations
        obsolete: deprecated in the source ontology
    """
    id: Identifier
    label: str = ""
    definition: Optional[str] = None
    definition_xrefs: Tuple[CrossReference, ...] = ()
    xrefs: Tuple[CrossReference, ...] = ()
    synonyms: Tuple[Synonym, ...] = ()
    alternative_ids: Tuple[Identifier, ...] = ()
    predicate_values: Tuple[PredicateValue, ...] = ()
    obsolete: bool = False

    @property
    def has_alternative_ids(self) -> bool:
        return bool(self.alternative_ids)

    @property
    def all_ids(self) -> Tuple[Identifier, ...]:
        """Canonical id first, then alternates"""
        return (self.id,) + self.alternative_ids


# =============================================================================
# Edge
# =============================================================================
@dataclass(frozen=True)
class Edge:
    """
    Directed typed edge between two identifiers

    `inferred` marks edges synthesized during ingestion rather than read
    from the source document.
    """
    source: Identifier
    destination: Identifier
    kind: EdgeKind
    inferred: bool = False

    def inverse(self) -> "Edge":
        return Edge(self.destination, self.source, EdgeKind.IS_A_INVERSE, inferred=True)

    def __str__(self) -> str:
        return f"{self.source} {self.kind.value} {self.destination}"


__all__ = [
    "PredicateValue",
    "Property",
    "Synonym",
    "Term",
    "Edge",
]
