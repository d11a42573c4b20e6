"""
ontograph Annotation Vocabularies
=================================
Closed enumerations and string registries for ontology JSON annotations.

- Predicate: the `pred` of a basicPropertyValues entry (term or ontology level)
- PropertyKind: PROPERTY nodes such as "UK spelling" or "abbreviation", used to
  qualify other elements (mostly synonyms)
- EdgeKind: relation of an edge; only is_a is distinguished
- SynonymScope: exactness classification of a synonym `pred`

Version: 1.0.0
"""
from __future__ import annotations

from enum import Enum
from typing import Dict


def _last_segment(raw: str) -> str:
    """Final path segment of an IRI (the whole string when there is no "/")"""
    return raw[raw.rfind("/") + 1:]


# =============================================================================
# Predicates
# =============================================================================
class Predicate(str, Enum):
    """
    Annotation predicates found in basicPropertyValues

    HAS_ALTERNATIVE_ID is reserved: its values are alternate identifiers of
    the annotated term, not generic annotations.
    """
    UNKNOWN = "unknown"
    CREATED_BY = "created_by"
    CREATION_DATE = "creation_date"
    HAS_OBO_NAMESPACE = "hasOBONamespace"
    HAS_ALTERNATIVE_ID = "hasAlternativeId"
    RDF_SCHEMA_COMMENT = "comment"
    DATE = "date"
    OWL_DEPRECATED = "deprecated"
    HAS_ONTOLOGY_ROOT_TERM = "IAO_0000700"
    IS_ANONYMOUS = "is_anonymous"
    CONSIDER = "consider"
    EDITOR_NOTES = "editor_notes"
    CREATOR = "creator"
    DESCRIPTION = "description"
    LICENSE = "license"
    RIGHTS = "rights"
    SUBJECT = "subject"
    TITLE = "title"
    DEFAULT_NAMESPACE = "default-namespace"
    LOGICAL_DEFINITION_VIEW_RELATION = "logical-definition-view-relation"
    SAVED_BY = "saved-by"
    CLOSE_MATCH = "closeMatch"
    EXACT_MATCH = "exactMatch"
    BROAD_MATCH = "broadMatch"
    NARROW_MATCH = "narrowMatch"
    EXCLUDED_SUBCLASS_OF = "excluded_subClassOf"
    SEE_ALSO = "seeAlso"
    IS_METADATA_TAG = "is_metadata_tag"
    SHORT_HAND = "shorthand"
    TERM_REPLACED_BY = "IAO_0100001"
    RELATED = "related"
    EXCLUDED_SYNONYM = "excluded_synonym"
    IS_CLASS_LEVEL = "is_class_level"
    PATHOGENESIS = "pathogenesis"
    NEVER_IN_TAXON = "RO_0002161"
    IN_TAXON = "RO_0002162"
    SOURCE = "source"
    HAS_OBO_FORMAT_VERSION = "hasOBOFormatVersion"
    HOMEPAGE = "homepage"

    @classmethod
    def from_string(cls, raw: str) -> "Predicate":
        """
        Resolve a predicate string; never raises

        Accepts the full IRI, its last path segment ("oboInOwl#hasOBONamespace")
        or the bare local name ("hasOBONamespace"). Unmatched -> UNKNOWN.
        """
        if not isinstance(raw, str) or not raw:
            return cls.UNKNOWN
        segment = _last_segment(raw)
        for key in (raw, segment, segment.rpartition("#")[2]):
            predicate = _PREDICATE_REGISTRY.get(key)
            if predicate is not None:
                return predicate
        return cls.UNKNOWN


_PREDICATE_REGISTRY: Dict[str, Predicate] = {
    p.value: p for p in Predicate if p is not Predicate.UNKNOWN
}
# Spellings seen in released ontologies besides the canonical local names
_PREDICATE_REGISTRY.update({
    "rdf-schema#comment": Predicate.RDF_SCHEMA_COMMENT,
    "owl#deprecated": Predicate.OWL_DEPRECATED,
    "has_ontology_root_term": Predicate.HAS_ONTOLOGY_ROOT_TERM,
    "default_namespace": Predicate.DEFAULT_NAMESPACE,
    "saved_by": Predicate.SAVED_BY,
    "replaced_by": Predicate.TERM_REPLACED_BY,
    "never_in_taxon": Predicate.NEVER_IN_TAXON,
    "in_taxon": Predicate.IN_TAXON,
})


# =============================================================================
# Properties
# =============================================================================
class PropertyKind(str, Enum):
    """
    Qualifiers declared by PROPERTY nodes

    Distinct from Predicate: these do not describe the ontology, they are
    attached to other elements (e.g. a synonym marked "UK spelling").
    """
    UK_SPELLING = "uk_spelling"
    ABBREVIATION = "abbreviation"
    PLURAL_FORM = "plural_form"
    LAYPERSON_TERM = "layperson"
    SECONDARY_CONSEQUENCE = "secondary_consequence"
    DISPLAY_LABEL = "display_label"
    HPO_SLIM = "hposlim_core"
    OBSOLETE_SYNONYM = "obsolete_synonym"
    DUBIOUS = "dubious"
    MAY_BE_MERGED_INTO = "may_be_merged_into"
    IN_TAXON = "RO_0002162"
    NEVER_IN_TAXON = "RO_0002161"
    UNKNOWN = "unknown"

    @property
    def label(self) -> str:
        return _PROPERTY_LABELS[self]

    @classmethod
    def from_id(cls, raw_id: str) -> "PropertyKind":
        """Resolve a PROPERTY node id by its final "#" or "/" segment; unmatched -> UNKNOWN"""
        if not isinstance(raw_id, str) or not raw_id:
            return cls.UNKNOWN
        key = _last_segment(raw_id).rpartition("#")[2]
        return _PROPERTY_REGISTRY.get(key, cls.UNKNOWN)


_PROPERTY_REGISTRY: Dict[str, PropertyKind] = {
    k.value: k for k in PropertyKind if k is not PropertyKind.UNKNOWN
}
_PROPERTY_REGISTRY.update({
    "UK_spelling": PropertyKind.UK_SPELLING,
    "layperson_term": PropertyKind.LAYPERSON_TERM,
    "hposlim": PropertyKind.HPO_SLIM,
})

_PROPERTY_LABELS: Dict[PropertyKind, str] = {
    PropertyKind.UK_SPELLING: "UK spelling",
    PropertyKind.ABBREVIATION: "abbreviation",
    PropertyKind.PLURAL_FORM: "plural form",
    PropertyKind.LAYPERSON_TERM: "layperson term",
    PropertyKind.SECONDARY_CONSEQUENCE: "Consequence of a disorder in another organ system.",
    PropertyKind.DISPLAY_LABEL: "display label",
    PropertyKind.HPO_SLIM: "HPO slim",
    PropertyKind.OBSOLETE_SYNONYM: "obsolete synonym",
    PropertyKind.DUBIOUS: "dubious",
    PropertyKind.MAY_BE_MERGED_INTO: "may be merged into",
    PropertyKind.IN_TAXON: "in taxon",
    PropertyKind.NEVER_IN_TAXON: "never in taxon",
    PropertyKind.UNKNOWN: "unknown property",
}


# =============================================================================
# Edge Kinds
# =============================================================================
class EdgeKind(str, Enum):
    """
    Edge relation kinds

    IS_A points child -> parent; IS_A_INVERSE is synthesized parent -> child
    so descendants can be walked without scanning the whole edge list.
    """
    IS_A = "is_a"
    IS_A_INVERSE = "is_a_inverse"
    UNKNOWN = "unknown"

    @property
    def code(self) -> int:
        """Small integer stored in the adjacency kind array"""
        return _EDGE_KIND_CODES[self]

    @classmethod
    def from_code(cls, code: int) -> "EdgeKind":
        return _EDGE_KINDS_BY_CODE[int(code)]

    @classmethod
    def from_relation(cls, pred: str) -> "EdgeKind":
        """Classify an edge `pred`; only is_a is distinguished"""
        if pred in _IS_A_RELATIONS:
            return cls.IS_A
        return cls.UNKNOWN


_EDGE_KIND_CODES: Dict[EdgeKind, int] = {kind: code for code, kind in enumerate(EdgeKind)}
_EDGE_KINDS_BY_CODE: Dict[int, EdgeKind] = {code: kind for kind, code in _EDGE_KIND_CODES.items()}

_IS_A_RELATIONS = frozenset({
    "is_a",
    "http://www.w3.org/2000/01/rdf-schema#subClassOf",
})


# =============================================================================
# Synonym Scope
# =============================================================================
class SynonymScope(str, Enum):
    """Exactness of a synonym, from its `pred` (hasExactSynonym, ...)"""
    EXACT = "hasExactSynonym"
    BROAD = "hasBroadSynonym"
    NARROW = "hasNarrowSynonym"
    RELATED = "hasRelatedSynonym"
    UNKNOWN = "unknown"

    @classmethod
    def from_predicate(cls, pred: str) -> "SynonymScope":
        if not isinstance(pred, str):
            return cls.UNKNOWN
        key = _last_segment(pred).rpartition("#")[2]
        try:
            return cls(key)
        except ValueError:
            return cls.UNKNOWN


__all__ = [
    "Predicate",
    "PropertyKind",
    "EdgeKind",
    "SynonymScope",
]
