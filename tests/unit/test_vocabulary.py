"""
Unit Tests for Annotation Vocabularies and Entities
===================================================
"""
import pytest

from ontograph.ontology.entities import Edge, PredicateValue, Property, Synonym, Term
from ontograph.ontology.identifiers import Identifier
from ontograph.ontology.vocabulary import EdgeKind, Predicate, PropertyKind, SynonymScope


# =============================================================================
# Test Predicate Registry
# =============================================================================
class TestPredicate:
    """Predicate.from_string"""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("hasOBONamespace", Predicate.HAS_OBO_NAMESPACE),
            ("oboInOwl#hasOBONamespace", Predicate.HAS_OBO_NAMESPACE),
            ("http://www.geneontology.org/formats/oboInOwl#hasAlternativeId", Predicate.HAS_ALTERNATIVE_ID),
            ("creator", Predicate.CREATOR),
            ("http://purl.org/dc/terms/license", Predicate.LICENSE),
            ("rdf-schema#comment", Predicate.RDF_SCHEMA_COMMENT),
            ("IAO_0100001", Predicate.TERM_REPLACED_BY),
            ("IAO_0000700", Predicate.HAS_ONTOLOGY_ROOT_TERM),
            ("RO_0002161", Predicate.NEVER_IN_TAXON),
            ("RO_0002162", Predicate.IN_TAXON),
            ("owl#deprecated", Predicate.OWL_DEPRECATED),
        ],
    )
    def test_known(self, raw, expected):
        assert Predicate.from_string(raw) is expected

    @pytest.mark.parametrize("raw", ["", "notAPredicate", "oboInOwl#nothing", None])
    def test_unknown_never_raises(self, raw):
        assert Predicate.from_string(raw) is Predicate.UNKNOWN


# =============================================================================
# Test Property Kinds
# =============================================================================
class TestPropertyKind:
    """PropertyKind.from_id"""

    def test_hash_fragment(self):
        kind = PropertyKind.from_id("http://purl.obolibrary.org/obo/hp#uk_spelling")
        assert kind is PropertyKind.UK_SPELLING
        assert kind.label == "UK spelling"

    def test_path_segment(self):
        assert PropertyKind.from_id("http://purl.obolibrary.org/obo/RO_0002162") is PropertyKind.IN_TAXON

    def test_unknown(self):
        assert PropertyKind.from_id("http://purl.obolibrary.org/obo/hp#mystery") is PropertyKind.UNKNOWN
        assert PropertyKind.from_id("") is PropertyKind.UNKNOWN

    def test_every_kind_has_label(self):
        for kind in PropertyKind:
            assert kind.label


# =============================================================================
# Test Edge Kinds
# =============================================================================
class TestEdgeKind:
    """EdgeKind"""

    def test_from_relation(self):
        assert EdgeKind.from_relation("is_a") is EdgeKind.IS_A
        assert EdgeKind.from_relation("http://www.w3.org/2000/01/rdf-schema#subClassOf") is EdgeKind.IS_A
        assert EdgeKind.from_relation("http://purl.obolibrary.org/obo/BFO_0000050") is EdgeKind.UNKNOWN

    def test_codes_are_distinct_and_reversible(self):
        codes = {kind.code for kind in EdgeKind}
        assert len(codes) == len(EdgeKind)
        for kind in EdgeKind:
            assert EdgeKind.from_code(kind.code) is kind


# =============================================================================
# Test Entities
# =============================================================================
class TestEntities:
    """Value objects"""

    def test_synonym_scope(self):
        exact = Synonym("hasExactSynonym", "Abnormal shape of thyroid gland")
        assert exact.scope is SynonymScope.EXACT
        assert exact.is_exact

        related = Synonym("http://www.geneontology.org/formats/oboInOwl#hasRelatedSynonym", "x")
        assert related.scope is SynonymScope.RELATED
        assert not related.is_exact

        assert Synonym("odd", "x").scope is SynonymScope.UNKNOWN

    def test_predicate_value_alternate_id(self):
        assert PredicateValue(Predicate.HAS_ALTERNATIVE_ID, "HP:0000010").is_alternate_id
        assert not PredicateValue(Predicate.CREATOR, "someone").is_alternate_id

    def test_property_label(self):
        assert Property(PropertyKind.ABBREVIATION, "hp#abbreviation").label == "abbreviation"

    def test_term_ids(self):
        term = Term(
            id=Identifier("HP:0000003"),
            label="Fake term 3",
            alternative_ids=(Identifier("HP:0000010"),),
        )
        assert term.has_alternative_ids
        assert term.all_ids == (Identifier("HP:0000003"), Identifier("HP:0000010"))
        assert not Term(id=Identifier("HP:0000001")).has_alternative_ids

    def test_edge_inverse(self):
        edge = Edge(Identifier("HP:0000002"), Identifier("HP:0000001"), EdgeKind.IS_A)
        inverse = edge.inverse()
        assert inverse.source == Identifier("HP:0000001")
        assert inverse.destination == Identifier("HP:0000002")
        assert inverse.kind is EdgeKind.IS_A_INVERSE
        assert inverse.inferred
        assert not edge.inferred
