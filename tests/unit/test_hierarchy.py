"""
Unit Tests for Ontology Store
=============================
Term access, aliasing and typed reachability on hp.small.json
(is_a edges: 2->1, 3->2, 4->1, 5->4).
"""
from pathlib import Path

import pytest

from ontograph.config import OntologyConfig
from ontograph.core.protocols import OntologyQueryProtocol
from ontograph.ontology import (
    Edge,
    EdgeKind,
    Identifier,
    OntologyBuilder,
    OntologyLoader,
    OntologyStore,
    Term,
)


# =============================================================================
# Fixtures
# =============================================================================
@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).parent.parent / "fixtures"


@pytest.fixture
def ontology(fixtures_dir: Path, tmp_path: Path) -> OntologyStore:
    config = OntologyConfig(cache_dir=str(tmp_path))
    return OntologyLoader(config).load(fixtures_dir / "hp.small.json")


def hp(number: int) -> Identifier:
    return Identifier.parse(f"HP:{number:07d}")


# =============================================================================
# Test Store Properties
# =============================================================================
class TestStoreProperties:
    """Counts and metadata"""

    def test_counts(self, ontology: OntologyStore):
        assert ontology.num_terms == 6
        assert len(ontology) == 6
        assert ontology.current_term_count == 5
        assert ontology.obsolete_term_ids == (hp(6),)
        # 6 canonical ids plus HP:0000010
        assert ontology.total_term_id_count == 7
        assert ontology.edge_count == 8
        assert ontology.property_count == 2
        assert ontology.diagnostics == ()

    def test_term_ids_sorted(self, ontology: OntologyStore):
        assert ontology.term_ids == tuple(hp(n) for n in range(1, 7))

    def test_describe(self, ontology: OntologyStore):
        text = ontology.describe()
        assert text.startswith("### Ontology ###\nid: http://purl.obolibrary.org/obo/hp.json")
        assert "total current terms: 5" in text
        assert "total term ids (including obsolete/alternative term ids): 7" in text
        assert "total edges: 8" in text
        assert "UK spelling" in text

    def test_repr(self, ontology: OntologyStore):
        assert repr(ontology) == (
            "OntologyStore(http://purl.obolibrary.org/obo/hp.json, terms=6, edges=8, diagnostics=0)"
        )

    def test_satisfies_query_protocol(self, ontology: OntologyStore):
        assert isinstance(ontology, OntologyQueryProtocol)


# =============================================================================
# Test Term Access
# =============================================================================
class TestTermAccess:
    """get_term and aliasing"""

    def test_get_term(self, ontology: OntologyStore):
        term = ontology.get_term(hp(2))
        assert term is not None
        assert term.label == "Fake term 2"

    def test_get_term_accepts_raw_forms(self, ontology: OntologyStore):
        expected = ontology.get_term(hp(2))
        assert ontology.get_term("HP:0000002") is expected
        assert ontology.get_term("HP_0000002") is expected
        assert ontology.get_term("http://purl.obolibrary.org/obo/HP_0000002") is expected

    def test_get_term_not_found(self, ontology: OntologyStore):
        assert ontology.get_term(hp(999)) is None
        assert ontology.get_term("not an id") is None

    def test_alias_resolves_to_same_term(self, ontology: OntologyStore):
        alias = ontology.get_term("HP:0000010")
        assert alias is ontology.get_term(hp(3))
        assert ontology.canonical_id("HP:0000010") == hp(3)
        assert ontology.canonical_id(hp(999)) is None

    def test_alias_has_no_vertex(self, ontology: OntologyStore):
        assert Identifier("HP:0000010") not in ontology.term_ids

    def test_has_term_and_contains(self, ontology: OntologyStore):
        assert ontology.has_term("HP:0000010")
        assert "HP:0000004" in ontology
        assert hp(999) not in ontology
        assert 4 not in ontology

    def test_is_obsolete(self, ontology: OntologyStore):
        assert ontology.is_obsolete(hp(6))
        assert not ontology.is_obsolete(hp(5))
        assert ontology.is_obsolete(hp(999))


# =============================================================================
# Test Hierarchy Traversal
# =============================================================================
class TestHierarchyTraversal:
    """Parents, children, ancestors, descendants"""

    def test_get_parents_is_one_hop(self, ontology: OntologyStore):
        assert ontology.get_parents(hp(2)) == [hp(1)]
        assert ontology.get_parents(hp(3)) == [hp(2)]
        assert ontology.get_parents(hp(5)) == [hp(4)]
        assert ontology.get_parents(hp(1)) == []

    def test_get_parents_unknown(self, ontology: OntologyStore):
        assert ontology.get_parents(hp(999)) == []
        assert ontology.get_parents("garbage") == []

    def test_get_parents_through_alias(self, ontology: OntologyStore):
        assert ontology.get_parents("HP:0000010") == [hp(2)]

    def test_get_children(self, ontology: OntologyStore):
        assert sorted(ontology.get_children(hp(1))) == [hp(2), hp(4)]
        assert ontology.get_children(hp(5)) == []

    def test_get_ancestors(self, ontology: OntologyStore):
        assert ontology.get_ancestors(hp(3)) == {hp(2), hp(1)}
        assert ontology.get_ancestors(hp(1)) == set()

    def test_get_descendants(self, ontology: OntologyStore):
        assert ontology.get_descendants(hp(1)) == {hp(2), hp(3), hp(4), hp(5)}
        assert ontology.get_descendants(hp(4)) == {hp(5)}

    def test_to_edges(self, ontology: OntologyStore):
        forward = ontology.to_edges(EdgeKind.IS_A)
        assert forward == [
            (hp(2), hp(1), EdgeKind.IS_A),
            (hp(3), hp(2), EdgeKind.IS_A),
            (hp(4), hp(1), EdgeKind.IS_A),
            (hp(5), hp(4), EdgeKind.IS_A),
        ]
        assert len(ontology.to_edges()) == 8


# =============================================================================
# Test Reachability
# =============================================================================
class TestExistsPath:
    """exists_path"""

    @pytest.mark.parametrize(
        "source, destination, kind, expected",
        [
            (2, 1, EdgeKind.IS_A, True),
            (3, 1, EdgeKind.IS_A, True),
            (1, 3, EdgeKind.IS_A_INVERSE, True),
            (5, 3, EdgeKind.IS_A, False),
            (5, 4, EdgeKind.IS_A, True),
            (5, 1, EdgeKind.IS_A, True),
            (5, 2, EdgeKind.IS_A, False),
            (1, 2, EdgeKind.IS_A, False),
            (1, 2, EdgeKind.IS_A_INVERSE, True),
            (5, 4, EdgeKind.IS_A_INVERSE, False),
            (4, 5, EdgeKind.IS_A, False),
        ],
    )
    def test_typed_reachability(self, ontology, source, destination, kind, expected):
        assert ontology.exists_path(hp(source), hp(destination), kind) is expected

    def test_default_kind_is_is_a(self, ontology: OntologyStore):
        assert ontology.exists_path(hp(3), hp(1))
        assert not ontology.exists_path(hp(1), hp(3))

    def test_same_term_is_not_a_path(self, ontology: OntologyStore):
        assert not ontology.exists_path(hp(2), hp(2))

    def test_unknown_endpoints(self, ontology: OntologyStore):
        assert not ontology.exists_path(hp(999), hp(1))
        assert not ontology.exists_path(hp(2), hp(999))
        assert not ontology.exists_path("garbage", hp(1))

    def test_alias_endpoints(self, ontology: OntologyStore):
        assert ontology.exists_path("HP:0000010", hp(1))

    def test_cycle_terminates(self):
        a, b, c = Identifier("X:a"), Identifier("X:b"), Identifier("X:c")
        terms = [Term(id=a), Term(id=b), Term(id=c)]
        edges = [Edge(a, b, EdgeKind.IS_A), Edge(b, a, EdgeKind.IS_A)]
        store = OntologyBuilder(OntologyConfig()).build(terms, edges, "cyclic")

        assert not store.exists_path(a, c)
        assert store.exists_path(a, a)
        assert store.get_ancestors(a) == {b}
