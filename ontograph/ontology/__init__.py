"""
ontograph Ontology Module
=========================
Ingestion and querying of obographs JSON ontologies (HPO, MONDO, ...)

Main features:
- Identifier normalisation (CURIE, underscore, URL, ORCID/HGNC/ICD10 forms)
- Fault-tolerant JSON graph parsing with a diagnostics report
- Immutable graph store with compressed adjacency
- Alias-transparent term lookup and typed reachability

Usage:
    from ontograph.ontology import OntologyLoader, EdgeKind

    # Load HPO
    loader = OntologyLoader()
    hpo = loader.load_hp()

    # Query terms
    term = hpo.get_term("HP:0001250")  # Seizure
    print(f"Name: {term.label}")

    # Direct parents and reachability
    parents = hpo.get_parents("HP:0001250")
    hpo.exists_path("HP:0001250", "HP:0000118")
    hpo.exists_path("HP:0000118", "HP:0001250", EdgeKind.IS_A_INVERSE)

    # Parse and build explicitly
    from ontograph.ontology import JsonGraphParser, build_ontology
    parser = JsonGraphParser()
    parsed = parser.parse_file("hp.json")
    print(parser.quality_report())
    store = build_ontology(parsed)

Version: 1.0.0
"""

# Identifiers
from ontograph.ontology.identifiers import (
    CrossReference,
    Identifier,
    XrefOrigin,
)

# Vocabularies
from ontograph.ontology.vocabulary import (
    EdgeKind,
    Predicate,
    PropertyKind,
    SynonymScope,
)

# Entities
from ontograph.ontology.entities import (
    Edge,
    PredicateValue,
    Property,
    Synonym,
    Term,
)

# Store and builder
from ontograph.ontology.hierarchy import OntologyStore
from ontograph.ontology.builder import OntologyBuilder, build_ontology

# Loader
from ontograph.ontology.loader import (
    JsonGraphParser,
    OntologyLoader,
    ParsedOntology,
    create_ontology_loader,
    format_diagnostics,
)

__all__ = [
    # Identifiers
    "Identifier",
    "CrossReference",
    "XrefOrigin",
    # Vocabularies
    "Predicate",
    "PropertyKind",
    "EdgeKind",
    "SynonymScope",
    # Entities
    "PredicateValue",
    "Property",
    "Synonym",
    "Term",
    "Edge",
    # Store
    "OntologyStore",
    "OntologyBuilder",
    "build_ontology",
    # Loader
    "JsonGraphParser",
    "ParsedOntology",
    "format_diagnostics",
    "OntologyLoader",
    "create_ontology_loader",
]
