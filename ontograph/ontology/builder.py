"""
# ==============================================================================
# Module: ontograph/ontology/builder.py
# ==============================================================================
# Purpose: Build an immutable OntologyStore from parsed terms and edges
#
# Dependencies:
#   - External: numpy (compressed adjacency arrays)
#   - Internal: ontograph.ontology.hierarchy (OntologyStore)
#              ontograph.ontology.entities (Term, Edge, ...)
#              ontograph.config (OntologyConfig)
#
# Input:
#   - Terms, edges, ontology annotations (usually a ParsedOntology)
#
# Output:
#   - OntologyStore with a sorted vertex space and CSR adjacency
#   - Builder diagnostics (unresolved destinations, alias collisions)
# ==============================================================================
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Tuple

import numpy as np

from ontograph.config.settings import OntologyConfig, get_ontology_config
from ontograph.core.exceptions import GraphIntegrityError
from ontograph.ontology.entities import Edge, PredicateValue, Property, Term
from ontograph.ontology.hierarchy import OntologyStore
from ontograph.ontology.identifiers import Identifier

if TYPE_CHECKING:
    from ontograph.ontology.loader import ParsedOntology

logger = logging.getLogger(__name__)


OFFSET_DTYPE = np.int32
DESTINATION_DTYPE = np.int32
KIND_DTYPE = np.int8


# ==============================================================================
# Ontology Builder
# ==============================================================================
class OntologyBuilder:
    """
    Two-phase ontology graph builder

    Phase A fixes the vertex space from the term list: every canonical id gets
    exactly one index, in sorted identifier order. Phase B lays the edges out
    against that frozen space as compressed sparse rows (offsets,
    destinations, kinds). Edge processing never adds or reorders vertices.
    """

    def __init__(self, config: Optional[OntologyConfig] = None):
        self.config = config or get_ontology_config()

    def build(
        self,
        terms: Iterable[Term],
        edges: Iterable[Edge],
        ontology_id: str,
        ontology_values: Iterable[PredicateValue] = (),
        properties: Iterable[Property] = (),
        diagnostics: Iterable[str] = (),
    ) -> OntologyStore:
        """
        Build the store

        Args:
            terms: ontology terms (arena order is input order)
            edges: typed edges, including any synthesized inverses
            ontology_id: id of the ontology
            ontology_values: ontology-level annotations
            properties: PROPERTY definitions
            diagnostics: diagnostics already collected during ingestion

        Raises:
            GraphIntegrityError: duplicate canonical id, or an edge source
                that is not a term (unless config.lenient_sources)
        """
        terms = tuple(terms)
        edges = list(edges)
        build_diagnostics: List[str] = []

        arena_index, term_ids, vertex_index, current, obsolete = self._index_terms(
            terms, build_diagnostics
        )
        offsets, destinations, kinds = self._build_adjacency(
            edges, term_ids, vertex_index, build_diagnostics
        )

        logger.info(
            f"Built ontology {ontology_id}: edges n={len(destinations)}, terms n={len(term_ids)}"
        )
        if self.config.log_diagnostics:
            for message in build_diagnostics:
                logger.warning(message)

        return OntologyStore(
            ontology_id=ontology_id,
            terms=terms,
            arena_index=arena_index,
            term_ids=term_ids,
            vertex_index=vertex_index,
            current_term_ids=current,
            obsolete_term_ids=obsolete,
            offsets=offsets,
            destinations=destinations,
            kinds=kinds,
            ontology_values=tuple(ontology_values),
            properties=tuple(properties),
            diagnostics=(*diagnostics, *build_diagnostics),
        )

    # ==========================================================================
    # Phase A: Vertices
    # ==========================================================================
    def _index_terms(
        self,
        terms: Tuple[Term, ...],
        diagnostics: List[str],
    ):
        arena_index: Dict[Identifier, int] = {}
        current: List[Identifier] = []
        obsolete: List[Identifier] = []

        for position, term in enumerate(terms):
            arena_index.setdefault(term.id, position)
            (obsolete if term.obsolete else current).append(term.id)

        if len(arena_index) != len(terms):
            raise GraphIntegrityError(
                f"Number of distinct term ids ({len(arena_index)}) "
                f"not equal to number of terms ({len(terms)})"
            )

        # Canonical ids are registered first so an alias can never shadow one
        for position, term in enumerate(terms):
            for alt_id in term.alternative_ids:
                owner = arena_index.setdefault(alt_id, position)
                if owner != position:
                    diagnostics.append(
                        f"[ERROR] Alternative id {alt_id} of {term.id} already "
                        f"assigned to {terms[owner].id}"
                    )

        term_ids = tuple(sorted(term.id for term in terms))
        vertex_index = {term_id: index for index, term_id in enumerate(term_ids)}

        return arena_index, term_ids, vertex_index, tuple(sorted(current)), tuple(sorted(obsolete))

    # ==========================================================================
    # Phase B: Edges
    # ==========================================================================
    def _build_adjacency(
        self,
        edges: List[Edge],
        term_ids: Tuple[Identifier, ...],
        vertex_index: Dict[Identifier, int],
        diagnostics: List[str],
    ) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        num_vertices = len(term_ids)

        # Pass 1: resolve sources, stable sort by source vertex
        sourced: List[Tuple[int, Edge]] = []
        for edge in edges:
            source_index = vertex_index.get(edge.source)
            if source_index is None:
                if edge.inferred:
                    # Mirror of an edge whose destination dangles
                    logger.debug(f"Dropping inferred edge with unknown source: {edge}")
                    continue
                if not self.config.lenient_sources:
                    raise GraphIntegrityError(
                        f"Could not find index of source {edge.source} (edge {edge})"
                    )
                diagnostics.append(
                    f"[ERROR] Could not find index of source {edge.source} (edge {edge})"
                )
                continue
            sourced.append((source_index, edge))
        sourced.sort(key=lambda item: item[0])

        # Pass 2: count per source only the edges whose destination resolves
        counts = np.zeros(num_vertices, dtype=np.int64)
        resolved: List[Tuple[int, int, int]] = []
        for source_index, edge in sourced:
            destination_index = vertex_index.get(edge.destination)
            if destination_index is None:
                diagnostics.append(
                    f"[ERROR] Could not find index of destination {edge.destination} (edge {edge})"
                )
                continue
            counts[source_index] += 1
            resolved.append((source_index, destination_index, edge.kind.code))

        # Pass 3: prefix sum
        offsets = np.zeros(num_vertices + 1, dtype=OFFSET_DTYPE)
        offsets[1:] = np.cumsum(counts)

        # Pass 4: fill the parallel arrays slot by slot
        destinations = np.empty(len(resolved), dtype=DESTINATION_DTYPE)
        kinds = np.empty(len(resolved), dtype=KIND_DTYPE)
        cursor = offsets[:-1].astype(np.int64)
        for source_index, destination_index, kind_code in resolved:
            slot = cursor[source_index]
            destinations[slot] = destination_index
            kinds[slot] = kind_code
            cursor[source_index] += 1

        return offsets, destinations, kinds


# ==============================================================================
# Convenience
# ==============================================================================
def build_ontology(
    parsed: "ParsedOntology",
    config: Optional[OntologyConfig] = None,
) -> OntologyStore:
    """Build an OntologyStore from a parser result"""
    builder = OntologyBuilder(config)
    return builder.build(
        terms=parsed.terms,
        edges=parsed.edges,
        ontology_id=parsed.ontology_id,
        ontology_values=parsed.ontology_values,
        properties=parsed.properties,
        diagnostics=parsed.diagnostics,
    )


__all__ = [
    "OntologyBuilder",
    "build_ontology",
]
