"""
ontograph Ontology Hierarchy Operations
=======================================
Immutable ontology graph with alias-transparent term lookup and typed
reachability over a compressed adjacency (CSR) layout.

Vertex v's outgoing edges are the slice [offsets[v], offsets[v + 1]) of the
parallel `destinations` / `kinds` arrays. Vertex indices follow the sorted
canonical identifiers, so `term_ids[v]` is the identifier of vertex v.

Version: 1.0.0
"""
from __future__ import annotations

import logging
from collections import deque
from typing import Dict, List, Optional, Set, Tuple, Union

import numpy as np

from ontograph.core.exceptions import MalformedIdentifier
from ontograph.ontology.entities import PredicateValue, Property, Term
from ontograph.ontology.identifiers import Identifier
from ontograph.ontology.vocabulary import EdgeKind

logger = logging.getLogger(__name__)


TermKey = Union[Identifier, str]


# =============================================================================
# Ontology Store
# =============================================================================
class OntologyStore:
    """
    Built ontology graph

    Provides:
    - Term lookup by canonical or alternate identifier
    - Direct parents / children
    - Typed reachability (exists_path), ancestors and descendants

    Instances are produced by OntologyBuilder and never change afterwards, so
    concurrent readers need no locking.
    """

    def __init__(
        self,
        ontology_id: str,
        terms: Tuple[Term, ...],
        arena_index: Dict[Identifier, int],
        term_ids: Tuple[Identifier, ...],
        vertex_index: Dict[Identifier, int],
        current_term_ids: Tuple[Identifier, ...],
        obsolete_term_ids: Tuple[Identifier, ...],
        offsets: np.ndarray,
        destinations: np.ndarray,
        kinds: np.ndarray,
        ontology_values: Tuple[PredicateValue, ...] = (),
        properties: Tuple[Property, ...] = (),
        diagnostics: Tuple[str, ...] = (),
    ):
        """
        Args:
            terms: term arena
            arena_index: canonical and alternate id -> arena position
            term_ids: sorted canonical ids; position is the vertex index
            vertex_index: canonical id -> vertex index
            offsets: int array of length len(term_ids) + 1
            destinations: destination vertex per edge
            kinds: EdgeKind code per edge
        """
        if len(offsets) != len(term_ids) + 1:
            raise ValueError("offsets must have one entry per vertex plus one")
        if len(destinations) != len(kinds) or int(offsets[-1]) != len(destinations):
            raise ValueError("adjacency arrays are inconsistent with offsets")

        self._ontology_id = ontology_id
        self._terms = terms
        self._arena_index = arena_index
        self._term_ids = term_ids
        self._vertex_index = vertex_index
        self._current_term_ids = current_term_ids
        self._obsolete_term_ids = obsolete_term_ids
        self._ontology_values = ontology_values
        self._properties = properties
        self._diagnostics = diagnostics

        self._offsets = offsets
        self._destinations = destinations
        self._kinds = kinds
        for array in (self._offsets, self._destinations, self._kinds):
            array.setflags(write=False)

        logger.info(
            f"OntologyStore initialized: {ontology_id} "
            f"({len(current_term_ids)} current terms, {self.edge_count} edges)"
        )

    # =========================================================================
    # Properties
    # =========================================================================
    @property
    def ontology_id(self) -> str:
        return self._ontology_id

    @property
    def ontology_values(self) -> Tuple[PredicateValue, ...]:
        """Ontology-level annotations (creator, license, ...)"""
        return self._ontology_values

    @property
    def properties(self) -> Tuple[Property, ...]:
        return self._properties

    @property
    def diagnostics(self) -> Tuple[str, ...]:
        """Recoverable problems met while parsing and building"""
        return self._diagnostics

    @property
    def current_term_ids(self) -> Tuple[Identifier, ...]:
        return self._current_term_ids

    @property
    def obsolete_term_ids(self) -> Tuple[Identifier, ...]:
        return self._obsolete_term_ids

    @property
    def term_ids(self) -> Tuple[Identifier, ...]:
        """Sorted canonical ids; index in this tuple is the vertex index"""
        return self._term_ids

    @property
    def num_terms(self) -> int:
        """Number of canonical ids (current and obsolete)"""
        return len(self._term_ids)

    @property
    def current_term_count(self) -> int:
        return len(self._current_term_ids)

    @property
    def total_term_id_count(self) -> int:
        """Canonical plus alternate ids"""
        return len(self._arena_index)

    @property
    def edge_count(self) -> int:
        return len(self._destinations)

    @property
    def property_count(self) -> int:
        return len(self._properties)

    @property
    def offsets(self) -> np.ndarray:
        return self._offsets

    @property
    def destinations(self) -> np.ndarray:
        return self._destinations

    @property
    def kinds(self) -> np.ndarray:
        return self._kinds

    # =========================================================================
    # Term Access
    # =========================================================================
    @staticmethod
    def _coerce(term_id: TermKey) -> Optional[Identifier]:
        if isinstance(term_id, Identifier):
            return term_id
        try:
            return Identifier.resolve(term_id)
        except MalformedIdentifier:
            return None

    def get_term(self, term_id: TermKey) -> Optional[Term]:
        """
        Look up a term by canonical or alternate id

        Accepts an Identifier or any raw form Identifier.resolve understands.
        Unknown or malformed ids return None.
        """
        key = self._coerce(term_id)
        if key is None:
            return None
        position = self._arena_index.get(key)
        if position is None:
            return None
        return self._terms[position]

    def has_term(self, term_id: TermKey) -> bool:
        return self.get_term(term_id) is not None

    def is_obsolete(self, term_id: TermKey) -> bool:
        """Unknown ids count as obsolete"""
        term = self.get_term(term_id)
        return term.obsolete if term else True

    def canonical_id(self, term_id: TermKey) -> Optional[Identifier]:
        """Canonical id of the term an id (possibly an alias) refers to"""
        term = self.get_term(term_id)
        return term.id if term else None

    def _vertex(self, term_id: TermKey) -> Optional[int]:
        canonical = self.canonical_id(term_id)
        if canonical is None:
            return None
        return self._vertex_index.get(canonical)

    # =========================================================================
    # Hierarchy Traversal
    # =========================================================================
    def _neighbours(self, vertex: int, kind: EdgeKind) -> np.ndarray:
        start, end = self._offsets[vertex], self._offsets[vertex + 1]
        window = self._destinations[start:end]
        return window[self._kinds[start:end] == kind.code]

    def get_parents(self, term_id: TermKey) -> List[Identifier]:
        """Direct is-a parents; unknown ids yield []"""
        vertex = self._vertex(term_id)
        if vertex is None:
            return []
        return [self._term_ids[v] for v in self._neighbours(vertex, EdgeKind.IS_A)]

    def get_children(self, term_id: TermKey) -> List[Identifier]:
        """Direct is-a children (needs synthesized inverse edges)"""
        vertex = self._vertex(term_id)
        if vertex is None:
            return []
        return [self._term_ids[v] for v in self._neighbours(vertex, EdgeKind.IS_A_INVERSE)]

    def exists_path(
        self,
        source: TermKey,
        destination: TermKey,
        kind: EdgeKind = EdgeKind.IS_A,
    ) -> bool:
        """
        Whether destination is reachable from source along edges of `kind`

        Breadth-first over the adjacency slices with a visited set. Only
        paths of at least one edge count, so exists_path(x, x) is False
        unless x lies on a cycle. Unknown endpoints give False.
        """
        start = self._vertex(source)
        target = self._vertex(destination)
        if start is None or target is None:
            return False

        visited = {start}
        queue = deque([start])
        while queue:
            current = queue.popleft()
            for neighbour in self._neighbours(current, kind).tolist():
                if neighbour == target:
                    return True
                if neighbour not in visited:
                    visited.add(neighbour)
                    queue.append(neighbour)
        return False

    def _reachable(self, term_id: TermKey, kind: EdgeKind) -> Set[Identifier]:
        start = self._vertex(term_id)
        if start is None:
            return set()

        visited: Set[int] = set()
        queue = deque([start])
        while queue:
            current = queue.popleft()
            for neighbour in self._neighbours(current, kind).tolist():
                if neighbour not in visited:
                    visited.add(neighbour)
                    queue.append(neighbour)

        visited.discard(start)
        return {self._term_ids[v] for v in visited}

    def get_ancestors(self, term_id: TermKey) -> Set[Identifier]:
        """All is-a ancestors, excluding the term itself"""
        return self._reachable(term_id, EdgeKind.IS_A)

    def get_descendants(self, term_id: TermKey) -> Set[Identifier]:
        """All is-a descendants, excluding the term itself"""
        return self._reachable(term_id, EdgeKind.IS_A_INVERSE)

    # =========================================================================
    # Export
    # =========================================================================
    def to_edges(self, kind: Optional[EdgeKind] = None) -> List[Tuple[Identifier, Identifier, EdgeKind]]:
        """Stored edges as (source, destination, kind), in vertex order"""
        edges = []
        for vertex, source in enumerate(self._term_ids):
            start, end = int(self._offsets[vertex]), int(self._offsets[vertex + 1])
            for slot in range(start, end):
                edge_kind = EdgeKind.from_code(self._kinds[slot])
                if kind is None or edge_kind is kind:
                    edges.append((source, self._term_ids[self._destinations[slot]], edge_kind))
        return edges

    def describe(self) -> str:
        """Multi-line summary of the ontology"""
        lines = ["### Ontology ###", f"id: {self._ontology_id}"]
        lines.extend(f"\t{pv.predicate.name}: {pv.value}" for pv in self._ontology_values)
        lines.extend([
            "### Terms ###",
            f"total current terms: {self.current_term_count}",
            f"total obsolete terms: {len(self._obsolete_term_ids)}",
            f"total term ids (including obsolete/alternative term ids): {self.total_term_id_count}",
            "### Edges ###",
            f"total edges: {self.edge_count}",
            "### Properties ###",
            f"total properties: {self.property_count}",
        ])
        lines.extend(f"\t{p.label} ({p.source_id})" for p in self._properties)
        return "\n".join(lines)

    def __len__(self) -> int:
        return self.num_terms

    def __contains__(self, term_id: object) -> bool:
        if not isinstance(term_id, (Identifier, str)):
            return False
        return self.has_term(term_id)

    def __repr__(self) -> str:
        return (
            f"OntologyStore({self._ontology_id}, terms={self.num_terms}, "
            f"edges={self.edge_count}, diagnostics={len(self._diagnostics)})"
        )


__all__ = [
    "OntologyStore",
]
