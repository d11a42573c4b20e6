"""
ontograph Protocol Definitions
==============================
Interface contract between the ontology store and its downstream consumers.

Design principles:
1. Consumers (e.g. a record-validation layer) depend on this Protocol only,
   never on the concrete OntologyStore.
2. typing.Protocol gives structural subtyping, so test doubles need no base class.

Version: 1.0.0
"""
from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ontograph.ontology.entities import Term
    from ontograph.ontology.identifiers import Identifier
    from ontograph.ontology.vocabulary import EdgeKind


# =============================================================================
# Ontology Query Protocol
# =============================================================================
@runtime_checkable
class OntologyQueryProtocol(Protocol):
    """
    Read-only query surface of a built ontology

    Implemented by: ontograph/ontology/hierarchy.py (OntologyStore)
    """

    def get_term(self, term_id: "Identifier") -> Optional["Term"]:
        """Look up a term by canonical or alternate id; None when absent"""
        ...

    def get_parents(self, term_id: "Identifier") -> List["Identifier"]:
        """Direct (one-hop) is-a parents; empty when the id is unknown"""
        ...

    def exists_path(
        self,
        source: "Identifier",
        destination: "Identifier",
        kind: "EdgeKind" = ...,
    ) -> bool:
        """True iff destination is reachable from source over edges of `kind`"""
        ...
