"""
ontograph Exceptions
====================
Error hierarchy for ingestion and graph construction.

Fatal conditions (StructuralError, GraphIntegrityError) abort the whole
load and no OntologyStore is produced. ElementError is raised only inside
the parser and is always converted into a diagnostic before it can escape.

Version: 1.0.0
"""
from __future__ import annotations

from typing import Any


class OntographError(Exception):
    """Base class for all ontograph errors"""


class MalformedIdentifier(OntographError, ValueError):
    """A string that cannot be normalised into a PREFIX:LOCAL identifier"""

    def __init__(self, raw: Any, reason: str = "Malformed ontology term id"):
        self.raw = raw
        super().__init__(f"{reason}: {raw!r}")


class StructuralError(OntographError):
    """The JSON document lacks a required top-level key or has the wrong shape"""


class ElementError(OntographError):
    """A single node, edge or annotation could not be built"""


class GraphIntegrityError(OntographError):
    """The term/edge lists contradict each other (duplicate ids, dangling sources)"""
