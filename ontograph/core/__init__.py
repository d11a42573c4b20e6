"""
ontograph Core Module
=====================
Shared types, exceptions and the query Protocol.

Usage:
    from ontograph.core import Result, StructuralError, OntologyQueryProtocol
"""

from ontograph.core.types import Result
from ontograph.core.exceptions import (
    ElementError,
    GraphIntegrityError,
    MalformedIdentifier,
    OntographError,
    StructuralError,
)
from ontograph.core.protocols import OntologyQueryProtocol

__all__ = [
    # Types
    "Result",
    # Exceptions
    "OntographError",
    "MalformedIdentifier",
    "StructuralError",
    "ElementError",
    "GraphIntegrityError",
    # Protocols
    "OntologyQueryProtocol",
]
