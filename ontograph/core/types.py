"""
ontograph Core Types
====================
Shared result wrapper used across the ingestion and build stages.

Version: 1.0.0
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, TypeVar


# =============================================================================
# Type Variables
# =============================================================================
T = TypeVar("T")


# =============================================================================
# Result Wrapper
# =============================================================================
@dataclass
class Result(Generic[T]):
    """
    Generic outcome of a single unit of work.

    The ingestion parser builds one Result per node / edge / annotation and
    folds failures and warnings into its diagnostics list, so a malformed
    element never interrupts the surrounding loop.
    """
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    warnings: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, data: T, warnings: Optional[List[str]] = None, **metadata) -> "Result[T]":
        return cls(success=True, data=data, warnings=list(warnings or []), metadata=metadata)

    @classmethod
    def fail(cls, error: str, warnings: Optional[List[str]] = None, **metadata) -> "Result[T]":
        return cls(success=False, error=error, warnings=list(warnings or []), metadata=metadata)
