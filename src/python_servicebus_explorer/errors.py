"""
Error kinds and the result value returned by the builder and the explorer.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Namespace


class ErrorKind(str, Enum):
    """Category of a failed exploration."""
    INPUT = "input"
    API = "api"
    WRITE = "write"


class ExplorerError(Exception):
    """
    A failure that aborts the whole exploration.

    Attributes:
        kind: The ErrorKind of the failure.
        message: Human-readable description.
        cause: The underlying exception, if any.
    """

    def __init__(self, kind: ErrorKind, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.cause = cause

    def __repr__(self) -> str:
        return f"ExplorerError(kind={self.kind.value!r}, message={self.message!r})"


@dataclass(frozen=True)
class ExplorationResult:
    """
    Outcome of a build or of a full explore-and-write run.

    Exactly one of ``namespace`` and ``error`` is meaningful: a failed run
    never carries a partial tree.
    """
    namespace: Optional[Namespace] = None
    written: Tuple[Path, ...] = field(default_factory=tuple)
    error: Optional[ExplorerError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, kind: ErrorKind, message: str, cause: Optional[BaseException] = None) -> "ExplorationResult":
        return cls(error=ExplorerError(kind, message, cause))
