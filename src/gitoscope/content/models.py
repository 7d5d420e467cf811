"""Content reconstruction models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class DiffMode(str, Enum):
    TREE_TO_INDEX = "tree_to_index"  # staged content
    TREE_TO_WORKDIR = "tree_to_workdir"  # working-copy content


class LookupStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    BACKEND_ERROR = "backend_error"


@dataclass(frozen=True)
class DiffHunk:
    """One contiguous replacement: ``old_lines`` lines from ``old_start`` (1-based)."""

    old_start: int
    old_lines: int
    lines: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ContentResult:
    """Reconstructed text plus the outcome of the HEAD blob lookup it started from."""

    text: str
    head_lookup: LookupStatus = LookupStatus.FOUND
    error: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.head_lookup == LookupStatus.FOUND
