"""Content reconstruction for the tree, staged, and working-copy views."""

from gitoscope.content.models import ContentResult, DiffHunk, DiffMode, LookupStatus
from gitoscope.content.reconstructor import (
    apply_hunks,
    build_content,
    fetch_hunks_for_path,
    normalize_lines,
    splice_hunk,
    tree_content,
)

__all__ = [
    "ContentResult",
    "DiffHunk",
    "DiffMode",
    "LookupStatus",
    "apply_hunks",
    "build_content",
    "fetch_hunks_for_path",
    "normalize_lines",
    "splice_hunk",
    "tree_content",
]
