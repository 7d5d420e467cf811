"""Git interface layer: adapter, parsers, models."""

from gitoscope.git.adapter import GitError, GitObjectNotFound, Repository, get_repo_root
from gitoscope.git.diff_parser import DiffParser
from gitoscope.git.models import (
    BlobInfo,
    CommitInfo,
    DiffLineRecord,
    LineOrigin,
    Patch,
    PatchHunk,
    RawStatusRecord,
    ReferenceInfo,
    TreeEntryInfo,
    TreeInfo,
)
from gitoscope.git.status_parser import parse_porcelain

__all__ = [
    "BlobInfo",
    "CommitInfo",
    "DiffLineRecord",
    "DiffParser",
    "GitError",
    "GitObjectNotFound",
    "LineOrigin",
    "Patch",
    "PatchHunk",
    "RawStatusRecord",
    "ReferenceInfo",
    "Repository",
    "TreeEntryInfo",
    "TreeInfo",
    "get_repo_root",
    "parse_porcelain",
]
