"""Semantic status models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional

from gitoscope.git.models import RawStatusRecord

DiffString = Literal["", "untracked", "deleted", "modified"]
DiffCachedString = Literal["", "new", "deleted", "modified"]


@dataclass
class FileStatus:
    """Presence of one path across tree, index (cache), and working copy."""

    is_in_working_copy: bool
    is_in_cache: bool
    is_in_tree: bool = False
    diff_string: DiffString = ""
    diff_cached_string: DiffCachedString = ""
    raw_status: Optional[RawStatusRecord] = None  # None for untouched tree paths

    @classmethod
    def default(cls) -> "FileStatus":
        """Status of a tracked path with no pending change."""
        return cls(is_in_working_copy=True, is_in_cache=True, is_in_tree=True)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "isInWorkingCopy": self.is_in_working_copy,
            "isInCache": self.is_in_cache,
            "isInTree": self.is_in_tree,
            "diffString": self.diff_string,
            "diffCachedString": self.diff_cached_string,
        }
        if self.raw_status is not None:
            data["rawStatus"] = self.raw_status.to_dict()
        return data


StatusMap = Dict[str, FileStatus]
