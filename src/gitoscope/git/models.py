"""Data models for records read from the git backend."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class LineOrigin(str, Enum):
    CONTEXT = "context"
    ADDITION = "addition"
    DELETION = "deletion"


@dataclass(frozen=True, slots=True)
class RawStatusRecord:
    """Fixed-shape status flags for one path.

    ``None`` means the backend did not report the flag; classification treats
    it as false.
    """

    path: str
    is_new: Optional[bool] = None
    is_modified: Optional[bool] = None
    is_deleted: Optional[bool] = None
    is_ignored: Optional[bool] = None
    in_index: Optional[bool] = None
    in_working_tree: Optional[bool] = None
    is_typechange: Optional[bool] = None
    is_conflicted: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isNew": self.is_new,
            "isModified": self.is_modified,
            "isDeleted": self.is_deleted,
            "isIgnored": self.is_ignored,
            "inIndex": self.in_index,
            "inWorkingTree": self.in_working_tree,
            "isTypechange": self.is_typechange,
            "isConflicted": self.is_conflicted,
        }


@dataclass(frozen=True, slots=True)
class DiffLineRecord:
    """One line of a hunk. ``new_lineno`` is -1 for deleted lines."""

    origin: LineOrigin
    content: str  # raw text including its own terminator
    old_lineno: int
    new_lineno: int


@dataclass
class PatchHunk:
    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    lines: List[DiffLineRecord] = field(default_factory=list)


@dataclass
class Patch:
    """The diff for one file."""

    old_path: str
    new_path: str
    is_binary: bool = False
    hunks: List[PatchHunk] = field(default_factory=list)


# --- pass-through descriptors ---


@dataclass(frozen=True)
class Signature:
    name: str
    email: str
    timestamp: int
    offset: str  # e.g. "+0200"


@dataclass(frozen=True)
class CommitInfo:
    id: str
    tree_id: str
    parents: List[str]
    author: Signature
    committer: Signature
    message: str

    @property
    def summary(self) -> str:
        return self.message.split("\n", 1)[0]

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["summary"] = self.summary
        return data


@dataclass(frozen=True)
class TreeEntryInfo:
    name: str
    id: str
    type: str  # blob | tree | commit
    mode: str

    @property
    def is_tree(self) -> bool:
        return self.type == "tree"

    @property
    def is_blob(self) -> bool:
        return self.type == "blob"


@dataclass(frozen=True)
class TreeInfo:
    id: str
    entries: List[TreeEntryInfo] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "entries": [
                {**asdict(e), "isTree": e.is_tree, "isBlob": e.is_blob}
                for e in self.entries
            ],
        }


@dataclass(frozen=True)
class BlobInfo:
    id: str
    size: int
    is_binary: bool
    content: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "size": self.size,
            "isBinary": self.is_binary,
            # binary payloads are not forwarded
            "content": "" if self.is_binary else self.content,
        }


@dataclass(frozen=True)
class ReferenceInfo:
    name: str
    target: Optional[str]
    symbolic_target: Optional[str] = None
    is_head: bool = False

    @property
    def shorthand(self) -> str:
        for prefix in ("refs/heads/", "refs/tags/", "refs/remotes/"):
            if self.name.startswith(prefix):
                return self.name[len(prefix):]
        return self.name

    @property
    def is_branch(self) -> bool:
        return self.name.startswith("refs/heads/")

    @property
    def is_tag(self) -> bool:
        return self.name.startswith("refs/tags/")

    @property
    def is_remote(self) -> bool:
        return self.name.startswith("refs/remotes/")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "shorthand": self.shorthand,
            "target": self.target,
            "symbolicTarget": self.symbolic_target,
            "isBranch": self.is_branch,
            "isTag": self.is_tag,
            "isRemote": self.is_remote,
            "isHead": self.is_head,
        }
