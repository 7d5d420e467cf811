"""Parsers for raw git object output: commits, trees, refs, batch-check."""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from gitoscope.git.models import CommitInfo, ReferenceInfo, Signature, TreeEntryInfo

_SIGNATURE_RE = re.compile(r"^(.*) <(.*)> (\d+) ([+-]\d{4})$")
_LS_TREE_RE = re.compile(r"^(\d+) (\w+) ([0-9a-f]+)\t(.*)$", re.DOTALL)

# Binary detection: git looks for a NUL in the first 8000 bytes
_BINARY_SNIFF_LEN = 8000


def parse_batch_check(output: str) -> Optional[Tuple[str, str, int]]:
    """Parse one ``cat-file --batch-check`` line → (oid, type, size).

    Returns None when git reports the object as missing or ambiguous.
    """
    line = output.strip()
    if not line or line.endswith(" missing") or line.endswith(" ambiguous"):
        return None
    parts = line.split(" ")
    if len(parts) != 3:
        return None
    oid, obj_type, size = parts
    return oid, obj_type, int(size)


def _parse_signature(value: str) -> Signature:
    m = _SIGNATURE_RE.match(value)
    if m is None:
        return Signature(name=value, email="", timestamp=0, offset="+0000")
    return Signature(
        name=m.group(1),
        email=m.group(2),
        timestamp=int(m.group(3)),
        offset=m.group(4),
    )


def parse_commit(oid: str, raw: str) -> CommitInfo:
    """Parse ``git cat-file commit`` output."""
    header, _, message = raw.partition("\n\n")
    tree_id = ""
    parents: List[str] = []
    author = committer = Signature(name="", email="", timestamp=0, offset="+0000")

    for line in header.split("\n"):
        # Continuation lines belong to multi-line headers (gpgsig, mergetag)
        if line.startswith(" "):
            continue
        key, _, value = line.partition(" ")
        if key == "tree":
            tree_id = value
        elif key == "parent":
            parents.append(value)
        elif key == "author":
            author = _parse_signature(value)
        elif key == "committer":
            committer = _parse_signature(value)

    return CommitInfo(
        id=oid,
        tree_id=tree_id,
        parents=parents,
        author=author,
        committer=committer,
        message=message,
    )


def parse_ls_tree(output: str) -> List[TreeEntryInfo]:
    """Parse NUL-separated ``git ls-tree -z`` output."""
    entries: List[TreeEntryInfo] = []
    for record in output.split("\0"):
        if not record:
            continue
        m = _LS_TREE_RE.match(record)
        if m is None:
            continue
        entries.append(
            TreeEntryInfo(name=m.group(4), id=m.group(3), type=m.group(2), mode=m.group(1))
        )
    return entries


def parse_name_list(output: str) -> List[str]:
    """Split NUL-separated path output (``ls-tree -r --name-only -z``)."""
    return [p for p in output.split("\0") if p]


def parse_for_each_ref(output: str) -> List[ReferenceInfo]:
    """Parse ``for-each-ref --format=%(refname)%00%(objectname)%00%(symref)``."""
    refs: List[ReferenceInfo] = []
    for line in output.splitlines():
        if not line.strip():
            continue
        name, _, rest = line.partition("\0")
        target, _, symref = rest.partition("\0")
        refs.append(
            ReferenceInfo(
                name=name,
                target=target or None,
                symbolic_target=symref or None,
            )
        )
    return refs


def looks_binary(content: str) -> bool:
    return "\0" in content[:_BINARY_SNIFF_LEN]
