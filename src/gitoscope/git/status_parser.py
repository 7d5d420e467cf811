"""Parse ``git status --porcelain=v1 -z`` into RawStatusRecord objects.

Each entry is ``XY PATH`` where X is the index column and Y the working tree
column. Flags are folded the way a native status backend reports them:
``is_new`` covers both an added index entry and an untracked file,
``in_index`` is true for any index-side change, ``in_working_tree`` for any
working-tree-side change.
"""

from __future__ import annotations

from typing import List

from gitoscope.git.models import RawStatusRecord

_CONFLICT_CODES = {"DD", "AU", "UD", "UA", "DU", "AA", "UU"}


def record_from_code(path: str, code: str) -> RawStatusRecord:
    """Build the flags record for one two-character status code."""
    if code == "??":
        return RawStatusRecord(
            path=path,
            is_new=True,
            is_modified=False,
            is_deleted=False,
            is_ignored=False,
            in_index=False,
            in_working_tree=True,
            is_typechange=False,
            is_conflicted=False,
        )
    if code == "!!":
        return RawStatusRecord(
            path=path,
            is_new=False,
            is_modified=False,
            is_deleted=False,
            is_ignored=True,
            in_index=False,
            in_working_tree=False,
            is_typechange=False,
            is_conflicted=False,
        )
    if code in _CONFLICT_CODES:
        return RawStatusRecord(
            path=path,
            is_new=False,
            is_modified=False,
            is_deleted=False,
            is_ignored=False,
            in_index=False,
            in_working_tree=False,
            is_typechange=False,
            is_conflicted=True,
        )

    x, y = code[0], code[1]
    return RawStatusRecord(
        path=path,
        is_new=x == "A",
        is_modified=x == "M" or y == "M",
        is_deleted=x == "D" or y == "D",
        is_ignored=False,
        in_index=x in "AMDT",
        in_working_tree=y in "MDT",
        is_typechange=x == "T" or y == "T",
        is_conflicted=False,
    )


def parse_porcelain(output: str) -> List[RawStatusRecord]:
    """Return one record per path in NUL-separated porcelain *output*."""
    records: List[RawStatusRecord] = []
    entries = output.split("\0")
    idx = 0
    total = len(entries)

    while idx < total:
        entry = entries[idx]
        idx += 1
        if len(entry) < 4:
            continue
        code, path = entry[:2], entry[3:]
        # Renames/copies carry the original path as a separate entry
        if code[0] in ("R", "C") and idx < total:
            idx += 1
            code = "A" + code[1]
        records.append(record_from_code(path, code))

    return records
