"""Status classification: raw backend flags → tree / index / working copy.

The diff-string rules are checked in a fixed order and the first match wins.
Their preconditions overlap, so reordering them changes results.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from gitoscope.git.models import RawStatusRecord
from gitoscope.status.models import DiffCachedString, DiffString, FileStatus, StatusMap


def build_status(record: RawStatusRecord) -> FileStatus:
    """Derive working-copy and cache presence from the raw flags.

    A path is missing from the cache only when it was deleted while staged,
    or is new and was never staged. Working-copy presence trusts the
    backend's deleted flag alone.
    """
    in_index = bool(record.in_index)
    is_deleted = bool(record.is_deleted)
    is_new = bool(record.is_new)

    return FileStatus(
        is_in_working_copy=not is_deleted,
        is_in_cache=not ((in_index and is_deleted) or (is_new and not in_index)),
        raw_status=record,
    )


def diff_string(status: FileStatus, record: RawStatusRecord) -> DiffString:
    """Working copy compared with the cache."""
    if status.is_in_working_copy and not status.is_in_cache:
        return "untracked"
    if not status.is_in_working_copy and status.is_in_cache:
        return "deleted"
    if record.in_working_tree and not record.is_deleted and not record.is_new:
        return "modified"
    return ""


def diff_cached_string(status: FileStatus, record: RawStatusRecord) -> DiffCachedString:
    """Cache compared with the HEAD tree."""
    if status.is_in_cache and not status.is_in_tree:
        return "new"
    if not status.is_in_cache and status.is_in_tree:
        return "deleted"
    if record.in_index and record.is_modified:
        return "modified"
    return ""


def classify(record: RawStatusRecord, head_tree_files: Iterable[str]) -> FileStatus:
    status = build_status(record)
    status.is_in_tree = record.path in head_tree_files
    status.diff_string = diff_string(status, record)
    status.diff_cached_string = diff_cached_string(status, record)
    return status


def status_to_json(
    records: Sequence[RawStatusRecord],
    head_tree_files: Sequence[str],
) -> StatusMap:
    """Build the status map: one entry per changed path or head-tree path.

    Changed paths are classified first; untouched head-tree paths then get
    the default status. The default pass never overwrites an entry.
    """
    tree_set = frozenset(head_tree_files)
    result: StatusMap = {}

    for record in records:
        result[record.path] = classify(record, tree_set)

    for path in head_tree_files:
        if path not in result:
            result[path] = FileStatus.default()

    return result
