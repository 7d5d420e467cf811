"""Rebuild staged and working-copy content from the HEAD blob plus diff hunks.

Neither the index nor the working tree is read directly. The committed blob
is the source of truth, and the first hunk the backend reports for the path
is spliced onto it. Later hunks of the same path are not applied.
"""

from __future__ import annotations

import asyncio
import re
from typing import List, Optional, Sequence

from loguru import logger

from gitoscope.content.models import ContentResult, DiffHunk, DiffMode, LookupStatus
from gitoscope.git.adapter import GitError, GitObjectNotFound, Repository
from gitoscope.git.diff_parser import NO_LINE
from gitoscope.git.models import Patch

_LINE_BREAK_RE = re.compile(r"\r?\n")


# ── pure core ─────────────────────────────────────────────────────────────────


def splice_hunk(
    base_lines: Sequence[str],
    old_start: int,
    old_lines: int,
    new_lines: Sequence[str],
) -> List[str]:
    """Replace ``old_lines`` entries at 1-based ``old_start`` with ``new_lines``."""
    result = list(base_lines)
    index = old_start - 1
    result[index:index + old_lines] = new_lines
    return result


def normalize_lines(text: str) -> List[str]:
    """Split *text* into LF-terminated lines.

    One trailing terminator is dropped before splitting, then every line,
    including an unterminated last one, gets ``\\n`` back. Empty text has no
    lines.
    """
    # Empty text yields no lines rather than one blank line, so a pure
    # insertion into an empty file splices at index 0 with nothing to replace.
    # Do not change this without revisiting the old_start shift in hunks_from_patch.
    if not text:
        return []
    if text.endswith("\r\n"):
        text = text[:-2]
    elif text.endswith("\n"):
        text = text[:-1]
    return [line + "\n" for line in _LINE_BREAK_RE.split(text)]


def apply_hunks(text: str, hunks: Sequence[DiffHunk]) -> str:
    """Apply the first hunk to *text*; no hunks means no change."""
    if not hunks:
        return text
    first = hunks[0]
    lines = splice_hunk(normalize_lines(text), first.old_start, first.old_lines, first.lines)
    return "".join(lines)


def hunks_from_patch(patch: Patch) -> List[DiffHunk]:
    """Map backend hunks to replacement hunks, dropping deleted lines."""
    hunks: List[DiffHunk] = []
    for hunk in patch.hunks:
        old_start = hunk.old_start
        # git numbers a pure insertion by the line it follows
        if hunk.old_lines == 0:
            old_start += 1
        hunks.append(
            DiffHunk(
                old_start=old_start,
                old_lines=hunk.old_lines,
                lines=[line.content for line in hunk.lines if line.new_lineno != NO_LINE],
            )
        )
    return hunks


def find_patch(patches: Sequence[Patch], path: str) -> Optional[Patch]:
    """Return the first patch whose old path is *path*."""
    return next((p for p in patches if p.old_path == path), None)


# ── backend steps ─────────────────────────────────────────────────────────────


async def fetch_hunks_for_path(
    repo: Repository,
    commit_id: str,
    diff_mode: DiffMode,
    path: str,
    context_lines: int = 0,
) -> List[DiffHunk]:
    """Diff the commit's tree against the index or workdir and extract *path*'s hunks."""
    if diff_mode == DiffMode.TREE_TO_INDEX:
        patches = await repo.diff_tree_to_index(commit_id, path, context_lines)
    else:
        patches = await repo.diff_tree_to_workdir(commit_id, path, context_lines)

    patch = find_patch(patches, path)
    if patch is None:
        return []
    hunks = hunks_from_patch(patch)
    if len(hunks) > 1:
        logger.debug("{}: {} hunks for {}, applying the first", diff_mode.value, len(hunks), path)
    return hunks


async def lookup_head_blob(
    repo: Repository, commit_id: Optional[str], path: str
) -> ContentResult:
    """Fetch the committed text of *path*. Lookup failures are absorbed."""
    if commit_id is None:
        logger.debug("No HEAD commit; {} has no committed content", path)
        return ContentResult("", LookupStatus.NOT_FOUND, "HEAD does not point to a commit")
    try:
        text = await repo.blob_text(commit_id, path)
    except GitObjectNotFound as exc:
        logger.debug("{} is not in HEAD: {}", path, exc)
        return ContentResult("", LookupStatus.NOT_FOUND, str(exc))
    except GitError as exc:
        logger.warning("HEAD lookup for {} failed: {}", path, exc)
        return ContentResult("", LookupStatus.BACKEND_ERROR, str(exc))
    return ContentResult(text)


async def tree_content(repo: Repository, path: str) -> ContentResult:
    """Committed content of *path*, no diffing involved."""
    commit_id = await repo.head_commit_id()
    return await lookup_head_blob(repo, commit_id, path)


async def build_content(
    repo: Repository,
    diff_mode: DiffMode,
    path: str,
    context_lines: int = 0,
) -> ContentResult:
    """Reconstruct staged or working-copy content of *path*.

    Hunk resolution errors propagate; only the blob lookup degrades to an
    empty base.
    """
    commit_id = await repo.head_commit_id()
    if commit_id is None:
        return await lookup_head_blob(repo, None, path)

    base, hunks = await asyncio.gather(
        lookup_head_blob(repo, commit_id, path),
        fetch_hunks_for_path(repo, commit_id, diff_mode, path, context_lines),
    )
    return ContentResult(apply_hunks(base.text, hunks), base.head_lookup, base.error)
