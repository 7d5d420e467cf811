"""Git subprocess wrapper: repository handle, status, trees, blobs, diffs.

Every git invocation is a blocking subprocess; the async methods of
:class:`Repository` run them in a worker thread so callers can fan out
independent lookups with ``asyncio.gather``.
"""

from __future__ import annotations

import asyncio
import subprocess
from pathlib import Path
from typing import List, Optional

from loguru import logger

from gitoscope.git.diff_parser import DiffParser
from gitoscope.git.models import (
    BlobInfo,
    CommitInfo,
    Patch,
    RawStatusRecord,
    ReferenceInfo,
    TreeInfo,
)
from gitoscope.git.objects import (
    looks_binary,
    parse_batch_check,
    parse_commit,
    parse_for_each_ref,
    parse_ls_tree,
    parse_name_list,
)
from gitoscope.git.status_parser import parse_porcelain


class GitError(Exception):
    """Raised when git is unavailable or returns an unexpected error."""


class GitObjectNotFound(GitError):
    """Raised when an identifier does not name an object of the expected kind."""


def _run_git(
    args: list[str],
    cwd: Path,
    timeout: int = 30,
    input: Optional[str] = None,
) -> str:
    """Run a git command and return stdout. Raises GitError on failure.

    Output is decoded by hand: text mode would translate CRLF line endings.
    """
    logger.trace("git {}", " ".join(args))
    try:
        result = subprocess.run(
            ["git", "-c", "core.quotepath=false", *args],
            cwd=cwd,
            input=input.encode("utf-8") if input is not None else None,
            capture_output=True,
            timeout=timeout,
        )
    except FileNotFoundError:
        raise GitError("git is not installed or not on PATH")
    except subprocess.TimeoutExpired:
        raise GitError(f"git command timed out after {timeout}s: git {' '.join(args)}")

    stdout = result.stdout.decode("utf-8", errors="replace")
    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace").strip()
        # Quiet lookups (rev-parse -q, symbolic-ref -q) fail without output
        if not stderr or "fatal" not in stderr.lower():
            return stdout
        raise GitError(f"git error: {stderr}")
    return stdout


def get_repo_root(cwd: Optional[Path] = None, timeout: int = 30) -> Path:
    """Return the root of the git repository containing *cwd*."""
    cwd = cwd or Path.cwd()
    if not cwd.is_dir():
        raise GitError(f"Not a directory: {cwd}")
    out = _run_git(["rev-parse", "--show-toplevel"], cwd=cwd, timeout=timeout)
    return Path(out.strip())


def _literal(path: str) -> str:
    return f":(literal){path}"


class Repository:
    """A handle on one repository. Cheap to create; one is opened per call."""

    def __init__(self, root: Path, timeout: int = 30) -> None:
        self.root = root
        self.timeout = timeout

    @classmethod
    async def open(cls, path: Path, timeout: int = 30) -> "Repository":
        root = await asyncio.to_thread(get_repo_root, Path(path), timeout)
        logger.debug("Opened repository at {}", root)
        return cls(root, timeout)

    async def _git(self, args: List[str], input: Optional[str] = None) -> str:
        return await asyncio.to_thread(_run_git, args, self.root, self.timeout, input)

    # ---- HEAD & trees ----

    async def head_commit_id(self) -> Optional[str]:
        """Return the HEAD commit id, or None on an unborn branch."""
        out = await self._git(["rev-parse", "-q", "--verify", "HEAD^{commit}"])
        return out.strip() or None

    async def tree_files(self, commit_id: str) -> List[str]:
        """Return every blob path in the commit's tree (recursive walk)."""
        out = await self._git(["ls-tree", "-r", "--name-only", "-z", commit_id])
        return parse_name_list(out)

    async def head_tree_files(self) -> List[str]:
        commit_id = await self.head_commit_id()
        if commit_id is None:
            return []
        return await self.tree_files(commit_id)

    # ---- status ----

    async def status(self, include_ignored: bool = False) -> List[RawStatusRecord]:
        args = ["status", "--porcelain=v1", "-z", "--no-renames", "--untracked-files=all"]
        if include_ignored:
            args.append("--ignored=matching")
        out = await self._git(args)
        return parse_porcelain(out)

    # ---- object lookup ----

    async def object_info(self, name: str) -> Optional[tuple[str, str, int]]:
        """Resolve *name* (id, ref, or ``rev:path``) → (oid, type, size)."""
        out = await self._git(["cat-file", "--batch-check"], input=name + "\n")
        return parse_batch_check(out)

    async def _expect(self, name: str, obj_type: str) -> tuple[str, int]:
        info = await self.object_info(name)
        if info is None or info[1] != obj_type:
            raise GitObjectNotFound(f"No {obj_type} found for {name!r}")
        return info[0], info[2]

    async def blob_text(self, commit_id: str, path: str) -> str:
        """Return the text of *path* in the commit's tree."""
        oid, _ = await self._expect(f"{commit_id}:{path}", "blob")
        return await self._git(["cat-file", "blob", oid])

    async def get_commit(self, commit_id: str) -> CommitInfo:
        oid, _ = await self._expect(commit_id, "commit")
        raw = await self._git(["cat-file", "commit", oid])
        return parse_commit(oid, raw)

    async def get_tree(self, tree_id: str) -> TreeInfo:
        oid, _ = await self._expect(tree_id, "tree")
        out = await self._git(["ls-tree", "-z", oid])
        return TreeInfo(id=oid, entries=parse_ls_tree(out))

    async def get_blob(self, blob_id: str) -> BlobInfo:
        oid, size = await self._expect(blob_id, "blob")
        content = await self._git(["cat-file", "blob", oid])
        return BlobInfo(id=oid, size=size, is_binary=looks_binary(content), content=content)

    # ---- references ----

    async def references(self) -> List[ReferenceInfo]:
        out = await self._git(
            ["for-each-ref", "--format=%(refname)%00%(objectname)%00%(symref)"]
        )
        return parse_for_each_ref(out)

    async def head(self) -> ReferenceInfo:
        """Return HEAD as a reference; ``symbolic_target`` is None when detached."""
        symbolic, target = await asyncio.gather(
            self._git(["symbolic-ref", "-q", "HEAD"]),
            self.head_commit_id(),
        )
        return ReferenceInfo(
            name="HEAD",
            target=target,
            symbolic_target=symbolic.strip() or None,
            is_head=True,
        )

    # ---- diffs ----

    async def diff_tree_to_index(
        self, commit_id: str, path: Optional[str] = None, context_lines: int = 0
    ) -> List[Patch]:
        """Diff the commit's tree against the index (staged changes)."""
        return await self._diff(["--cached", commit_id], path, context_lines)

    async def diff_tree_to_workdir(
        self, commit_id: str, path: Optional[str] = None, context_lines: int = 0
    ) -> List[Patch]:
        """Diff the commit's tree against the working directory."""
        return await self._diff([commit_id], path, context_lines)

    async def _diff(
        self, target: List[str], path: Optional[str], context_lines: int
    ) -> List[Patch]:
        args = [
            "diff",
            *target,
            f"--unified={context_lines}",
            "--no-color",
            "--no-renames",
            "--no-ext-diff",
            "--no-textconv",
            "--src-prefix=a/",
            "--dst-prefix=b/",
        ]
        if path is not None:
            args += ["--", _literal(path)]
        out = await self._git(args)
        return list(DiffParser(out).parse())
