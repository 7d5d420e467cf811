"""Facade consumed by a presentation layer.

Each call opens its own repository handle. Status and content requests fan
out their two independent backend fetches and join them before continuing.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List, Optional

from loguru import logger

from gitoscope.config.schema import GitoscopeConfig
from gitoscope.content.models import ContentResult, DiffMode
from gitoscope.content.reconstructor import build_content, tree_content
from gitoscope.git.adapter import Repository
from gitoscope.git.models import BlobInfo, CommitInfo, ReferenceInfo, TreeInfo
from gitoscope.status.classifier import status_to_json
from gitoscope.status.models import StatusMap


class Gitoscope:
    """Async operations over the configured repository."""

    def __init__(self, config: Optional[GitoscopeConfig] = None) -> None:
        self.config = config or GitoscopeConfig()

    async def _open(self) -> Repository:
        repo_cfg = self.config.repository
        return await Repository.open(Path(repo_cfg.path), repo_cfg.git_timeout)

    # ---- status ----

    async def get_status(self) -> StatusMap:
        repo = await self._open()
        records, tree_files = await asyncio.gather(
            repo.status(include_ignored=self.config.repository.include_ignored),
            repo.head_tree_files(),
        )
        logger.debug("{} status records, {} tree files", len(records), len(tree_files))
        return status_to_json(records, tree_files)

    # ---- content ----

    async def resolve_tree_content(self, path: str) -> ContentResult:
        repo = await self._open()
        return await tree_content(repo, path)

    async def resolve_cache_content(self, path: str) -> ContentResult:
        return await self._reconstruct(DiffMode.TREE_TO_INDEX, path)

    async def resolve_working_copy_content(self, path: str) -> ContentResult:
        return await self._reconstruct(DiffMode.TREE_TO_WORKDIR, path)

    async def _reconstruct(self, mode: DiffMode, path: str) -> ContentResult:
        repo = await self._open()
        return await build_content(repo, mode, path, self.config.diff.context_lines)

    async def get_tree_content(self, path: str) -> str:
        """Raw HEAD blob text, or ``''`` when it cannot be looked up."""
        return (await self.resolve_tree_content(path)).text

    async def get_cache_content(self, path: str) -> str:
        """Staged content rebuilt from the HEAD blob and the index diff."""
        return (await self.resolve_cache_content(path)).text

    async def get_working_copy_content(self, path: str) -> str:
        """Working-copy content rebuilt from the HEAD blob and the workdir diff."""
        return (await self.resolve_working_copy_content(path)).text

    # ---- raw objects ----

    async def get_commit(self, commit_id: str) -> CommitInfo:
        repo = await self._open()
        return await repo.get_commit(commit_id)

    async def get_tree(self, tree_id: str) -> TreeInfo:
        repo = await self._open()
        return await repo.get_tree(tree_id)

    async def get_blob(self, blob_id: str) -> BlobInfo:
        repo = await self._open()
        return await repo.get_blob(blob_id)

    async def get_references(self) -> List[ReferenceInfo]:
        """All references, followed by HEAD."""
        repo = await self._open()
        refs, head = await asyncio.gather(repo.references(), repo.head())
        return [*refs, head]
