"""Shared test fixtures: sample diffs, temp git repos, logger reset."""

from __future__ import annotations

import subprocess
import textwrap
from pathlib import Path

import pytest
from loguru import logger

from gitoscope.config.schema import GitoscopeConfig


def git(repo: Path, *args: str) -> str:
    """Run git in *repo* and return stdout; fail the test on error."""
    result = subprocess.run(
        ["git", *args], cwd=repo, capture_output=True, text=True, check=True
    )
    return result.stdout


@pytest.fixture(autouse=True)
def _reset_logger():
    yield
    logger.remove()
    logger.disable("gitoscope")


@pytest.fixture
def sample_diff_modified() -> str:
    """One changed line, no context."""
    return textwrap.dedent("""\
        diff --git a/file.txt b/file.txt
        index de98044..a6a4c8e 100644
        --- a/file.txt
        +++ b/file.txt
        @@ -2 +2 @@
        -b
        +B
    """)


@pytest.fixture
def sample_diff_two_hunks() -> str:
    return textwrap.dedent("""\
        diff --git a/notes.md b/notes.md
        index 1111111..2222222 100644
        --- a/notes.md
        +++ b/notes.md
        @@ -1,2 +1 @@
        -one
        -two
        +ONE
        @@ -9,0 +9,2 @@
        +nine and a half
        +nine and three quarters
    """)


@pytest.fixture
def sample_diff_new_file() -> str:
    return textwrap.dedent("""\
        diff --git a/hello.py b/hello.py
        new file mode 100644
        index 0000000..e69de29
        --- /dev/null
        +++ b/hello.py
        @@ -0,0 +1,2 @@
        +def greet(name):
        +    return f"Hello, {name}!"
    """)


@pytest.fixture
def sample_diff_no_newline() -> str:
    return textwrap.dedent("""\
        diff --git a/data.txt b/data.txt
        index abc1234..def5678 100644
        --- a/data.txt
        +++ b/data.txt
        @@ -3 +3 @@
        -last
        \\ No newline at end of file
        +LAST
        \\ No newline at end of file
    """)


@pytest.fixture
def sample_diff_binary() -> str:
    return textwrap.dedent("""\
        diff --git a/image.png b/image.png
        index abc1234..def5678 100644
        Binary files a/image.png and b/image.png differ
    """)


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """A repository whose HEAD holds file.txt = "a\\nb\\nc\\n" and README.md."""
    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init", "-q")
    git(repo, "config", "user.email", "test@test.com")
    git(repo, "config", "user.name", "Test")
    git(repo, "config", "core.autocrlf", "false")
    (repo / "README.md").write_text("# Test\n")
    (repo / "file.txt").write_text("a\nb\nc\n")
    git(repo, "add", ".")
    git(repo, "commit", "-q", "-m", "init")
    return repo


@pytest.fixture
def empty_git_repo(tmp_path: Path) -> Path:
    """A repository with no commits."""
    repo = tmp_path / "empty"
    repo.mkdir()
    git(repo, "init", "-q")
    return repo


@pytest.fixture
def repo_config(tmp_git_repo: Path) -> GitoscopeConfig:
    cfg = GitoscopeConfig()
    cfg.repository.path = str(tmp_git_repo)
    return cfg
