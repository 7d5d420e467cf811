"""Configuration schema: dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional

OutputFormat = Literal["terminal", "json", "yaml"]
LogLevel = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]

OUTPUT_FORMATS = ("terminal", "json", "yaml")
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


@dataclass
class RepositoryConfig:
    path: str = "."
    git_timeout: int = 30  # seconds per git invocation
    include_ignored: bool = False


@dataclass
class DiffConfig:
    context_lines: int = 0  # --unified=N when extracting hunks


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"


@dataclass
class LoggingConfig:
    level: LogLevel = "WARNING"
    file: Optional[str] = None
    rotation: str = "10 MB"


@dataclass
class GitoscopeConfig:
    version: str = "1.0"
    repository: RepositoryConfig = field(default_factory=RepositoryConfig)
    diff: DiffConfig = field(default_factory=DiffConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
