"""Load and merge configuration from .gitoscope.toml and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from gitoscope.config.schema import (
    LOG_LEVELS,
    OUTPUT_FORMATS,
    DiffConfig,
    GitoscopeConfig,
    LoggingConfig,
    OutputConfig,
    RepositoryConfig,
)

CONFIG_FILENAME = ".gitoscope.toml"


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(base_dir: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = base_dir / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _merge_env_overrides(cfg: GitoscopeConfig) -> None:
    """Apply GITOSCOPE_* environment variable overrides."""
    if val := os.environ.get("GITOSCOPE_REPO"):
        cfg.repository.path = val
    if val := os.environ.get("GITOSCOPE_GIT_TIMEOUT"):
        try:
            cfg.repository.git_timeout = int(val)
        except ValueError:
            pass
    if val := os.environ.get("GITOSCOPE_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("GITOSCOPE_LOG_LEVEL"):
        if val.upper() in LOG_LEVELS:
            cfg.logging.level = val.upper()  # type: ignore[assignment]


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _validate(cfg: GitoscopeConfig) -> None:
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(f"Invalid output format: {cfg.output.format}")
    if str(cfg.logging.level).upper() not in LOG_LEVELS:
        raise ConfigError(f"Invalid log level: {cfg.logging.level}")
    cfg.logging.level = str(cfg.logging.level).upper()  # type: ignore[assignment]
    if not isinstance(cfg.repository.git_timeout, int) or cfg.repository.git_timeout <= 0:
        raise ConfigError("repository.git_timeout must be a positive integer")
    if not isinstance(cfg.diff.context_lines, int) or cfg.diff.context_lines < 0:
        raise ConfigError("diff.context_lines must be a non-negative integer")


def load_config(
    base_dir: Optional[Path] = None,
    config_override: Optional[str] = None,
) -> GitoscopeConfig:
    """Load, validate, and return a GitoscopeConfig."""
    base_dir = base_dir or Path.cwd()
    config_path = find_config_file(base_dir, config_override)

    if config_path is None:
        cfg = GitoscopeConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = GitoscopeConfig(
            version=raw.get("version", "1.0"),
            repository=_build_section(raw, RepositoryConfig, "repository"),
            diff=_build_section(raw, DiffConfig, "diff"),
            output=_build_section(raw, OutputConfig, "output"),
            logging=_build_section(raw, LoggingConfig, "logging"),
        )
        # Relative repository paths are anchored at the config file
        repo_path = Path(cfg.repository.path)
        if not repo_path.is_absolute():
            cfg.repository.path = str(config_path.parent / repo_path)

    _merge_env_overrides(cfg)
    _validate(cfg)
    return cfg
