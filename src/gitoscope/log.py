"""Loguru sink setup for the command line and embedding applications."""

from __future__ import annotations

import sys

from loguru import logger

from gitoscope.config.schema import LoggingConfig

_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def configure_logging(cfg: LoggingConfig, *, verbose: bool = False) -> None:
    """Replace loguru's default sink and enable the ``gitoscope`` logger."""
    level = "DEBUG" if verbose else cfg.level
    logger.remove()
    logger.add(sys.stderr, level=level, format=_FORMAT)
    if cfg.file:
        logger.add(cfg.file, level="DEBUG", rotation=cfg.rotation)
    logger.enable("gitoscope")
