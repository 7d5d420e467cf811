"""gitoscope: tree, staged, and working-copy views of a git repository."""

from loguru import logger

__version__ = "0.1.0"

# Library code stays silent until an application configures sinks
logger.disable("gitoscope")
