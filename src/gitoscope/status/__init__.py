"""Status classification and models."""

from gitoscope.status.classifier import (
    build_status,
    classify,
    diff_cached_string,
    diff_string,
    status_to_json,
)
from gitoscope.status.models import FileStatus, StatusMap

__all__ = [
    "FileStatus",
    "StatusMap",
    "build_status",
    "classify",
    "diff_cached_string",
    "diff_string",
    "status_to_json",
]
