"""JSON and YAML reporters for machine consumers."""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable

import yaml

from gitoscope.content.models import ContentResult
from gitoscope.status.models import StatusMap


def status_to_dict(status: StatusMap) -> Dict[str, Any]:
    """Convert a StatusMap to a serialisable dict, sorted by path."""
    return {path: status[path].to_dict() for path in sorted(status)}


def content_to_dict(path: str, view: str, result: ContentResult) -> Dict[str, Any]:
    return {
        "path": path,
        "view": view,
        "headLookup": result.head_lookup.value,
        **({"error": result.error} if result.error else {}),
        "content": result.text,
    }


def objects_to_list(items: Iterable[Any]) -> list:
    return [item.to_dict() for item in items]


def render(data: Any) -> str:
    """Return formatted JSON string."""
    return json.dumps(data, indent=2)


def render_yaml(data: Any) -> str:
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
