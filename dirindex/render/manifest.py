"""JSON serialization of directory listings."""

from __future__ import annotations

import json

from ..models import DirectoryIndex


def render_json(index: DirectoryIndex) -> str:
    """Serialize ``index`` with 2-space indentation and stable key order."""
    return json.dumps(index.to_dict(), indent=2, ensure_ascii=False)


def load_index(text: str) -> dict[str, object]:
    """Parse a previously written ``index.json`` document."""
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("index manifest must be a JSON object")
    return data


__all__ = ["render_json", "load_index"]
