from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file, returning an empty dict if it's blank."""
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def load_searches(path: Path) -> list[dict[str, Any]]:
    """
    Load saved searches from a YAML file.

    The file holds a top-level ``searches`` list; each entry is a mapping of
    filter options with an optional ``name``. Entries that are not mappings
    are skipped.
    """
    data = load_yaml(path)
    return [dict(search) for search in data.get("searches", []) if isinstance(search, dict)]
