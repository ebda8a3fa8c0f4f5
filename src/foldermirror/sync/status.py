"""Persistence of the most recent pass result."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from foldermirror.core.models import SyncResult


def save_status(result: SyncResult, path: Path) -> None:
    """Persist a pass result to a status file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as handle:
        json.dump(result.to_dict(), handle, indent=2)


def load_status(path: Path) -> dict[str, Any] | None:
    """Load the last pass result from a status file."""
    if not path.exists():
        return None
    with open(path) as handle:
        return json.load(handle)
