"""crucible.memory
==================

Persistence helpers for caching solved costs between runs.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any, Dict, Optional

from .constants import MEMORY_DB
from .grid import Grid
from .types import Position


def hash_request(
    grid: Grid,
    start: Position,
    end: Position,
    min_streak: int,
    max_streak: int,
) -> str:
    """Stable hash of a search request used as a memory key."""

    payload = {
        "rows": grid.to_rows(),
        "start": list(start),
        "end": list(end),
        "limits": [min_streak, max_streak],
    }
    return hashlib.md5(json.dumps(payload, sort_keys=True).encode()).hexdigest()


def load_memory_db(path: Optional[str] = None) -> Dict[str, Any]:
    """Load memoised costs from :data:`MEMORY_DB` (or ``path``)."""

    db_path = Path(path or MEMORY_DB)
    if not db_path.exists():
        return {"results": {}}
    raw = json.loads(db_path.read_text())
    if not isinstance(raw, dict):
        return {"results": {}}
    raw.setdefault("results", {})
    return raw


def save_memory_db(db: Dict[str, Any], path: Optional[str] = None) -> None:
    """Persist ``db`` with indentation for readability."""

    Path(path or MEMORY_DB).write_text(json.dumps(db, indent=2))


__all__ = ["hash_request", "load_memory_db", "save_memory_db"]
