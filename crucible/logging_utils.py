"""crucible.logging_utils
=========================

Simple logging utilities, mainly for recording unreachable searches so the
offending grids and limits can be reviewed later.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from .constants import FAIL_LOG
from .encoders import DEFAULT_ENCODER
from .grid import Grid
from .types import Limits, Position


def log_unreachable(
    label: str,
    grid: Grid,
    start: Position,
    end: Position,
    limits: Limits,
    path: Optional[str] = None,
) -> None:
    """Append a JSON line describing an unreachable search to :data:`FAIL_LOG`."""

    min_streak, max_streak = limits
    entry = {
        "label": label,
        "start": list(start),
        "end": list(end),
        "min_streak": min_streak,
        "max_streak": max_streak,
        "grid": DEFAULT_ENCODER.to_text(grid.to_rows()).splitlines(),
    }
    with Path(path or FAIL_LOG).open("a") as handle:
        handle.write(json.dumps(entry) + "\n")


__all__ = ["log_unreachable"]
