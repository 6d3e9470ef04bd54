"""crucible.constants
=====================

Global constants used across the package. Keeping them here avoids import
cycles between modules and makes it easier to discover configurable paths.
"""

from __future__ import annotations

from typing import Dict, Tuple

MEMORY_DB = "crucible_memory.json"
FAIL_LOG = "unreachable_searches.jsonl"

MIN_CELL_COST = 0
MAX_CELL_COST = 9

# (min_streak, max_streak) for the two classic crucibles.
CRUCIBLE_LIMITS: Tuple[int, int] = (1, 3)
ULTRA_CRUCIBLE_LIMITS: Tuple[int, int] = (4, 10)

PRESETS: Dict[int, Tuple[int, int]] = {
    1: CRUCIBLE_LIMITS,
    2: ULTRA_CRUCIBLE_LIMITS,
}

__all__ = [
    "MEMORY_DB",
    "FAIL_LOG",
    "MIN_CELL_COST",
    "MAX_CELL_COST",
    "CRUCIBLE_LIMITS",
    "ULTRA_CRUCIBLE_LIMITS",
    "PRESETS",
]
