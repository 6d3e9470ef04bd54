"""crucible.types
=================

Foundational type aliases and lightweight data structures shared by the
crucible package. Centralising them keeps every module importing the exact
same representations of positions, directions and search states.

Apart from the lookups on :class:`Direction` no behaviour lives here, so
importing the module never triggers runtime side effects.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple

# ---------------------------------------------------------------------------
# Core grid representations
# ---------------------------------------------------------------------------
Cost = int
Position = Tuple[int, int]  # (x, y) == (column, row)
CostRows = List[List[Cost]]
Limits = Tuple[int, int]  # (min_streak, max_streak)


class Direction(Enum):
    """Cardinal movement on the grid."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> Position:
        return DELTAS[self]

    @property
    def opposite(self) -> "Direction":
        return OPPOSITES[self]

    def step(self, position: Position) -> Position:
        """Return the position one cell away from ``position``."""

        dx, dy = DELTAS[self]
        return position[0] + dx, position[1] + dy


DELTAS: Dict[Direction, Position] = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

OPPOSITES: Dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

# Iteration order used when expanding a state.
ALL_DIRECTIONS: Tuple[Direction, ...] = (
    Direction.UP,
    Direction.DOWN,
    Direction.LEFT,
    Direction.RIGHT,
)


@dataclass(frozen=True)
class SearchState:
    """Node of the expanded search graph.

    Parameters
    ----------
    position:
        Cell the crucible currently occupies.
    direction:
        Direction of the last move. For the two seed states it only tells
        which axis the first move commits to.
    streak:
        Number of consecutive moves already made in ``direction``. Seed states
        carry ``0``; every state reached by a move carries a value in
        ``[1, max_streak]``.

    Notes
    -----
    The dataclass is frozen so instances hash by value and can key the
    best-cost map directly.
    """

    position: Position
    direction: Direction
    streak: int


__all__ = [
    "Cost",
    "Position",
    "CostRows",
    "Limits",
    "Direction",
    "DELTAS",
    "OPPOSITES",
    "ALL_DIRECTIONS",
    "SearchState",
]
