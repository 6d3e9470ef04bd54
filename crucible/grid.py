"""crucible.grid
================

Immutable cost grid consumed by the search engine. Costs are the price of
*entering* a cell. The matrix is stored as a read-only ``numpy`` array so the
same instance can be shared by any number of searches (or pickled into worker
processes) without copying or locking.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

import numpy as np

from .constants import MAX_CELL_COST
from .encoders import DEFAULT_ENCODER, GridEncoder
from .grid_utils import dims, valid_rows
from .types import ALL_DIRECTIONS, Cost, CostRows, Direction, Position


class Grid:
    """Rectangular matrix of single digit costs.

    Parameters
    ----------
    rows:
        Row-major costs, ``rows[y][x]``. Must be non-empty, rectangular and
        hold integers in ``[0, 9]``.

    Raises
    ------
    ValueError
        If ``rows`` violates any of the constraints above.
    """

    def __init__(self, rows: CostRows) -> None:
        if not valid_rows(rows):
            height, width = dims(rows)
            raise ValueError(
                f"Grid must be a non-empty rectangle of costs in [0, {MAX_CELL_COST}] "
                f"(got {height} rows, first row width {width})"
            )
        costs = np.array(rows, dtype=np.int64)
        costs.setflags(write=False)
        self._costs = costs
        self._height, self._width = costs.shape

    @classmethod
    def from_text(cls, text: str, encoder: GridEncoder = DEFAULT_ENCODER) -> "Grid":
        """Decode ``text`` with ``encoder`` and build a grid from it."""

        return cls(encoder.to_rows(text))

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def shape(self) -> Tuple[int, int]:
        """``(height, width)`` in the same order as :func:`dims`."""

        return self._height, self._width

    @property
    def costs(self) -> np.ndarray:
        """Read-only view of the underlying cost matrix."""

        return self._costs

    @property
    def top_left(self) -> Position:
        return 0, 0

    @property
    def bottom_right(self) -> Position:
        return self._width - 1, self._height - 1

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def in_bounds(self, position: Position) -> bool:
        x, y = position
        return 0 <= x < self._width and 0 <= y < self._height

    def cost_at(self, position: Position) -> Optional[Cost]:
        """Cost of entering ``position`` or ``None`` outside the grid."""

        if not self.in_bounds(position):
            return None
        x, y = position
        return int(self._costs[y, x])

    def neighbours(
        self,
        position: Position,
        coming_from: Optional[Direction] = None,
    ) -> Iterator[Tuple[Direction, Position]]:
        """Yield ``(direction, position)`` for every in-bounds step.

        When ``coming_from`` is given the reversal of that direction is
        skipped; a crucible never turns around on the spot.
        """

        banned = coming_from.opposite if coming_from is not None else None
        for direction in ALL_DIRECTIONS:
            if direction is banned:
                continue
            nxt = direction.step(position)
            if self.in_bounds(nxt):
                yield direction, nxt

    def to_rows(self) -> CostRows:
        """Return a fresh list-of-lists copy safe for mutation by callers."""

        rows: List[List[int]] = self._costs.tolist()
        return rows

    def __reduce__(self):
        # Rebuild through __init__ so unpickled copies stay read-only.
        return Grid, (self.to_rows(),)

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"Grid({self._width}x{self._height})"


__all__ = ["Grid"]
