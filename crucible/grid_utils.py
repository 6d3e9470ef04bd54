from __future__ import annotations

from typing import Tuple

from .constants import MAX_CELL_COST, MIN_CELL_COST
from .types import CostRows, Position

# ---------------------------------------------------------------------------
# Basic geometry / construction helpers
# ---------------------------------------------------------------------------
def dims(rows: CostRows) -> Tuple[int, int]:
    """Return the height and width of a row-major cost matrix.

    Parameters
    ----------
    rows:
        Matrix whose dimensions should be measured. ``rows`` may be empty or
        ragged; the function guards against those cases.

    Returns
    -------
    tuple[int, int]
        ``(height, width)`` of the matrix, the width taken from the first row.
        Empty inputs return ``(0, 0)``.
    """

    if not rows or not isinstance(rows, list):
        return 0, 0
    if not rows[0]:
        return len(rows), 0
    return len(rows), len(rows[0])


def valid_rows(rows: CostRows) -> bool:
    """Validate that ``rows`` is a non-empty rectangular matrix of digit costs."""

    if not isinstance(rows, list) or not rows:
        return False
    if not all(isinstance(row, list) for row in rows):
        return False
    width = len(rows[0])
    if width == 0:
        return False
    return all(
        len(row) == width
        and all(
            isinstance(val, int) and not isinstance(val, bool) and MIN_CELL_COST <= val <= MAX_CELL_COST
            for val in row
        )
        for row in rows
    )


def make_rows(height: int, width: int, fill: int = 1) -> CostRows:
    """Construct a cost matrix filled with a single cost."""

    if height <= 0 or width <= 0:
        return []
    return [[fill for _ in range(width)] for _ in range(height)]


def parse_position(text: str) -> Position:
    """Parse ``"x,y"`` into a position tuple.

    Raises
    ------
    ValueError
        If ``text`` does not hold exactly two comma separated integers.
    """

    parts = [part.strip() for part in text.split(",")]
    if len(parts) != 2:
        raise ValueError(f"Expected 'x,y', got {text!r}")
    return int(parts[0]), int(parts[1])


__all__ = [
    "dims",
    "valid_rows",
    "make_rows",
    "parse_position",
]
