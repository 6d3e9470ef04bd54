"""crucible.encoders
====================

Textual encoding helpers for cost grids. Decoding puzzle input is kept apart
from the search engine so the engine only ever sees validated numeric rows.
The encoders are intentionally lightweight so we can swap or extend them
without touching search logic.
"""

from __future__ import annotations

from typing import Protocol

from .types import CostRows


class GridEncoder(Protocol):
    """Interface for components capable of converting cost rows to and from text.

    Implementations should be stateless; callers are free to reuse instances
    across requests.
    """

    def to_text(self, rows: CostRows) -> str:
        """Serialise ``rows`` into a human-readable text snippet."""

    def to_rows(self, text: str) -> CostRows:
        """Parse ``text`` back into cost rows."""


class MinimalGridEncoder:
    """Plain digit-based encoder matching the puzzle input format.

    Each row is a line of digits with no separators; rows are joined by
    newlines. Blank lines are ignored so trailing newlines do not matter.
    """

    def to_text(self, rows: CostRows) -> str:
        return "\n".join("".join(str(cell) for cell in row) for row in rows)

    def to_rows(self, text: str) -> CostRows:
        lines = [line.strip() for line in text.strip().splitlines() if line.strip()]
        rows: CostRows = []
        for lineno, line in enumerate(lines, start=1):
            if not line.isdigit():
                raise ValueError(f"Line {lineno} contains non-digit characters: {line!r}")
            rows.append([int(char) for char in line])
        return rows


class GridWithSeparationEncoder:
    """Encoder that inserts a custom separator between cells.

    Parameters
    ----------
    split_symbol:
        Token inserted between neighbouring cells. Defaults to ``","`` which
        keeps the files loadable as CSV.
    """

    def __init__(self, split_symbol: str = ",") -> None:
        self.split_symbol = split_symbol

    def to_text(self, rows: CostRows) -> str:
        return "\n".join(self.split_symbol.join(str(cell) for cell in row) for row in rows)

    def to_rows(self, text: str) -> CostRows:
        lines = [line.strip() for line in text.strip().splitlines() if line.strip()]
        return [[int(part) for part in line.split(self.split_symbol)] for line in lines]


DEFAULT_ENCODER: GridEncoder = MinimalGridEncoder()
"""Default encoder shared by modules that need to decode puzzle input."""


def encoder_for(separator: str | None) -> GridEncoder:
    """Return the encoder matching ``separator`` (``None`` means digits only)."""

    if not separator:
        return DEFAULT_ENCODER
    return GridWithSeparationEncoder(separator)


__all__ = [
    "GridEncoder",
    "MinimalGridEncoder",
    "GridWithSeparationEncoder",
    "DEFAULT_ENCODER",
    "encoder_for",
]
