"""crucible.search
==================

Uniform-cost search over the expanded ``(position, direction, streak)`` state
space. Folding the movement history into the node keeps the streak limits
local to each expansion, so a plain Dijkstra loop finds the optimum.
"""

from __future__ import annotations

import heapq
import itertools
import time
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from .constants import PRESETS
from .grid import Grid
from .types import Cost, Direction, Limits, Position, SearchState

# One seed per axis; the first move continues the seeded direction.
SEED_DIRECTIONS: Tuple[Direction, ...] = (Direction.RIGHT, Direction.DOWN)

Frontier = List[Tuple[Cost, int, SearchState]]


# -----------------------------------------------------------------------------
# Configs
# -----------------------------------------------------------------------------
@dataclass
class SearchConfig:
    """Configuration knobs for a single search.

    ``start`` and ``end`` default to the top-left and bottom-right corners of
    whichever grid the config is resolved against.
    """

    min_streak: int = 1
    max_streak: int = 3
    start: Optional[Position] = None
    end: Optional[Position] = None
    verbose: bool = False

    def __post_init__(self) -> None:
        self.min_streak = int(self.min_streak)
        self.max_streak = int(self.max_streak)
        # JSON round-trips turn tuples into lists.
        if self.start is not None:
            self.start = (int(self.start[0]), int(self.start[1]))
        if self.end is not None:
            self.end = (int(self.end[0]), int(self.end[1]))

    @classmethod
    def from_preset(cls, part: int, **overrides) -> "SearchConfig":
        """Build the config for puzzle ``part`` (1 or 2)."""

        if part not in PRESETS:
            raise ValueError(f"Unknown part {part!r}; expected one of {sorted(PRESETS)}")
        min_streak, max_streak = PRESETS[part]
        return cls(min_streak=min_streak, max_streak=max_streak, **overrides)

    @property
    def limits(self) -> Limits:
        return self.min_streak, self.max_streak

    def resolve(self, grid: Grid) -> Tuple[Position, Position]:
        """Return ``(start, end)`` with defaults filled in from ``grid``."""

        start = self.start if self.start is not None else grid.top_left
        end = self.end if self.end is not None else grid.bottom_right
        return start, end


@dataclass
class SearchStats:
    time_elapsed: float = 0.0
    popped: int = 0
    pushed: int = 0
    stale_skipped: int = 0
    states_recorded: int = 0
    reached_goal: bool = False


@dataclass
class SearchResult:
    """Outcome of one search: the minimal cost (``None`` if unreachable) and counters."""

    cost: Optional[Cost]
    stats: SearchStats = field(default_factory=SearchStats)

    @property
    def reachable(self) -> bool:
        return self.cost is not None


def validate_request(
    grid: Grid,
    start: Position,
    end: Position,
    min_streak: int,
    max_streak: int,
) -> None:
    """Check the preconditions :func:`shortest_path` assumes.

    The engine itself never calls this; collaborators that accept user input
    (the CLI, :mod:`crucible.solver`) do, before handing the request over.

    Raises
    ------
    ValueError
        If ``start``/``end`` lie outside ``grid`` or the streak limits are not
        ``1 <= min_streak <= max_streak``.
    """

    if not grid.in_bounds(start):
        raise ValueError(f"start {start} is outside the {grid.width}x{grid.height} grid")
    if not grid.in_bounds(end):
        raise ValueError(f"end {end} is outside the {grid.width}x{grid.height} grid")
    if min_streak < 1:
        raise ValueError(f"min_streak must be positive, got {min_streak}")
    if min_streak > max_streak:
        raise ValueError(f"min_streak ({min_streak}) exceeds max_streak ({max_streak})")


class ConstrainedDijkstra:
    """Minimum entry-cost search honouring minimum and maximum straight runs.

    Parameters
    ----------
    grid:
        Shared read-only cost grid.
    start, end:
        In-bounds positions. The start cell is never charged.
    min_streak:
        Moves that must be made in a direction before turning or stopping.
    max_streak:
        Moves allowed in a direction before a turn is forced.

    Notes
    -----
    Preconditions are not checked here (see :func:`validate_request`). Each
    instance owns its best-cost map and frontier, so separate instances may run
    concurrently on the same :class:`Grid`.
    """

    def __init__(
        self,
        grid: Grid,
        start: Position,
        end: Position,
        min_streak: int,
        max_streak: int,
    ) -> None:
        self.grid = grid
        self.start = start
        self.end = end
        self.min_streak = min_streak
        self.max_streak = max_streak
        self._rows = grid.to_rows()

    def _moves(self, state: SearchState) -> Iterator[SearchState]:
        """Yield every legal successor of ``state``.

        Seed states (streak 0) can never satisfy ``min_streak``, so their only
        move is to continue in the seeded direction.
        """

        for direction, nxt in self.grid.neighbours(state.position, state.direction):
            if direction is state.direction:
                if state.streak < self.max_streak:
                    yield SearchState(nxt, direction, state.streak + 1)
            elif state.streak >= self.min_streak:
                yield SearchState(nxt, direction, 1)

    def run(self) -> SearchResult:
        """Execute the search and return the optimal cost with statistics."""

        started = time.time()
        stats = SearchStats()
        best: Dict[SearchState, Cost] = {}
        frontier: Frontier = []
        tiebreak = itertools.count()

        for direction in SEED_DIRECTIONS:
            seed = SearchState(self.start, direction, 0)
            best[seed] = 0
            heapq.heappush(frontier, (0, next(tiebreak), seed))
            stats.pushed += 1

        result_cost: Optional[Cost] = None
        while frontier:
            cost, _, state = heapq.heappop(frontier)
            stats.popped += 1

            if best.get(state, cost) < cost:
                stats.stale_skipped += 1
                continue

            if state.position == self.end and state.streak >= self.min_streak:
                result_cost = cost
                stats.reached_goal = True
                break

            for nxt in self._moves(state):
                x, y = nxt.position
                nxt_cost = cost + self._rows[y][x]
                known = best.get(nxt)
                if known is not None and known <= nxt_cost:
                    continue
                best[nxt] = nxt_cost
                heapq.heappush(frontier, (nxt_cost, next(tiebreak), nxt))
                stats.pushed += 1

        stats.states_recorded = len(best)
        stats.time_elapsed = time.time() - started
        return SearchResult(cost=result_cost, stats=stats)


def shortest_path(
    grid: Grid,
    start: Position,
    end: Position,
    min_streak: int,
    max_streak: int,
) -> Optional[Cost]:
    """Return the minimal entry cost from ``start`` to ``end`` or ``None``.

    ``None`` means no path satisfies the streak limits; it is an ordinary
    result, not an error.
    """

    return ConstrainedDijkstra(grid, start, end, min_streak, max_streak).run().cost


__all__ = [
    "SEED_DIRECTIONS",
    "SearchConfig",
    "SearchStats",
    "SearchResult",
    "ConstrainedDijkstra",
    "validate_request",
    "shortest_path",
]
