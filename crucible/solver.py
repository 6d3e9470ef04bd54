"""crucible.solver
==================

High-level orchestration that stitches together decoding, request validation
and the search engine. Functions in this module are the primary public API
used by the CLI.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional

from .encoders import DEFAULT_ENCODER, GridEncoder
from .grid import Grid
from .search import ConstrainedDijkstra, SearchConfig, SearchResult, validate_request
from .types import Position


def solve_grid(grid: Grid, cfg: SearchConfig) -> SearchResult:
    """Validate ``cfg`` against ``grid`` and run one search.

    Raises
    ------
    ValueError
        If the resolved request violates the engine's preconditions.
    """

    start, end = cfg.resolve(grid)
    validate_request(grid, start, end, cfg.min_streak, cfg.max_streak)
    result = ConstrainedDijkstra(grid, start, end, cfg.min_streak, cfg.max_streak).run()
    if cfg.verbose:
        stats = result.stats
        print(
            f"[search] {start} -> {end} limits={cfg.limits} cost={result.cost} "
            f"popped={stats.popped} pushed={stats.pushed} stale={stats.stale_skipped} "
            f"in {stats.time_elapsed:.3f}s"
        )
    return result


def solve_text(
    text: str,
    cfg: SearchConfig,
    encoder: GridEncoder = DEFAULT_ENCODER,
) -> SearchResult:
    """Decode ``text`` and solve it with ``cfg``."""

    return solve_grid(Grid.from_text(text, encoder), cfg)


def solve_parts(
    grid: Grid,
    parts: Iterable[int] = (1, 2),
    start: Optional[Position] = None,
    end: Optional[Position] = None,
    verbose: bool = False,
) -> Dict[int, SearchResult]:
    """Run the preset crucibles for each of ``parts`` on ``grid``.

    Part 1 is the normal crucible, part 2 the ultra crucible (see
    :data:`crucible.constants.PRESETS`). Both travel from ``start`` to ``end``,
    defaulting to the top-left and bottom-right corners.
    """

    results: Dict[int, SearchResult] = {}
    for part in parts:
        cfg = SearchConfig.from_preset(part, start=start, end=end, verbose=verbose)
        results[part] = solve_grid(grid, cfg)
    return results


__all__ = ["solve_grid", "solve_text", "solve_parts"]
