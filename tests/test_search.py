from __future__ import annotations

import random
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from crucible.grid import Grid
from crucible.grid_utils import make_rows
from crucible.search import (
    ConstrainedDijkstra,
    SearchConfig,
    shortest_path,
    validate_request,
)
from crucible.solver import solve_grid, solve_parts, solve_text
from crucible.types import Direction, SearchState

CLASSIC = """\
2413432311323
3215453535623
3255245654254
3446585845452
4546657867536
1438598798454
4457876987766
3637877979653
4654967986887
4564679986453
1224686865563
2546548887735
4322674655533
"""

LONG_CORRIDOR = """\
111111111111
999999999991
999999999991
999999999991
999999999991
"""


def corner_path(grid: Grid, min_streak: int, max_streak: int) -> Optional[int]:
    return shortest_path(grid, grid.top_left, grid.bottom_right, min_streak, max_streak)


def reference_cost(
    rows: List[List[int]],
    start: Tuple[int, int],
    end: Tuple[int, int],
    min_streak: int,
    max_streak: int,
) -> Optional[int]:
    """Relax every edge of the expanded state graph until nothing changes."""

    height, width = len(rows), len(rows[0])
    deltas = {"U": (0, -1), "D": (0, 1), "L": (-1, 0), "R": (1, 0)}
    opposite = {"U": "D", "D": "U", "L": "R", "R": "L"}
    dist: Dict[Tuple[Tuple[int, int], str, int], int] = {
        (start, "R", 0): 0,
        (start, "D", 0): 0,
    }
    changed = True
    while changed:
        changed = False
        for (pos, heading, run), cost in list(dist.items()):
            for move, (dx, dy) in deltas.items():
                nx, ny = pos[0] + dx, pos[1] + dy
                if not (0 <= nx < width and 0 <= ny < height):
                    continue
                if move == opposite[heading]:
                    continue
                if move == heading:
                    if run >= max_streak:
                        continue
                    next_run = run + 1
                else:
                    if run < min_streak:
                        continue
                    next_run = 1
                key = ((nx, ny), move, next_run)
                candidate = cost + rows[ny][nx]
                if candidate < dist.get(key, candidate + 1):
                    dist[key] = candidate
                    changed = True
    finals = [cost for (pos, _, run), cost in dist.items() if pos == end and run >= min_streak]
    return min(finals) if finals else None


def test_classic_example_normal_crucible():
    grid = Grid.from_text(CLASSIC)
    assert corner_path(grid, 1, 3) == 102


def test_classic_example_ultra_crucible():
    grid = Grid.from_text(CLASSIC)
    assert corner_path(grid, 4, 10) == 94


def test_long_corridor_ultra_crucible():
    grid = Grid.from_text(LONG_CORRIDOR)
    assert corner_path(grid, 4, 10) == 71


def test_zigzag_on_uniform_grid():
    grid = Grid(make_rows(5, 5, fill=1))
    assert shortest_path(grid, (0, 0), (4, 4), 1, 1) == 8


def test_matches_exhaustive_reference_on_small_grids():
    rng = random.Random(1337)
    for _ in range(40):
        height = rng.randint(1, 4)
        width = rng.randint(2, 4)
        rows = [[rng.randint(0, 9) for _ in range(width)] for _ in range(height)]
        grid = Grid(rows)
        min_streak = rng.randint(1, 3)
        max_streak = rng.randint(min_streak, 4)
        start = (rng.randrange(width), rng.randrange(height))
        end = (rng.randrange(width), rng.randrange(height))
        expected = reference_cost(rows, start, end, min_streak, max_streak)
        got = shortest_path(grid, start, end, min_streak, max_streak)
        assert got == expected, (rows, start, end, min_streak, max_streak)


def test_deterministic_across_runs():
    grid = Grid.from_text(CLASSIC)
    first = ConstrainedDijkstra(grid, (0, 0), (12, 12), 4, 10).run()
    second = ConstrainedDijkstra(grid, (0, 0), (12, 12), 4, 10).run()
    assert first.cost == second.cost == 94
    assert first.stats.popped == second.stats.popped
    assert first.stats.pushed == second.stats.pushed


def test_more_freedom_never_costs_more():
    grid = Grid.from_text(CLASSIC)
    costs = [corner_path(grid, 1, max_streak) for max_streak in range(1, 8)]
    as_numbers = [float("inf") if cost is None else cost for cost in costs]
    assert as_numbers == sorted(as_numbers, reverse=True)
    assert as_numbers[2] == 102


def test_longer_minimum_never_costs_less():
    grid = Grid.from_text(CLASSIC)
    costs = [corner_path(grid, min_streak, 10) for min_streak in range(1, 6)]
    as_numbers = [float("inf") if cost is None else cost for cost in costs]
    assert as_numbers == sorted(as_numbers)


def test_unreachable_when_run_exceeds_maximum():
    grid = Grid([[1, 1, 1, 1, 1]])
    assert shortest_path(grid, (0, 0), (4, 0), 1, 3) is None
    assert shortest_path(grid, (0, 0), (4, 0), 1, 4) == 4


def test_cannot_stop_before_minimum_run():
    grid = Grid([[1, 1, 1, 1, 1]])
    assert shortest_path(grid, (0, 0), (2, 0), 3, 5) is None
    assert shortest_path(grid, (0, 0), (2, 0), 2, 5) == 2


def test_short_run_at_end_keeps_searching():
    # Reaching the corner after one step down is too short a run.
    grid = Grid([[1, 1, 9], [1, 1, 9], [1, 1, 1]])
    result = shortest_path(grid, (0, 0), (2, 2), 2, 3)
    assert result == reference_cost(grid.to_rows(), (0, 0), (2, 2), 2, 3)
    assert result is not None


def test_no_reversal_on_single_row():
    grid = Grid([[1, 1, 1]])
    assert shortest_path(grid, (0, 0), (0, 0), 1, 3) is None


def test_loop_back_to_start_charges_start_on_reentry():
    grid = Grid([[1, 2], [3, 4]])
    assert shortest_path(grid, (0, 0), (0, 0), 1, 3) == 10


def test_start_cell_is_not_charged():
    grid = Grid([[9, 1, 1]])
    assert shortest_path(grid, (0, 0), (2, 0), 1, 3) == 2


def test_first_move_never_leaves_left_or_up():
    grid = Grid([[1, 1, 1]])
    assert shortest_path(grid, (2, 0), (0, 0), 1, 3) is None
    column = Grid([[1], [1], [1]])
    assert shortest_path(column, (0, 2), (0, 0), 1, 3) is None


def test_interior_start_leaves_right_or_down():
    grid = Grid(make_rows(3, 3, fill=1))
    assert shortest_path(grid, (1, 1), (2, 2), 1, 3) == 2
    # The cheap cell to the left is never entered directly.
    detour = Grid([[9, 9, 9], [2, 5, 9], [9, 9, 9]])
    assert shortest_path(detour, (1, 1), (0, 1), 1, 3) == 20


def test_zero_cost_cells():
    grid = Grid(make_rows(3, 4, fill=0))
    assert shortest_path(grid, (0, 0), (3, 2), 1, 3) == 0


def test_stats_are_populated():
    grid = Grid.from_text(CLASSIC)
    result = ConstrainedDijkstra(grid, (0, 0), (12, 12), 1, 3).run()
    assert result.reachable
    assert result.stats.reached_goal is True
    assert result.stats.pushed >= result.stats.popped
    assert result.stats.states_recorded > 0

    blocked = ConstrainedDijkstra(Grid([[1, 1, 1, 1, 1]]), (0, 0), (4, 0), 1, 3).run()
    assert not blocked.reachable
    assert blocked.stats.reached_goal is False


def test_search_state_hashes_by_value():
    first = SearchState((1, 2), Direction.LEFT, 2)
    second = SearchState((1, 2), Direction.LEFT, 2)
    assert first == second
    assert len({first, second}) == 1
    assert Direction.LEFT.opposite is Direction.RIGHT
    assert Direction.UP.step((3, 3)) == (3, 2)


def test_validate_request_rejects_bad_input():
    grid = Grid(make_rows(2, 2))
    with pytest.raises(ValueError):
        validate_request(grid, (0, 0), (2, 0), 1, 3)
    with pytest.raises(ValueError):
        validate_request(grid, (-1, 0), (1, 1), 1, 3)
    with pytest.raises(ValueError):
        validate_request(grid, (0, 0), (1, 1), 4, 3)
    with pytest.raises(ValueError):
        validate_request(grid, (0, 0), (1, 1), 0, 3)
    validate_request(grid, (0, 0), (1, 1), 1, 1)


def test_search_config_presets_and_defaults():
    cfg = SearchConfig.from_preset(2)
    assert cfg.limits == (4, 10)
    grid = Grid(make_rows(3, 5))
    assert cfg.resolve(grid) == ((0, 0), (4, 2))
    custom = SearchConfig(min_streak=1, max_streak=2, start=[1, 1], end=[2, 0])
    assert custom.resolve(grid) == ((1, 1), (2, 0))
    with pytest.raises(ValueError):
        SearchConfig.from_preset(3)


def test_solve_parts_returns_both_answers():
    results = solve_parts(Grid.from_text(CLASSIC))
    assert {part: result.cost for part, result in results.items()} == {1: 102, 2: 94}


def test_solve_grid_validates_request():
    grid = Grid(make_rows(2, 2))
    with pytest.raises(ValueError):
        solve_grid(grid, SearchConfig(min_streak=1, max_streak=3, end=(5, 5)))


def test_solve_text_verbose_prints_counters(capsys):
    result = solve_text(CLASSIC, SearchConfig(min_streak=1, max_streak=3, verbose=True))
    assert result.cost == 102
    out = capsys.readouterr().out
    assert "cost=102" in out
    assert "popped=" in out
