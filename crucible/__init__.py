"""Public package interface for crucible."""

from .cli import main
from .grid import Grid
from .search import ConstrainedDijkstra, SearchConfig, shortest_path
from .solver import solve_grid, solve_parts, solve_text

__all__ = [
    "main",
    "Grid",
    "ConstrainedDijkstra",
    "SearchConfig",
    "shortest_path",
    "solve_grid",
    "solve_parts",
    "solve_text",
]
