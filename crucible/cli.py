"""crucible.cli
===============

Command-line entry point: decode one or more grid files, run the requested
crucible searches (optionally across worker processes) and write the results.
"""

from __future__ import annotations

import argparse
import csv
import json
import multiprocessing
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Any, Dict, List, Tuple

from .constants import PRESETS
from .encoders import encoder_for
from .grid import Grid
from .grid_utils import parse_position
from .logging_utils import log_unreachable
from .memory import hash_request, load_memory_db, save_memory_db
from .search import SearchConfig, validate_request
from .solver import solve_grid


def solve_single_search(
    label: str,
    grid: Grid,
    cfg: SearchConfig,
    memory_results: Dict[str, Any],
) -> Dict[str, Any]:
    """Worker function executed in subprocesses."""

    from time import time as now

    start_time = now()
    start, end = cfg.resolve(grid)
    key = hash_request(grid, start, end, cfg.min_streak, cfg.max_streak)
    if key in memory_results:
        return {
            "label": label,
            "cost": memory_results[key],
            "from_mem": True,
            "elapsed": now() - start_time,
            "stats": None,
            "key": key,
            "start": start,
            "end": end,
        }

    result = solve_grid(grid, cfg)
    return {
        "label": label,
        "cost": result.cost,
        "from_mem": False,
        "elapsed": now() - start_time,
        "stats": result.stats,
        "key": key,
        "start": start,
        "end": end,
    }


def _position_arg(text: str) -> Tuple[int, int]:
    try:
        return parse_position(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and execute the searches."""

    parser = argparse.ArgumentParser("crucible")
    parser.add_argument("infiles", nargs="+", help="Grid files, one row of digit costs per line")
    parser.add_argument("--part", choices=["1", "2", "both"], default="both", help="Preset crucible(s) to run")
    parser.add_argument("--min-streak", type=int, default=None, help="Custom minimum straight run (overrides --part)")
    parser.add_argument("--max-streak", type=int, default=None, help="Custom maximum straight run (overrides --part)")
    parser.add_argument("--start", type=_position_arg, default=None, help="Start position as X,Y (default top-left)")
    parser.add_argument("--end", type=_position_arg, default=None, help="End position as X,Y (default bottom-right)")
    parser.add_argument("--separator", default=None, help="Cell separator for delimited grid files")
    parser.add_argument("--max-workers", type=int, default=1, help="Number of worker processes (parallelism)")
    parser.add_argument("--outfile", default="crucible_results.json", help="Summary JSON output file")
    parser.add_argument("--no-memory", action="store_true", help="Ignore and do not update the result memory")
    parser.add_argument("--verbose", action="store_true", help="Print search counters for every run")
    args = parser.parse_args(argv)

    custom = args.min_streak is not None or args.max_streak is not None
    if custom:
        if args.min_streak is None or args.max_streak is None:
            parser.error("--min-streak and --max-streak must be given together")
        if args.min_streak < 1 or args.min_streak > args.max_streak:
            parser.error("streak limits must satisfy 1 <= --min-streak <= --max-streak")
        configs = {
            "custom": SearchConfig(
                min_streak=args.min_streak,
                max_streak=args.max_streak,
                start=args.start,
                end=args.end,
                verbose=args.verbose,
            )
        }
    else:
        parts = sorted(PRESETS) if args.part == "both" else [int(args.part)]
        configs = {
            f"part {part}": SearchConfig.from_preset(part, start=args.start, end=args.end, verbose=args.verbose)
            for part in parts
        }

    memory_payload = {"results": {}} if args.no_memory else load_memory_db()
    memory_results = memory_payload.setdefault("results", {})
    encoder = encoder_for(args.separator)

    jobs: List[Tuple[str, Grid, SearchConfig]] = []
    for infile in args.infiles:
        path = Path(infile)
        try:
            grid = Grid.from_text(path.read_text(), encoder)
        except (OSError, ValueError) as exc:
            print(f"Skipping {path}: {exc}")
            continue
        for name, cfg in configs.items():
            start, end = cfg.resolve(grid)
            try:
                validate_request(grid, start, end, cfg.min_streak, cfg.max_streak)
            except ValueError as exc:
                print(f"Skipping {infile} {name}: {exc}")
                continue
            jobs.append((f"{infile} {name}", grid, cfg))

    if args.max_workers <= 0:
        args.max_workers = multiprocessing.cpu_count()

    summary: Dict[str, Any] = {}
    stats_csv_path = Path(args.outfile).with_suffix(".stats.csv")
    with stats_csv_path.open("w", newline="") as csv_file:
        writer = csv.writer(csv_file)
        writer.writerow([
            "label",
            "cost",
            "elapsed",
            "from_mem",
            "popped",
            "pushed",
            "stale_skipped",
            "states_recorded",
        ])

        lookup = {label: (grid, cfg) for label, grid, cfg in jobs}
        with ProcessPoolExecutor(max_workers=args.max_workers) as executor:
            futures = {
                executor.submit(solve_single_search, label, grid, cfg, memory_results): label
                for label, grid, cfg in jobs
            }

            for index, future in enumerate(as_completed(futures), start=1):
                label = futures[future]
                try:
                    result = future.result()
                except Exception as exc:
                    print(f"[{index}/{len(jobs)}] {label} crashed: {exc}")
                    continue

                grid, cfg = lookup[label]
                cost = result["cost"]
                source = " (memory)" if result["from_mem"] else ""
                print(f"[{index}/{len(jobs)}] [{label}] Shortest path: {cost}{source} in {result['elapsed']:.2f}s")

                stats = result["stats"]
                writer.writerow([
                    label,
                    "" if cost is None else cost,
                    result["elapsed"],
                    result["from_mem"],
                    getattr(stats, "popped", ""),
                    getattr(stats, "pushed", ""),
                    getattr(stats, "stale_skipped", ""),
                    getattr(stats, "states_recorded", ""),
                ])
                summary[label] = {
                    "cost": cost,
                    "start": list(result["start"]),
                    "end": list(result["end"]),
                    "min_streak": cfg.min_streak,
                    "max_streak": cfg.max_streak,
                    "elapsed": result["elapsed"],
                    "from_memory": result["from_mem"],
                }

                if cost is None and not result["from_mem"]:
                    print("   -> Unreachable. Logging for review.")
                    log_unreachable(label, grid, result["start"], result["end"], cfg.limits)
                memory_results[result["key"]] = cost

    if not args.no_memory:
        save_memory_db(memory_payload)
    Path(args.outfile).write_text(json.dumps(summary, indent=2))
    print("\nResults saved to", args.outfile)
    print(f"Per-search stats saved to {stats_csv_path}")


__all__ = ["main", "solve_single_search"]
