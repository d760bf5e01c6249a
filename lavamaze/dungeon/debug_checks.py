"""Structural checks over finished dungeons, used by diagnostics and tests."""
from __future__ import annotations

from typing import Any, Dict, Tuple

from .config import DungeonConfig
from .connectivity import analyze_reachability, floor_regions, unreachable_floor
from .pipeline import Dungeon, generate_dungeon
from .tiles import EXIT, HAZARD, WALL, count_tiles, is_border


def analyze(dungeon: Dungeon) -> Dict[str, Any]:
    grid = dungeon.grid
    reach = analyze_reachability(grid, dungeon.start)
    width, height = dungeon.width, dungeon.height
    return {
        "exit_reachable": dungeon.exit in reach.distances,
        "exit_distance": reach.distance_to(dungeon.exit),
        "max_distance": reach.max_distance,
        "landing_tiles": len(reach.distances),
        "exit_tiles": count_tiles(grid, EXIT),
        "floor_regions": len(floor_regions(grid)),
        "unreachable_floor": sorted(unreachable_floor(grid, dungeon.start)),
        "hazard_landings": sorted(c for c in reach.distances if grid[c[0]][c[1]] == HAZARD),
        "open_border": sorted(
            (x, y)
            for x in range(width)
            for y in range(height)
            if is_border(grid, x, y) and grid[x][y] != WALL
        ),
    }


def diagnose_seed(seed: Any, size: Tuple[int, int] = (35, 35), config: DungeonConfig | None = None) -> Dict[str, Any]:
    """Generate ``seed`` and report any broken invariant; ``ok`` is False on issues."""
    config = config or DungeonConfig()
    result = generate_dungeon(config, seed=seed, size=size)
    if not result.ok:
        return {
            "seed": result.seed,
            "ok": False,
            "attempts": result.attempts,
            "issues": {"generation_exhausted": 1},
        }
    dungeon = result.dungeon
    res = analyze(dungeon)
    issues = {
        "exit_unreachable": 0 if res["exit_reachable"] else 1,
        "exit_too_close": 1 if (res["exit_distance"] or 0) < config.min_exit_distance else 0,
        "exit_tile_count": abs(res["exit_tiles"] - 1),
        "unreachable_floor": len(res["unreachable_floor"]) if config.require_connected_floor else 0,
        "hazard_landings": len(res["hazard_landings"]),
        "open_border": len(res["open_border"]),
    }
    return {
        "seed": result.seed,
        "ok": all(v == 0 for v in issues.values()),
        "attempts": result.attempts,
        "exit_distance": res["exit_distance"],
        "issues": issues,
    }


__all__ = ["analyze", "diagnose_seed"]
