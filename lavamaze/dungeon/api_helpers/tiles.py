"""Shared tile utility helpers for the dungeon API, CLI and diagnostics.

Grids are column-major in memory (``grid[x][y]``); everything that leaves the
process is row-major so clients can index ``rows[y][x]``.
"""

from typing import Any, Dict, List

from lavamaze.dungeon.tiles import COLLECTIBLE, EXIT, FLOOR, HAZARD, OBSTACLE, WALL, Grid, TileKind

_TYPE_NAMES = {
    WALL: "wall",
    FLOOR: "floor",
    OBSTACLE: "obstacle",
    HAZARD: "lava",
    COLLECTIBLE: "coin",
    EXIT: "exit",
}


def char_to_type(ch: str) -> str:
    try:
        return _TYPE_NAMES[TileKind(ch)]
    except ValueError:
        return "wall"


def tile_legend() -> Dict[str, str]:
    """Map every tile character to the type name the client renders."""
    return {kind.value: char_to_type(kind.value) for kind in TileKind}


def grid_to_rows(grid: Grid) -> List[str]:
    width, height = len(grid), len(grid[0])
    return ["".join(grid[x][y].value for x in range(width)) for y in range(height)]


def rows_to_grid(rows: List[str]) -> Grid:
    """Inverse of ``grid_to_rows``; raises ValueError on ragged rows or unknown chars."""
    if not rows:
        raise ValueError("empty grid")
    width = len(rows[0])
    if any(len(r) != width for r in rows):
        raise ValueError("rows must all have the same length")
    return [[TileKind(rows[y][x]) for y in range(len(rows))] for x in range(width)]


def render_ascii(dungeon: Any) -> str:
    """ASCII map with the start drawn as ``@``."""
    rows = [list(r) for r in grid_to_rows(dungeon.grid)]
    sx, sy = dungeon.start
    rows[sy][sx] = "@"
    return "\n".join("".join(r) for r in rows)


def dungeon_to_dict(dungeon: Any, include_metrics: bool = False) -> Dict[str, Any]:
    out = {
        "seed": dungeon.seed,
        "width": dungeon.width,
        "height": dungeon.height,
        "attempts": dungeon.attempt + 1,
        "grid": grid_to_rows(dungeon.grid),
        "start": list(dungeon.start),
        "exit": list(dungeon.exit),
        "collectible": list(dungeon.collectible) if dungeon.collectible else None,
        "exit_distance": dungeon.exit_distance,
        "rooms": [{"x": r.x, "y": r.y, "w": r.w, "h": r.h, "doors": [list(d) for d in r.doors]} for r in dungeon.rooms],
        "legend": tile_legend(),
    }
    if include_metrics:
        out["metrics"] = dungeon.metrics
    return out
