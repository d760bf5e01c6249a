# Tile constants centralized for modular imports
from enum import Enum
from typing import List, Tuple


class TileKind(str, Enum):
    WALL = "#"
    FLOOR = "."
    OBSTACLE = "o"  # impassable blocker placed beside doors
    HAZARD = "~"  # lava
    COLLECTIBLE = "$"
    EXIT = "E"


WALL = TileKind.WALL
FLOOR = TileKind.FLOOR
OBSTACLE = TileKind.OBSTACLE
HAZARD = TileKind.HAZARD
COLLECTIBLE = TileKind.COLLECTIBLE
EXIT = TileKind.EXIT

PASSABLE = frozenset({FLOOR, COLLECTIBLE, EXIT})
BLOCKING = frozenset({WALL, OBSTACLE, HAZARD})

Coord = Tuple[int, int]
Grid = List[List[TileKind]]

# Cardinal directions (dx, dy)
DIRECTIONS: Tuple[Coord, ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))


def new_grid(width: int, height: int, fill: TileKind = WALL) -> Grid:
    # column-major: grid[x][y]
    return [[fill for _ in range(height)] for _ in range(width)]


def in_bounds(grid: Grid, x: int, y: int) -> bool:
    return 0 <= x < len(grid) and 0 <= y < len(grid[0])


def is_border(grid: Grid, x: int, y: int) -> bool:
    return x == 0 or y == 0 or x == len(grid) - 1 or y == len(grid[0]) - 1


def tile_at(grid: Grid, x: int, y: int) -> TileKind:
    """Return the tile at (x, y); anything off the grid reads as WALL."""
    if not in_bounds(grid, x, y):
        return WALL
    return grid[x][y]


def count_tiles(grid: Grid, kind: TileKind) -> int:
    return sum(1 for column in grid for t in column if t == kind)


def tiles_of(grid: Grid, kind: TileKind) -> List[Coord]:
    return [(x, y) for x, column in enumerate(grid) for y, t in enumerate(column) if t == kind]


__all__ = [
    "TileKind",
    "WALL",
    "FLOOR",
    "OBSTACLE",
    "HAZARD",
    "COLLECTIBLE",
    "EXIT",
    "PASSABLE",
    "BLOCKING",
    "Coord",
    "Grid",
    "DIRECTIONS",
    "new_grid",
    "in_bounds",
    "is_border",
    "tile_at",
    "count_tiles",
    "tiles_of",
]
