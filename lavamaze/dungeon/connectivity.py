"""Reachability analysis.

The player never takes single steps: a move slides in one cardinal direction
until the next tile blocks. ``analyze_reachability`` runs a breadth-first
search over those slide moves, so a distance counts slides (hops) rather than
tiles. Sliding into lava is fatal, which makes any direction that would stop
against a HAZARD tile an invalid move.

``floor_regions`` is the plain 4-neighbour flood fill used for the grid-wide
connectivity check (see ``debug_checks`` for the full structural report).
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from .tiles import DIRECTIONS, HAZARD, PASSABLE, Coord, Grid, in_bounds, tile_at


@dataclass
class ReachabilityResult:
    start: Coord
    distances: Dict[Coord, int] = field(default_factory=dict)

    @property
    def visited(self) -> Set[Coord]:
        return set(self.distances)

    @property
    def max_distance(self) -> int:
        return max(self.distances.values(), default=0)

    def distance_to(self, coord: Coord) -> Optional[int]:
        return self.distances.get(coord)

    def at_distance(self, distance: int) -> List[Coord]:
        return sorted(c for c, d in self.distances.items() if d == distance)


def slide(grid: Grid, origin: Coord, direction: Coord) -> Optional[Coord]:
    """Landing tile of a slide from ``origin``, or None for an invalid move.

    Invalid means no progress at all, or the slide stops against lava.
    """
    x, y = origin
    dx, dy = direction
    moved = False
    while tile_at(grid, x + dx, y + dy) in PASSABLE:
        x += dx
        y += dy
        moved = True
    if not moved:
        return None
    if tile_at(grid, x + dx, y + dy) == HAZARD:
        return None
    return (x, y)


def analyze_reachability(grid: Grid, start: Coord) -> ReachabilityResult:
    """Breadth-first search over slide moves from ``start``.

    The first visit of a tile fixes its distance, which BFS guarantees is the
    minimum number of slides. Any later grid mutation invalidates the result.
    """
    sx, sy = start
    if not in_bounds(grid, sx, sy) or grid[sx][sy] not in PASSABLE:
        raise ValueError(f"start {start} is not a passable tile")
    result = ReachabilityResult(start=start, distances={start: 0})
    q = deque([start])
    while q:
        cur = q.popleft()
        d = result.distances[cur]
        for direction in DIRECTIONS:
            landing = slide(grid, cur, direction)
            if landing is None or landing in result.distances:
                continue
            result.distances[landing] = d + 1
            q.append(landing)
    return result


def floor_regions(grid: Grid) -> List[Set[Coord]]:
    """4-connected components of passable tiles, largest first."""
    width, height = len(grid), len(grid[0])
    seen: Set[Coord] = set()
    regions: List[Set[Coord]] = []
    for x in range(width):
        for y in range(height):
            if (x, y) in seen or grid[x][y] not in PASSABLE:
                continue
            region = {(x, y)}
            q = deque([(x, y)])
            while q:
                cx, cy = q.popleft()
                for dx, dy in DIRECTIONS:
                    nx, ny = cx + dx, cy + dy
                    if (nx, ny) not in region and tile_at(grid, nx, ny) in PASSABLE:
                        region.add((nx, ny))
                        q.append((nx, ny))
            seen |= region
            regions.append(region)
    regions.sort(key=len, reverse=True)
    return regions


def floor_is_connected(grid: Grid) -> bool:
    return len(floor_regions(grid)) <= 1


def unreachable_floor(grid: Grid, start: Coord) -> Set[Coord]:
    """Passable tiles with no 4-neighbour walk from ``start``."""
    out: Set[Coord] = set()
    for region in floor_regions(grid):
        if start not in region:
            out |= region
    return out


__all__ = [
    "ReachabilityResult",
    "slide",
    "analyze_reachability",
    "floor_regions",
    "floor_is_connected",
    "unreachable_floor",
]
