"""Lava scattering.

Runs once carving is finished. It only turns walls into lava and never checks
reachability; the pipeline validates the result afterwards.
"""
from __future__ import annotations

from typing import List

from .rng import RandomSource
from .tiles import DIRECTIONS, FLOOR, HAZARD, WALL, Coord, Grid, is_border, tile_at


def hazard_candidates(grid: Grid) -> List[Coord]:
    """Non-border walls with at least one orthogonal FLOOR neighbour."""
    width, height = len(grid), len(grid[0])
    out: List[Coord] = []
    for x in range(width):
        for y in range(height):
            if grid[x][y] != WALL or is_border(grid, x, y):
                continue
            if any(tile_at(grid, x + dx, y + dy) == FLOOR for dx, dy in DIRECTIONS):
                out.append((x, y))
    return out


def scatter_hazards(grid: Grid, fraction: float, rng: RandomSource) -> List[Coord]:
    candidates = hazard_candidates(grid)
    rng.shuffle(candidates)
    chosen = candidates[: int(len(candidates) * fraction)]
    for x, y in chosen:
        grid[x][y] = HAZARD
    return chosen


__all__ = ["hazard_candidates", "scatter_hazards"]
