"""Pipeline orchestration for dungeon generation.

One attempt runs the phases in order (partition, rooms, corridors, hazards,
floor check, start, reachability, exit, collectible) on a fresh grid seeded
from ``derive_seed(base_seed, attempt)``. An attempt that cannot place a valid
exit reports an ``AttemptResult`` with a reason instead of raising; the retry
loop in ``generate_dungeon`` moves on to the next attempt index and discards
everything the failed attempt built.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

from ..logging_utils import get_logger
from .config import DungeonConfig, apply_overrides
from .connectivity import ReachabilityResult, analyze_reachability, floor_is_connected
from .errors import GenerationExhausted
from .hazards import scatter_hazards
from .metrics import init_metrics
from .partition import build_tree
from .rng import RandomSource, coerce_seed, derive_seed
from .rooms import Room, carve_rooms
from .tiles import COLLECTIBLE, EXIT, FLOOR, OBSTACLE, Coord, Grid, count_tiles, new_grid, tiles_of
from .tunnels import connect_tree

log = get_logger("dungeon")

# Attempt failure reasons
NO_FLOOR = "no_floor"
FLOOR_DISCONNECTED = "floor_disconnected"
NO_EXIT_CANDIDATE = "no_exit_candidate"


@dataclass
class Dungeon:
    width: int
    height: int
    seed: int
    attempt: int
    attempt_seed: int
    grid: Grid
    start: Coord
    exit: Coord
    exit_distance: int
    collectible: Optional[Coord] = None
    rooms: List[Room] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    @classmethod
    def generate(
        cls,
        config: DungeonConfig | None = None,
        *,
        seed: Any = None,
        size: Tuple[int, int] | None = None,
    ) -> "Dungeon":
        return build_dungeon(config, seed=seed, size=size)


@dataclass
class AttemptResult:
    attempt: int
    ok: bool
    dungeon: Optional[Dungeon] = None
    reason: Optional[str] = None


@dataclass
class GenerationResult:
    seed: int
    ok: bool
    dungeon: Optional[Dungeon] = None
    attempts: int = 0
    reasons: List[str] = field(default_factory=list)


def place_collectible(
    grid: Grid, start: Coord, exit_: Coord, config: DungeonConfig, rng: RandomSource
) -> Optional[Coord]:
    """Drop a collectible on a reachable landing tile, or give up quietly.

    Reachability is recomputed because the exit was written to the grid since
    the last analysis.
    """
    reach = analyze_reachability(grid, start)
    options = sorted(reach.distances)
    for _ in range(config.collectible_attempts):
        x, y = rng.pick(options)
        if (x, y) in (start, exit_) or grid[x][y] != FLOOR:
            continue
        grid[x][y] = COLLECTIBLE
        return (x, y)
    return None


def pick_exit(reach: ReachabilityResult, min_distance: int, rng: RandomSource) -> Optional[Coord]:
    """Uniform pick among the farthest landing tiles, if they are far enough."""
    best = reach.max_distance
    if best < min_distance:
        return None
    return rng.pick(reach.at_distance(best))


def run_attempt(config: DungeonConfig, base_seed: int, attempt: int) -> AttemptResult:
    """Build and validate one dungeon on a fresh grid."""
    attempt_seed = derive_seed(base_seed, attempt)
    rng = RandomSource(attempt_seed)
    width, height = config.width, config.height
    if config.enable_metrics:
        started = time.perf_counter()
        phase_times: Dict[str, int] = {}

        def _phase(label, fn, *a, **k):
            ps = time.perf_counter(); r = fn(*a, **k); pe = time.perf_counter()
            phase_times[label] = int((pe - ps) * 1000)
            return r
    else:
        def _phase(label, fn, *a, **k):
            return fn(*a, **k)

    def _fail(reason: str) -> AttemptResult:
        log.debug(event="dungeon_attempt_failed", seed=base_seed, attempt=attempt, reason=reason)
        return AttemptResult(attempt=attempt, ok=False, reason=reason)

    grid = new_grid(width, height)
    tree = _phase("partition", build_tree, width, height, rng, config)
    rooms = _phase("rooms", carve_rooms, grid, tree, config, rng)
    corridors = _phase("corridors", connect_tree, grid, tree, rng)
    hazards = _phase("hazards", scatter_hazards, grid, config.hazard_fraction, rng)
    if config.require_connected_floor and not _phase("floor_check", floor_is_connected, grid):
        return _fail(FLOOR_DISCONNECTED)
    floors = tiles_of(grid, FLOOR)
    if not floors:
        return _fail(NO_FLOOR)
    start = rng.pick(floors)
    reach = _phase("reachability", analyze_reachability, grid, start)
    exit_ = pick_exit(reach, config.min_exit_distance, rng)
    if exit_ is None:
        return _fail(NO_EXIT_CANDIDATE)
    grid[exit_[0]][exit_[1]] = EXIT
    collectible = None
    wants_collectible = rng.chance(config.collectible_chance)
    if wants_collectible:
        collectible = _phase("collectible", place_collectible, grid, start, exit_, config, rng)

    metrics: Dict[str, Any] = {}
    if config.enable_metrics:
        metrics = init_metrics()
        metrics.update(
            leaves=len(tree.leaves()),
            rooms=len(rooms),
            corridors=len(corridors),
            obstacles=count_tiles(grid, OBSTACLE),
            hazards=len(hazards),
            landing_tiles=len(reach.distances),
            max_distance=reach.max_distance,
            exit_distance=reach.distances[exit_],
            collectible_placed=collectible is not None,
            collectible_skipped=wants_collectible and collectible is None,
            phase_ms=phase_times,
            runtime_ms=int((time.perf_counter() - started) * 1000),
        )
    dungeon = Dungeon(
        width=width,
        height=height,
        seed=base_seed,
        attempt=attempt,
        attempt_seed=attempt_seed,
        grid=grid,
        start=start,
        exit=exit_,
        exit_distance=reach.distances[exit_],
        collectible=collectible,
        rooms=rooms,
        metrics=metrics,
    )
    return AttemptResult(attempt=attempt, ok=True, dungeon=dungeon)


def _resolve(config: DungeonConfig | None, seed: Any, size: Tuple[int, int] | None) -> DungeonConfig:
    # An explicit config is taken as-is; only the default one picks up env/app overrides.
    config = apply_overrides(DungeonConfig()) if config is None else replace(config)
    if seed is not None:
        config.seed = seed
    if size is not None:
        config.width, config.height = size[0], size[1]
    config.seed = coerce_seed(config.seed)
    return config.validate()


def generate_dungeon(
    config: DungeonConfig | None = None,
    *,
    seed: Any = None,
    size: Tuple[int, int] | None = None,
) -> GenerationResult:
    """Generate a validated dungeon, retrying up to ``config.max_attempts``.

    Raises ``InvalidDungeonConfig`` for unusable settings; every other failure
    is reported through the returned ``GenerationResult``.
    """
    config = _resolve(config, seed, size)
    base_seed = config.seed
    reasons: List[str] = []
    total_started = time.perf_counter()
    for attempt in range(config.max_attempts):
        result = run_attempt(config, base_seed, attempt)
        if not result.ok:
            reasons.append(result.reason)
            continue
        dungeon = result.dungeon
        if config.enable_metrics:
            dungeon.metrics["attempts"] = attempt + 1
            dungeon.metrics["failure_reasons"] = list(reasons)
            dungeon.metrics["total_runtime_ms"] = int((time.perf_counter() - total_started) * 1000)
        log.debug(
            event="dungeon_generated",
            seed=base_seed,
            attempts=attempt + 1,
            size=f"{config.width}x{config.height}",
            exit_distance=dungeon.exit_distance,
        )
        return GenerationResult(seed=base_seed, ok=True, dungeon=dungeon, attempts=attempt + 1, reasons=reasons)
    log.warn(event="dungeon_generation_exhausted", seed=base_seed, attempts=config.max_attempts)
    return GenerationResult(seed=base_seed, ok=False, attempts=config.max_attempts, reasons=reasons)


def build_dungeon(
    config: DungeonConfig | None = None,
    *,
    seed: Any = None,
    size: Tuple[int, int] | None = None,
) -> Dungeon:
    """Like ``generate_dungeon`` but raises ``GenerationExhausted`` on failure."""
    result = generate_dungeon(config, seed=seed, size=size)
    if not result.ok:
        raise GenerationExhausted(result.seed, result.attempts, result.reasons)
    return result.dungeon


__all__ = [
    "Dungeon",
    "AttemptResult",
    "GenerationResult",
    "run_attempt",
    "generate_dungeon",
    "build_dungeon",
    "place_collectible",
    "pick_exit",
    "NO_FLOOR",
    "FLOOR_DISCONNECTED",
    "NO_EXIT_CANDIDATE",
]
