"""
project: Lava Maze
module: dungeon_api.py
License: MIT

Dungeon generation API routes.

The browser client asks for a dungeon by seed and size and receives the tile
grid (row-major strings), start, exit and optional coin. Rendering, movement
and scoring all happen client side.
"""

import os
import threading
from dataclasses import astuple
from typing import Tuple

from flask import Blueprint, current_app, jsonify, request, session

from lavamaze.dungeon import Dungeon, DungeonConfig, GenerationExhausted, InvalidDungeonConfig, build_dungeon
from lavamaze.dungeon.api_helpers.tiles import dungeon_to_dict
from lavamaze.dungeon.config import apply_overrides
from lavamaze.dungeon.connectivity import analyze_reachability
from lavamaze.dungeon.rng import coerce_seed
from lavamaze.dungeon.tiles import PASSABLE, in_bounds

bp_dungeon = Blueprint("dungeon", __name__)

# Simple in-process cache keyed by the full generation config. Thread-safe with a lock
# because the dev server and production WSGI servers may serve requests concurrently.
_dungeon_cache = {}
_dungeon_cache_lock = threading.Lock()
_DUNGEON_CACHE_MAX = 8  # small LRU-ish manual cap


def get_cached_dungeon(seed: int, size_tuple: Tuple[int, int]) -> Dungeon:
    """Return the dungeon for ``seed``/``size``, generating it on a cache miss.

    Raises InvalidDungeonConfig or GenerationExhausted from the generator.
    """
    config = apply_overrides(DungeonConfig(width=size_tuple[0], height=size_tuple[1], seed=seed))
    if os.environ.get("DUNGEON_DISABLE_CACHE") == "1" or current_app.config.get("DUNGEON_DISABLE_CACHE"):
        return build_dungeon(config)
    key = astuple(config)
    with _dungeon_cache_lock:
        dungeon = _dungeon_cache.get(key)
        if dungeon is not None:
            return dungeon
    dungeon = build_dungeon(config)
    with _dungeon_cache_lock:
        _dungeon_cache[key] = dungeon
        if len(_dungeon_cache) > _DUNGEON_CACHE_MAX:
            first_key = next(iter(_dungeon_cache.keys()))
            if first_key != key:
                _dungeon_cache.pop(first_key, None)
    return dungeon


def _int_arg(name: str, default: int) -> int:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise InvalidDungeonConfig(name, "must be an integer")


def _requested_seed() -> int:
    raw = request.args.get("seed")
    if raw is None or raw.strip() == "":
        raw = session.get("dungeon_seed")
    return coerce_seed(raw)


def _requested_size() -> Tuple[int, int]:
    cfg = current_app.config
    width = _int_arg("width", cfg["DUNGEON_DEFAULT_WIDTH"])
    height = _int_arg("height", cfg["DUNGEON_DEFAULT_HEIGHT"])
    limit = cfg["DUNGEON_MAX_SIZE"]
    for name, value in (("width", width), ("height", height)):
        if value > limit:
            raise InvalidDungeonConfig(name, f"must be at most {limit}")
    return width, height


@bp_dungeon.errorhandler(InvalidDungeonConfig)
def _bad_request(exc: InvalidDungeonConfig):
    return jsonify({"error": str(exc), "field": exc.field}), 400


@bp_dungeon.errorhandler(GenerationExhausted)
def _exhausted(exc: GenerationExhausted):
    return jsonify({"error": str(exc), "seed": exc.seed, "attempts": exc.attempts, "reasons": exc.reasons}), 503


@bp_dungeon.route("/api/dungeon/generate", methods=["GET"])
def generate():
    """Return a generated dungeon.

    Query: seed (int or str, optional; falls back to the session seed, then a
    random one), width, height.
    Response: { seed, width, height, attempts, grid: [row, ...], start: [x, y],
                exit: [x, y], collectible: [x, y] | null, exit_distance, rooms,
                legend: { char: type } }
    """
    seed = _requested_seed()
    dungeon = get_cached_dungeon(seed, _requested_size())
    return jsonify(dungeon_to_dict(dungeon))


@bp_dungeon.route("/api/dungeon/reachability", methods=["GET"])
def reachability():
    """Slide distances from a tile (default: the dungeon start).

    Response: { seed, origin: [x, y], max_distance, distances: [[x, y, d], ...] }
    """
    seed = _requested_seed()
    dungeon = get_cached_dungeon(seed, _requested_size())
    x = _int_arg("x", dungeon.start[0])
    y = _int_arg("y", dungeon.start[1])
    if not in_bounds(dungeon.grid, x, y) or dungeon.grid[x][y] not in PASSABLE:
        return jsonify({"error": f"({x}, {y}) is not a passable tile"}), 400
    reach = analyze_reachability(dungeon.grid, (x, y))
    return jsonify(
        {
            "seed": dungeon.seed,
            "origin": [x, y],
            "max_distance": reach.max_distance,
            "distances": [[cx, cy, d] for (cx, cy), d in sorted(reach.distances.items())],
        }
    )


@bp_dungeon.route("/api/dungeon/gen/metrics", methods=["GET"])
def dungeon_generation_metrics():
    """Return generation metrics for a seed/size.

    Response: { seed, size: [w, h], metrics: {...}, flags: { enable_metrics } }
    If metrics are disabled, returns an empty metrics object.
    """
    seed = _requested_seed()
    dungeon = get_cached_dungeon(seed, _requested_size())
    return jsonify(
        {
            "seed": dungeon.seed,
            "size": list(dungeon.size),
            "metrics": dungeon.metrics,
            "flags": {"enable_metrics": bool(dungeon.metrics)},
        }
    )
