"""Public dungeon package interface.

Generation entry points, tile kinds and the error types callers need.
"""

from .config import DungeonConfig
from .connectivity import ReachabilityResult, analyze_reachability
from .errors import DungeonError, GenerationExhausted, InvalidDungeonConfig
from .pipeline import Dungeon, GenerationResult, build_dungeon, generate_dungeon
from .rng import RandomSource, coerce_seed
from .tiles import COLLECTIBLE, EXIT, FLOOR, HAZARD, OBSTACLE, WALL, TileKind  # noqa: F401

__all__ = [
    "Dungeon",
    "DungeonConfig",
    "GenerationResult",
    "ReachabilityResult",
    "RandomSource",
    "DungeonError",
    "GenerationExhausted",
    "InvalidDungeonConfig",
    "analyze_reachability",
    "build_dungeon",
    "coerce_seed",
    "generate_dungeon",
    "TileKind",
    "WALL",
    "FLOOR",
    "OBSTACLE",
    "HAZARD",
    "COLLECTIBLE",
    "EXIT",
]
