import os
from dataclasses import dataclass
from typing import Any, Optional

from flask import current_app, has_app_context

from .errors import InvalidDungeonConfig


@dataclass
class DungeonConfig:
    """Tuning knobs for one generation call.

    Defaults reproduce the 35x35 arcade maze: leaves never under 6 tiles, any
    leaf wider or taller than 20 is always split and smaller ones split 75% of
    the time, rooms at least 4x4, 5% of floor-facing walls turned to lava, and
    the exit at least 5 slides from the start.
    """

    width: int = 35
    height: int = 35
    seed: Optional[Any] = None
    min_leaf_size: int = 6
    max_leaf_size: int = 20
    split_chance: float = 0.75
    min_room_size: int = 4
    hazard_fraction: float = 0.05
    min_exit_distance: int = 5
    collectible_chance: float = 0.25
    collectible_attempts: int = 20
    max_attempts: int = 100
    require_connected_floor: bool = True
    enable_metrics: bool = True

    def validate(self) -> "DungeonConfig":
        if self.min_room_size < 2:
            raise InvalidDungeonConfig("min_room_size", "must be at least 2")
        if self.min_leaf_size < self.min_room_size + 2:
            raise InvalidDungeonConfig("min_leaf_size", "must leave a one tile margin around the smallest room")
        if self.max_leaf_size < self.min_leaf_size:
            raise InvalidDungeonConfig("max_leaf_size", "must not be below min_leaf_size")
        for name in ("width", "height"):
            if getattr(self, name) < self.min_leaf_size:
                raise InvalidDungeonConfig(name, f"must be at least {self.min_leaf_size}")
        for name in ("split_chance", "hazard_fraction", "collectible_chance"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise InvalidDungeonConfig(name, "must be within [0, 1]")
        if self.min_exit_distance < 1:
            raise InvalidDungeonConfig("min_exit_distance", "must be at least 1")
        if self.max_attempts < 1:
            raise InvalidDungeonConfig("max_attempts", "must be at least 1")
        if self.collectible_attempts < 0:
            raise InvalidDungeonConfig("collectible_attempts", "must not be negative")
        return self


_TRUTHY_OFF = {"0", "false", "no", "off", ""}


def _parse_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() not in _TRUTHY_OFF


# env / app config key -> (attribute, parser)
OVERRIDE_KEYS = {
    "DUNGEON_MAX_ATTEMPTS": ("max_attempts", int),
    "DUNGEON_MIN_EXIT_DISTANCE": ("min_exit_distance", int),
    "DUNGEON_HAZARD_FRACTION": ("hazard_fraction", float),
    "DUNGEON_COLLECTIBLE_CHANCE": ("collectible_chance", float),
    "DUNGEON_REQUIRE_CONNECTED_FLOOR": ("require_connected_floor", _parse_bool),
    "DUNGEON_ENABLE_GENERATION_METRICS": ("enable_metrics", _parse_bool),
}


def apply_overrides(config: DungeonConfig) -> DungeonConfig:
    """Layer environment variables, then Flask app config, onto ``config``.

    Flask config wins when an app context is active so tests and the server can
    pin values without touching the process environment.
    """
    for key, (attr, parse) in OVERRIDE_KEYS.items():
        if key in os.environ:
            try:
                setattr(config, attr, parse(os.environ[key]))
            except ValueError as exc:
                raise InvalidDungeonConfig(attr, f"bad value in ${key}: {exc}") from exc
    if has_app_context():
        cfg = current_app.config
        for key, (attr, parse) in OVERRIDE_KEYS.items():
            if cfg.get(key) is None:
                continue
            try:
                setattr(config, attr, parse(cfg[key]))
            except ValueError as exc:
                raise InvalidDungeonConfig(attr, f"bad value in app config {key}: {exc}") from exc
    return config


__all__ = ["DungeonConfig", "apply_overrides", "OVERRIDE_KEYS"]
