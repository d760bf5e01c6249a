"""Structured event lines for dungeon generation and the server CLI.

Each call prints one ``key=value`` line, or one JSON object when
``LAVAMAZE_LOG_JSON`` is on, so a seed's retry history can be grepped out of
server or CLI output. Events currently emitted:

    dungeon_attempt_failed        debug  seed, attempt, reason
                                         (no_floor | floor_disconnected | no_exit_candidate)
    dungeon_generated             debug  seed, attempts, size, exit_distance
    dungeon_generation_exhausted  warn   seed, attempts
    listen                        info   host, port, debug (run.py server)

``LAVAMAZE_LOG_LEVEL`` (debug | info | warn | error, default info) sets the
threshold. warn and error go to stderr so ``run.py generate --json`` keeps a
clean stdout. Reserved keys: level, ts, logger.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
CURRENT_LEVEL = LEVELS.get(os.getenv("LAVAMAZE_LOG_LEVEL", "info").lower(), 20)
JSON_MODE = os.getenv("LAVAMAZE_LOG_JSON", "0").lower() in ("1", "true", "yes", "on")


def set_level(name: str) -> None:
    global CURRENT_LEVEL
    if name not in LEVELS:
        raise ValueError(f"unknown log level {name!r}")
    CURRENT_LEVEL = LEVELS[name]


def _scalar(v):
    if isinstance(v, (tuple, list)):
        return ",".join(str(i) for i in v)
    return v


def _format(level: str, **fields) -> str:
    if JSON_MODE:
        rec = {k: v for k, v in fields.items() if v is not None}
        rec["level"] = level
        rec["ts"] = int(time.time())
        return json.dumps(rec, separators=(",", ":"), default=str)
    parts = [f"level={level}", f"ts={int(time.time())}"]
    for k, v in fields.items():
        if v is None:
            continue
        v = _scalar(v)
        if isinstance(v, (int, float)):
            parts.append(f"{k}={v}")
        else:
            parts.append(f"{k}={str(v).replace(' ', '_')}")
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str | None = None):
        self.name = name or "lavamaze"

    def _log(self, lvl: str, **fields):
        if LEVELS[lvl] < CURRENT_LEVEL:
            return
        fields.setdefault("logger", self.name)
        stream = sys.stderr if LEVELS[lvl] >= LEVELS["warn"] else sys.stdout
        print(_format(lvl, **fields), file=stream)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


_LOGGER_CACHE = {}


def get_logger(name: str):
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("lavamaze")
