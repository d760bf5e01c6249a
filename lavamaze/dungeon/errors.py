"""Dungeon generation error types.

Only failures that cross the generator boundary are exceptions. Failures inside
one attempt (no exit candidate, disconnected floor) travel as
``AttemptResult.reason`` strings and are retried by the pipeline.
"""
from __future__ import annotations

from typing import List


class DungeonError(Exception):
    """Base class for dungeon generation errors."""


class InvalidDungeonConfig(DungeonError, ValueError):
    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class GenerationExhausted(DungeonError):
    """Every bounded attempt failed; the caller decides the fallback."""

    def __init__(self, seed: int, attempts: int, reasons: List[str]):
        super().__init__(f"dungeon generation failed after {attempts} attempts (seed={seed})")
        self.seed = seed
        self.attempts = attempts
        self.reasons = reasons


__all__ = ["DungeonError", "InvalidDungeonConfig", "GenerationExhausted"]
