"""Seeded random source used by every generation phase.

All randomness in a generation attempt flows through one ``RandomSource`` so
that a given seed always yields the same sequence of draws and therefore the
same dungeon. The module-level ``random`` functions are never touched.
"""
from __future__ import annotations

import hashlib
import random
from typing import Any, MutableSequence, Sequence, TypeVar

T = TypeVar("T")

SEED_MAX = 9223372036854775807


def _hash_seed(text: str) -> int:
    h = hashlib.sha256(text.encode("utf-8")).digest()
    return int.from_bytes(h[:8], "big") % SEED_MAX


def coerce_seed(value: Any = None) -> int:
    """Convert a user supplied seed (int, str or None) into a bounded int.

    Digit-only strings keep their numeric value so ``"42"`` and ``42`` name the
    same dungeon; other strings are hashed. ``None`` or a blank string draws a
    fresh random seed.
    """
    if value is None:
        return random.randint(1, 1_000_000)
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value % SEED_MAX
    s = str(value).strip()
    if not s:
        return random.randint(1, 1_000_000)
    if s.isdigit():
        return int(s) % SEED_MAX
    return _hash_seed(s)


def derive_seed(base_seed: int, attempt: int) -> int:
    """Independent, reproducible seed for retry ``attempt`` of ``base_seed``."""
    return _hash_seed(f"{base_seed}:{attempt}")


class RandomSource:
    def __init__(self, seed: Any = None):
        self.seed = coerce_seed(seed)
        self._rng = random.Random(self.seed)

    def next_int(self, lo: int, hi: int) -> int:
        """Uniform integer in ``[lo, hi]`` (both inclusive)."""
        if hi < lo:
            raise ValueError(f"empty range [{lo}, {hi}]")
        return self._rng.randint(lo, hi)

    def chance(self, p: float) -> bool:
        return self._rng.random() < p

    def shuffle(self, seq: MutableSequence[T]) -> MutableSequence[T]:
        # Fisher-Yates, in place
        for i in range(len(seq) - 1, 0, -1):
            j = self._rng.randint(0, i)
            seq[i], seq[j] = seq[j], seq[i]
        return seq

    def pick(self, seq: Sequence[T]) -> T:
        if not seq:
            raise ValueError("pick() from an empty sequence")
        return seq[self._rng.randint(0, len(seq) - 1)]

    def weighted_pick(self, seq: Sequence[T], weights: Sequence[float]) -> T:
        if not seq:
            raise ValueError("weighted_pick() from an empty sequence")
        if len(seq) != len(weights):
            raise ValueError("weights must match the sequence length")
        total = float(sum(weights))
        if total <= 0:
            raise ValueError("weights must sum to a positive value")
        roll = self._rng.random() * total
        acc = 0.0
        for item, w in zip(seq, weights):
            acc += w
            if roll < acc:
                return item
        # float rounding can leave roll == total; fall back to the last weighted item
        for item, w in zip(reversed(seq), reversed(weights)):
            if w > 0:
                return item
        return seq[-1]


__all__ = ["RandomSource", "coerce_seed", "derive_seed", "SEED_MAX"]
