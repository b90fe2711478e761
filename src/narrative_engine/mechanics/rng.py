"""Injectable random source. Every random draw in the engine goes through here."""
from __future__ import annotations

import math
import random
from typing import Protocol, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """Anything with ``random() -> float in [0, 1)``. ``random.Random`` qualifies."""

    def random(self) -> float: ...


def default_source(seed: int | None = None) -> RandomSource:
    """Entropy-backed source for production, seeded ``random.Random`` when a seed is given."""
    if seed is None:
        return random.SystemRandom()
    return random.Random(seed)


def randint(rng: RandomSource, lo: int, hi: int) -> int:
    """Uniform integer in [lo, hi], both inclusive."""
    if hi < lo:
        lo, hi = hi, lo
    return lo + math.floor(rng.random() * (hi - lo + 1))


def chance(rng: RandomSource, probability: float) -> bool:
    return rng.random() < probability


def choice(rng: RandomSource, options: Sequence[T]) -> T:
    if not options:
        raise IndexError("Cannot choose from an empty sequence")
    return options[math.floor(rng.random() * len(options))]
