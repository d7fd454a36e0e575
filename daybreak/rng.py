import random
from typing import Optional


class RNG(random.Random):
    """Seeded RNG so every scene component can be replayed deterministically."""


def new_rng(seed: Optional[int] = None) -> RNG:
    rng = RNG()
    rng.seed(seed)
    return rng


def random_in_range(rng: random.Random, lo: float, hi: float) -> float:
    """Uniform sample in [lo, hi)."""
    return rng.random() * (hi - lo) + lo


def coin_flip(rng: random.Random) -> bool:
    return rng.random() < 0.5
