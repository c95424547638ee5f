"""
Deterministic random source shared by every generation step.

One `random.Random` seeded with a fixed constant drives both the numeric draws
and Faker, so two runs against a fresh schema produce identical rows.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

from faker import Faker

SEED = 12345
LOCALE = "en_US"


@dataclass(frozen=True)
class RandomSource:
    """A seeded number stream and a Faker instance drawing from it."""

    rng: random.Random
    faker: Faker

    @classmethod
    def from_seed(cls, seed: int = SEED, locale: str = LOCALE) -> "RandomSource":
        rng = random.Random(seed)
        faker = Faker(locale)
        # Faker draws from this exact stream instead of its shared class-level one.
        faker.random = rng
        return cls(rng=rng, faker=faker)


__all__ = ["LOCALE", "SEED", "RandomSource"]
