"""VillainSpawner — probabilistic villain generator, one roll per tick.

Spawn probability per tick is ``spawn_rate(level) * 0.025`` where
``spawn_rate = min(5.0, 1.0 + level * 0.15)``, so level 1 spawns on
roughly 2.9% of ticks and the rate caps at 12.5% from level 27 onward.

A spawned villain:
  - size uniform in [45, 75]
  - center x uniform in [size/2, width - size/2] (fully inside the playfield)
  - center y at -size/2 (just above the top edge)
  - speed = base_speed(level) + uniform(0, level * 0.4)
  - variant uniform in {0, 1}

The spawner draws from one ``random.Random`` owned by the game session, in
a fixed order (roll, size, x, jitter, variant), so a seeded generator
replays the exact same villain stream.
"""

from __future__ import annotations

import random

from .entities import VILLAIN_VARIANTS, Villain, base_speed

SPAWN_SCALE = 0.025
MIN_SIZE = 45.0
SIZE_RANGE = 30.0
JITTER_PER_LEVEL = 0.4


def spawn_probability(level: int) -> float:
    return min(5.0, 1.0 + level * 0.15) * SPAWN_SCALE


class VillainSpawner:
    """Produces zero or one Villain per tick."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self.spawned = 0

    @property
    def rng(self) -> random.Random:
        return self._rng

    def maybe_spawn(self, level: int, width: float,
                    villains: list[Villain]) -> Villain | None:
        """Roll once; on success append a new villain to ``villains``."""
        if self._rng.random() >= spawn_probability(level):
            return None
        villain = self.create(level, width)
        villains.append(villain)
        return villain

    def create(self, level: int, width: float) -> Villain:
        rng = self._rng
        size = MIN_SIZE + rng.random() * SIZE_RANGE
        x = size / 2 + rng.random() * max(0.0, width - size)
        speed = base_speed(level) + rng.random() * (level * JITTER_PER_LEVEL)
        variant = rng.randrange(VILLAIN_VARIANTS)
        self.spawned += 1
        return Villain(x=x, y=-size / 2, size=size, speed=speed, variant=variant,
                       villain_id=f"v{self.spawned}")
