"""Entity model — Hero, Villain and SessionState.

Architecture
------------
All three are flat dataclasses.  They store fields and answer simple
geometric / difficulty questions; every mutation during play happens in
``step.simulate_tick()`` (villains, session) or through
``Hero.set_x()`` (player input).

Coordinates:
  - Villain positions are absolute playfield units, measured at the center
    of the villain's bounding square, y growing downward.
  - The hero's x is normalized to the playfield width; its y is fixed at
    85% of the playfield height.

Bounding squares are axis-aligned and compared with strict inequalities, so
two squares that merely share an edge do not overlap.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

HERO_SIZE = 70.0
HERO_Y_RATIO = 0.85
HERO_MIN_X = 0.08
HERO_MAX_X = 0.92
HERO_START_X = 0.5

START_LEVEL = 1
START_LIVES = 3

VILLAIN_VARIANTS = 2

# (left, top, right, bottom)
Box = tuple[float, float, float, float]


def square(cx: float, cy: float, side: float) -> Box:
    """Axis-aligned square centered on (cx, cy)."""
    half = side / 2
    return (cx - half, cy - half, cx + half, cy + half)


def overlaps(a: Box, b: Box) -> bool:
    """True when the two boxes share a region of non-zero area."""
    if a[2] <= b[0] or b[2] <= a[0]:
        return False
    if a[3] <= b[1] or b[3] <= a[1]:
        return False
    return True


def clamp_hero_x(x: float) -> float:
    if math.isnan(x):
        return HERO_START_X
    return max(HERO_MIN_X, min(HERO_MAX_X, x))


@dataclass
class Hero:
    """The player character. ``x`` is normalized to the playfield width."""

    x: float = HERO_START_X
    size: float = HERO_SIZE

    def set_x(self, x: float) -> float:
        self.x = clamp_hero_x(float(x))
        return self.x

    def center(self, width: float, height: float) -> tuple[float, float]:
        return (self.x * width, height * HERO_Y_RATIO)

    def bounds(self, width: float, height: float) -> Box:
        cx, cy = self.center(width, height)
        return square(cx, cy, self.size)

    def to_dict(self, width: float, height: float) -> dict:
        cx, cy = self.center(width, height)
        return {
            "x": round(self.x, 4),
            "px": round(cx, 2),
            "py": round(cy, 2),
            "size": self.size,
        }


@dataclass
class Villain:
    """A falling adversary.

    Lifecycle: spawned above the top edge -> falls by ``speed`` each tick ->
    eaten (collided with the hero) or missed (passed the bottom edge) ->
    removed from the active set in the same tick.
    """

    x: float
    y: float
    size: float
    speed: float
    variant: int
    eaten: bool = False
    villain_id: str = ""

    def bounds(self) -> Box:
        return square(self.x, self.y, self.size)

    @property
    def top(self) -> float:
        return self.y - self.size / 2

    def to_dict(self) -> dict:
        return {
            "id": self.villain_id,
            "x": round(self.x, 2),
            "y": round(self.y, 2),
            "size": round(self.size, 2),
            "speed": round(self.speed, 3),
            "variant": self.variant,
        }


@dataclass
class SessionState:
    """Score / level / lives for one play-through."""

    score: int = 0
    level: int = START_LEVEL
    lives: int = START_LIVES
    eaten: int = 0

    @property
    def eats_needed(self) -> int:
        return 10 + (self.level - 1) * 2

    @property
    def spawn_rate(self) -> float:
        return min(5.0, 1.0 + self.level * 0.15)

    @property
    def base_speed(self) -> float:
        return base_speed(self.level)

    @property
    def is_over(self) -> bool:
        return self.lives <= 0

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "level": self.level,
            "lives": self.lives,
            "eaten": self.eaten,
            "eats_needed": self.eats_needed,
        }


def base_speed(level: int) -> float:
    return min(12.0, 2.0 + level * 0.35)
