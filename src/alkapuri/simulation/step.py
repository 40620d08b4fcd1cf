"""simulate_tick — one fixed step of the catch game.

Order matters; later phases see the results of earlier ones:

  1. spawn     — VillainSpawner may append one villain
  2. advance   — every villain falls by its speed
  3. collide   — villains overlapping the hero are eaten (score, level-up)
  4. miss      — uneaten villains fully below the bottom edge cost a life;
                 the phase stops as soon as lives hit zero
  5. collect   — eaten villains, and anything 100+ units below the bottom,
                 leave the active set

Because collision runs before the miss check, a villain that touches the
hero on the same tick it leaves the screen counts as eaten.  The ``eaten``
flag guards both phases, so no villain is ever scored or missed twice.

Level-up is evaluated right after each individual eat, using the
threshold of the level in force at that moment.

The function mutates ``session`` and ``villains`` in place; the caller
(GameMode) is their sole owner.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .entities import Hero, SessionState, Villain, overlaps
from .spawner import VillainSpawner

POINTS_PER_LEVEL = 10

# Cleanup margin below the bottom edge
OFFSCREEN_MARGIN = 100.0


@dataclass
class StepResult:
    spawned: Villain | None = None
    eats: int = 0
    misses: int = 0
    level_ups: int = 0
    game_over: bool = False


def simulate_tick(
    session: SessionState,
    villains: list[Villain],
    hero: Hero,
    width: float,
    height: float,
    spawner: VillainSpawner,
    on_eat: Callable[[Villain], None] | None = None,
) -> StepResult:
    result = StepResult()

    result.spawned = spawner.maybe_spawn(session.level, width, villains)

    for v in villains:
        v.y += v.speed

    hero_box = hero.bounds(width, height)
    for v in villains:
        if v.eaten:
            continue
        if not overlaps(hero_box, v.bounds()):
            continue
        v.eaten = True
        session.score += session.level * POINTS_PER_LEVEL
        session.eaten += 1
        result.eats += 1
        if on_eat is not None:
            on_eat(v)
        if session.eaten >= session.eats_needed:
            session.level += 1
            session.eaten = 0
            result.level_ups += 1

    for v in villains:
        if v.eaten or v.top <= height:
            continue
        v.eaten = True
        session.lives -= 1
        result.misses += 1
        if session.lives <= 0:
            session.lives = 0
            result.game_over = True
            break

    villains[:] = [
        v for v in villains
        if not v.eaten and v.y <= height + OFFSCREEN_MARGIN
    ]
    return result