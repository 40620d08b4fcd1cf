"""Game simulation — entities, spawner, tick step, state machine, loop driver.

Package layout:
  entities.py   — Hero, Villain, SessionState dataclasses + box overlap
  spawner.py    — VillainSpawner (seedable per-tick spawn roll)
  step.py       — simulate_tick (spawn, advance, collide, miss, collect)
  game_mode.py  — GameMode (loading/menu/playing/game_over)
  engine.py     — SimulationEngine (tick thread, lock, frame events)
"""

from .engine import SimulationEngine
from .entities import Hero, SessionState, Villain, overlaps, square
from .game_mode import GameMode
from .spawner import VillainSpawner, spawn_probability
from .step import StepResult, simulate_tick

__all__ = [
    "GameMode",
    "Hero",
    "SessionState",
    "SimulationEngine",
    "StepResult",
    "Villain",
    "VillainSpawner",
    "overlaps",
    "simulate_tick",
    "spawn_probability",
    "square",
]
