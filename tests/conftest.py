"""Shared fixtures for ALKAPURI RUN tests."""

from __future__ import annotations

import pytest

from alkapuri.comms.event_bus import EventBus
from alkapuri.simulation.game_mode import GameMode


class FixedRandom:
    """Stand-in generator: ``random()`` always returns ``value``.

    0.0 spawns on every tick (smallest villain, leftmost, no jitter);
    0.999 never spawns.
    """

    def __init__(self, value: float = 0.999, variant: int = 0) -> None:
        self.value = value
        self.variant = variant

    def random(self) -> float:
        return self.value

    def randrange(self, n: int) -> int:
        return self.variant % n


def drain(q) -> list[dict]:
    out = []
    while not q.empty():
        out.append(q.get_nowait())
    return out


@pytest.fixture
def bus() -> EventBus:
    return EventBus(maxsize=1000)


@pytest.fixture
def fixed_random():
    """Factory for FixedRandom generators."""
    return FixedRandom


@pytest.fixture
def drain_queue():
    return drain


@pytest.fixture
def make_game(bus):
    """Build a GameMode already in the menu (or playing with ``start=True``)."""

    def _make(rng=None, start: bool = True, **kwargs) -> GameMode:
        gm = GameMode(bus, rng=rng if rng is not None else FixedRandom(), **kwargs)
        gm.tick(gm._loading_timeout)
        assert gm.state == "menu"
        if start:
            assert gm.start()
        return gm

    return _make
