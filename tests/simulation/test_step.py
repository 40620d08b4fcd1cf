"""Unit tests for simulate_tick — spawn, advance, collide, miss, collect.

Playfield is 400x800 unless stated; the hero sits at x=0.5, so its square is
(165, 645)-(235, 715) centered on (200, 680).
"""

from __future__ import annotations

import pytest

from alkapuri.simulation.entities import Hero, SessionState, Villain
from alkapuri.simulation.spawner import VillainSpawner
from alkapuri.simulation.step import OFFSCREEN_MARGIN, simulate_tick

pytestmark = pytest.mark.unit

W = 400.0
H = 800.0


@pytest.fixture
def quiet(fixed_random):
    """Spawner that never spawns."""
    return VillainSpawner(fixed_random(0.999))


def _villain(x=200.0, y=680.0, size=50.0, speed=2.0, variant=0, vid="t"):
    return Villain(x=x, y=y, size=size, speed=speed, variant=variant, villain_id=vid)


def _step(session, villains, spawner, hero=None, width=W, height=H, on_eat=None):
    return simulate_tick(session, villains, hero or Hero(), width, height,
                         spawner, on_eat=on_eat)


class TestSpawnAndAdvance:
    def test_spawned_villain_is_advanced_same_tick(self, fixed_random):
        spawner = VillainSpawner(fixed_random(0.0))
        villains = []
        result = _step(SessionState(), villains, spawner)
        assert result.spawned is not None
        assert villains == [result.spawned]
        assert result.spawned.y == pytest.approx(-22.5 + 2.35)

    def test_all_villains_fall_by_their_speed(self, quiet):
        villains = [_villain(x=20.0, y=0.0, speed=3.0, vid="a"),
                    _villain(x=380.0, y=100.0, speed=7.5, vid="b")]
        _step(SessionState(), villains, quiet)
        assert [v.y for v in villains] == [3.0, 107.5]


class TestCollision:
    def test_villain_on_hero_is_eaten(self, quiet):
        session = SessionState()
        villains = [_villain()]
        eaten = []
        result = _step(session, villains, quiet, on_eat=eaten.append)
        assert result.eats == 1
        assert session.score == 10
        assert session.eaten == 1
        assert session.lives == 3
        assert villains == []
        assert len(eaten) == 1 and eaten[0].eaten

    def test_score_scales_with_level(self, quiet):
        session = SessionState(level=4)
        _step(session, [_villain()], quiet)
        assert session.score == 40

    def test_all_simultaneous_collisions_resolved(self, quiet):
        session = SessionState()
        villains = [_villain(vid=str(i)) for i in range(3)]
        result = _step(session, villains, quiet)
        assert result.eats == 3
        assert session.score == 30
        assert session.eaten == 3
        assert villains == []

    def test_edge_touch_is_not_eaten(self, quiet):
        session = SessionState()
        # Right edge of hero at 235; villain left edge lands exactly there
        side = _villain(x=260.0, y=680.0, speed=0.0, vid="side")
        # Bottom edge of hero at 715; villain top lands exactly there
        below = _villain(x=200.0, y=740.0, speed=0.0, vid="below")
        villains = [side, below]
        result = _step(session, villains, quiet)
        assert result.eats == 0
        assert session.score == 0
        assert villains == [side, below]

    def test_collision_uses_current_hero_position(self, quiet):
        session = SessionState()
        hero = Hero()
        hero.set_x(0.1)  # center x = 40
        villains = [_villain(x=40.0)]
        _step(session, villains, quiet, hero=hero)
        assert session.eaten == 1

    def test_already_eaten_villain_never_scores(self, quiet):
        session = SessionState()
        v = _villain()
        v.eaten = True
        villains = [v]
        result = _step(session, villains, quiet)
        assert result.eats == 0
        assert session.score == 0
        assert villains == []


class TestLevelProgression:
    def test_level_up_on_threshold(self, quiet):
        session = SessionState(eaten=9)
        result = _step(session, [_villain()], quiet)
        assert result.level_ups == 1
        assert session.level == 2
        assert session.eaten == 0
        assert session.eats_needed == 12
        assert session.score == 10

    def test_level_up_mid_tick_changes_later_points(self, quiet):
        session = SessionState(eaten=8)
        villains = [_villain(vid=str(i)) for i in range(3)]
        result = _step(session, villains, quiet)
        assert result.level_ups == 1
        assert session.level == 2
        assert session.eaten == 1
        # 10 + 10 at level 1, then 20 at level 2
        assert session.score == 40

    def test_single_level_up_per_threshold(self, quiet):
        session = SessionState(level=3, eaten=13)
        villains = [_villain(vid=str(i)) for i in range(5)]
        result = _step(session, villains, quiet)
        assert result.level_ups == 1
        assert session.level == 4
        assert session.eaten == 4


class TestMiss:
    def test_miss_costs_a_life(self, quiet):
        session = SessionState()
        villains = [_villain(x=20.0, y=824.0, speed=2.0)]  # top ends at 801
        result = _step(session, villains, quiet)
        assert result.misses == 1
        assert session.lives == 2
        assert villains == []
        assert not result.game_over

    def test_top_exactly_at_bottom_is_not_a_miss(self, quiet):
        session = SessionState()
        v = _villain(x=20.0, y=823.0, speed=2.0)  # top ends at exactly 800
        villains = [v]
        result = _step(session, villains, quiet)
        assert result.misses == 0
        assert session.lives == 3
        assert villains == [v]

    def test_last_life_ends_game(self, quiet):
        session = SessionState(lives=1)
        villains = [_villain(x=20.0, y=824.0)]
        result = _step(session, villains, quiet)
        assert result.game_over
        assert session.lives == 0
        assert villains == []

    def test_miss_counted_once(self, quiet):
        session = SessionState()
        villains = [_villain(x=20.0, y=824.0)]
        _step(session, villains, quiet)
        _step(session, villains, quiet)
        assert session.lives == 2

    def test_game_over_stops_miss_processing(self, quiet):
        session = SessionState(lives=1)
        first = _villain(x=20.0, y=830.0, speed=0.0, vid="first")
        second = _villain(x=380.0, y=850.0, speed=0.0, vid="second")
        villains = [first, second]
        result = _step(session, villains, quiet)
        assert result.misses == 1
        assert session.lives == 0
        assert not second.eaten
        # second is still within the cleanup margin and was never counted
        assert villains == [second]

    def test_cleanup_margin_removes_uncounted_villains(self, quiet):
        session = SessionState(lives=1)
        first = _villain(x=20.0, y=830.0, speed=0.0, vid="first")
        far = _villain(x=380.0, y=H + OFFSCREEN_MARGIN + 50.0, speed=0.0, vid="far")
        villains = [first, far]
        _step(session, villains, quiet)
        assert villains == []
        assert session.lives == 0

    def test_collision_wins_over_miss(self, quiet):
        # Short playfield: hero square (165, 50)-(235, 120) reaches below h=100
        session = SessionState(lives=1)
        v = _villain(x=200.0, y=124.0, speed=2.0)  # top ends at 101 > h
        villains = [v]
        result = _step(session, villains, quiet, height=100.0)
        assert result.eats == 1
        assert result.misses == 0
        assert session.lives == 1
        assert not result.game_over


class TestLongRun:
    def test_lives_never_increase_and_never_negative(self):
        import random

        session = SessionState()
        hero = Hero()
        villains = []
        spawner = VillainSpawner(random.Random(11))
        previous = session.lives
        for _ in range(50000):
            result = simulate_tick(session, villains, hero, W, H, spawner)
            assert 0 <= session.lives <= previous
            assert all(not v.eaten for v in villains)
            previous = session.lives
            if result.game_over:
                assert session.lives == 0
                break
        else:
            pytest.fail("game never ended")
