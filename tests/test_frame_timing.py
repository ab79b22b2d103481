"""Tests for the frame clock and the automatic food spawner."""

import pytest

from ecosim.food_spawning_system import AutoFoodSpawner
from ecosim.food_store import FoodStore
from ecosim.frame_clock import FrameClock


class TestFrameClock:
    def test_first_frame_has_zero_delta(self):
        clock = FrameClock()
        assert clock.advance(5000) == 0

    def test_delta_is_clamped(self):
        clock = FrameClock(max_delta_ms=100)
        clock.advance(0)
        assert clock.advance(16) == 16
        assert clock.advance(1016) == 100

    def test_time_going_backwards_gives_zero(self):
        clock = FrameClock()
        clock.advance(100)
        assert clock.advance(50) == 0

    def test_reset_forgets_paused_span(self):
        clock = FrameClock()
        clock.advance(0)
        clock.reset()
        assert clock.advance(60000) == 0
        assert clock.advance(60016) == pytest.approx(16)


class TestAutoFoodSpawner:
    @pytest.fixture
    def store(self, seeded_rng):
        return FoodStore(lambda: (400.0, 300.0), capacity=2, rng=seeded_rng)

    def test_spawns_once_per_interval(self, store):
        spawner = AutoFoodSpawner(store, interval_ms=2000)
        assert spawner.update(0) is None
        assert spawner.update(1999) is None
        food = spawner.update(2000)
        assert food is not None
        assert food.created_at == 2000
        assert spawner.update(3999) is None

    def test_disabled_spawner_does_nothing(self, store):
        spawner = AutoFoodSpawner(store, interval_ms=10, enabled=False)
        spawner.update(0)
        assert spawner.update(1000) is None
        assert len(store) == 0

    def test_respects_store_capacity(self, store):
        spawner = AutoFoodSpawner(store, interval_ms=10)
        spawner.update(0)
        for now in (10, 20, 30, 40):
            spawner.update(now)
        assert len(store) == 2
