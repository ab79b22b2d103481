"""Tests for the ecosystem controller."""

import pytest

from ecosim.config.simulation_config import EcosystemConfig
from ecosim.ecosystem import MarineEcosystem
from ecosim.exceptions import ConfigurationError, EntityError
from ecosim.math_utils import Vector2
from ecosim.species import BLUE_TANG, CLOWNFISH, YELLOW_TANG


def _state(ecosystem):
    return [
        (f.fish_id, f.position.x, f.position.y, f.velocity.x, f.velocity.y, f.size, f.hunger)
        for f in ecosystem.population
    ]


def test_initial_population_is_seeded(seeded_rng):
    eco = MarineEcosystem(EcosystemConfig(), rng=seeded_rng)
    assert len(eco.population) == 15
    assert eco.stats.total_born == 15
    assert eco.running
    for fish in eco.population:
        assert 0 <= fish.position.x <= 1280
        assert 0 <= fish.position.y <= 720
        assert 1.0 <= fish.size < 1.5


def test_zero_delta_tick_changes_nothing(ecosystem, seeded_rng):
    for i in range(6):
        fish = ecosystem.spawn_fish(position=Vector2(150 + i * 170, 150 + i * 80), species=CLOWNFISH)
        fish.velocity = Vector2(seeded_rng.uniform(-1, 1), seeded_rng.uniform(-1, 1))
    food = ecosystem.spawn_food(Vector2(1200, 60))
    before = _state(ecosystem)

    ecosystem.tick(now=0, delta_time_ms=0)

    assert _state(ecosystem) == before
    assert food.position == Vector2(1200, 60)


def test_zero_delta_tick_skips_eating_and_breeding(ecosystem, place_fish):
    grazer = place_fish(CLOWNFISH, 200, 200)
    grazer.hunger = 0.4
    food = ecosystem.spawn_food(Vector2(205, 200))
    hunter = place_fish(YELLOW_TANG, 800, 400, size=2.0)
    prey = place_fish(CLOWNFISH, 805, 400)
    breeder = place_fish(CLOWNFISH, 500, 600, size=2.5)
    ecosystem.lifecycle.config = ecosystem.config.replace(natural_reproduction_chance=1.0)
    before = _state(ecosystem)

    ecosystem.tick(now=0, delta_time_ms=0)

    assert _state(ecosystem) == before
    assert food in ecosystem.food_store
    assert prey in ecosystem.population
    assert (grazer.size, grazer.hunger) == (1.0, 0.4)
    assert hunter.size == 2.0
    assert breeder.size == 2.5
    assert len(ecosystem.population) == 4
    assert ecosystem.stats.predation_count == 0


def test_paused_tick_returns_unchanged_snapshot(ecosystem, place_fish):
    fish = place_fish(CLOWNFISH, 640, 360)
    fish.velocity = Vector2(1, 0)
    ecosystem.set_running(False)

    snapshot = ecosystem.tick(now=1000, delta_time_ms=16)

    assert not snapshot.running
    assert snapshot.frame == 0
    assert fish.position == Vector2(640, 360)
    assert snapshot.fish[0].x == 640


def test_tick_moves_fish(ecosystem, place_fish, config):
    fish = place_fish(CLOWNFISH, 640, 360)
    fish.velocity = Vector2(1, 0)

    snapshot = ecosystem.tick(now=config.frame_interval_ms, delta_time_ms=config.frame_interval_ms)

    assert fish.position.x == pytest.approx(641)
    assert snapshot.frame == 1
    assert snapshot.fish[0].id == fish.fish_id


def test_herbivores_never_attempt_predation(ecosystem, place_fish, monkeypatch):
    calls = []
    monkeypatch.setattr(ecosystem.lifecycle, "try_predate", lambda fish, now: calls.append(fish))

    place_fish(CLOWNFISH, 300, 300)
    place_fish(CLOWNFISH, 310, 300)
    hunter = place_fish(YELLOW_TANG, 900, 300)
    omnivore = place_fish(BLUE_TANG, 600, 600)

    ecosystem.tick(now=16, delta_time_ms=16)

    assert calls == [hunter, omnivore]


def test_feeding_skips_predation_that_tick(ecosystem, place_fish, monkeypatch):
    calls = []
    monkeypatch.setattr(ecosystem.lifecycle, "try_predate", lambda fish, now: calls.append(fish))
    place_fish(YELLOW_TANG, 300, 300)
    ecosystem.spawn_food(Vector2(302, 300))

    ecosystem.tick(now=16, delta_time_ms=16)

    assert calls == []
    assert len(ecosystem.food_store) == 0


def test_fish_eaten_earlier_in_pass_is_skipped(ecosystem, place_fish):
    place_fish(YELLOW_TANG, 405, 400, size=2.0)
    prey = place_fish(CLOWNFISH, 400, 400, size=1.0)
    prey_position = prey.position.copy()

    ecosystem.tick(now=16, delta_time_ms=16)

    assert prey not in ecosystem.population
    assert prey.position == prey_position
    assert ecosystem.stats.predation_count == 1


def test_population_floor_restocks(config, seeded_rng):
    eco = MarineEcosystem(config.replace(min_population=5, respawn_batch=3), rng=seeded_rng)
    assert len(eco.population) == 0

    eco.tick(now=16, delta_time_ms=16)

    assert len(eco.population) == 3
    assert eco.stats.total_born == 3


def test_auto_food_spawns_on_interval(config, seeded_rng):
    eco = MarineEcosystem(config.replace(auto_food_enabled=True), rng=seeded_rng)

    eco.tick(now=0, delta_time_ms=0)
    eco.tick(now=config.food_spawn_interval - 1, delta_time_ms=16)
    assert len(eco.food_store) == 0
    eco.tick(now=config.food_spawn_interval, delta_time_ms=16)
    assert len(eco.food_store) == 1


def test_food_expires_during_tick(ecosystem, config):
    ecosystem.spawn_food(Vector2(100, 100))
    ecosystem.tick(now=config.food_life_span + 1, delta_time_ms=16)
    assert len(ecosystem.food_store) == 0


def test_reset(config, seeded_rng):
    eco = MarineEcosystem(config.replace(initial_population=4), rng=seeded_rng)
    eco.add_food(5)
    eco.add_fish(3)
    eco.tick(now=16, delta_time_ms=16)
    eco.set_running(False)

    eco.reset()

    assert len(eco.population) == 4
    assert len(eco.food_store) == 0
    assert eco.stats.total_born == 4
    assert eco.stats.total_dead == 0
    assert eco.frame == 0
    assert eco.running


def test_toggle_running(ecosystem):
    assert ecosystem.toggle_running() is False
    assert ecosystem.toggle_running() is True


def test_add_food_and_clear(ecosystem):
    assert len(ecosystem.add_food()) == 10
    assert ecosystem.clear_food() == 10
    assert len(ecosystem.food_store) == 0


def test_food_capacity_applies_to_commands(config, seeded_rng):
    eco = MarineEcosystem(config.replace(food_capacity=12), rng=seeded_rng)
    eco.add_food(10)
    assert len(eco.add_food(10)) == 2
    assert len(eco.food_store) == 12


def test_feed_at_scatters_food_near_click(ecosystem):
    food = ecosystem.feed_at(100, 100)
    assert len(food) == 3
    for item in food:
        assert item.position.distance_to(Vector2(100, 100)) <= 30
        assert item.nutrition == 1.0


def test_feed_at_ignored_while_paused(ecosystem):
    ecosystem.set_running(False)
    assert ecosystem.feed_at(100, 100) == []


def test_spawn_food_burst_positions(ecosystem):
    spawned = ecosystem.spawn_food_burst(3, [Vector2(10, 10), Vector2(20, 20)])
    assert len(spawned) == 3
    assert spawned[0].position == Vector2(10, 10)
    assert spawned[1].position == Vector2(20, 20)


def test_spawn_fish_food(ecosystem):
    food = ecosystem.spawn_food(Vector2(50, 50), is_fish_food=True)
    assert food.nutrition == 4.0
    assert food.sourced_from_kill


def test_spawn_rejects_non_finite_positions(ecosystem):
    with pytest.raises(EntityError):
        ecosystem.spawn_fish(position=Vector2(float("nan"), 0))
    with pytest.raises(EntityError):
        ecosystem.spawn_food(Vector2(0, float("inf")))
    assert len(ecosystem.population) == 0


def test_set_viewport_clamps_fish(ecosystem, place_fish):
    fish = place_fish(CLOWNFISH, 640, 360)
    inside = place_fish(CLOWNFISH, 50, 50)

    ecosystem.set_viewport(200, 100)

    assert fish.position == Vector2(200, 100)
    assert inside.position == Vector2(50, 50)
    assert ecosystem.get_viewport() == (200.0, 100.0)
    with pytest.raises(ConfigurationError):
        ecosystem.set_viewport(0, 100)


def test_stats_summary(ecosystem, place_fish):
    place_fish(CLOWNFISH, 100, 100, size=1.0)
    starving = place_fish(YELLOW_TANG, 600, 300, size=2.0)
    starving.is_starving = True
    ecosystem.spawn_food(Vector2(900, 600))

    stats = ecosystem.get_stats()

    assert stats["fish_count"] == 2
    assert stats["food_count"] == 1
    assert stats["average_size"] == pytest.approx(1.5)
    assert stats["starving_count"] == 1
    assert stats["species_counts"] == {"Clownfish": 1, "Yellow Tang": 1}
    assert stats["total_born"] == 2
    assert stats["running"] is True


def test_invariants_hold_over_long_run(seeded_rng):
    eco = MarineEcosystem(EcosystemConfig(), rng=seeded_rng)
    frame_ms = eco.config.frame_interval_ms
    now = 0.0
    for _ in range(600):
        now += frame_ms
        eco.tick(now, frame_ms)
        assert len(eco.food_store) <= eco.config.food_capacity
        for fish in eco.population:
            assert eco.config.min_size <= fish.size <= eco.config.max_size
            assert 0.0 <= fish.health <= 1.0
            assert fish.is_alive
    assert eco.stats.total_born - eco.stats.total_dead == len(eco.population)
