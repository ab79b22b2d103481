"""Tests for the flocking force model."""

import pytest

from ecosim.flocking import (
    alignment,
    boundary_force,
    cohesion,
    compute_steering,
    food_attraction,
    separation,
)
from ecosim.food_store import FoodStore
from ecosim.math_utils import Vector2
from ecosim.species import CLOWNFISH

BOUNDS = (1280.0, 720.0)


@pytest.fixture
def store(seeded_rng):
    return FoodStore(lambda: BOUNDS, rng=seeded_rng)


class TestBoundaryForce:
    def test_exactly_at_margin_is_zero(self, place_fish, config):
        fish = place_fish(CLOWNFISH, config.edge_margin, 360)
        assert boundary_force(fish, BOUNDS, config) == Vector2(0, 0)

    def test_one_unit_inside_margin_pushes_inward(self, place_fish, config):
        fish = place_fish(CLOWNFISH, config.edge_margin - 1, 360)
        assert boundary_force(fish, BOUNDS, config) == Vector2(config.edge_turn_factor, 0)

    def test_right_and_bottom_edges(self, place_fish, config):
        at_margin = place_fish(CLOWNFISH, 1280 - config.edge_margin, 720 - config.edge_margin)
        assert boundary_force(at_margin, BOUNDS, config) == Vector2(0, 0)

        inside = place_fish(CLOWNFISH, 1280 - config.edge_margin + 1, 720 - config.edge_margin + 1)
        push = boundary_force(inside, BOUNDS, config)
        assert push == Vector2(-config.edge_turn_factor, -config.edge_turn_factor)

    def test_corner_push_is_not_clamped(self, place_fish, config):
        fish = place_fish(CLOWNFISH, 1, 1)
        forces = compute_steering(fish, [fish], None, BOUNDS, config)
        assert forces.combined.x == pytest.approx(config.edge_turn_factor)
        assert forces.combined.y == pytest.approx(config.edge_turn_factor)
        assert forces.combined.length() > config.max_force


class TestNeighbourForces:
    def test_lone_fish_has_no_flocking_forces(self, place_fish, config):
        fish = place_fish(CLOWNFISH, 640, 360)
        assert separation(fish, [fish], config) == Vector2(0, 0)
        assert alignment(fish, [fish], config) == Vector2(0, 0)
        assert cohesion(fish, [fish], config) == Vector2(0, 0)

    def test_separation_pushes_away_at_max_force(self, place_fish, config):
        fish = place_fish(CLOWNFISH, 640, 360)
        other = place_fish(CLOWNFISH, 650, 360)

        force = separation(fish, [fish, other], config)

        assert force.x == pytest.approx(-config.max_force)
        assert force.y == pytest.approx(0)

    def test_separation_ignores_fish_beyond_its_radius(self, place_fish, config):
        fish = place_fish(CLOWNFISH, 640, 360)
        other = place_fish(CLOWNFISH, 640 + config.visual_range * 0.4 + 1, 360)
        assert separation(fish, [fish, other], config) == Vector2(0, 0)

    def test_alignment_follows_neighbour_heading(self, place_fish, config):
        fish = place_fish(CLOWNFISH, 640, 360)
        other = place_fish(CLOWNFISH, 640, 390)
        other.velocity = Vector2(1, 0)

        force = alignment(fish, [fish, other], config)

        assert force.x > 0
        assert force.y == pytest.approx(0)
        assert force.length() <= config.max_force + 1e-9

    def test_cohesion_pulls_towards_centroid(self, place_fish, config):
        fish = place_fish(CLOWNFISH, 640, 360)
        other = place_fish(CLOWNFISH, 720, 360)

        assert cohesion(fish, [fish, other], config).x == pytest.approx(config.max_force)
        assert separation(fish, [fish, other], config) == Vector2(0, 0)

    def test_neighbours_out_of_sight_are_ignored(self, place_fish, config):
        fish = place_fish(CLOWNFISH, 200, 360)
        other = place_fish(CLOWNFISH, 200 + config.visual_range, 360)
        other.velocity = Vector2(1, 1)
        assert alignment(fish, [fish, other], config) == Vector2(0, 0)
        assert cohesion(fish, [fish, other], config) == Vector2(0, 0)


class TestFoodAttraction:
    def test_only_starving_fish_seek_food(self, place_fish, config, store):
        fish = place_fish(CLOWNFISH, 640, 360)
        store.spawn(Vector2(700, 360))

        assert food_attraction(fish, store, config) == Vector2(0, 0)
        fish.is_starving = True
        assert food_attraction(fish, store, config).x > 0

    def test_food_out_of_range_is_ignored(self, place_fish, config, store):
        fish = place_fish(CLOWNFISH, 100, 360)
        fish.is_starving = True
        store.spawn(Vector2(401, 360))
        assert food_attraction(fish, store, config) == Vector2(0, 0)

    def test_food_force_budget_is_doubled(self, place_fish, config, store):
        fish = place_fish(CLOWNFISH, 640, 360)
        fish.is_starving = True
        fish.velocity = Vector2(-2, 0)
        store.spawn(Vector2(800, 360))

        force = food_attraction(fish, store, config)

        assert force.length() == pytest.approx(2 * config.max_force)

    def test_arrival_slows_desired_speed(self, place_fish, config, store):
        fish = place_fish(CLOWNFISH, 640, 360)
        fish.is_starving = True
        fish.velocity = Vector2(0.15, 0)
        store.spawn(Vector2(650, 360))

        # desired speed = max_speed * 10 / 100 = 0.2
        assert food_attraction(fish, store, config).x == pytest.approx(0.05)


def test_combined_is_weighted_sum(place_fish, config, store):
    fish = place_fish(CLOWNFISH, 30, 360)
    fish.is_starving = True
    near = place_fish(CLOWNFISH, 45, 370)
    near.velocity = Vector2(0.5, 0.5)
    far = place_fish(CLOWNFISH, 100, 330)
    store.spawn(Vector2(200, 400))

    forces = compute_steering(fish, [fish, near, far], store, BOUNDS, config)

    expected_x = (
        forces.separation.x * config.separation_weight
        + forces.alignment.x * config.alignment_weight
        + forces.cohesion.x * config.cohesion_weight
        + forces.food.x * config.food_attraction_weight
        + forces.boundary.x
    )
    assert forces.combined.x == pytest.approx(expected_x)
    assert forces.boundary == Vector2(config.edge_turn_factor, 0)


def test_compute_steering_is_read_only(place_fish, config, store):
    fish = place_fish(CLOWNFISH, 640, 360)
    fish.is_starving = True
    other = place_fish(CLOWNFISH, 660, 370)
    other.velocity = Vector2(1, -1)
    food = store.spawn(Vector2(700, 360))

    compute_steering(fish, [fish, other], store, BOUNDS, config)

    assert fish.position == Vector2(640, 360)
    assert fish.velocity == Vector2(0, 0)
    assert other.velocity == Vector2(1, -1)
    assert food.position == Vector2(700, 360)
    assert len(store) == 1
