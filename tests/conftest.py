"""Pytest configuration and fixtures for marine ecosystem tests."""

import random

import pytest

from ecosim.config.simulation_config import EcosystemConfig
from ecosim.ecosystem import MarineEcosystem
from ecosim.math_utils import Vector2


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def config():
    """Quiet configuration: empty tank, no automatic food, no restocking."""
    return EcosystemConfig(initial_population=0, min_population=0, auto_food_enabled=False)


@pytest.fixture
def ecosystem(config, seeded_rng):
    """Provide an empty, deterministic ecosystem."""
    return MarineEcosystem(config, rng=seeded_rng)


@pytest.fixture
def place_fish(ecosystem):
    """Spawn a motionless fish of a given species, size and position."""

    def _place(species, x, y, size=1.0):
        fish = ecosystem.spawn_fish(position=Vector2(x, y), species=species)
        fish.size = size
        fish.velocity = Vector2(0, 0)
        return fish

    return _place
