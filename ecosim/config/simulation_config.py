"""Validated simulation configuration.

``EcosystemConfig`` collects every tunable of the simulation in one
dataclass. Every field has a default, so ``EcosystemConfig()`` reproduces
the stock behaviour. Inconsistent values are rejected at construction.
"""

import logging
import math
import re
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict

from ecosim.config.display import FRAME_RATE, MAX_FRAME_DELTA_MS, VIEWPORT_HEIGHT, VIEWPORT_WIDTH
from ecosim.config.ecosystem import INITIAL_POPULATION, MIN_POPULATION, RESPAWN_BATCH
from ecosim.config.fish import (
    BASE_METABOLISM,
    DEATH_HEALTH_THRESHOLD,
    EAT_DISTANCE,
    GROWTH_RATE,
    HEALTH_DECAY_RATE,
    HUNGER_RATE,
    HUNGER_THRESHOLD,
    MAX_SIZE,
    MIN_SIZE,
    NATURAL_REPRODUCTION_CHANCE,
    OFFSPRING_DISTANCE,
    OFFSPRING_SIZE,
    REPRODUCTION_CHANCE,
    REPRODUCTION_COOLDOWN_MS,
    REPRODUCTION_SIZE,
    STARVE_THRESHOLD,
)
from ecosim.config.flocking import (
    ALIGNMENT_WEIGHT,
    COHESION_WEIGHT,
    EDGE_MARGIN,
    EDGE_TURN_FACTOR,
    FOOD_ATTRACTION_WEIGHT,
    MAX_FORCE,
    MAX_SPEED,
    SEPARATION_WEIGHT,
    VISUAL_RANGE,
)
from ecosim.config.food import (
    AUTO_FOOD_ENABLED,
    FOOD_CAPACITY,
    FOOD_LIFE_SPAN_MS,
    FOOD_SPAWN_INTERVAL_MS,
)
from ecosim.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _to_snake_case(key: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", key).lower()


@dataclass
class EcosystemConfig:
    """Configuration for MarineEcosystem.

    ``from_dict`` also accepts the camelCase spelling of every field
    (``maxSpeed`` -> ``max_speed``).
    Times ending in ``_threshold`` are seconds; ``_ms`` fields, ``food_life_span``
    and ``food_spawn_interval`` are milliseconds; metabolic rates are per ms.
    """

    # Flocking
    max_speed: float = MAX_SPEED
    max_force: float = MAX_FORCE
    visual_range: float = VISUAL_RANGE
    separation_weight: float = SEPARATION_WEIGHT
    alignment_weight: float = ALIGNMENT_WEIGHT
    cohesion_weight: float = COHESION_WEIGHT
    food_attraction_weight: float = FOOD_ATTRACTION_WEIGHT
    edge_margin: float = EDGE_MARGIN
    edge_turn_factor: float = EDGE_TURN_FACTOR

    # Survival
    base_metabolism: float = BASE_METABOLISM
    hunger_threshold: float = HUNGER_THRESHOLD
    starve_threshold: float = STARVE_THRESHOLD
    hunger_rate: float = HUNGER_RATE
    health_decay_rate: float = HEALTH_DECAY_RATE
    death_health_threshold: float = DEATH_HEALTH_THRESHOLD
    growth_rate: float = GROWTH_RATE
    min_size: float = MIN_SIZE
    max_size: float = MAX_SIZE

    # Predation and reproduction
    eat_distance: float = EAT_DISTANCE
    reproduction_chance: float = REPRODUCTION_CHANCE
    reproduction_size: float = REPRODUCTION_SIZE
    natural_reproduction_chance: float = NATURAL_REPRODUCTION_CHANCE
    reproduction_cooldown_ms: float = REPRODUCTION_COOLDOWN_MS
    offspring_size: float = OFFSPRING_SIZE
    offspring_distance: float = OFFSPRING_DISTANCE

    # Food
    food_life_span: float = FOOD_LIFE_SPAN_MS
    food_spawn_interval: float = FOOD_SPAWN_INTERVAL_MS
    food_capacity: int = FOOD_CAPACITY
    auto_food_enabled: bool = AUTO_FOOD_ENABLED

    # Population
    initial_population: int = INITIAL_POPULATION
    min_population: int = MIN_POPULATION
    respawn_batch: int = RESPAWN_BATCH

    # Frame timing and viewport
    frame_rate: int = FRAME_RATE
    max_delta_ms: float = MAX_FRAME_DELTA_MS
    viewport_width: float = VIEWPORT_WIDTH
    viewport_height: float = VIEWPORT_HEIGHT

    def __post_init__(self) -> None:
        self.validate()

    @property
    def frame_interval_ms(self) -> float:
        """Duration of one reference frame in milliseconds."""
        return 1000.0 / self.frame_rate

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises:
            ConfigurationError: If any parameter is out of range or the
                parameters contradict each other.
        """
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool):
                continue
            if not isinstance(value, (int, float)) or not math.isfinite(value):
                raise ConfigurationError(f"{f.name} must be a finite number, got {value!r}")

        positive = (
            "max_speed",
            "visual_range",
            "min_size",
            "eat_distance",
            "reproduction_size",
            "food_life_span",
            "food_spawn_interval",
            "frame_rate",
            "max_delta_ms",
            "viewport_width",
            "viewport_height",
        )
        for name in positive:
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive, got {getattr(self, name)}")

        non_negative = (
            "max_force",
            "separation_weight",
            "alignment_weight",
            "cohesion_weight",
            "food_attraction_weight",
            "edge_margin",
            "edge_turn_factor",
            "base_metabolism",
            "hunger_threshold",
            "hunger_rate",
            "health_decay_rate",
            "growth_rate",
            "reproduction_cooldown_ms",
            "offspring_distance",
            "food_capacity",
            "initial_population",
            "min_population",
            "respawn_batch",
        )
        for name in non_negative:
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must be >= 0, got {getattr(self, name)}")

        if self.min_size > self.max_size:
            raise ConfigurationError(
                f"min_size ({self.min_size}) must not exceed max_size ({self.max_size})"
            )
        if not self.min_size <= self.offspring_size <= self.max_size:
            raise ConfigurationError(
                f"offspring_size must be within [{self.min_size}, {self.max_size}], "
                f"got {self.offspring_size}"
            )
        if self.starve_threshold < self.hunger_threshold:
            raise ConfigurationError("starve_threshold must not be below hunger_threshold")
        if not 0 <= self.death_health_threshold < 1:
            raise ConfigurationError("death_health_threshold must be in [0, 1)")
        for name in ("reproduction_chance", "natural_reproduction_chance"):
            if not 0 <= getattr(self, name) <= 1:
                raise ConfigurationError(f"{name} must be in [0, 1], got {getattr(self, name)}")
        if self.min_population > 0 and self.respawn_batch == 0:
            raise ConfigurationError("respawn_batch must be positive when min_population is set")

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EcosystemConfig":
        """Create config from a dictionary of snake_case or camelCase keys.

        ``foodLifeSpan`` and ``food_life_span`` are equivalent. Unknown keys
        are ignored with a warning.
        """
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            name = key if key in known else _to_snake_case(key)
            if name not in known:
                logger.warning("Ignoring unknown configuration option %r", key)
                continue
            kwargs[name] = value
        return cls(**kwargs)

    def replace(self, **overrides: Any) -> "EcosystemConfig":
        """Return a validated copy with ``overrides`` applied."""
        data = self.to_dict()
        data.update(overrides)
        return EcosystemConfig(**data)
