"""Fish lifecycle: feeding, predation, metabolism, reproduction and motion.

``FishLifecycle`` applies the ecological rules to one fish at a time. It
mutates the shared population, food store and statistics it was built
with, and draws every random number from the injected ``rng`` so that
seeded runs are reproducible.

Per tick the controller calls, for each fish:

1. ``try_feed_on_food`` and, if that failed and the fish hunts,
   ``try_predate``
2. ``update_metabolism`` (may kill the fish)
3. ``integrate`` with the steering from ``ecosim.flocking``
4. ``natural_reproduction_check``
"""

import logging
import math
import random
from typing import Callable, List, Optional, Tuple

from ecosim.config.fish import (
    CORPSE_MIN_SIZE,
    INITIAL_HUNGER_MAX,
    INITIAL_SIZE_MIN,
    INITIAL_SIZE_SPREAD,
    INITIAL_VELOCITY_SPREAD,
    OFFSPRING_COUNT,
    PREDATION_GROWTH_FACTOR,
)
from ecosim.config.food import FISH_FOOD_NUTRITION
from ecosim.config.simulation_config import EcosystemConfig
from ecosim.ecosystem_stats import EcosystemStats
from ecosim.entities.fish import Fish
from ecosim.exceptions import EntityError
from ecosim.food_store import FoodStore
from ecosim.math_utils import Vector2
from ecosim.population import FishPopulation
from ecosim.species import DEFAULT_CATALOG, Species, SpeciesCatalog, can_prey
from ecosim.state_machine import HealthState

logger = logging.getLogger(__name__)

DEATH_STARVATION = "starvation"
DEATH_PREDATION = "predation"


class FishLifecycle:
    """Applies the ecological rules to fish.

    Attributes:
        config: Simulation configuration
        population: Live fish (mutated on births and deaths)
        food_store: Live food (mutated on meals and deaths)
        stats: Counters updated at each event
        catalog: Species drawn for randomly created fish
        rng: Random source for every draw
    """

    def __init__(
        self,
        config: EcosystemConfig,
        population: FishPopulation,
        food_store: FoodStore,
        stats: EcosystemStats,
        bounds: Callable[[], Tuple[float, float]],
        rng: Optional[random.Random] = None,
        catalog: SpeciesCatalog = DEFAULT_CATALOG,
    ) -> None:
        self.config = config
        self.population = population
        self.food_store = food_store
        self.stats = stats
        self.catalog = catalog
        self.rng = rng or random.Random()
        self._bounds = bounds

    # ------------------------------------------------------------------
    # Creation and removal
    # ------------------------------------------------------------------

    def create_fish(
        self,
        now: float,
        position: Optional[Vector2] = None,
        species: Optional[Species] = None,
        size: Optional[float] = None,
    ) -> Fish:
        """Create a fish, register it and count the birth.

        Unspecified attributes are randomized: a uniform species, a uniform
        position in the viewport, a small random velocity, a size in
        [1.0, 1.5) and a little initial hunger.

        Raises:
            EntityError: If ``position`` is not finite
        """
        if species is None:
            species = self.catalog.pick_random_species(self.rng)
        if position is None:
            width, height = self._bounds()
            position = Vector2(self.rng.random() * width, self.rng.random() * height)
        elif not position.is_finite():
            raise EntityError(f"Fish position must be finite, got {position!r}")
        else:
            position = position.copy()

        velocity = Vector2(
            (self.rng.random() - 0.5) * INITIAL_VELOCITY_SPREAD,
            (self.rng.random() - 0.5) * INITIAL_VELOCITY_SPREAD,
        )
        initial_size = INITIAL_SIZE_MIN + self.rng.random() * INITIAL_SIZE_SPREAD
        hunger = self.rng.random() * INITIAL_HUNGER_MAX
        if size is not None:
            initial_size = size

        fish = Fish(
            fish_id=self.population.generate_fish_id(),
            position=position,
            velocity=velocity,
            species=species,
            size=self._clamp_size(initial_size),
            now=now,
            hunger=hunger,
        )
        self.population.add(fish)
        self.stats.record_birth(fish, now, species.name)
        return fish

    def kill(self, fish: Fish, cause: str, now: float) -> bool:
        """Remove a fish from the tank and count the death.

        Starved fish larger than ``CORPSE_MIN_SIZE`` leave a nutritious
        food item where they died.

        Returns:
            False if the fish had already been removed.
        """
        if not self.population.remove(fish):
            return False
        fish.set_health_state(HealthState.DEAD, now, reason=cause)
        self.stats.record_death(fish, cause, now)
        if cause == DEATH_STARVATION and fish.size > CORPSE_MIN_SIZE:
            self.food_store.spawn(
                fish.position, nutrition=FISH_FOOD_NUTRITION, sourced_from_kill=True, now=now
            )
        return True

    # ------------------------------------------------------------------
    # Feeding
    # ------------------------------------------------------------------

    def try_feed_on_food(self, fish: Fish, now: float) -> bool:
        """Eat the newest food item within reach of ``fish``.

        Returns:
            True if a food item was eaten.
        """
        food = self.food_store.remove_nearest(fish.position, self.config.eat_distance * fish.size)
        if food is None:
            return False

        self._mark_fed(fish, now)
        fish.hunger = 0.0
        fish.size = self._clamp_size(fish.size + food.nutrition * self.config.growth_rate)
        self._post_meal_reproduction(fish, now)
        return True

    def try_predate(self, fish: Fish, now: float) -> bool:
        """Eat the first smaller, edible fish within reach.

        Only carnivores and apex predators hunt; for any other diet this
        returns False without scanning. Candidates are checked newest-first.

        Returns:
            True if a fish was eaten.
        """
        if not fish.diet.is_predator:
            return False

        reach = self.config.eat_distance * fish.size
        for other in reversed(self.population.snapshot()):
            if other is fish:
                continue
            if not can_prey(fish.species, other.species):
                continue
            if other.size >= fish.size:
                continue
            if fish.position.distance_to(other.position) >= reach:
                continue

            self.kill(other, DEATH_PREDATION, now)
            fish.size = self._clamp_size(fish.size + other.size * PREDATION_GROWTH_FACTOR)
            self._mark_fed(fish, now)
            self.food_store.spawn(
                other.position, nutrition=FISH_FOOD_NUTRITION, sourced_from_kill=True, now=now
            )
            logger.debug(
                "%s #%d ate %s #%d", fish.species.name, fish.fish_id, other.species.name, other.fish_id
            )
            self._post_meal_reproduction(fish, now)
            return True
        return False

    def _mark_fed(self, fish: Fish, now: float) -> None:
        fish.last_fed_at = now
        fish.is_starving = False
        fish.try_health_state(HealthState.HEALTHY, now)

    def _post_meal_reproduction(self, fish: Fish, now: float) -> None:
        if fish.size >= self.config.reproduction_size and self.rng.random() < self.config.reproduction_chance:
            self.reproduce(fish, now)

    # ------------------------------------------------------------------
    # Metabolism
    # ------------------------------------------------------------------

    def update_metabolism(self, fish: Fish, now: float, delta_time_ms: float) -> bool:
        """Advance hunger, starvation damage and reproduction eligibility.

        Returns:
            True if the fish starved to death this tick.
        """
        cfg = self.config
        seconds_since_fed = (now - fish.last_fed_at) / 1000.0

        if seconds_since_fed > cfg.hunger_threshold:
            fish.is_starving = True
            fish.try_health_state(HealthState.STARVING, now)
            fish.hunger += cfg.hunger_rate * delta_time_ms

            if seconds_since_fed > cfg.starve_threshold:
                fish.try_health_state(HealthState.CRITICAL, now)
                fish.health = max(0.0, fish.health - cfg.health_decay_rate * delta_time_ms)
                fish.size = max(cfg.min_size, fish.size - cfg.base_metabolism * delta_time_ms)

                if fish.health <= cfg.death_health_threshold:
                    self.kill(fish, DEATH_STARVATION, now)
                    return True
        else:
            fish.is_starving = False
            fish.try_health_state(HealthState.HEALTHY, now)

        if fish.reproduction_cooldown_until is not None and now >= fish.reproduction_cooldown_until:
            fish.reproduction_cooldown_until = None
        fish.can_reproduce = fish.size >= cfg.reproduction_size and not fish.is_cooling_down(now)
        return False

    # ------------------------------------------------------------------
    # Reproduction
    # ------------------------------------------------------------------

    def reproduce(self, parent: Fish, now: float) -> List[Fish]:
        """Spawn offspring around an eligible parent.

        Offspring share the parent's species, start at the configured
        offspring size and are spread evenly on a circle around the parent.
        The parent then cools down.

        Returns:
            The new fish (empty if the parent was not eligible).
        """
        if not parent.can_reproduce or parent not in self.population:
            return []

        offspring = []
        for i in range(OFFSPRING_COUNT):
            angle = 2 * math.pi * i / OFFSPRING_COUNT
            position = parent.position + Vector2.from_angle(angle, self.config.offspring_distance)
            offspring.append(
                self.create_fish(
                    now, position=position, species=parent.species, size=self.config.offspring_size
                )
            )

        parent.can_reproduce = False
        parent.reproduction_cooldown_until = now + self.config.reproduction_cooldown_ms
        self.stats.record_reproduction(parent, len(offspring), now)
        return offspring

    def natural_reproduction_check(self, fish: Fish, now: float) -> List[Fish]:
        """Low-probability reproduction roll made once per tick."""
        if fish.can_reproduce and self.rng.random() < self.config.natural_reproduction_chance:
            return self.reproduce(fish, now)
        return []

    # ------------------------------------------------------------------
    # Motion
    # ------------------------------------------------------------------

    def integrate(self, fish: Fish, steering: Vector2, delta_time_ms: float) -> None:
        """Apply steering, clamp speed by size and move the fish.

        Forces are per reference frame; ``delta_time_ms`` is converted into
        a fractional number of frames. A zero delta leaves the fish untouched.
        """
        step = delta_time_ms / self.config.frame_interval_ms
        if step <= 0:
            return

        velocity = fish.velocity
        velocity.x += steering.x * step
        velocity.y += steering.y * step
        velocity.limit_inplace(self.config.max_speed / fish.size)

        fish.position.x += velocity.x * step
        fish.position.y += velocity.y * step
        fish.age += delta_time_ms / 1000.0

    def _clamp_size(self, size: float) -> float:
        return min(self.config.max_size, max(self.config.min_size, size))
