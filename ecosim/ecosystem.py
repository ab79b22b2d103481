"""Ecosystem controller.

``MarineEcosystem`` owns the fish, the food and the statistics, advances
the simulation one tick at a time and exposes the commands the
presentation layer triggers (spawn fish, drop food, clear food, pause,
reset). Nothing here blocks or schedules work: cooldowns, food expiry and
the automatic food drop are all checked against the tick timestamp.
"""

import logging
import math
import random
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ecosim.config.ecosystem import RESPAWN_BATCH
from ecosim.config.food import (
    DEFAULT_FOOD_NUTRITION,
    FEED_BURST_COUNT,
    FEED_BURST_RADIUS,
    FISH_FOOD_NUTRITION,
    FOOD_BATCH_COUNT,
)
from ecosim.config.simulation_config import EcosystemConfig
from ecosim.ecosystem_stats import EcosystemStats
from ecosim.entities.fish import Fish
from ecosim.entities.food import Food
from ecosim.exceptions import ConfigurationError
from ecosim.flocking import compute_steering
from ecosim.food_spawning_system import AutoFoodSpawner
from ecosim.food_store import FoodStore
from ecosim.lifecycle import FishLifecycle
from ecosim.math_utils import Vector2
from ecosim.population import FishPopulation
from ecosim.species import DEFAULT_CATALOG, Diet, Species, SpeciesCatalog
from ecosim.state_payloads import FishView, FoodView, FrameSnapshot

logger = logging.getLogger(__name__)


class MarineEcosystem:
    """Owns the aquarium state and advances it tick by tick.

    Attributes:
        config: Validated simulation configuration
        rng: Random source shared by every component
        population: Live fish
        food_store: Live food
        stats: Birth/death/predation counters
        lifecycle: Ecological rules applied to each fish
        food_spawner: Timed automatic food drops
        running: Whether ticks advance the simulation
        now: Timestamp (ms) of the latest tick
        frame: Number of ticks that advanced the simulation
    """

    def __init__(
        self,
        config: Optional[EcosystemConfig] = None,
        rng: Optional[random.Random] = None,
        catalog: SpeciesCatalog = DEFAULT_CATALOG,
        seed_population: bool = True,
        now: float = 0.0,
    ) -> None:
        """Initialize the ecosystem.

        Args:
            config: Simulation configuration (defaults if None)
            rng: Random number generator (a fresh one if None)
            catalog: Species available to randomly created fish
            seed_population: Seed ``config.initial_population`` fish
            now: Simulation time (ms) at construction
        """
        self.config = config or EcosystemConfig()
        self.rng = rng or random.Random()
        self.catalog = catalog
        self.running = True
        self.now = now
        self.frame = 0
        self._viewport: Tuple[float, float] = (
            float(self.config.viewport_width),
            float(self.config.viewport_height),
        )

        self.population = FishPopulation()
        self.stats = EcosystemStats()
        self.food_store = FoodStore(self.get_viewport, self.config.food_capacity, self.rng)
        self.lifecycle = FishLifecycle(
            self.config,
            self.population,
            self.food_store,
            self.stats,
            self.get_viewport,
            self.rng,
            catalog,
        )
        self.food_spawner = AutoFoodSpawner(
            self.food_store, self.config.food_spawn_interval, self.config.auto_food_enabled
        )

        if seed_population:
            self.seed_fish(self.config.initial_population)

    # ------------------------------------------------------------------
    # Viewport
    # ------------------------------------------------------------------

    def get_viewport(self) -> Tuple[float, float]:
        return self._viewport

    def set_viewport(self, width: float, height: float) -> None:
        """Resize the tank and pull every fish back inside it.

        Raises:
            ConfigurationError: If either dimension is not positive
        """
        if width <= 0 or height <= 0:
            raise ConfigurationError(f"Viewport must be positive, got {width}x{height}")
        self._viewport = (float(width), float(height))
        for fish in self.population:
            fish.position.x = max(0.0, min(fish.position.x, width))
            fish.position.y = max(0.0, min(fish.position.y, height))

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def tick(self, now: float, delta_time_ms: float) -> FrameSnapshot:
        """Advance the simulation by one frame.

        Args:
            now: Current simulation time (ms)
            delta_time_ms: Elapsed time since the previous tick (ms)

        Returns:
            Snapshot of the tank after the tick (unchanged when paused)
        """
        if not self.running:
            return self.snapshot()

        self.now = now
        self.frame += 1
        lifecycle = self.lifecycle
        bounds = self._viewport
        # A zero-length frame computes forces but changes no fish.
        advancing = delta_time_ms > 0

        for fish in self.population.snapshot():
            if fish not in self.population:
                continue  # eaten earlier in this pass

            if advancing and not lifecycle.try_feed_on_food(fish, now):
                if fish.diet is not Diet.HERBIVORE:
                    lifecycle.try_predate(fish, now)

            if lifecycle.update_metabolism(fish, now, delta_time_ms):
                continue

            steering = compute_steering(
                fish, self.population.snapshot(), self.food_store, bounds, self.config
            )
            lifecycle.integrate(fish, steering.combined, delta_time_ms)
            if advancing:
                lifecycle.natural_reproduction_check(fish, now)

        self.food_spawner.update(now)
        self.food_store.drift_and_expire(
            now, self.config.food_life_span, delta_time_ms / self.config.frame_interval_ms
        )
        self._enforce_population_floor()
        return self.snapshot()

    def _enforce_population_floor(self) -> None:
        if len(self.population) >= self.config.min_population:
            return
        logger.info(
            "Population %d below floor %d, adding %d fish",
            len(self.population),
            self.config.min_population,
            self.config.respawn_batch,
        )
        self.seed_fish(self.config.respawn_batch)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def seed_fish(self, count: int) -> List[Fish]:
        return [self.spawn_fish() for _ in range(count)]

    def spawn_fish(
        self, position: Optional[Vector2] = None, species: Optional[Species] = None
    ) -> Fish:
        """Add one fish (random species and position unless given)."""
        return self.lifecycle.create_fish(self.now, position=position, species=species)

    def add_fish(self, count: int = RESPAWN_BATCH) -> List[Fish]:
        """"Add fish" button: several random fish."""
        return self.seed_fish(count)

    def spawn_food(
        self, position: Optional[Vector2] = None, is_fish_food: bool = False
    ) -> Optional[Food]:
        """Drop one food item; fish food is the richer kind left by kills."""
        nutrition = FISH_FOOD_NUTRITION if is_fish_food else DEFAULT_FOOD_NUTRITION
        return self.food_store.spawn(
            position, nutrition=nutrition, sourced_from_kill=is_fish_food, now=self.now
        )

    def spawn_food_burst(
        self, count: int, positions: Optional[Sequence[Vector2]] = None
    ) -> List[Food]:
        """Drop ``count`` food items at ``positions`` (random where missing)."""
        spawned = []
        for i in range(count):
            position = positions[i] if positions is not None and i < len(positions) else None
            food = self.spawn_food(position)
            if food is not None:
                spawned.append(food)
        return spawned

    def feed_at(
        self, x: float, y: float, count: int = FEED_BURST_COUNT, radius: float = FEED_BURST_RADIUS
    ) -> List[Food]:
        """Scatter food around a point, as when the tank is clicked."""
        if not self.running:
            return []
        positions = []
        for _ in range(count):
            angle = self.rng.random() * 2 * math.pi
            offset = Vector2.from_angle(angle, self.rng.random() * radius)
            positions.append(Vector2(x + offset.x, y + offset.y))
        return self.spawn_food_burst(count, positions)

    def add_food(self, count: int = FOOD_BATCH_COUNT) -> List[Food]:
        """"Add food" button: a batch of randomly placed items."""
        return self.spawn_food_burst(count)

    def clear_food(self) -> int:
        removed = self.food_store.clear()
        logger.info("Cleared %d food items", removed)
        return removed

    def set_running(self, running: bool) -> None:
        if running != self.running:
            logger.info("Simulation %s", "resumed" if running else "paused")
        self.running = running

    def toggle_running(self) -> bool:
        self.set_running(not self.running)
        return self.running

    def reset(self) -> None:
        """Empty the tank, zero the statistics and reseed the initial fish."""
        self.population.clear()
        self.food_store.clear()
        self.stats.reset()
        self.food_spawner.reset()
        self.frame = 0
        self.running = True
        self.seed_fish(self.config.initial_population)
        logger.info("Ecosystem reset with %d fish", len(self.population))

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def get_stats(self) -> Dict[str, Any]:
        return self.stats.summary(self.population, len(self.food_store), self.running)

    def snapshot(self) -> FrameSnapshot:
        return FrameSnapshot(
            frame=self.frame,
            timestamp=self.now,
            running=self.running,
            fish=[FishView.from_fish(f) for f in self.population],
            food=[FoodView.from_food(f) for f in self.food_store],
            stats=self.get_stats(),
        )
