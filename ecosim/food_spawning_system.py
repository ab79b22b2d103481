"""Automatic food spawning.

Food trickles into the tank at a fixed interval while the simulation runs.
The spawner keeps the time of its last drop instead of running a timer, so
pausing the simulation simply stops the checks.
"""

import logging
from typing import Optional

from ecosim.entities.food import Food
from ecosim.food_store import FoodStore

logger = logging.getLogger(__name__)


class AutoFoodSpawner:
    """Drops one random food item every ``interval_ms`` of simulation time.

    Attributes:
        interval_ms: Time between drops
        enabled: Whether automatic drops happen at all
        last_spawn_at: Simulation time of the last drop (None before the first check)
    """

    def __init__(self, food_store: FoodStore, interval_ms: float, enabled: bool = True) -> None:
        self.food_store = food_store
        self.interval_ms = interval_ms
        self.enabled = enabled
        self.last_spawn_at: Optional[float] = None

    def update(self, now: float) -> Optional[Food]:
        """Spawn food if the interval has elapsed.

        The first call only starts the interval. Drops are refused silently
        by the store when it is at capacity.

        Returns:
            The new food item, or None
        """
        if not self.enabled:
            return None
        if self.last_spawn_at is None:
            self.last_spawn_at = now
            return None
        if now - self.last_spawn_at < self.interval_ms:
            return None

        self.last_spawn_at = now
        return self.food_store.spawn(now=now)

    def reset(self) -> None:
        self.last_spawn_at = None
