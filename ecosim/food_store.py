"""Food store: lifecycle of the food items in the tank.

Items are kept in insertion order. Lookups that pick "the first item in
reach" scan newest-first so that, between equally valid candidates, the
most recently spawned item wins.
"""

import logging
import math
import random
from typing import Callable, Iterator, List, Optional, Tuple

from ecosim.config.food import DEFAULT_FOOD_NUTRITION, FOOD_CAPACITY, FOOD_DRIFT_SPREAD
from ecosim.entities.food import Food
from ecosim.exceptions import EntityError
from ecosim.math_utils import Vector2

logger = logging.getLogger(__name__)


class FoodStore:
    """Owns every live food item.

    Attributes:
        capacity: Spawns are refused once this many items exist
        rng: Random source for placement and drift
    """

    def __init__(
        self,
        bounds: Callable[[], Tuple[float, float]],
        capacity: int = FOOD_CAPACITY,
        rng: Optional[random.Random] = None,
    ) -> None:
        """Initialize the store.

        Args:
            bounds: Callable returning the live viewport ``(width, height)``
            capacity: Maximum number of live items
            rng: Random number generator (uses global random if None)
        """
        self._bounds = bounds
        self.capacity = capacity
        self.rng = rng or random.Random()
        self._items: List[Food] = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Food]:
        return iter(self._items)

    def __contains__(self, food: object) -> bool:
        return any(item is food for item in self._items)

    @property
    def items(self) -> List[Food]:
        """Snapshot of the live items in insertion order."""
        return list(self._items)

    @property
    def is_full(self) -> bool:
        return len(self._items) >= self.capacity

    def spawn(
        self,
        position: Optional[Vector2] = None,
        nutrition: float = DEFAULT_FOOD_NUTRITION,
        sourced_from_kill: bool = False,
        now: float = 0.0,
    ) -> Optional[Food]:
        """Create a food item, or return None if the store is full.

        Args:
            position: Where to place the item (uniform in the viewport if None)
            nutrition: Growth value of the item
            sourced_from_kill: Whether the item is the remains of a fish
            now: Simulation time (ms) used for expiry

        Raises:
            EntityError: If ``position`` is not finite
        """
        if self.is_full:
            logger.debug("Food capacity %d reached, spawn refused", self.capacity)
            return None

        if position is None:
            width, height = self._bounds()
            position = Vector2(self.rng.random() * width, self.rng.random() * height)
        elif not position.is_finite():
            raise EntityError(f"Food position must be finite, got {position!r}")
        else:
            position = position.copy()

        velocity = Vector2(
            (self.rng.random() - 0.5) * FOOD_DRIFT_SPREAD,
            (self.rng.random() - 0.5) * FOOD_DRIFT_SPREAD,
        )
        food = Food(position, velocity, now, nutrition, sourced_from_kill)
        self._items.append(food)
        return food

    def drift_and_expire(self, now: float, life_span: float, step: float = 1.0) -> int:
        """Bounce and move every item, dropping the ones older than ``life_span``.

        Args:
            now: Current simulation time (ms)
            life_span: Maximum item age (ms)
            step: Elapsed time in reference frames

        Returns:
            Number of expired items
        """
        width, height = self._bounds()
        expired = 0
        for i in range(len(self._items) - 1, -1, -1):
            food = self._items[i]
            if now - food.created_at > life_span:
                del self._items[i]
                expired += 1
                continue

            pos, vel = food.position, food.velocity
            if pos.x < 0 or pos.x > width:
                vel.x = -vel.x
            if pos.y < 0 or pos.y > height:
                vel.y = -vel.y
            pos.x += vel.x * step
            pos.y += vel.y * step

        if expired:
            logger.debug("Expired %d food items", expired)
        return expired

    def nearest_within(self, position: Vector2, max_distance: float) -> Optional[Food]:
        """Return the closest item strictly within ``max_distance``, if any."""
        closest: Optional[Food] = None
        closest_dist = math.inf
        for food in self._items:
            distance = position.distance_to(food.position)
            if distance < closest_dist and distance < max_distance:
                closest_dist = distance
                closest = food
        return closest

    def remove_nearest(self, position: Vector2, eat_radius: float) -> Optional[Food]:
        """Remove and return the newest item strictly within ``eat_radius``."""
        for i in range(len(self._items) - 1, -1, -1):
            food = self._items[i]
            if position.distance_to(food.position) < eat_radius:
                del self._items[i]
                return food
        return None

    def remove(self, food: Food) -> bool:
        for i, item in enumerate(self._items):
            if item is food:
                del self._items[i]
                return True
        return False

    def clear(self) -> int:
        """Remove every item, returning how many were removed."""
        removed = len(self._items)
        self._items.clear()
        return removed
