"""Flocking force model (boids).

Computes the steering acting on one fish from its neighbours, the food in
the tank and the viewport edges. Everything here is read-only: the
functions never touch fish, food or the store, so they can be called in
any order within a tick.

Separation, alignment and cohesion follow the same pattern: build a
desired velocity of length ``max_speed``, subtract the current velocity,
and clamp the difference to ``max_force``. Food seeking uses a softer
arrival speed and twice the force budget. The boundary push is a constant
added unclamped on top of the weighted sum of the other four.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple

from ecosim.config.flocking import (
    FOOD_ARRIVAL_DISTANCE,
    FOOD_FORCE_MULTIPLIER,
    FOOD_SEEK_RANGE,
    SEPARATION_RANGE_FACTOR,
)
from ecosim.config.simulation_config import EcosystemConfig
from ecosim.entities.fish import Fish
from ecosim.food_store import FoodStore
from ecosim.math_utils import Vector2

__all__ = [
    "SteeringForces",
    "separation",
    "alignment",
    "cohesion",
    "food_attraction",
    "boundary_force",
    "compute_steering",
]


@dataclass
class SteeringForces:
    """The steering components acting on one fish for one tick.

    Components are unweighted; ``combined`` applies the configured weights.
    """

    separation: Vector2 = field(default_factory=Vector2)
    alignment: Vector2 = field(default_factory=Vector2)
    cohesion: Vector2 = field(default_factory=Vector2)
    food: Vector2 = field(default_factory=Vector2)
    boundary: Vector2 = field(default_factory=Vector2)
    combined: Vector2 = field(default_factory=Vector2)


def _steer(desired: Vector2, velocity: Vector2, speed: float, max_force: float) -> Vector2:
    """Scale ``desired`` to ``speed``, subtract ``velocity`` and clamp the result."""
    magnitude = desired.length()
    if magnitude == 0:
        return desired
    steer = desired.normalize_inplace().mul_inplace(speed).sub_inplace(velocity)
    return steer.limit_inplace(max_force)


def separation(fish: Fish, fishes: Iterable[Fish], config: EcosystemConfig) -> Vector2:
    """Steer away from fish crowding inside the separation radius."""
    radius = config.visual_range * SEPARATION_RANGE_FACTOR
    pos = fish.position
    steer = Vector2()
    count = 0
    for other in fishes:
        if other is fish:
            continue
        dx = pos.x - other.position.x
        dy = pos.y - other.position.y
        distance = (dx * dx + dy * dy) ** 0.5
        if 0 < distance < radius:
            steer.x += dx / distance
            steer.y += dy / distance
            count += 1
    if count == 0:
        return steer
    steer.div_inplace(count)
    return _steer(steer, fish.velocity, config.max_speed, config.max_force)


def alignment(fish: Fish, fishes: Iterable[Fish], config: EcosystemConfig) -> Vector2:
    """Steer towards the mean heading of visible neighbours."""
    avg, count = _neighbour_sum(fish, fishes, config.visual_range, use_velocity=True)
    if count == 0:
        return avg
    avg.div_inplace(count)
    return _steer(avg, fish.velocity, config.max_speed, config.max_force)


def cohesion(fish: Fish, fishes: Iterable[Fish], config: EcosystemConfig) -> Vector2:
    """Steer towards the centroid of visible neighbours."""
    center, count = _neighbour_sum(fish, fishes, config.visual_range, use_velocity=False)
    if count == 0:
        return center
    center.div_inplace(count)
    desired = center.sub_inplace(fish.position)
    return _steer(desired, fish.velocity, config.max_speed, config.max_force)


def _neighbour_sum(
    fish: Fish, fishes: Iterable[Fish], radius: float, use_velocity: bool
) -> Tuple[Vector2, int]:
    pos = fish.position
    total = Vector2()
    count = 0
    for other in fishes:
        if other is fish:
            continue
        dx = pos.x - other.position.x
        dy = pos.y - other.position.y
        distance = (dx * dx + dy * dy) ** 0.5
        if 0 < distance < radius:
            total.add_inplace(other.velocity if use_velocity else other.position)
            count += 1
    return total, count


def food_attraction(fish: Fish, food_store: FoodStore, config: EcosystemConfig) -> Vector2:
    """Steer a starving fish towards the nearest food, slowing on arrival."""
    if not fish.is_starving or len(food_store) == 0:
        return Vector2()
    target = food_store.nearest_within(fish.position, FOOD_SEEK_RANGE)
    if target is None:
        return Vector2()
    desired = target.position - fish.position
    distance = desired.length()
    if distance == 0:
        return Vector2()
    speed = config.max_speed * min(distance / FOOD_ARRIVAL_DISTANCE, 1.0)
    return _steer(desired, fish.velocity, speed, config.max_force * FOOD_FORCE_MULTIPLIER)


def boundary_force(fish: Fish, bounds: Tuple[float, float], config: EcosystemConfig) -> Vector2:
    """Constant inward push for fish strictly inside the edge margin."""
    width, height = bounds
    margin = config.edge_margin
    turn = config.edge_turn_factor
    force = Vector2()
    if fish.position.x < margin:
        force.x = turn
    elif fish.position.x > width - margin:
        force.x = -turn
    if fish.position.y < margin:
        force.y = turn
    elif fish.position.y > height - margin:
        force.y = -turn
    return force


def compute_steering(
    fish: Fish,
    fishes: Iterable[Fish],
    food_store: Optional[FoodStore],
    bounds: Tuple[float, float],
    config: EcosystemConfig,
) -> SteeringForces:
    """Compute every steering component for ``fish`` and their weighted sum.

    Args:
        fish: The fish being steered
        fishes: Every live fish (``fish`` itself is skipped)
        food_store: Live food, or None for a tank without food
        bounds: Viewport ``(width, height)``
        config: Simulation configuration

    Returns:
        SteeringForces with ``combined`` = weighted flocking terms + boundary
    """
    neighbours = fishes if isinstance(fishes, (list, tuple)) else list(fishes)
    forces = SteeringForces(
        separation=separation(fish, neighbours, config),
        alignment=alignment(fish, neighbours, config),
        cohesion=cohesion(fish, neighbours, config),
        food=food_attraction(fish, food_store, config) if food_store is not None else Vector2(),
        boundary=boundary_force(fish, bounds, config),
    )
    forces.combined = Vector2(
        forces.separation.x * config.separation_weight
        + forces.alignment.x * config.alignment_weight
        + forces.cohesion.x * config.cohesion_weight
        + forces.food.x * config.food_attraction_weight
        + forces.boundary.x,
        forces.separation.y * config.separation_weight
        + forces.alignment.y * config.alignment_weight
        + forces.cohesion.y * config.cohesion_weight
        + forces.food.y * config.food_attraction_weight
        + forces.boundary.y,
    )
    return forces
