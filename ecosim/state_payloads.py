"""Lightweight data transfer objects handed to the presentation layer.

A ``FrameSnapshot`` is built after every tick. It carries only what a
renderer needs, detached from the live simulation objects, so the caller
may keep or serialize it while the next tick runs.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

import orjson

from ecosim.config.display import LOW_HEALTH_DISPLAY_THRESHOLD
from ecosim.entities.fish import Fish
from ecosim.entities.food import Food


def _round(value: float) -> float:
    return round(value, 2)


@dataclass
class FishView:
    """Minimal snapshot of a fish for rendering."""

    id: int
    x: float
    y: float
    vel_x: float
    vel_y: float
    angle: float
    size: float
    render_size: float
    species: str
    color: str
    is_starving: bool
    low_health: bool

    @classmethod
    def from_fish(cls, fish: Fish) -> "FishView":
        return cls(
            id=fish.fish_id,
            x=fish.position.x,
            y=fish.position.y,
            vel_x=fish.velocity.x,
            vel_y=fish.velocity.y,
            angle=fish.velocity.angle_degrees(),
            size=fish.size,
            render_size=fish.render_size,
            species=fish.species.name,
            color=fish.species.color,
            is_starving=fish.is_starving,
            low_health=fish.health < LOW_HEALTH_DISPLAY_THRESHOLD,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for key in ("x", "y", "vel_x", "vel_y", "angle", "size", "render_size"):
            data[key] = _round(data[key])
        return data


@dataclass
class FoodView:
    """Minimal snapshot of a food item for rendering."""

    x: float
    y: float
    nutrition: float
    sourced_from_kill: bool

    @classmethod
    def from_food(cls, food: Food) -> "FoodView":
        return cls(
            x=food.position.x,
            y=food.position.y,
            nutrition=food.nutrition,
            sourced_from_kill=food.sourced_from_kill,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": _round(self.x),
            "y": _round(self.y),
            "nutrition": self.nutrition,
            "sourced_from_kill": self.sourced_from_kill,
        }


@dataclass
class FrameSnapshot:
    """Everything the renderer receives after a tick."""

    frame: int
    timestamp: float
    running: bool
    fish: List[FishView] = field(default_factory=list)
    food: List[FoodView] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "frame": self.frame,
            "timestamp": self.timestamp,
            "running": self.running,
            "fish": [f.to_dict() for f in self.fish],
            "food": [f.to_dict() for f in self.food],
            "stats": self.stats,
        }

    def to_json_bytes(self) -> bytes:
        return orjson.dumps(self.to_dict())

    def to_json(self) -> str:
        return self.to_json_bytes().decode("utf-8")
