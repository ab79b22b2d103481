"""Entity package exposing the simulation's fish and food records."""

from ecosim.entities.fish import Fish
from ecosim.entities.food import Food

__all__ = ["Fish", "Food"]
