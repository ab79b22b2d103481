"""Food items drifting through the tank."""

from ecosim.config.food import DEFAULT_FOOD_NUTRITION
from ecosim.math_utils import Vector2


class Food:
    """A food item (pure logic, no rendering).

    Attributes:
        position: Current position in pixels
        velocity: Drift per reference frame
        created_at: Simulation time (ms) the item appeared
        nutrition: Growth value when eaten
        sourced_from_kill: True for remains of a dead fish
    """

    __slots__ = ("position", "velocity", "created_at", "nutrition", "sourced_from_kill")

    def __init__(
        self,
        position: Vector2,
        velocity: Vector2,
        created_at: float,
        nutrition: float = DEFAULT_FOOD_NUTRITION,
        sourced_from_kill: bool = False,
    ) -> None:
        self.position = position
        self.velocity = velocity
        self.created_at = created_at
        self.nutrition = nutrition
        self.sourced_from_kill = sourced_from_kill

    def __repr__(self) -> str:
        return (
            f"Food(x={self.position.x:.1f}, y={self.position.y:.1f}, "
            f"nutrition={self.nutrition}, kill={self.sourced_from_kill})"
        )
