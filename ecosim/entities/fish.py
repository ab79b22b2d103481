"""Fish entity: the autonomous agent of the aquarium.

A Fish is a plain state record. All behaviour (feeding, metabolism,
movement, reproduction) lives in ``ecosim.lifecycle`` and
``ecosim.flocking`` so that the rules can be tested without a controller.
Equality is identity: two fish with identical state are still two fish.
"""

from typing import List, Optional

from ecosim.math_utils import Vector2
from ecosim.species import Diet, Species
from ecosim.state_machine import (
    HealthState,
    StateMachine,
    StateTransition,
    create_health_state_machine,
)


class Fish:
    """A single fish.

    Attributes:
        fish_id: Stable identity, unique within an ecosystem run
        position: Position in pixels
        velocity: Velocity in pixels per reference frame
        species: Shared species record
        size: Size multiplier, kept within the configured bounds
        hunger: Accumulated hunger while starving (reset by eating)
        last_fed_at: Simulation time (ms) of the last meal or birth
        health: Health in [0, 1]
        is_starving: Unfed for longer than the hunger threshold
        age: Seconds lived
        can_reproduce: Large enough and not cooling down
        reproduction_cooldown_until: Time (ms) reproduction unlocks again
    """

    __slots__ = (
        "fish_id",
        "position",
        "velocity",
        "species",
        "size",
        "hunger",
        "last_fed_at",
        "health",
        "is_starving",
        "age",
        "can_reproduce",
        "reproduction_cooldown_until",
        "_health_state",
    )

    def __init__(
        self,
        fish_id: int,
        position: Vector2,
        velocity: Vector2,
        species: Species,
        size: float,
        now: float,
        hunger: float = 0.0,
    ) -> None:
        self.fish_id = fish_id
        self.position = position
        self.velocity = velocity
        self.species = species
        self.size = size
        self.hunger = hunger
        self.last_fed_at = now
        self.health = 1.0
        self.is_starving = False
        self.age = 0.0
        self.can_reproduce = False
        self.reproduction_cooldown_until: Optional[float] = None
        self._health_state: StateMachine[HealthState] = create_health_state_machine(
            track_history=True
        )

    @property
    def diet(self) -> Diet:
        return self.species.diet

    @property
    def health_state(self) -> HealthState:
        return self._health_state.state

    @property
    def health_history(self) -> List[StateTransition[HealthState]]:
        """Recent health transitions, oldest first."""
        return self._health_state.history

    @property
    def is_alive(self) -> bool:
        return self._health_state.state is not HealthState.DEAD

    @property
    def render_size(self) -> float:
        """Length in pixels as drawn by the presentation layer."""
        return self.species.base_size * self.size

    def set_health_state(self, state: HealthState, now: float = 0.0, reason: str = "") -> None:
        """Move the health state machine, raising ValueError on an illegal jump."""
        self._health_state.transition(state, timestamp=now, reason=reason)

    def try_health_state(self, state: HealthState, now: float = 0.0) -> bool:
        return self._health_state.try_transition(state, timestamp=now)

    def is_cooling_down(self, now: float) -> bool:
        return self.reproduction_cooldown_until is not None and now < self.reproduction_cooldown_until

    def __repr__(self) -> str:
        return (
            f"Fish(id={self.fish_id}, species={self.species.name}, size={self.size:.2f}, "
            f"health={self.health:.2f}, state={self.health_state.value})"
        )
