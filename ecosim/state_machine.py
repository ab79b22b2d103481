"""Explicit health state machine for fish.

Each fish moves through a small set of health states:

    HEALTHY -> STARVING -> CRITICAL -> DEAD
       ^          |           |
       +----------+-----------+   (feeding)

Any living state may also jump straight to DEAD (a predator got it).
Transitions are validated so that a corpse cannot be revived by a late
meal and a healthy fish cannot skip straight to CRITICAL.

Usage:
    machine = create_health_state_machine()
    machine.transition(HealthState.STARVING, timestamp=now, reason="unfed 9s")
    machine.try_transition(HealthState.HEALTHY)  # True
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Generic, List, TypeVar

S = TypeVar("S", bound=Enum)


@dataclass
class StateTransition(Generic[S]):
    """Record of a state transition for debugging.

    Attributes:
        from_state: The state before transition
        to_state: The state after transition
        timestamp: Simulation time (ms) when the transition happened
        reason: Optional description of why transition happened
    """

    from_state: S
    to_state: S
    timestamp: float
    reason: str = ""


class StateMachine(Generic[S]):
    """A generic state machine with explicit transition validation."""

    __slots__ = ("_state", "_transitions", "_track_history", "_max_history", "_history")

    def __init__(
        self,
        initial_state: S,
        valid_transitions: Dict[S, List[S]],
        track_history: bool = False,
        max_history: int = 20,
    ) -> None:
        if initial_state not in valid_transitions:
            raise ValueError(
                f"Initial state {initial_state} not in valid_transitions. "
                f"Valid states: {list(valid_transitions.keys())}"
            )
        self._state = initial_state
        self._transitions = valid_transitions
        self._track_history = track_history
        self._max_history = max_history
        self._history: List[StateTransition[S]] = []

    @property
    def state(self) -> S:
        return self._state

    @property
    def history(self) -> List[StateTransition[S]]:
        """Transition history (empty if tracking is disabled)."""
        return list(self._history)

    def can_transition(self, target: S) -> bool:
        return target in self._transitions.get(self._state, [])

    def try_transition(self, target: S, timestamp: float = 0.0, reason: str = "") -> bool:
        """Move to ``target`` if allowed. Staying in the current state is a no-op.

        Returns:
            True if the machine is in ``target`` afterwards.
        """
        if target is self._state:
            return True
        if not self.can_transition(target):
            return False
        old_state = self._state
        self._state = target
        if self._track_history:
            self._history.append(StateTransition(old_state, target, timestamp, reason))
            if len(self._history) > self._max_history:
                del self._history[: -self._max_history]
        return True

    def transition(self, target: S, timestamp: float = 0.0, reason: str = "") -> S:
        """Transition to a new state, raising on an invalid transition.

        Raises:
            ValueError: If ``target`` is not reachable from the current state
        """
        if not self.try_transition(target, timestamp, reason):
            valid = [t.name for t in self._transitions.get(self._state, [])]
            raise ValueError(
                f"Invalid transition: {self._state.name} -> {target.name}. "
                f"Valid targets from {self._state.name}: {valid}"
            )
        return self._state

    def __repr__(self) -> str:
        return f"StateMachine(state={self._state.name})"


class HealthState(Enum):
    """Health states of a fish."""

    HEALTHY = "healthy"
    STARVING = "starving"  # Unfed past the hunger threshold
    CRITICAL = "critical"  # Unfed past the starve threshold, losing health
    DEAD = "dead"


HEALTH_STATE_TRANSITIONS: Dict[HealthState, List[HealthState]] = {
    HealthState.HEALTHY: [HealthState.STARVING, HealthState.DEAD],
    HealthState.STARVING: [HealthState.HEALTHY, HealthState.CRITICAL, HealthState.DEAD],
    HealthState.CRITICAL: [HealthState.HEALTHY, HealthState.DEAD],
    HealthState.DEAD: [],
}


def create_health_state_machine(track_history: bool = False) -> StateMachine[HealthState]:
    """Create a state machine for fish health, starting HEALTHY."""
    return StateMachine(
        initial_state=HealthState.HEALTHY,
        valid_transitions=HEALTH_STATE_TRANSITIONS,
        track_history=track_history,
    )
