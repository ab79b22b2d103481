"""Ecosystem statistics tracking.

Birth, death and predation counters are mutated at the event sites by the
lifecycle code. Everything else (population, food count, average size,
species breakdown) is derived from the live collections when a summary is
requested.
"""

import logging
from collections import Counter, deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Deque, Dict, Iterable, List

from ecosim.config.ecosystem import MAX_ECOSYSTEM_EVENTS

if TYPE_CHECKING:
    from ecosim.entities.fish import Fish

logger = logging.getLogger(__name__)


@dataclass
class EcosystemEvent:
    """Represents an event in the ecosystem.

    Attributes:
        timestamp: Simulation time (ms) when the event occurred
        event_type: 'birth', 'starvation', 'predation' or 'reproduction'
        fish_id: ID of the fish involved
        details: Additional details about the event
    """

    timestamp: float
    event_type: str
    fish_id: int
    details: str = ""


@dataclass
class EcosystemStats:
    """Running counters for one simulation run.

    Attributes:
        total_born: Fish created (seeding, restocking, commands and offspring)
        total_dead: Fish removed by starvation or predation
        predation_count: Fish eaten by other fish
        reproduction_count: Successful reproduction events
        death_causes: Deaths keyed by cause
        events: Most recent ecosystem events, oldest first
    """

    total_born: int = 0
    total_dead: int = 0
    predation_count: int = 0
    reproduction_count: int = 0
    death_causes: Dict[str, int] = field(default_factory=Counter)
    events: Deque[EcosystemEvent] = field(
        default_factory=lambda: deque(maxlen=MAX_ECOSYSTEM_EVENTS), repr=False
    )

    def record_birth(self, fish: "Fish", timestamp: float, details: str = "") -> None:
        self.total_born += 1
        self._add_event(EcosystemEvent(timestamp, "birth", fish.fish_id, details))

    def record_death(self, fish: "Fish", cause: str, timestamp: float) -> None:
        self.total_dead += 1
        self.death_causes[cause] += 1
        if cause == "predation":
            self.predation_count += 1
        self._add_event(
            EcosystemEvent(
                timestamp,
                cause,
                fish.fish_id,
                f"{fish.species.name} size={fish.size:.2f} age={fish.age:.1f}s",
            )
        )

    def record_reproduction(self, parent: "Fish", offspring: int, timestamp: float) -> None:
        self.reproduction_count += 1
        self._add_event(
            EcosystemEvent(timestamp, "reproduction", parent.fish_id, f"offspring={offspring}")
        )

    def _add_event(self, event: EcosystemEvent) -> None:
        self.events.append(event)
        logger.debug("Ecosystem event: %s fish=%d %s", event.event_type, event.fish_id, event.details)

    def recent_events(self, limit: int = 10) -> List[EcosystemEvent]:
        if limit <= 0:
            return []
        return list(self.events)[-limit:]

    def reset(self) -> None:
        self.total_born = 0
        self.total_dead = 0
        self.predation_count = 0
        self.reproduction_count = 0
        self.death_causes.clear()
        self.events.clear()

    def summary(self, fish: Iterable["Fish"], food_count: int, running: bool) -> Dict[str, Any]:
        """Counters plus the statistics derived from the live fish."""
        fish_list = list(fish)
        population = len(fish_list)
        species_counts = Counter(f.species.name for f in fish_list)
        return {
            "fish_count": population,
            "food_count": food_count,
            "average_size": (sum(f.size for f in fish_list) / population) if population else 0.0,
            "starving_count": sum(1 for f in fish_list if f.is_starving),
            "species_counts": dict(species_counts),
            "total_born": self.total_born,
            "total_dead": self.total_dead,
            "predation_count": self.predation_count,
            "reproduction_count": self.reproduction_count,
            "death_causes": dict(self.death_causes),
            "running": running,
        }
