"""Species catalog and food-chain rules.

Species are immutable records shared by reference between every fish of
that kind. The catalog is a fixed table; nothing in it changes while the
simulation runs.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Iterator, Optional, Tuple

from ecosim.exceptions import ConfigurationError


class Diet(Enum):
    """What a species eats besides food items."""

    HERBIVORE = "herbivore"
    OMNIVORE = "omnivore"
    CARNIVORE = "carnivore"
    APEX = "apex"

    @property
    def is_predator(self) -> bool:
        """Only carnivores and apex predators hunt other fish."""
        return self in (Diet.CARNIVORE, Diet.APEX)


@dataclass(frozen=True)
class Species:
    """Static traits of a fish species.

    Attributes:
        name: Display name, unique within a catalog
        color: Hex color used by the presentation layer
        base_size: Rendered length in pixels at size 1.0
        base_speed: Relative swimming speed (informational)
        diet: Diet category
        trophic_level: Food-chain rank, 1 is the bottom
        edible_trophic_levels: Levels this species may prey upon
    """

    name: str
    color: str
    base_size: float
    base_speed: float
    diet: Diet
    trophic_level: int
    edible_trophic_levels: FrozenSet[int] = frozenset()

    def __post_init__(self) -> None:
        if self.trophic_level < 1:
            raise ConfigurationError(
                f"{self.name}: trophic_level must be >= 1, got {self.trophic_level}"
            )
        too_high = [lvl for lvl in self.edible_trophic_levels if lvl >= self.trophic_level]
        if too_high:
            raise ConfigurationError(
                f"{self.name}: cannot prey on levels {sorted(too_high)} "
                f"at or above its own level {self.trophic_level}"
            )


def can_prey(predator: Species, prey: Species) -> bool:
    """Return True if ``predator`` may eat fish of species ``prey``."""
    return prey.trophic_level in predator.edible_trophic_levels


class SpeciesCatalog:
    """Ordered, read-only collection of species indexed by name."""

    def __init__(self, species: Iterable[Species]):
        self._species: Tuple[Species, ...] = tuple(species)
        if not self._species:
            raise ConfigurationError("A species catalog needs at least one species")
        self._by_name: Dict[str, Species] = {}
        for entry in self._species:
            if entry.name in self._by_name:
                raise ConfigurationError(f"Duplicate species name: {entry.name}")
            self._by_name[entry.name] = entry

    def __len__(self) -> int:
        return len(self._species)

    def __iter__(self) -> Iterator[Species]:
        return iter(self._species)

    def __contains__(self, species: object) -> bool:
        return species in self._species

    def get(self, name: str) -> Species:
        """Look up a species by name (raises KeyError if unknown)."""
        return self._by_name[name]

    def pick_random_species(self, rng: Optional[random.Random] = None) -> Species:
        """Pick a species uniformly at random."""
        rng = rng or random
        return self._species[rng.randrange(len(self._species))]


CLOWNFISH = Species(
    name="Clownfish",
    color="#FF6B6B",
    base_size=20,
    base_speed=1.1,
    diet=Diet.HERBIVORE,
    trophic_level=1,
)
BLUE_TANG = Species(
    name="Blue Tang",
    color="#4ECDC4",
    base_size=24,
    base_speed=1.0,
    diet=Diet.OMNIVORE,
    trophic_level=2,
    edible_trophic_levels=frozenset({1}),
)
YELLOW_TANG = Species(
    name="Yellow Tang",
    color="#FFD166",
    base_size=28,
    base_speed=0.9,
    diet=Diet.CARNIVORE,
    trophic_level=3,
    edible_trophic_levels=frozenset({1, 2}),
)
VIOLET = Species(
    name="Violet",
    color="#9D4EDD",
    base_size=22,
    base_speed=1.2,
    diet=Diet.APEX,
    trophic_level=4,
    edible_trophic_levels=frozenset({1, 2, 3}),
)

DEFAULT_CATALOG = SpeciesCatalog([CLOWNFISH, BLUE_TANG, YELLOW_TANG, VIOLET])


def pick_random_species(rng: Optional[random.Random] = None) -> Species:
    """Pick a species uniformly from the default catalog."""
    return DEFAULT_CATALOG.pick_random_species(rng)
