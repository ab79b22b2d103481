"""Live fish collection with stable identities.

Fish are kept in insertion order and indexed by id. Removal during a tick
is safe as long as callers iterate over ``snapshot()`` and check
``fish in population`` before acting on a fish from that snapshot.
"""

from typing import Dict, Iterator, List

from ecosim.entities.fish import Fish


class FishPopulation:
    """Owns the live fish and hands out fish ids."""

    def __init__(self) -> None:
        self._fish: Dict[int, Fish] = {}
        self.next_fish_id: int = 0

    def __len__(self) -> int:
        return len(self._fish)

    def __iter__(self) -> Iterator[Fish]:
        return iter(self._fish.values())

    def __contains__(self, fish: object) -> bool:
        return isinstance(fish, Fish) and self._fish.get(fish.fish_id) is fish

    def generate_fish_id(self) -> int:
        fish_id = self.next_fish_id
        self.next_fish_id += 1
        return fish_id

    def add(self, fish: Fish) -> None:
        if fish.fish_id in self._fish:
            raise ValueError(f"Fish id {fish.fish_id} is already in the population")
        self._fish[fish.fish_id] = fish

    def remove(self, fish: Fish) -> bool:
        """Remove ``fish``; returns False if it was already gone."""
        if fish not in self:
            return False
        del self._fish[fish.fish_id]
        return True

    def snapshot(self) -> List[Fish]:
        """Copy of the live fish in insertion order."""
        return list(self._fish.values())

    def clear(self) -> None:
        """Drop every fish. Ids keep increasing so they stay unique per run."""
        self._fish.clear()
