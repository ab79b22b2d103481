"""Command dispatch for the presentation layer.

Buttons, clicks and keyboard shortcuts arrive as ``(command, data)`` pairs.
Handlers return None on success and an error response dict otherwise.
"""

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

from ecosim.config.food import FEED_BURST_COUNT, FEED_BURST_RADIUS, FOOD_BATCH_COUNT
from ecosim.exceptions import EcosimError
from ecosim.math_utils import Vector2

if TYPE_CHECKING:
    from ecosim.ecosystem import MarineEcosystem

logger = logging.getLogger(__name__)

CommandResult = Optional[Dict[str, Any]]


class CommandHandler:
    """Routes named commands to a ``MarineEcosystem``."""

    def __init__(self, ecosystem: "MarineEcosystem") -> None:
        self.ecosystem = ecosystem
        self._handlers: Dict[str, Callable[[Dict[str, Any]], CommandResult]] = {
            "spawn_fish": self._cmd_spawn_fish,
            "add_food": self._cmd_add_food,
            "feed_at": self._cmd_feed_at,
            "clear_food": self._cmd_clear_food,
            "pause": self._cmd_pause,
            "resume": self._cmd_resume,
            "toggle_pause": self._cmd_toggle_pause,
            "reset": self._cmd_reset,
        }

    @property
    def commands(self) -> List[str]:
        return sorted(self._handlers)

    def handle(self, command: str, data: Optional[Dict[str, Any]] = None) -> CommandResult:
        """Handle a command from the client.

        Args:
            command: Command name ('spawn_fish', 'add_food', 'feed_at', ...)
            data: Optional command data

        Returns:
            None on success, ``{"success": False, "error": ...}`` otherwise
        """
        handler = self._handlers.get(command)
        if handler is None:
            logger.warning("Unknown command received: %s", command)
            return self._create_error_response(f"Unknown command: {command}")

        try:
            return handler(data or {})
        except (EcosimError, KeyError, TypeError, ValueError) as e:
            logger.warning("Command %s failed: %s", command, e)
            return self._create_error_response(str(e))

    def _create_error_response(self, error_msg: str) -> Dict[str, Any]:
        return {"success": False, "error": error_msg}

    def _cmd_spawn_fish(self, data: Dict[str, Any]) -> CommandResult:
        """Handle 'spawn_fish': one fish, or ``count`` random fish."""
        if "count" in data:
            self.ecosystem.add_fish(int(data["count"]))
            return None

        species = None
        if "species" in data:
            species = self.ecosystem.catalog.get(data["species"])
        position = None
        if "x" in data and "y" in data:
            position = Vector2(float(data["x"]), float(data["y"]))
        fish = self.ecosystem.spawn_fish(position=position, species=species)
        logger.debug("Spawned %s #%d", fish.species.name, fish.fish_id)
        return None

    def _cmd_add_food(self, data: Dict[str, Any]) -> CommandResult:
        self.ecosystem.add_food(int(data.get("count", FOOD_BATCH_COUNT)))
        return None

    def _cmd_feed_at(self, data: Dict[str, Any]) -> CommandResult:
        """Handle 'feed_at' (a click in the tank)."""
        self.ecosystem.feed_at(
            float(data["x"]),
            float(data["y"]),
            count=int(data.get("count", FEED_BURST_COUNT)),
            radius=float(data.get("radius", FEED_BURST_RADIUS)),
        )
        return None

    def _cmd_clear_food(self, data: Dict[str, Any]) -> CommandResult:
        self.ecosystem.clear_food()
        return None

    def _cmd_pause(self, data: Dict[str, Any]) -> CommandResult:
        self.ecosystem.set_running(False)
        return None

    def _cmd_resume(self, data: Dict[str, Any]) -> CommandResult:
        self.ecosystem.set_running(True)
        return None

    def _cmd_toggle_pause(self, data: Dict[str, Any]) -> CommandResult:
        self.ecosystem.toggle_running()
        return None

    def _cmd_reset(self, data: Dict[str, Any]) -> CommandResult:
        self.ecosystem.reset()
        return None
