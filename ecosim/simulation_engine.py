"""Headless simulation engine.

Drives a ``MarineEcosystem`` on a simulated clock that advances one
reference frame (``1000 / frame_rate`` ms) per step, so a run with a given
seed is reproducible regardless of wall-clock speed.
"""

import logging
import random
import threading
from typing import Any, Dict, Optional

import orjson

from ecosim.commands import CommandHandler, CommandResult
from ecosim.config.display import SEPARATOR_WIDTH
from ecosim.config.simulation_config import EcosystemConfig
from ecosim.ecosystem import MarineEcosystem
from ecosim.frame_clock import FrameClock
from ecosim.state_payloads import FrameSnapshot

logger = logging.getLogger(__name__)


class SimulationEngine:
    """Runs the aquarium without a presentation layer.

    Attributes:
        config: Simulation configuration
        seed: Seed of ``rng`` (None for an unseeded run)
        rng: Random source shared with the ecosystem
        ecosystem: The simulated tank
        commands: Command dispatcher bound to ``ecosystem``
        clock: Converts simulated timestamps into clamped deltas
        now: Simulated time (ms)
        frame_count: Steps taken since ``setup``
        lock: Serializes steps and commands
    """

    def __init__(
        self,
        config: Optional[EcosystemConfig] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """Initialize the simulation engine.

        Args:
            config: Simulation configuration (defaults if None)
            seed: Optional seed (used if rng is not provided)
            rng: Shared random number generator for deterministic runs
        """
        self.config = config or EcosystemConfig()
        self.seed = seed
        self.rng = rng if rng is not None else random.Random(seed)
        self.ecosystem = MarineEcosystem(self.config, rng=self.rng, seed_population=False)
        self.commands = CommandHandler(self.ecosystem)
        self.clock = FrameClock(self.config.max_delta_ms)
        self.now = 0.0
        self.frame_count = 0
        self.lock = threading.Lock()

    def setup(self) -> None:
        """Start a fresh run with the initial population."""
        with self.lock:
            self.now = 0.0
            self.frame_count = 0
            self.ecosystem.now = self.now
            self.ecosystem.reset()
            self.clock.reset()
            self.clock.advance(self.now)

    def step(self) -> FrameSnapshot:
        """Advance one reference frame of simulated time."""
        with self.lock:
            if not self.ecosystem.running:
                self.clock.reset()
                return self.ecosystem.snapshot()

            if self.clock.last_time is None:
                # resumed from a pause: pick up where simulated time stopped
                self.clock.advance(self.now)
            now = self.now + self.config.frame_interval_ms
            delta = self.clock.advance(now)
            self.now = now
            self.frame_count += 1
            return self.ecosystem.tick(now, delta)

    def handle_command(self, command: str, data: Optional[Dict[str, Any]] = None) -> CommandResult:
        with self.lock:
            return self.commands.handle(command, data)

    def get_stats(self) -> Dict[str, Any]:
        stats = self.ecosystem.get_stats()
        stats["frame"] = self.frame_count
        stats["sim_time_seconds"] = self.now / 1000.0
        return stats

    def print_stats(self) -> None:
        """Log current simulation statistics."""
        stats = self.get_stats()
        logger.info("-" * SEPARATOR_WIDTH)
        logger.info("Frame %d (%.1fs simulated)", stats["frame"], stats["sim_time_seconds"])
        logger.info(
            "Fish: %d  Food: %d  Starving: %d  Avg size: %.2f",
            stats["fish_count"],
            stats["food_count"],
            stats["starving_count"],
            stats["average_size"],
        )
        for name, count in sorted(stats["species_counts"].items()):
            logger.info("  %s: %d", name, count)
        logger.info(
            "Born: %d  Dead: %d  Eaten: %d  Reproductions: %d",
            stats["total_born"],
            stats["total_dead"],
            stats["predation_count"],
            stats["reproduction_count"],
        )

    def export_stats_json(self, filename: str) -> None:
        """Write the final statistics, recent events and configuration to ``filename``."""
        export_data = {
            "simulation_metadata": {
                "seed": self.seed,
                "frames": self.frame_count,
                "sim_time_seconds": self.now / 1000.0,
            },
            "stats": self.get_stats(),
            "recent_events": [
                {
                    "timestamp": event.timestamp,
                    "event_type": event.event_type,
                    "fish_id": event.fish_id,
                    "details": event.details,
                }
                for event in self.ecosystem.stats.recent_events(100)
            ],
            "config": self.config.to_dict(),
        }
        with open(filename, "wb") as f:
            f.write(orjson.dumps(export_data, option=orjson.OPT_INDENT_2))
        logger.info("Stats exported to: %s", filename)

    def run_headless(
        self,
        max_frames: int = 10000,
        stats_interval: int = 300,
        export_json: Optional[str] = None,
    ) -> None:
        """Run the simulation in headless mode without visualization."""
        logger.info("=" * SEPARATOR_WIDTH)
        logger.info("HEADLESS MARINE ECOSYSTEM SIMULATION")
        logger.info("=" * SEPARATOR_WIDTH)
        logger.info(
            "Running for %d frames (%.1f seconds of sim time)",
            max_frames,
            max_frames / self.config.frame_rate,
        )
        logger.info("Stats will be printed every %d frames", stats_interval)
        if export_json:
            logger.info("Stats will be exported to: %s", export_json)
        logger.info("=" * SEPARATOR_WIDTH)

        self.setup()

        for frame in range(max_frames):
            self.step()

            if stats_interval > 0 and frame > 0 and frame % stats_interval == 0:
                self.print_stats()

        logger.info("=" * SEPARATOR_WIDTH)
        logger.info("SIMULATION COMPLETE - Final Statistics")
        logger.info("=" * SEPARATOR_WIDTH)
        self.print_stats()

        if export_json:
            self.export_stats_json(export_json)

    def run_collect_stats(self, max_frames: int = 100) -> Dict[str, Any]:
        """Run the engine for `max_frames` frames and return final stats."""
        self.setup()
        for _ in range(max_frames):
            self.step()
        return self.get_stats()
