"""Main entry point for the marine ecosystem simulation.

Runs the simulation headless: no rendering, statistics logged at a fixed
frame interval, optionally exported as JSON at the end of the run.
"""

import argparse
import logging

from ecosim.config.simulation_config import EcosystemConfig
from ecosim.exceptions import ConfigurationError
from ecosim.simulation_engine import SimulationEngine

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
)

logger = logging.getLogger(__name__)


def run_headless(max_frames: int, stats_interval: int, seed=None, export_stats=None, config=None):
    """Run the simulation in headless mode (no visualization).

    Args:
        max_frames: Maximum number of frames to simulate
        stats_interval: Print stats every N frames
        seed: Optional random seed for deterministic behavior
        export_stats: Optional filename to export JSON stats
        config: Optional simulation configuration
    """
    engine = SimulationEngine(config=config, seed=seed)
    # Note: run_headless() calls setup() internally
    engine.run_headless(
        max_frames=max_frames, stats_interval=stats_interval, export_json=export_stats
    )


def main(argv=None):
    """Parse command-line arguments and run the simulation."""
    parser = argparse.ArgumentParser(
        description="Marine Ecosystem Simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Quick test run (1000 frames)
  python main.py --max-frames 1000

  # Export stats for later analysis
  python main.py --max-frames 10000 --export-stats results.json

  # Long simulation with seed for reproducibility
  python main.py --max-frames 100000 --seed 42 --export-stats run.json
        """,
    )

    parser.add_argument(
        "--max-frames",
        type=int,
        default=10000,
        help="Maximum frames to simulate (default: 10000)",
    )

    parser.add_argument(
        "--stats-interval",
        type=int,
        default=300,
        help="Print stats every N frames (default: 300)",
    )

    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for deterministic behavior (optional)"
    )

    parser.add_argument(
        "--export-stats",
        type=str,
        default=None,
        metavar="FILENAME",
        help="Export final stats to a JSON file (e.g., results.json)",
    )

    parser.add_argument("--width", type=int, default=None, help="Tank width in pixels")
    parser.add_argument("--height", type=int, default=None, help="Tank height in pixels")

    args = parser.parse_args(argv)

    overrides = {}
    if args.width is not None:
        overrides["viewport_width"] = args.width
    if args.height is not None:
        overrides["viewport_height"] = args.height
    try:
        config = EcosystemConfig(**overrides)
    except ConfigurationError as e:
        parser.error(str(e))

    logger.info("Starting headless simulation...")
    logger.info(
        "Configuration: %d frames, stats every %d frames", args.max_frames, args.stats_interval
    )
    run_headless(
        args.max_frames,
        args.stats_interval,
        seed=args.seed,
        export_stats=args.export_stats,
        config=config,
    )


if __name__ == "__main__":
    main()
