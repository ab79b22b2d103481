"""Marine ecosystem simulation engine.

This package contains the pure simulation logic for the aquarium, with no
UI dependencies. Key modules include:

- ecosystem: ``MarineEcosystem``, the per-tick controller
- lifecycle: feeding, predation, starvation and reproduction rules
- flocking: separation, alignment, cohesion, food seeking and edge avoidance
- food_store: food items, drift and expiry
- species: the species catalog and trophic rules
- simulation_engine: headless runner on a simulated clock
"""

from ecosim.config.simulation_config import EcosystemConfig
from ecosim.ecosystem import MarineEcosystem
from ecosim.simulation_engine import SimulationEngine

__all__ = [
    "EcosystemConfig",
    "MarineEcosystem",
    "SimulationEngine",
]
