"""Configuration package for the marine ecosystem simulation.

Default constants are grouped per concern (display, fish, food, flocking,
ecosystem). ``EcosystemConfig`` in ``simulation_config`` gathers them into a
single validated dataclass that the controller consumes.
"""

from ecosim.config.simulation_config import EcosystemConfig

__all__ = ["EcosystemConfig"]
