"""Ecosim exception hierarchy.

Centralised base classes so callers can catch simulation failures narrowly.
Most ecological "failures" (no food in reach, cooldown active, food cap hit)
are ordinary negative results and never raise.
"""


class EcosimError(Exception):
    """Root of all ecosim domain exceptions."""


class SimulationError(EcosimError):
    """Errors during simulation execution (controller, lifecycle, flocking)."""


class EntityError(SimulationError):
    """An entity-level failure (bad position, unknown species)."""


class ConfigurationError(EcosimError, ValueError):
    """Invalid or inconsistent configuration."""
