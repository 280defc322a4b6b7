"""
Simulation configuration.

All tunable parameters live in a single immutable SimulationConfig that is
injected into the spatial index and the step orchestrator at construction.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from .integrators import Integrator, displacement_step
from .validation import validate_config

GRAVITATIONAL_CONSTANT = 6.6743e-11
"""Newtonian constant of gravitation, m^3 kg^-1 s^-2."""

AU = 150e9
"""Astronomical unit (rounded), metres."""

DEFAULT_DIMENSIONS = AU * 4
"""Edge length of the root cube."""

DEFAULT_THETA = 1.0
DEFAULT_BODY_COUNT = 10000


@dataclass(frozen=True)
class SimulationConfig:
    """
    Immutable simulation parameters.

    Attributes:
        gravitational_constant: G used for every force evaluation
        dimensions: Edge length of the root cube (centred on the origin)
        theta: Barnes-Hut opening threshold (0 = exact, higher = faster)
        body_count: Number of generated bodies for a fresh run
        use_barnes_hut: If False, forces are summed pairwise in O(n^2)
        workers: Threads used for force accumulation (1 = sequential)
        integrator: Policy advancing position/velocity, see integrators
        warn_on_escape: Emit EscapeWarning when bodies leave the root cube

    Raises:
        InvalidConfigError: If any parameter is out of range.
    """

    gravitational_constant: float = GRAVITATIONAL_CONSTANT
    dimensions: float = DEFAULT_DIMENSIONS
    theta: float = DEFAULT_THETA
    body_count: int = DEFAULT_BODY_COUNT
    use_barnes_hut: bool = True
    workers: int = 1
    integrator: Integrator = displacement_step
    warn_on_escape: bool = False

    def __post_init__(self) -> None:
        validate_config(self)

    @property
    def half_size(self) -> float:
        """Largest absolute coordinate still inside the root cube."""
        return self.dimensions / 2

    def replace(self, **changes: object) -> SimulationConfig:
        """Return a copy with the given fields changed (re-validated)."""
        return dataclasses.replace(self, **changes)  # type: ignore[arg-type]


__all__ = [
    "GRAVITATIONAL_CONSTANT",
    "AU",
    "DEFAULT_DIMENSIONS",
    "DEFAULT_THETA",
    "DEFAULT_BODY_COUNT",
    "SimulationConfig",
]
