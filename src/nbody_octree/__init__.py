"""
nbody-octree: Barnes-Hut N-body gravity simulation in Python.

This package advances N point masses under mutual gravity, using an octree
to approximate distant clusters as single point masses so that each step
costs O(n log n) instead of O(n^2).

Main components:
- Vector3: Immutable 3D vector
- Body: Point mass with position, velocity and accumulated force
- Octree: Barnes-Hut spatial index, rebuilt every step
- Simulation: Per-step orchestration (reset, accumulate, integrate, rebuild)
- SimulationConfig: Immutable parameters injected at construction
"""

__version__ = "0.1.0"

from .body import Body
from .config import (
    AU,
    DEFAULT_BODY_COUNT,
    DEFAULT_DIMENSIONS,
    DEFAULT_THETA,
    GRAVITATIONAL_CONSTANT,
    SimulationConfig,
)

# Exact summation
from .direct import (
    PerformanceWarning,
    accumulate_direct_forces,
    direct_force_on,
    direct_forces,
)

# Initial populations
from .generator import central_body, generate_bodies, populate
from .integrators import Integrator, SemiImplicitEuler, displacement_step

# Diagnostics
from .metrics import (
    center_of_mass,
    kinetic_energy,
    potential_energy,
    relative_force_error,
    simulation_summary,
    total_energy,
    total_mass,
    total_momentum,
)
from .simulation import EscapeWarning, Simulation

# Spatial data structures
from .spatial import MAX_DEPTH, Empty, Gate, Leaf, Octree, OctreeNode
from .types import Event, EventType, StepPhase

# Validation utilities
from .validation import (
    InvalidBodyError,
    InvalidConfigError,
    ValidationError,
    validate_config,
    validate_mass,
)
from .vector import ZERO, Vector3

__all__ = [
    # Version
    "__version__",
    # Core types
    "Vector3",
    "ZERO",
    "Body",
    # Configuration
    "SimulationConfig",
    "GRAVITATIONAL_CONSTANT",
    "AU",
    "DEFAULT_DIMENSIONS",
    "DEFAULT_THETA",
    "DEFAULT_BODY_COUNT",
    # Integration
    "Integrator",
    "displacement_step",
    "SemiImplicitEuler",
    # Spatial data structures
    "Octree",
    "OctreeNode",
    "Empty",
    "Leaf",
    "Gate",
    "MAX_DEPTH",
    # Orchestration
    "Simulation",
    "EscapeWarning",
    "StepPhase",
    "EventType",
    "Event",
    # Exact summation
    "direct_force_on",
    "direct_forces",
    "accumulate_direct_forces",
    "PerformanceWarning",
    # Initial populations
    "generate_bodies",
    "central_body",
    "populate",
    # Diagnostics
    "total_mass",
    "center_of_mass",
    "total_momentum",
    "kinetic_energy",
    "potential_energy",
    "total_energy",
    "relative_force_error",
    "simulation_summary",
    # Validation
    "ValidationError",
    "InvalidConfigError",
    "InvalidBodyError",
    "validate_config",
    "validate_mass",
]
