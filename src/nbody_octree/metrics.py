"""
Simulation diagnostics.

Provides aggregate physical quantities of a population of bodies:
- Total mass and center of mass
- Momentum and kinetic energy
- Gravitational potential energy
- Relative error of approximate forces against exact ones

Velocities are per-step displacements under the default integrator, so
momentum and kinetic energy are in mass * length / step units.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence, Tuple

import numpy as np
from scipy.spatial.distance import pdist

from .config import GRAVITATIONAL_CONSTANT
from .vector import ZERO, Vector3

if TYPE_CHECKING:
    from .body import Body


def _arrays(bodies: Sequence[Body]) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Masses (n,), positions (n, 3) and velocities (n, 3)."""
    masses = np.array([b.mass for b in bodies], dtype=np.float64)
    positions = np.array([b.position.to_tuple() for b in bodies], dtype=np.float64).reshape(-1, 3)
    velocities = np.array([b.velocity.to_tuple() for b in bodies], dtype=np.float64).reshape(-1, 3)
    return masses, positions, velocities


def _to_vector(values: np.ndarray) -> Vector3:
    return Vector3(float(values[0]), float(values[1]), float(values[2]))


def total_mass(bodies: Sequence[Body]) -> float:
    """Sum of all masses."""
    return float(sum(b.mass for b in bodies))


def center_of_mass(bodies: Sequence[Body]) -> Vector3:
    """
    Mass-weighted mean position.

    Returns:
        The zero vector for an empty population.
    """
    if not bodies:
        return ZERO
    masses, positions, _ = _arrays(bodies)
    return _to_vector(masses @ positions / masses.sum())


def total_momentum(bodies: Sequence[Body]) -> Vector3:
    """Sum of m * v over all bodies."""
    if not bodies:
        return ZERO
    masses, _, velocities = _arrays(bodies)
    return _to_vector(masses @ velocities)


def kinetic_energy(bodies: Sequence[Body]) -> float:
    """Sum of 0.5 * m * |v|^2."""
    if not bodies:
        return 0.0
    masses, _, velocities = _arrays(bodies)
    return float(0.5 * np.sum(masses * np.einsum("ij,ij->i", velocities, velocities)))


def potential_energy(
    bodies: Sequence[Body],
    gravitational_constant: float = GRAVITATIONAL_CONSTANT,
) -> float:
    """
    Gravitational potential energy, -sum_{i<j} G m_i m_j / r_ij.

    Coincident pairs (r_ij == 0) are skipped, matching the zero-distance
    rule of the force calculation.

    Time Complexity: O(n^2)
    """
    if len(bodies) < 2:
        return 0.0
    masses, positions, _ = _arrays(bodies)
    distances = pdist(positions)
    i, j = np.triu_indices(len(bodies), k=1)
    products = masses[i] * masses[j]
    nonzero = distances > 0.0
    return float(-gravitational_constant * np.sum(products[nonzero] / distances[nonzero]))


def total_energy(
    bodies: Sequence[Body],
    gravitational_constant: float = GRAVITATIONAL_CONSTANT,
) -> float:
    """Kinetic plus potential energy."""
    return kinetic_energy(bodies) + potential_energy(bodies, gravitational_constant)


def relative_force_error(
    approximate: Sequence[Vector3] | np.ndarray,
    exact: Sequence[Vector3] | np.ndarray,
) -> float:
    """
    Relative error between two sets of forces.

    Computed as ||approx - exact||_F / ||exact||_F over all bodies.

    Args:
        approximate: Forces from the approximation (Vector3s or (n, 3) array)
        exact: Reference forces, same length

    Returns:
        Relative error (0 = identical). 0.0 if both are all zero.

    Raises:
        ValueError: If the inputs have different lengths
    """
    a = np.array([tuple(f) for f in approximate], dtype=np.float64).reshape(-1, 3)
    e = np.array([tuple(f) for f in exact], dtype=np.float64).reshape(-1, 3)
    if a.shape != e.shape:
        raise ValueError(f"Force sets differ in length: {len(a)} vs {len(e)}")

    reference = np.linalg.norm(e)
    difference = np.linalg.norm(a - e)
    if reference == 0.0:
        return 0.0 if difference == 0.0 else float("inf")
    return float(difference / reference)


def simulation_summary(
    bodies: Sequence[Body],
    gravitational_constant: float = GRAVITATIONAL_CONSTANT,
) -> dict[str, Any]:
    """
    Compute all diagnostics at once.

    Returns:
        Dict with keys: body_count, total_mass, center_of_mass, momentum,
        kinetic_energy, potential_energy, total_energy
    """
    kinetic = kinetic_energy(bodies)
    potential = potential_energy(bodies, gravitational_constant)
    return {
        "body_count": len(bodies),
        "total_mass": total_mass(bodies),
        "center_of_mass": center_of_mass(bodies),
        "momentum": total_momentum(bodies),
        "kinetic_energy": kinetic,
        "potential_energy": potential,
        "total_energy": kinetic + potential,
    }


__all__ = [
    "total_mass",
    "center_of_mass",
    "total_momentum",
    "kinetic_energy",
    "potential_energy",
    "total_energy",
    "relative_force_error",
    "simulation_summary",
]
