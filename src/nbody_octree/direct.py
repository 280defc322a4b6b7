"""
Exact O(n^2) pairwise gravity.

Used as the reference the Barnes-Hut approximation is measured against,
and as the force backend when Barnes-Hut is disabled.
"""

from __future__ import annotations

import warnings
from typing import TYPE_CHECKING, Sequence

import numpy as np

from .config import GRAVITATIONAL_CONSTANT
from .vector import ZERO, Vector3

if TYPE_CHECKING:
    from .body import Body

DIRECT_WARN_THRESHOLD = 5000
"""Body count above which exact summation emits a PerformanceWarning."""


class PerformanceWarning(UserWarning):
    """Warning about performance-related issues."""

    pass


def direct_force_on(
    body: Body,
    bodies: Sequence[Body],
    gravitational_constant: float = GRAVITATIONAL_CONSTANT,
) -> Vector3:
    """
    Sum the force on ``body`` from every other body, one pair at a time.

    ``body`` itself may appear in ``bodies``; it is skipped.
    """
    total = ZERO
    for other in bodies:
        if other is body:
            continue
        total = total + body.gravitational_force(other.mass, other.position, gravitational_constant)
    return total


def direct_forces(
    bodies: Sequence[Body],
    gravitational_constant: float = GRAVITATIONAL_CONSTANT,
) -> np.ndarray:
    """
    Compute the net force on every body by direct summation.

    Pairs at zero distance contribute nothing.

    Args:
        bodies: Bodies to evaluate
        gravitational_constant: G

    Returns:
        (n, 3) array; row i is the force on bodies[i]
    """
    n = len(bodies)
    if n > DIRECT_WARN_THRESHOLD:
        warnings.warn(
            f"Direct summation over {n} bodies costs O(n^2) per step. "
            "Enable Barnes-Hut for large populations.",
            PerformanceWarning,
            stacklevel=2,
        )

    forces = np.zeros((n, 3), dtype=np.float64)
    if n < 2:
        return forces

    positions = np.array([body.position.to_tuple() for body in bodies], dtype=np.float64)
    masses = np.array([body.mass for body in bodies], dtype=np.float64)

    # One row at a time keeps memory at O(n)
    for i in range(n):
        delta = positions - positions[i]
        dist = np.sqrt(np.einsum("ij,ij->i", delta, delta))
        nonzero = dist > 0.0
        scale = np.zeros(n, dtype=np.float64)
        scale[nonzero] = (
            gravitational_constant * masses[i] * masses[nonzero] / dist[nonzero] ** 3
        )
        forces[i] = scale @ delta

    return forces


def accumulate_direct_forces(
    bodies: Sequence[Body],
    gravitational_constant: float = GRAVITATIONAL_CONSTANT,
) -> None:
    """Add each body's exact net force to its accumulator."""
    forces = direct_forces(bodies, gravitational_constant)
    for body, (fx, fy, fz) in zip(bodies, forces):
        body.add_force(Vector3(float(fx), float(fy), float(fz)))


__all__ = [
    "DIRECT_WARN_THRESHOLD",
    "PerformanceWarning",
    "direct_force_on",
    "direct_forces",
    "accumulate_direct_forces",
]
