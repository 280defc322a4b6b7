"""
Point masses that move under gravity.

A Body keeps its identity and mass for the whole run; its position and
velocity are rewritten by every integration step and its force accumulator
is cleared and refilled every step.
"""

from __future__ import annotations

from typing import Any, Optional

from .config import GRAVITATIONAL_CONSTANT
from .integrators import Integrator, displacement_step
from .validation import validate_mass
from .vector import ZERO, Vector3


class Body:
    """
    A celestial body (star, planet, asteroid, ...).

    Attributes:
        name: Identifier (read-only)
        mass: Mass (read-only, > 0)
        position: Current position
        velocity: Current velocity
        force: Force accumulated during the current step

    Extra keyword arguments (e.g. ``radius``, ``color``) are stored as
    attributes for renderers; the simulation never reads them.
    """

    def __init__(
        self,
        name: str,
        mass: float,
        position: Vector3 = ZERO,
        velocity: Vector3 = ZERO,
        **kwargs: Any,
    ) -> None:
        self._name = str(name)
        self._mass = validate_mass(mass)
        self.position = position
        self.velocity = velocity
        self.force = ZERO

        for key, value in kwargs.items():
            if not hasattr(self, key):
                setattr(self, key, value)

    @property
    def name(self) -> str:
        return self._name

    @property
    def mass(self) -> float:
        return self._mass

    def reset_force(self) -> None:
        """Set the accumulated force back to zero."""
        self.force = ZERO

    def add_force(self, force: Vector3) -> None:
        """Add a contribution to the accumulated force."""
        self.force = self.force + force

    def distance_to(self, point: Vector3) -> float:
        return self.position.distance_to(point)

    def gravitational_force(
        self,
        mass: float,
        center: Vector3,
        gravitational_constant: float = GRAVITATIONAL_CONSTANT,
    ) -> Vector3:
        """
        Force exerted on this body by a point mass.

        F = G * m1 * m2 / d^2, directed from this body toward ``center``.

        Args:
            mass: Mass of the attracting point (or cluster)
            center: Its position (or center of mass)
            gravitational_constant: G

        Returns:
            Force vector; the zero vector when the distance is exactly 0.
        """
        d = self.position.distance_to(center)
        if d == 0.0:
            return ZERO

        direction = (center - self.position).normalize()
        return direction * (gravitational_constant * self._mass * mass / (d * d))

    def move(self, integrator: Optional[Integrator] = None) -> None:
        """
        Advance position and velocity by one step using the accumulated force.

        Args:
            integrator: Integration policy. Defaults to displacement_step
                (p' = p + F/m + v, v' = p' - p).
        """
        step = integrator if integrator is not None else displacement_step
        self.position, self.velocity = step(self.position, self.velocity, self.force, self._mass)

    def __repr__(self) -> str:
        return f"Body(name={self._name!r}, mass={self._mass:g}, position={self.position})"


__all__ = ["Body"]
