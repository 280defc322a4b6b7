"""
Integration policies for advancing a body by one step.

An integrator is any callable

    (position, velocity, force, mass) -> (new_position, new_velocity)

`displacement_step` is the default and treats force/mass as a displacement
applied within a single unit step. `SemiImplicitEuler` advances velocity
from acceleration over an explicit time step instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Tuple

from .validation import validate_positive
from .vector import Vector3

Integrator = Callable[[Vector3, Vector3, Vector3, float], Tuple[Vector3, Vector3]]
"""Signature shared by all integration policies."""


def displacement_step(
    position: Vector3,
    velocity: Vector3,
    force: Vector3,
    mass: float,
) -> Tuple[Vector3, Vector3]:
    """
    Advance one unit step: p' = p + F/m + v, v' = p' - p.

    The next velocity is the displacement actually realized during the step.
    """
    new_position = position + force * (1 / mass) + velocity
    new_velocity = new_position - position
    return new_position, new_velocity


@dataclass(frozen=True)
class SemiImplicitEuler:
    """
    Symplectic Euler with an explicit time step.

        v' = v + (F/m) * dt
        p' = p + v' * dt

    Attributes:
        dt: Time step (must be positive)
    """

    dt: float = 1.0

    def __post_init__(self) -> None:
        validate_positive("dt", self.dt)

    def __call__(
        self,
        position: Vector3,
        velocity: Vector3,
        force: Vector3,
        mass: float,
    ) -> Tuple[Vector3, Vector3]:
        new_velocity = velocity + force * (self.dt / mass)
        new_position = position + new_velocity * self.dt
        return new_position, new_velocity


__all__ = ["Integrator", "displacement_step", "SemiImplicitEuler"]
