"""
Random initial populations.

Places bodies uniformly at random inside the root cube and starts them on
roughly orbital paths around the z axis. Useful as a starting point for
runs and benchmarks; the simulation itself does not depend on it.
"""

from __future__ import annotations

import random
from typing import Optional

from .body import Body
from .config import SimulationConfig
from .validation import InvalidConfigError, validate_count, validate_positive
from .vector import ZERO, Vector3

DEFAULT_MIN_MASS = 1e23
DEFAULT_MAX_MASS = 1e27
DEFAULT_MAX_SPEED = 3e8
DEFAULT_CENTRAL_MASS = 1e38


def random_position(rng: random.Random, dimensions: float) -> Vector3:
    """Uniform random point inside a cube of edge ``dimensions`` centred on the origin."""
    half = dimensions / 2
    return Vector3(
        rng.uniform(-half, half),
        rng.uniform(-half, half),
        rng.uniform(-half, half),
    )


def orbital_velocity(position: Vector3, speed: float) -> Vector3:
    """
    Velocity perpendicular to ``position`` around the z axis.

    Uses normalize(position x (0, 0, position.z)) * speed, so bodies in the
    z = 0 plane start at rest.
    """
    orthogonal = position.cross(Vector3(0.0, 0.0, position.z)).normalize()
    return orthogonal * speed


def generate_bodies(
    count: int,
    dimensions: float,
    *,
    min_mass: float = DEFAULT_MIN_MASS,
    max_mass: float = DEFAULT_MAX_MASS,
    max_speed: float = DEFAULT_MAX_SPEED,
    radius: float = 6.0,
    color: str = "#ffffff",
    random_seed: Optional[int] = None,
) -> list[Body]:
    """
    Generate randomized bodies inside the root cube.

    Args:
        count: Number of bodies
        dimensions: Edge length of the root cube
        min_mass: Lower bound of the uniform mass distribution
        max_mass: Upper bound of the uniform mass distribution
        max_speed: Speeds are drawn uniformly from [0, max_speed)
        radius: Display radius stored on every body
        color: Display color stored on every body
        random_seed: Seed for reproducible populations

    Returns:
        List of bodies named "body-0", "body-1", ...

    Raises:
        InvalidConfigError: If count, dimensions or the mass range is invalid
    """
    validate_count("count", count)
    validate_positive("dimensions", dimensions)
    validate_positive("min_mass", min_mass)
    validate_positive("max_mass", max_mass)
    if max_mass < min_mass:
        raise InvalidConfigError(f"max_mass ({max_mass}) must be >= min_mass ({min_mass})")

    rng = random.Random(random_seed)
    bodies = []
    for i in range(count):
        mass = rng.uniform(min_mass, max_mass)
        position = random_position(rng, dimensions)
        velocity = orbital_velocity(position, rng.random() * max_speed)
        bodies.append(Body(f"body-{i}", mass, position, velocity, radius=radius, color=color))
    return bodies


def central_body(mass: float = DEFAULT_CENTRAL_MASS, name: str = "sun") -> Body:
    """A heavy body at rest at the origin."""
    return Body(name, mass, ZERO, ZERO, radius=15.0, color="#ff0000")


def populate(
    config: SimulationConfig,
    *,
    central_mass: Optional[float] = DEFAULT_CENTRAL_MASS,
    random_seed: Optional[int] = None,
) -> list[Body]:
    """
    Build the initial population for a run.

    Generates ``config.body_count`` random bodies and, unless
    ``central_mass`` is None, adds a central body at the origin.
    """
    bodies = generate_bodies(config.body_count, config.dimensions, random_seed=random_seed)
    if central_mass is not None:
        bodies.append(central_body(central_mass))
    return bodies


__all__ = [
    "DEFAULT_MIN_MASS",
    "DEFAULT_MAX_MASS",
    "DEFAULT_MAX_SPEED",
    "DEFAULT_CENTRAL_MASS",
    "random_position",
    "orbital_velocity",
    "generate_bodies",
    "central_body",
    "populate",
]
