"""
Immutable 3D vector value type.

Every operation returns a new Vector3; no instance is ever mutated.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Tuple


@dataclass(frozen=True)
class Vector3:
    """
    A vector in 3D space.

    Supports both named operations (add, sub, scale, ...) and the
    matching operators (+, -, * by scalar, unary -).

    Example:
        a = Vector3(1.0, 0.0, 0.0)
        b = Vector3(0.0, 1.0, 0.0)
        a.cross(b)          # Vector3(x=0.0, y=0.0, z=1.0)
        (a + b).magnitude() # 1.414...
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def add(self, other: Vector3) -> Vector3:
        """Component-wise sum."""
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def sub(self, other: Vector3) -> Vector3:
        """Component-wise difference."""
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def scale(self, factor: float) -> Vector3:
        """Multiply every component by a scalar."""
        return Vector3(self.x * factor, self.y * factor, self.z * factor)

    def cross(self, other: Vector3) -> Vector3:
        """Cross product self x other."""
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def dot(self, other: Vector3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def magnitude(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def distance_to(self, other: Vector3) -> float:
        """Euclidean distance between two points."""
        dx = self.x - other.x
        dy = self.y - other.y
        dz = self.z - other.z
        return math.sqrt(dx * dx + dy * dy + dz * dz)

    def normalize(self) -> Vector3:
        """
        Unit vector with the same orientation.

        A zero vector is returned unchanged.
        """
        length = self.magnitude()
        if length == 0.0:
            return self
        return Vector3(self.x / length, self.y / length, self.z / length)

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    # -------------------------------------------------------------------------
    # Operators
    # -------------------------------------------------------------------------

    def __add__(self, other: Vector3) -> Vector3:
        return self.add(other)

    def __sub__(self, other: Vector3) -> Vector3:
        return self.sub(other)

    def __mul__(self, factor: float) -> Vector3:
        return self.scale(factor)

    __rmul__ = __mul__

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __str__(self) -> str:
        return f"[{self.x},{self.y},{self.z}]"


ZERO = Vector3(0.0, 0.0, 0.0)


__all__ = ["Vector3", "ZERO"]
