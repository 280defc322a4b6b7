"""
Input validation utilities for the simulation.

Provides centralized validation for configuration values and bodies.
Raises descriptive exceptions on invalid input so that a malformed setup
fails at construction time instead of partway through a run.
"""

from __future__ import annotations

import math
from typing import Any


class ValidationError(ValueError):
    """Base exception for simulation validation errors."""

    pass


class InvalidConfigError(ValidationError):
    """Raised when a configuration parameter is out of range."""

    pass


class InvalidBodyError(ValidationError):
    """Raised when a body is malformed."""

    pass


def validate_positive(name: str, value: float) -> float:
    """
    Validate that a configuration value is a finite positive number.

    Args:
        name: Parameter name used in the error message
        value: Value to check

    Returns:
        The value as a float

    Raises:
        InvalidConfigError: If value is not positive and finite
    """
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise InvalidConfigError(f"{name} must be positive, got {value}")
    return value


def validate_non_negative(name: str, value: float) -> float:
    """
    Validate that a configuration value is a finite number >= 0.

    Raises:
        InvalidConfigError: If value is negative or not finite
    """
    value = float(value)
    if not math.isfinite(value) or value < 0:
        raise InvalidConfigError(f"{name} must be >= 0, got {value}")
    return value


def validate_count(name: str, value: int) -> int:
    """
    Validate that a count is an integer >= 1.

    Raises:
        InvalidConfigError: If value is not an integer or is < 1
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfigError(f"{name} must be an integer, got {value!r}")
    if value < 1:
        raise InvalidConfigError(f"{name} must be >= 1, got {value}")
    return value


def validate_mass(mass: float) -> float:
    """
    Validate a body mass.

    Args:
        mass: Mass value

    Returns:
        Validated mass as a float

    Raises:
        InvalidBodyError: If mass is not a finite positive number
    """
    mass = float(mass)
    if not math.isfinite(mass) or mass <= 0:
        raise InvalidBodyError(f"Body mass must be positive, got {mass}")
    return mass


def validate_config(config: Any) -> None:
    """
    Validate every field of a SimulationConfig.

    Raises:
        InvalidConfigError: On the first invalid field
    """
    validate_positive("gravitational_constant", config.gravitational_constant)
    validate_positive("dimensions", config.dimensions)
    validate_non_negative("theta", config.theta)
    validate_count("body_count", config.body_count)
    validate_count("workers", config.workers)
    if not callable(config.integrator):
        raise InvalidConfigError(f"integrator must be callable, got {config.integrator!r}")


__all__ = [
    "ValidationError",
    "InvalidConfigError",
    "InvalidBodyError",
    "validate_positive",
    "validate_non_negative",
    "validate_count",
    "validate_mass",
    "validate_config",
]
