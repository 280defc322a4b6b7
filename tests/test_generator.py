"""
Tests for random body generation.
"""

import pytest

from nbody_octree import SimulationConfig, Vector3
from nbody_octree.generator import (
    central_body,
    generate_bodies,
    orbital_velocity,
    populate,
)
from nbody_octree.validation import InvalidConfigError


class TestGenerateBodies:
    """Tests for generate_bodies."""

    def test_count_and_names(self):
        bodies = generate_bodies(25, 100.0, random_seed=1)
        assert len(bodies) == 25
        assert bodies[0].name == "body-0"
        assert bodies[-1].name == "body-24"

    def test_positions_within_bounds(self):
        """Every body starts inside the root cube."""
        for body in generate_bodies(200, 100.0, random_seed=2):
            assert abs(body.position.x) <= 50.0
            assert abs(body.position.y) <= 50.0
            assert abs(body.position.z) <= 50.0

    def test_mass_range(self):
        bodies = generate_bodies(100, 10.0, min_mass=2.0, max_mass=3.0, random_seed=3)
        assert all(2.0 <= b.mass <= 3.0 for b in bodies)

    def test_speed_bounded(self):
        """Speeds never exceed max_speed."""
        bodies = generate_bodies(100, 10.0, max_speed=4.0, random_seed=4)
        assert all(b.velocity.magnitude() <= 4.0 + 1e-12 for b in bodies)

    def test_seed_is_reproducible(self):
        """The same seed gives the same population."""
        first = generate_bodies(10, 100.0, random_seed=42)
        second = generate_bodies(10, 100.0, random_seed=42)
        for a, b in zip(first, second):
            assert a.position == b.position
            assert a.velocity == b.velocity
            assert a.mass == b.mass

    def test_display_attributes(self):
        body = generate_bodies(1, 10.0, radius=3.0, color="#00ff00", random_seed=0)[0]
        assert body.radius == 3.0
        assert body.color == "#00ff00"

    def test_invalid_mass_range(self):
        with pytest.raises(InvalidConfigError, match="max_mass"):
            generate_bodies(5, 10.0, min_mass=5.0, max_mass=1.0)

    def test_invalid_count(self):
        with pytest.raises(InvalidConfigError, match="count must be >= 1"):
            generate_bodies(0, 10.0)


class TestOrbitalVelocity:
    """Tests for the initial velocity rule."""

    def test_perpendicular_to_position(self):
        position = Vector3(3.0, 4.0, 2.0)
        velocity = orbital_velocity(position, 10.0)

        assert velocity.dot(position) == pytest.approx(0.0, abs=1e-9)
        assert velocity.z == 0.0
        assert velocity.magnitude() == pytest.approx(10.0)

    def test_zero_z_gives_rest(self):
        """Bodies in the z = 0 plane start at rest."""
        assert orbital_velocity(Vector3(3.0, 4.0, 0.0), 10.0) == Vector3(0.0, 0.0, 0.0)


class TestPopulate:
    """Tests for populate and central_body."""

    def test_central_body(self):
        sun = central_body(1e30)
        assert sun.name == "sun"
        assert sun.mass == 1e30
        assert sun.position == Vector3(0.0, 0.0, 0.0)
        assert sun.velocity == Vector3(0.0, 0.0, 0.0)

    def test_populate_adds_central_body(self):
        config = SimulationConfig(body_count=12, dimensions=100.0)
        bodies = populate(config, random_seed=1)
        assert len(bodies) == 13
        assert bodies[-1].name == "sun"

    def test_populate_without_central_body(self):
        config = SimulationConfig(body_count=12, dimensions=100.0)
        assert len(populate(config, central_mass=None, random_seed=1)) == 12
