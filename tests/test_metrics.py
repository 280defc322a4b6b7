"""Tests for diagnostics and exact force summation."""

import math
import warnings

import numpy as np
import pytest

from nbody_octree import Body, Octree, Vector3, direct
from nbody_octree.direct import (
    PerformanceWarning,
    accumulate_direct_forces,
    direct_force_on,
    direct_forces,
)
from nbody_octree.metrics import (
    center_of_mass,
    kinetic_energy,
    potential_energy,
    relative_force_error,
    simulation_summary,
    total_energy,
    total_mass,
    total_momentum,
)
from nbody_octree.vector import ZERO


def create_pair():
    """Two equal masses 10 apart along x, at rest."""
    return [
        Body("a", 5.0, Vector3(-5.0, 0.0, 0.0)),
        Body("b", 5.0, Vector3(5.0, 0.0, 0.0)),
    ]


def create_cloud(n=30):
    """A deterministic cloud of distinct positions inside [-30, 30]^3."""
    return [
        Body(
            f"c{i}",
            1.0 + (i % 4),
            Vector3(((i * 37) % 61) - 30.0, ((i * 17) % 59) - 29.0, ((i * 23) % 53) - 26.0),
        )
        for i in range(n)
    ]


class TestAggregates:
    """Tests for mass, center of mass and momentum."""

    def test_total_mass(self):
        assert total_mass(create_pair()) == 10.0
        assert total_mass([]) == 0.0

    def test_center_of_mass(self):
        """Mass-weighted mean position."""
        bodies = [Body("a", 1.0, Vector3(0.0, 0.0, 0.0)), Body("b", 3.0, Vector3(4.0, 0.0, 0.0))]
        assert center_of_mass(bodies) == Vector3(3.0, 0.0, 0.0)

    def test_center_of_mass_empty(self):
        assert center_of_mass([]) == ZERO

    def test_momentum_cancels(self):
        """Opposite momenta sum to zero."""
        bodies = [
            Body("a", 2.0, velocity=Vector3(1.0, 0.0, 0.0)),
            Body("b", 1.0, velocity=Vector3(-2.0, 0.0, 0.0)),
        ]
        assert total_momentum(bodies) == Vector3(0.0, 0.0, 0.0)

    def test_center_of_mass_matches_octree_root(self):
        """The octree root aggregates the same center of mass."""
        bodies = create_cloud()
        tree = Octree.from_bodies(bodies, config=None)

        expected = center_of_mass(bodies)
        root = tree.root.center_of_mass
        assert root.x == pytest.approx(expected.x, rel=1e-9, abs=1e-9)
        assert root.y == pytest.approx(expected.y, rel=1e-9, abs=1e-9)
        assert root.z == pytest.approx(expected.z, rel=1e-9, abs=1e-9)


class TestEnergy:
    """Tests for kinetic and potential energy."""

    def test_kinetic_energy(self):
        body = Body("a", 2.0, velocity=Vector3(3.0, 4.0, 0.0))
        assert kinetic_energy([body]) == pytest.approx(25.0)

    def test_kinetic_energy_at_rest(self):
        assert kinetic_energy(create_pair()) == 0.0
        assert kinetic_energy([]) == 0.0

    def test_potential_energy_pair(self):
        """U = -G m1 m2 / r."""
        bodies = [Body("a", 2.0, Vector3(0.0, 0.0, 0.0)), Body("b", 3.0, Vector3(3.0, 4.0, 0.0))]
        assert potential_energy(bodies, gravitational_constant=1.0) == pytest.approx(-1.2)

    def test_potential_energy_matches_pairwise_sum(self):
        bodies = create_cloud(12)
        expected = 0.0
        for i, a in enumerate(bodies):
            for b in bodies[i + 1 :]:
                expected -= a.mass * b.mass / a.position.distance_to(b.position)

        assert potential_energy(bodies, 1.0) == pytest.approx(expected)

    def test_potential_energy_skips_coincident(self):
        """Coincident pairs contribute nothing."""
        bodies = [Body("a", 1.0, Vector3(1.0, 1.0, 1.0)), Body("b", 1.0, Vector3(1.0, 1.0, 1.0))]
        assert potential_energy(bodies, 1.0) == 0.0

    def test_single_body_has_no_potential(self):
        assert potential_energy([Body("a", 1.0)], 1.0) == 0.0

    def test_total_energy(self):
        bodies = [
            Body("a", 2.0, Vector3(0.0, 0.0, 0.0), Vector3(3.0, 4.0, 0.0)),
            Body("b", 3.0, Vector3(3.0, 4.0, 0.0)),
        ]
        assert total_energy(bodies, 1.0) == pytest.approx(25.0 - 1.2)

    def test_summary_keys(self):
        summary = simulation_summary(create_pair(), 1.0)
        assert summary["body_count"] == 2
        assert summary["total_mass"] == 10.0
        assert summary["potential_energy"] == pytest.approx(-2.5)
        assert summary["total_energy"] == pytest.approx(-2.5)
        assert set(summary) == {
            "body_count",
            "total_mass",
            "center_of_mass",
            "momentum",
            "kinetic_energy",
            "potential_energy",
            "total_energy",
        }


class TestRelativeForceError:
    """Tests for relative_force_error."""

    def test_identical(self):
        forces = [Vector3(1.0, 2.0, 3.0), Vector3(-1.0, 0.0, 0.5)]
        assert relative_force_error(forces, forces) == 0.0

    def test_ten_percent(self):
        assert relative_force_error([Vector3(1.1, 0.0, 0.0)], [Vector3(1.0, 0.0, 0.0)]) == (
            pytest.approx(0.1)
        )

    def test_accepts_arrays(self):
        exact = np.array([[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]])
        assert relative_force_error(exact, exact) == 0.0

    def test_length_mismatch(self):
        with pytest.raises(ValueError, match="differ in length"):
            relative_force_error([ZERO], [ZERO, ZERO])

    def test_zero_reference(self):
        """All-zero reference forces: 0 if matched, inf otherwise."""
        assert relative_force_error([ZERO], [ZERO]) == 0.0
        assert math.isinf(relative_force_error([Vector3(1.0, 0.0, 0.0)], [ZERO]))


class TestDirectSummation:
    """Tests for exact pairwise forces."""

    def test_pair(self):
        """Equal and opposite forces of G m1 m2 / d^2."""
        forces = direct_forces(create_pair(), gravitational_constant=1.0)

        assert forces.shape == (2, 3)
        assert list(forces[0]) == pytest.approx([0.25, 0.0, 0.0])
        assert list(forces[1]) == pytest.approx([-0.25, 0.0, 0.0])

    def test_empty_and_single(self):
        assert direct_forces([], 1.0).shape == (0, 3)
        assert np.all(direct_forces([Body("a", 1.0)], 1.0) == 0.0)

    def test_coincident_pair_exerts_nothing(self):
        bodies = [Body("a", 1.0, Vector3(2.0, 2.0, 2.0)), Body("b", 1.0, Vector3(2.0, 2.0, 2.0))]
        forces = direct_forces(bodies, 1.0)
        assert np.all(forces == 0.0)
        assert np.all(np.isfinite(forces))

    def test_net_force_sums_to_zero(self):
        """Newton's third law: internal forces cancel."""
        forces = direct_forces(create_cloud(), 1.0)
        assert np.abs(forces.sum(axis=0)).max() < 1e-9

    def test_vectorized_matches_scalar(self):
        """The numpy path matches the one-pair-at-a-time sum."""
        bodies = create_cloud(15)
        forces = direct_forces(bodies, 1.0)
        for body, row in zip(bodies, forces):
            expected = direct_force_on(body, bodies, 1.0)
            assert tuple(row) == pytest.approx(expected.to_tuple(), rel=1e-9, abs=1e-12)

    def test_accumulate_adds_to_existing_force(self):
        a, b = create_pair()
        a.add_force(Vector3(1.0, 0.0, 0.0))
        accumulate_direct_forces([a, b], 1.0)

        assert a.force.x == pytest.approx(1.25)
        assert b.force.x == pytest.approx(-0.25)

    def test_performance_warning(self, monkeypatch):
        """Large populations warn about O(n^2) cost."""
        monkeypatch.setattr(direct, "DIRECT_WARN_THRESHOLD", 2)

        with pytest.warns(PerformanceWarning, match="Direct summation over 3 bodies"):
            direct_forces(create_cloud(3), 1.0)

    def test_no_warning_below_threshold(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error", PerformanceWarning)
            direct_forces(create_cloud(10), 1.0)
