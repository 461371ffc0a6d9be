"""
Tests for vector helpers and frame transformations.
"""
import math
import pytest

from orrery.core.frames import (
    rot1, rot3,
    add, sub, dot, norm,
    orbital_plane_to_ecliptic,
    ecliptic_to_display,
)


class TestVectorOperations:
    def test_dot_product(self):
        a = (1.0, 2.0, 3.0)
        b = (4.0, 5.0, 6.0)
        assert dot(a, b) == 32.0

    def test_add_and_subtract(self):
        a = (5.0, 7.0, 9.0)
        b = (2.0, 3.0, 4.0)
        assert add(a, b) == (7.0, 10.0, 13.0)
        assert sub(a, b) == (3.0, 4.0, 5.0)

    def test_norm(self):
        assert norm((3.0, 4.0, 0.0)) == 5.0
        assert norm((1.0, 0.0, 0.0)) == 1.0


class TestRotations:
    def test_rot3_90_degrees(self):
        # Rotate (1,0,0) by 90 degrees about z-axis -> should give (0,1,0)
        result = rot3(math.pi / 2, (1.0, 0.0, 0.0))
        assert result[0] == pytest.approx(0.0, abs=1e-12)
        assert result[1] == pytest.approx(1.0, abs=1e-12)
        assert result[2] == 0.0

    def test_rot1_90_degrees(self):
        # Rotate (0,1,0) by 90 degrees about x-axis -> should give (0,0,1)
        result = rot1(math.pi / 2, (0.0, 1.0, 0.0))
        assert result[1] == pytest.approx(0.0, abs=1e-12)
        assert result[2] == pytest.approx(1.0, abs=1e-12)

    def test_rotations_preserve_length(self):
        v = (1.0, 2.0, 3.0)
        assert norm(rot3(0.7, rot1(-1.3, v))) == pytest.approx(norm(v))

    def test_rot3_identity(self):
        v = (1.0, 2.0, 3.0)
        assert rot3(0.0, v) == v


class TestOrbitalPlaneToEcliptic:
    def test_zero_angles_is_planar(self):
        x, y, z = orbital_plane_to_ecliptic(2.0, math.pi / 2, 0.0, 0.0)
        assert x == pytest.approx(0.0, abs=1e-12)
        assert y == pytest.approx(2.0)
        assert z == 0.0

    def test_polar_orbit_reaches_pole(self):
        # 90 deg past the node on a polar orbit points straight up
        x, y, z = orbital_plane_to_ecliptic(1.0, math.pi / 2, math.pi / 2, 0.3)
        assert x == pytest.approx(0.0, abs=1e-12)
        assert y == pytest.approx(0.0, abs=1e-12)
        assert z == pytest.approx(1.0)

    def test_node_direction(self):
        # At u = 0 the body sits on the ascending node
        x, y, z = orbital_plane_to_ecliptic(1.0, 0.0, 0.4, math.radians(30.0))
        assert x == pytest.approx(math.cos(math.radians(30.0)))
        assert y == pytest.approx(math.sin(math.radians(30.0)))
        assert z == pytest.approx(0.0, abs=1e-12)


class TestDisplayFrame:
    def test_scale_and_swap_y_z(self):
        assert ecliptic_to_display((1.0, 2.0, 3.0), 10.0) == (10.0, 30.0, 20.0)

