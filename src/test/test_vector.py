"""
Test Vector arithmetic, products and directions.
"""

import math
import pytest
import numpy as np
from pathlib import Path

# Add src to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from nucleus.geometry import Angle, Plane, Transform, Vector


class TestConstruction:
    """Test creation and conversion."""

    def test_defaults_to_z_zero(self):
        v = Vector(1.0, 2.0)
        assert v.z == 0.0

    def test_from_array(self):
        v = Vector.from_array(np.array([1.0, 2.0, 3.0]))
        assert v == Vector(1.0, 2.0, 3.0)
        assert Vector.from_array([4.0, 5.0]) == Vector(4.0, 5.0, 0.0)

    def test_from_array_bad_shape(self):
        with pytest.raises(ValueError):
            Vector.from_array(np.zeros(4))

    def test_to_array(self):
        np.testing.assert_array_almost_equal(Vector(1.0, 2.0, 3.0).to_array(), [1.0, 2.0, 3.0])

    def test_parse(self):
        assert Vector.parse("1.5, 2, 0") == Vector(1.5, 2.0, 0.0)
        assert Vector.parse("(1;2)", separator=";") == Vector(1.0, 2.0, 0.0)
        assert Vector.parse("1,2,3", scale=2.0) == Vector(2.0, 4.0, 6.0)

    def test_parse_rejects_garbage(self):
        with pytest.raises(ValueError):
            Vector.parse("1")

    def test_indexing(self):
        v = Vector(1.0, 2.0, 3.0)
        assert (v[0], v[1], v[2]) == (1.0, 2.0, 3.0)
        assert list(v) == [1.0, 2.0, 3.0]

    def test_index_out_of_range(self):
        with pytest.raises(IndexError):
            Vector(1.0, 2.0, 3.0)[3]

    def test_immutable(self):
        v = Vector(1.0, 2.0, 3.0)
        with pytest.raises(AttributeError):
            v.x = 5.0


class TestArithmetic:
    """Test operators and products."""

    def test_add_subtract(self):
        a = Vector(1.0, 2.0, 3.0)
        b = Vector(4.0, 5.0, 6.0)
        assert a + b == Vector(5.0, 7.0, 9.0)
        assert b - a == Vector(3.0, 3.0, 3.0)
        assert -a == Vector(-1.0, -2.0, -3.0)

    def test_scale(self):
        assert Vector(1.0, 2.0, 3.0) * 2 == Vector(2.0, 4.0, 6.0)
        assert 2 * Vector(1.0, 2.0, 3.0) == Vector(2.0, 4.0, 6.0)

    def test_divide_by_zero_gives_nan_or_inf(self):
        v = Vector(1.0, 0.0, -1.0) / 0.0
        assert v.x == math.inf
        assert math.isnan(v.y)
        assert v.z == -math.inf
        assert not v.is_valid()

    def test_cross_is_perpendicular(self):
        a = Vector(1.0, 2.0, 3.0)
        b = Vector(-2.0, 0.5, 4.0)
        c = a.cross(b)
        assert c.dot(a) == pytest.approx(0.0, abs=1e-12)
        assert c.dot(b) == pytest.approx(0.0, abs=1e-12)

    def test_unit_cross(self):
        assert Vector.UNIT_X.cross(Vector.UNIT_Y) == Vector.UNIT_Z

    def test_magnitude_and_distance(self):
        assert Vector(3.0, 4.0).magnitude() == pytest.approx(5.0)
        assert Vector(1.0, 1.0, 0.0).distance_to(Vector(4.0, 5.0, 12.0)) == pytest.approx(13.0)
        assert Vector(1.0, 1.0, 0.0).xy_distance_to(Vector(4.0, 5.0, 12.0)) == pytest.approx(5.0)

    def test_largest_component_keeps_sign(self):
        assert Vector(1.0, -7.0, 3.0).largest_component() == -7.0


class TestDirections:
    """Test unitize, angles and rotation."""

    def test_unitize(self):
        u = Vector(3.0, 4.0).unitize()
        assert u.magnitude() == pytest.approx(1.0)
        assert u.equals(Vector(0.6, 0.8))

    def test_unitize_zero_is_unset(self):
        assert not Vector.ZERO.unitize().is_valid()

    def test_angle(self):
        assert Vector(0.0, 1.0).angle() == pytest.approx(math.pi / 2)
        assert isinstance(Vector(0.0, 1.0).angle(), Angle)

    def test_angle_to_is_signed(self):
        assert Vector.UNIT_X.angle_to(Vector.UNIT_Y) == pytest.approx(math.pi / 2)
        assert Vector.UNIT_Y.angle_to(Vector.UNIT_X) == pytest.approx(-math.pi / 2)

    def test_angle_between(self):
        assert Vector.UNIT_X.angle_between(Vector(1.0, 1.0)) == pytest.approx(math.pi / 4)
        assert Vector.ZERO.angle_between(Vector.UNIT_X).is_undefined()

    def test_parallel_includes_opposite(self):
        assert Vector.UNIT_X.is_parallel_to(Vector(-2.0, 0.0, 0.0))
        assert not Vector.UNIT_X.is_parallel_to(Vector.UNIT_Y)

    def test_rotate_about_z(self):
        r = Vector.UNIT_X.rotate(Vector.UNIT_Z, math.pi / 2)
        assert r.equals(Vector.UNIT_Y, 1e-12)

    def test_rotate_axis_not_unit(self):
        r = Vector.UNIT_X.rotate(Vector(0.0, 0.0, 5.0), math.pi)
        assert r.equals(-Vector.UNIT_X, 1e-12)

    def test_perpendicular_xy(self):
        assert Vector(1.0, 2.0).perpendicular_xy() == Vector(-2.0, 1.0, 0.0)

    def test_project_onto_plane(self):
        p = Vector(1.0, 2.0, 3.0).project(Plane.GLOBAL_XY)
        assert p.equals(Vector(1.0, 2.0, 0.0), 1e-12)

    def test_triangle_helpers(self):
        p0, p1, p2 = Vector(0.0, 0.0), Vector(2.0, 0.0), Vector(0.0, 2.0)
        assert Vector.triangle_area(p0, p1, p2) == pytest.approx(2.0)
        assert Vector.perpendicular_to(p0, p1, p2).equals(Vector.UNIT_Z)


class TestComparison:
    """Test equality, validity and point operations."""

    def test_equals_is_per_axis(self):
        a = Vector(0.0, 0.0, 0.0)
        b = Vector(0.5, 0.5, 0.5)
        # Every axis is exactly on the tolerance even though the distance exceeds it
        assert a.distance_to(b) > 0.5
        assert a.equals(b, 0.5)
        assert not a.equals(Vector(0.5, 0.5, 0.75), 0.5)

    @pytest.mark.parametrize("vector", [
        Vector(math.nan, 0.0, 0.0),
        Vector(0.0, math.nan, 0.0),
        Vector(0.0, 0.0, math.nan),
    ])
    def test_single_nan_is_invalid(self, vector):
        assert not vector.is_valid()

    def test_finite_is_valid(self):
        assert Vector(1.0, -2.0, 3.0).is_valid()
        assert Vector(math.inf, 0.0).is_valid()

    def test_interpolate(self):
        a = Vector(0.0, 0.0, 0.0)
        b = Vector(4.0, 2.0, -2.0)
        assert a.interpolate(b, 0.0) == a
        assert a.interpolate(b, 1.0) == b
        assert a.interpolate(b, 0.25).equals(Vector(1.0, 0.5, -0.5))
        assert a.interpolate(b, 1.5).equals(Vector(6.0, 3.0, -3.0))

    def test_transform_applies_translation(self):
        moved = Vector(1.0, 2.0, 3.0).transform(Transform.translation(Vector(10.0, 0.0, -1.0)))
        assert moved.equals(Vector(11.0, 2.0, 2.0))

    def test_transform_rotation_about_centre(self):
        t = Transform.rotation(Vector.UNIT_Z, math.pi / 2, centre=Vector(1.0, 0.0))
        assert Vector(2.0, 0.0).transform(t).equals(Vector(1.0, 1.0), 1e-12)
