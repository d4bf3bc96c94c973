"""
Test BoundingBox fitting, growth and containment.
"""

import math
import pytest
import numpy as np
from pathlib import Path

# Add src to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from nucleus.geometry import BoundingBox, Line, PolyLine, Vector


class TestFitting:
    """Test boxes fitted to positions."""

    def test_fitted_box_contains_points(self):
        rng = np.random.default_rng(42)
        points = [Vector.from_array(p) for p in rng.uniform(-10, 10, size=(50, 3))]
        box = BoundingBox.from_points(points)
        assert all(box.contains(p) for p in points)

    def test_extents(self):
        box = BoundingBox.from_points([Vector(1.0, 5.0, -1.0), Vector(-2.0, 3.0, 4.0)])
        assert box.min == Vector(-2.0, 3.0, -1.0)
        assert box.max == Vector(1.0, 5.0, 4.0)
        assert box.size == Vector(3.0, 2.0, 5.0)
        assert box.mid == Vector(-0.5, 4.0, 1.5)

    def test_empty_gives_none(self):
        assert BoundingBox.from_points([]) is None

    def test_from_shapes(self):
        box = BoundingBox.from_points([Line(Vector.ZERO, Vector(1.0, 1.0)),
                                       PolyLine.rectangle(2.0, 2.0, Vector(5.0, 0.0))])
        assert box.min == Vector(0.0, -1.0, 0.0)
        assert box.max == Vector(6.0, 1.0, 0.0)

    def test_fit_resets(self):
        box = BoundingBox(-100, 100, -100, 100, -100, 100)
        assert box.fit([Vector(1.0, 1.0, 1.0)])
        assert box.size == Vector.ZERO
        assert not box.fit([])
        assert box.max == Vector(1.0, 1.0, 1.0)


class TestGrowth:
    """Test include, expand and scale."""

    def test_include_point(self):
        box = BoundingBox.from_point(Vector.ZERO)
        box.include(Vector(2.0, -1.0, 3.0))
        assert box.min == Vector(0.0, -1.0, 0.0)
        assert box.max == Vector(2.0, 0.0, 3.0)

    def test_include_never_shrinks(self):
        box = BoundingBox(0, 10, 0, 10, 0, 10)
        box.include(Vector(5.0, 5.0, 5.0))
        assert box == BoundingBox(0, 10, 0, 10, 0, 10)

    def test_include_box(self):
        box = BoundingBox(0, 1, 0, 1, 0, 1)
        box.include(BoundingBox(-1, 0.5, 0.5, 3, 0, 0))
        assert box == BoundingBox(-1, 1, 0, 3, 0, 1)

    def test_expand(self):
        box = BoundingBox(0, 1, 0, 1, 0, 1)
        box.expand(3.0)
        assert box == BoundingBox(-3, 4, -3, 4, -3, 4)

    def test_scale_about_centre(self):
        box = BoundingBox(0, 2, 0, 4, 0, 0)
        box.scale(2.0)
        assert box == BoundingBox(-1, 3, -2, 6, 0, 0)

    def test_copy_is_independent(self):
        box = BoundingBox(0, 1, 0, 1, 0, 1)
        copy = box.copy()
        copy.expand(1.0)
        assert box.max_x == 1.0


class TestQueries:
    """Test containment and overlap."""

    def test_contains_is_inclusive(self):
        box = BoundingBox(0, 1, 0, 1, 0, 1)
        assert box.contains(Vector(1.0, 1.0, 1.0))
        assert not box.contains(Vector(1.0 + 1e-9, 0.5, 0.5))

    def test_invalid_point_never_contained(self):
        box = BoundingBox(-math.inf, math.inf, -math.inf, math.inf, -math.inf, math.inf)
        assert not box.contains(Vector.UNSET)
        assert not box.contains_xy(Vector(math.nan, 0.0, 0.0))

    def test_contains_xy_ignores_z(self):
        assert BoundingBox(0, 1, 0, 1, 0, 0).contains_xy(Vector(0.5, 0.5, 10.0))

    def test_overlaps(self):
        box = BoundingBox(0, 1, 0, 1, 0, 1)
        assert box.overlaps(BoundingBox(0.5, 2, 0.5, 2, 0.5, 2))
        # Touching faces count
        assert box.overlaps(BoundingBox(1, 2, 0, 1, 0, 1))
        assert not box.overlaps(BoundingBox(1.5, 2, 0, 1, 0, 1))

    def test_random_points_inside(self):
        box = BoundingBox(-1, 1, 2, 3, 0, 5)
        points = box.random_points_inside(200, np.random.default_rng(0))
        assert points.shape == (200, 3)
        assert all(box.contains(Vector.from_array(p)) for p in points)
        assert box.contains(box.random_point_inside())

    def test_corners(self):
        corners = list(BoundingBox(0, 1, 0, 2, 0, 3).corners())
        assert len(corners) == 8
        assert Vector(1.0, 2.0, 3.0) in corners
