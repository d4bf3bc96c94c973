"""
Test PolyCurve chaining, closure detection and compound areas.
"""

import math
import pytest
import numpy as np
from pathlib import Path

# Add src to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from nucleus.geometry import (
    Arc,
    Line,
    PlanarRegion,
    PolyCurve,
    PolyLine,
    Vector,
    VertexOwnershipError,
)


class TestClosure:
    """Test closed detection within tolerance."""

    def _open_square(self, gap: float, tolerance: float = 1e-4) -> PolyCurve:
        curve = PolyCurve(tolerance=tolerance)
        curve.add(Line(Vector(0.0, 0.0), Vector(1.0, 0.0)))
        curve.add(Line(Vector(1.0, 0.0), Vector(1.0, 1.0)))
        curve.add(Line(Vector(1.0, 1.0), Vector(0.0, 1.0)))
        curve.add(Line(Vector(0.0, 1.0), Vector(0.0, gap)))
        return curve

    def test_closed_within_tolerance(self):
        assert self._open_square(1e-5).closed

    def test_open_beyond_tolerance(self):
        assert not self._open_square(1e-3).closed

    def test_instance_tolerance(self):
        assert self._open_square(1e-3, tolerance=1e-2).closed

    def test_empty_is_open(self):
        assert not PolyCurve().closed

    def test_empty_end_points_are_unset(self):
        curve = PolyCurve()
        assert curve.start is None
        assert curve.end is None
        assert not curve.start_point.is_valid()
        assert not curve.end_point.is_valid()


class TestConstruction:
    """Test building chains."""

    def test_rectangle(self):
        rect = PolyCurve.rectangle(4.0, 2.0)
        assert rect.closed
        assert rect.segment_count == 4
        assert rect.length == pytest.approx(12.0)
        assert rect.point_at(0.5).equals(Vector(2.0, 1.0))

    def test_add_line_continues_from_end(self):
        curve = PolyCurve.start_at(Vector(1.0, 1.0))
        first = curve.add_line(Vector(3.0, 1.0))
        second = curve.add_line(Vector(3.0, 4.0))
        assert first.start_point == Vector(1.0, 1.0)
        assert second.start_point == Vector(3.0, 1.0)
        assert curve.length == pytest.approx(5.0)

    def test_add_line_without_start(self):
        with pytest.raises(ValueError):
            PolyCurve().add_line(Vector(1.0, 0.0))

    def test_add_arc_through_point(self):
        curve = PolyCurve.start_at(Vector(0.0, 0.0))
        curve.add_line(Vector(2.0, 0.0))
        arc = curve.add_arc(Vector(0.0, 0.0), Vector(1.0, -1.0))
        assert isinstance(arc, Arc)
        assert curve.closed
        assert curve.length == pytest.approx(2.0 + math.pi)

    def test_tangent_continuation(self):
        curve = PolyCurve.start_at(Vector(0.0, 0.0))
        curve.add_line(Vector(1.0, 0.0))
        arc = curve.add_arc(Vector(2.0, 1.0))
        assert isinstance(arc, Arc)
        assert arc.radius == pytest.approx(1.0)
        assert arc.circle.origin.equals(Vector(1.0, 1.0), 1e-9)
        assert arc.tangent_at(0.0).equals(Vector.UNIT_X, 1e-9)

    def test_tangent_continuation_straight(self):
        curve = PolyCurve.start_at(Vector(0.0, 0.0))
        curve.add_line(Vector(1.0, 0.0))
        assert isinstance(curve.add_arc_tangent(Vector(3.0, 0.0)), Line)

    def test_segment_cannot_join_two_polycurves(self):
        line = Line(Vector.ZERO, Vector.UNIT_X)
        first = PolyCurve([line])
        second = PolyCurve()
        with pytest.raises(VertexOwnershipError):
            second.add(line)
        assert line.parent is first
        assert len(second.segments) == 0

    def test_vertices_aggregate(self):
        rect = PolyCurve.rectangle(2.0, 2.0)
        assert rect.vertex_count == 8
        # The aggregate view does not take ownership
        assert rect.vertices[0].owner is rect.segments[0]


class TestEvaluation:
    """Test evaluation across sub-curves."""

    def test_point_across_line_and_arc(self):
        curve = PolyCurve.start_at(Vector(0.0, 0.0))
        curve.add_line(Vector(2.0, 0.0))
        curve.add_arc(Vector(0.0, 0.0), Vector(1.0, -1.0))
        assert curve.segment_count == 2
        assert curve.point_at(0.25).equals(Vector(1.0, 0.0))
        assert curve.point_at(0.75).equals(Vector(1.0, -1.0), 1e-9)

    def test_closest_point(self):
        rect = PolyCurve.rectangle(4.0, 2.0)
        assert rect.closest_point(Vector(0.5, 5.0)).equals(Vector(0.5, 1.0))

    def test_bounding_box_covers_arcs(self):
        curve = PolyCurve.start_at(Vector(0.0, 0.0))
        curve.add_line(Vector(2.0, 0.0))
        curve.add_arc(Vector(0.0, 0.0), Vector(1.0, -1.0))
        box = curve.bounding_box
        assert box.min_y == pytest.approx(-1.0)
        assert box.max_x == pytest.approx(2.0)

    def test_segment_edit_invalidates_parent_cache(self):
        rect = PolyCurve.rectangle(2.0, 2.0)
        assert rect.bounding_box.max_x == pytest.approx(1.0)
        rect.segments[1].end.position = Vector(5.0, 1.0)
        assert rect.bounding_box.max_x == pytest.approx(5.0)

    def test_reverse(self):
        curve = PolyCurve.start_at(Vector(0.0, 0.0))
        curve.add_line(Vector(1.0, 0.0))
        curve.add_line(Vector(1.0, 1.0))
        curve.reverse()
        assert curve.start_point == Vector(1.0, 1.0)
        assert curve.end_point == Vector(0.0, 0.0)

    def test_facet_removes_duplicate_joints(self):
        points = PolyCurve.rectangle(2.0, 2.0).facet()
        assert len(points) == 5


class TestArea:
    """Test enclosed areas of compound curves."""

    def test_line_and_arc_area(self):
        curve = PolyCurve.start_at(Vector(0.0, 0.0))
        curve.add_line(Vector(2.0, 0.0))
        curve.add_arc(Vector(0.0, 0.0), Vector(1.0, -1.0))
        area, centroid = curve.enclosed_area()
        # Right along the top then back round underneath: clockwise
        assert area == pytest.approx(math.pi / 2, rel=1e-9)
        assert centroid.equals(Vector(1.0, -4 / (3 * math.pi)), 1e-9)

    def test_gap_is_bridged(self):
        curve = PolyCurve([Line(Vector(0.0, 0.0), Vector(1.0, 0.0)),
                           Line(Vector(1.0, 1.0), Vector(0.0, 1.0))])
        assert not curve.closed
        area, centroid = curve.enclosed_area()
        assert area == pytest.approx(-1.0)
        assert centroid.equals(Vector(0.5, 0.5))

    def test_matches_polyline(self):
        pl = PolyLine([Vector(0.0, 0.0), Vector(3.0, 0.0), Vector(3.0, 1.0),
                       Vector(1.0, 2.0)], closed=True)
        pc = pl.to_polycurve()
        np.testing.assert_allclose(pc.enclosed_area()[0], pl.enclosed_area()[0])
        assert pc.enclosed_ixx() == pytest.approx(pl.enclosed_ixx())

    def test_region_with_arc_perimeter(self):
        curve = PolyCurve.start_at(Vector(-1.0, 0.0))
        curve.add_line(Vector(1.0, 0.0))
        curve.add_arc(Vector(-1.0, 0.0), Vector(0.0, 1.0))
        region = PlanarRegion(curve)
        assert region.area() == pytest.approx(math.pi / 2, rel=1e-9)
        assert region.centroid().y == pytest.approx(4 / (3 * math.pi))

    def test_empty_chain_encloses_nothing(self):
        curve = PolyCurve()
        area, centroid = curve.enclosed_area()
        assert area == 0.0
        assert not centroid.is_valid()
        assert curve.enclosed_ixx() == 0.0
