"""
Intersection and containment tests.

The *_xy functions work on the projection onto the global XY plane; the z
components of their results are interpolated along the first line.
"""

from __future__ import annotations
import math
from typing import Iterable, Sequence, Tuple

from .numeric import safe_divide
from .vector import Vector


def _cross_z(a: Vector, b: Vector) -> float:
    return a.x * b.y - a.y * b.x


def line_line_xy(p0: Vector, v0: Vector, p1: Vector, v1: Vector) -> Tuple[Vector, float, float]:
    """
    Intersection of two infinite lines in plan.

    Args:
        p0, v0: Point on and direction of the first line
        p1, v1: Point on and direction of the second line

    Returns:
        (point, t0, t1) where point = p0 + v0 * t0 = p1 + v1 * t1 in XY.
        Parallel lines give (Vector.UNSET, nan, nan).
    """
    denominator = _cross_z(v0, v1)
    if denominator == 0:
        return Vector.UNSET, math.nan, math.nan
    offset = p1 - p0
    t0 = _cross_z(offset, v1) / denominator
    t1 = _cross_z(offset, v0) / denominator
    return p0 + v0 * t0, t0, t1


def ray_line_segment_xy(ray_origin: Vector, ray_direction: Vector,
                        segment_start: Vector, segment_end: Vector) -> Vector:
    """Where a ray crosses a segment in plan, or Vector.UNSET if it misses."""
    point, t0, t1 = line_line_xy(ray_origin, ray_direction,
                                 segment_start, segment_end - segment_start)
    if t0 >= 0 and 0 <= t1 <= 1:
        return point
    return Vector.UNSET


def line_segments_xy(start0: Vector, end0: Vector, start1: Vector, end1: Vector) -> Vector:
    """Crossing point of two segments in plan, or Vector.UNSET if they do not cross."""
    point, t0, t1 = line_line_xy(start0, end0 - start0, start1, end1 - start1)
    if 0 <= t0 <= 1 and 0 <= t1 <= 1:
        return point
    return Vector.UNSET


def x_ray_line_segment_xy_check(point: Vector, segment_start: Vector, segment_end: Vector) -> bool:
    """
    True if a ray from point in the +X direction crosses the segment.

    Segment ends are half-open in y so that a ray through a shared polygon
    corner is counted once.
    """
    y0, y1 = segment_start.y, segment_end.y
    if (y0 > point.y) == (y1 > point.y):
        return False
    x_cross = segment_start.x + (point.y - y0) * (segment_end.x - segment_start.x) / (y1 - y0)
    return point.x < x_cross


def polygon_containment_xy(polygon: Sequence[Vector], point: Vector) -> bool:
    """
    Even-odd test for a point inside a closed polygon in plan.

    The polygon is implicitly closed from its last point back to its first.
    """
    inside = False
    n = len(polygon)
    for i in range(n):
        if x_ray_line_segment_xy_check(point, polygon[i], polygon[(i + 1) % n]):
            inside = not inside
    return inside


def curve_contains_xy(curve, point: Vector, tolerance_angle: float = math.radians(5)) -> bool:
    """Even-odd containment of a point inside a closed curve, using its facets."""
    return polygon_containment_xy(curve.facet(tolerance_angle), point)


def line_plane(point: Vector, direction: Vector, plane) -> Tuple[Vector, float]:
    """
    Intersection of an infinite line with a plane.

    Returns:
        (point, t) with t the parameter along direction; (Vector.UNSET, nan)
        when the line is parallel to the plane
    """
    denominator = direction.dot(plane.z)
    if denominator == 0:
        return Vector.UNSET, math.nan
    t = safe_divide((plane.origin - point).dot(plane.z), denominator)
    return point + direction * t, t


def any_segments_cross_xy(points: Iterable[Vector]) -> bool:
    """True if any two non-adjacent edges of an open polyline cross in plan."""
    pts = list(points)
    for i in range(len(pts) - 1):
        for j in range(i + 2, len(pts) - 1):
            if line_segments_xy(pts[i], pts[i + 1], pts[j], pts[j + 1]).is_valid():
                return True
    return False
