"""
Curve: base class for one-dimensional shapes.

Curves are parameterised over [0, 1] from start to end. A curve made of
several spans divides that range evenly between them: point_at(t) finds the
span that t falls in and evaluates the span locally. Closed curves wrap t.

Enclosed-area calculations project the curve onto a plane and integrate under
each span in the plane's local x-y coordinates (a trapezoid under each straight
edge). Areas are signed: clockwise in the plane is positive.
"""

from __future__ import annotations
from abc import abstractmethod
import logging
import math
from typing import Iterable, List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .angle import Angle
from .numeric import safe_divide
from .plane import Plane
from .shape import Shape
from .vector import Vector
from . import tolerance as tol

logger = logging.getLogger(__name__)

# Indices into the integral arrays returned by _path_integrals
AREA, MOMENT_X, MOMENT_Y, SECOND_MOMENT = range(4)


def segment_integrals(start: Vector, end: Vector) -> NDArray[np.float64]:
    """
    Integrals under a straight edge in local 2D coordinates.

    For the trapezoid between the edge and the local x-axis returns
    [area, first moment for x-centroid, first moment for y-centroid,
    second moment about the x-axis], each signed by the direction of travel
    along x.
    """
    x0, y0, x1, y1 = start.x, start.y, end.x, end.y
    dx = x1 - x0
    dy = y1 - y0
    return np.array([
        dx * (y0 + y1) / 2,
        dx * (x0 * y0 + (x0 * dy + dx * y0) / 2 + dx * dy / 3),
        dx * (y0 * y0 + y0 * y1 + y1 * y1) / 6,
        dx * (y0 + y1) * (y0 * y0 + y1 * y1) / 12,
    ], dtype=np.float64)


def _centroid_from(integrals: NDArray[np.float64], plane: Plane) -> Vector:
    area = integrals[AREA]
    local = Vector(safe_divide(integrals[MOMENT_X], area),
                   safe_divide(integrals[MOMENT_Y], area), 0.0)
    return plane.local_to_global(local)


class Curve(Shape):
    """Abstract one-dimensional shape parameterised over [0, 1]."""

    @property
    def closed(self) -> bool:
        """True if the end of the curve joins back to its start."""
        return False

    @property
    @abstractmethod
    def segment_count(self) -> int:
        """Number of spans the parameter range is divided into."""

    @property
    @abstractmethod
    def length(self) -> float:
        """Total length along the curve."""

    # ------------------------------------------------------------------
    # Ends
    # ------------------------------------------------------------------

    @property
    def start(self):
        return self.vertices[0]

    @property
    def end(self):
        return self.vertices[-1]

    @property
    def start_point(self) -> Vector:
        return self.start.position

    @property
    def end_point(self) -> Vector:
        return self.end.position

    def is_valid(self) -> bool:
        return (len(self.vertices) >= 2
                and all(v.position.is_valid() for v in self.vertices))

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def _resolve_span(self, t: float) -> Tuple[int, float]:
        """Map a curve parameter to (span index, parameter within the span)."""
        if self.closed:
            t %= 1.0
        count = self.segment_count
        t_span = t * count
        span = math.floor(t_span)
        t_span %= 1.0
        # A parameter on a span boundary belongs to the end of the earlier span
        if t_span == 0 and span > 0:
            span, t_span = span - 1, 1.0
        if span >= count:
            span, t_span = count - 1, 1.0
        elif span < 0:
            span, t_span = 0, t * count
        return span, t_span

    def point_at(self, t: float) -> Vector:
        """Point at a normalised parameter (0 = start, 1 = end)."""
        if self.segment_count == 0:
            return Vector.UNSET
        span, t_span = self._resolve_span(t)
        return self.point_at_span(span, t_span)

    def point_at_span(self, span: int, t_span: float) -> Vector:
        """Point on one span; straight-line interpolation by default."""
        return self.segment_start(span).interpolate(self.segment_end(span), t_span)

    def tangent_at(self, t: float) -> Vector:
        """Unit tangent at a normalised parameter."""
        if self.segment_count == 0:
            return Vector.UNSET
        span, t_span = self._resolve_span(t)
        return self.tangent_at_span(span, t_span)

    def tangent_at_span(self, span: int, t_span: float) -> Vector:
        return (self.segment_end(span) - self.segment_start(span)).unitize()

    def segment_start(self, span: int) -> Vector:
        return self.vertices[span].position

    def segment_end(self, span: int) -> Vector:
        """End of a span; the last span of a closed curve ends at the start."""
        if self.closed and span == self.segment_count - 1:
            return self.vertices[0].position
        return self.vertices[span + 1].position

    def segment_length(self, span: int) -> float:
        return self.segment_start(span).distance_to(self.segment_end(span))

    def parameter_at_length(self, length: float, from_end: bool = False) -> float:
        """Normalised parameter at a distance along the curve."""
        if from_end:
            length = self.length - length
        count = self.segment_count
        remaining = length
        for span in range(count):
            span_length = self.segment_length(span)
            if remaining <= span_length or span == count - 1:
                return (span + safe_divide(remaining, span_length)) / count
            remaining -= span_length
        return 0.0

    def point_at_length(self, length: float, from_end: bool = False) -> Vector:
        return self.point_at(self.parameter_at_length(length, from_end))

    def closest_parameter(self, point: Vector) -> float:
        """Normalised parameter of the point on the curve closest to the given point."""
        count = self.segment_count
        best_t, best_distance = 0.0, math.inf
        for span in range(count):
            t_span = self.closest_parameter_on_span(span, point)
            distance = self.point_at_span(span, t_span).distance_to_squared(point)
            if distance < best_distance:
                best_t, best_distance = (span + t_span) / count, distance
        return best_t

    def closest_parameter_on_span(self, span: int, point: Vector) -> float:
        p0 = self.segment_start(span)
        direction = self.segment_end(span) - p0
        t = safe_divide((point - p0).dot(direction), direction.magnitude_squared())
        if math.isnan(t):
            return 0.0
        return min(1.0, max(0.0, t))

    def closest_point(self, point: Vector) -> Vector:
        return self.point_at(self.closest_parameter(point))

    def local_coordinate_system(self, t: float, orientation: float = 0.0,
                                z_limit: float = math.radians(1.0)) -> Plane:
        """
        Frame at a point on the curve: x along the tangent, y 'up'.

        The y-axis is perpendicular to the tangent and global Z (global X
        when the tangent is within z_limit of vertical), then rotated about
        the tangent by orientation.
        """
        origin = self.point_at(t)
        tangent = self.tangent_at(t)
        align = Vector.UNIT_Z
        between = tangent.angle_between(Vector.UNIT_Z)
        if between <= z_limit or between >= math.pi - z_limit:
            align = Vector.UNIT_X
        local_y = align.cross(tangent)
        if orientation != 0:
            local_y = local_y.rotate(tangent, orientation)
        return Plane.from_x_and_xy(origin, tangent, local_y)

    def facet(self, tolerance_angle: float = Angle.from_degrees(5)) -> List[Vector]:
        """
        Points approximating the curve with straight segments.

        Straight-edged curves return their vertices (plus the start again if
        closed); curved subclasses subdivide so that no facet turns through
        more than tolerance_angle.
        """
        points = self.vertices.positions()
        if self.closed and points:
            points.append(points[0])
        return points

    def plane(self, tolerance: float = tol.GEOMETRIC) -> Optional[Plane]:
        """Best-fit plane of the curve's vertices, or None if they are collinear."""
        return self.vertices.plane(tolerance)

    def reverse(self) -> None:
        """Reverse the direction of the curve in place."""
        with self.suppress_change_notifications():
            self.vertices.reverse()

    # ------------------------------------------------------------------
    # Enclosed area and section properties
    # ------------------------------------------------------------------

    def _default_plane(self) -> Plane:
        """Global XY plane at the elevation of the curve's start."""
        return Plane.GLOBAL_XY.with_origin(Vector(0.0, 0.0, self.start_point.z))

    def _path_integrals(self, plane: Plane) -> NDArray[np.float64]:
        """Integrals under every span, following the curve (closing span included only if closed)."""
        total = np.zeros(4, dtype=np.float64)
        for span in range(self.segment_count):
            total += segment_integrals(plane.global_to_local(self.segment_start(span)),
                                       plane.global_to_local(self.segment_end(span)))
        return total

    def _enclosed_integrals(self, plane: Plane) -> NDArray[np.float64]:
        """Integrals of the region enclosed by the curve, closed by a chord if open."""
        total = self._path_integrals(plane)
        if not self.closed:
            total = total + segment_integrals(plane.global_to_local(self.end_point),
                                              plane.global_to_local(self.start_point))
        return total

    def _enclosed_integrals_with_voids(self, voids: Iterable[Curve],
                                       plane: Plane) -> NDArray[np.float64]:
        result = self._enclosed_integrals(plane)
        sign = np.sign(result[AREA])
        for void in voids:
            void_integrals = void._enclosed_integrals(plane)
            # Voids always reduce the area, whatever their winding
            void_integrals = void_integrals * (sign * np.sign(void_integrals[AREA]))
            result = result - void_integrals
        return result

    def enclosed_area(self, on_plane: Optional[Plane] = None) -> Tuple[float, Vector]:
        """
        Signed area enclosed by the curve and its centroid.

        Args:
            on_plane: Projection plane (default: global XY at the start's elevation)

        Returns:
            (area, centroid) with area positive when the curve runs clockwise
            in the plane
        """
        plane = on_plane or self._default_plane()
        integrals = self._enclosed_integrals(plane)
        return float(integrals[AREA]), _centroid_from(integrals, plane)

    def enclosed_area_with_voids(self, voids: Iterable[Curve],
                                 on_plane: Optional[Plane] = None) -> Tuple[float, Vector]:
        """Enclosed area and centroid with the areas of void curves subtracted."""
        plane = on_plane or self._default_plane()
        integrals = self._enclosed_integrals_with_voids(voids, plane)
        return float(integrals[AREA]), _centroid_from(integrals, plane)

    def enclosed_ixx(self, on_plane: Optional[Plane] = None) -> float:
        """Signed second moment of the enclosed area about the plane's local x-axis."""
        plane = on_plane or self._default_plane()
        return float(self._enclosed_integrals(plane)[SECOND_MOMENT])

    def enclosed_ixx_with_voids(self, voids: Iterable[Curve],
                                on_plane: Optional[Plane] = None) -> float:
        plane = on_plane or self._default_plane()
        return float(self._enclosed_integrals_with_voids(voids, plane)[SECOND_MOMENT])
