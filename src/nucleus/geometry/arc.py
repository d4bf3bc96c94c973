"""
Arc: a circular arc through three vertices (start, a point on the arc, end).

The supporting circle is derived lazily from the vertices and discarded
whenever they move. An arc whose start and end coincide is a full circle; the
middle vertex is then the diametrically opposite point.
"""

from __future__ import annotations
import logging
import math
from typing import List, Optional

import numpy as np
from numpy.typing import NDArray

from .angle import Angle, TWO_PI
from .bounding_box import BoundingBox
from .circle import Circle
from .coordinate_systems import CylindricalCoordinateSystem
from .curve import Curve
from .line import Line
from .numeric import safe_divide
from .plane import Plane
from .vector import Vector
from .vertex import VertexCollection, as_vertex
from . import tolerance as tol

logger = logging.getLogger(__name__)

# Gauss-Legendre rule used to integrate along the arc
_GAUSS_NODES, _GAUSS_WEIGHTS = np.polynomial.legendre.leggauss(32)


class Arc(Curve):
    """
    Circular arc defined by three points.

    Args:
        start: Start position (Vector) or an unowned Vertex
        point_on: Any other point on the arc between start and end
        end: End position; equal to start (within tolerance) for a full circle
        tolerance: Distance below which start and end count as coincident
    """

    def __init__(self, start=Vector.ZERO, point_on=Vector(1.0, 1.0, 0.0),
                 end=Vector(2.0, 0.0, 0.0), tolerance: float = tol.GEOMETRIC):
        super().__init__()
        self._circle: Optional[Circle] = None
        self._normal = Vector.UNIT_Z
        self.tolerance = tolerance
        self._vertices = VertexCollection(
            self, [as_vertex(start), as_vertex(point_on), as_vertex(end)])

    @classmethod
    def from_circle(cls, circle: Circle) -> Arc:
        """Closed arc tracing a whole circle, starting and ending on its A axis."""
        start = circle.point_at(0.0)
        arc = cls(start, circle.point_at(math.pi), start)
        arc._normal = circle.l
        arc._circle = circle
        return arc

    @classmethod
    def from_circle_angles(cls, circle: Circle, start_angle: float, end_angle: float) -> Arc:
        """
        Arc on a circle between two angles about its L axis.

        A sweep of a full turn or more gives a closed arc.
        """
        if abs(end_angle - start_angle) >= TWO_PI:
            return cls.from_circle(circle)
        return cls(circle.point_at(start_angle),
                   circle.point_at((start_angle + end_angle) / 2),
                   circle.point_at(end_angle))

    @classmethod
    def start_tangent_end(cls, start: Vector, tangent: Vector, end: Vector,
                          angle_tolerance: float = tol.ANGLE) -> Curve:
        """
        Arc leaving start in the direction of tangent and finishing at end.

        Returns a Line instead when the tangent points straight at (or away
        from) the end point.
        """
        chord = end - start
        if tangent.is_parallel_to(chord, angle_tolerance):
            return Line(start, end)
        bisector = (chord.unitize() + tangent.unitize()).unitize()
        distance = 0.5 * chord.magnitude() / bisector.dot(tangent.unitize())
        return cls(start, start + bisector * distance, end)

    # ------------------------------------------------------------------
    # Defining geometry
    # ------------------------------------------------------------------

    @property
    def vertices(self) -> VertexCollection:
        return self._vertices

    @property
    def point_on(self):
        """The middle vertex."""
        return self._vertices[1]

    @property
    def closed(self) -> bool:
        return self.start_point.equals(self.end_point, self.tolerance)

    @property
    def circle(self) -> Circle:
        """Supporting circle; cached until the vertices move."""
        if self._circle is None:
            if self.closed:
                self._circle = Circle.from_diameter(
                    self.start_point, self.point_on.position, self._normal)
            else:
                self._circle = Circle.from_three_points(
                    self.start_point, self.point_on.position, self.end_point)
            logger.debug("Regenerated circle for %r", self)
        return self._circle

    def invalidate_cached_geometry(self) -> None:
        super().invalidate_cached_geometry()
        if self._circle is not None and self._circle.l.is_valid():
            self._normal = self._circle.l
        self._circle = None

    def transform(self, transform) -> None:
        # Capture the current normal before moving the vertices
        self.invalidate_cached_geometry()
        self._normal = transform.apply_to_vector(self._normal).unitize()
        super().transform(transform)

    def reverse(self) -> None:
        self.invalidate_cached_geometry()
        self._normal = -self._normal
        super().reverse()

    def is_valid(self) -> bool:
        return super().is_valid() and self.circle.is_valid()

    @property
    def radius(self) -> float:
        return self.circle.radius

    def _start_angle(self) -> float:
        return self.circle.azimuth(self.start_point)

    @property
    def radian_measure(self) -> Angle:
        """
        Signed sweep about the circle's L axis (a full turn when closed).

        Positive when the arc runs anticlockwise about L.
        """
        if self.closed:
            return Angle.COMPLETE
        c = self.circle
        start = c.azimuth(self.start_point)
        to_mid = (c.azimuth(self.point_on.position) - start).normalize_to_2pi()
        to_end = (c.azimuth(self.end_point) - start).normalize_to_2pi()
        if to_mid > to_end:
            return Angle(-(TWO_PI - to_end))
        return Angle(to_end)

    def is_clockwise(self) -> bool:
        """True if the arc runs clockwise when viewed from above (down global -Z)."""
        anticlockwise_about_l = self.radian_measure > 0
        if self.circle.l.z < 0:
            anticlockwise_about_l = not anticlockwise_about_l
        return not anticlockwise_about_l

    def is_clockwise_in(self, cs: CylindricalCoordinateSystem) -> bool:
        """True if the arc runs clockwise about the L axis of another system."""
        if self.closed:
            return (self.radian_measure * self.circle.l.dot(cs.l)) < 0
        start = cs.azimuth(self.start_point)
        to_mid = (cs.azimuth(self.point_on.position) - start).normalize_to_2pi()
        to_end = (cs.azimuth(self.end_point) - start).normalize_to_2pi()
        return to_end < to_mid

    # ------------------------------------------------------------------
    # Curve interface
    # ------------------------------------------------------------------

    @property
    def segment_count(self) -> int:
        return 1

    @property
    def length(self) -> float:
        return self.radius * abs(self.radian_measure)

    def point_at(self, t: float) -> Vector:
        if self.closed:
            t %= 1.0
        return self.circle.point_at(self._start_angle() + t * self.radian_measure)

    def point_at_span(self, span: int, t_span: float) -> Vector:
        return self.point_at(t_span)

    def tangent_at_span(self, span: int, t_span: float) -> Vector:
        measure = self.radian_measure
        tangent = self.circle.tangent_at(self._start_angle() + t_span * measure)
        return tangent if measure >= 0 else -tangent

    def segment_end(self, span: int) -> Vector:
        return self.end_point

    def segment_length(self, span: int) -> float:
        return self.length

    def closest_parameter(self, point: Vector) -> float:
        """Normalised parameter of the closest point, clamped to the arc's ends."""
        measure = self.radian_measure
        offset = Angle(self.circle.azimuth(point) - self._start_angle())
        if measure >= 0:
            t = safe_divide(float(offset.normalize_to_2pi()), float(measure))
        else:
            t = safe_divide(float((-offset).normalize_to_2pi()), -float(measure))
        if t <= 1.0:
            return t
        if point.distance_to_squared(self.start_point) <= point.distance_to_squared(self.end_point):
            return 0.0
        return 1.0

    def closest_parameter_on_span(self, span: int, point: Vector) -> float:
        return self.closest_parameter(point)

    def facet(self, tolerance_angle: float = Angle.from_degrees(5)) -> List[Vector]:
        divisions = max(1, math.ceil(abs(self.radian_measure) / tolerance_angle))
        return [self.point_at(i / divisions) for i in range(divisions + 1)]

    def _generate_bounding_box(self) -> Optional[BoundingBox]:
        box = BoundingBox.from_points(self.facet(Angle.from_degrees(2)))
        box.include(self.vertices)
        return box

    # ------------------------------------------------------------------
    # Area
    # ------------------------------------------------------------------

    def segment_area(self) -> float:
        """Unsigned area between the arc and its chord."""
        theta = abs(self.radian_measure)
        return (theta - math.sin(theta)) * self.radius ** 2 / 2

    def segment_centroid(self) -> Vector:
        """Centroid of the area between the arc and its chord."""
        theta = abs(self.radian_measure)
        if self.closed:
            return self.circle.origin
        r_bar = 4 * math.sin(theta / 2) ** 3 / (3 * (theta - math.sin(theta)))
        return self.circle.origin.interpolate(self.point_at(0.5), r_bar)

    def _path_integrals(self, plane: Plane) -> NDArray[np.float64]:
        c = self.circle
        measure = float(self.radian_measure)
        t = 0.5 * (_GAUSS_NODES + 1.0)
        phi = float(self._start_angle()) + t * measure
        a = c.a.to_array()
        b = c.l.cross(c.a).to_array()
        cos_phi = np.cos(phi)[:, None]
        sin_phi = np.sin(phi)[:, None]
        points = c.origin.to_array() + c.radius * (a * cos_phi + b * sin_phi)
        derivatives = c.radius * measure * (b * cos_phi - a * sin_phi)
        relative = points - plane.origin.to_array()
        x = relative @ plane.x.to_array()
        y = relative @ plane.y.to_array()
        dx = derivatives @ plane.x.to_array()
        integrands = np.stack([y * dx, x * y * dx, y * y * dx / 2, y ** 3 * dx / 3])
        return 0.5 * (integrands @ _GAUSS_WEIGHTS)

    def __repr__(self) -> str:
        return (f"Arc({self.start_point!r}, {self.point_on.position!r}, "
                f"{self.end_point!r})")
