"""Circle: a cylindrical coordinate system with a radius."""

from __future__ import annotations
import logging
import math
from typing import List

from .angle import Angle, TWO_PI
from .axis import Axis
from .coordinate_systems import CylindricalCoordinateSystem
from .vector import Vector

logger = logging.getLogger(__name__)


class Circle(CylindricalCoordinateSystem):
    """
    A circle of given radius about the L axis, with angles measured from A.

    Attributes:
        radius: Circle radius
    """

    def __init__(self, radius: float, origin: Vector = Vector.ZERO,
                 l: Vector = Vector.UNIT_Z, a: Vector = Vector.UNIT_X):
        super().__init__(origin, l, a)
        self.radius = float(radius)

    @classmethod
    def from_three_points(cls, pt0: Vector, pt1: Vector, pt2: Vector) -> Circle:
        """
        Circle through three points.

        The centre is the intersection of the perpendicular bisectors of
        pt0-pt1 and pt1-pt2. L is (pt1-pt0) x (pt2-pt1), so the points run
        anticlockwise about L, and A points from the centre to pt0.
        Collinear points give a NaN circle.
        """
        v01 = pt1 - pt0
        v12 = pt2 - pt1
        mid01 = pt0 + v01 / 2
        mid12 = pt1 + v12 / 2
        normal = v01.cross(v12).unitize()
        axis1 = v01.cross(normal)
        axis2 = v12.cross(normal)
        origin = Axis.closest_point_between(mid01, axis1, mid12, axis2)
        to_start = pt0 - origin
        radius = to_start.magnitude()
        if radius == 0:
            logger.debug("Zero-radius circle at %s", pt0)
            return cls(0.0, pt0, Vector.UNIT_Z, Vector.UNIT_X)
        return cls(radius, origin, normal, to_start / radius)

    @classmethod
    def from_diameter(cls, pt0: Vector, pt1: Vector, normal: Vector = Vector.UNIT_Z) -> Circle:
        """Circle with pt0 and pt1 diametrically opposite, lying in the plane with the given normal."""
        origin = pt0.interpolate(pt1, 0.5)
        to_start = pt0 - origin
        radius = to_start.magnitude()
        if radius == 0:
            return cls(0.0, pt0, normal.unitize(), Vector.UNIT_X)
        return cls(radius, origin, normal.unitize(), to_start / radius)

    @property
    def circumference(self) -> float:
        return TWO_PI * self.radius

    @property
    def area(self) -> float:
        return math.pi * self.radius * self.radius

    @property
    def diameter(self) -> float:
        return 2.0 * self.radius

    def point_at(self, angle: float) -> Vector:
        """Point at an angle about L measured from A."""
        return self.local_to_global(Vector(self.radius, angle, 0.0))

    def tangent_at(self, angle: float) -> Vector:
        """Unit tangent at an angle, pointing in the direction of increasing angle."""
        return self.l.cross(self.a.rotate(self.l, angle)).unitize()

    def closest(self, point: Vector) -> Angle:
        """Angle of the point on the circle closest to the given point."""
        return self.azimuth(point)

    def closest_point(self, point: Vector) -> Vector:
        return self.point_at(self.closest(point))

    def divide(self, divisions: int, start_angle: float = 0.0,
               end_angle: float = TWO_PI) -> List[Vector]:
        """
        Points dividing an angular range into equal steps.

        Returns divisions + 1 points, including both ends.
        """
        step = (end_angle - start_angle) / divisions
        return [self.point_at(start_angle + step * i) for i in range(divisions + 1)]

    def move(self, offset: Vector) -> Circle:
        return Circle(self.radius, self.origin + offset, self.l, self.a)

    def transform(self, transform) -> Circle:
        """Circle passed through a Transform; the radius follows the scaling of A."""
        a = transform.apply_to_vector(self.a)
        return Circle(self.radius * a.magnitude(),
                      transform.apply_to_point(self.origin),
                      transform.apply_to_vector(self.l).unitize(),
                      a.unitize())

    def __repr__(self) -> str:
        return (f"Circle(radius={self.radius:.6f}, origin={self.origin!r}, "
                f"l={self.l!r}, a={self.a!r})")
