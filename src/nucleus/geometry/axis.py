"""
Axis: an infinite line defined by an origin and a direction.

Parameters along the axis are measured in multiples of the direction vector,
so point_at(1) is origin + direction.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

from .numeric import safe_divide
from .vector import Vector


@dataclass(frozen=True)
class Axis:
    """Infinite line: origin + t * direction."""
    origin: Vector
    direction: Vector

    def is_valid(self) -> bool:
        return self.origin.is_valid() and self.direction.is_valid()

    def point_at(self, t: float) -> Vector:
        return self.origin + self.direction * t

    def intersect_plane(self, plane) -> float:
        """
        Parameter at which the axis crosses a plane.

        Returns NaN when the direction is exactly parallel to the plane.
        """
        denominator = self.direction.dot(plane.z)
        if denominator == 0:
            return float("nan")
        return (plane.origin - self.origin).dot(plane.z) / denominator

    def closest(self, point: Vector) -> float:
        """Parameter of the point on the axis closest to the given point."""
        return Axis.closest_parameter_to(self.origin, self.direction, point)

    def closest_point(self, point: Vector) -> Vector:
        return self.point_at(self.closest(point))

    def closest_parameters(self, other: Axis) -> Tuple[float, float]:
        """
        Parameters (s, t) of the closest points between two axes.

        Parallel axes make the system singular; the result is then NaN or inf.
        """
        u = self.direction
        v = other.direction
        w0 = self.origin - other.origin
        a = u.dot(u)
        b = u.dot(v)
        c = v.dot(v)
        d = u.dot(w0)
        e = v.dot(w0)
        denominator = a * c - b * b
        s = safe_divide(b * e - c * d, denominator)
        t = safe_divide(a * e - b * d, denominator)
        return s, t

    def closest_parameter(self, other: Axis) -> float:
        """Parameter on this axis of the point closest to another axis."""
        return self.closest_parameters(other)[0]

    @staticmethod
    def closest_point_between(p0: Vector, v0: Vector, p1: Vector, v1: Vector) -> Vector:
        """Point on the first line (p0, v0) closest to the second line (p1, v1)."""
        first = Axis(p0, v0)
        return first.point_at(first.closest_parameter(Axis(p1, v1)))

    @staticmethod
    def closest_parameter_to(origin: Vector, direction: Vector, point: Vector) -> float:
        return safe_divide((point - origin).dot(direction), direction.magnitude_squared())

    @staticmethod
    def closest_point_to(origin: Vector, direction: Vector, point: Vector) -> Vector:
        return origin + direction * Axis.closest_parameter_to(origin, direction, point)
