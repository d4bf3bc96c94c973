"""Plane: a Cartesian frame whose z-axis is the plane normal."""

from __future__ import annotations

from .coordinate_systems import CartesianCoordinateSystem
from .vector import Vector


class Plane(CartesianCoordinateSystem):
    """An infinite plane through the origin of a Cartesian frame, normal along z."""

    @property
    def normal(self) -> Vector:
        return self.z

    def distance_to(self, point: Vector) -> float:
        """Signed distance from the plane (positive on the normal side)."""
        return (point - self.origin).dot(self.z)

    def project(self, point: Vector) -> Vector:
        """Closest point on the plane."""
        return point - self.z * self.distance_to(point)

    def contains(self, point: Vector, tolerance: float) -> bool:
        return abs(self.distance_to(point)) <= tolerance


Plane.GLOBAL_XY = Plane()
Plane.GLOBAL_YZ = Plane.from_x_and_xy(Vector.ZERO, Vector.UNIT_Y, Vector.UNIT_Z)
Plane.GLOBAL_XZ = Plane.from_x_and_xy(Vector.ZERO, Vector.UNIT_X, Vector.UNIT_Z)
