"""
Coordinate systems for mapping between global and local coordinates.

CartesianCoordinateSystem and CylindricalCoordinateSystem share the
global_to_local / local_to_global interface defined by CoordinateSystem.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
import math

from .angle import Angle
from .vector import Vector


class CoordinateSystem(ABC):
    """Something that maps vectors between global and local coordinates."""

    @abstractmethod
    def global_to_local(self, vector: Vector, direction: bool = False) -> Vector:
        """
        Express a global vector in this system's local coordinates.

        Args:
            vector: Global position (or direction)
            direction: If True the vector is a direction and the origin offset is ignored
        """

    @abstractmethod
    def local_to_global(self, vector: Vector, direction: bool = False) -> Vector:
        """Inverse of global_to_local."""


class CartesianCoordinateSystem(CoordinateSystem):
    """
    A Cartesian frame defined by an origin and three axes.

    The constructor stores the axes verbatim so that the caller controls
    orthonormality; the from_* factories always build unit, right-handed axes.
    """

    def __init__(self, origin: Vector = Vector.ZERO,
                 x: Vector = Vector.UNIT_X,
                 y: Vector = Vector.UNIT_Y,
                 z: Vector = Vector.UNIT_Z):
        self._origin = origin
        self._x = x
        self._y = y
        self._z = z

    @property
    def origin(self) -> Vector:
        return self._origin

    @property
    def x(self) -> Vector:
        return self._x

    @property
    def y(self) -> Vector:
        return self._y

    @property
    def z(self) -> Vector:
        return self._z

    @classmethod
    def from_origin(cls, origin: Vector):
        """Frame aligned with the global axes at the given origin."""
        return cls(origin, Vector.UNIT_X, Vector.UNIT_Y, Vector.UNIT_Z)

    @classmethod
    def from_normal(cls, origin: Vector, z_axis: Vector):
        """
        Frame with the given z-axis and arbitrary but deterministic x/y axes.

        The y-axis is perpendicular to the z-axis and global X (global Z when
        the z-axis lies along X), then x = y cross z.
        """
        z = z_axis.unitize()
        if z.is_parallel_to(Vector.UNIT_X, 1e-9):
            y = z.cross(Vector.UNIT_Z).unitize()
        else:
            y = z.cross(Vector.UNIT_X).unitize()
        x = y.cross(z).unitize()
        return cls(origin, x, y, z)

    @classmethod
    def from_x_and_xy(cls, origin: Vector, x_axis: Vector, xy_vector: Vector):
        """
        Frame whose x-axis points along x_axis and whose XY plane contains xy_vector.

        z = x cross xy, y = z cross x.
        """
        x = x_axis.unitize()
        z = x.cross(xy_vector).unitize()
        y = z.cross(x).unitize()
        return cls(origin, x, y, z)

    def with_origin(self, origin: Vector):
        """Same axes, different origin."""
        return type(self)(origin, self._x, self._y, self._z)

    def global_to_local(self, vector: Vector, direction: bool = False) -> Vector:
        relative = vector if direction else vector - self._origin
        return Vector(relative.dot(self._x), relative.dot(self._y), relative.dot(self._z))

    def local_to_global(self, vector: Vector, direction: bool = False) -> Vector:
        result = self._x * vector.x + self._y * vector.y + self._z * vector.z
        if direction:
            return result
        return self._origin + result

    def is_valid(self) -> bool:
        return (self._origin.is_valid() and self._x.is_valid()
                and self._y.is_valid() and self._z.is_valid())

    def transform(self, transform):
        """Copy with origin and axes passed through a Transform."""
        return type(self)(transform.apply_to_point(self._origin),
                          transform.apply_to_vector(self._x).unitize(),
                          transform.apply_to_vector(self._y).unitize(),
                          transform.apply_to_vector(self._z).unitize())

    def __eq__(self, other) -> bool:
        if not isinstance(other, CartesianCoordinateSystem):
            return NotImplemented
        return (self._origin == other._origin and self._x == other._x
                and self._y == other._y and self._z == other._z)

    def __hash__(self) -> int:
        return hash((self._origin, self._x, self._y, self._z))

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(origin={self._origin!r}, "
                f"x={self._x!r}, y={self._y!r}, z={self._z!r})")


CartesianCoordinateSystem.GLOBAL = CartesianCoordinateSystem()


class CylindricalCoordinateSystem(CoordinateSystem):
    """
    Cylindrical frame: origin, longitudinal axis L and reference axis A.

    Local coordinates are (r, θ, z): z along L, θ measured anticlockwise about
    L from A, r the distance from the L axis.
    """

    def __init__(self, origin: Vector = Vector.ZERO,
                 l: Vector = Vector.UNIT_Z,
                 a: Vector = Vector.UNIT_X):
        self._origin = origin
        self._l = l
        self._a = a

    @property
    def origin(self) -> Vector:
        return self._origin

    @property
    def l(self) -> Vector:
        """Longitudinal (polar) axis."""
        return self._l

    @property
    def a(self) -> Vector:
        """Azimuth reference axis."""
        return self._a

    @classmethod
    def from_axis(cls, origin: Vector, l_axis: Vector):
        """System about an axis with the reference direction chosen automatically."""
        l = l_axis.unitize()
        if l.is_parallel_to(Vector.UNIT_X, 1e-9):
            a = l.cross(Vector.UNIT_Y).cross(l)
        else:
            a = l.cross(Vector.UNIT_X).cross(l)
        return cls(origin, l, a.unitize())

    @classmethod
    def from_cartesian(cls, cs: CartesianCoordinateSystem):
        """L along the frame's z-axis, A along its x-axis."""
        return cls(cs.origin, cs.z, cs.x)

    @classmethod
    def from_a_and_plane(cls, origin: Vector, a_axis: Vector, on_plane: Vector):
        """L perpendicular to the plane spanned by A and a second in-plane vector."""
        a = a_axis.unitize()
        l = a.cross(on_plane).unitize()
        return cls(origin, l, a)

    def global_to_local(self, vector: Vector, direction: bool = False) -> Vector:
        relative = vector if direction else vector - self._origin
        z = relative.dot(self._l)
        on_plane = relative - self._l * z
        r = on_plane.magnitude()
        local_y = self._l.cross(self._a)
        theta = math.atan2(on_plane.dot(local_y), on_plane.dot(self._a))
        return Vector(r, theta, z)

    def local_to_global(self, vector: Vector, direction: bool = False) -> Vector:
        r, theta, z = vector.x, vector.y, vector.z
        result = self._a.rotate(self._l, theta) * r + self._l * z
        if direction:
            return result
        return self._origin + result

    def azimuth(self, point: Vector) -> Angle:
        """Angle of a point about L, measured from A."""
        return Angle(self.global_to_local(point).y)

    def is_valid(self) -> bool:
        return self._origin.is_valid() and self._l.is_valid() and self._a.is_valid()

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(origin={self._origin!r}, "
                f"l={self._l!r}, a={self._a!r})")
