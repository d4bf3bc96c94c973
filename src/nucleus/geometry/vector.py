"""
Vector: immutable 3D float triple used for both positions and directions.

2D work uses z=0. Degenerate operations (unitizing a zero vector, dividing by
zero) propagate NaN rather than raising; test with Vector.is_valid().
"""

from __future__ import annotations
from dataclasses import dataclass
import math
from typing import ClassVar, Iterator

import numpy as np
from numpy.typing import NDArray

from .angle import Angle
from .numeric import safe_divide
from . import tolerance as tol


@dataclass(frozen=True)
class Vector:
    """3D vector or position (use z=0 for 2D problems)."""
    x: float
    y: float
    z: float = 0.0

    UNSET: ClassVar[Vector]
    ZERO: ClassVar[Vector]
    UNIT_X: ClassVar[Vector]
    UNIT_Y: ClassVar[Vector]
    UNIT_Z: ClassVar[Vector]

    # ------------------------------------------------------------------
    # Construction / conversion
    # ------------------------------------------------------------------

    @classmethod
    def from_angle(cls, angle: float) -> Vector:
        """Unit vector in the XY plane at the given azimuth (radians)."""
        return cls(math.cos(angle), math.sin(angle), 0.0)

    @classmethod
    def from_array(cls, arr: NDArray[np.float64]) -> Vector:
        """Create from NumPy array of shape (3,) or (2,)."""
        arr = np.asarray(arr, dtype=np.float64)
        if arr.shape == (2,):
            return cls(float(arr[0]), float(arr[1]), 0.0)
        if arr.shape != (3,):
            raise ValueError(f"Expected array of shape (3,), got {arr.shape}")
        return cls(x=float(arr[0]), y=float(arr[1]), z=float(arr[2]))

    @classmethod
    def parse(cls, text: str, separator: str = ",", scale: float = 1.0) -> Vector:
        """
        Parse a vector from delimited text, e.g. "1.5, 2, 0".

        Args:
            text: Two or three numeric tokens
            separator: Token separator
            scale: Factor applied to every component

        Returns:
            Parsed vector (z defaults to 0 when only two tokens are given)
        """
        tokens = [t.strip() for t in text.strip().strip("()[]{}").split(separator)]
        tokens = [t for t in tokens if t]
        if len(tokens) not in (2, 3):
            raise ValueError(f"Cannot parse vector from '{text}'")
        values = [float(t) * scale for t in tokens]
        if len(values) == 2:
            values.append(0.0)
        return cls(*values)

    def to_array(self) -> NDArray[np.float64]:
        """Convert to NumPy array (3,)."""
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def __getitem__(self, index: int) -> float:
        if index == 0:
            return self.x
        if index == 1:
            return self.y
        if index == 2:
            return self.z
        raise IndexError(f"Vector index must be 0, 1 or 2, got {index}")

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __len__(self) -> int:
        return 3

    # ------------------------------------------------------------------
    # Validity / predicates
    # ------------------------------------------------------------------

    def is_valid(self) -> bool:
        """True when no component is NaN."""
        return not (math.isnan(self.x) or math.isnan(self.y) or math.isnan(self.z))

    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0 and self.z == 0

    def is_x_only(self) -> bool:
        """True when only the x component is non-zero."""
        return self.x != 0 and self.y == 0 and self.z == 0

    def is_parallel_to(self, other: Vector, tolerance: float = tol.ANGLE) -> bool:
        """True when the two directions are parallel or anti-parallel within an angle tolerance."""
        angle = self.angle_between(other)
        return angle <= tolerance or angle >= math.pi - tolerance

    def equals(self, other: Vector, tolerance: float = tol.GEOMETRIC) -> bool:
        """Per-component comparison within tolerance."""
        return (abs(self.x - other.x) <= tolerance
                and abs(self.y - other.y) <= tolerance
                and abs(self.z - other.z) <= tolerance)

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y, -self.z)

    def __mul__(self, scalar: float) -> Vector:
        return Vector(self.x * scalar, self.y * scalar, self.z * scalar)

    def __rmul__(self, scalar: float) -> Vector:
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> Vector:
        return Vector(safe_divide(self.x, scalar),
                      safe_divide(self.y, scalar),
                      safe_divide(self.z, scalar))

    def add(self, other: Vector) -> Vector:
        return self + other

    def subtract(self, other: Vector) -> Vector:
        return self - other

    def scale(self, factor: float) -> Vector:
        return self * factor

    def divide(self, divisor: float) -> Vector:
        return self / divisor

    def reverse(self) -> Vector:
        return -self

    def with_x(self, x: float) -> Vector:
        return Vector(x, self.y, self.z)

    def with_y(self, y: float) -> Vector:
        return Vector(self.x, y, self.z)

    def with_z(self, z: float) -> Vector:
        return Vector(self.x, self.y, z)

    def xy(self) -> Vector:
        """Copy with z set to 0."""
        return Vector(self.x, self.y, 0.0)

    # ------------------------------------------------------------------
    # Products and measures
    # ------------------------------------------------------------------

    def dot(self, other: Vector) -> float:
        """Dot product."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector) -> Vector:
        """Cross product."""
        return Vector(self.y * other.z - self.z * other.y,
                      self.z * other.x - self.x * other.z,
                      self.x * other.y - self.y * other.x)

    def magnitude_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def magnitude(self) -> float:
        """Vector magnitude (L2 norm)."""
        return math.sqrt(self.magnitude_squared())

    def distance_to_squared(self, other: Vector) -> float:
        return (other - self).magnitude_squared()

    def distance_to(self, other: Vector) -> float:
        """Euclidean distance to another point."""
        return math.sqrt(self.distance_to_squared(other))

    def xy_distance_to_squared(self, other: Vector) -> float:
        dx = other.x - self.x
        dy = other.y - self.y
        return dx * dx + dy * dy

    def xy_distance_to(self, other: Vector) -> float:
        """Distance ignoring the z component."""
        return math.sqrt(self.xy_distance_to_squared(other))

    def largest_component(self) -> float:
        """The component with the greatest absolute value (sign preserved)."""
        return max((self.x, self.y, self.z), key=abs)

    # ------------------------------------------------------------------
    # Directions
    # ------------------------------------------------------------------

    def unitize(self) -> Vector:
        """
        Unit vector in the same direction.

        A zero vector has no direction; the result is NaN in every component.
        """
        mag2 = self.magnitude_squared()
        if mag2 == 1.0:
            return self
        return self / math.sqrt(mag2)

    def interpolate(self, towards: Vector, t: float) -> Vector:
        """Linear interpolation: self at t=0, towards at t=1."""
        return self + (towards - self) * t

    def angle(self) -> Angle:
        """Azimuth in the XY plane, atan2(y, x)."""
        return Angle(math.atan2(self.y, self.x))

    def angle_to(self, other: Vector) -> Angle:
        """Signed XY-plane angle turning this vector onto another, in (-π, π]."""
        return (other.angle() - self.angle()).normalize()

    def angle_between(self, other: Vector) -> Angle:
        """Unsigned angle between two vectors in 3D, [0, π]."""
        cos_angle = safe_divide(self.dot(other), self.magnitude() * other.magnitude())
        if math.isnan(cos_angle):
            return Angle.UNDEFINED
        cos_angle = min(1.0, max(-1.0, cos_angle))
        return Angle(math.acos(cos_angle))

    def align_to(self, other: Vector) -> Vector:
        """This vector, reversed if it points away from another."""
        if self.dot(other) < 0:
            return -self
        return self

    def perpendicular_xy(self) -> Vector:
        """This vector rotated a quarter turn anticlockwise in the XY plane."""
        return Vector(-self.y, self.x, 0.0)

    def rotate(self, axis: Vector, angle: float) -> Vector:
        """
        Rotate about an axis through the origin (Rodrigues' formula).

        Args:
            axis: Rotation axis (unitized internally)
            angle: Rotation angle in radians, anticlockwise looking down the axis

        Returns:
            Rotated vector
        """
        k = axis.unitize()
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        return (self * cos_a
                + k.cross(self) * sin_a
                + k * (k.dot(self) * (1.0 - cos_a)))

    def transform(self, transform) -> Vector:
        """Apply a Transform to this vector treated as a position (w = 1)."""
        return transform.apply_to_point(self)

    def project(self, plane) -> Vector:
        """Orthogonal projection onto a plane."""
        local = plane.global_to_local(self)
        return plane.local_to_global(local.with_z(0.0))

    # ------------------------------------------------------------------
    # Static helpers
    # ------------------------------------------------------------------

    @staticmethod
    def perpendicular_to(p0: Vector, p1: Vector, p2: Vector) -> Vector:
        """Unit normal of the plane through three points, (p1-p0) x (p2-p0)."""
        return (p1 - p0).cross(p2 - p0).unitize()

    @staticmethod
    def triangle_area(p0: Vector, p1: Vector, p2: Vector) -> float:
        """Area of the triangle with the given corners."""
        return 0.5 * (p1 - p0).cross(p2 - p0).magnitude()

    def __repr__(self) -> str:
        return f"Vector({self.x:.6f}, {self.y:.6f}, {self.z:.6f})"


Vector.UNSET = Vector(math.nan, math.nan, math.nan)
Vector.ZERO = Vector(0.0, 0.0, 0.0)
Vector.UNIT_X = Vector(1.0, 0.0, 0.0)
Vector.UNIT_Y = Vector(0.0, 1.0, 0.0)
Vector.UNIT_Z = Vector(0.0, 0.0, 1.0)
