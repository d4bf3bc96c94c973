"""
BoundingBox: mutable axis-aligned box in 3D.

A box fitted to a set of positions contains all of them. include() only ever
grows the box.
"""

from __future__ import annotations
from typing import Iterable, Iterator, Optional

import numpy as np
from numpy.typing import NDArray

from .vector import Vector


def _positions(item) -> Iterator[Vector]:
    """Flatten points, vertices, nodes, shapes, elements and iterables of them into positions."""
    if isinstance(item, Vector):
        yield item
    elif hasattr(item, "position"):
        yield item.position
    elif hasattr(item, "geometry"):
        if item.geometry is not None:
            yield from _positions(item.geometry)
    elif hasattr(item, "vertices"):
        for v in item.vertices:
            yield v.position
    else:
        for sub in item:
            yield from _positions(sub)


class BoundingBox:
    """Axis-aligned bounding box stored as six floats."""

    def __init__(self, min_x: float = 0.0, max_x: float = 0.0,
                 min_y: float = 0.0, max_y: float = 0.0,
                 min_z: float = 0.0, max_z: float = 0.0):
        self.min_x = float(min_x)
        self.max_x = float(max_x)
        self.min_y = float(min_y)
        self.max_y = float(max_y)
        self.min_z = float(min_z)
        self.max_z = float(max_z)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_point(cls, point: Vector) -> BoundingBox:
        """Zero-size box at a point."""
        return cls(point.x, point.x, point.y, point.y, point.z, point.z)

    @classmethod
    def from_corners(cls, corner_a: Vector, corner_b: Vector) -> BoundingBox:
        box = cls.from_point(corner_a)
        box.include(corner_b)
        return box

    @classmethod
    def from_points(cls, items) -> Optional[BoundingBox]:
        """
        Box fitted to points, vertices, shapes or elements.

        Returns None if there is nothing to fit.
        """
        box = cls()
        if not box.fit(items):
            return None
        return box

    def copy(self) -> BoundingBox:
        return BoundingBox(self.min_x, self.max_x, self.min_y,
                           self.max_y, self.min_z, self.max_z)

    # ------------------------------------------------------------------
    # Derived properties
    # ------------------------------------------------------------------

    @property
    def min(self) -> Vector:
        return Vector(self.min_x, self.min_y, self.min_z)

    @min.setter
    def min(self, value: Vector):
        self.min_x, self.min_y, self.min_z = value.x, value.y, value.z

    @property
    def max(self) -> Vector:
        return Vector(self.max_x, self.max_y, self.max_z)

    @max.setter
    def max(self, value: Vector):
        self.max_x, self.max_y, self.max_z = value.x, value.y, value.z

    @property
    def mid(self) -> Vector:
        return Vector((self.min_x + self.max_x) / 2,
                      (self.min_y + self.max_y) / 2,
                      (self.min_z + self.max_z) / 2)

    @property
    def size(self) -> Vector:
        return Vector(self.max_x - self.min_x,
                      self.max_y - self.min_y,
                      self.max_z - self.min_z)

    @property
    def size_x(self) -> float:
        return self.max_x - self.min_x

    @property
    def size_y(self) -> float:
        return self.max_y - self.min_y

    @property
    def size_z(self) -> float:
        return self.max_z - self.min_z

    def is_valid(self) -> bool:
        return self.min.is_valid() and self.max.is_valid()

    # ------------------------------------------------------------------
    # Fitting and growth
    # ------------------------------------------------------------------

    def fit(self, items) -> bool:
        """
        Reset the box to exactly enclose the given items.

        Returns:
            False (box unchanged) if the items contain no positions
        """
        coords = [(p.x, p.y, p.z) for p in _positions(items)]
        if not coords:
            return False
        arr = np.array(coords, dtype=np.float64)
        self.min_x, self.min_y, self.min_z = (float(c) for c in arr.min(axis=0))
        self.max_x, self.max_y, self.max_z = (float(c) for c in arr.max(axis=0))
        return True

    def include(self, item) -> None:
        """Expand (never shrink) to contain a point, box, shape, element or iterable of them."""
        if isinstance(item, BoundingBox):
            self.include(item.min)
            self.include(item.max)
            return
        for p in _positions(item):
            # Separate min and max tests: a first point can move both bounds
            if p.x < self.min_x:
                self.min_x = p.x
            if p.x > self.max_x:
                self.max_x = p.x
            if p.y < self.min_y:
                self.min_y = p.y
            if p.y > self.max_y:
                self.max_y = p.y
            if p.z < self.min_z:
                self.min_z = p.z
            if p.z > self.max_z:
                self.max_z = p.z

    def expand(self, distance: float) -> None:
        """Grow outwards by a distance on every side."""
        self.min_x -= distance
        self.min_y -= distance
        self.min_z -= distance
        self.max_x += distance
        self.max_y += distance
        self.max_z += distance

    def scale(self, factor: float) -> None:
        """Scale about the centre of the box."""
        mid = self.mid
        self.min_x = mid.x + (self.min_x - mid.x) * factor
        self.max_x = mid.x + (self.max_x - mid.x) * factor
        self.min_y = mid.y + (self.min_y - mid.y) * factor
        self.max_y = mid.y + (self.max_y - mid.y) * factor
        self.min_z = mid.z + (self.min_z - mid.z) * factor
        self.max_z = mid.z + (self.max_z - mid.z) * factor

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def contains(self, point: Vector) -> bool:
        """Inclusive containment test; invalid points are never contained."""
        return (point.is_valid()
                and self.min_x <= point.x <= self.max_x
                and self.min_y <= point.y <= self.max_y
                and self.min_z <= point.z <= self.max_z)

    def contains_xy(self, point: Vector) -> bool:
        return (point.is_valid()
                and self.min_x <= point.x <= self.max_x
                and self.min_y <= point.y <= self.max_y)

    def overlaps(self, other: BoundingBox) -> bool:
        """True if the two boxes share any volume, face, edge or corner."""
        return (other.max_x >= self.min_x and other.min_x <= self.max_x
                and other.max_y >= self.min_y and other.min_y <= self.max_y
                and other.max_z >= self.min_z and other.min_z <= self.max_z)

    def random_point_inside(self, rng: Optional[np.random.Generator] = None) -> Vector:
        """Uniformly distributed random point inside the box."""
        return Vector.from_array(self.random_points_inside(1, rng)[0])

    def random_points_inside(self, count: int,
                             rng: Optional[np.random.Generator] = None) -> NDArray[np.float64]:
        """
        Uniformly distributed random points inside the box.

        Returns:
            (count, 3) array
        """
        if rng is None:
            rng = np.random.default_rng()
        return rng.uniform(self.min.to_array(), self.max.to_array(), size=(count, 3))

    def corners(self) -> Iterable[Vector]:
        for z in (self.min_z, self.max_z):
            for y in (self.min_y, self.max_y):
                for x in (self.min_x, self.max_x):
                    yield Vector(x, y, z)

    def __eq__(self, other) -> bool:
        if not isinstance(other, BoundingBox):
            return NotImplemented
        return self.min == other.min and self.max == other.max

    __hash__ = None

    def __repr__(self) -> str:
        return (f"BoundingBox(x=[{self.min_x:.6f}, {self.max_x:.6f}], "
                f"y=[{self.min_y:.6f}, {self.max_y:.6f}], "
                f"z=[{self.min_z:.6f}, {self.max_z:.6f}])")
