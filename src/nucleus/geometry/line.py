"""Line: a straight curve between two vertices."""

from __future__ import annotations
from typing import Optional, Tuple

from .curve import Curve
from .plane import Plane
from .vector import Vector
from .vertex import VertexCollection, as_vertex


class Line(Curve):
    """
    Straight line segment.

    Args:
        start: Start position (Vector) or an unowned Vertex
        end: End position (Vector) or an unowned Vertex
    """

    def __init__(self, start=Vector.ZERO, end=Vector.UNIT_X):
        super().__init__()
        self._vertices = VertexCollection(self, [as_vertex(start), as_vertex(end)])

    @classmethod
    def from_xyz(cls, x0: float, y0: float, z0: float,
                 x1: float, y1: float, z1: float) -> Line:
        return cls(Vector(x0, y0, z0), Vector(x1, y1, z1))

    @classmethod
    def from_direction(cls, start: Vector, direction: Vector) -> Line:
        return cls(start, start + direction)

    @property
    def vertices(self) -> VertexCollection:
        return self._vertices

    @property
    def segment_count(self) -> int:
        return 1

    @property
    def length(self) -> float:
        return self.start_point.distance_to(self.end_point)

    @property
    def direction(self) -> Vector:
        """Unit vector from start to end."""
        return (self.end_point - self.start_point).unitize()

    @property
    def mid_point(self) -> Vector:
        return self.start_point.interpolate(self.end_point, 0.5)

    def is_valid(self) -> bool:
        return (len(self._vertices) == 2
                and self.start_point.is_valid() and self.end_point.is_valid())

    def set(self, start: Vector, end: Vector) -> None:
        """Move both ends with a single change notification."""
        with self.suppress_change_notifications():
            self.start.position = start
            self.end.position = end

    def enclosed_area(self, on_plane: Optional[Plane] = None) -> Tuple[float, Vector]:
        """A line encloses no area; the centroid is its midpoint."""
        return 0.0, self.mid_point

    def enclosed_ixx(self, on_plane: Optional[Plane] = None) -> float:
        return 0.0

    def __repr__(self) -> str:
        return f"Line({self.start_point!r}, {self.end_point!r})"
