"""PolyLine: a chain of straight segments through a list of vertices."""

from __future__ import annotations
from typing import Iterable, List

from .curve import Curve
from .line import Line
from .polycurve import PolyCurve
from .vector import Vector
from .vertex import VertexCollection, as_vertex
from . import tolerance as tol


class PolyLine(Curve):
    """
    Open or closed polyline.

    A closed polyline does not repeat its first vertex; the last segment runs
    from the final vertex back to the first. If the supplied points finish
    where they started (within tolerance) the repeated point is dropped and the
    polyline is closed automatically.

    Args:
        points: Positions (Vectors) or unowned Vertices
        closed: Close the polyline back to its first vertex
        tolerance: Coincidence tolerance for automatic closing
    """

    def __init__(self, points: Iterable = (), closed: bool = False,
                 tolerance: float = tol.GEOMETRIC):
        super().__init__()
        vertices = [as_vertex(p) for p in points]
        if len(vertices) > 2 and vertices[-1].position.equals(vertices[0].position, tolerance):
            vertices.pop()
            closed = True
        self._closed = closed
        self._vertices = VertexCollection(self, vertices)

    @classmethod
    def rectangle(cls, x_size: float, y_size: float, centre: Vector = Vector.ZERO) -> PolyLine:
        """Closed rectangle in the XY plane, anticlockwise from the bottom-left corner."""
        hx = x_size / 2
        hy = y_size / 2
        return cls([
            centre + Vector(-hx, -hy),
            centre + Vector(hx, -hy),
            centre + Vector(hx, hy),
            centre + Vector(-hx, hy),
        ], closed=True)

    @property
    def vertices(self) -> VertexCollection:
        return self._vertices

    @property
    def closed(self) -> bool:
        return self._closed

    @closed.setter
    def closed(self, value: bool):
        self._closed = value
        self.notify_geometry_updated()

    def close(self) -> None:
        self.closed = True

    @property
    def segment_count(self) -> int:
        n = len(self._vertices)
        if n < 2:
            return 0
        return n if self._closed else n - 1

    @property
    def length(self) -> float:
        return sum(self.segment_length(i) for i in range(self.segment_count))

    def add(self, point) -> None:
        """Append a vertex at the end."""
        self._vertices.append(as_vertex(point))

    def to_lines(self) -> List[Line]:
        """One new Line per segment."""
        return [Line(self.segment_start(i), self.segment_end(i))
                for i in range(self.segment_count)]

    def to_polycurve(self) -> PolyCurve:
        """Equivalent PolyCurve made of Lines."""
        return PolyCurve(self.to_lines())

    def __repr__(self) -> str:
        return f"PolyLine({len(self._vertices)} vertices, closed={self._closed})"
