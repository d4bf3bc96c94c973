"""Point: a shape with a single vertex."""

from __future__ import annotations

from .shape import Shape
from .vector import Vector
from .vertex import Vertex, VertexCollection


class Point(Shape):
    """A single-vertex shape, e.g. the set-out of a point element or support."""

    def __init__(self, position: Vector = Vector.ZERO):
        super().__init__()
        self._vertices = VertexCollection(self, [Vertex(position)])

    @classmethod
    def from_vertex(cls, vertex: Vertex) -> Point:
        point = cls.__new__(cls)
        Shape.__init__(point)
        point._vertices = VertexCollection(point, [vertex])
        return point

    @property
    def vertices(self) -> VertexCollection:
        return self._vertices

    @property
    def vertex(self) -> Vertex:
        return self._vertices[0]

    @property
    def position(self) -> Vector:
        return self._vertices[0].position

    @position.setter
    def position(self, value: Vector):
        self._vertices[0].position = value

    def is_valid(self) -> bool:
        return len(self._vertices) == 1 and self.position.is_valid()

    def __repr__(self) -> str:
        return f"Point({self.position!r})"
