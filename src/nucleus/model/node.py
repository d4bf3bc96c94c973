"""Node: a connection point shared by the vertices of one or more elements."""

from __future__ import annotations
import logging
from typing import Iterable, List, Optional

from ..geometry import Curve, Vector, VertexCollection
from .model_object import ModelObject

logger = logging.getLogger(__name__)


class Node(ModelObject):
    """
    Structural node.

    Attributes:
        vertices: Vertices attached to this node (an unowned view; the shapes
            that own them are unaffected)
    """

    def __init__(self, position: Vector = Vector.ZERO, name: str = ""):
        super().__init__(name)
        self._position = position
        self.vertices = VertexCollection()

    @classmethod
    def from_xyz(cls, x: float, y: float, z: float = 0.0) -> Node:
        return cls(Vector(x, y, z))

    @property
    def position(self) -> Vector:
        return self._position

    @position.setter
    def position(self, value: Vector):
        self._position = value
        self.notify_property_changed("position")

    def connected_elements(self, undeleted_only: bool = True, ignore=None) -> List:
        """Distinct elements whose geometry has a vertex attached here, in attachment order."""
        result = []
        for v in self.vertices:
            element = v.element
            if (element is not None and element is not ignore
                    and element not in result
                    and not (undeleted_only and element.is_deleted)):
                result.append(element)
        return result

    def connection_count(self, undeleted_only: bool = True) -> int:
        """Number of attached vertices that belong to an element."""
        return sum(1 for v in self.vertices
                   if v.element is not None and not (undeleted_only and v.element.is_deleted))

    def move_to(self, new_position: Vector, drag_vertices: bool = True,
                exclude: Optional[Iterable] = None) -> None:
        """
        Move the node, optionally dragging its attached vertices by the same offset.

        Args:
            new_position: Target position
            drag_vertices: Move attached vertices as well
            exclude: Elements whose vertices stay where they are
        """
        excluded = list(exclude) if exclude is not None else []
        offset = new_position - self._position
        self.position = new_position
        if drag_vertices:
            for v in list(self.vertices):
                if v.element is None or v.element not in excluded:
                    v.move(offset)

    def average_connection_direction(self) -> Vector:
        """Mean unit direction from this node towards the midpoints of connected curves."""
        result = Vector.ZERO
        count = 0
        for v in self.vertices:
            owner = v.owner
            if isinstance(owner, Curve):
                mid = owner.point_at(0.5)
                if mid.is_valid():
                    result = result + (mid - self._position).unitize()
                    count += 1
        if count > 1:
            result = result / count
        return result

    def merge(self, other: Node, average_positions: bool = False) -> None:
        """Take over every vertex attached to another node, then delete it."""
        if average_positions:
            self.position = self._position.interpolate(other.position, 0.5)
        for v in list(other.vertices):
            v.node = self
        logger.debug("Merged %r into %r", other, self)
        other.delete()

    def __repr__(self) -> str:
        return f"Node({self.description!r}, {self._position!r})"
