"""
Vertex and VertexCollection.

A Vertex is a mutable position that belongs to at most one Shape. Ownership is
enforced by owned VertexCollections: a vertex already owned by one shape cannot
be added to another shape's collection. The back-references from a vertex to
its owning shape are weak; a shape owns its vertices, not the other way round.
"""

from __future__ import annotations
from collections.abc import MutableSequence
import logging
import weakref
from typing import Iterable, List, Optional

import numpy as np
from numpy.typing import NDArray

from .bounding_box import BoundingBox
from .errors import VertexOwnershipError
from .plane import Plane
from .vector import Vector
from . import tolerance as tol

logger = logging.getLogger(__name__)


class Vertex:
    """
    A position on a shape, optionally attached to a structural node.

    Attributes:
        position: Current position (assigning it notifies the owning shape)
    """

    def __init__(self, position: Vector = Vector.ZERO, node=None):
        self._position = position
        self._owner_ref = None
        self._node = None
        if node is not None:
            self.node = node

    @classmethod
    def from_xyz(cls, x: float, y: float, z: float = 0.0) -> Vertex:
        return cls(Vector(x, y, z))

    @property
    def position(self) -> Vector:
        return self._position

    @position.setter
    def position(self, value: Vector):
        self._position = value
        owner = self.owner
        if owner is not None:
            owner.notify_geometry_updated()

    @property
    def x(self) -> float:
        return self._position.x

    @property
    def y(self) -> float:
        return self._position.y

    @property
    def z(self) -> float:
        return self._position.z

    @property
    def owner(self):
        """The Shape this vertex belongs to, or None."""
        if self._owner_ref is None:
            return None
        return self._owner_ref()

    def _set_owner(self, shape) -> None:
        self._owner_ref = weakref.ref(shape) if shape is not None else None

    @property
    def element(self):
        """The element whose geometry owns this vertex, if any (through compound shapes)."""
        shape = self.owner
        while shape is not None:
            element = shape.element
            if element is not None:
                return element
            shape = shape.parent
        return None

    @property
    def node(self):
        """The structural node this vertex is attached to, or None."""
        return self._node

    @node.setter
    def node(self, value):
        if value is self._node:
            return
        if self._node is not None:
            self._node.vertices.discard(self)
        self._node = value
        if value is not None:
            value.vertices.add_unique(self)

    def nodal_offset(self) -> Vector:
        """Vector from the attached node to this vertex (zero when unattached)."""
        if self._node is None:
            return Vector.ZERO
        return self._position - self._node.position

    def map_to(self, cs) -> None:
        """Treat the current position as local coordinates in a system and map them to global."""
        self.position = cs.local_to_global(self._position)

    def transform(self, transform) -> None:
        self.position = transform.apply_to_point(self._position)

    def move(self, offset: Vector) -> None:
        self.position = self._position + offset

    def distance_to(self, point: Vector) -> float:
        return self._position.distance_to(point)

    def generate_node(self, options) -> None:
        """
        Attach this vertex to a model node at its position.

        The node is taken from the model of the owning element, reusing an
        existing node within options.connection_tolerance where one exists.
        Vertices that do not belong to an element in a model are left alone.
        """
        element = self.element
        model = element.model if element is not None else None
        if model is None:
            return
        current = self._node
        if (current is not None and not current.is_deleted
                and current.position.distance_to(self._position) <= options.connection_tolerance):
            return
        self.node = model.create.node(self._position, options.connection_tolerance)

    def copy_attached_data_from(self, other: Vertex) -> None:
        """Copy non-geometric data (the node link) from another vertex."""
        self.node = other.node

    def __repr__(self) -> str:
        return f"Vertex({self._position.x:.6f}, {self._position.y:.6f}, {self._position.z:.6f})"


class VertexCollection(MutableSequence):
    """
    Ordered list of vertices.

    An owned collection (owner given) claims every vertex put into it and
    releases them when they are removed. An unowned collection is an aggregate
    view and never changes vertex ownership.
    """

    def __init__(self, owner=None, vertices: Iterable[Vertex] = ()):
        self._owner_ref = weakref.ref(owner) if owner is not None else None
        self._items: List[Vertex] = []
        for v in vertices:
            self._claim(v)
            self._items.append(v)

    @property
    def owner(self):
        if self._owner_ref is None:
            return None
        return self._owner_ref()

    def _claim(self, vertex: Vertex) -> None:
        owner = self.owner
        if owner is None:
            return
        current = vertex.owner
        if current is not None and current is not owner:
            raise VertexOwnershipError(
                f"{vertex!r} already belongs to {type(current).__name__} "
                f"and cannot be added to {type(owner).__name__}"
            )
        vertex._set_owner(owner)

    def _release(self, vertex: Vertex) -> None:
        owner = self.owner
        if owner is not None and vertex.owner is owner:
            vertex._set_owner(None)
            vertex.node = None

    def _changed(self) -> None:
        owner = self.owner
        if owner is not None:
            owner.notify_geometry_updated()

    # MutableSequence protocol

    def __getitem__(self, index):
        return self._items[index]

    def __setitem__(self, index: int, vertex: Vertex):
        old = self._items[index]
        if old is vertex:
            return
        self._claim(vertex)
        self._items[index] = vertex
        if old not in self:
            self._release(old)
        self._changed()

    def __delitem__(self, index: int):
        old = self._items[index]
        del self._items[index]
        if old not in self._items:
            self._release(old)
        self._changed()

    def __len__(self) -> int:
        return len(self._items)

    def insert(self, index: int, vertex: Vertex) -> None:
        self._claim(vertex)
        self._items.insert(index, vertex)
        self._changed()

    def __contains__(self, vertex) -> bool:
        return any(v is vertex for v in self._items)

    def reverse(self) -> None:
        # In place: swapping through __setitem__ would release vertices mid-swap
        self._items.reverse()
        self._changed()

    # Unowned helpers used by nodes

    def add_unique(self, vertex: Vertex) -> bool:
        """Append unless already present. Returns True if added."""
        if vertex in self:
            return False
        self.append(vertex)
        return True

    def discard(self, vertex: Vertex) -> bool:
        """Remove if present. Returns True if removed."""
        for i, v in enumerate(self._items):
            if v is vertex:
                del self[i]
                return True
        return False

    # Queries

    def positions(self) -> List[Vector]:
        return [v.position for v in self._items]

    def to_array(self) -> NDArray[np.float64]:
        """Positions as an (N, 3) array."""
        if not self._items:
            return np.zeros((0, 3), dtype=np.float64)
        return np.array([[v.x, v.y, v.z] for v in self._items], dtype=np.float64)

    def bounding_box(self) -> Optional[BoundingBox]:
        return BoundingBox.from_points(self._items)

    def contains_node(self, node) -> bool:
        return any(v.node is node for v in self._items)

    def average_point(self) -> Vector:
        if not self._items:
            return Vector.UNSET
        return Vector.from_array(self.to_array().mean(axis=0))

    def plane(self, tolerance: float = tol.GEOMETRIC) -> Optional[Plane]:
        """
        Best-fit plane through the vertices (least squares, via SVD).

        The normal is oriented towards global +Z (or along its largest
        component for vertical planes).

        Returns:
            None if there are fewer than three vertices or they are collinear
            within tolerance
        """
        pts = self.to_array()
        if len(pts) < 3:
            return None
        centroid = pts.mean(axis=0)
        _, s, vh = np.linalg.svd(pts - centroid)
        if s[1] <= tolerance:
            return None
        normal = Vector.from_array(vh[2])
        if abs(normal.z) > tolerance:
            if normal.z < 0:
                normal = -normal
        elif normal.largest_component() < 0:
            normal = -normal
        return Plane.from_normal(Vector.from_array(centroid), normal)

    def __repr__(self) -> str:
        return f"VertexCollection({len(self._items)} vertices, owned={self.owner is not None})"


def as_vertex(item) -> Vertex:
    """A Vertex passed through unchanged, or a new Vertex at a Vector position."""
    if isinstance(item, Vertex):
        return item
    return Vertex(item)
