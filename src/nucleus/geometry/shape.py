"""
Shape: base class for all geometry made of owned vertices.

A shape caches derived data (its bounding box, and whatever subclasses add)
and drops the cache whenever a vertex moves. Geometry changes are reported to
the element that uses the shape as its set-out geometry, unless notifications
are suppressed for a batch of edits.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from contextlib import contextmanager
import logging
import weakref
from typing import Iterator, Optional

from .bounding_box import BoundingBox
from .vector import Vector
from .vertex import VertexCollection

logger = logging.getLogger(__name__)


class Shape(ABC):
    """Abstract base class of points, curves, surfaces and meshes."""

    def __init__(self):
        self._element_ref = None
        self._parent_ref = None
        self._bounding_box: Optional[BoundingBox] = None
        self._suppress_notifications = False

    @property
    @abstractmethod
    def vertices(self) -> VertexCollection:
        """The vertices defining this shape."""

    @abstractmethod
    def is_valid(self) -> bool:
        """True if the shape is well-formed and has no NaN positions."""

    # ------------------------------------------------------------------
    # Ownership links
    # ------------------------------------------------------------------

    @property
    def element(self):
        """The element using this shape as set-out geometry (weak link), or None."""
        if self._element_ref is None:
            return None
        return self._element_ref()

    def _set_element(self, element) -> None:
        self._element_ref = weakref.ref(element) if element is not None else None

    @property
    def parent(self) -> Optional[Shape]:
        """Compound shape this one is a component of (e.g. a PolyCurve segment)."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    def _set_parent(self, shape: Optional[Shape]) -> None:
        self._parent_ref = weakref.ref(shape) if shape is not None else None

    # ------------------------------------------------------------------
    # Cached geometry and change notification
    # ------------------------------------------------------------------

    @property
    def bounding_box(self) -> Optional[BoundingBox]:
        if self._bounding_box is None:
            self._bounding_box = self._generate_bounding_box()
        return self._bounding_box

    def _generate_bounding_box(self) -> Optional[BoundingBox]:
        return BoundingBox.from_points(self.vertices)

    def invalidate_cached_geometry(self) -> None:
        """Discard cached derived data; it is rebuilt on next access."""
        self._bounding_box = None

    def notify_geometry_updated(self) -> None:
        """Drop caches and tell the parent shape or owning element about the change."""
        self.invalidate_cached_geometry()
        if self._suppress_notifications:
            return
        parent = self.parent
        if parent is not None:
            parent.notify_geometry_updated()
            return
        element = self.element
        if element is not None:
            element.notify_geometry_updated()

    @contextmanager
    def suppress_change_notifications(self) -> Iterator[Shape]:
        """
        Batch several edits into a single change notification.

        Example:
            with line.suppress_change_notifications():
                line.start.position = a
                line.end.position = b
        """
        previous = self._suppress_notifications
        self._suppress_notifications = True
        try:
            yield self
        finally:
            self._suppress_notifications = previous
        if not previous:
            self.notify_geometry_updated()

    # ------------------------------------------------------------------
    # Whole-shape edits
    # ------------------------------------------------------------------

    def map_to(self, cs) -> None:
        """Treat vertex positions as local coordinates in a system and map them to global."""
        with self.suppress_change_notifications():
            for v in self.vertices:
                v.map_to(cs)

    def transform(self, transform) -> None:
        with self.suppress_change_notifications():
            for v in self.vertices:
                v.transform(transform)

    def move(self, offset: Vector) -> None:
        with self.suppress_change_notifications():
            for v in self.vertices:
                v.move(offset)

    def detach_nodes(self) -> None:
        """Break every vertex's link to a structural node."""
        for v in self.vertices:
            v.node = None

    def copy_attached_data_from(self, other: Shape) -> None:
        """Copy vertex attachments (node links) pairwise from another shape."""
        for mine, theirs in zip(self.vertices, other.vertices):
            mine.copy_attached_data_from(theirs)

    def contains_node(self, node) -> bool:
        return self.vertices.contains_node(node)

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.vertex_count} vertices)"
