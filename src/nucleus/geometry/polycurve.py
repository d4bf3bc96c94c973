"""
PolyCurve: an ordered chain of sub-curves (lines, arcs, ...).

Continuity between sub-curves is not enforced. Whether the chain is closed is
decided by comparing its start and end points within the instance tolerance.
"""

from __future__ import annotations
import logging
from typing import Iterable, List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .angle import Angle
from .arc import Arc
from .bounding_box import BoundingBox
from .curve import Curve, segment_integrals
from .errors import VertexOwnershipError
from .line import Line
from .plane import Plane
from .vector import Vector
from .vertex import VertexCollection
from . import tolerance as tol

logger = logging.getLogger(__name__)


class PolyCurve(Curve):
    """
    Compound curve made of sub-curves joined end to start.

    Each sub-curve keeps ownership of its own vertices; vertices is an
    aggregate view across all of them.

    Args:
        segments: Initial sub-curves
        tolerance: Start/end coincidence tolerance for closed detection
    """

    def __init__(self, segments: Iterable[Curve] = (), tolerance: float = tol.GEOMETRIC):
        super().__init__()
        self.tolerance = tolerance
        self._segments: List[Curve] = []
        self._pending_start: Optional[Vector] = None
        for segment in segments:
            self.add(segment)

    @classmethod
    def rectangle(cls, x_size: float, y_size: float, centre: Vector = Vector.ZERO) -> PolyCurve:
        """Closed rectangle of four Lines, anticlockwise from the bottom-left corner."""
        hx = x_size / 2
        hy = y_size / 2
        curve = cls.start_at(centre + Vector(-hx, -hy))
        curve.add_line(centre + Vector(hx, -hy))
        curve.add_line(centre + Vector(hx, hy))
        curve.add_line(centre + Vector(-hx, hy))
        curve.add_line(centre + Vector(-hx, -hy))
        return curve

    @classmethod
    def start_at(cls, point: Vector) -> PolyCurve:
        """Empty PolyCurve whose first add_line/add_arc starts at point."""
        curve = cls()
        curve._pending_start = point
        return curve

    @property
    def segments(self) -> Tuple[Curve, ...]:
        return tuple(self._segments)

    def add(self, segment: Curve) -> None:
        """Append a sub-curve. A curve can only be part of one PolyCurve."""
        current = segment.parent
        if current is not None and current is not self:
            raise VertexOwnershipError(
                f"{segment!r} is already part of another compound curve")
        segment._set_parent(self)
        self._segments.append(segment)
        self.notify_geometry_updated()

    def _append_from(self) -> Vector:
        if self._segments:
            return self.end_point
        if self._pending_start is None:
            raise ValueError("PolyCurve has no end point to continue from")
        return self._pending_start

    def add_line(self, end_point: Vector) -> Line:
        """Continue with a straight line to end_point."""
        line = Line(self._append_from(), end_point)
        self.add(line)
        return line

    def add_arc(self, end_point: Vector, point_on: Optional[Vector] = None) -> Curve:
        """
        Continue with an arc to end_point.

        With point_on the arc passes through it; otherwise the arc carries on
        tangent to the end of the current last sub-curve.
        """
        if point_on is None:
            return self.add_arc_tangent(end_point)
        arc = Arc(self._append_from(), point_on, end_point)
        self.add(arc)
        return arc

    def add_arc_tangent(self, end_point: Vector) -> Curve:
        """
        Continue tangentially to end_point.

        Adds a Line instead when the current end tangent already points at it.
        """
        if not self._segments:
            raise ValueError("Tangent continuation needs an existing sub-curve")
        curve = Arc.start_tangent_end(self.end_point, self._segments[-1].tangent_at(1.0), end_point)
        self.add(curve)
        return curve

    # ------------------------------------------------------------------
    # Curve interface
    # ------------------------------------------------------------------

    @property
    def vertices(self) -> VertexCollection:
        return VertexCollection(None, [v for s in self._segments for v in s.vertices])

    @property
    def start(self):
        """First vertex, or None for an empty chain."""
        return self._segments[0].start if self._segments else None

    @property
    def end(self):
        return self._segments[-1].end if self._segments else None

    @property
    def start_point(self) -> Vector:
        return self._segments[0].start_point if self._segments else Vector.UNSET

    @property
    def end_point(self) -> Vector:
        return self._segments[-1].end_point if self._segments else Vector.UNSET

    @property
    def closed(self) -> bool:
        if not self._segments:
            return False
        return self.start_point.equals(self.end_point, self.tolerance)

    def is_valid(self) -> bool:
        return bool(self._segments) and all(s.is_valid() for s in self._segments)

    @property
    def segment_count(self) -> int:
        return sum(s.segment_count for s in self._segments)

    @property
    def length(self) -> float:
        return sum(s.length for s in self._segments)

    def _locate(self, span: int) -> Tuple[Curve, int]:
        """The sub-curve containing a span, and the span's index within it."""
        for segment in self._segments:
            if span < segment.segment_count:
                return segment, span
            span -= segment.segment_count
        last = self._segments[-1]
        return last, last.segment_count - 1

    def point_at_span(self, span: int, t_span: float) -> Vector:
        segment, local = self._locate(span)
        return segment.point_at_span(local, t_span)

    def tangent_at_span(self, span: int, t_span: float) -> Vector:
        segment, local = self._locate(span)
        return segment.tangent_at_span(local, t_span)

    def segment_start(self, span: int) -> Vector:
        segment, local = self._locate(span)
        return segment.segment_start(local)

    def segment_end(self, span: int) -> Vector:
        segment, local = self._locate(span)
        return segment.segment_end(local)

    def segment_length(self, span: int) -> float:
        segment, local = self._locate(span)
        return segment.segment_length(local)

    def closest_parameter_on_span(self, span: int, point: Vector) -> float:
        segment, local = self._locate(span)
        return segment.closest_parameter_on_span(local, point)

    def facet(self, tolerance_angle: float = Angle.from_degrees(5)) -> List[Vector]:
        points: List[Vector] = []
        for segment in self._segments:
            for p in segment.facet(tolerance_angle):
                if not points or not points[-1].equals(p, self.tolerance):
                    points.append(p)
        return points

    def _generate_bounding_box(self) -> Optional[BoundingBox]:
        if not self._segments:
            return None
        box = self._segments[0].bounding_box.copy()
        for segment in self._segments[1:]:
            box.include(segment.bounding_box)
        return box

    def reverse(self) -> None:
        with self.suppress_change_notifications():
            for segment in self._segments:
                segment.reverse()
            self._segments.reverse()

    def transform(self, transform) -> None:
        with self.suppress_change_notifications():
            for segment in self._segments:
                segment.transform(transform)

    def _default_plane(self) -> Plane:
        if not self._segments:
            return Plane.GLOBAL_XY
        return super()._default_plane()

    def _enclosed_integrals(self, plane: Plane) -> NDArray[np.float64]:
        if not self._segments:
            return np.zeros(4, dtype=np.float64)
        return super()._enclosed_integrals(plane)

    def _path_integrals(self, plane: Plane) -> NDArray[np.float64]:
        """Each sub-curve's own integrals plus chords across any gaps between them."""
        total = np.zeros(4, dtype=np.float64)
        previous: Optional[Curve] = None
        for segment in self._segments:
            if previous is not None:
                total += segment_integrals(plane.global_to_local(previous.end_point),
                                           plane.global_to_local(segment.start_point))
            total += segment._path_integrals(plane)
            previous = segment
        return total

    def __repr__(self) -> str:
        return f"PolyCurve({len(self._segments)} segments, closed={self.closed})"
