"""
Conversion of kernel geometry to and from external representations.

GeometryConverter dispatches on the shape's type to a registered handler and
refuses anything it has no handler for; it never approximates an unsupported
shape with a supported one. ArrayConverter is the NumPy boundary used by the
plotting and export code.
"""

from __future__ import annotations
import logging
from typing import Any, Callable, Dict, List, Type

import numpy as np
from numpy.typing import NDArray

from .arc import Arc
from .errors import UnsupportedGeometryError
from .line import Line
from .point import Point
from .polycurve import PolyCurve
from .polyline import PolyLine
from .vector import Vector

logger = logging.getLogger(__name__)


class GeometryConverter:
    """Type-dispatched converter; subclasses register a handler per shape type."""

    def __init__(self):
        self._handlers: Dict[Type, Callable[[Any], Any]] = {}

    def register(self, shape_type: Type, handler: Callable[[Any], Any]) -> None:
        self._handlers[shape_type] = handler

    def supports(self, item: Any) -> bool:
        return any(t in self._handlers for t in type(item).__mro__)

    def convert(self, item: Any) -> Any:
        """
        Convert using the handler registered for the most specific matching type.

        Raises:
            UnsupportedGeometryError: No handler for the item's type
        """
        for t in type(item).__mro__:
            handler = self._handlers.get(t)
            if handler is not None:
                return handler(item)
        raise UnsupportedGeometryError(
            f"{type(self).__name__} does not support conversion of {type(item).__name__}")


class ArrayConverter(GeometryConverter):
    """
    Converts kernel geometry to NumPy arrays of positions.

    Points and vectors become (3,) arrays, lines (2, 3), polylines (N, 3) with
    the first point repeated at the end when closed, arcs (3, 3) holding their
    start, on-arc and end points, and polycurves a list of per-segment arrays.
    """

    def __init__(self):
        super().__init__()
        self.register(Vector, lambda v: v.to_array())
        self.register(Point, lambda p: p.position.to_array())
        self.register(Line, lambda line: np.array([line.start_point.to_array(),
                                                    line.end_point.to_array()]))
        self.register(PolyLine, self._polyline_to_array)
        self.register(Arc, lambda arc: arc.vertices.to_array())
        self.register(PolyCurve, lambda pc: [self.convert(s) for s in pc.segments])

    @staticmethod
    def _polyline_to_array(polyline: PolyLine) -> NDArray[np.float64]:
        arr = polyline.vertices.to_array()
        if polyline.closed and len(arr):
            arr = np.vstack([arr, arr[:1]])
        return arr

    # Array -> geometry

    @staticmethod
    def to_vector(arr: NDArray[np.float64]) -> Vector:
        return Vector.from_array(arr)

    @staticmethod
    def to_points(arr: NDArray[np.float64]) -> List[Vector]:
        """(N, 3) or (N, 2) array to a list of Vectors."""
        arr = np.asarray(arr, dtype=np.float64)
        if arr.ndim != 2 or arr.shape[1] not in (2, 3):
            raise ValueError(f"Expected array of shape (N, 3), got {arr.shape}")
        return [Vector.from_array(row) for row in arr]

    @classmethod
    def to_line(cls, arr: NDArray[np.float64]) -> Line:
        points = cls.to_points(arr)
        if len(points) != 2:
            raise ValueError(f"A line needs exactly 2 points, got {len(points)}")
        return Line(points[0], points[1])

    @classmethod
    def to_polyline(cls, arr: NDArray[np.float64], closed: bool = False) -> PolyLine:
        """Polyline through the rows; closes automatically if the last row repeats the first."""
        return PolyLine(cls.to_points(arr), closed=closed)

    @classmethod
    def to_arc(cls, arr: NDArray[np.float64]) -> Arc:
        points = cls.to_points(arr)
        if len(points) != 3:
            raise ValueError(f"An arc needs exactly 3 points, got {len(points)}")
        return Arc(points[0], points[1], points[2])
