"""
PlanarRegion: a flat area bounded by a closed perimeter curve, minus voids.

Used for panel set-outs and for the cross-sections of section profiles, where
it provides area, centroid and second moments of area.
"""

from __future__ import annotations
import logging
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .curve import AREA, MOMENT_X, MOMENT_Y, SECOND_MOMENT, Curve
from .intersect import curve_contains_xy
from .numeric import safe_divide
from .plane import Plane
from .shape import Shape
from .vector import Vector
from .vertex import VertexCollection
from . import tolerance as tol

logger = logging.getLogger(__name__)


class PlanarRegion(Shape):
    """
    Region bounded by a closed perimeter with optional void curves.

    Args:
        perimeter: Closed outer boundary
        voids: Closed inner boundaries (holes)
    """

    def __init__(self, perimeter: Curve, voids: Iterable[Curve] = ()):
        super().__init__()
        self._plane: Optional[Plane] = None
        perimeter._set_parent(self)
        self._perimeter = perimeter
        self._voids: List[Curve] = []
        for void in voids:
            self.add_void(void)

    @property
    def perimeter(self) -> Curve:
        return self._perimeter

    @property
    def voids(self) -> Tuple[Curve, ...]:
        return tuple(self._voids)

    def add_void(self, void: Curve) -> None:
        void._set_parent(self)
        self._voids.append(void)
        self.notify_geometry_updated()

    @property
    def vertices(self) -> VertexCollection:
        curves = [self._perimeter] + self._voids
        return VertexCollection(None, [v for c in curves for v in c.vertices])

    def is_valid(self) -> bool:
        return (self._perimeter.is_valid() and self._perimeter.closed
                and all(v.is_valid() and v.closed for v in self._voids))

    @property
    def plane(self) -> Optional[Plane]:
        """Best-fit plane of the perimeter (cached)."""
        if self._plane is None:
            self._plane = self._perimeter.plane(tol.GEOMETRIC)
        return self._plane

    def invalidate_cached_geometry(self) -> None:
        super().invalidate_cached_geometry()
        self._plane = None

    def _generate_bounding_box(self):
        return self._perimeter.bounding_box.copy()

    def transform(self, transform) -> None:
        with self.suppress_change_notifications():
            self._perimeter.transform(transform)
            for void in self._voids:
                void.transform(transform)

    def contains_xy(self, point: Vector) -> bool:
        """True if a point lies inside the perimeter and outside every void, in plan."""
        if not curve_contains_xy(self._perimeter, point):
            return False
        return not any(curve_contains_xy(v, point) for v in self._voids)

    # ------------------------------------------------------------------
    # Section properties
    # ------------------------------------------------------------------

    def _integrals(self, on_plane: Optional[Plane]):
        plane = on_plane or self.plane or Plane.GLOBAL_XY
        integrals = self._perimeter._enclosed_integrals_with_voids(self._voids, plane)
        # Orientation-independent: flip everything if the perimeter runs anticlockwise
        return integrals * np.sign(integrals[AREA]), plane

    def area(self, on_plane: Optional[Plane] = None) -> float:
        """Net area (perimeter minus voids), always positive."""
        integrals, _ = self._integrals(on_plane)
        return float(integrals[AREA])

    def centroid(self, on_plane: Optional[Plane] = None) -> Vector:
        integrals, plane = self._integrals(on_plane)
        return plane.local_to_global(Vector(
            safe_divide(integrals[MOMENT_X], integrals[AREA]),
            safe_divide(integrals[MOMENT_Y], integrals[AREA]),
            0.0))

    def ixx(self, on_plane: Optional[Plane] = None, centroidal: bool = True) -> float:
        """
        Second moment of area about an axis parallel to the plane's x-axis.

        Args:
            on_plane: Plane to measure in (default: the region's best-fit plane)
            centroidal: Measure about the axis through the centroid rather
                than the plane's own x-axis
        """
        integrals, _ = self._integrals(on_plane)
        result = integrals[SECOND_MOMENT]
        if centroidal:
            cy = safe_divide(integrals[MOMENT_Y], integrals[AREA])
            result -= integrals[AREA] * cy * cy
        return float(result)

    def iyy(self, on_plane: Optional[Plane] = None, centroidal: bool = True) -> float:
        """Second moment of area about an axis parallel to the plane's y-axis."""
        plane = on_plane or self.plane or Plane.GLOBAL_XY
        turned = Plane(plane.origin, plane.y, -plane.x, plane.z)
        return self.ixx(turned, centroidal)

    def __repr__(self) -> str:
        return f"PlanarRegion(perimeter={self._perimeter!r}, voids={len(self._voids)})"
