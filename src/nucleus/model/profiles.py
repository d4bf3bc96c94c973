"""
Section profiles: parametric cross-section shapes for linear elements.

Each profile builds its outline as curves in the global XY plane, centred on
the origin (the middle of its bounding box), and derives section properties
from the resulting PlanarRegion. Changing a dimension discards the cached
region and notifies subscribers.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from ..geometry import Arc, Circle, Curve, PlanarRegion, Plane, PolyLine, Vector
from .notify import Observable

logger = logging.getLogger(__name__)


class Dimension:
    """Profile dimension attribute; assignment invalidates the cached outline."""

    def __set_name__(self, owner, name):
        self.name = name
        self.attr = "_" + name

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        return getattr(obj, self.attr)

    def __set__(self, obj, value):
        value = float(value)
        if value < 0:
            raise ValueError(f"{self.name} must be non-negative, got {value}")
        setattr(obj, self.attr, value)
        obj._dimension_changed(self.name)


class SectionProfile(Observable, ABC):
    """Abstract cross-section shape."""

    def __init__(self):
        super().__init__()
        self._region: Optional[PlanarRegion] = None

    @abstractmethod
    def perimeter(self) -> Curve:
        """Outer boundary, centred on the origin in the XY plane."""

    def voids(self) -> List[Curve]:
        """Inner boundaries (none for solid sections)."""
        return []

    def _dimension_changed(self, name: str) -> None:
        self._region = None
        self.notify_property_changed(name)

    @property
    def region(self) -> PlanarRegion:
        """Cross-section as a PlanarRegion (cached)."""
        if self._region is None:
            self._region = PlanarRegion(self.perimeter(), self.voids())
        return self._region

    @property
    def area(self) -> float:
        return self.region.area(Plane.GLOBAL_XY)

    @property
    def centroid(self) -> Vector:
        return self.region.centroid(Plane.GLOBAL_XY)

    @property
    def ixx(self) -> float:
        """Second moment of area about the centroidal axis parallel to X (major axis)."""
        return self.region.ixx(Plane.GLOBAL_XY)

    @property
    def iyy(self) -> float:
        """Second moment of area about the centroidal axis parallel to Y (minor axis)."""
        return self.region.iyy(Plane.GLOBAL_XY)

    @property
    @abstractmethod
    def description(self) -> str:
        """Short catalogue-style description, e.g. '300x150 RHS 10x8'."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.description})"


class RectangularProfile(SectionProfile):
    """Solid rectangle: depth along Y, width along X."""

    depth = Dimension()
    width = Dimension()

    def __init__(self, depth: float, width: float):
        super().__init__()
        self.depth = depth
        self.width = width

    def perimeter(self) -> Curve:
        return PolyLine.rectangle(self.width, self.depth)

    @property
    def description(self) -> str:
        return f"{self.depth:g}x{self.width:g}"


class RectangularHollowProfile(RectangularProfile):
    """Rectangular hollow section with constant flange and web thicknesses."""

    flange_thickness = Dimension()
    web_thickness = Dimension()

    def __init__(self, depth: float, width: float,
                 flange_thickness: float, web_thickness: float):
        super().__init__(depth, width)
        self.flange_thickness = flange_thickness
        self.web_thickness = web_thickness

    def voids(self) -> List[Curve]:
        return [PolyLine.rectangle(self.width - 2 * self.web_thickness,
                                   self.depth - 2 * self.flange_thickness)]

    @property
    def description(self) -> str:
        return (f"{self.depth:g}x{self.width:g} RHS "
                f"{self.flange_thickness:g}x{self.web_thickness:g}")


class CircularProfile(SectionProfile):
    """Solid circle."""

    diameter = Dimension()

    def __init__(self, diameter: float):
        super().__init__()
        self.diameter = diameter

    def perimeter(self) -> Curve:
        return Arc.from_circle(Circle(self.diameter / 2))

    @property
    def description(self) -> str:
        return f"{self.diameter:g} dia"


class CircularHollowProfile(CircularProfile):
    """Circular hollow section."""

    wall_thickness = Dimension()

    def __init__(self, diameter: float, wall_thickness: float):
        super().__init__(diameter)
        self.wall_thickness = wall_thickness

    def voids(self) -> List[Curve]:
        return [Arc.from_circle(Circle(self.diameter / 2 - self.wall_thickness))]

    @property
    def description(self) -> str:
        return f"{self.diameter:g}x{self.wall_thickness:g} CHS"


class SymmetricIProfile(SectionProfile):
    """I-section symmetric about both axes (root radii ignored)."""

    depth = Dimension()
    width = Dimension()
    flange_thickness = Dimension()
    web_thickness = Dimension()

    def __init__(self, depth: float, width: float,
                 flange_thickness: float, web_thickness: float):
        super().__init__()
        self.depth = depth
        self.width = width
        self.flange_thickness = flange_thickness
        self.web_thickness = web_thickness

    def perimeter(self) -> Curve:
        hd = self.depth / 2
        hw = self.width / 2
        tw = self.web_thickness / 2
        inner = hd - self.flange_thickness
        return PolyLine([
            Vector(-hw, -hd), Vector(hw, -hd), Vector(hw, -inner), Vector(tw, -inner),
            Vector(tw, inner), Vector(hw, inner), Vector(hw, hd), Vector(-hw, hd),
            Vector(-hw, inner), Vector(-tw, inner), Vector(-tw, -inner), Vector(-hw, -inner),
        ], closed=True)

    @property
    def description(self) -> str:
        return (f"{self.depth:g}x{self.width:g} I "
                f"{self.flange_thickness:g}x{self.web_thickness:g}")


class TProfile(SectionProfile):
    """T-section with the flange at the top."""

    depth = Dimension()
    width = Dimension()
    flange_thickness = Dimension()
    web_thickness = Dimension()

    def __init__(self, depth: float, width: float,
                 flange_thickness: float, web_thickness: float):
        super().__init__()
        self.depth = depth
        self.width = width
        self.flange_thickness = flange_thickness
        self.web_thickness = web_thickness

    def perimeter(self) -> Curve:
        hd = self.depth / 2
        hw = self.width / 2
        tw = self.web_thickness / 2
        under_flange = hd - self.flange_thickness
        return PolyLine([
            Vector(-tw, -hd), Vector(tw, -hd), Vector(tw, under_flange), Vector(hw, under_flange),
            Vector(hw, hd), Vector(-hw, hd), Vector(-hw, under_flange), Vector(-tw, under_flange),
        ], closed=True)

    @property
    def description(self) -> str:
        return (f"{self.depth:g}x{self.width:g} T "
                f"{self.flange_thickness:g}x{self.web_thickness:g}")
