"""
Elements: model objects defined by set-out geometry and a family.

An element owns its set-out shape exclusively. Edits to the shape are
reported as a change of the element's 'geometry' property, which the model
uses to drop its cached data.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
import logging
import math
from typing import List, Optional

from ..geometry import Angle, Curve, PlanarRegion, Plane, Shape, Vector
from .errors import NonExclusiveGeometryError
from .family import Family, PanelFamily, SectionFamily
from .model_object import ModelObject
from .node_generation import NodeGenerationParameters

logger = logging.getLogger(__name__)


class Element(ModelObject, ABC):
    """Abstract element: set-out geometry, family and orientation."""

    geometry_type = Shape
    family_type = Family

    def __init__(self, geometry: Optional[Shape] = None,
                 family: Optional[Family] = None, name: str = ""):
        super().__init__(name)
        self._geometry: Optional[Shape] = None
        self._family: Optional[Family] = None
        self._orientation = Angle.ZERO
        if geometry is not None:
            self.geometry = geometry
        if family is not None:
            self.family = family

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def geometry(self) -> Optional[Shape]:
        """Set-out geometry; owned exclusively by this element."""
        return self._geometry

    @geometry.setter
    def geometry(self, value: Optional[Shape]):
        if value is not None:
            self._check_geometry(value)
        old = self._geometry
        if old is not None and old is not value and old.element is self:
            old.detach_nodes()
            old._set_element(None)
        self._geometry = value
        if value is not None:
            value._set_element(self)
        self.notify_property_changed("geometry")

    def _check_geometry(self, value: Shape) -> None:
        if not isinstance(value, self.geometry_type):
            raise TypeError(f"{type(self).__name__} geometry must be a "
                            f"{self.geometry_type.__name__}, got {type(value).__name__}")
        owner = value.element
        if owner is not None and owner is not self:
            raise NonExclusiveGeometryError(
                "The set-out geometry of an element cannot be assigned because "
                "the geometry object already belongs to another element.")

    @property
    def family(self) -> Optional[Family]:
        return self._family

    @family.setter
    def family(self, value: Optional[Family]):
        if value is not None and not isinstance(value, self.family_type):
            raise TypeError(f"{type(self).__name__} family must be a "
                            f"{self.family_type.__name__}, got {type(value).__name__}")
        self._family = value
        self.notify_property_changed("family")

    @property
    def orientation(self) -> Angle:
        """Rotation of the element's local frame about its set-out."""
        return self._orientation

    @orientation.setter
    def orientation(self, value: float):
        self._orientation = Angle(value)
        self.notify_property_changed("orientation")

    # ------------------------------------------------------------------
    # Geometry and nodes
    # ------------------------------------------------------------------

    def replace_geometry(self, new_geometry: Shape) -> None:
        """Swap the set-out geometry, carrying node attachments over vertex by vertex."""
        self._check_geometry(new_geometry)
        old = self._geometry
        if old is not None:
            new_geometry.copy_attached_data_from(old)
        self.geometry = new_geometry

    def notify_geometry_updated(self) -> None:
        self.notify_property_changed("geometry")

    def nodes(self) -> List:
        """Distinct nodes attached to the geometry's vertices, in vertex order."""
        result = []
        if self._geometry is None:
            return result
        for v in self._geometry.vertices:
            if v.node is not None and v.node not in result:
                result.append(v.node)
        return result

    def contains_node(self, node) -> bool:
        return self._geometry is not None and self._geometry.contains_node(node)

    def regenerate_nodes(self, options: NodeGenerationParameters) -> None:
        """Attach every vertex to a model node, reusing nodes within tolerance."""
        if self._geometry is None:
            return
        for v in self._geometry.vertices:
            v.generate_node(options)

    @abstractmethod
    def nominal_position(self) -> Vector:
        """Representative point, e.g. for labels."""

    @abstractmethod
    def orientate_to_vector(self, vector: Vector) -> None:
        """Set the orientation so the element's local y-axis points along a vector."""


class LinearElement(Element):
    """Bar element along a curve, e.g. a beam or column."""

    geometry_type = Curve
    family_type = SectionFamily

    def __init__(self, geometry: Optional[Curve] = None,
                 family: Optional[SectionFamily] = None, name: str = ""):
        super().__init__(geometry, family, name)

    @property
    def start_node(self):
        start = self._geometry.start if self._geometry is not None else None
        return start.node if start is not None else None

    @start_node.setter
    def start_node(self, node):
        self._geometry.start.node = node

    @property
    def end_node(self):
        end = self._geometry.end if self._geometry is not None else None
        return end.node if end is not None else None

    @end_node.setter
    def end_node(self, node):
        self._geometry.end.node = node

    @property
    def length(self) -> float:
        return self._geometry.length if self._geometry is not None else 0.0

    def regenerate_nodes(self, options: NodeGenerationParameters) -> None:
        """Attach the two ends to model nodes; interior vertices (e.g. an arc's point-on) get none."""
        if self._geometry is None or self._geometry.start is None:
            return
        self._geometry.start.generate_node(options)
        self._geometry.end.generate_node(options)

    def local_coordinate_system(self, t: float = 0.0) -> Plane:
        """Frame along the set-out: x on the tangent, y rotated by the orientation."""
        return self._geometry.local_coordinate_system(t, self._orientation)

    def nominal_position(self) -> Vector:
        if self._geometry is None:
            return Vector.UNSET
        return self._geometry.point_at(0.5)

    def orientate_to_vector(self, vector: Vector) -> None:
        frame = self._geometry.local_coordinate_system(0.5)
        self.orientation = Angle(math.atan2(vector.dot(frame.z), vector.dot(frame.y)))


class PanelElement(Element):
    """Planar element such as a slab or wall."""

    geometry_type = PlanarRegion
    family_type = PanelFamily

    def __init__(self, geometry: Optional[PlanarRegion] = None,
                 family: Optional[PanelFamily] = None, name: str = ""):
        super().__init__(geometry, family, name)

    @property
    def area(self) -> float:
        return self._geometry.area() if self._geometry is not None else 0.0

    def nominal_position(self) -> Vector:
        if self._geometry is None:
            return Vector.UNSET
        return self._geometry.centroid()

    def orientate_to_vector(self, vector: Vector) -> None:
        plane = self._geometry.plane or Plane.GLOBAL_XY
        local = plane.global_to_local(vector, direction=True)
        self.orientation = Angle(math.atan2(local.y, local.x))
