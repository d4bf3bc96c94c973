"""Geometry kernel: vectors, frames, shapes and curves."""

from .angle import Angle
from .vector import Vector
from .transform import Transform, rotation_matrix, rotation_matrix_xyz
from .coordinate_systems import (
    CoordinateSystem,
    CartesianCoordinateSystem,
    CylindricalCoordinateSystem,
)
from .plane import Plane
from .axis import Axis
from .circle import Circle
from .bounding_box import BoundingBox
from .vertex import Vertex, VertexCollection
from .shape import Shape
from .curve import Curve
from .point import Point
from .line import Line
from .arc import Arc
from .polycurve import PolyCurve
from .polyline import PolyLine
from .planar_region import PlanarRegion
from .mesh import Mesh, MeshFace
from .conversion import GeometryConverter, ArrayConverter
from .errors import GeometryError, VertexOwnershipError, UnsupportedGeometryError
from . import intersect, tolerance

__all__ = [
    "Angle",
    "Vector",
    "Transform",
    "rotation_matrix",
    "rotation_matrix_xyz",
    "CoordinateSystem",
    "CartesianCoordinateSystem",
    "CylindricalCoordinateSystem",
    "Plane",
    "Axis",
    "Circle",
    "BoundingBox",
    "Vertex",
    "VertexCollection",
    "Shape",
    "Curve",
    "Point",
    "Line",
    "Arc",
    "PolyCurve",
    "PolyLine",
    "PlanarRegion",
    "Mesh",
    "MeshFace",
    "GeometryConverter",
    "ArrayConverter",
    "GeometryError",
    "VertexOwnershipError",
    "UnsupportedGeometryError",
    "intersect",
    "tolerance",
]
