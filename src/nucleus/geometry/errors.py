"""Exceptions raised by the geometry kernel."""


class GeometryError(Exception):
    """Base class for geometry kernel errors."""


class VertexOwnershipError(GeometryError):
    """A vertex that already belongs to one shape was given to another."""


class UnsupportedGeometryError(GeometryError):
    """A converter was asked to translate a shape type it does not handle."""
