"""Exceptions raised by the model layer."""


class ModelError(Exception):
    """Base class for model errors."""


class NonExclusiveGeometryError(ModelError):
    """A shape already used as one element's set-out geometry was assigned to another."""
