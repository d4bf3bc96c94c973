"""Nucleus: BIM geometry kernel and structural data model."""

__version__ = "0.3.0"
