"""IO utilities: model loader and exporters."""

from .model_loader import ModelLoader, PROFILE_TYPES
from .model_exporter import ModelExporter

__all__ = [
    "ModelLoader",
    "PROFILE_TYPES",
    "ModelExporter",
]
