"""Model layer: nodes, elements, families and the Model container."""

from .errors import ModelError, NonExclusiveGeometryError
from .notify import Observable
from .model_object import ModelObject
from .node_generation import NodeGenerationParameters
from .node import Node
from .profiles import (
    SectionProfile,
    RectangularProfile,
    RectangularHollowProfile,
    CircularProfile,
    CircularHollowProfile,
    SymmetricIProfile,
    TProfile,
)
from .family import Family, SectionFamily, PanelFamily
from .element import Element, LinearElement, PanelElement
from .tables import ModelObjectTable, NodeTable, FamilyTable, ElementTable
from .model import Model, ModelObjectCreator

__all__ = [
    "ModelError",
    "NonExclusiveGeometryError",
    "Observable",
    "ModelObject",
    "NodeGenerationParameters",
    "Node",
    "SectionProfile",
    "RectangularProfile",
    "RectangularHollowProfile",
    "CircularProfile",
    "CircularHollowProfile",
    "SymmetricIProfile",
    "TProfile",
    "Family",
    "SectionFamily",
    "PanelFamily",
    "Element",
    "LinearElement",
    "PanelElement",
    "ModelObjectTable",
    "NodeTable",
    "FamilyTable",
    "ElementTable",
    "Model",
    "ModelObjectCreator",
]
