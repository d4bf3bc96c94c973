"""
Model: the top-level container of nodes, elements and families.

Property changes on any object in the model bubble up through
on_object_property_changed and clear the model's cached data.
"""

from __future__ import annotations
import itertools
import logging
import uuid
from typing import Callable, Iterator, List, Optional

from ..geometry import BoundingBox, Curve, Line, PlanarRegion, Vector
from .element import Element, LinearElement, PanelElement
from .family import Family, PanelFamily, SectionFamily
from .model_object import ModelObject
from .node import Node
from .node_generation import NodeGenerationParameters
from .profiles import SectionProfile
from .tables import ElementTable, FamilyTable, NodeTable

logger = logging.getLogger(__name__)

# Margin added around the elements when computing the model's bounding box
BOUNDING_BOX_MARGIN = 3.0


class ModelObjectCreator:
    """Factory methods that create objects and add them to a model in one step."""

    def __init__(self, model: Model):
        self._model = model

    def node(self, position: Vector, reuse_tolerance: float = 0.0) -> Node:
        """
        Node at a position.

        With a positive reuse_tolerance, an existing node within that distance
        is returned (and undeleted) instead of creating a new one.
        """
        result = None
        if reuse_tolerance > 0:
            result = self._model.nodes.closest_node_to(position, reuse_tolerance)
        if result is None:
            result = Node(position)
            logger.debug("Created node at %s", position)
        else:
            result.undelete()
            logger.debug("Reused node %s for %s", result.description, position)
        self._model.add(result)
        return result

    def linear_element(self, geometry: Curve,
                       family: Optional[SectionFamily] = None) -> LinearElement:
        result = LinearElement(family=family)
        result.replace_geometry(geometry)
        self._model.add(result)
        return result

    def linear_element_between(self, start: Node, end: Node,
                               family: Optional[SectionFamily] = None) -> LinearElement:
        """Straight element joining two nodes."""
        result = self.linear_element(Line(start.position, end.position), family)
        result.start_node = start
        result.end_node = end
        return result

    def panel_element(self, geometry: PlanarRegion,
                      family: Optional[PanelFamily] = None) -> PanelElement:
        result = PanelElement(family=family)
        result.replace_geometry(geometry)
        self._model.add(result)
        return result

    def section_family(self, name: Optional[str] = None,
                       profile: Optional[SectionProfile] = None) -> SectionFamily:
        if name is None:
            name = self._model.families.next_available_name("Section")
        result = SectionFamily(name, profile)
        self._model.add(result)
        return result

    def panel_family(self, name: Optional[str] = None, thickness: float = 0.2) -> PanelFamily:
        if name is None:
            name = self._model.families.next_available_name("Build-up")
        result = PanelFamily(name, thickness)
        self._model.add(result)
        return result


class Model:
    """
    Container of model objects.

    Attributes:
        nodes: Node table
        elements: Element table
        families: Family table
        on_object_added: Callbacks receiving each newly added object
        on_object_property_changed: Callbacks receiving (sender, property_name)
            for every property change of an object in the model
    """

    def __init__(self, name: str = ""):
        self.name = name
        self.nodes = NodeTable(self)
        self.elements = ElementTable(self)
        self.families = FamilyTable(self)
        self.create = ModelObjectCreator(self)
        self.on_object_added: List[Callable[[ModelObject], None]] = []
        self.on_object_property_changed: List[Callable[[ModelObject, str], None]] = []
        self._bounding_box: Optional[BoundingBox] = None

    def _tables(self):
        return (self.families, self.nodes, self.elements)

    def add(self, obj: ModelObject) -> bool:
        """
        Add an object to the table for its type.

        Returns:
            False if it was already present or is not a storable type
        """
        if isinstance(obj, Element):
            added = self.elements.add(obj)
        elif isinstance(obj, Node):
            added = self.nodes.add(obj)
        elif isinstance(obj, Family):
            added = self.families.add(obj)
        else:
            return False
        if added:
            self.clear_cached_data()
            for callback in list(self.on_object_added):
                callback(obj)
        return added

    def _register(self, obj: ModelObject) -> None:
        obj.subscribe(self._handle_object_property_changed)

    def _handle_object_property_changed(self, sender: ModelObject, name: str) -> None:
        for callback in list(self.on_object_property_changed):
            callback(sender, name)
        self.clear_cached_data()

    def get(self, guid: uuid.UUID) -> Optional[ModelObject]:
        for table in self._tables():
            obj = table.get(guid)
            if obj is not None:
                return obj
        return None

    def __getitem__(self, guid: uuid.UUID) -> ModelObject:
        obj = self.get(guid)
        if obj is None:
            raise KeyError(guid)
        return obj

    def everything(self) -> Iterator[ModelObject]:
        return itertools.chain.from_iterable(self._tables())

    def regenerate_nodes(self, options: Optional[NodeGenerationParameters] = None) -> None:
        """
        Rebuild node connectivity for every element.

        Vertices within the connection tolerance of each other share a node.
        """
        options = options or NodeGenerationParameters()
        self.elements.regenerate_nodes(options)
        if options.delete_unused_nodes:
            for node in self.nodes:
                if not node.is_deleted and not node.connected_elements():
                    node.delete()
        logger.debug("Regenerated nodes: %d nodes in use",
                     sum(1 for n in self.nodes if not n.is_deleted))

    @property
    def bounding_box(self) -> BoundingBox:
        """Box around all elements, expanded by a fixed margin (cached)."""
        if self._bounding_box is None:
            box = self.elements.bounding_box()
            if box is None:
                box = BoundingBox.from_point(Vector.ZERO)
            box.expand(BOUNDING_BOX_MARGIN)
            self._bounding_box = box
        return self._bounding_box

    def clear_cached_data(self) -> None:
        self._bounding_box = None

    def __repr__(self) -> str:
        return (f"Model({self.name!r}, nodes={len(self.nodes)}, "
                f"elements={len(self.elements)}, families={len(self.families)})")
