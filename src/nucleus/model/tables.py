"""
Model object tables: GUID-keyed, insertion-ordered collections owned by a Model.
"""

from __future__ import annotations
import logging
import math
import uuid
import weakref
from typing import Dict, Generic, Iterator, List, Optional, Type, TypeVar, Union

import numpy as np

from ..geometry import BoundingBox, Vector
from .element import Element, LinearElement, PanelElement
from .family import Family
from .model_object import ModelObject
from .node import Node
from .node_generation import NodeGenerationParameters

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=ModelObject)


class ModelObjectTable(Generic[T]):
    """
    Ordered table of model objects of one kind.

    Adding an object links it to the model, subscribes the model to its
    property changes and assigns it the next numeric id if it has none.
    """

    item_type: Type[ModelObject] = ModelObject

    def __init__(self, model):
        self._model_ref = weakref.ref(model)
        self._items: Dict[uuid.UUID, T] = {}
        self._next_numeric_id = 1

    @property
    def model(self):
        return self._model_ref()

    def add(self, obj: T) -> bool:
        """
        Add an object.

        Returns:
            False if an object with the same GUID is already in the table
        """
        if not isinstance(obj, self.item_type):
            raise TypeError(f"{type(self).__name__} cannot hold {type(obj).__name__}")
        if obj.guid in self._items:
            return False
        if obj.numeric_id <= 0:
            obj.numeric_id = self._next_numeric_id
        self._next_numeric_id = max(self._next_numeric_id, obj.numeric_id + 1)
        self._items[obj.guid] = obj
        model = self.model
        if model is not None:
            obj._set_model(model)
            model._register(obj)
        logger.debug("Added %r to %s", obj, type(self).__name__)
        return True

    def __contains__(self, item: Union[uuid.UUID, ModelObject]) -> bool:
        key = item.guid if isinstance(item, ModelObject) else item
        return key in self._items

    def __getitem__(self, guid: uuid.UUID) -> T:
        return self._items[guid]

    def get(self, guid: uuid.UUID) -> Optional[T]:
        return self._items.get(guid)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items.values()))

    def __len__(self) -> int:
        return len(self._items)

    def get_by_numeric_id(self, numeric_id: int) -> Optional[T]:
        for obj in self._items.values():
            if obj.numeric_id == numeric_id:
                return obj
        return None

    def find_by_name(self, name: str) -> Optional[T]:
        for obj in self._items.values():
            if obj.name == name:
                return obj
        return None

    def undeleted(self) -> List[T]:
        return [obj for obj in self._items.values() if not obj.is_deleted]

    def purge_deleted(self) -> int:
        """Permanently remove deleted objects. Returns the number removed."""
        deleted = [guid for guid, obj in self._items.items() if obj.is_deleted]
        for guid in deleted:
            obj = self._items.pop(guid)
            model = self.model
            if model is not None:
                obj.unsubscribe(model._handle_object_property_changed)
            obj._set_model(None)
        return len(deleted)


class NodeTable(ModelObjectTable[Node]):
    item_type = Node

    def closest_node_to(self, point: Vector, max_distance: float = math.inf,
                        ignore: Optional[List[Node]] = None) -> Optional[Node]:
        """
        Node nearest to a point, deleted nodes included.

        Returns:
            None if no node lies within max_distance
        """
        candidates = [n for n in self._items.values()
                      if ignore is None or n not in ignore]
        if not candidates:
            return None
        positions = np.array([n.position.to_array() for n in candidates])
        distances = np.linalg.norm(positions - point.to_array(), axis=1)
        best = int(np.argmin(distances))
        if distances[best] > max_distance:
            return None
        return candidates[best]


class FamilyTable(ModelObjectTable[Family]):
    item_type = Family

    def next_available_name(self, prefix: str) -> str:
        """First name of the form '<prefix><n>' (n = 1, 2, ...) not already used."""
        used = {f.name for f in self._items.values()}
        n = 1
        while f"{prefix}{n}" in used:
            n += 1
        return f"{prefix}{n}"


class ElementTable(ModelObjectTable[Element]):
    item_type = Element

    def linear_elements(self) -> List[LinearElement]:
        return [e for e in self._items.values() if isinstance(e, LinearElement)]

    def panel_elements(self) -> List[PanelElement]:
        return [e for e in self._items.values() if isinstance(e, PanelElement)]

    def bounding_box(self) -> Optional[BoundingBox]:
        """Box around the geometry of every undeleted element, or None if there is none."""
        boxes = [e.geometry.bounding_box for e in self._items.values()
                 if not e.is_deleted and e.geometry is not None]
        boxes = [b for b in boxes if b is not None]
        if not boxes:
            return None
        result = boxes[0].copy()
        for box in boxes[1:]:
            result.include(box)
        return result

    def regenerate_nodes(self, options: NodeGenerationParameters) -> None:
        for element in self.undeleted():
            element.regenerate_nodes(options)
