"""
ModelObject: base class of everything stored in a Model's tables.
"""

from __future__ import annotations
from datetime import datetime
import uuid
import weakref
from typing import Optional

from .notify import Observable


class ModelObject(Observable):
    """
    Identifiable, nameable object belonging to at most one model.

    Attributes:
        guid: Globally unique identifier
        numeric_id: Per-table sequential id assigned when added to a model (0 before)
        modified: Time of the last reported property change
    """

    def __init__(self, name: str = ""):
        super().__init__()
        self.guid: uuid.UUID = uuid.uuid4()
        self._name = name
        self.numeric_id: int = 0
        self._is_deleted = False
        self.modified: datetime = datetime.now()
        self._model_ref = None

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str):
        self._name = value
        self.notify_property_changed("name")

    @property
    def description(self) -> str:
        """The name, or a type-and-number label for unnamed objects."""
        if not self._name.strip() and self.numeric_id > 0:
            return f"{type(self).__name__} {self.numeric_id}"
        return self._name

    @property
    def model(self):
        """The owning model (weak link), or None."""
        if self._model_ref is None:
            return None
        return self._model_ref()

    def _set_model(self, model) -> None:
        self._model_ref = weakref.ref(model) if model is not None else None

    @property
    def is_deleted(self) -> bool:
        return self._is_deleted

    def delete(self) -> None:
        """Flag as deleted; the object stays in its table so it can be undeleted."""
        if not self._is_deleted:
            self._is_deleted = True
            self.notify_property_changed("is_deleted")

    def undelete(self) -> None:
        if self._is_deleted:
            self._is_deleted = False
            self.notify_property_changed("is_deleted")

    def notify_property_changed(self, name: str) -> None:
        self.modified = datetime.now()
        super().notify_property_changed(name)

    def __repr__(self) -> str:
        label = self.description or str(self.guid)[:8]
        return f"{type(self).__name__}({label!r})"
