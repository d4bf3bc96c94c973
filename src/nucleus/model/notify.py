"""
Property-change notification.

Observers subscribe a callback that receives (sender, property_name) every
time the observed object reports a change.
"""

from __future__ import annotations
from typing import Callable, List

PropertyChangedCallback = Callable[[object, str], None]


class Observable:
    """Mixin providing subscribe / notify_property_changed."""

    def __init__(self):
        self._subscribers: List[PropertyChangedCallback] = []

    def subscribe(self, callback: PropertyChangedCallback) -> None:
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: PropertyChangedCallback) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def notify_property_changed(self, name: str) -> None:
        # Copy: callbacks may unsubscribe themselves
        for callback in list(self._subscribers):
            callback(self, name)
