"""
Families: shared property sets assigned to elements.

A SectionFamily holds the cross-section profile of linear elements; a
PanelFamily holds the build-up thickness of panel elements.
"""

from __future__ import annotations
from typing import Optional

from .model_object import ModelObject
from .profiles import SectionProfile


class Family(ModelObject):
    """Base class of element property families."""


class SectionFamily(Family):
    """
    Section property family for linear elements.

    Changes to the profile's dimensions are re-reported as a change of this
    family's 'profile' property.
    """

    def __init__(self, name: str = "", profile: Optional[SectionProfile] = None):
        super().__init__(name)
        self._profile: Optional[SectionProfile] = None
        if profile is not None:
            self.profile = profile

    @property
    def profile(self) -> Optional[SectionProfile]:
        return self._profile

    @profile.setter
    def profile(self, value: Optional[SectionProfile]):
        if self._profile is not None:
            self._profile.unsubscribe(self._handle_profile_changed)
        self._profile = value
        if value is not None:
            value.subscribe(self._handle_profile_changed)
        self.notify_property_changed("profile")

    def _handle_profile_changed(self, sender, name: str) -> None:
        self.notify_property_changed("profile")


class PanelFamily(Family):
    """Build-up family for panel elements."""

    def __init__(self, name: str = "", thickness: float = 0.2):
        super().__init__(name)
        self._thickness = float(thickness)

    @property
    def thickness(self) -> float:
        return self._thickness

    @thickness.setter
    def thickness(self, value: float):
        self._thickness = float(value)
        self.notify_property_changed("thickness")
