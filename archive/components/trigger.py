"""
Trigger components - authored zones tied to narrative content.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from engine.core.component import FrozenComponent
from archive.components.geometry import AABB


class TriggerZone(FrozenComponent):
    """
    Invisible rectangular zone carrying text, an optional link and an
    optional image.

    One instance per authored map object. Immutable after load and
    compared by identity wherever "the current trigger" matters.

    Attributes:
        id: Map object id
        name: Map object name (used as the image caption)
        bounds: Zone rectangle in world pixels
        properties: Authored key/value pairs
    """
    id: int = 0
    name: str = ""
    bounds: AABB = Field(default_factory=AABB)
    properties: dict[str, str] = Field(default_factory=dict)

    def get_property(self, key: str) -> Optional[str]:
        """
        Look up a property by key, tolerating authoring case.

        Tries the key as given, lower-case, capitalised and upper-case
        ("url", "Url", "URL"). Empty values count as absent.
        """
        for candidate in (key, key.lower(), key.capitalize(), key.upper()):
            value = self.properties.get(candidate)
            if value:
                return value
        return None

    @property
    def text(self) -> Optional[str]:
        return self.get_property("text")

    @property
    def url(self) -> Optional[str]:
        return self.get_property("url")

    @property
    def image(self) -> Optional[str]:
        return self.get_property("image")
