"""
Archive components - data-only model definitions.

All components are Pydantic models or enums containing only data.
Logic lives in systems and controllers.
"""

from archive.components.geometry import AABB
from archive.components.trigger import TriggerZone
from archive.components.player import Direction, Hitbox, PlayerState
from archive.components.modes import DialogueMode

__all__ = [
    "AABB",
    "TriggerZone",
    "Direction",
    "Hitbox",
    "PlayerState",
    "DialogueMode",
]
