"""
Archive systems - per-frame logic.

Systems read and write the owned SceneState and return render
commands. They never touch visuals directly.
"""

from archive.systems.proximity import (
    SpatialIndex,
    ProximityTracker,
    ProximityEvent,
    ProximityEventType,
)
from archive.systems.movement import MovementResolver, MovementResult, MovementSystem
from archive.systems.dialogue import DialogueController

__all__ = [
    "SpatialIndex",
    "ProximityTracker",
    "ProximityEvent",
    "ProximityEventType",
    "MovementResolver",
    "MovementResult",
    "MovementSystem",
    "DialogueController",
]
