"""
Walkable Archive

A top-down map the player walks around. Stepping into a marked area
offers a short text (with an optional link and illustration) that
opens in a modal panel.

Provides:
- Components (geometry, trigger zones, player state)
- Systems (movement, proximity, dialogue state machine)
- World (Tiled map loading)
- Presentation (render commands, recording and pygame adapters)
- ArchiveScene wiring them together each fixed step
"""

__version__ = "0.1.0"

from archive.config import ArchiveConfig, load_config
from archive.events import ArchiveEvent
from archive.state import SceneState
from archive.scene import ArchiveScene
from archive.world import ArchiveMap, MapFormatError

__all__ = [
    "ArchiveConfig",
    "load_config",
    "ArchiveEvent",
    "SceneState",
    "ArchiveScene",
    "ArchiveMap",
    "MapFormatError",
]
