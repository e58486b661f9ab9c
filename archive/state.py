"""
Scene state - the single owned object every subsystem reads and writes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from archive.components import AABB, DialogueMode, Hitbox, PlayerState, TriggerZone
from archive.systems.proximity import SpatialIndex


@dataclass
class SceneState:
    """
    Everything that changes while the scene runs.

    Attributes:
        player: Position, velocity, facing and animation
        hitbox: Player sprite/body dimensions
        index: Registered trigger zones
        current_trigger: Zone overlapping the player (reference, not a copy)
        mode: Active modal state
        open_trigger: Zone whose dialogue is showing (SHOWING_TRIGGER only)
        prompt_text: Text of the ambient prompt, None when hidden
        prompt_serial: Bumped on every prompt show/hide; scheduled hides
            compare against it to detect that something newer happened
        world_bounds: Map rectangle, bounds the camera when known
    """
    player: PlayerState = field(default_factory=PlayerState)
    hitbox: Hitbox = field(default_factory=Hitbox)
    index: SpatialIndex = field(default_factory=SpatialIndex)
    current_trigger: Optional[TriggerZone] = None
    mode: DialogueMode = DialogueMode.WELCOME
    open_trigger: Optional[TriggerZone] = None
    prompt_text: Optional[str] = None
    prompt_serial: int = 0
    world_bounds: Optional[AABB] = None

    @property
    def is_modal(self) -> bool:
        """True while a welcome screen or dialogue suspends gameplay."""
        return self.mode is not DialogueMode.CLOSED

    def player_bounds(self) -> AABB:
        """Box used for trigger overlap."""
        return self.hitbox.sprite_bounds(self.player.x, self.player.y)


__all__ = ["SceneState", "DialogueMode"]
