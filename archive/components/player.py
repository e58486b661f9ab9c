"""
Player components - facing, hitbox and per-frame state.
"""

from __future__ import annotations

from enum import Enum

from engine.core.component import Component, FrozenComponent
from archive.components.geometry import AABB


class Direction(Enum):
    """Cardinal facing. Values are the suffixes of animation clip names."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class Hitbox(FrozenComponent):
    """
    Player sprite and collision body dimensions.

    The sprite frame is centred on the player position. Trigger overlap
    uses the whole frame; tile collision uses the smaller body at the
    feet.

    Attributes:
        width: Sprite frame width
        height: Sprite frame height
        body_width: Collision body width
        body_height: Collision body height
        body_offset_x: Body left edge, relative to frame left edge
        body_offset_y: Body top edge, relative to frame top edge
    """
    width: float = 32.0
    height: float = 64.0
    body_width: float = 20.0
    body_height: float = 24.0
    body_offset_x: float = 6.0
    body_offset_y: float = 40.0

    def sprite_bounds(self, x: float, y: float) -> AABB:
        """Sprite frame box for a player at (x, y)."""
        return AABB.from_center(x, y, self.width, self.height)

    def body_bounds(self, x: float, y: float) -> AABB:
        """Collision body box for a player at (x, y)."""
        return AABB(
            x=x - self.width / 2 + self.body_offset_x,
            y=y - self.height / 2 + self.body_offset_y,
            width=self.body_width,
            height=self.body_height,
        )


class PlayerState(Component):
    """
    Mutable player state, rewritten every frame.

    Attributes:
        x: World X of the sprite centre
        y: World Y of the sprite centre
        vx: Horizontal velocity (pixels/second)
        vy: Vertical velocity (pixels/second)
        facing: Last resolved facing
        moving: Whether velocity is non-zero
        animation: Clip currently requested from the presentation side
    """
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    facing: Direction = Direction.DOWN
    moving: bool = False
    animation: str = "idle-down"

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)

    @property
    def velocity(self) -> tuple[float, float]:
        return (self.vx, self.vy)

    def stop(self) -> None:
        """Zero the velocity."""
        self.vx = 0.0
        self.vy = 0.0
        self.moving = False
