"""
Movement - input to velocity, and velocity to position.

MovementResolver turns the held direction actions into a velocity,
a facing and an animation clip. MovementSystem integrates that
velocity into the player's position against the map's solid tiles.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Collection, Optional, Protocol

from engine.core.actions import Action
from archive.components import Direction, PlayerState
from archive.presentation.commands import PlayAnimation, RenderCommand

if TYPE_CHECKING:
    from archive.state import SceneState


@dataclass(frozen=True)
class MovementResult:
    """
    Resolved movement for one frame.

    Attributes:
        vx: Horizontal velocity (pixels/second)
        vy: Vertical velocity (pixels/second)
        facing: Facing after this frame's input
    """
    vx: float
    vy: float
    facing: Direction

    @property
    def moving(self) -> bool:
        return self.vx != 0 or self.vy != 0

    @property
    def animation(self) -> str:
        """Clip name: walk-<dir> while moving, idle-<dir> otherwise."""
        prefix = "walk" if self.moving else "idle"
        return f"{prefix}-{self.facing.value}"


class MovementResolver:
    """
    Maps held direction actions to velocity and facing.

    Rules:
    - Left beats right, up beats down; the two axes are independent.
    - Horizontal input decides facing. Vertical input only sets facing
      when no horizontal input is held. No input keeps the old facing.
    - Diagonals scale both components by diagonal_factor.
    """

    def __init__(self, speed: float = 160.0, diagonal_factor: float = 0.707):
        self.speed = speed
        self.diagonal_factor = diagonal_factor

    def resolve(
        self,
        held: Collection[Action],
        facing: Direction = Direction.DOWN,
    ) -> MovementResult:
        """
        Resolve velocity and facing from held actions.

        Args:
            held: Actions currently held
            facing: Facing from the previous frame

        Returns:
            The movement for this frame
        """
        left = Action.MOVE_LEFT in held
        right = Action.MOVE_RIGHT in held
        up = Action.MOVE_UP in held
        down = Action.MOVE_DOWN in held

        vx = 0.0
        vy = 0.0

        if left:
            vx = -self.speed
            facing = Direction.LEFT
        elif right:
            vx = self.speed
            facing = Direction.RIGHT

        if up:
            vy = -self.speed
            if not left and not right:
                facing = Direction.UP
        elif down:
            vy = self.speed
            if not left and not right:
                facing = Direction.DOWN

        if vx != 0 and vy != 0:
            vx *= self.diagonal_factor
            vy *= self.diagonal_factor

        return MovementResult(vx=vx, vy=vy, facing=facing)

    def apply(
        self,
        player: PlayerState,
        held: Collection[Action],
    ) -> list[RenderCommand]:
        """
        Resolve movement and write it into the player state.

        Returns:
            PlayAnimation when the clip changed, otherwise nothing
        """
        result = self.resolve(held, player.facing)

        player.vx = result.vx
        player.vy = result.vy
        player.facing = result.facing
        player.moving = result.moving

        if result.animation != player.animation:
            player.animation = result.animation
            return [PlayAnimation(result.animation)]
        return []


class SolidMap(Protocol):
    """Anything that can answer "is this rectangle blocked"."""

    def get_solid_rect(self, x: float, y: float, width: float, height: float) -> bool:
        ...


class MovementSystem:
    """
    Integrates player velocity into position.

    Handles:
    - Applying velocity to position
    - Collision against solid tiles, X then Y so the player slides
      along walls
    - Pausing entirely while a modal is open
    """

    def __init__(self, solid_map: Optional[SolidMap] = None):
        self.solid_map = solid_map

    def set_map(self, solid_map: Optional[SolidMap]) -> None:
        """Set the map used for collision."""
        self.solid_map = solid_map

    def update(self, state: SceneState, dt: float) -> None:
        """Move the player by velocity * dt."""
        if state.is_modal:
            return

        player = state.player
        if player.vx == 0 and player.vy == 0:
            return

        new_x = player.x + player.vx * dt
        new_y = player.y + player.vy * dt

        if self.solid_map is None:
            player.x = new_x
            player.y = new_y
            return

        # Check X movement
        if not self._blocked(state, new_x, player.y):
            player.x = new_x
        else:
            player.vx = 0.0

        # Check Y movement
        if not self._blocked(state, player.x, new_y):
            player.y = new_y
        else:
            player.vy = 0.0

    def _blocked(self, state: SceneState, x: float, y: float) -> bool:
        """Check if the collision body at (x, y) hits a solid tile."""
        body = state.hitbox.body_bounds(x, y)
        return self.solid_map.get_solid_rect(body.x, body.y, body.width, body.height)
