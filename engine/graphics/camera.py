"""
Camera that follows a target inside world bounds.

Handles converting between world and screen coordinates.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass
class CameraBounds:
    """Rectangular bounds for camera movement."""
    left: float = float('-inf')
    top: float = float('-inf')
    right: float = float('inf')
    bottom: float = float('inf')

    def clamp(self, x: float, y: float, view_width: float, view_height: float) -> tuple[float, float]:
        """Clamp camera position to bounds."""
        # Camera position is top-left of view
        max_x = max(self.left, self.right - view_width)
        max_y = max(self.top, self.bottom - view_height)

        return (
            max(self.left, min(x, max_x)),
            max(self.top, min(y, max_y)),
        )


class Camera:
    """
    2D camera with follow and bounds.

    Usage:
        camera = Camera(800, 600)
        camera.bounds = CameraBounds(0, 0, map_width, map_height)
        camera.follow(player_x, player_y)
        camera.update(dt)
        screen_pos = camera.world_to_screen(x, y)
    """

    def __init__(self, view_width: float, view_height: float):
        self.view_width = view_width
        self.view_height = view_height

        # Position (top-left of view in world coordinates)
        self.x = 0.0
        self.y = 0.0

        self._target_x = 0.0
        self._target_y = 0.0

        self.bounds: CameraBounds | None = None

        # 0 snaps to the target every update
        self.follow_lerp = 0.0

    @property
    def center_x(self) -> float:
        """X coordinate of view center."""
        return self.x + self.view_width / 2

    @property
    def center_y(self) -> float:
        """Y coordinate of view center."""
        return self.y + self.view_height / 2

    def resize(self, view_width: float, view_height: float) -> None:
        """Change the view size, keeping the same centre."""
        cx, cy = self.center_x, self.center_y
        self.view_width = view_width
        self.view_height = view_height
        self.set_center(cx, cy)

    def set_position(self, x: float, y: float) -> None:
        """Set camera position immediately (no lerp)."""
        self.x = x
        self.y = y
        self._target_x = x
        self._target_y = y
        self._apply_bounds()

    def set_center(self, x: float, y: float) -> None:
        """Center camera on a point immediately."""
        self.set_position(x - self.view_width / 2, y - self.view_height / 2)

    def follow(self, x: float, y: float) -> None:
        """Center the view on a world position at the next update()."""
        self._target_x = x - self.view_width / 2
        self._target_y = y - self.view_height / 2

    def update(self, dt: float) -> None:
        """
        Move toward the follow target.

        Call this each frame after follow().
        """
        if self.follow_lerp > 0:
            t = 1 - math.exp(-self.follow_lerp * dt)
            self.x += (self._target_x - self.x) * t
            self.y += (self._target_y - self.y) * t
        else:
            self.x = self._target_x
            self.y = self._target_y

        self._apply_bounds()

    def _apply_bounds(self) -> None:
        if self.bounds:
            self.x, self.y = self.bounds.clamp(
                self.x, self.y,
                self.view_width, self.view_height,
            )

    # Coordinate conversion

    def world_to_screen(self, world_x: float, world_y: float) -> tuple[float, float]:
        """Convert world coordinates to screen coordinates."""
        return (world_x - self.x, world_y - self.y)
