"""
Scene base class.

A scene represents one playable game state with its own update logic,
rendering and event handling. The Game drives exactly one scene at a
time.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import pygame

if TYPE_CHECKING:
    from engine.core.game import Game


class Scene(ABC):
    """
    Abstract base class for game scenes.

    Lifecycle:
        1. __init__: Called when scene is created
        2. on_enter: Called when the game starts driving the scene
        3. update/render: Called each frame while active
        4. on_exit: Called when the scene is replaced or the game quits
    """

    def __init__(self, game: Game | None = None):
        self.game = game

    def on_enter(self) -> None:
        """
        Called when scene becomes active.

        Override to initialize scene-specific resources.
        """
        pass

    def on_exit(self) -> None:
        """
        Called when scene is deactivated.

        Override to release resources.
        """
        pass

    def on_resize(self, width: int, height: int) -> None:
        """Called when the window is resized."""
        pass

    @abstractmethod
    def update(self, dt: float) -> None:
        """
        Update scene logic.

        Args:
            dt: Delta time in seconds (fixed timestep)
        """
        pass

    @abstractmethod
    def render(self, alpha: float) -> None:
        """
        Render the scene.

        Args:
            alpha: Interpolation factor (0-1) for smooth rendering
        """
        pass

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Handle a pygame event.

        Returns:
            True if the event was consumed
        """
        return False
