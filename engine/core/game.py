"""
Core Game class with fixed timestep game loop.

The Game class is the main entry point for the engine. It handles:
- Window creation (Pygame software surface)
- Fixed timestep update loop (deterministic movement and timers)
- Variable render loop
- Delegation to the active scene
"""

from __future__ import annotations

import logging
import time

import pygame

from engine.core.events import EventBus, EngineEvent
from engine.core.scene import Scene
from engine.input.handler import InputHandler

logger = logging.getLogger(__name__)


class GameConfig:
    """Configuration for the game engine."""

    def __init__(
        self,
        title: str = "Walkable Archive",
        width: int = 800,
        height: int = 600,
        target_fps: int = 60,
        fixed_timestep: float = 1 / 60,
        max_frame_skip: int = 5,
        fullscreen: bool = False,
        resizable: bool = False,
    ):
        self.title = title
        self.width = width
        self.height = height
        self.target_fps = target_fps
        self.fixed_timestep = fixed_timestep
        self.max_frame_skip = max_frame_skip
        self.fullscreen = fullscreen
        self.resizable = resizable


class Game:
    """
    Main game engine class.

    Implements a fixed timestep game loop with variable rendering.
    Input edges, scheduled timers and scene logic all advance inside
    the fixed update, one step at a time.

    Usage:
        config = GameConfig(title="My Game", width=800, height=600)
        game = Game(config)
        game.set_scene(MyScene(game))
        game.run()
    """

    def __init__(self, config: GameConfig | None = None):
        self.config = config or GameConfig()
        self._running = False

        pygame.init()

        flags = 0
        if self.config.fullscreen:
            flags |= pygame.FULLSCREEN
        if self.config.resizable:
            flags |= pygame.RESIZABLE

        self.screen = pygame.display.set_mode(
            (self.config.width, self.config.height),
            flags
        )
        pygame.display.set_caption(self.config.title)

        # Core systems
        self.event_bus = EventBus()
        self.input = InputHandler(self.event_bus)
        self.scene: Scene | None = None

        # Timing
        self._clock = pygame.time.Clock()
        self._accumulator = 0.0
        self._current_time = time.perf_counter()
        self._frame_count = 0
        self._fps = 0.0
        self._fps_update_time = 0.0

        self.debug_mode = False

    @property
    def width(self) -> int:
        """Current window width."""
        return self.screen.get_width()

    @property
    def height(self) -> int:
        """Current window height."""
        return self.screen.get_height()

    def set_scene(self, scene: Scene) -> None:
        """Replace the active scene."""
        if self.scene:
            self.scene.on_exit()
        self.scene = scene
        scene.on_enter()

    def run(self) -> None:
        """
        Start the main game loop.

        Uses a fixed timestep for updates with variable rendering.
        """
        self._running = True
        self._current_time = time.perf_counter()
        self.event_bus.publish(EngineEvent.GAME_START)
        logger.info(f"Starting '{self.config.title}' at {self.config.width}x{self.config.height}")

        while self._running:
            new_time = time.perf_counter()
            frame_time = new_time - self._current_time
            self._current_time = new_time

            # Prevent spiral of death
            if frame_time > 0.25:
                frame_time = 0.25

            self._accumulator += frame_time

            self._process_events()

            updates = 0
            while self._accumulator >= self.config.fixed_timestep:
                self._fixed_update(self.config.fixed_timestep)
                self._accumulator -= self.config.fixed_timestep
                updates += 1

                if updates >= self.config.max_frame_skip:
                    self._accumulator = 0
                    break

            alpha = self._accumulator / self.config.fixed_timestep
            self._render(alpha)

            self._update_fps()
            self._clock.tick(self.config.target_fps)

        self._shutdown()

    def quit(self) -> None:
        """Request game shutdown."""
        self._running = False

    def _process_events(self) -> None:
        """Process Pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.quit()
            elif event.type == pygame.VIDEORESIZE:
                self._on_resize(event.w, event.h)
            else:
                self.input.process_event(event)
                if self.scene:
                    self.scene.handle_event(event)

    def _fixed_update(self, dt: float) -> None:
        """
        Fixed timestep update for game logic.

        Args:
            dt: Fixed delta time (always config.fixed_timestep)
        """
        self.input.update()
        if self.scene:
            self.scene.update(dt)

    def _render(self, alpha: float) -> None:
        """Render the current frame."""
        self.screen.fill((0, 0, 0))
        if self.scene:
            self.scene.render(alpha)
        pygame.display.flip()

    def _update_fps(self) -> None:
        """Update FPS counter."""
        self._frame_count += 1
        current = time.perf_counter()

        if current - self._fps_update_time >= 1.0:
            self._fps = self._frame_count / (current - self._fps_update_time)
            self._frame_count = 0
            self._fps_update_time = current

            if self.debug_mode:
                pygame.display.set_caption(
                    f"{self.config.title} | FPS: {self._fps:.1f}"
                )

    def _on_resize(self, width: int, height: int) -> None:
        """Handle window resize."""
        self.event_bus.publish(EngineEvent.WINDOW_RESIZED, width=width, height=height)
        if self.scene:
            self.scene.on_resize(width, height)

    def _shutdown(self) -> None:
        """Clean shutdown."""
        if self.scene:
            self.scene.on_exit()
        self.event_bus.publish(EngineEvent.GAME_QUIT)
        logger.info("Shutting down")
        pygame.quit()
