"""
Archive scene - wires input, systems and presentation together.

One update() per fixed step, strictly in this order:
    1. timers due this step (ambient prompt auto-hide)
    2. pointer presses (welcome dismissal, links)
    3. movement, integration and proximity (CLOSED only)
    4. interact / cancel keys
Commands from each stage are applied to the adapter immediately, so
later stages see the same state the player sees.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from engine.core.actions import Action
from engine.core.events import EventBus
from engine.core.scene import Scene
from engine.core.timers import Scheduler
from engine.input.handler import FrameInput, InputHandler
from archive.components import DialogueMode, PlayerState
from archive.config import ArchiveConfig
from archive.presentation.adapter import PresentationAdapter
from archive.presentation.commands import RenderCommand
from archive.state import SceneState
from archive.systems import (
    DialogueController,
    MovementResolver,
    MovementSystem,
    ProximityTracker,
    SpatialIndex,
)

if TYPE_CHECKING:
    from engine.core.game import Game
    from archive.world.map import ArchiveMap

logger = logging.getLogger(__name__)


class ArchiveScene(Scene):
    """
    The walkable archive.

    Usage:
        scene = ArchiveScene(adapter, config, game_map, game=game)
        game.set_scene(scene)

    Headless (tests):
        scene = ArchiveScene(RecordingAdapter(), config, game_map)
        scene.on_enter()
        scene.step(FrameInput(held=frozenset({Action.MOVE_LEFT})), 1 / 60)
    """

    def __init__(
        self,
        adapter: PresentationAdapter,
        config: Optional[ArchiveConfig] = None,
        game_map: Optional[ArchiveMap] = None,
        game: Optional[Game] = None,
        event_bus: Optional[EventBus] = None,
        input_handler: Optional[InputHandler] = None,
    ):
        super().__init__(game)
        self.config = config or ArchiveConfig()
        self.adapter = adapter

        if event_bus is None:
            event_bus = game.event_bus if game else EventBus()
        if input_handler is None and game is not None:
            input_handler = game.input
        self.event_bus = event_bus
        self.input = input_handler

        self.scheduler = Scheduler()
        self.state = SceneState()
        self.debug = False

        self.resolver = MovementResolver(
            speed=self.config.player_speed,
            diagonal_factor=self.config.diagonal_factor,
        )
        self.movement = MovementSystem()
        self.tracker = ProximityTracker()
        self.dialogue = DialogueController(
            self.config,
            self.scheduler,
            resolve_image=adapter.resolve_image,
            event_bus=self.event_bus,
        )

        self.game_map: Optional[ArchiveMap] = None
        if game_map is not None:
            self.load_map(game_map)
        else:
            x, y = self.config.default_spawn
            self.state.player = PlayerState(x=x, y=y)

    def load_map(self, game_map: ArchiveMap) -> None:
        """Register the map's triggers, spawn the player and enable collision."""
        self.game_map = game_map
        self.state.index = SpatialIndex(game_map.triggers)
        self.state.current_trigger = None
        self.state.world_bounds = game_map.bounds

        x, y = game_map.spawn
        self.state.player = PlayerState(x=x, y=y)
        self.movement.set_map(game_map)
        logger.debug(f"Scene using map '{game_map.name}' with {len(self.state.index)} triggers")

    # Lifecycle

    def on_enter(self) -> None:
        super().on_enter()
        self.adapter.play_animation(self.state.player.animation)
        self._apply(self.dialogue.start(self.state))

    def on_exit(self) -> None:
        super().on_exit()
        self.scheduler.clear()

    def on_resize(self, width: int, height: int) -> None:
        self.adapter.resize(width, height)

    def toggle_debug(self) -> None:
        """Show or hide trigger and hitbox outlines."""
        self.debug = not self.debug
        if self.game:
            self.game.debug_mode = self.debug
        self.adapter.set_debug(self.debug)
        logger.info(f"Debug overlay {'on' if self.debug else 'off'}")

    # Frame

    def update(self, dt: float) -> None:
        """Advance one fixed step using the game's input handler."""
        frame = self.input.snapshot() if self.input else FrameInput()
        self.step(frame, dt)

    def step(self, frame: FrameInput, dt: float) -> list[RenderCommand]:
        """
        Advance one fixed step with explicit input.

        Args:
            frame: This step's input
            dt: Step length in seconds

        Returns:
            Every command applied during the step, in order
        """
        applied: list[RenderCommand] = []
        state = self.state

        # Timers
        self.scheduler.advance(dt * 1000.0)
        applied += self._apply(self.dialogue.take_pending())

        # Pointer
        for pos in frame.pointer_downs:
            target = self.adapter.hit_test(pos)
            applied += self._apply(self.dialogue.on_pointer_down(state, target))

        # Movement and proximity
        if state.mode is DialogueMode.CLOSED:
            applied += self._apply(self.resolver.apply(state.player, frame.held))
            self.movement.update(state, dt)
            events = self.tracker.update(state)
            applied += self._apply(self.dialogue.on_proximity(state, events))

        # Keys
        applied += self._apply(self.dialogue.handle_keys(state, frame))
        if frame.is_just_pressed(Action.DEBUG_TOGGLE):
            self.toggle_debug()

        self.adapter.update(state, dt)
        return applied

    def render(self, alpha: float) -> None:
        self.adapter.render(self.state, alpha)

    def _apply(self, commands: list[RenderCommand]) -> list[RenderCommand]:
        self.adapter.apply_all(commands)
        return commands
