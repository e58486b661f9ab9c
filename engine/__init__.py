"""
Engine

A small frame-driven 2D engine: fixed timestep loop, action-based
input, typed events and one-shot timers on top of pygame.

Quick Start:
    from engine.core import Game, GameConfig, Scene

    class MyScene(Scene):
        def update(self, dt: float) -> None:
            pass

        def render(self, alpha: float) -> None:
            pass

    config = GameConfig(title="My Game", width=800, height=600)
    game = Game(config)
    game.set_scene(MyScene(game))
    game.run()
"""

__version__ = "0.1.0"

from engine.core import (
    Game,
    GameConfig,
    Scene,
    Component,
    FrozenComponent,
    EventBus,
    Event,
    EngineEvent,
    Scheduler,
    ScheduledTask,
    Action,
)

from engine.input import InputHandler, FrameInput

__all__ = [
    # Core
    "Game",
    "GameConfig",
    "Scene",
    # Data
    "Component",
    "FrozenComponent",
    # Events
    "EventBus",
    "Event",
    "EngineEvent",
    # Timers
    "Scheduler",
    "ScheduledTask",
    # Input
    "InputHandler",
    "FrameInput",
    "Action",
]
