"""
Core engine module.

Exports:
- Game, GameConfig: Main game class and configuration
- Scene: Scene base class
- Component, FrozenComponent: Data model base
- EventBus, Event, EngineEvent: Event system
- Scheduler, ScheduledTask: Frame-driven timers
- Action: Input actions
"""

from engine.core.game import Game, GameConfig
from engine.core.scene import Scene
from engine.core.component import Component, FrozenComponent
from engine.core.events import EventBus, Event, EngineEvent
from engine.core.timers import Scheduler, ScheduledTask
from engine.core.actions import Action

__all__ = [
    # Game
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
    "Action",
]
