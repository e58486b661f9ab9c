"""
Input action definitions.

Actions abstract raw keys into semantic actions. Game logic asks
for Action.INTERACT, never for pygame.K_e. This enables:
- Key rebinding
- Arrow keys and WASD merged into one movement action
- Headless tests that feed actions directly

Usage:
    if frame.is_held(Action.MOVE_LEFT):
        ...

    if frame.is_just_pressed(Action.INTERACT):
        ...
"""

from enum import Enum, auto

import pygame


class Action(Enum):
    """
    Semantic input actions.

    Each action can be mapped to multiple keys.
    """

    # Movement
    MOVE_UP = auto()
    MOVE_DOWN = auto()
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()

    # Dialogue
    INTERACT = auto()
    CANCEL = auto()

    # Debug
    DEBUG_TOGGLE = auto()


MOVEMENT_ACTIONS: frozenset[Action] = frozenset({
    Action.MOVE_UP,
    Action.MOVE_DOWN,
    Action.MOVE_LEFT,
    Action.MOVE_RIGHT,
})


# Default key bindings (can be customized)
DEFAULT_KEY_BINDINGS: dict[Action, list[int]] = {
    # Movement: arrow keys and WASD
    Action.MOVE_UP: [pygame.K_UP, pygame.K_w],
    Action.MOVE_DOWN: [pygame.K_DOWN, pygame.K_s],
    Action.MOVE_LEFT: [pygame.K_LEFT, pygame.K_a],
    Action.MOVE_RIGHT: [pygame.K_RIGHT, pygame.K_d],

    # Dialogue
    Action.INTERACT: [pygame.K_e],
    Action.CANCEL: [pygame.K_ESCAPE],

    # Debug
    Action.DEBUG_TOGGLE: [pygame.K_F3],
}
