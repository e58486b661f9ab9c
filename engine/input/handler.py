"""
Input handler with action-based abstraction.

Handles keyboard and pointer input, translating raw pygame events
into semantic Actions for game logic.

Key state is polled per frame: "held" is the set of actions whose
keys are down, "just pressed" is held-this-frame minus
held-last-frame. Hardware key repeat never produces a second
just-pressed edge.

Usage:
    # In the event loop
    input.process_event(event)

    # At the start of each fixed update
    input.update()
    frame = input.snapshot()

    if frame.is_just_pressed(Action.INTERACT):
        ...
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import pygame

from engine.core.actions import Action, DEFAULT_KEY_BINDINGS
from engine.core.events import EventBus


class InputEvent(Enum):
    """Input-specific events."""
    ACTION_PRESSED = "input.action_pressed"
    ACTION_RELEASED = "input.action_released"
    POINTER_DOWN = "input.pointer_down"


@dataclass
class MouseState:
    """Current mouse state."""
    x: int = 0
    y: int = 0
    buttons: tuple[bool, bool, bool] = (False, False, False)


@dataclass
class InputState:
    """Complete input state for current frame."""
    # Action states
    actions_pressed: set[Action] = field(default_factory=set)
    actions_just_pressed: set[Action] = field(default_factory=set)
    actions_just_released: set[Action] = field(default_factory=set)

    # Raw key states (for edge cases)
    keys_pressed: set[int] = field(default_factory=set)

    # Pointer presses collected since the last update (screen coords)
    pointer_downs: list[tuple[int, int]] = field(default_factory=list)

    # Mouse
    mouse: MouseState = field(default_factory=MouseState)


@dataclass(frozen=True)
class FrameInput:
    """
    Immutable view of one frame's input.

    This is what gameplay code consumes; it can be built directly in
    tests without pygame.
    """
    held: frozenset[Action] = frozenset()
    just_pressed: frozenset[Action] = frozenset()
    pointer_downs: tuple[tuple[int, int], ...] = ()

    def is_held(self, action: Action) -> bool:
        """Check if an action is held this frame."""
        return action in self.held

    def is_just_pressed(self, action: Action) -> bool:
        """Check if an action went down this frame."""
        return action in self.just_pressed


class InputHandler:
    """
    Handles keyboard and pointer processing.

    Translates raw pygame events into semantic Actions.
    """

    def __init__(self, event_bus: EventBus | None = None):
        self.event_bus = event_bus

        # Current and previous frame states
        self._state = InputState()
        self._prev_actions: set[Action] = set()
        self._pending_pointer: list[tuple[int, int]] = []

        # Key bindings (action -> list of keys)
        self._key_bindings = {
            action: keys.copy() for action, keys in DEFAULT_KEY_BINDINGS.items()
        }
        self._reverse_key_bindings: dict[int, list[Action]] = {}
        self._rebuild_reverse_bindings()

    def _rebuild_reverse_bindings(self) -> None:
        """Build reverse lookup: key -> actions."""
        self._reverse_key_bindings.clear()
        for action, keys in self._key_bindings.items():
            for key in keys:
                self._reverse_key_bindings.setdefault(key, []).append(action)

    # Public API

    def is_action_pressed(self, action: Action) -> bool:
        """Check if an action is currently held down."""
        return action in self._state.actions_pressed

    def is_action_just_pressed(self, action: Action) -> bool:
        """Check if an action was just pressed this frame."""
        return action in self._state.actions_just_pressed

    def is_action_just_released(self, action: Action) -> bool:
        """Check if an action was just released this frame."""
        return action in self._state.actions_just_released

    def is_key_pressed(self, key: int) -> bool:
        """Check if a raw key is pressed."""
        return key in self._state.keys_pressed

    def snapshot(self) -> FrameInput:
        """Freeze the current frame's input for gameplay code."""
        return FrameInput(
            held=frozenset(self._state.actions_pressed),
            just_pressed=frozenset(self._state.actions_just_pressed),
            pointer_downs=tuple(self._state.pointer_downs),
        )

    @property
    def mouse(self) -> MouseState:
        """Get current mouse state."""
        return self._state.mouse

    @property
    def mouse_pos(self) -> tuple[int, int]:
        """Get mouse position."""
        return (self._state.mouse.x, self._state.mouse.y)

    # Key binding management

    def bind_key(self, action: Action, key: int) -> None:
        """Add a key binding for an action."""
        keys = self._key_bindings.setdefault(action, [])
        if key not in keys:
            keys.append(key)
        self._rebuild_reverse_bindings()

    def unbind_key(self, action: Action, key: int) -> None:
        """Remove a key binding for an action."""
        if key in self._key_bindings.get(action, []):
            self._key_bindings[action].remove(key)
        self._rebuild_reverse_bindings()

    def clear_bindings(self, action: Action) -> None:
        """Clear all bindings for an action."""
        self._key_bindings[action] = []
        self._rebuild_reverse_bindings()

    def get_bindings(self, action: Action) -> list[int]:
        """Get all key bindings for an action."""
        return self._key_bindings.get(action, []).copy()

    # Frame update

    def process_event(self, event: pygame.event.Event) -> None:
        """Process a pygame event."""
        if event.type == pygame.KEYDOWN:
            self._on_key_down(event.key)

        elif event.type == pygame.KEYUP:
            self._on_key_up(event.key)

        elif event.type == pygame.MOUSEMOTION:
            self._state.mouse.x = event.pos[0]
            self._state.mouse.y = event.pos[1]

        elif event.type == pygame.MOUSEBUTTONDOWN:
            if event.button <= 3:
                buttons = list(self._state.mouse.buttons)
                buttons[event.button - 1] = True
                self._state.mouse.buttons = tuple(buttons)  # type: ignore
            if event.button == 1:
                self._pending_pointer.append((event.pos[0], event.pos[1]))

        elif event.type == pygame.MOUSEBUTTONUP:
            if event.button <= 3:
                buttons = list(self._state.mouse.buttons)
                buttons[event.button - 1] = False
                self._state.mouse.buttons = tuple(buttons)  # type: ignore

    def update(self) -> None:
        """
        Update input state for new frame.

        Call this at the start of each fixed update.
        """
        self._state.actions_just_pressed = self._state.actions_pressed - self._prev_actions
        self._state.actions_just_released = self._prev_actions - self._state.actions_pressed

        # Pointer presses belong to exactly one frame
        self._state.pointer_downs = self._pending_pointer
        self._pending_pointer = []

        if self.event_bus:
            for action in self._state.actions_just_pressed:
                self.event_bus.publish(InputEvent.ACTION_PRESSED, action=action)
            for action in self._state.actions_just_released:
                self.event_bus.publish(InputEvent.ACTION_RELEASED, action=action)
            for pos in self._state.pointer_downs:
                self.event_bus.publish(InputEvent.POINTER_DOWN, pos=pos)

        # Save current state for next frame
        self._prev_actions = self._state.actions_pressed.copy()

    def _on_key_down(self, key: int) -> None:
        """Handle key press."""
        self._state.keys_pressed.add(key)

        for action in self._reverse_key_bindings.get(key, []):
            self._state.actions_pressed.add(action)

    def _on_key_up(self, key: int) -> None:
        """Handle key release."""
        self._state.keys_pressed.discard(key)

        # Only release the action if no other bound key still holds it
        for action in self._reverse_key_bindings.get(key, []):
            still_pressed = any(
                other != key and other in self._state.keys_pressed
                for other in self._key_bindings.get(action, [])
            )
            if not still_pressed:
                self._state.actions_pressed.discard(action)
