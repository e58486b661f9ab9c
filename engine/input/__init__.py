"""Input handling module."""

from engine.input.handler import (
    InputHandler,
    InputState,
    MouseState,
    InputEvent,
    FrameInput,
)

__all__ = [
    "InputHandler",
    "InputState",
    "MouseState",
    "InputEvent",
    "FrameInput",
]
