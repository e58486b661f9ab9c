"""
Mode components - the scene's modal state.
"""

from __future__ import annotations

from enum import Enum, auto


class DialogueMode(Enum):
    """
    Modal state of the scene.

    Exactly one is active. Movement input and proximity checks only
    run while CLOSED.
    """
    CLOSED = auto()
    WELCOME = auto()
    SHOWING_TRIGGER = auto()
