"""
Archive events published on the engine EventBus.

Observers (sound, analytics, debug overlays) subscribe to these
instead of reaching into the dialogue state machine.
"""

from enum import Enum, auto


class ArchiveEvent(Enum):
    """Gameplay events."""
    WELCOME_DISMISSED = auto()   # no data
    TRIGGER_ENTERED = auto()     # zone
    TRIGGER_EXITED = auto()      # zone
    DIALOGUE_OPENED = auto()     # zone, content
    DIALOGUE_CLOSED = auto()     # zone
    PROMPT_EXPIRED = auto()      # text
    URL_OPENED = auto()          # url, source ("welcome" or "dialogue")
