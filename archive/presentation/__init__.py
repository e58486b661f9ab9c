"""
Presentation - render commands and the adapters that apply them.

The pygame adapter is imported from archive.presentation.pygame_adapter
directly so headless code never needs a display.
"""

from archive.presentation.commands import (
    DialogueContent,
    DialogueLayout,
    HideDialogue,
    HidePrompt,
    HideWelcome,
    OpenUrl,
    PlayAnimation,
    PointerTarget,
    RenderCommand,
    ShowDialogue,
    ShowPrompt,
    ShowWelcome,
    WelcomeContent,
)
from archive.presentation.adapter import PresentationAdapter, RecordingAdapter

__all__ = [
    "DialogueContent",
    "DialogueLayout",
    "HideDialogue",
    "HidePrompt",
    "HideWelcome",
    "OpenUrl",
    "PlayAnimation",
    "PointerTarget",
    "RenderCommand",
    "ShowDialogue",
    "ShowPrompt",
    "ShowWelcome",
    "WelcomeContent",
    "PresentationAdapter",
    "RecordingAdapter",
]
