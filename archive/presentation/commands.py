"""
Render commands.

Gameplay code never touches visuals directly. Every state transition
returns a list of these small declarative commands, and the
presentation adapter applies them in order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Union


class DialogueLayout(Enum):
    """Dialogue panel layouts."""
    PLAIN = auto()        # Centred text, link and close prompt
    ILLUSTRATED = auto()  # Image with caption beside the text


class PointerTarget(Enum):
    """Clickable regions the adapter can report."""
    NONE = auto()
    WELCOME_PANEL = auto()
    WELCOME_LINK = auto()
    DIALOGUE_LINK = auto()


@dataclass(frozen=True)
class DialogueContent:
    """
    Resolved content of a trigger dialogue.

    Attributes:
        text: Body text (already defaulted)
        close_prompt: Hint for closing the panel
        layout: Which panel variant to use
        link_label: Visible link text, None hides the link
        url: Link target
        image: Resolved asset key for the illustrated layout
        caption: Caption under the image (the trigger name)
    """
    text: str
    close_prompt: str
    layout: DialogueLayout = DialogueLayout.PLAIN
    link_label: Optional[str] = None
    url: Optional[str] = None
    image: Optional[str] = None
    caption: Optional[str] = None

    @property
    def has_link(self) -> bool:
        return self.url is not None


@dataclass(frozen=True)
class WelcomeContent:
    """Fixed text of the welcome screen."""
    title: str
    body: str
    link_label: str
    url: str
    dismiss_hint: str


@dataclass(frozen=True)
class ShowPrompt:
    text: str


@dataclass(frozen=True)
class HidePrompt:
    pass


@dataclass(frozen=True)
class ShowDialogue:
    content: DialogueContent


@dataclass(frozen=True)
class HideDialogue:
    pass


@dataclass(frozen=True)
class ShowWelcome:
    content: WelcomeContent


@dataclass(frozen=True)
class HideWelcome:
    pass


@dataclass(frozen=True)
class PlayAnimation:
    name: str


@dataclass(frozen=True)
class OpenUrl:
    """Open a URL in a new browsing context."""
    url: str


RenderCommand = Union[
    ShowPrompt,
    HidePrompt,
    ShowDialogue,
    HideDialogue,
    ShowWelcome,
    HideWelcome,
    PlayAnimation,
    OpenUrl,
]
