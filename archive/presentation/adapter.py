"""
Presentation adapter interface.

The adapter owns every visual: prompt text, dialogue panel, welcome
screen, the player sprite's animation and URL opening. Gameplay hands
it render commands and asks it two questions: can this image be
shown, and what did the pointer hit.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterable, Optional

from archive.presentation.commands import (
    DialogueContent,
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

if TYPE_CHECKING:
    from archive.state import SceneState

logger = logging.getLogger(__name__)


class PresentationAdapter(ABC):
    """
    Base class for presentation backends.

    Subclasses implement the show/hide primitives; apply() routes
    commands to them.
    """

    def apply(self, command: RenderCommand) -> None:
        """Apply a single render command."""
        if isinstance(command, ShowPrompt):
            self.show_prompt(command.text)
        elif isinstance(command, HidePrompt):
            self.hide_prompt()
        elif isinstance(command, ShowDialogue):
            self.show_dialogue(command.content)
        elif isinstance(command, HideDialogue):
            self.hide_dialogue()
        elif isinstance(command, ShowWelcome):
            self.show_welcome(command.content)
        elif isinstance(command, HideWelcome):
            self.hide_welcome()
        elif isinstance(command, PlayAnimation):
            self.play_animation(command.name)
        elif isinstance(command, OpenUrl):
            self.open_url(command.url)
        else:
            raise TypeError(f"Unknown render command: {command!r}")

    def apply_all(self, commands: Iterable[RenderCommand]) -> None:
        """Apply commands in order."""
        for command in commands:
            self.apply(command)

    # Primitives

    @abstractmethod
    def show_prompt(self, text: str) -> None:
        pass

    @abstractmethod
    def hide_prompt(self) -> None:
        pass

    @abstractmethod
    def show_dialogue(self, content: DialogueContent) -> None:
        pass

    @abstractmethod
    def hide_dialogue(self) -> None:
        pass

    @abstractmethod
    def show_welcome(self, content: WelcomeContent) -> None:
        pass

    @abstractmethod
    def hide_welcome(self) -> None:
        pass

    @abstractmethod
    def play_animation(self, name: str) -> None:
        pass

    @abstractmethod
    def open_url(self, url: str) -> None:
        pass

    # Queries

    @abstractmethod
    def resolve_image(self, name: str) -> Optional[str]:
        """
        Resolve an authored image reference to a registered asset key.

        Returns:
            The asset key, or None when no such image is registered
        """
        pass

    @abstractmethod
    def hit_test(self, pos: tuple[int, int]) -> PointerTarget:
        """Map a screen position to the clickable region under it."""
        pass

    def render(self, state: SceneState, alpha: float) -> None:
        """Draw the current frame. Headless adapters draw nothing."""
        pass

    def update(self, state: SceneState, dt: float) -> None:
        """Advance visual-only state such as sprite animation and the camera."""
        pass

    def set_debug(self, enabled: bool) -> None:
        """Toggle trigger and hitbox outlines."""
        pass

    def resize(self, width: int, height: int) -> None:
        pass


class RecordingAdapter(PresentationAdapter):
    """
    Headless adapter that records what would be on screen.

    Used by tests and by headless runs. Pointer hits are scripted by
    assigning `next_hit`; images resolve when listed in `images`.
    """

    def __init__(self, images: Optional[Iterable[str]] = None):
        self.images: set[str] = set(images or [])
        self.commands: list[RenderCommand] = []
        self.prompt: Optional[str] = None
        self.dialogue: Optional[DialogueContent] = None
        self.welcome: Optional[WelcomeContent] = None
        self.animation: Optional[str] = None
        self.opened_urls: list[str] = []
        self.next_hit: PointerTarget = PointerTarget.NONE

    def apply(self, command: RenderCommand) -> None:
        self.commands.append(command)
        super().apply(command)

    def show_prompt(self, text: str) -> None:
        self.prompt = text

    def hide_prompt(self) -> None:
        self.prompt = None

    def show_dialogue(self, content: DialogueContent) -> None:
        self.dialogue = content

    def hide_dialogue(self) -> None:
        self.dialogue = None

    def show_welcome(self, content: WelcomeContent) -> None:
        self.welcome = content

    def hide_welcome(self) -> None:
        self.welcome = None

    def play_animation(self, name: str) -> None:
        self.animation = name

    def open_url(self, url: str) -> None:
        logger.debug(f"Recorded URL open: {url}")
        self.opened_urls.append(url)

    def resolve_image(self, name: str) -> Optional[str]:
        if name in self.images:
            return name
        return None

    def hit_test(self, pos: tuple[int, int]) -> PointerTarget:
        return self.next_hit

    def clear(self) -> None:
        """Forget recorded commands (visible state is kept)."""
        self.commands.clear()
