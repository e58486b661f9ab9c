"""
Dialogue controller - the modal state machine.

States:
    WELCOME           -> CLOSED            pointer down on the welcome panel
    CLOSED            -> SHOWING_TRIGGER   interact pressed with a current trigger
    SHOWING_TRIGGER   -> CLOSED            cancel pressed

Every transition is a method that mutates SceneState and returns the
render commands the presentation adapter should apply. Commands
produced by timers are collected and handed out by take_pending().
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Iterable, Optional

from engine.core.actions import Action
from engine.core.events import EventBus
from engine.core.timers import Scheduler
from engine.input.handler import FrameInput
from archive.components import DialogueMode, TriggerZone
from archive.config import ArchiveConfig
from archive.events import ArchiveEvent
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
from archive.systems.proximity import ProximityEvent, ProximityEventType

if TYPE_CHECKING:
    from archive.state import SceneState

logger = logging.getLogger(__name__)

ImageResolver = Callable[[str], Optional[str]]


class DialogueController:
    """
    Governs the welcome screen, trigger dialogues and the ambient prompt.

    Usage:
        controller = DialogueController(config, scheduler, adapter.resolve_image)
        adapter.apply_all(controller.start(state))

        # each frame
        adapter.apply_all(controller.take_pending())
        adapter.apply_all(controller.on_pointer_down(state, target))
        adapter.apply_all(controller.on_proximity(state, events))
        adapter.apply_all(controller.handle_keys(state, frame))
    """

    def __init__(
        self,
        config: ArchiveConfig,
        scheduler: Scheduler,
        resolve_image: Optional[ImageResolver] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self.config = config
        self.scheduler = scheduler
        self.resolve_image = resolve_image or (lambda name: None)
        self.event_bus = event_bus

        self._pending: list[RenderCommand] = []

    # Lifecycle

    def start(self, state: SceneState) -> list[RenderCommand]:
        """Enter the initial WELCOME state."""
        state.mode = DialogueMode.WELCOME
        state.open_trigger = None
        logger.info("Showing welcome screen")
        return [ShowWelcome(self.welcome_content())]

    def take_pending(self) -> list[RenderCommand]:
        """Commands produced by timers since the last call."""
        pending, self._pending = self._pending, []
        return pending

    # Pointer

    def on_pointer_down(
        self,
        state: SceneState,
        target: PointerTarget,
    ) -> list[RenderCommand]:
        """
        React to a pointer press on a clickable region.

        Args:
            state: Scene state
            target: Region reported by the adapter's hit test
        """
        if state.mode is DialogueMode.WELCOME:
            if target is PointerTarget.WELCOME_LINK:
                return self._open_url(self.config.welcome_link_url, "welcome")
            if target is PointerTarget.WELCOME_PANEL:
                return self.dismiss_welcome(state)
            return []

        if state.mode is DialogueMode.SHOWING_TRIGGER:
            if target is PointerTarget.DIALOGUE_LINK and state.open_trigger:
                url = state.open_trigger.url
                if url:
                    return self._open_url(url, "dialogue")
            return []

        return []

    def dismiss_welcome(self, state: SceneState) -> list[RenderCommand]:
        """WELCOME -> CLOSED, then show the movement hint for a while."""
        if state.mode is not DialogueMode.WELCOME:
            return []

        state.mode = DialogueMode.CLOSED
        logger.info("Welcome screen dismissed")
        self._publish(ArchiveEvent.WELCOME_DISMISSED)

        commands: list[RenderCommand] = [HideWelcome()]
        commands.extend(self._show_prompt(state, self.config.move_prompt))
        self._arm_prompt_hide(state)
        return commands

    # Proximity

    def on_proximity(
        self,
        state: SceneState,
        events: Iterable[ProximityEvent],
    ) -> list[RenderCommand]:
        """Show or hide the read prompt as the current trigger changes."""
        commands: list[RenderCommand] = []
        for event in events:
            if event.type is ProximityEventType.EXIT:
                self._publish(ArchiveEvent.TRIGGER_EXITED, zone=event.zone)
                commands.extend(self._hide_prompt(state))
            else:
                self._publish(ArchiveEvent.TRIGGER_ENTERED, zone=event.zone)
                commands.extend(self._show_prompt(state, self.config.read_prompt))
        return commands

    # Keys

    def handle_keys(self, state: SceneState, frame: FrameInput) -> list[RenderCommand]:
        """Edge-triggered interact/cancel handling."""
        if state.mode is DialogueMode.CLOSED:
            if frame.is_just_pressed(Action.INTERACT) and state.current_trigger:
                return self.open_dialogue(state, state.current_trigger)

        elif state.mode is DialogueMode.SHOWING_TRIGGER:
            if frame.is_just_pressed(Action.CANCEL):
                return self.close_dialogue(state)

        return []

    def open_dialogue(self, state: SceneState, zone: TriggerZone) -> list[RenderCommand]:
        """CLOSED -> SHOWING_TRIGGER(zone)."""
        if state.mode is not DialogueMode.CLOSED:
            return []

        content = self.resolve_content(zone)
        state.mode = DialogueMode.SHOWING_TRIGGER
        state.open_trigger = zone

        commands: list[RenderCommand] = []
        state.player.stop()
        idle = f"idle-{state.player.facing.value}"
        if state.player.animation != idle:
            state.player.animation = idle
            commands.append(PlayAnimation(idle))

        commands.extend(self._hide_prompt(state))
        commands.append(ShowDialogue(content))

        logger.info(f"Opened dialogue for '{zone.name}' ({content.layout.name.lower()})")
        self._publish(ArchiveEvent.DIALOGUE_OPENED, zone=zone, content=content)
        return commands

    def close_dialogue(self, state: SceneState) -> list[RenderCommand]:
        """SHOWING_TRIGGER -> CLOSED."""
        if state.mode is not DialogueMode.SHOWING_TRIGGER:
            return []

        zone = state.open_trigger
        state.mode = DialogueMode.CLOSED
        state.open_trigger = None

        commands: list[RenderCommand] = [HideDialogue()]
        if state.current_trigger is not None:
            commands.extend(self._show_prompt(state, self.config.read_prompt))

        logger.info("Closed dialogue")
        self._publish(ArchiveEvent.DIALOGUE_CLOSED, zone=zone)
        return commands

    # Content

    def resolve_content(self, zone: TriggerZone) -> DialogueContent:
        """
        Build dialogue content from a zone's properties.

        Missing text falls back to the configured placeholder. A missing
        url hides the link. An image that the adapter cannot resolve is
        treated as absent and the plain layout is used.
        """
        text = zone.text or self.config.default_text
        url = zone.url
        link_label = f"{self.config.link_prefix}{url}" if url else None

        image_key = None
        if zone.image:
            image_key = self.resolve_image(zone.image)
            if image_key is None:
                logger.debug(f"Image '{zone.image}' for '{zone.name}' not found, using plain layout")

        if image_key is not None:
            return DialogueContent(
                text=text,
                close_prompt=self.config.close_prompt,
                layout=DialogueLayout.ILLUSTRATED,
                link_label=link_label,
                url=url,
                image=image_key,
                caption=zone.name,
            )

        return DialogueContent(
            text=text,
            close_prompt=self.config.close_prompt,
            layout=DialogueLayout.PLAIN,
            link_label=link_label,
            url=url,
        )

    def welcome_content(self) -> WelcomeContent:
        """Fixed welcome screen text."""
        return WelcomeContent(
            title=self.config.welcome_title,
            body=self.config.welcome_body,
            link_label=self.config.welcome_link_label,
            url=self.config.welcome_link_url,
            dismiss_hint=self.config.welcome_dismiss,
        )

    # Ambient prompt

    def _show_prompt(self, state: SceneState, text: str) -> list[RenderCommand]:
        state.prompt_text = text
        state.prompt_serial += 1
        return [ShowPrompt(text)]

    def _hide_prompt(self, state: SceneState) -> list[RenderCommand]:
        state.prompt_text = None
        state.prompt_serial += 1
        return [HidePrompt()]

    def _arm_prompt_hide(self, state: SceneState) -> None:
        """
        Schedule the one-shot hide of the movement hint.

        The guard runs at fire time: the hint is only hidden if no
        dialogue is open, no trigger is current, and nothing has shown
        or hidden the prompt since it was armed.
        """
        serial = state.prompt_serial

        def guard() -> bool:
            return (
                state.mode is DialogueMode.CLOSED
                and state.current_trigger is None
                and state.prompt_serial == serial
            )

        def fire() -> None:
            text = state.prompt_text
            self._pending.extend(self._hide_prompt(state))
            self._publish(ArchiveEvent.PROMPT_EXPIRED, text=text)

        self.scheduler.schedule(
            self.config.prompt_dwell_ms,
            fire,
            guard=guard,
            name="hide-move-prompt",
        )

    # Helpers

    def _open_url(self, url: str, source: str) -> list[RenderCommand]:
        logger.info(f"Opening {url} ({source})")
        self._publish(ArchiveEvent.URL_OPENED, url=url, source=source)
        return [OpenUrl(url)]

    def _publish(self, event_type: ArchiveEvent, **data) -> None:
        if self.event_bus:
            self.event_bus.publish(event_type, **data)
