"""
Proximity - which trigger zone the player is standing in.

SpatialIndex keeps every zone in registration order and answers
overlap queries. ProximityTracker re-evaluates the player's box once
per frame and reports enter/exit transitions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Iterable, Iterator, Optional

from archive.components import AABB, TriggerZone

if TYPE_CHECKING:
    from archive.state import SceneState

logger = logging.getLogger(__name__)


class SpatialIndex:
    """
    Flat list of trigger zones.

    Maps hold tens of zones, so a linear scan is enough. Iteration
    order is registration order and is part of the contract: see
    last_overlapping().
    """

    def __init__(self, zones: Iterable[TriggerZone] = ()):
        self._zones: list[TriggerZone] = []
        for zone in zones:
            self.register(zone)

    def register(self, zone: TriggerZone) -> None:
        """Add a zone after all previously registered zones."""
        self._zones.append(zone)

    def clear(self) -> None:
        self._zones.clear()

    @property
    def zones(self) -> list[TriggerZone]:
        """Registered zones, in registration order."""
        return list(self._zones)

    def __len__(self) -> int:
        return len(self._zones)

    def __iter__(self) -> Iterator[TriggerZone]:
        return iter(self._zones)

    def overlapping(self, box: AABB) -> list[TriggerZone]:
        """All zones whose bounds intersect box, in registration order."""
        return [zone for zone in self._zones if zone.bounds.overlaps(box)]

    def last_overlapping(self, box: AABB) -> Optional[TriggerZone]:
        """
        The zone that becomes current for this box.

        When several zones overlap the box, the one registered last
        wins. Well-formed maps never overlap zones, but the rule keeps
        the outcome deterministic when they do.
        """
        found: Optional[TriggerZone] = None
        for zone in self._zones:
            if zone.bounds.overlaps(box):
                found = zone
        return found


class ProximityEventType(Enum):
    """Proximity transitions."""
    ENTER = auto()
    EXIT = auto()


@dataclass(frozen=True)
class ProximityEvent:
    """
    A change of current trigger.

    Attributes:
        type: ENTER or EXIT
        zone: Zone entered, or zone left
    """
    type: ProximityEventType
    zone: TriggerZone


class ProximityTracker:
    """
    Tracks the current trigger from frame to frame.

    Transitions:
        None -> A   : ENTER(A)
        A -> None   : EXIT(A)
        A -> B      : EXIT(A), ENTER(B) in the same frame
    """

    def update(self, state: SceneState) -> list[ProximityEvent]:
        """
        Re-evaluate overlap for this frame.

        Does nothing while a modal is open; the current trigger stays
        whatever it was when the modal opened.

        Returns:
            Transition events, in the order they should be handled
        """
        if state.is_modal:
            return []

        nearest = state.index.last_overlapping(state.player_bounds())
        previous = state.current_trigger

        if nearest is previous:
            return []

        events: list[ProximityEvent] = []
        if previous is not None:
            logger.debug(f"Left trigger '{previous.name}' ({previous.id})")
            events.append(ProximityEvent(ProximityEventType.EXIT, previous))
        if nearest is not None:
            logger.debug(f"Entered trigger '{nearest.name}' ({nearest.id})")
            events.append(ProximityEvent(ProximityEventType.ENTER, nearest))

        state.current_trigger = nearest
        return events
