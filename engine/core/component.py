"""
Component base class for data-only models.

Components are plain data containers. Logic that mutates scene state
lives in the systems and controllers, which keeps:
- Serialization trivial (maps and configs round-trip through JSON)
- Validation in one place
- Testing easier

Usage:
    class Hitbox(Component):
        width: float = 32.0
        height: float = 64.0
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Component(BaseModel):
    """
    Base class for all data components.

    Uses Pydantic for:
    - Automatic validation
    - JSON serialization
    - Type hints
    - Default values
    """

    model_config = ConfigDict(
        # Allow arbitrary types (for references)
        arbitrary_types_allowed=True,
        # Validate on assignment
        validate_assignment=True,
        # Reject unknown fields so typos in data files surface early
        extra='forbid',
    )


class FrozenComponent(Component):
    """
    Immutable component.

    Used for data that is fixed once loaded (trigger zones, bounds).
    Frozen models are hashable and raise on assignment.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        extra='forbid',
        frozen=True,
    )
