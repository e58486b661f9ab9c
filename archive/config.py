"""
Gameplay configuration.

All tunables and on-screen strings live in one validated model so a
deployment can retheme the archive with a JSON file instead of code.

Usage:
    config = load_config("archive.json")   # missing file -> defaults
    config.player_speed
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class ArchiveConfig(BaseModel):
    """
    Tunables for the walkable archive.

    Attributes:
        player_speed: Axis-aligned speed in pixels/second
        diagonal_factor: Multiplier applied to both components when moving
            diagonally. 0.707 is a truncated 1/sqrt(2); kept as-is so
            diagonal speeds match existing recordings exactly.
        prompt_dwell_ms: How long the movement hint stays up after the
            welcome screen closes
        default_spawn: Spawn used when the map has no spawn object
        overhead_layers: Tile layers drawn above the player (canopies,
            roofs)
    """

    model_config = ConfigDict(extra='forbid', validate_assignment=True)

    # Movement
    player_speed: float = Field(default=160.0, gt=0)
    diagonal_factor: float = Field(default=0.707, gt=0, le=1)

    # Ambient prompt
    prompt_dwell_ms: float = Field(default=3000.0, ge=0)
    move_prompt: str = "Arrow keys or WASD to move"
    read_prompt: str = "Press E to read"

    # Dialogue
    default_text: str = "No text available."
    link_prefix: str = "Read more: "
    close_prompt: str = "Press ESC to close"

    # Welcome screen
    welcome_title: str = "Gregson Park"
    welcome_body: str = (
        "A walkable literary archive.\n"
        "Explore the park and stop wherever a story is waiting."
    )
    welcome_link_label: str = "Playable Pixel Newcastle"
    welcome_link_url: str = "https://playablepixel.example/"
    welcome_dismiss: str = "Click anywhere to begin"

    # Map
    default_spawn: tuple[float, float] = (400.0, 1000.0)
    trigger_layer: str = "Triggers"
    spawn_layer: str = "playerSpawn"
    collision_layer: str = "Collision"
    overhead_layers: list[str] = Field(default_factory=lambda: ["Top Level"])

    # Presentation
    loading_text: str = "Loading Gregson Park..."
    theme: str = "archive"


def load_config(path: Optional[str | Path] = None) -> ArchiveConfig:
    """
    Load configuration from a JSON file.

    Args:
        path: JSON file with any subset of ArchiveConfig fields

    Returns:
        Validated config; defaults when path is None or missing
    """
    if path is None:
        return ArchiveConfig()

    path = Path(path)
    if not path.exists():
        logger.warning(f"Config file not found: {path}, using defaults")
        return ArchiveConfig()

    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    config = ArchiveConfig.model_validate(data)
    logger.info(f"Loaded config from {path}")
    return config
