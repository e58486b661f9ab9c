"""
UI Theming system.

Provides consistent colors, fonts, and spacing for overlays.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Dict

from engine.ui.renderer import Color


@dataclass
class ColorPalette:
    """Color scheme for overlay panels and text."""

    # Backgrounds
    background: Color = (24, 24, 32)
    panel_fill: Color = (30, 30, 50)
    panel_border: Color = (100, 100, 140)
    overlay: Color = (0, 0, 0, 160)

    # Text
    text_primary: Color = (255, 255, 255)
    text_secondary: Color = (180, 180, 200)
    text_link: Color = (120, 160, 255)
    text_prompt: Color = (255, 255, 255)

    # Prompt backing
    prompt_fill: Color = (0, 0, 0, 170)


@dataclass
class FontSettings:
    """Font configuration for UI."""

    # Font family (None = system default)
    family: Optional[str] = None

    # Sizes
    size_small: int = 16
    size_normal: int = 20
    size_large: int = 24
    size_title: int = 40


@dataclass
class Spacing:
    """Spacing and sizing constants."""

    padding: float = 16
    border_width: int = 2
    line_gap: float = 8


@dataclass
class Theme:
    """
    Complete UI theme.

    Themes define the visual appearance of all overlay elements.
    """

    name: str = "default"
    colors: ColorPalette = field(default_factory=ColorPalette)
    fonts: FontSettings = field(default_factory=FontSettings)
    spacing: Spacing = field(default_factory=Spacing)


DEFAULT_THEME = Theme(name="default")


THEMES: Dict[str, Theme] = {
    "default": DEFAULT_THEME,
}


def get_theme(name: str) -> Theme:
    """Get a theme by name."""
    return THEMES.get(name, DEFAULT_THEME)


def register_theme(theme: Theme) -> None:
    """Register a custom theme."""
    THEMES[theme.name] = theme
