"""
UI drawing for overlays: panels, wrapped text and themes.

Quick Start:
    from engine.ui import UIRenderer, FontConfig, get_theme

    theme = get_theme("default")
    ui = UIRenderer(screen)
    ui.draw_panel(400, 500, 700, 150, theme.colors.panel_fill, theme.colors.panel_border)
    ui.draw_text("Hello", 400, 480, align="center", max_width=650)
"""

from engine.ui.renderer import UIRenderer, FontConfig, Color, hex_color
from engine.ui.theme import (
    Theme,
    ColorPalette,
    FontSettings,
    Spacing,
    DEFAULT_THEME,
    get_theme,
    register_theme,
)

__all__ = [
    "UIRenderer",
    "FontConfig",
    "Color",
    "hex_color",
    "Theme",
    "ColorPalette",
    "FontSettings",
    "Spacing",
    "DEFAULT_THEME",
    "get_theme",
    "register_theme",
]
