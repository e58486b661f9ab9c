"""
UI Renderer for drawing panels and text.

Provides a simple API for overlay rendering on pygame surfaces.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Optional

import pygame

Color = Tuple[int, int, int] | Tuple[int, int, int, int]


def hex_color(value: int | str) -> Tuple[int, int, int]:
    """Convert 0xRRGGBB or "#rrggbb" to an RGB tuple."""
    if isinstance(value, str):
        value = int(value.lstrip('#'), 16)
    return ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)


@dataclass
class FontConfig:
    """Font configuration."""
    name: Optional[str] = None  # None = pygame default
    size: int = 16
    bold: bool = False
    italic: bool = False


class UIRenderer:
    """
    Renderer for UI elements.

    Draws directly to a pygame surface.

    Usage:
        renderer = UIRenderer(screen_surface)
        renderer.draw_rect(10, 10, 100, 50, (50, 50, 70))
        renderer.draw_text("Hello", 60, 35, color=(255, 255, 255), align="center")
    """

    def __init__(self, surface: pygame.Surface):
        self.surface = surface
        self._fonts: dict[tuple, pygame.font.Font] = {}
        self._default_font = FontConfig()

    def set_surface(self, surface: pygame.Surface) -> None:
        """Change the target surface."""
        self.surface = surface

    def get_font(self, config: Optional[FontConfig] = None) -> pygame.font.Font:
        """Get or create a font from config."""
        if config is None:
            config = self._default_font

        key = (config.name, config.size, config.bold, config.italic)

        if key not in self._fonts:
            if not pygame.font.get_init():
                pygame.font.init()
            if config.name:
                font = pygame.font.Font(config.name, config.size)
            else:
                font = pygame.font.SysFont(None, config.size)
            font.set_bold(config.bold)
            font.set_italic(config.italic)
            self._fonts[key] = font

        return self._fonts[key]

    def draw_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        color: Color,
    ) -> None:
        """Draw a filled rectangle."""
        rect = pygame.Rect(int(x), int(y), int(width), int(height))

        if len(color) == 4 and color[3] < 255:
            # Alpha blending needed
            temp = pygame.Surface((int(width), int(height)), pygame.SRCALPHA)
            temp.fill(color)
            self.surface.blit(temp, (int(x), int(y)))
        else:
            pygame.draw.rect(self.surface, color[:3], rect)

    def draw_rect_outline(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        color: Color,
        thickness: int = 1,
    ) -> None:
        """Draw a rectangle outline."""
        rect = pygame.Rect(int(x), int(y), int(width), int(height))
        pygame.draw.rect(self.surface, color[:3], rect, thickness)

    def draw_panel(
        self,
        center_x: float,
        center_y: float,
        width: float,
        height: float,
        fill: Color,
        border: Color,
        thickness: int = 2,
    ) -> pygame.Rect:
        """Draw a filled, outlined panel centred on a point."""
        x = center_x - width / 2
        y = center_y - height / 2
        self.draw_rect(x, y, width, height, fill)
        self.draw_rect_outline(x, y, width, height, border, thickness)
        return pygame.Rect(int(x), int(y), int(width), int(height))

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        color: Color = (255, 255, 255),
        font_config: Optional[FontConfig] = None,
        align: str = "left",
        max_width: Optional[float] = None,
    ) -> pygame.Rect:
        """
        Draw text.

        Args:
            text: Text to render, may contain newlines
            x, y: Position
            color: Text color (RGB or RGBA)
            font_config: Font settings
            align: "left", "center", or "right"
            max_width: Maximum width for text wrapping

        Returns:
            Bounding rect of rendered text
        """
        font = self.get_font(font_config)

        lines: list[str] = []
        for paragraph in text.split('\n'):
            if max_width and paragraph:
                lines.extend(self._wrap_text(paragraph, font, max_width))
            else:
                lines.append(paragraph)

        total_rect = pygame.Rect(int(x), int(y), 0, 0)
        line_height = font.get_height()

        for i, line in enumerate(lines):
            if not line:
                continue

            text_surface = font.render(line, True, color[:3])
            text_rect = text_surface.get_rect()

            if align == "center":
                text_rect.centerx = int(x)
            elif align == "right":
                text_rect.right = int(x)
            else:
                text_rect.left = int(x)

            text_rect.top = int(y) + i * line_height

            if len(color) == 4 and color[3] < 255:
                text_surface.set_alpha(color[3])

            self.surface.blit(text_surface, text_rect)
            total_rect = total_rect.union(text_rect)

        return total_rect

    def draw_surface(
        self,
        source: pygame.Surface,
        x: float,
        y: float,
        width: Optional[float] = None,
        height: Optional[float] = None,
    ) -> pygame.Rect:
        """Draw a pygame surface."""
        if width and height:
            source = pygame.transform.smoothscale(source, (int(width), int(height)))
        return self.surface.blit(source, (int(x), int(y)))

    def measure_text(
        self,
        text: str,
        font_config: Optional[FontConfig] = None,
    ) -> Tuple[int, int]:
        """Measure text dimensions."""
        font = self.get_font(font_config)
        return font.size(text)

    def _wrap_text(
        self,
        text: str,
        font: pygame.font.Font,
        max_width: float,
    ) -> list[str]:
        """Wrap text to fit within max_width."""
        words = text.split(' ')
        lines = []
        current_line = ""

        for word in words:
            test_line = current_line + (" " if current_line else "") + word

            if font.size(test_line)[0] <= max_width:
                current_line = test_line
            else:
                if current_line:
                    lines.append(current_line)
                current_line = word

        if current_line:
            lines.append(current_line)

        return lines if lines else [""]
