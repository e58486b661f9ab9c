"""
Pygame presentation - draws the map, player and overlays.

Screen layout for an 800x600 window (positions scale with the window):
    loading     progress bar centred on screen while assets load
    prompt      centred, 50px above the bottom edge
    dialogue    700x150 panel centred 100px above the bottom edge
                (illustrated layout: 700x260, image on the left)
    welcome     dimmed screen with a centred 600x320 panel

Draw order: background, tile layers, player, overhead tile layers,
then the overlays.
"""

from __future__ import annotations

import logging
import math
import webbrowser
from pathlib import Path
from typing import TYPE_CHECKING, Optional

import pygame

from engine.graphics.animation import AnimationClip, AnimationPlayer, AnimationSet, LoopMode
from engine.graphics.camera import Camera, CameraBounds
from engine.graphics.texture import ImageCache, SpriteSheet, image_files
from engine.ui.renderer import FontConfig, UIRenderer, hex_color
from engine.ui.theme import ColorPalette, FontSettings, Spacing, Theme, get_theme, register_theme
from archive.components import Direction
from archive.config import ArchiveConfig
from archive.presentation.adapter import PresentationAdapter
from archive.presentation.commands import (
    DialogueContent,
    DialogueLayout,
    PointerTarget,
    WelcomeContent,
)

if TYPE_CHECKING:
    from archive.state import SceneState
    from archive.world.map import ArchiveMap, MapLayer, MapTileset

logger = logging.getLogger(__name__)


ARCHIVE_THEME = Theme(
    name="archive",
    colors=ColorPalette(
        background=(12, 12, 20),
        panel_fill=(*hex_color(0x1a1a2e), 242),
        panel_border=hex_color(0x8b7355),
        overlay=(0, 0, 0, 180),
        text_primary=hex_color("#e8d5b7"),
        text_secondary=hex_color("#888888"),
        text_link=hex_color("#6b9bd1"),
        text_prompt=hex_color("#e8d5b7"),
        prompt_fill=hex_color(0x1a1a2e),
    ),
    fonts=FontSettings(size_small=16, size_normal=20, size_large=22, size_title=40),
    spacing=Spacing(padding=10, border_width=3, line_gap=6),
)
register_theme(ARCHIVE_THEME)

# Player sprite sheet: 8 columns of 32x64 frames, one row per facing
SHEET_FRAME_SIZE = (32, 64)
SHEET_COLUMNS = 8
SHEET_ROWS = (Direction.DOWN, Direction.UP, Direction.RIGHT, Direction.LEFT)
WALK_FRAME_RATE = 10.0

PLAYER_SHEET = "player"
BACKGROUND_IMAGE = "background"

# The camera closes 10% of the gap to the player every 60Hz frame
CAMERA_LERP = 0.1
CAMERA_FOLLOW_RATE = -math.log(1 - CAMERA_LERP) * 60

LOADING_BOX = hex_color(0x222222) + (204,)
LOADING_TEXT = (255, 255, 255)


def build_player_animations(columns: int = SHEET_COLUMNS) -> AnimationSet:
    """Walk and idle clips for every facing."""
    animations = AnimationSet()
    for row, direction in enumerate(SHEET_ROWS):
        start = row * columns
        animations.add_clip(AnimationClip.from_range(
            f"walk-{direction.value}", start, start + columns - 1,
            frame_rate=WALK_FRAME_RATE,
        ))
        animations.add_clip(AnimationClip.from_range(
            f"idle-{direction.value}", start, start,
            loop_mode=LoopMode.ONCE,
        ))
    return animations


class PygameAdapter(PresentationAdapter):
    """
    Draws the archive to a pygame surface.

    Assets are looked up under assets_dir:
        images/   dialogue illustrations, keyed by file stem
        tiles/    tileset images, matched by tileset name or file name
        sprites/  player.png sprite sheet
    A pre-rendered background.png in any of these is drawn under the
    tile layers.
    """

    def __init__(
        self,
        screen: pygame.Surface,
        game_map: Optional[ArchiveMap] = None,
        assets_dir: Optional[str | Path] = None,
        theme: Optional[Theme] = None,
        debug: bool = False,
        config: Optional[ArchiveConfig] = None,
    ):
        self.screen = screen
        self.ui = UIRenderer(screen)
        self.game_map = game_map
        self.config = config or (game_map.config if game_map is not None else ArchiveConfig())
        self.theme = theme or get_theme(self.config.theme)
        self.debug = debug

        self.images = ImageCache()
        self.camera = Camera(*screen.get_size())
        self.camera.follow_lerp = CAMERA_FOLLOW_RATE
        self._camera_placed = False
        self.animations = AnimationPlayer(build_player_animations())
        self.sheet: Optional[SpriteSheet] = None

        # What is on screen
        self.prompt: Optional[str] = None
        self.dialogue: Optional[DialogueContent] = None
        self.welcome: Optional[WelcomeContent] = None

        # Clickable regions, refreshed every render
        self._welcome_link_rect: Optional[pygame.Rect] = None
        self._dialogue_link_rect: Optional[pygame.Rect] = None

        if assets_dir is not None:
            self.load_assets(assets_dir)

    # Assets

    def load_assets(self, assets_dir: str | Path) -> None:
        """Load images, tilesets and the player sheet behind a progress screen."""
        assets_dir = Path(assets_dir)
        entries: list[tuple[Path, Optional[str]]] = []
        for sub in ("images", "tiles", "sprites"):
            entries += [(path, None) for path in image_files(assets_dir / sub)]

        if self.game_map is not None and self.game_map.file_path is not None:
            found = {path.name for path, _ in entries} | {path.stem for path, _ in entries}
            map_dir = self.game_map.file_path.parent
            for tileset in self.game_map.tilesets:
                if not tileset.image_path:
                    continue
                if tileset.name in found or Path(tileset.image_path).name in found:
                    continue
                path = map_dir / tileset.image_path
                if path.exists():
                    entries.append((path, tileset.name or None))
                else:
                    logger.warning(f"Tileset image not found: {path}")

        self._draw_loading(0.0)
        self.images.load_all(entries, on_progress=self._draw_loading)

        sheet = self.images.get(PLAYER_SHEET)
        if sheet is not None:
            self.sheet = SpriteSheet(sheet, *SHEET_FRAME_SIZE)
        else:
            logger.warning(f"No '{PLAYER_SHEET}' sprite sheet in {assets_dir}, drawing a placeholder")

        logger.info(f"Loaded {len(self.images)} images from {assets_dir}")

    def _tileset_surface(self, tileset: MapTileset) -> Optional[pygame.Surface]:
        surface = self.images.get(tileset.name) if tileset.name else None
        if surface is None and tileset.image_path:
            surface = self.images.get(Path(tileset.image_path).name)
        return surface

    def _draw_loading(self, progress: float) -> None:
        """Progress screen shown while assets load."""
        cx = self.screen.get_width() / 2
        cy = self.screen.get_height() / 2

        self.screen.fill((0, 0, 0))
        self.ui.draw_text(self.config.loading_text, cx, cy - 60, LOADING_TEXT,
                          FontConfig(name=None, size=20), align="center")
        self.ui.draw_rect(cx - 160, cy - 30, 320, 50, LOADING_BOX)
        self.ui.draw_rect(cx - 150, cy - 20, 300 * progress, 30, self.theme.colors.panel_border)

        if pygame.display.get_surface() is not None:
            pygame.event.pump()
            pygame.display.flip()

    # Primitives

    def show_prompt(self, text: str) -> None:
        self.prompt = text

    def hide_prompt(self) -> None:
        self.prompt = None

    def show_dialogue(self, content: DialogueContent) -> None:
        self.dialogue = content

    def hide_dialogue(self) -> None:
        self.dialogue = None
        self._dialogue_link_rect = None

    def show_welcome(self, content: WelcomeContent) -> None:
        self.welcome = content

    def hide_welcome(self) -> None:
        self.welcome = None
        self._welcome_link_rect = None

    def play_animation(self, name: str) -> None:
        if not self.animations.play(name):
            logger.warning(f"Unknown animation '{name}'")

    def open_url(self, url: str) -> None:
        try:
            webbrowser.open_new_tab(url)
        except webbrowser.Error as e:
            logger.warning(f"Could not open {url}: {e}")

    def set_debug(self, enabled: bool) -> None:
        self.debug = enabled

    def resize(self, width: int, height: int) -> None:
        self.screen = pygame.display.get_surface() or self.screen
        self.ui.set_surface(self.screen)
        self.camera.resize(width, height)

    # Queries

    def resolve_image(self, name: str) -> Optional[str]:
        return self.images.resolve(name)

    def hit_test(self, pos: tuple[int, int]) -> PointerTarget:
        if self.welcome is not None:
            if self._welcome_link_rect and self._welcome_link_rect.collidepoint(pos):
                return PointerTarget.WELCOME_LINK
            return PointerTarget.WELCOME_PANEL

        if self.dialogue is not None and self.dialogue.has_link:
            if self._dialogue_link_rect and self._dialogue_link_rect.collidepoint(pos):
                return PointerTarget.DIALOGUE_LINK

        return PointerTarget.NONE

    # Frame

    def update(self, state: SceneState, dt: float) -> None:
        self.animations.update(dt)
        self._track_player(state, dt)

    def _track_player(self, state: SceneState, dt: float) -> None:
        """Ease the camera toward the player; the first call snaps."""
        bounds = state.world_bounds
        if bounds is not None:
            self.camera.bounds = CameraBounds(bounds.left, bounds.top, bounds.right, bounds.bottom)

        if not self._camera_placed:
            self.camera.set_center(state.player.x, state.player.y)
            self._camera_placed = True
            return

        self.camera.follow(state.player.x, state.player.y)
        self.camera.update(dt)

    def render(self, state: SceneState, alpha: float) -> None:
        if not self._camera_placed:
            self._track_player(state, 0.0)

        self.screen.fill(self.theme.colors.background[:3])
        self._draw_background()

        if self.game_map is not None:
            self._draw_layers(self.game_map.drawable_layers())
        if self.debug:
            self._draw_debug(state)
        self._draw_player(state)
        if self.game_map is not None:
            self._draw_layers(self.game_map.drawable_layers(overhead=True))

        if self.prompt:
            self._draw_prompt(self.prompt)
        if self.dialogue is not None:
            if self.dialogue.layout is DialogueLayout.ILLUSTRATED:
                self._draw_illustrated_dialogue(self.dialogue)
            else:
                self._draw_plain_dialogue(self.dialogue)
        if self.welcome is not None:
            self._draw_welcome(self.welcome)

    # World

    def _draw_background(self) -> None:
        background = self.images.get(BACKGROUND_IMAGE)
        if background is not None:
            self.screen.blit(background, self.camera.world_to_screen(0, 0))

    def _draw_layers(self, layers: list[MapLayer]) -> None:
        game_map = self.game_map
        if not layers or not game_map.tilesets:
            return

        tw, th = game_map.tile_width, game_map.tile_height
        first_x = max(0, int(self.camera.x // tw))
        first_y = max(0, int(self.camera.y // th))
        last_x = min(game_map.width, int((self.camera.x + self.camera.view_width) // tw) + 1)
        last_y = min(game_map.height, int((self.camera.y + self.camera.view_height) // th) + 1)

        for layer in layers:
            for ty in range(first_y, last_y):
                for tx in range(first_x, last_x):
                    idx = ty * layer.width + tx
                    if idx >= len(layer.data) or layer.data[idx] <= 0:
                        continue
                    tileset, local_id = game_map.get_tile_local_id(layer.data[idx])
                    if tileset is None:
                        continue
                    surface = self._tileset_surface(tileset)
                    if surface is None:
                        continue
                    # Tiles taller than the grid are anchored at the bottom
                    sx, sy = self.camera.world_to_screen(tx * tw, ty * th + th - tileset.tile_height)
                    area = pygame.Rect(tileset.get_tile_region(local_id))
                    self.screen.blit(surface, (int(sx), int(sy)), area)

    def _draw_player(self, state: SceneState) -> None:
        box = state.player_bounds()
        sx, sy = self.camera.world_to_screen(box.x, box.y)

        if self.sheet is not None:
            try:
                frame = self.sheet.get_frame(self.animations.current_frame_index)
            except IndexError:
                frame = None
            if frame is not None:
                self.screen.blit(frame, (int(sx), int(sy)))
                return

        self.ui.draw_rect(sx, sy, box.width, box.height, self.theme.colors.panel_border)

    def _draw_debug(self, state: SceneState) -> None:
        for zone in state.index:
            b = zone.bounds
            sx, sy = self.camera.world_to_screen(b.x, b.y)
            color = (0, 255, 0) if zone is state.current_trigger else (255, 255, 0)
            self.ui.draw_rect(sx, sy, b.width, b.height, (*color, 60))
            self.ui.draw_rect_outline(sx, sy, b.width, b.height, color)

        body = state.hitbox.body_bounds(state.player.x, state.player.y)
        sx, sy = self.camera.world_to_screen(body.x, body.y)
        self.ui.draw_rect_outline(sx, sy, body.width, body.height, (255, 0, 0))

    # Overlays

    def _font(self, size: int, italic: bool = False) -> FontConfig:
        return FontConfig(name=self.theme.fonts.family, size=size, italic=italic)

    def _draw_prompt(self, text: str) -> None:
        colors = self.theme.colors
        pad = self.theme.spacing.padding
        font = self._font(self.theme.fonts.size_normal)
        width, height = self.ui.measure_text(text, font)

        cx = self.screen.get_width() / 2
        cy = self.screen.get_height() - 50
        self.ui.draw_rect(
            cx - width / 2 - pad, cy - height / 2 - pad / 2,
            width + pad * 2, height + pad,
            colors.prompt_fill,
        )
        self.ui.draw_text(text, cx, cy - height / 2, colors.text_prompt, font, align="center")

    def _draw_plain_dialogue(self, content: DialogueContent) -> None:
        colors = self.theme.colors
        fonts = self.theme.fonts
        cx = self.screen.get_width() / 2
        cy = self.screen.get_height() - 100

        self.ui.draw_panel(cx, cy, 700, 150, colors.panel_fill, colors.panel_border,
                           self.theme.spacing.border_width)
        self.ui.draw_text(content.text, cx, cy - 60, colors.text_primary,
                          self._font(fonts.size_normal), align="center", max_width=650)

        self._dialogue_link_rect = None
        if content.link_label:
            self._dialogue_link_rect = self.ui.draw_text(
                content.link_label, cx, cy + 26, colors.text_link,
                self._font(fonts.size_small, italic=True), align="center", max_width=650,
            )

        self.ui.draw_text(content.close_prompt, cx, cy + 52, colors.text_secondary,
                          self._font(fonts.size_small), align="center")

    def _draw_illustrated_dialogue(self, content: DialogueContent) -> None:
        colors = self.theme.colors
        fonts = self.theme.fonts
        pad = self.theme.spacing.padding * 2
        cx = self.screen.get_width() / 2
        cy = self.screen.get_height() - 150

        panel = self.ui.draw_panel(cx, cy, 700, 260, colors.panel_fill, colors.panel_border,
                                   self.theme.spacing.border_width)

        # Image column
        image_box = pygame.Rect(panel.left + pad, panel.top + pad, 200, 180)
        image = self.images.get(content.image) if content.image else None
        if image is not None:
            iw, ih = image.get_size()
            scale = min(image_box.width / iw, image_box.height / ih)
            w, h = int(iw * scale), int(ih * scale)
            self.ui.draw_surface(
                image,
                image_box.centerx - w / 2,
                image_box.centery - h / 2,
                w, h,
            )
        if content.caption:
            self.ui.draw_text(content.caption, image_box.centerx, image_box.bottom + 8,
                              colors.text_secondary, self._font(fonts.size_small),
                              align="center", max_width=image_box.width)

        # Text column
        text_x = image_box.right + pad
        text_width = panel.right - pad - text_x
        text_rect = self.ui.draw_text(content.text, text_x, panel.top + pad, colors.text_primary,
                                      self._font(fonts.size_normal), max_width=text_width)

        self._dialogue_link_rect = None
        if content.link_label:
            self._dialogue_link_rect = self.ui.draw_text(
                content.link_label, text_x, text_rect.bottom + self.theme.spacing.line_gap * 2,
                colors.text_link, self._font(fonts.size_small, italic=True), max_width=text_width,
            )

        self.ui.draw_text(content.close_prompt, panel.right - pad, panel.bottom - pad - 12,
                          colors.text_secondary, self._font(fonts.size_small), align="right")

    def _draw_welcome(self, content: WelcomeContent) -> None:
        colors = self.theme.colors
        fonts = self.theme.fonts
        screen_w, screen_h = self.screen.get_size()
        cx, cy = screen_w / 2, screen_h / 2

        self.ui.draw_rect(0, 0, screen_w, screen_h, colors.overlay)
        panel = self.ui.draw_panel(cx, cy, 600, 320, colors.panel_fill, colors.panel_border,
                                   self.theme.spacing.border_width)

        title = self.ui.draw_text(content.title, cx, panel.top + 30, colors.text_primary,
                                  self._font(fonts.size_title), align="center")
        body = self.ui.draw_text(content.body, cx, title.bottom + 20, colors.text_primary,
                                 self._font(fonts.size_normal), align="center", max_width=520)
        self._welcome_link_rect = self.ui.draw_text(
            content.link_label, cx, body.bottom + 20, colors.text_link,
            self._font(fonts.size_normal, italic=True), align="center",
        )
        self.ui.draw_text(content.dismiss_hint, cx, panel.bottom - 40, colors.text_secondary,
                          self._font(fonts.size_small), align="center")
