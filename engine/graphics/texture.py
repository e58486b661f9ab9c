"""
Image loading and sprite sheets.

Images are loaded once through pygame and cached under a short key
so gameplay data can refer to them by name.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, Sequence

import pygame

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp")


class ImageCache:
    """
    Loads and caches pygame surfaces.

    Keys are file stems by default, so "assets/images/statue.png" is
    registered as "statue" and also reachable as "statue.png". Any other
    name resolves through its stem.

    Usage:
        images = ImageCache()
        images.load_directory("assets/images")
        surface = images.get("statue")
    """

    def __init__(self):
        self._surfaces: dict[str, pygame.Surface] = {}
        self._aliases: dict[str, str] = {}

    def load(self, path: str | Path, key: Optional[str] = None) -> pygame.Surface:
        """
        Load an image from file.

        Args:
            path: Path to image file
            key: Cache key (defaults to the file stem)

        Returns:
            Loaded surface
        """
        path = Path(path)
        key = key or path.stem

        if key in self._surfaces:
            return self._surfaces[key]

        surface = pygame.image.load(str(path))
        if pygame.display.get_surface() is not None:
            surface = surface.convert_alpha()

        self.register(key, surface, path.name)
        return surface

    def load_all(
        self,
        entries: Sequence[tuple[Path, Optional[str]]],
        on_progress: Optional[Callable[[float], None]] = None,
    ) -> int:
        """
        Load a batch of (path, key) pairs, reporting progress.

        Files pygame cannot decode are logged and skipped.

        Args:
            entries: Files to load; a None key means the file stem
            on_progress: Called with the finished fraction after each file

        Returns:
            Number of images loaded
        """
        count = 0
        for done, (path, key) in enumerate(entries, start=1):
            try:
                self.load(path, key)
                count += 1
            except pygame.error as e:
                logger.warning(f"Could not load image {path}: {e}")
            if on_progress:
                on_progress(done / len(entries))
        return count

    def load_directory(self, directory: str | Path) -> int:
        """
        Load every image in a directory (not recursive).

        Returns:
            Number of images loaded
        """
        directory = Path(directory)
        if not directory.is_dir():
            logger.warning(f"Image directory not found: {directory}")
            return 0

        count = self.load_all([(path, None) for path in image_files(directory)])
        logger.debug(f"Loaded {count} images from {directory}")
        return count

    def register(self, key: str, surface: pygame.Surface, file_name: Optional[str] = None) -> None:
        """
        Add an already created surface.

        Args:
            key: Cache key
            surface: Image
            file_name: Extra name the image answers to, e.g. "Photo.jpg"
        """
        self._surfaces[key] = surface
        if file_name:
            self._aliases[file_name] = key

    def resolve(self, name: str) -> Optional[str]:
        """Map a key, file name or path to a registered key."""
        if name in self._surfaces:
            return name
        if name in self._aliases:
            return self._aliases[name]
        stem = Path(name).stem
        if stem in self._surfaces:
            return stem
        return None

    def get(self, name: str) -> Optional[pygame.Surface]:
        key = self.resolve(name)
        return self._surfaces[key] if key is not None else None

    def __len__(self) -> int:
        return len(self._surfaces)

    def clear(self) -> None:
        self._surfaces.clear()
        self._aliases.clear()


def image_files(directory: str | Path) -> list[Path]:
    """Image files directly inside a directory, sorted by name."""
    directory = Path(directory)
    if not directory.is_dir():
        return []
    return [
        path for path in sorted(directory.iterdir())
        if path.suffix.lower() in IMAGE_EXTENSIONS
    ]


class SpriteSheet:
    """
    A grid of equally sized frames cut from one surface.

    Frames are numbered left to right, top to bottom.
    """

    def __init__(self, surface: pygame.Surface, frame_width: int, frame_height: int):
        self.surface = surface
        self.frame_width = frame_width
        self.frame_height = frame_height

        width, height = surface.get_size()
        self.cols = width // frame_width
        self.rows = height // frame_height
        self._frames: dict[int, pygame.Surface] = {}

    @property
    def frame_count(self) -> int:
        return self.cols * self.rows

    def get_frame(self, index: int) -> pygame.Surface:
        """
        Get a frame by linear index.

        Raises:
            IndexError: If the index is outside the sheet
        """
        if not 0 <= index < self.frame_count:
            raise IndexError(f"Frame {index} outside sheet of {self.frame_count}")

        if index not in self._frames:
            col = index % self.cols
            row = index // self.cols
            rect = pygame.Rect(
                col * self.frame_width,
                row * self.frame_height,
                self.frame_width,
                self.frame_height,
            )
            self._frames[index] = self.surface.subsurface(rect)
        return self._frames[index]
