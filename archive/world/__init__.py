"""
World module - map loading.

Provides:
- Tiled JSON loading with schema validation
- Trigger zones, spawn point and solid tiles
"""

from archive.world.map import ArchiveMap, MapLayer, MapTileset, MapFormatError, TILED_MAP_SCHEMA

__all__ = [
    "ArchiveMap",
    "MapLayer",
    "MapTileset",
    "MapFormatError",
    "TILED_MAP_SCHEMA",
]
