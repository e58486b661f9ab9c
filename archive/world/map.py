"""
Map loading - Tiled JSON to triggers, spawn point and solid tiles.

Supports Tiled JSON format (.json / .tmj). Only the layers gameplay
needs are interpreted:
- an object layer of trigger rectangles with text/url/image properties
- an object layer whose first object is the player spawn
- a tile layer whose non-empty tiles are solid
Tilesets and decorative layers are parsed for the renderer only.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import jsonschema

from archive.components import AABB, TriggerZone
from archive.config import ArchiveConfig

logger = logging.getLogger(__name__)


class MapFormatError(ValueError):
    """Raised when a map document does not look like a Tiled map."""


# Only the parts of the Tiled format that are read below
TILED_MAP_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["width", "height", "tilewidth", "tileheight", "layers"],
    "properties": {
        "width": {"type": "integer", "minimum": 0},
        "height": {"type": "integer", "minimum": 0},
        "tilewidth": {"type": "integer", "minimum": 1},
        "tileheight": {"type": "integer", "minimum": 1},
        "layers": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["type"],
                "properties": {
                    "name": {"type": "string"},
                    "type": {"type": "string"},
                    "data": {"type": "array", "items": {"type": "integer"}},
                    "objects": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {
                                "id": {"type": "integer"},
                                "name": {"type": "string"},
                                "x": {"type": "number"},
                                "y": {"type": "number"},
                                "width": {"type": "number"},
                                "height": {"type": "number"},
                                "properties": {"$ref": "#/$defs/properties"},
                            },
                        },
                    },
                    "properties": {"$ref": "#/$defs/properties"},
                },
            },
        },
    },
    "$defs": {
        "properties": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name"],
                "properties": {"name": {"type": "string"}},
            },
        },
    },
}

# Tiled stores flip flags in the top bits of each gid
_FLIP_MASK = 0x80000000 | 0x40000000 | 0x20000000


@dataclass
class MapLayer:
    """A layer of tiles or objects."""
    name: str = ""
    layer_type: str = "tilelayer"  # tilelayer, objectgroup, imagelayer
    visible: bool = True
    width: int = 0
    height: int = 0
    data: list[int] = field(default_factory=list)
    objects: list[dict[str, Any]] = field(default_factory=list)
    properties: dict[str, Any] = field(default_factory=dict)


@dataclass
class MapTileset:
    """Reference to a tileset used in the map."""
    name: str = ""
    first_gid: int = 1
    tile_width: int = 32
    tile_height: int = 32
    image_path: str = ""
    columns: int = 1
    tile_count: int = 0

    def get_tile_region(self, local_id: int) -> tuple[int, int, int, int]:
        """Pixel rectangle of a local tile ID within the tileset image."""
        col = local_id % self.columns
        row = local_id // self.columns
        return (
            col * self.tile_width,
            row * self.tile_height,
            self.tile_width,
            self.tile_height,
        )


class ArchiveMap:
    """
    A walkable map loaded from Tiled.

    Handles:
    - Loading and validating Tiled JSON
    - Trigger zones in authored order
    - Spawn point with a fallback
    - Tile collision queries
    """

    def __init__(self, config: Optional[ArchiveConfig] = None):
        self.config = config or ArchiveConfig()
        self.name: str = ""
        self.file_path: Optional[Path] = None

        # Dimensions
        self.width: int = 0  # In tiles
        self.height: int = 0
        self.tile_width: int = 32
        self.tile_height: int = 32

        self.layers: list[MapLayer] = []
        self.tilesets: list[MapTileset] = []
        self.properties: dict[str, Any] = {}

        # Gameplay data
        self.triggers: list[TriggerZone] = []
        self.spawn: tuple[float, float] = self.config.default_spawn
        self.collision: list[list[bool]] = []

    @property
    def pixel_width(self) -> int:
        """Map width in pixels."""
        return self.width * self.tile_width

    @property
    def pixel_height(self) -> int:
        """Map height in pixels."""
        return self.height * self.tile_height

    @property
    def bounds(self) -> AABB:
        """Whole-map rectangle in pixels."""
        return AABB(x=0, y=0, width=self.pixel_width, height=self.pixel_height)

    @classmethod
    def load(cls, path: str | Path, config: Optional[ArchiveConfig] = None) -> ArchiveMap:
        """
        Load a map from a Tiled JSON file.

        Raises:
            FileNotFoundError: If the file does not exist
            MapFormatError: If the document is not a usable Tiled map
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Map not found: {path}")

        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        game_map = cls.from_dict(data, config, base_path=path.parent)
        game_map.file_path = path
        game_map.name = path.stem
        logger.info(
            f"Loaded map '{game_map.name}': {game_map.width}x{game_map.height} tiles, "
            f"{len(game_map.triggers)} triggers, spawn at {game_map.spawn}"
        )
        return game_map

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        config: Optional[ArchiveConfig] = None,
        base_path: Optional[Path] = None,
    ) -> ArchiveMap:
        """
        Build a map from an already parsed Tiled document.

        Args:
            data: Tiled JSON document
            config: Layer names and spawn fallback
            base_path: Directory external tilesets are relative to
        """
        try:
            jsonschema.validate(instance=data, schema=TILED_MAP_SCHEMA)
        except jsonschema.ValidationError as e:
            raise MapFormatError(f"Invalid Tiled map: {e.message}") from e

        game_map = cls(config)
        game_map._parse_tiled_json(data, base_path or Path('.'))
        return game_map

    def _parse_tiled_json(self, data: dict[str, Any], base_path: Path) -> None:
        """Parse Tiled JSON data."""
        self.width = data['width']
        self.height = data['height']
        self.tile_width = data['tilewidth']
        self.tile_height = data['tileheight']
        self.properties = self._parse_properties(data.get('properties', []))

        for ts_data in data.get('tilesets', []):
            self.tilesets.append(self._parse_tileset(ts_data, base_path))

        for layer_data in data['layers']:
            self.layers.append(self._parse_layer(layer_data))

        self._load_triggers()
        self._load_spawn()
        self._build_collision()

    def _parse_tileset(self, data: dict[str, Any], base_path: Path) -> MapTileset:
        """Parse a tileset reference, following external .tsj/.json sources."""
        first_gid = data.get('firstgid', 1)

        if 'source' in data:
            ts_path = base_path / data['source']
            try:
                with open(ts_path, 'r', encoding='utf-8') as f:
                    data = {**json.load(f), 'firstgid': first_gid}
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Could not read tileset {ts_path}: {e}")

        return MapTileset(
            name=data.get('name', ''),
            first_gid=first_gid,
            tile_width=data.get('tilewidth', self.tile_width),
            tile_height=data.get('tileheight', self.tile_height),
            image_path=data.get('image', ''),
            columns=max(1, data.get('columns', 1)),
            tile_count=data.get('tilecount', 0),
        )

    def _parse_layer(self, data: dict[str, Any]) -> MapLayer:
        """Parse a map layer."""
        layer = MapLayer(
            name=data.get('name', ''),
            layer_type=data.get('type', 'tilelayer'),
            visible=data.get('visible', True),
            width=data.get('width', self.width),
            height=data.get('height', self.height),
            properties=self._parse_properties(data.get('properties', [])),
        )

        if layer.layer_type == 'tilelayer':
            layer.data = [gid & ~_FLIP_MASK for gid in data.get('data', [])]
        elif layer.layer_type == 'objectgroup':
            for obj_data in data.get('objects', []):
                layer.objects.append({
                    'id': obj_data.get('id', 0),
                    'name': obj_data.get('name', ''),
                    'x': obj_data.get('x', 0),
                    'y': obj_data.get('y', 0),
                    'width': obj_data.get('width', 0),
                    'height': obj_data.get('height', 0),
                    'properties': self._parse_properties(obj_data.get('properties', [])),
                })

        return layer

    def _parse_properties(self, props_list: list) -> dict[str, Any]:
        """Parse Tiled properties array into dict."""
        return {prop['name']: prop.get('value') for prop in props_list}

    def _load_triggers(self) -> None:
        """Turn the trigger layer's rectangles into zones."""
        layer = self.get_layer(self.config.trigger_layer)
        if layer is None or layer.layer_type != 'objectgroup':
            logger.debug(f"No '{self.config.trigger_layer}' object layer, map has no triggers")
            return

        for obj in layer.objects:
            self.triggers.append(TriggerZone(
                id=obj['id'],
                name=obj['name'],
                bounds=AABB(
                    x=obj['x'],
                    y=obj['y'],
                    width=obj['width'],
                    height=obj['height'],
                ),
                properties={
                    key: str(value)
                    for key, value in obj['properties'].items()
                    if value is not None
                },
            ))

    def _load_spawn(self) -> None:
        """Use the first object of the spawn layer, if any."""
        layer = self.get_layer(self.config.spawn_layer)
        if layer is None or not layer.objects:
            logger.debug(f"No spawn object, using default {self.config.default_spawn}")
            self.spawn = self.config.default_spawn
            return

        first = layer.objects[0]
        self.spawn = (float(first['x']), float(first['y']))

    def is_collision_layer(self, layer: MapLayer) -> bool:
        """Collision layers block movement and are never drawn."""
        return (
            layer.layer_type == 'tilelayer'
            and (
                layer.name == self.config.collision_layer
                or bool(layer.properties.get('collision', False))
            )
        )

    def drawable_layers(self, overhead: bool = False) -> list[MapLayer]:
        """
        Visible tile layers in draw order.

        Args:
            overhead: True for the layers drawn above the player,
                False for everything drawn below it
        """
        return [
            layer for layer in self.layers
            if layer.layer_type == 'tilelayer'
            and layer.visible
            and not self.is_collision_layer(layer)
            and (layer.name in self.config.overhead_layers) == overhead
        ]

    def _build_collision(self) -> None:
        """Build collision map from layers marked as collision."""
        self.collision = [
            [False for _ in range(self.width)]
            for _ in range(self.height)
        ]

        for layer in self.layers:
            if not self.is_collision_layer(layer):
                continue

            for idx, gid in enumerate(layer.data):
                if gid <= 0:
                    continue
                y, x = divmod(idx, layer.width)
                if 0 <= y < self.height and 0 <= x < self.width:
                    self.collision[y][x] = True

    def is_solid(self, tile_x: int, tile_y: int) -> bool:
        """
        Check if a tile position is solid.

        Tiles outside the map are open; the player is free to walk off
        the authored area.
        """
        if tile_x < 0 or tile_x >= self.width:
            return False
        if tile_y < 0 or tile_y >= self.height:
            return False
        return self.collision[tile_y][tile_x]

    def get_solid_rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float
    ) -> bool:
        """Check if a rectangle intersects any solid tiles."""
        left = int(x // self.tile_width)
        top = int(y // self.tile_height)
        right = int((x + width - 1) // self.tile_width)
        bottom = int((y + height - 1) // self.tile_height)

        for ty in range(top, bottom + 1):
            for tx in range(left, right + 1):
                if self.is_solid(tx, ty):
                    return True
        return False

    def get_tile_local_id(self, gid: int) -> tuple[Optional[MapTileset], int]:
        """Get the tileset containing a global tile ID and the local ID within it."""
        result = None
        for tileset in self.tilesets:
            if gid >= tileset.first_gid:
                if result is None or tileset.first_gid > result.first_gid:
                    result = tileset
        if result is None:
            return None, 0
        return result, gid - result.first_gid

    def get_layer(self, name: str) -> Optional[MapLayer]:
        """Get a layer by name."""
        for layer in self.layers:
            if layer.name == name:
                return layer
        return None
