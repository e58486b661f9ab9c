"""
Run the walkable archive.

Run: python -m archive path/to/map.json --assets path/to/assets
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from engine.core.game import Game, GameConfig
from archive.config import load_config
from archive.presentation.pygame_adapter import PygameAdapter
from archive.scene import ArchiveScene
from archive.world.map import ArchiveMap, MapFormatError

logger = logging.getLogger("archive")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="archive",
        description="Walk a Tiled map and read the stories left in it.",
    )
    parser.add_argument("map", type=Path, help="Tiled JSON map")
    parser.add_argument("--config", type=Path, default=None,
                        help="JSON file overriding speeds, prompts and welcome text")
    parser.add_argument("--assets", type=Path, default=None,
                        help="Asset directory (default: next to the map)")
    parser.add_argument("--width", type=int, default=800)
    parser.add_argument("--height", type=int, default=600)
    parser.add_argument("--debug", action="store_true",
                        help="Verbose logging and trigger outlines")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the game."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)
    try:
        game_map = ArchiveMap.load(args.map, config)
    except (FileNotFoundError, MapFormatError) as e:
        logger.error(str(e))
        return 1

    game = Game(GameConfig(width=args.width, height=args.height))
    game.debug_mode = args.debug

    assets_dir = args.assets or args.map.parent
    adapter = PygameAdapter(game.screen, game_map, assets_dir, debug=args.debug, config=config)

    scene = ArchiveScene(adapter, config, game_map, game=game)
    scene.debug = args.debug
    game.set_scene(scene)
    game.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
