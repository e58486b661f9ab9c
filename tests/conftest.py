import os
import sys
import pytest
from unittest.mock import MagicMock, patch

# Ensure engine and archive modules can be imported
sys.path.append(os.getcwd())

@pytest.fixture(autouse=True)
def mock_pygame():
    """
    Global mock for pygame to allow headless testing.
    Autoused for all tests to prevent accidental window creation.
    """
    with patch('pygame.init'), \
         patch('pygame.display'), \
         patch('pygame.event'), \
         patch('pygame.time'), \
         patch('pygame.image'), \
         patch('pygame.key'), \
         patch('pygame.mouse'), \
         patch('pygame.Surface'):

        import pygame
        pygame.time.get_ticks = MagicMock(return_value=0)

        yield

@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from engine.core.events import EventBus
    return EventBus()

@pytest.fixture
def config():
    """Default gameplay config."""
    from archive.config import ArchiveConfig
    return ArchiveConfig()

@pytest.fixture
def scheduler():
    from engine.core.timers import Scheduler
    return Scheduler()

@pytest.fixture
def adapter():
    """Headless adapter; 'statue' is the only known image."""
    from archive.presentation.adapter import RecordingAdapter
    return RecordingAdapter(images=["statue"])

@pytest.fixture
def make_zone():
    """Factory for trigger zones."""
    from archive.components import AABB, TriggerZone

    def _make(x=0, y=0, width=100, height=100, name="zone", id=1, **properties):
        return TriggerZone(
            id=id,
            name=name,
            bounds=AABB(x=x, y=y, width=width, height=height),
            properties={k: str(v) for k, v in properties.items()},
        )
    return _make

@pytest.fixture
def state():
    """Scene state with the player at the origin and gameplay unlocked."""
    from archive.components import DialogueMode, PlayerState
    from archive.state import SceneState

    s = SceneState(player=PlayerState(x=0, y=0))
    s.mode = DialogueMode.CLOSED
    return s

@pytest.fixture
def tiled_map_data():
    """
    Small Tiled document: 10x10 tiles of 32px, a wall along column 5,
    two triggers and a spawn point.
    """
    wall = [0] * 100
    for row in range(10):
        wall[row * 10 + 5] = 1

    return {
        "width": 10,
        "height": 10,
        "tilewidth": 32,
        "tileheight": 32,
        "tilesets": [
            {"firstgid": 1, "name": "terrain", "tilewidth": 32, "tileheight": 32,
             "columns": 4, "tilecount": 16, "image": "tiles/terrain.png"},
        ],
        "layers": [
            {"name": "Ground", "type": "tilelayer", "width": 10, "height": 10, "data": [2] * 100},
            {"name": "Collision", "type": "tilelayer", "width": 10, "height": 10, "data": wall},
            {
                "name": "Triggers",
                "type": "objectgroup",
                "objects": [
                    {"id": 7, "name": "Bench", "x": 32, "y": 32, "width": 64, "height": 64,
                     "properties": [
                         {"name": "text", "type": "string", "value": "Hello"},
                         {"name": "url", "type": "string", "value": "https://example.org/bench"},
                     ]},
                    {"id": 8, "name": "Statue", "x": 200, "y": 200, "width": 32, "height": 32,
                     "properties": [
                         {"name": "text", "type": "string", "value": "A statue"},
                         {"name": "image", "type": "string", "value": "statue"},
                     ]},
                ],
            },
            {
                "name": "playerSpawn",
                "type": "objectgroup",
                "objects": [{"id": 1, "name": "spawn", "x": 64, "y": 250, "width": 0, "height": 0}],
            },
        ],
    }
