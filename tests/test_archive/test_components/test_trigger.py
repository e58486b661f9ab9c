import pytest
from archive.components import PlayerState, Direction

def test_property_lookup_tolerates_case(make_zone):
    zone = make_zone(Text="Hello", URL="https://example.org", image="statue")
    assert zone.text == "Hello"
    assert zone.url == "https://example.org"
    assert zone.image == "statue"

def test_empty_property_is_absent(make_zone):
    zone = make_zone(text="", url="")
    assert zone.text is None
    assert zone.url is None
    assert zone.get_property("image") is None

def test_zone_bounds(make_zone):
    zone = make_zone(x=32, y=64, width=10, height=20)
    assert (zone.bounds.right, zone.bounds.bottom) == (42, 84)

def test_player_state_defaults():
    player = PlayerState()
    assert player.facing is Direction.DOWN
    assert player.animation == "idle-down"
    assert player.velocity == (0, 0)

def test_player_stop():
    player = PlayerState(x=1, y=2, vx=160, vy=-160, moving=True)
    player.stop()
    assert player.velocity == (0, 0)
    assert not player.moving
    assert player.position == (1, 2)
