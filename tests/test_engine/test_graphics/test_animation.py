import pytest
from engine.graphics.animation import (
    AnimationClip,
    AnimationFrame,
    AnimationPlayer,
    AnimationSet,
    LoopMode,
)

@pytest.fixture
def walk_set():
    return (
        AnimationSet()
        .add_clip(AnimationClip.from_range("walk-down", 0, 7, frame_rate=10))
        .add_clip(AnimationClip.from_range("idle-down", 0, 0, loop_mode=LoopMode.ONCE))
    )

def test_from_range_is_inclusive():
    clip = AnimationClip.from_range("walk-up", 8, 15, frame_rate=10)
    assert clip.frame_count == 8
    assert [f.index for f in clip.frames] == list(range(8, 16))
    assert clip.total_duration == pytest.approx(0.8)

def test_looping_clip_wraps():
    clip = AnimationClip.from_range("walk", 0, 3, frame_rate=10)
    assert clip.get_frame_at_time(0.05)[0].index == 0
    assert clip.get_frame_at_time(0.25)[0].index == 2
    assert clip.get_frame_at_time(0.45)[0].index == 0

def test_once_clip_holds_last_frame():
    clip = AnimationClip("spin", [AnimationFrame(4, 0.1), AnimationFrame(5, 0.1)], LoopMode.ONCE)
    assert clip.get_frame_at_time(10.0)[0].index == 5

def test_empty_clip_raises():
    with pytest.raises(ValueError):
        AnimationClip("empty").get_frame_at_time(0)

def test_player_plays_and_advances(walk_set):
    player = AnimationPlayer(walk_set)
    assert player.current_clip_name is None
    assert player.current_frame_index == 0

    assert player.play("walk-down")
    player.update(0.35)
    assert player.current_frame_index == 3

def test_replaying_same_clip_keeps_position(walk_set):
    player = AnimationPlayer(walk_set)
    player.play("walk-down")
    player.update(0.25)

    player.play("walk-down")
    assert player.current_frame_index == 2

def test_switching_clip_restarts(walk_set):
    player = AnimationPlayer(walk_set)
    player.play("walk-down")
    player.update(0.35)

    player.play("idle-down")
    assert player.current_clip_name == "idle-down"
    assert player.current_frame_index == 0

def test_unknown_clip(walk_set):
    player = AnimationPlayer(walk_set)
    assert not player.play("dance")
    assert player.current_clip_name is None

def test_animation_set_queries(walk_set):
    assert walk_set.has_clip("walk-down")
    assert walk_set.get_clip("walk-left") is None
    assert walk_set.clip_names == ["walk-down", "idle-down"]
