"""
Animation data structures and playback controller.

Provides frame-based sprite sheet animation with:
- Named clips made of sheet frame indices
- Loop modes (once, loop)
- Re-playing the current clip is a no-op, so callers may request the
  same clip every frame without restarting it
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Optional


class LoopMode(Enum):
    """Animation loop behavior."""
    ONCE = auto()        # Play once and stop on last frame
    LOOP = auto()        # Loop forever


@dataclass
class AnimationFrame:
    """
    Single frame of animation.

    Attributes:
        index: Frame index in the sprite sheet (row-major)
        duration: Seconds to display this frame
    """
    index: int
    duration: float = 0.1


@dataclass
class AnimationClip:
    """
    A single animation (e.g., 'walk-right', 'idle-down').

    Clips contain a sequence of frames and playback settings.
    """
    name: str
    frames: List[AnimationFrame] = field(default_factory=list)
    loop_mode: LoopMode = LoopMode.LOOP

    @property
    def total_duration(self) -> float:
        """Get total animation duration in seconds."""
        return sum(f.duration for f in self.frames)

    @property
    def frame_count(self) -> int:
        """Get number of frames."""
        return len(self.frames)

    def get_frame_at_time(self, time: float) -> tuple[AnimationFrame, int]:
        """
        Get frame for given time.

        Args:
            time: Elapsed time in seconds

        Returns:
            (frame, frame_index) tuple
        """
        if not self.frames:
            raise ValueError(f"Animation '{self.name}' has no frames")

        duration = self.total_duration
        if duration <= 0:
            return self.frames[0], 0

        if self.loop_mode == LoopMode.LOOP:
            time = time % duration
        else:
            time = min(time, duration - 0.0001)

        elapsed = 0.0
        for i, frame in enumerate(self.frames):
            elapsed += frame.duration
            if time < elapsed:
                return frame, i

        return self.frames[-1], len(self.frames) - 1

    @classmethod
    def from_range(
        cls,
        name: str,
        start: int,
        end: int,
        frame_rate: float = 10.0,
        loop_mode: LoopMode = LoopMode.LOOP,
    ) -> AnimationClip:
        """
        Create a clip from an inclusive range of sheet indices.

        Args:
            name: Clip name
            start: First frame index
            end: Last frame index (inclusive)
            frame_rate: Frames per second
            loop_mode: Loop behavior
        """
        duration = 1.0 / frame_rate
        frames = [AnimationFrame(i, duration) for i in range(start, end + 1)]
        return cls(name=name, frames=frames, loop_mode=loop_mode)


@dataclass
class AnimationSet:
    """Collection of clips for one sprite sheet."""
    clips: Dict[str, AnimationClip] = field(default_factory=dict)

    def add_clip(self, clip: AnimationClip) -> AnimationSet:
        """Add a clip to the set (fluent)."""
        self.clips[clip.name] = clip
        return self

    def get_clip(self, name: str) -> Optional[AnimationClip]:
        """Get clip by name."""
        return self.clips.get(name)

    def has_clip(self, name: str) -> bool:
        """Check if clip exists."""
        return name in self.clips

    @property
    def clip_names(self) -> List[str]:
        """Get all clip names."""
        return list(self.clips.keys())


class AnimationPlayer:
    """
    Plays clips from an AnimationSet.

    Usage:
        player = AnimationPlayer(anim_set)
        player.play("walk-down")
        player.update(dt)
        index = player.current_frame_index
    """

    def __init__(self, animation_set: AnimationSet):
        self._animation_set = animation_set
        self._current_clip: Optional[AnimationClip] = None
        self._current_time: float = 0.0

    @property
    def current_clip_name(self) -> Optional[str]:
        """Get name of current clip."""
        return self._current_clip.name if self._current_clip else None

    @property
    def current_frame_index(self) -> int:
        """Sheet index of the frame currently showing."""
        if not self._current_clip:
            return 0
        frame, _ = self._current_clip.get_frame_at_time(self._current_time)
        return frame.index

    def play(self, clip_name: str) -> bool:
        """
        Play an animation clip.

        Playing the clip that is already playing keeps its position.

        Returns:
            True if clip was found
        """
        if self._current_clip and self._current_clip.name == clip_name:
            return True

        clip = self._animation_set.get_clip(clip_name)
        if not clip:
            return False

        self._current_clip = clip
        self._current_time = 0.0
        return True

    def update(self, dt: float) -> None:
        """Advance animation by delta time in seconds."""
        if self._current_clip:
            self._current_time += dt
