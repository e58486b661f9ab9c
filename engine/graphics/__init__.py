"""
Graphics module.

Sprite sheet animation, image loading and the follow camera.
"""

from engine.graphics.animation import (
    AnimationClip,
    AnimationFrame,
    AnimationPlayer,
    AnimationSet,
    LoopMode,
)
from engine.graphics.camera import Camera, CameraBounds
from engine.graphics.texture import ImageCache, SpriteSheet, image_files

__all__ = [
    "AnimationClip",
    "AnimationFrame",
    "AnimationPlayer",
    "AnimationSet",
    "LoopMode",
    "Camera",
    "CameraBounds",
    "ImageCache",
    "SpriteSheet",
    "image_files",
]
