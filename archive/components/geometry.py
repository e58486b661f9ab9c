"""
Geometry components - axis-aligned bounding boxes.
"""

from __future__ import annotations

from engine.core.component import FrozenComponent


class AABB(FrozenComponent):
    """
    Axis-aligned bounding box in world pixels.

    (x, y) is the top-left corner; y grows downward.

    Attributes:
        x: Left edge
        y: Top edge
        width: Box width
        height: Box height
    """
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @classmethod
    def from_center(cls, cx: float, cy: float, width: float, height: float) -> AABB:
        """Build a box centred on (cx, cy)."""
        return cls(x=cx - width / 2, y=cy - height / 2, width=width, height=height)

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> tuple[float, float]:
        """Centre point."""
        return (self.x + self.width / 2, self.y + self.height / 2)

    def overlaps(self, other: AABB) -> bool:
        """
        Rectangle intersection test.

        Touching edges count as overlapping.
        """
        return not (
            self.right < other.left or
            self.left > other.right or
            self.bottom < other.top or
            self.top > other.bottom
        )

    def contains_point(self, px: float, py: float) -> bool:
        """Check if a point lies inside (edges inclusive)."""
        return self.left <= px <= self.right and self.top <= py <= self.bottom

    def translated(self, dx: float, dy: float) -> AABB:
        """Copy moved by (dx, dy)."""
        return AABB(x=self.x + dx, y=self.y + dy, width=self.width, height=self.height)
