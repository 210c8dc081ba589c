"""
Geometric value types shared by the viewport, the grid and the elements.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Point2D:
    """A point in world or screen space."""
    x: float
    y: float

    def distance_to(self, other: Point2D) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Bounds2D:
    """
    An axis-aligned region. Screen conventions: `top` is the smaller y value.
    """
    top: float
    bottom: float
    left: float
    right: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x <= self.right and self.top <= y <= self.bottom

    @classmethod
    def from_points(cls, points: list[Point2D] | tuple[Point2D, ...]) -> Bounds2D:
        """Bounding box of the given points."""
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return cls(top=min(ys), bottom=max(ys), left=min(xs), right=max(xs))


@dataclass(frozen=True)
class WorldLimits:
    """
    Limits for the camera center. A side left as None is unbounded.
    """
    top: Optional[float] = None
    bottom: Optional[float] = None
    left: Optional[float] = None
    right: Optional[float] = None

    def clamp(self, x: float, y: float) -> tuple[float, float]:
        """Clamp (x, y) component-wise into the limits."""
        return (
            _clamp(x, self.left, self.right),
            _clamp(y, self.top, self.bottom),
        )


def _clamp(value: float, low: Optional[float], high: Optional[float]) -> float:
    if low is not None and value < low:
        value = low
    if high is not None and value > high:
        value = high
    return value


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))
