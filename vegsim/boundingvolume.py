"""Axis-aligned bounding volumes with grid interpolation."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from vegsim.vector import Vec3

GridIndex = tuple[int, int, int]


@dataclass
class BoundingVolume:
    """An axis-aligned box; a fresh volume spans only the origin."""

    min_pos: Vec3 = field(default_factory=Vec3)
    max_pos: Vec3 = field(default_factory=Vec3)

    def include_point(self, point: Vec3) -> None:
        """Grow the volume so that it contains ``point``."""
        self.min_pos = Vec3(
            min(self.min_pos.x, point.x),
            min(self.min_pos.y, point.y),
            min(self.min_pos.z, point.z),
        )
        self.max_pos = Vec3(
            max(self.max_pos.x, point.x),
            max(self.max_pos.y, point.y),
            max(self.max_pos.z, point.z),
        )

    def merge(self, other: BoundingVolume) -> BoundingVolume:
        """Return the smallest volume containing both volumes."""
        return BoundingVolume(
            Vec3(
                min(self.min_pos.x, other.min_pos.x),
                min(self.min_pos.y, other.min_pos.y),
                min(self.min_pos.z, other.min_pos.z),
            ),
            Vec3(
                max(self.max_pos.x, other.max_pos.x),
                max(self.max_pos.y, other.max_pos.y),
                max(self.max_pos.z, other.max_pos.z),
            ),
        )

    def includes(self, point: Vec3) -> bool:
        """True if ``point`` lies inside the volume, boundaries included."""
        return (
            self.min_pos.x <= point.x <= self.max_pos.x
            and self.min_pos.y <= point.y <= self.max_pos.y
            and self.min_pos.z <= point.z <= self.max_pos.z
        )

    def interpolate(self, value: GridIndex, resolution: GridIndex) -> Vec3:
        """Map a grid index onto a position inside the volume."""
        axes = zip(value, resolution, self.min_pos, self.max_pos)
        return Vec3(*(_interpolate_value(v, res, lo, hi) for v, res, lo, hi in axes))

    def reverse_interpolate(
        self, value: Vec3, resolution: GridIndex, ceil: bool = False
    ) -> GridIndex:
        """Map a position onto the grid cell that holds it, clamped to the grid."""
        axes = zip(value, resolution, self.min_pos, self.max_pos)
        x, y, z = (_reverse_range(v, res, ceil, lo, hi) for v, res, lo, hi in axes)
        return (x, y, z)


def _interpolate_value(value: int, resolution: int, low: float, high: float) -> float:
    if value > resolution:
        raise ValueError("Value can be at most resolution.")
    factor = value / resolution
    return low + factor * (high - low)


def _reverse_range(value: float, resolution: int, ceil: bool, low: float, high: float) -> int:
    if resolution <= 0:
        raise ValueError("resolution must be positive")
    step = (high - low) / resolution
    diff = value - low
    if step == 0.0:
        quotient = math.nan if diff == 0.0 else math.copysign(math.inf, diff)
    else:
        quotient = diff / step
    last = resolution - 1
    if math.isnan(quotient) or quotient <= 0.0:
        return 0
    if math.isinf(quotient):
        return last
    index = math.ceil(quotient) if ceil else math.floor(quotient)
    return min(max(index, 0), last)