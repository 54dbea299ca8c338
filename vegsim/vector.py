"""Three-component float vectors and small geometry helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Iterator


@dataclass(frozen=True)
class Vec3:
    """An immutable 3D vector of floats."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, scalar: float) -> Vec3:
        if not isinstance(scalar, Real):
            return NotImplemented
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vec3:
        if not isinstance(scalar, Real):
            return NotImplemented
        return Vec3(self.x / scalar, self.y / scalar, self.z / scalar)

    def length(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.dot(self))

    def norm(self) -> Vec3:
        """Unit vector in the same direction; NaN components for a zero vector."""
        length = self.length()
        if length == 0.0:
            return Vec3(math.nan, math.nan, math.nan)
        return self / length

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def angle_between(self, other: Vec3) -> float:
        """Angle in radians between two vectors; NaN if either has zero length."""
        lengths = self.length() * other.length()
        if lengths == 0.0 or math.isnan(lengths):
            return math.nan
        cosine = max(-1.0, min(1.0, self.dot(other) / lengths))
        return math.acos(cosine)


def meter_to_real_length(length_in_meters: float) -> float:
    """Convert metres to scene units."""
    return length_in_meters * 5.0


def rot_vec_around_axis(vec: Vec3, axis: Vec3, radians: float) -> Vec3:
    """Rotate ``vec`` around ``axis`` (normalised first) by ``radians``."""
    k = axis.norm()
    cos_a = math.cos(radians)
    sin_a = math.sin(radians)
    return vec * cos_a + k.cross(vec) * sin_a + k * (k.dot(vec) * (1.0 - cos_a))