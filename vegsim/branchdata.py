"""Geometry of branch segments and support poles."""

from __future__ import annotations

import copy
from dataclasses import dataclass

from vegsim.boundingvolume import BoundingVolume
from vegsim.vector import Vec3, meter_to_real_length


@dataclass(frozen=True)
class Color:
    """An RGBA colour with 8-bit channels."""

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b, self.a):
            if not 0 <= channel <= 255:
                raise ValueError(f"colour channel out of range: {channel}")


SELECTED_COLOR = Color(0, 0, 255, 255)


@dataclass
class BranchData:
    """A tapered segment between two points, with an id and display colour."""

    start_point: Vec3
    end_point: Vec3
    start_width: float
    end_width: float
    base_color: Color
    id: int
    selected: bool = False

    @property
    def color(self) -> Color:
        """The display colour; selected branches are shown in blue."""
        return SELECTED_COLOR if self.selected else self.base_color

    def length(self) -> float:
        return (self.end_point - self.start_point).length()

    def center(self) -> Vec3:
        return self.start_point + (self.start_point - self.end_point) / 2.0

    def direction(self) -> Vec3:
        return (self.end_point - self.start_point).norm()

    def bounding_volume(self) -> BoundingVolume:
        volume = BoundingVolume()
        volume.include_point(self.start_point)
        volume.include_point(self.end_point)
        return volume

    def set_length(self, length: float) -> None:
        """Move the end point so the segment has ``length`` along its direction."""
        self.end_point = self.start_point + self.direction() * length


_POLE_WIDTH = 0.0005
_POLE_COLOR = Color(0, 255, 0, 255)


class SupportPole:
    """A straight pole that guides growth; ``length`` is given in metres."""

    def __init__(self, length: float, start_point: Vec3, direction: Vec3, visible: bool) -> None:
        self.length = meter_to_real_length(length)
        self.start_point = start_point
        self.direction = direction
        self.visible = visible
        self.model = BranchData(
            start_point,
            start_point + direction * self.length,
            _POLE_WIDTH,
            _POLE_WIDTH,
            _POLE_COLOR,
            0,
        )

    def __repr__(self) -> str:
        return (
            f"SupportPole(length={self.length!r}, start_point={self.start_point!r}, "
            f"direction={self.direction!r}, visible={self.visible!r})"
        )

    def decrease_height(self, length: float) -> SupportPole | None:
        """Return a copy shortened by ``length`` from its base, or None if used up."""
        if self.length <= length:
            return None
        pole = copy.copy(self)
        pole.model = copy.copy(self.model)
        pole.length = self.length - length
        pole.start_point = self.start_point + self.direction * length
        return pole

    def update_width(self, width: float) -> None:
        self.model.end_width = width
        self.model.start_width = width