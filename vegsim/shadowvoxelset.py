"""Shadow voxel grid used to estimate light exposure."""

from __future__ import annotations

import math

from vegsim import parameters
from vegsim.boundingvolume import BoundingVolume, GridIndex
from vegsim.branchdata import Color
from vegsim.markerset import sphere_grid_points
from vegsim.vector import Vec3

_BLACK = Color(0, 0, 0, 255)


def _saturating_u8(value: float) -> int:
    if math.isnan(value):
        return 0
    return int(min(255.0, max(0.0, value)))


class ShadowVoxelSet:
    """A grid of shadow amounts; each bud casts a pyramid of shadow below it."""

    def __init__(self, bounding_volume: BoundingVolume, resolution: GridIndex) -> None:
        self.bounding_volume = bounding_volume
        self.resolution: GridIndex = tuple(resolution)  # type: ignore[assignment]
        rx, ry, rz = self.resolution
        self.voxels: list[float] = [0.0] * (rx * ry * rz)

    def __repr__(self) -> str:
        return (
            f"ShadowVoxelSet(bounding_volume={self.bounding_volume!r}, "
            f"resolution={self.resolution!r})"
        )

    def clear(self) -> None:
        """Remove all shadow."""
        self.voxels = [0.0] * len(self.voxels)

    def add_shadow(self, pos: Vec3) -> None:
        """Cast a shadow pyramid from the voxel holding ``pos`` downwards."""
        vx, vy, vz = self._cell(pos)
        layers = min(parameters.SHADOW_VOXEL_PIRAMID_LAYERS, vy + 1)
        for layer in range(layers):
            y = vy - layer
            amount = parameters.SHADOW_VOXEL_A * parameters.SHADOW_VOXEL_B ** (-layer)
            for x in range(vx - layer, vx + layer + 1):
                for z in range(vz - layer, vz + layer + 1):
                    index = self._index((x, y, z))
                    if index is not None:
                        self.voxels[index] += amount

    def optimal_growth_direction(
        self, bud_pos: Vec3, direction: Vec3, theta: float, r: float
    ) -> Vec3:
        """Direction away from the shadow around ``bud_pos``; ``direction`` if there is none."""
        optimal = Vec3()
        for p in sphere_grid_points(self.bounding_volume, self.resolution, bud_pos, r):
            optimal = optimal - (p - bud_pos).norm() * self._shadow_at(p)
        if optimal == Vec3():
            optimal = direction
        return optimal.norm()

    def light_exposure(self, pos: Vec3) -> float:
        """Light reaching ``pos``, never below zero."""
        shadow = self._shadow_at(pos)
        return max(parameters.SHADOW_VOXEL_C - shadow + parameters.SHADOW_VOXEL_A, 0.0)

    def debug_texture(self, layer: int) -> list[Color]:
        """Grey-scale image of one horizontal voxel layer, indexed ``z * width + x``."""
        rx, ry, rz = self.resolution
        data = [_BLACK] * (rx * rz)
        if not 0 <= layer < ry:
            return data
        for x in range(rx):
            for z in range(rz):
                shadow = self.voxels[self._index((x, layer, z))]
                c = 255 - _saturating_u8(shadow * 128.0)
                data[z * rx + x] = Color(c, c, c, 255)
        return data

    def _cell(self, pos: Vec3) -> GridIndex:
        return self.bounding_volume.reverse_interpolate(pos, self.resolution, False)

    def _index(self, cell: GridIndex) -> int | None:
        x, y, z = cell
        rx, ry, rz = self.resolution
        if not (0 <= x < rx and 0 <= y < ry and 0 <= z < rz):
            return None
        return y * rx * rz + z * rx + x

    def _shadow_at(self, pos: Vec3) -> float:
        index = self._index(self._cell(pos))
        if index is None:
            return parameters.SHADOW_VOXEL_MAX_SHADOW
        return self.voxels[index]