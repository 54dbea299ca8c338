"""The space a plant grows in: light, free space and tropism."""

from __future__ import annotations

from vegsim import parameters
from vegsim.boundingvolume import BoundingVolume
from vegsim.markerset import MarkerSet
from vegsim.plantgenetics import PlantGenetics
from vegsim.shadowvoxelset import ShadowVoxelSet
from vegsim.treeparameter import SpaceDividingMode
from vegsim.vector import Vec3


class Environment:
    """Markers and shadow voxels over a bounding volume, plus a tropism weight."""

    def __init__(self, bounding_volume: BoundingVolume, resolution: int | None = None) -> None:
        if resolution is None:
            resolution = parameters.SPACE_DIV_RESOLUTION
        grid = (resolution, resolution, resolution)
        self.bounding_volume = bounding_volume
        self.tropism_growth_direction_weight = parameters.TROPISM_START_WEIGTH
        self.markers = MarkerSet(bounding_volume, grid)
        self.shadowvoxels = ShadowVoxelSet(bounding_volume, grid)
        self.mode = parameters.SPACE_DIV_MODE

    def __repr__(self) -> str:
        return f"Environment(bounding_volume={self.bounding_volume!r}, mode={self.mode})"

    @property
    def tropism_dir(self) -> Vec3:
        return parameters.TROPISM_DIR

    def increase_tropism(self) -> None:
        """Strengthen the tropism weight by the configured rate."""
        self.tropism_growth_direction_weight *= parameters.TROPISM_CHANGE_RATE

    def is_inside(self, point: Vec3) -> bool:
        return self.bounding_volume.includes(point)

    def calc_light_gathered(
        self,
        bud_pos: Vec3,
        genetics: PlantGenetics,
        bud_id: int,
        length: float,
        direction: Vec3,
    ) -> float:
        """Light a bud at ``bud_pos`` receives under the current mode."""
        if self.mode is SpaceDividingMode.MARKERS:
            markers = self.markers.total_markers_for_id_in_cone(
                bud_id,
                bud_pos,
                direction,
                genetics.bud_perception_angle,
                genetics.bud_perception_radius_factor,
            )
            return 1.0 if markers >= 1 else 0.0
        if self.mode is SpaceDividingMode.SHADOW_VOXELS:
            return self.shadowvoxels.light_exposure(bud_pos)
        return 0.0

    def optimal_growth_direction(
        self,
        bud_pos: Vec3,
        genetics: PlantGenetics,
        bud_id: int,
        length: float,
        direction: Vec3,
    ) -> Vec3 | None:
        """Best direction for a new shoot, or None if there is no room."""
        theta = genetics.bud_perception_angle
        r = genetics.bud_perception_radius_factor
        if self.mode is SpaceDividingMode.MARKERS:
            return self.markers.markers_dir_for_id_in_cone(bud_id, bud_pos, direction, theta, r)
        if self.mode is SpaceDividingMode.SHADOW_VOXELS:
            return self.shadowvoxels.optimal_growth_direction(bud_pos, direction, theta, r)
        return None

    def reset_space(self) -> None:
        """Release all markers and clear all shadow."""
        self.markers.reset()
        self.shadowvoxels.clear()