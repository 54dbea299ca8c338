"""The simulation as a whole: one plant growing in one environment."""

from __future__ import annotations

import logging

from vegsim import parameters, pruning, rng
from vegsim.boundingvolume import BoundingVolume
from vegsim.branchdata import Color
from vegsim.environment import Environment
from vegsim.metamer import Metamer
from vegsim.plant import Plant
from vegsim.plantgenetics import PlantGenetics
from vegsim.pruning import PruneOperation
from vegsim.spalier import AutopruneSpalier
from vegsim.treeparameter import TreeParameter, TreeParameterKind
from vegsim.vector import Vec3

logger = logging.getLogger(__name__)


def _space() -> tuple[BoundingVolume, Vec3]:
    """The bounding volume of the simulation and the seed position in it."""
    size = parameters.BOUNDING_BOX_SIDE
    min_p = Vec3(-size / 2.0, 0.0, 0.0)
    max_p = Vec3(size / 2.0, size, size)
    volume = BoundingVolume()
    volume.include_point(min_p)
    volume.include_point(max_p)
    centre = min_p + (max_p - min_p) / 2.0
    return volume, Vec3(centre.x, 0.0, centre.z)


class TreeApp:
    """A plant, its environment, the growth count and the user's selection."""

    def __init__(self, resolution: int | None = None) -> None:
        self.resolution = parameters.SPACE_DIV_RESOLUTION if resolution is None else resolution
        volume, seed_pos = _space()
        self.plant_genetics = PlantGenetics()
        self.plant = Plant(seed_pos, self.plant_genetics)
        self.environment = Environment(volume, self.resolution)
        self.growth_iteration = 0
        self.selected_id: int | None = None
        self.prune_mod_on = False
        self.marker_points: list[Vec3] = []
        self._spalier = AutopruneSpalier()
        self._update_draw()
        self._update_markers()

    def __repr__(self) -> str:
        return f"TreeApp(growth_iteration={self.growth_iteration}, plant={self.plant!r})"

    def perform_growth_iteration(self) -> None:
        """Grow the plant one step and refresh the drawing data."""
        self._growth_it()
        self._update_draw()
        self._update_markers()

    def _growth_it(self) -> None:
        logger.info("--Growth iteration %s", self.growth_iteration)
        self.plant.perform_growth_iteration(self.environment)
        self.growth_iteration += 1
        if self.prune_mod_on:
            self._spalier.update_plant(self.plant)

    def _update_draw(self) -> None:
        for data in self.plant.collect_branchdata():
            data.selected = self.selected_id is not None and data.id == self.selected_id

    def _update_markers(self) -> None:
        markers = self.environment.markers
        markers.reset()
        self.plant.place_markers(markers)
        self.marker_points = [marker.position for marker in markers.all_marked_points()]

    def debug_texture(self, index: int) -> list[Color]:
        """Grey-scale image of shadow voxel layer ``index``."""
        return self.environment.shadowvoxels.debug_texture(index)

    def set_selected_id(self, selected_id: int | None) -> None:
        self.selected_id = selected_id
        self._update_draw()

    def prune_id(self, bud_id: int) -> None:
        self.plant.prune_id(bud_id)
        self._update_draw()

    def get_metamer_by_id(self, metamer_id: int) -> Metamer | None:
        return self.plant.get_metamer_by_id(metamer_id)

    def prune_by_rule(self, rule: PruneOperation) -> None:
        logger.info("Prune %s", rule)
        pruning.prune_by_rule(rule, self.plant)

    def reset_plants(self) -> None:
        """Reseed the random numbers and start again from a seedling."""
        rng.reset()
        self.growth_iteration = 0
        volume, seed_pos = _space()
        self.plant.reset(seed_pos)
        mode = self.environment.mode
        self.environment = Environment(volume, self.resolution)
        self.environment.mode = mode
        self._update_draw()
        self._update_markers()

    def recalculate_plants(self) -> None:
        """Regrow the plant from scratch for as many iterations as it has grown."""
        iterations = self.growth_iteration
        self.reset_plants()
        for _ in range(iterations):
            self._growth_it()
        self._update_draw()
        self._update_markers()

    def update_tree_param(self, param: TreeParameter) -> None:
        """Apply the setting carried by ``param``."""
        if param.kind is TreeParameterKind.GENETIC:
            self.plant_genetics.update_param(param.value)
        elif param.kind is TreeParameterKind.RESOURCE_DISTRIBUTION_MODE:
            self.plant.resource_distribution_mode = param.value
        elif param.kind is TreeParameterKind.SPACE_DIVIDING_MODE:
            self.environment.mode = param.value
        else:
            self.prune_mod_on = param.value

    def get_tree_param(self, param: TreeParameter) -> TreeParameter:
        """Return ``param``'s kind carrying the current setting."""
        if param.kind is TreeParameterKind.GENETIC:
            return TreeParameter.genetic(self.plant_genetics.get_param(param.value))
        if param.kind is TreeParameterKind.RESOURCE_DISTRIBUTION_MODE:
            return TreeParameter.resource_distribution_mode(self.plant.resource_distribution_mode)
        if param.kind is TreeParameterKind.SPACE_DIVIDING_MODE:
            return TreeParameter.space_dividing_mode(self.environment.mode)
        return TreeParameter.prune_mod_on(self.prune_mod_on)