"""A single plant: a tree of metamers with its genetics and resource distributor."""

from __future__ import annotations

import logging

from vegsim.branchdata import BranchData, SupportPole
from vegsim.environment import Environment
from vegsim.markerset import MarkerSet
from vegsim.metamer import Metamer
from vegsim.plantgenetics import PlantGenetics
from vegsim.resourcedistributor import ResourceDistributor
from vegsim.treeparameter import DistributionMode
from vegsim.vector import Vec3

logger = logging.getLogger(__name__)

_SEED_DIR = Vec3(0.0, 1.0, 0.0)
_ROOT_ID = 1


class Plant:
    """A plant grown from a seed position, upward along a hidden support pole."""

    def __init__(self, seed_pos: Vec3, genetics: PlantGenetics) -> None:
        self.genetics = genetics
        self.distributor = ResourceDistributor()
        self.root = self._new_root(seed_pos)

    def __repr__(self) -> str:
        return f"Plant(root={self.root!r})"

    def _new_root(self, seed_pos: Vec3) -> Metamer:
        root_end = seed_pos + _SEED_DIR * self.genetics.metamer_base_length
        pole = SupportPole(
            self.genetics.pole_length, seed_pos - Vec3(0.0, 0.0, -0.3), _SEED_DIR, False
        )
        root = Metamer(seed_pos, root_end, self.genetics, _ROOT_ID, pole)
        root.update_width()
        return root

    def reset(self, seed_pos: Vec3) -> None:
        """Replace the plant by a fresh seedling at ``seed_pos``."""
        self.root = self._new_root(seed_pos)

    def collect_branchdata(self) -> list[BranchData]:
        return self.root.collect_branchdata()

    def perform_growth_iteration(self, environment: Environment) -> None:
        """Gather light, turn it into resources, grow shoots, shed and thicken."""
        total_light = self._calc_light_gathered(environment)
        logger.info("Total light gathered: %s", total_light)

        total_resources = self.genetics.borchert_honda_alpha * total_light
        logger.info("Total resources: %s", total_resources)

        self.root.distribute_resources(self.distributor, total_resources)
        logger.info("Resources moved toward tips")

        shoots = self.root.add_shoots(environment)
        logger.info("Total shoots added: %s", shoots)

        self._calc_light_gathered(environment)
        self.root.shed_branches(environment)

        self.root.update_width()
        logger.info("Updated metamer widths")

        environment.increase_tropism()

    def place_markers(self, markers: MarkerSet) -> int:
        """Occupy the space at the buds, then let buds claim markers; return claims."""
        self.root.remove_markers_on_buds(markers)
        return self.root.place_markers(markers)

    def get_metamer_by_id(self, metamer_id: int) -> Metamer | None:
        return self.root.get_metamer_by_id(metamer_id)

    def prune_id(self, bud_id: int) -> None:
        self.root.prune_id(bud_id)

    @property
    def resource_distribution_mode(self) -> DistributionMode:
        return self.distributor.mode

    @resource_distribution_mode.setter
    def resource_distribution_mode(self, mode: DistributionMode) -> None:
        self.distributor.mode = mode

    def _calc_light_gathered(self, environment: Environment) -> float:
        environment.reset_space()
        placed = self.place_markers(environment.markers)
        logger.info("Total markers placed: %s", placed)
        self.root.place_shadows(environment.shadowvoxels)
        return self.root.calc_light_gathered(environment)