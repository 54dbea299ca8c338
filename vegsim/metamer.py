"""Metamers: an internode with a terminal and an auxiliary bud at its tip."""

from __future__ import annotations

import copy
import itertools
import math
from typing import Iterator, Protocol

from vegsim import parameters, rng
from vegsim.boundingvolume import BoundingVolume
from vegsim.branchdata import BranchData, Color, SupportPole
from vegsim.environment import Environment
from vegsim.markerset import MarkerSet
from vegsim.plantgenetics import PlantGenetics
from vegsim.shadowvoxelset import ShadowVoxelSet
from vegsim.vector import Vec3

_WOOD_COLOR = Color(151, 111, 51, 255)
_BUD_COLOR = Color(255, 0, 0, 255)
_BUD_LENGTH = 0.05
_BUD_WIDTH = 0.0001

_bud_ids = itertools.count(2)


def _next_bud_id() -> int:
    return next(_bud_ids)


def _clone_pole(pole: SupportPole | None) -> SupportPole | None:
    if pole is None:
        return None
    clone = copy.copy(pole)
    clone.model = copy.copy(pole.model)
    return clone


def _shortened_pole(pole: SupportPole | None, length: float) -> SupportPole | None:
    return None if pole is None else pole.decrease_height(length)


class ResourceSink(Protocol):
    def distribute_resources(self, total_resources: float, metamer: Metamer) -> None: ...


class Metamer:
    """A branch segment whose tip carries a terminal and an auxiliary bud.

    A bud that has grown is replaced by the metamer it produced.
    """

    def __init__(
        self,
        start_point: Vec3,
        end_point: Vec3,
        genetics: PlantGenetics,
        metamer_id: int,
        support_pole: SupportPole | None = None,
    ) -> None:
        direction = (end_point - start_point).norm()
        self.auxillary_direction = self._random_perturbation(
            direction, genetics.axillary_perturbation_angle
        )
        self.branch_data = BranchData(start_point, end_point, 0.0, 0.0, _WOOD_COLOR, metamer_id)
        self.genetics = genetics
        self.last_light_generated = 0.0
        self.support_pole = support_pole
        self.aux_support_pole: SupportPole | None = None

        self.terminal_metamer: Metamer | None = None
        self.last_terminal_light_generated = 0.0
        self.last_terminal_resources = 0.0
        self.terminal_bud_data = BranchData(
            end_point,
            end_point + direction * _BUD_LENGTH,
            _BUD_WIDTH,
            _BUD_WIDTH,
            _BUD_COLOR,
            _next_bud_id(),
        )
        self.terminal_bud_damage = 0.0

        self.auxillary_metamer: Metamer | None = None
        self.last_aux_light_generated = 0.0
        self.last_aux_resources = 0.0
        self.aux_bud_data = BranchData(
            end_point,
            end_point + self.auxillary_direction * _BUD_LENGTH,
            _BUD_WIDTH,
            _BUD_WIDTH,
            _BUD_COLOR,
            _next_bud_id(),
        )
        self.auxillary_bud_damage = 0.0

    def __repr__(self) -> str:
        return (
            f"Metamer(id={self.id}, start_point={self.start_point!r}, "
            f"end_point={self.end_point!r})"
        )

    # segment geometry

    @property
    def id(self) -> int:
        return self.branch_data.id

    @property
    def start_point(self) -> Vec3:
        return self.branch_data.start_point

    @property
    def end_point(self) -> Vec3:
        return self.branch_data.end_point

    @property
    def start_width(self) -> float:
        return self.branch_data.start_width

    @property
    def end_width(self) -> float:
        return self.branch_data.end_width

    def length(self) -> float:
        return self.branch_data.length()

    def direction(self) -> Vec3:
        return self.branch_data.direction()

    def _children(self) -> Iterator[Metamer]:
        if self.terminal_metamer is not None:
            yield self.terminal_metamer
        if self.auxillary_metamer is not None:
            yield self.auxillary_metamer

    # drawing and space

    def collect_branchdata(self) -> list[BranchData]:
        """Every drawable segment of this subtree: metamers, bare buds and visible poles."""
        result = [self.branch_data]
        if self.terminal_metamer is not None:
            result.extend(self.terminal_metamer.collect_branchdata())
        else:
            result.append(self.terminal_bud_data)
        if self.auxillary_metamer is not None:
            result.extend(self.auxillary_metamer.collect_branchdata())
        else:
            result.append(self.aux_bud_data)
            if self.aux_support_pole is not None and self.aux_support_pole.visible:
                result.append(self.aux_support_pole.model)
        if self.support_pole is not None and self.support_pole.visible:
            result.append(self.support_pole.model)
        return result

    def remove_markers_on_buds(self, markers: MarkerSet) -> None:
        """Mark the space around every metamer tip of the subtree as occupied."""
        markers.remove_markers_in_sphere(self.end_point, self.genetics.occupancy_radius_factor)
        for child in self._children():
            child.remove_markers_on_buds(markers)

    def place_markers(self, markers: MarkerSet) -> int:
        """Let every bare bud claim markers in its perception cone; return claims made."""
        theta = self.genetics.bud_perception_angle
        r = self.genetics.bud_perception_radius_factor
        total = 0
        if self.terminal_metamer is not None:
            total += self.terminal_metamer.place_markers(markers)
        else:
            total += markers.set_markers_in_cone(
                self.terminal_bud_data.id, self.end_point, self.direction(), theta, r
            )
        if self.auxillary_metamer is not None:
            total += self.auxillary_metamer.place_markers(markers)
        else:
            total += markers.set_markers_in_cone(
                self.aux_bud_data.id, self.end_point, self.auxillary_direction, theta, r
            )
        return total

    def place_shadows(self, shadowvoxels: ShadowVoxelSet) -> None:
        """Cast a shadow from every metamer tip of the subtree."""
        shadowvoxels.add_shadow(self.end_point)
        for child in self._children():
            child.place_shadows(shadowvoxels)

    # growth

    def calc_light_gathered(self, environment: Environment) -> float:
        """Compute, store and return the light gathered by the subtree."""
        if self.terminal_metamer is not None:
            self.last_terminal_light_generated = self.terminal_metamer.calc_light_gathered(
                environment
            )
        else:
            self.last_terminal_light_generated = environment.calc_light_gathered(
                self.end_point,
                self.genetics,
                self.terminal_bud_data.id,
                self.length(),
                self.direction(),
            )
        if self.auxillary_metamer is not None:
            self.last_aux_light_generated = self.auxillary_metamer.calc_light_gathered(
                environment
            )
        else:
            self.last_aux_light_generated = environment.calc_light_gathered(
                self.end_point,
                self.genetics,
                self.aux_bud_data.id,
                self.length(),
                self.auxillary_direction,
            )
        self.last_light_generated = (
            self.last_terminal_light_generated + self.last_aux_light_generated
        )
        return self.last_light_generated

    def distribute_resources(self, distributor: ResourceSink, total_resources: float) -> None:
        """Hand ``total_resources`` to ``distributor`` to spread over this subtree."""
        distributor.distribute_resources(total_resources, self)

    def add_shoots(self, environment: Environment) -> int:
        """Grow new shoots from buds with enough resources; return shoots added."""
        added = self._add_auxillary_shoot(environment)
        added += self._add_terminal_shoot(environment)
        return added

    def _add_terminal_shoot(self, environment: Environment) -> int:
        if self.terminal_metamer is not None:
            return self.terminal_metamer.add_shoots(environment)
        if self.last_terminal_resources < self.genetics.terminal_shoot_requirement:
            return 0
        if self.terminal_bud_damage > 0.0:
            self.terminal_bud_damage = max(
                self.terminal_bud_damage - parameters.BUD_RECOVERY_SPEED, 0.0
            )
            return 0
        support = _shortened_pole(self.support_pole, self.length())
        self.terminal_metamer = self.create_shoot(
            environment,
            self.last_terminal_resources,
            self.terminal_bud_data.id,
            self.end_point,
            self.direction(),
            support,
        )
        return 1 if self.terminal_metamer is not None else 0

    def _add_auxillary_shoot(self, environment: Environment) -> int:
        if self.auxillary_metamer is not None:
            return self.auxillary_metamer.add_shoots(environment)
        if self.last_aux_resources < self.genetics.aux_shoot_requirement(self):
            return 0
        if self.auxillary_bud_damage > 0.0:
            self.auxillary_bud_damage = max(
                self.auxillary_bud_damage - parameters.BUD_RECOVERY_SPEED, 0.0
            )
            return 0
        if self.terminal_metamer is None and self.terminal_bud_damage == 0.0:
            # the auxiliary bud waits until the terminal bud has grown
            return 0
        direction = self.auxillary_direction
        if self.terminal_bud_damage > 0.0:
            # with the terminal bud gone, the auxiliary shoot leans towards the axis
            direction = direction + self.direction()
        self.auxillary_metamer = self.create_shoot(
            environment,
            self.last_aux_resources,
            self.aux_bud_data.id,
            self.end_point,
            direction.norm(),
            _clone_pole(self.aux_support_pole),
        )
        return 1 if self.auxillary_metamer is not None else 0

    def _metamer_direction(
        self, environment: Environment, optimal_growth_direction: Vec3, bud_direction: Vec3
    ) -> Vec3:
        direction = (
            bud_direction
            + optimal_growth_direction * self.genetics.optimal_growth_direction_weight
            + environment.tropism_dir * environment.tropism_growth_direction_weight
        )
        return direction.norm()

    def create_shoot(
        self,
        environment: Environment,
        last_resources: float,
        bud_id: int,
        point: Vec3,
        direction: Vec3,
        support_pole: SupportPole | None,
    ) -> Metamer | None:
        """Build a chain of metamers from the bud at ``point``.

        One metamer is made per whole unit of ``last_resources``. Returns the
        first metamer of the chain, or None if there is no room or too few resources.
        """
        optimal = environment.optimal_growth_direction(
            point, self.genetics, bud_id, self.length(), direction
        )
        if optimal is None:
            return None
        if math.isinf(last_resources):
            raise ValueError("resources must be finite")
        if math.isnan(last_resources) or last_resources < 1.0:
            return None
        count = math.floor(last_resources)
        metamer_length = (last_resources / count) * self.genetics.metamer_base_length

        head: Metamer | None = None
        last: Metamer | None = None
        prev_end = point
        metamer_dir = direction
        for _ in range(count):
            metamer_dir = self._metamer_direction(environment, optimal, metamer_dir)
            if support_pole is not None:
                metamer_dir = (metamer_dir + support_pole.direction).norm()
            end_point = prev_end + metamer_dir * metamer_length
            metamer = Metamer(
                prev_end, end_point, self.genetics, bud_id, _clone_pole(support_pole)
            )
            bud_id = metamer.terminal_bud_data.id
            if last is None:
                head = metamer
            else:
                last.terminal_metamer = metamer
            last = metamer
            prev_end = end_point
            support_pole = _shortened_pole(support_pole, metamer_length)
        return head

    # structure

    def bounding_volume(self) -> BoundingVolume:
        """Volume holding this segment and the segments of its direct children."""
        volume = self.branch_data.bounding_volume()
        for child in self._children():
            volume = volume.merge(child.branch_data.bounding_volume())
        return volume

    def count_metamers(self) -> int:
        """Number of metamers in the subtree, this one included."""
        return 1 + sum(child.count_metamers() for child in self._children())

    def shed_branches(self, environment: Environment) -> None:
        """Drop branches that left the environment or gather too little light per metamer."""
        child = self.terminal_metamer
        if child is not None:
            if not environment.is_inside(child.end_point):
                self.prune_terminal()
            elif (
                self.last_terminal_light_generated / child.count_metamers()
                < self.genetics.shed_treshhold
            ):
                self.prune_terminal()
            else:
                child.shed_branches(environment)
        child = self.auxillary_metamer
        if child is not None:
            if not environment.is_inside(child.end_point):
                self.prune_auxillary()
            elif (
                self.last_aux_light_generated / child.count_metamers()
                < self.genetics.shed_treshhold
            ):
                self.prune_auxillary()
            else:
                child.shed_branches(environment)

    def update_width(self) -> None:
        """Thicken the subtree bottom-up following the pipe model; widths never shrink."""
        exponent = parameters.WIDTH_GROW_EXPONENT
        total = parameters.WIDTH_MIN_VALUE
        for child in self._children():
            child.update_width()
            total += child.start_width**exponent
            self.branch_data.end_width = max(self.branch_data.end_width, child.start_width)
        self.branch_data.start_width = max(self.branch_data.start_width, total ** (1.0 / exponent))

    def get_metamer_by_id(self, metamer_id: int) -> Metamer | None:
        """A snapshot of the subtree rooted at the metamer with ``metamer_id``, or None."""
        if self.id == metamer_id:
            return copy.deepcopy(self, {id(self.genetics): self.genetics})
        for child in self._children():
            found = child.get_metamer_by_id(metamer_id)
            if found is not None:
                return found
        return None

    @staticmethod
    def _random_perturbation(original: Vec3, angle: float) -> Vec3:
        original = original * 0.01
        vx = Vec3(1.0, 0.0, 0.0)
        vy = Vec3(0.0, 1.0, 0.0)
        auxiliary = vy if abs(original.dot(vx)) > 1.0 - 1.0e-6 else vx
        cross = original.cross(auxiliary).norm()
        s = rng.rand()
        r = rng.rand()
        h = math.cos(angle)
        phi = 2.0 * math.pi * s
        z = h + (1.0 - h) * r
        sin_t = math.sqrt(max(1.0 - z * z, 0.0))
        x = math.cos(phi) * sin_t
        y = math.sin(phi) * sin_t
        return (auxiliary * x + cross * y + original * z).norm()

    # pruning

    def prune_id(self, bud_id: int) -> None:
        """Prune the bud, and whatever grew from it, whose id is ``bud_id``."""
        if self.aux_bud_data.id == bud_id:
            self.prune_auxillary()
            return
        if self.terminal_bud_data.id == bud_id:
            self.prune_terminal()
            return
        for child in self._children():
            child.prune_id(bud_id)

    def prune_terminal(self) -> None:
        self.terminal_metamer = None
        self.terminal_bud_damage = 1.0

    def prune_auxillary(self) -> None:
        self.auxillary_metamer = None
        self.auxillary_bud_damage = 1.0

    def total_metamers(self) -> int:
        """Number of bare buds at the tips of the subtree."""
        total = 0
        total += self.terminal_metamer.total_metamers() if self.terminal_metamer else 1
        total += self.auxillary_metamer.total_metamers() if self.auxillary_metamer else 1
        return total

    def longest_path(self) -> int:
        """Number of metamers on the longest path from here to a tip."""
        return 1 + max((child.longest_path() for child in self._children()), default=0)