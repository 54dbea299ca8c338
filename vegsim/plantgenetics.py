"""Genetic parameters that shape a plant's growth."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from vegsim import parameters
from vegsim.treeparameter import GeneticKind, GeneticParameter

_GENETIC_FIELDS = {
    GeneticKind.BORCHERT_HONDA_LAMBDA: "borchert_honda_lambda",
    GeneticKind.BORCHERT_HONDA_ALPHA: "borchert_honda_alpha",
    GeneticKind.POLE_LENGTH: "pole_length",
    GeneticKind.AUX_SHOOT_REQ: "base_aux_shoot_requirement",
}


@dataclass
class PlantGenetics:
    """The plant's genetic make-up; defaults come from the simulation parameters."""

    borchert_honda_lambda: float = parameters.BORCHERT_HONDA_LAMBDA
    borchert_honda_alpha: float = parameters.BORCHERT_HONDA_ALPHA
    pole_length: float = parameters.POLE_LENGTH
    base_aux_shoot_requirement: float = parameters.AUX_SHOOT_REQUIREMENT
    terminal_shoot_requirement: float = parameters.TERM_SHOOT_REQUIREMENT
    metamer_base_length: float = parameters.METAMER_BASE_LENGTH
    bud_perception_angle: float = parameters.BUD_PERCEPTION_ANGLE
    bud_perception_radius_factor: float = parameters.BUD_PERCEPTION_RADIUS_FACTOR
    occupancy_radius_factor: float = parameters.OCCUPANCY_RADIUS_FACTOR
    axillary_perturbation_angle: float = parameters.AXILLARY_PERTURBATION_ANGLE
    optimal_growth_direction_weight: float = parameters.OPTIMAL_GROWTH_DIRECTION_WEIGHT
    shed_treshhold: float = parameters.SHED_TRESHHOLD

    def aux_shoot_requirement(self, metamer: Any = None) -> float:
        """Resources an auxiliary bud needs.

        When the metamer's terminal bud is damaged, the auxiliary bud takes
        over and needs only the terminal requirement.
        """
        if metamer is not None and metamer.terminal_bud_damage > 0.0:
            return self.terminal_shoot_requirement
        return self.base_aux_shoot_requirement

    def update_param(self, param: GeneticParameter) -> None:
        """Store the value carried by ``param``."""
        setattr(self, _GENETIC_FIELDS[param.kind], param.value)

    def get_param(self, param: GeneticParameter) -> GeneticParameter:
        """Return ``param``'s kind carrying the current value."""
        return GeneticParameter(param.kind, getattr(self, _GENETIC_FIELDS[param.kind]))