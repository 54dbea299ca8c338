"""Tunable tree parameters and simulation modes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class DistributionMode(Enum):
    """How resources are spread over the buds."""

    BORCHERT_HONDA = "BorchertHonda"
    PRIORITY_LIST = "PriorityList"
    NONE = "None"

    def __str__(self) -> str:
        return self.value


class SpaceDividingMode(Enum):
    """How light and free space are estimated."""

    MARKERS = "Markers"
    SHADOW_VOXELS = "ShadowVoxels"
    NONE = "None"

    def __str__(self) -> str:
        return self.value


class GeneticKind(Enum):
    BORCHERT_HONDA_LAMBDA = "BorchertHondaLambda"
    BORCHERT_HONDA_ALPHA = "BorchertHondaAlpha"
    POLE_LENGTH = "PoleLength"
    AUX_SHOOT_REQ = "AuxShootReq"


@dataclass(frozen=True)
class GeneticParameter:
    """A single genetic value, tagged with what it controls."""

    kind: GeneticKind
    value: float = 0.0


class TreeParameterKind(Enum):
    GENETIC = "Genetic"
    RESOURCE_DISTRIBUTION_MODE = "ResourceDistributionMode"
    SPACE_DIVIDING_MODE = "SpaceDividingMode"
    PRUNE_MOD_ON = "PruneModOn"


_VALUE_TYPES = {
    TreeParameterKind.GENETIC: GeneticParameter,
    TreeParameterKind.RESOURCE_DISTRIBUTION_MODE: DistributionMode,
    TreeParameterKind.SPACE_DIVIDING_MODE: SpaceDividingMode,
    TreeParameterKind.PRUNE_MOD_ON: bool,
}

ParameterValue = Union[GeneticParameter, DistributionMode, SpaceDividingMode, bool]


@dataclass(frozen=True)
class TreeParameter:
    """A tree setting; the value's type must match the kind."""

    kind: TreeParameterKind
    value: ParameterValue

    def __post_init__(self) -> None:
        expected = _VALUE_TYPES[self.kind]
        if not isinstance(self.value, expected):
            raise TypeError(
                f"{self.kind.value} expects {expected.__name__}, "
                f"got {type(self.value).__name__}"
            )

    @classmethod
    def genetic(cls, parameter: GeneticParameter) -> TreeParameter:
        return cls(TreeParameterKind.GENETIC, parameter)

    @classmethod
    def resource_distribution_mode(cls, mode: DistributionMode) -> TreeParameter:
        return cls(TreeParameterKind.RESOURCE_DISTRIBUTION_MODE, mode)

    @classmethod
    def space_dividing_mode(cls, mode: SpaceDividingMode) -> TreeParameter:
        return cls(TreeParameterKind.SPACE_DIVIDING_MODE, mode)

    @classmethod
    def prune_mod_on(cls, on: bool) -> TreeParameter:
        return cls(TreeParameterKind.PRUNE_MOD_ON, on)