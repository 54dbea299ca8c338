"""Spreading a plant's resources over its buds."""

from __future__ import annotations

import math
from dataclasses import dataclass

from vegsim import parameters
from vegsim.metamer import Metamer
from vegsim.treeparameter import DistributionMode

_W_MAX = 1.0
_W_MIN = 0.006
_K = 0.5


def _divide(numerator: float, denominator: float) -> float:
    """Floating-point division that yields inf or NaN instead of raising."""
    if denominator == 0.0:
        if numerator == 0.0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def borchert_honda_split(
    resources: float, q_m: float, q_l: float, lam: float
) -> tuple[float, float]:
    """Split ``resources`` between the main axis and the lateral branch.

    ``q_m`` and ``q_l`` are the light gathered by each side and ``lam`` the
    bias towards the main axis. Returns ``(main, lateral)``.
    """
    denominator = lam * q_m + (1.0 - lam) * q_l
    v_m = _divide(resources * lam * q_m, denominator)
    v_l = _divide(resources * (1.0 - lam) * q_l, denominator)
    return v_m, v_l


def priority_list_weight(i: float, total: float) -> float:
    """Weight of the item at position ``i`` in a priority list of ``total`` items."""
    if _K * total <= i:
        return _W_MIN
    return _W_MAX - (i / (total * _K)) * (_W_MAX - _W_MIN)


@dataclass
class _BudInfo:
    light_collected: float
    bud_id: int
    total_buds: int

    @property
    def priority(self) -> float:
        return self.light_collected / self.total_buds


def _priority_list_insert(priorities: list[_BudInfo], bud: _BudInfo) -> None:
    """Insert ``bud`` before the first entry with a strictly lower priority."""
    priority = bud.priority
    position = next(
        (i for i, listed in enumerate(priorities) if listed.priority < priority),
        len(priorities),
    )
    priorities.insert(position, bud)


def _trunk(metamer: Metamer):
    """Yield ``metamer`` and its chain of terminal metamers."""
    current: Metamer | None = metamer
    while current is not None:
        yield current
        current = current.terminal_metamer


def _reset_bud_resources(metamer: Metamer) -> None:
    metamer.last_terminal_resources = 0.0
    metamer.last_aux_resources = 0.0
    if metamer.terminal_metamer is not None:
        _reset_bud_resources(metamer.terminal_metamer)
    if metamer.auxillary_metamer is not None:
        _reset_bud_resources(metamer.auxillary_metamer)


def _distribute_borchert_honda(total_resources: float, metamer: Metamer) -> float:
    """Distribute over the subtree; return the bonus passed back to the parent."""
    lam = metamer.genetics.borchert_honda_lambda
    q_m = metamer.last_terminal_light_generated
    q_l = metamer.last_aux_light_generated
    if q_m + q_l <= 0.0:
        return 0.0

    terminal, auxiliary = borchert_honda_split(total_resources, q_m, q_l, lam)
    bonus = 0.0
    if metamer.auxillary_bud_damage > 0.0:
        terminal += auxiliary
        auxiliary = 0.0
    if metamer.terminal_bud_damage > 0.0:
        bonus = terminal
        terminal = 0.0
    metamer.last_terminal_resources = terminal
    metamer.last_aux_resources = auxiliary

    if metamer.terminal_metamer is not None:
        bonus += _distribute_borchert_honda(terminal, metamer.terminal_metamer)

    metamer.last_aux_resources += bonus * 0.5

    if metamer.auxillary_metamer is not None:
        _distribute_borchert_honda(metamer.last_aux_resources, metamer.auxillary_metamer)
    return bonus * 0.5


def _create_priority_list(metamer: Metamer) -> list[_BudInfo]:
    priorities: list[_BudInfo] = []
    last = metamer
    for branch_metamer in _trunk(metamer):
        aux = branch_metamer.auxillary_metamer
        if branch_metamer.auxillary_bud_damage == 0.0:
            _priority_list_insert(
                priorities,
                _BudInfo(
                    branch_metamer.last_aux_light_generated,
                    branch_metamer.aux_bud_data.id,
                    aux.total_metamers() if aux is not None else 1,
                ),
            )
        last = branch_metamer
    if last.terminal_bud_damage == 0.0:
        priorities.insert(
            0, _BudInfo(last.last_terminal_light_generated, last.terminal_bud_data.id, 1)
        )
    return priorities


def _distribute_priority_map(metamer: Metamer, resource_map: dict[int, float]) -> None:
    last = metamer
    for branch_metamer in _trunk(metamer):
        resources = resource_map.get(branch_metamer.aux_bud_data.id, 0.0)
        branch_metamer.last_aux_resources = resources
        if branch_metamer.auxillary_metamer is not None:
            _distribute_priority_list(resources, branch_metamer.auxillary_metamer)
        last = branch_metamer
    last.last_terminal_resources = resource_map.get(last.terminal_bud_data.id, 0.0)


def _distribute_priority_list(total_resources: float, metamer: Metamer) -> None:
    if metamer.last_light_generated <= 0.0:
        return
    priorities = _create_priority_list(metamer)
    count = len(priorities)
    weighted = [
        priority_list_weight(i, count) * bud.light_collected
        for i, bud in enumerate(priorities)
    ]
    priority_sum = sum(weighted)
    resource_map = {
        bud.bud_id: total_resources * _divide(weight, priority_sum)
        for bud, weight in zip(priorities, weighted)
    }
    _distribute_priority_map(metamer, resource_map)


class ResourceDistributor:
    """Hands the resources gathered by a plant to its buds."""

    def __init__(self, mode: DistributionMode | None = None) -> None:
        self.mode = parameters.RESOURCE_DISTRIBUTION_MODE if mode is None else mode

    def __repr__(self) -> str:
        return f"ResourceDistributor(mode={self.mode})"

    def distribute_resources(self, total_resources: float, metamer: Metamer) -> None:
        """Clear the buds' resources, then spread ``total_resources`` over the subtree."""
        _reset_bud_resources(metamer)
        if self.mode is DistributionMode.BORCHERT_HONDA:
            _distribute_borchert_honda(total_resources, metamer)
        elif self.mode is DistributionMode.PRIORITY_LIST:
            _distribute_priority_list(total_resources / 2.0, metamer)