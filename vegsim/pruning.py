"""Manual pruning rules applied to a plant."""

from __future__ import annotations

import math
from enum import Enum
from typing import Callable, Iterator, Protocol

from vegsim import rng
from vegsim.metamer import Metamer
from vegsim.vector import Vec3, meter_to_real_length, rot_vec_around_axis

_DOWN = Vec3(0.0, -1.0, 0.0)


class PruneOperation(Enum):
    """The pruning rules a user can apply."""

    OP0 = "Op0"
    OP1 = "Op1"
    OP2 = "Op2"
    OP3 = "Op3"
    OP4 = "Op4"
    OP5 = "Op5"
    SPIL_1 = "Spil_1"
    SPIL_2 = "Spil_2"
    SPIL_3 = "Spil_3"

    def __str__(self) -> str:
        return self.value


class _HasRoot(Protocol):
    root: Metamer


def _trunk(root: Metamer) -> Iterator[Metamer]:
    current: Metamer | None = root
    while current is not None:
        yield current
        current = current.terminal_metamer


def short_metamer_buds(root: Metamer, max_buds: int) -> None:
    """Cut every path from ``root`` down to ``max_buds`` metamers.

    Counts below one leave the tree untouched.
    """
    if max_buds == 1:
        root.prune_terminal()
        root.prune_auxillary()
        return
    if max_buds < 1:
        return
    for child in (root.terminal_metamer, root.auxillary_metamer):
        if child is not None:
            short_metamer_buds(child, max_buds - 1)


def short_metamer_length(root: Metamer, length: int) -> None:
    """Shorten the branch at ``root`` to at most ``length`` metamers."""
    short_metamer_buds(root, length)


def _prune_rule_1(root: Metamer) -> None:
    for metamer in _trunk(root):
        if metamer.support_pole is None:
            return
        metamer.prune_auxillary()


def _prune_rule_2(root: Metamer) -> None:
    for metamer in _trunk(root):
        if metamer.auxillary_metamer is not None:
            short_metamer_buds(metamer.auxillary_metamer, rng.choose([3, 4]))


def _prune_rule_3(root: Metamer) -> None:
    max_branches = rng.choose([3, 4])
    for metamer in _trunk(root):
        if max_branches == 0:
            metamer.prune_terminal()
            return
        aux = metamer.auxillary_metamer
        if aux is not None:
            max_branches -= 1
            new_length = math.floor(aux.longest_path() * (2.0 / 3.0) + 0.5)
            short_metamer_length(aux, new_length)


def _prune_rule_4(root: Metamer) -> None:
    root.prune_auxillary()
    if root.terminal_metamer is not None:
        _prune_rule_1(root.terminal_metamer)


def _prune_spil_1(root: Metamer) -> None:
    max_term_height = meter_to_real_length(0.9)
    for metamer in _trunk(root):
        if metamer.end_point.y > max_term_height:
            metamer.prune_terminal()
            return


def _branch_shorten(root: Metamer, passed_length: int) -> bool:
    """Cut the branch back to the first bud aimed downward; True if one was found."""
    if passed_length > 2 and root.terminal_metamer is not None:
        opposite = rot_vec_around_axis(root.auxillary_direction, root.direction(), math.pi)
        if root.auxillary_direction.angle_between(_DOWN) < opposite.angle_between(_DOWN):
            root.prune_terminal()
            return True
    success = False
    if root.terminal_metamer is not None:
        success = _branch_shorten(root.terminal_metamer, passed_length + 1)
    if not success and root.auxillary_metamer is not None:
        success = _branch_shorten(root.auxillary_metamer, passed_length + 1)
    return success


def _prune_spil_2(root: Metamer) -> None:
    for metamer in _trunk(root):
        aux = metamer.auxillary_metamer
        if aux is not None and not _branch_shorten(aux, 0):
            short_metamer_length(aux, aux.longest_path() // 2)


def _prune_nothing(root: Metamer) -> None:
    return None


_RULES: dict[PruneOperation, Callable[[Metamer], None]] = {
    PruneOperation.OP0: _prune_nothing,
    PruneOperation.OP1: _prune_rule_1,
    PruneOperation.OP2: _prune_rule_2,
    PruneOperation.OP3: _prune_rule_3,
    PruneOperation.OP4: _prune_rule_4,
    PruneOperation.OP5: _prune_rule_4,
    PruneOperation.SPIL_1: _prune_spil_1,
    PruneOperation.SPIL_2: _prune_spil_2,
    PruneOperation.SPIL_3: _prune_nothing,
}


def prune_by_rule(rule: PruneOperation, plant: _HasRoot) -> None:
    """Apply the pruning ``rule`` to ``plant``'s tree."""
    _RULES[rule](plant.root)