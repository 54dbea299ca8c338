"""Automatic pruning that trains a plant into a layered espalier."""

from __future__ import annotations

from typing import Protocol

from vegsim.branchdata import SupportPole
from vegsim.metamer import Metamer
from vegsim.pruning import short_metamer_length
from vegsim.vector import Vec3

PASS_LENGTH = 6
"""Number of trunk metamers in one espalier layer."""

MAX_TRUNK_METAMERS = 23
"""Trunk metamers beyond this index are cut off."""

_BRANCH_POLE_LENGTH = 1.7
_BRANCH_POLE_WIDTH = 0.0001
_TRUNK_POLE_LENGTH = 1.0
_LEFT = Vec3(-1.0, 0.0, 0.0)
_RIGHT = Vec3(1.0, 0.0, 0.0)
_UP = Vec3(0.0, 1.0, 0.0)


class _HasRoot(Protocol):
    root: Metamer


def _trunk_metamer(root: Metamer, n: int, remaining: int) -> Metamer | None:
    """The ``n``-th metamer of the espalier trunk.

    The trunk follows terminal metamers within a layer and switches to the
    auxiliary metamer at the end of every layer.
    """
    current = root
    while n > 0:
        if remaining > 1:
            nxt = current.terminal_metamer
            remaining -= 1
        else:
            nxt = current.auxillary_metamer
            remaining = PASS_LENGTH
        if nxt is None:
            return None
        current = nxt
        n -= 1
    return current


def _branch_maintenance(root: Metamer) -> None:
    short_metamer_length(root, 20)
    _short_branch_aux(root)


def _short_branch_aux(root: Metamer) -> None:
    current: Metamer | None = root
    while current is not None:
        if current.auxillary_metamer is not None:
            short_metamer_length(current.auxillary_metamer, 2)
        nxt = current.terminal_metamer
        if nxt is not None:
            short_metamer_length(nxt, 20)
        current = nxt


def _guide_side_branch(metamer: Metamer, direction: Vec3) -> None:
    if metamer.auxillary_metamer is not None:
        _branch_maintenance(metamer.auxillary_metamer)
        return
    pole = SupportPole(_BRANCH_POLE_LENGTH, metamer.end_point, direction, True)
    pole.update_width(_BRANCH_POLE_WIDTH)
    metamer.aux_support_pole = pole


class AutopruneSpalier:
    """Prunes a plant layer by layer into an espalier shape."""

    def update_plant(self, plant: _HasRoot) -> None:
        """Apply the espalier rules to every trunk metamer of ``plant``."""
        n = 0
        while (metamer := _trunk_metamer(plant.root, n, PASS_LENGTH)) is not None:
            if n > MAX_TRUNK_METAMERS:
                metamer.prune_auxillary()
                metamer.prune_terminal()
                break

            position = n % PASS_LENGTH
            if position < PASS_LENGTH - 3:
                # spacing between the layers
                metamer.prune_auxillary()
            if position == PASS_LENGTH - 3:
                _guide_side_branch(metamer, _LEFT)
            if position == PASS_LENGTH - 2:
                _guide_side_branch(metamer, _RIGHT)
            if position == PASS_LENGTH - 1:
                # the auxiliary bud takes over the trunk
                metamer.prune_terminal()
                metamer.aux_support_pole = SupportPole(
                    _TRUNK_POLE_LENGTH, metamer.end_point, _UP, False
                )
            n += 1