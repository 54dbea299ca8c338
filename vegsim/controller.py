"""Thread-safe access to the simulation for user interfaces."""

from __future__ import annotations

import threading

from vegsim.metamer import Metamer
from vegsim.pruning import PruneOperation
from vegsim.treeapp import TreeApp
from vegsim.treeparameter import TreeParameter


class Controller:
    """Serialises user actions on a TreeApp and keeps the selected metamer."""

    def __init__(self, treedata: TreeApp) -> None:
        self.treedata = treedata
        self.selected_metamer: Metamer | None = None
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        return f"Controller(treedata={self.treedata!r})"

    def perform_prune(self, operation: PruneOperation) -> None:
        with self._lock:
            self.treedata.prune_by_rule(operation)

    def reset_plants(self) -> None:
        with self._lock:
            self.treedata.reset_plants()

    def recalculate_plants(self) -> None:
        with self._lock:
            self.treedata.recalculate_plants()

    def prune_id(self, bud_id: int) -> None:
        with self._lock:
            self.treedata.prune_id(bud_id)

    def perform_growth_iteration(self) -> None:
        with self._lock:
            self.treedata.perform_growth_iteration()

    def update_selected(self, selected_id: int | None) -> None:
        """Select ``selected_id``; the stored metamer is kept when selecting nothing."""
        with self._lock:
            self.treedata.set_selected_id(selected_id)
            if selected_id is not None:
                self.selected_metamer = self.treedata.get_metamer_by_id(selected_id)

    def update_tree_param(self, param: TreeParameter) -> None:
        with self._lock:
            self.treedata.update_tree_param(param)

    def get_tree_param(self, param: TreeParameter) -> TreeParameter:
        with self._lock:
            return self.treedata.get_tree_param(param)