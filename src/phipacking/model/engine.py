"""
Packing Engine
==============
The single entry point the UI talks to.

Why is this file needed?
------------------------
1. Facade: it groups the store mutations (add/clear) and the two drag
   handlers (hinge on move, magnet snap on release) behind one object.
2. Isolation: callers only ever receive copies of nodes, so the state can be
   mutated by the engine alone.
"""
from __future__ import annotations

from dataclasses import replace
import logging
from typing import Dict, List, Optional

import numpy as np

from phipacking.model.geometry_primitives import Point
from phipacking.model.hinge import apply_hinges
from phipacking.model.size_table import SizeTable, DEFAULT_SIZE_TABLE
from phipacking.model.snap import SnapCandidate, try_magnet_snap
from phipacking.model.state import Link, Node, PackingState, SnapSettings

logger = logging.getLogger(__name__)


class PackingEngine:
    def __init__(
        self,
        size_table: SizeTable = DEFAULT_SIZE_TABLE,
        settings: Optional[SnapSettings] = None,
        seed: Optional[int] = None
    ) -> None:
        self.state = PackingState(size_table=size_table, rng=np.random.default_rng(seed))
        self.settings = settings if settings is not None else SnapSettings()
        self.last_snap: Optional[SnapCandidate] = None

    @property
    def size_table(self) -> SizeTable:
        return self.state.size_table

    # ---- store mutations ----

    def add_node(self, exponent: int, position: Optional[Point] = None) -> Node:
        return replace(self.state.add_node(exponent, position))

    def add_size_set(self) -> List[Node]:
        return [replace(n) for n in self.state.add_size_set()]

    def clear_all(self) -> None:
        self.state.clear()
        self.last_snap = None

    # ---- drag handlers ----

    def on_drag_move(self, node_id: int, world_position: Point) -> Optional[Node]:
        node = apply_hinges(self.state, node_id, world_position)
        return replace(node) if node is not None else None

    def on_drag_end(self, node_id: int, settings: Optional[SnapSettings] = None) -> Optional[Node]:
        self.last_snap = try_magnet_snap(self.state, node_id, settings or self.settings)
        node = self.state.get(node_id)
        return replace(node) if node is not None else None

    # ---- read-only views ----

    def get_nodes(self) -> List[Node]:
        return [replace(n) for n in self.state.nodes]

    def get_links(self) -> List[Link]:
        return list(self.state.links)

    def get_node(self, node_id: int) -> Optional[Node]:
        node = self.state.get(node_id)
        return replace(node) if node is not None else None

    def stats(self) -> Dict[str, object]:
        return self.state.stats()
