"""
Packing State (Data Model)
==========================
This module defines the central data structure for the running application.

Why is this file needed?
------------------------
1. State Management: It holds the placed spheres and the links between them
   in one place. The rendered scene is always rebuilt from this object.
2. Decoupling: Views read from this object; the engine and the controller
   write to it.

Classes:
    Node: A placed sphere.
    Link: An unordered pair of node ids in tangential contact.
    SnapSettings: The magnet toggle and the snap tolerance.
    PackingState: The node/link container (the node store).
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
import logging
import math
from typing import Dict, List, Optional

import numpy as np

from phipacking.config import (
    DEFAULT_MAGNET_ENABLED, DEFAULT_SNAP_TOLERANCE, RANDOM_SPREAD,
    SIZE_SET_CLEARANCE, SIZE_SET_START_X
)
from phipacking.model.geometry_primitives import Point
from phipacking.model.size_table import SizeTable, DEFAULT_SIZE_TABLE

logger = logging.getLogger(__name__)


@dataclass
class Node:
    """A placed sphere. Only `position` changes after creation."""
    id: int
    exponent: int
    radius: float
    color: tuple[float, float, float]
    position: Point


@dataclass(frozen=True)
class Link:
    """Unordered pair of node ids. Stored with the smaller id first."""
    a_id: int
    b_id: int

    @classmethod
    def between(cls, id_a: int, id_b: int) -> Link:
        if id_a == id_b:
            raise ValueError(f"A link needs two distinct nodes, got {id_a} twice.")
        return cls(min(id_a, id_b), max(id_a, id_b))

    def other(self, node_id: int) -> int:
        return self.b_id if node_id == self.a_id else self.a_id

    def touches(self, node_id: int) -> bool:
        return node_id in (self.a_id, self.b_id)


@dataclass
class SnapSettings:
    magnet_enabled: bool = DEFAULT_MAGNET_ENABLED
    snap_tolerance: float = DEFAULT_SNAP_TOLERANCE  # fraction of the larger radius

    def __post_init__(self) -> None:
        self.snap_tolerance = float(self.snap_tolerance)
        if not math.isfinite(self.snap_tolerance) or self.snap_tolerance < 0.0:
            raise ValueError(f"Snap tolerance must be a finite non-negative number, got {self.snap_tolerance}.")


@dataclass
class PackingState:
    """
    Holds every node and link. Nodes keep creation order; links keep
    insertion order and are mirrored in an adjacency map for neighbor lookup.
    """
    size_table: SizeTable = field(default_factory=lambda: DEFAULT_SIZE_TABLE)
    rng: np.random.Generator = field(default_factory=np.random.default_rng)

    nodes: List[Node] = field(default_factory=list, init=False)
    links: List[Link] = field(default_factory=list, init=False)

    _by_id: Dict[int, Node] = field(default_factory=dict, init=False, repr=False)
    _adjacency: Dict[int, List[int]] = field(default_factory=dict, init=False, repr=False)
    _next_id: int = field(default=1, init=False, repr=False)

    # ---- nodes ----

    def add_node(self, exponent: int, position: Optional[Point] = None) -> Node:
        """Create a node with a fresh id. Without a position it lands randomly on the ground."""
        entry = self.size_table.entry(exponent)
        if position is None:
            x, z = self.rng.uniform(-RANDOM_SPREAD, RANDOM_SPREAD, size=2)
            position = Point(float(x), entry.radius, float(z))

        node = Node(
            id=self._next_id,
            exponent=entry.exponent,
            radius=entry.radius,
            color=entry.color,
            position=position,
        )
        self._next_id += 1
        self.nodes.append(node)
        self._by_id[node.id] = node
        logger.debug(f"Added node {node.id} (exponent {node.exponent}) at {position}.")
        return node

    def add_size_set(self) -> List[Node]:
        """
        One node per exponent in ladder order, in a row along +X on the ground.
        Successive surfaces are SIZE_SET_CLEARANCE apart along X.
        """
        created: List[Node] = []
        x = SIZE_SET_START_X
        previous: Optional[Node] = None
        for entry in self.size_table.entries():
            if previous is not None:
                x = previous.position.x + previous.radius + SIZE_SET_CLEARANCE + entry.radius
            previous = self.add_node(entry.exponent, Point(x, entry.radius, 0.0))
            created.append(previous)
        logger.info(f"Added a size set of {len(created)} nodes.")
        return created

    def get(self, node_id: int) -> Optional[Node]:
        return self._by_id.get(node_id)

    def clear(self) -> None:
        """Remove all nodes and links. Ids are not reused afterwards."""
        self.nodes.clear()
        self.links.clear()
        self._by_id.clear()
        self._adjacency.clear()
        logger.info("Packing state has been cleared.")

    # ---- links ----

    def add_link(self, id_a: int, id_b: int) -> bool:
        """
        Record a link between two existing nodes.

        Returns True if a new link was stored; self-links, duplicates (in
        either order) and unknown ids are ignored.
        """
        if id_a == id_b:
            return False
        if id_a not in self._by_id or id_b not in self._by_id:
            logger.debug(f"Ignoring link {id_a}-{id_b}: unknown node id.")
            return False
        if self.has_link(id_a, id_b):
            return False

        self.links.append(Link.between(id_a, id_b))
        self._adjacency.setdefault(id_a, []).append(id_b)
        self._adjacency.setdefault(id_b, []).append(id_a)
        logger.info(f"Linked nodes {id_a} and {id_b}.")
        return True

    def has_link(self, id_a: int, id_b: int) -> bool:
        return id_b in self._adjacency.get(id_a, ())

    def neighbors_of(self, node_id: int) -> List[Node]:
        return [self._by_id[i] for i in self._adjacency.get(node_id, ())]

    def links_of(self, node_id: int) -> List[Link]:
        return [link for link in self.links if link.touches(node_id)]

    def degree(self, node_id: int) -> int:
        return len(self._adjacency.get(node_id, ()))

    # ---- reporting ----

    def stats(self) -> Dict[str, object]:
        return {
            "nodes": len(self.nodes),
            "links": len(self.links),
            "per_exponent": dict(Counter(n.exponent for n in self.nodes)),
        }
