"""
Hinge Propagation
Keeps a dragged node in contact with every node it is linked to.
"""
from __future__ import annotations

import logging
from typing import Optional

from phipacking.model.geometry_primitives import Point, centroid, tangent_position
from phipacking.model.state import Node, PackingState

logger = logging.getLogger(__name__)


def apply_hinges(state: PackingState, node_id: int, target: Point) -> Optional[Node]:
    """
    Move a node toward `target` while keeping contact with its neighbors.

    The node is first placed at `target`. For each linked neighbor the
    position that would make the pair exactly tangent (along the line from
    the neighbor to the node) is computed, and the node ends at the plain
    average of those positions. With one neighbor the contact is exact; with
    several it is a compromise that satisfies none of them exactly. Call it
    on every drag step, since the directions depend on where the step starts.

    Args:
        state: The packing state to mutate.
        node_id: Id of the node being dragged.
        target: Requested world position for this step.

    Returns:
        The moved node, or None if the id is unknown.
    """
    node = state.get(node_id)
    if node is None:
        logger.debug(f"Drag move ignored: node {node_id} does not exist.")
        return None

    node.position = target
    neighbors = state.neighbors_of(node_id)
    if not neighbors:
        return node

    contacts = [
        tangent_position(m.position, m.radius, node.position, node.radius)
        for m in neighbors
    ]
    node.position = centroid(contacts)
    return node
