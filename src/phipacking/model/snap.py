"""
Magnetic Snap (adjacent sizes only)
On release, locks a node onto the closest-to-tangent neighbor whose exponent
is next to its own on the size ladder.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Optional

from phipacking.model.geometry_primitives import tangent_position
from phipacking.model.state import Node, PackingState, SnapSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SnapCandidate:
    """A node the released node could snap onto."""
    node_id: int
    error: float  # |center distance - (r1 + r2)|
    tolerance: float  # acceptance window for this pair


def find_snap_candidate(state: PackingState, node: Node, settings: SnapSettings) -> Optional[SnapCandidate]:
    """
    Best snap target for `node`, or None.

    Only nodes one ladder step away from `node` are considered. A candidate
    qualifies when its tangency error is within `snap_tolerance` times the
    larger of the two radii; the smallest error wins, the first one seen on
    ties.
    """
    table = state.size_table
    best: Optional[SnapCandidate] = None
    for other in state.nodes:
        if other.id == node.id:
            continue
        if not table.are_adjacent(node.exponent, other.exponent):
            continue

        target = node.radius + other.radius
        error = abs(node.position.distance_to(other.position) - target)
        tolerance = settings.snap_tolerance * max(node.radius, other.radius)
        if error <= tolerance and (best is None or error < best.error):
            best = SnapCandidate(node_id=other.id, error=error, tolerance=tolerance)
    return best


def try_magnet_snap(state: PackingState, node_id: int, settings: SnapSettings) -> Optional[SnapCandidate]:
    """
    Snap a released node onto its best adjacent-size candidate.

    On success the node is moved to exact tangency with the candidate and the
    pair is linked (linking is idempotent). Nothing changes when the magnet
    is off, the id is unknown or no candidate is within tolerance.

    Returns:
        The candidate that was snapped to, or None if nothing changed.
    """
    if not settings.magnet_enabled:
        return None

    node = state.get(node_id)
    if node is None:
        logger.debug(f"Snap ignored: node {node_id} does not exist.")
        return None

    candidate = find_snap_candidate(state, node, settings)
    if candidate is None:
        logger.debug(f"Node {node_id} released with no snap candidate in range.")
        return None

    best = state.get(candidate.node_id)
    node.position = tangent_position(best.position, best.radius, node.position, node.radius)
    state.add_link(node.id, best.id)
    logger.debug(
        f"Node {node_id} snapped onto node {best.id} "
        f"(error {candidate.error:.4g}, tolerance {candidate.tolerance:.4g})."
    )
    return candidate
