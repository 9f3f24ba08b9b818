"""
Drag Plane
Pick-ray helpers: which sphere the pointer is over, and where on a
camera-facing plane the pointer currently is.
"""
from __future__ import annotations

from typing import Iterable, Optional, Sequence, TYPE_CHECKING

import numpy as np

from phipacking.config import EPS

if TYPE_CHECKING:
    import numpy.typing as npt

    from phipacking.model.state import Node


def camera_facing_normal(
    camera_position: Sequence[float],
    focal_point: Sequence[float] = (0.0, 0.0, 0.0)
) -> npt.NDArray[np.float64]:
    """
    Unit normal pointing from `focal_point` to the camera.

    Raises:
        ValueError: If the camera sits on the focal point.
    """
    normal = np.asarray(camera_position, dtype=np.float64) - np.asarray(focal_point, dtype=np.float64)
    length = np.linalg.norm(normal)
    if length < EPS:
        raise ValueError("Camera position coincides with the focal point.")
    return normal / length


def intersect_ray_plane(
    ray_origin: Sequence[float],
    ray_direction: Sequence[float],
    plane_point: Sequence[float],
    plane_normal: Sequence[float],
) -> Optional[npt.NDArray[np.float64]]:
    """
    Intersection of the ray O + t*D (t >= 0) with a plane.

    Returns None if the ray is parallel to the plane or points away from it.
    """
    o = np.asarray(ray_origin, dtype=np.float64)
    d = np.asarray(ray_direction, dtype=np.float64)
    p = np.asarray(plane_point, dtype=np.float64)
    n = np.asarray(plane_normal, dtype=np.float64)

    denom = float(np.dot(n, d))
    if abs(denom) < EPS:
        return None
    t = float(np.dot(n, p - o)) / denom
    if t < 0.0:
        return None
    return o + t * d


def ray_sphere_distance(
    ray_origin: Sequence[float],
    ray_direction: Sequence[float],
    center: Sequence[float],
    radius: float,
) -> Optional[float]:
    """
    Distance along a ray to its first hit on a sphere, or None on a miss.

    The direction does not need to be normalized; the returned distance is in
    world units. A ray starting inside the sphere hits at distance 0.
    """
    o = np.asarray(ray_origin, dtype=np.float64)
    d = np.asarray(ray_direction, dtype=np.float64)
    c = np.asarray(center, dtype=np.float64)

    length = np.linalg.norm(d)
    if length < EPS:
        return None
    d = d / length

    oc = o - c
    b = float(np.dot(oc, d))
    disc = b * b - (float(np.dot(oc, oc)) - radius * radius)
    if disc < 0.0:
        return None
    root = np.sqrt(disc)
    t_near, t_far = -b - root, -b + root
    if t_far < 0.0:
        return None
    return max(t_near, 0.0)


def pick_nearest_node(
    ray_origin: Sequence[float],
    ray_direction: Sequence[float],
    nodes: Iterable[Node],
) -> Optional[int]:
    """Id of the sphere the ray hits first, or None."""
    best_id: Optional[int] = None
    best_t = np.inf
    for node in nodes:
        t = ray_sphere_distance(ray_origin, ray_direction, node.position.to_array(), node.radius)
        if t is not None and t < best_t:
            best_id, best_t = node.id, t
    return best_id
