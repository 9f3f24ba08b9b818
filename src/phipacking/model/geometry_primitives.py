"""
Geometric Primitives for sphere placement.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Union, TYPE_CHECKING
import numpy as np
import math

from phipacking.config import EPS

if TYPE_CHECKING:
    import numpy.typing as npt

@dataclass(frozen=True)
class Vector:
    """
    A vector in 3D space representing direction and magnitude.
    """
    x: float
    y: float
    z: float = 0.0

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector:
        return Vector(self.x * scalar, self.y * scalar, self.z * scalar)

    def __truediv__(self, scalar: float) -> Vector:
        if scalar == 0.0: raise ZeroDivisionError
        return Vector(self.x / scalar, self.y / scalar, self.z / scalar)

    @property
    def magnitude(self) -> float:
        return math.sqrt(self.x**2 + self.y**2 + self.z**2)

    def normalize(self, fallback: Vector | None = None) -> Vector:
        """
        Unit vector in the same direction.

        Vectors shorter than EPS have no usable direction; `fallback` is
        returned for them (the zero vector if none is given).
        """
        mag = self.magnitude
        if mag < EPS:
            return fallback if fallback is not None else Vector(0.0, 0.0, 0.0)
        return self / mag

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y, self.z])


X_AXIS = Vector(1.0, 0.0, 0.0)


@dataclass(frozen=True)
class Point:
    """A simple geometric point in 3D space."""
    x: float
    y: float
    z: float = 0.0

    @classmethod
    def from_iterable(cls, coords: Iterable[float]) -> Point:
        x, y, z = (float(c) for c in coords)
        return cls(x, y, z)

    def __add__(self, other: Vector) -> Point:
        # Point + Vector = Point (Translation)
        if isinstance(other, Vector):
            return Point(self.x + other.x, self.y + other.y, self.z + other.z)
        raise TypeError("Can only add a Vector to a Point.")

    def __sub__(self, other: Union[Vector, Point]) -> Union[Vector, Point]:
        # Point - Point = Vector (Direction)
        if isinstance(other, Point):
            return Vector(self.x - other.x, self.y - other.y, self.z - other.z)
        # Point - Vector = Point (Inverse translation)
        if isinstance(other, Vector):
            return Point(self.x - other.x, self.y - other.y, self.z - other.z)
        raise TypeError("Can only subtract a Vector or Point from a Point.")

    def distance_to(self, other: Point) -> float:
        return math.sqrt((self.x - other.x) ** 2 + (self.y - other.y) ** 2 + (self.z - other.z) ** 2)

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y, self.z])


ORIGIN = Point(0.0, 0.0, 0.0)


def centroid(points: list[Point]) -> Point:
    """Unweighted arithmetic mean of a non-empty list of points."""
    if not points:
        raise ValueError("Cannot compute the centroid of an empty point list.")
    arr = np.array([p.to_array() for p in points])
    return Point.from_iterable(arr.mean(axis=0))


def tangent_position(anchor: Point, anchor_radius: float, toward: Point, radius: float) -> Point:
    """
    Centre of a sphere of `radius` touching the sphere at `anchor` from outside.

    The contact lies on the ray from `anchor` through `toward`. If the two
    points coincide the ray is undefined and the +X axis is used instead.
    """
    direction = (toward - anchor).normalize(fallback=X_AXIS)
    return anchor + direction * (anchor_radius + radius)
