"""Point value types in millimetre space.

``Point3`` is the working type for all geometry.  ``Point4`` mirrors the
Blender export format which carries a homogeneous ``w`` term; ``w`` is kept
for round-tripping but never takes part in any transform or distance.

Points are immutable.  ``scale`` and ``offset`` return new points; curve
containers swap their point lists to apply a transform.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, slots=True)
class Point3:
    """Cartesian point (mm)."""

    x: float
    y: float
    z: float

    def scale(self, factor: float) -> Point3:
        return Point3(self.x * factor, self.y * factor, self.z * factor)

    def offset(self, dx: float, dy: float, dz: float) -> Point3:
        return Point3(self.x + dx, self.y + dy, self.z + dz)

    def distance_to(self, other: Point3 | Point4) -> float:
        """Euclidean distance to *other* (``w`` ignored)."""
        return math.sqrt(
            (self.x - other.x) ** 2
            + (self.y - other.y) ** 2
            + (self.z - other.z) ** 2
        )

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def to_point3(self) -> Point3:
        return self


@dataclass(frozen=True, slots=True)
class Point4:
    """Homogeneous point as exported by Blender.

    Parameters
    ----------
    x, y, z : float
        Position (mm after unit conversion).
    w : float
        Homogeneous weight.  Accepted for format compatibility only.
    """

    x: float
    y: float
    z: float
    w: float = 0.0

    def scale(self, factor: float) -> Point4:
        return Point4(self.x * factor, self.y * factor, self.z * factor, self.w)

    def offset(self, dx: float, dy: float, dz: float) -> Point4:
        return Point4(self.x + dx, self.y + dy, self.z + dz, self.w)

    def distance_to(self, other: Point3 | Point4) -> float:
        return self.to_point3().distance_to(other)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def to_point3(self) -> Point3:
        """Drop the ``w`` term."""
        return Point3(self.x, self.y, self.z)


ORIGIN = Point3(0.0, 0.0, 0.0)
"""Home position of the effector."""


def as_array(points) -> np.ndarray:
    """Stack points into an ``(N, 3)`` float array (``w`` dropped)."""
    return np.array([p.as_tuple() for p in points], dtype=np.float64).reshape(-1, 3)
