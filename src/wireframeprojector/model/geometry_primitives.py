"""
Geometric Primitives for the wireframe pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
import math

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True)
class Point3D:
    """
    An immutable point in 3D space.

    Equality and hashing use the exact coordinate triple, so points produced
    by identical arithmetic collapse to one entry in sets and dict keys.
    """
    x: float
    y: float
    z: float

    def __add__(self, other: Point3D) -> Point3D:
        return Point3D(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Point3D) -> Point3D:
        return Point3D(self.x - other.x, self.y - other.y, self.z - other.z)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y) and math.isfinite(self.z)

    def rotate_y(self, angle_rad: float) -> Point3D:
        """Rotate point around Y axis (right-handed)."""
        cos_a = math.cos(angle_rad)
        sin_a = math.sin(angle_rad)
        return Point3D(
            self.x * cos_a + self.z * sin_a,
            self.y,
            -self.x * sin_a + self.z * cos_a
        )

    def rotate_z(self, angle_rad: float) -> Point3D:
        """Rotate point around Z axis (right-handed)."""
        cos_a = math.cos(angle_rad)
        sin_a = math.sin(angle_rad)
        return Point3D(
            self.x * cos_a - self.y * sin_a,
            self.x * sin_a + self.y * cos_a,
            self.z
        )

    def as_bindings(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y, "z": self.z}

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y, self.z])

    @classmethod
    def from_array(cls, arr: npt.ArrayLike) -> Point3D:
        x, y, z = np.asarray(arr, dtype=np.float64).reshape(3)
        return cls(float(x), float(y), float(z))


ORIGIN = Point3D(0.0, 0.0, 0.0)


@dataclass(frozen=True)
class Point2D:
    """A point on the projection plane or on the drawing surface."""
    x: float
    y: float
