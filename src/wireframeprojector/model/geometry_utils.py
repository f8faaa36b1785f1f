from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from math import pi
import numpy as np

if TYPE_CHECKING:
    from numpy import typing as npt

from wireframeprojector.model.errors import InvalidGeometryInput
from wireframeprojector.model.geometry_primitives import Point3D

# Pairs of indices into the list returned by `cuboid_corners`.
CUBOID_EDGES: tuple[tuple[int, int], ...] = (
    (0, 1), (0, 2), (0, 4),
    (1, 3), (1, 5), (2, 3),
    (2, 6), (3, 7), (4, 5),
    (4, 6), (5, 7), (6, 7),
)


def deg2rad(degrees: float) -> float:
    return degrees * pi / 180


def cuboid_corners(p1: Point3D, p2: Point3D) -> list[Point3D]:
    """
    Build the 8 corners of the axis-aligned cuboid spanned by two opposite points.

    Corner index bits encode the min/max choice per axis: bit 2 -> x, bit 1 -> y,
    bit 0 -> z (0 = min, 1 = max).

    Args:
        p1: First corner.
        p2: The opposite corner.

    Returns:
        List of 8 points ordered by corner index.
    """
    xs = (min(p1.x, p2.x), max(p1.x, p2.x))
    ys = (min(p1.y, p2.y), max(p1.y, p2.y))
    zs = (min(p1.z, p2.z), max(p1.z, p2.z))
    return [
        Point3D(xs[(i >> 2) & 1], ys[(i >> 1) & 1], zs[i & 1])
        for i in range(8)
    ]


def cuboid_center(p1: Point3D, p2: Point3D) -> Point3D:
    """Centroid of the cuboid spanned by two opposite points."""
    return Point3D(
        (p1.x + p2.x) / 2,
        (p1.y + p2.y) / 2,
        (p1.z + p2.z) / 2
    )


def lerp(start: Point3D, end: Point3D, t: float) -> Point3D:
    """
    Linear interpolation between two points.

    Written as ``start*(1-t) + end*t`` so that t=0 and t=1 reproduce the
    endpoints bit for bit.
    """
    s = 1.0 - t
    return Point3D(
        start.x * s + end.x * t,
        start.y * s + end.y * t,
        start.z * s + end.z * t
    )


def sample_edges(
    corners: list[Point3D],
    edges: Iterable[tuple[int, int]],
    n_samples: int
) -> list[Point3D]:
    """
    Sample every edge at `n_samples` evenly spaced parameters and deduplicate.

    Args:
        corners: Corner points referenced by the edge table.
        edges: Pairs of corner indices.
        n_samples: Number of samples per edge including both endpoints (> 1).

    Returns:
        Unique points in insertion order (edge-major, then parameter-major).
        Shared corners between adjacent edges appear once.

    Raises:
        InvalidGeometryInput: If `n_samples` <= 1 or a corner is not finite.
    """
    if isinstance(n_samples, bool) or not isinstance(n_samples, (int, np.integer)) or n_samples <= 1:
        raise InvalidGeometryInput(f"Sample count must be an integer greater than 1, got {n_samples!r}.")
    for corner in corners:
        if not corner.is_finite():
            raise InvalidGeometryInput(f"Corner {corner} has non-finite coordinates.")

    unique: dict[Point3D, None] = {}
    last = n_samples - 1
    for start_idx, end_idx in edges:
        start = corners[start_idx]
        end = corners[end_idx]
        for j in range(n_samples):
            point = lerp(start, end, j / last)
            # first insertion wins
            unique.setdefault(point, None)

    return list(unique)


def rotate_about(point: Point3D, angle_y: float, angle_z: float, pivot: Point3D) -> Point3D:
    """
    Rotate a point around Y and then around Z, pivoting about `pivot`.

    Args:
        point: Point to rotate.
        angle_y: Rotation about the Y axis in radians (applied first).
        angle_z: Rotation about the Z axis in radians (applied second).
        pivot: Center of rotation.

    Returns:
        The rotated point.
    """
    local = point - pivot
    return local.rotate_y(angle_y).rotate_z(angle_z) + pivot


def rotation_matrix(angle_y: float, angle_z: float) -> npt.NDArray[np.float64]:
    """Combined 3x3 matrix Rz @ Ry acting on column vectors."""
    cy, sy = np.cos(angle_y), np.sin(angle_y)
    cz, sz = np.cos(angle_z), np.sin(angle_z)
    rot_y = np.array([
        [cy, 0.0, sy],
        [0.0, 1.0, 0.0],
        [-sy, 0.0, cy],
    ])
    rot_z = np.array([
        [cz, -sz, 0.0],
        [sz, cz, 0.0],
        [0.0, 0.0, 1.0],
    ])
    return rot_z @ rot_y


def rotate_points(
    points: npt.NDArray[np.float64],
    angle_y: float,
    angle_z: float,
    pivot: Point3D
) -> npt.NDArray[np.float64]:
    """
    Vectorized `rotate_about` for an (N, 3) array of points.

    Args:
        points: Array of shape (N, 3).
        angle_y: Rotation about the Y axis in radians (applied first).
        angle_z: Rotation about the Z axis in radians (applied second).
        pivot: Center of rotation.

    Returns:
        New array of shape (N, 3); the input is left untouched.

    Raises:
        ValueError: If the input is not of shape (N, 3).
    """
    arr = np.asarray(points, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f"Expected shape (N, 3), got {arr.shape}.")

    center = pivot.to_array()
    return (arr - center) @ rotation_matrix(angle_y, angle_z).T + center


def points_to_array(points: Iterable[Point3D]) -> npt.NDArray[np.float64]:
    """Stack points into an (N, 3) array."""
    data = [(p.x, p.y, p.z) for p in points]
    return np.array(data, dtype=np.float64).reshape(-1, 3)
