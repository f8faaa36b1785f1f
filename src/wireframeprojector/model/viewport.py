"""
Viewport Scaler
===============
Maps projection-plane coordinates to drawing-surface pixels.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
import math

import numpy as np

from wireframeprojector.model.errors import InvalidGeometryInput
from wireframeprojector.model.geometry_utils import deg2rad

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewportTransform:
    """
    Linear scale and centering offsets for one render run.

    The screen y axis points down, so the vertical mapping is flipped
    against the surface height.
    """
    scale_x: float
    scale_y: float
    x_offset: float
    y_offset: float
    half_width: float
    half_height: float
    surface_width: int
    surface_height: int

    @classmethod
    def from_view(
        cls,
        fov_deg: float,
        focal_length: float,
        surface_width: int,
        surface_height: int
    ) -> ViewportTransform:
        """
        Build the transform from the field of view, focal length and surface size.

        The image-plane half-height is derived from the half-width so the
        surface aspect ratio is preserved.

        Raises:
            InvalidGeometryInput: If any input is non-finite or out of range.
        """
        if not (math.isfinite(fov_deg) and 0.0 < fov_deg < 180.0):
            raise InvalidGeometryInput(f"Field of view must lie in (0, 180) degrees, got {fov_deg}.")
        if not (math.isfinite(focal_length) and focal_length > 0.0):
            raise InvalidGeometryInput(f"Focal length must be positive, got {focal_length}.")
        if surface_width <= 0 or surface_height <= 0:
            raise InvalidGeometryInput(f"Surface size must be positive, got {surface_width}x{surface_height}.")

        half_width = focal_length * math.tan(deg2rad(fov_deg) / 2)
        half_height = half_width * (surface_height / surface_width)

        transform = cls(
            scale_x=surface_width / (2 * half_width),
            scale_y=surface_height / (2 * half_height),
            x_offset=surface_width / 2,
            y_offset=surface_height / 2,
            half_width=half_width,
            half_height=half_height,
            surface_width=surface_width,
            surface_height=surface_height,
        )
        logger.debug(
            f"Viewport: half={half_width:.4g}x{half_height:.4g}, "
            f"scale=({transform.scale_x:.4g}, {transform.scale_y:.4g})"
        )
        return transform

    def to_pixel(self, px: float, py: float) -> tuple[float, float]:
        """Map one projection-plane point to surface pixels."""
        return (
            px * self.scale_x + self.x_offset,
            self.surface_height - (py * self.scale_y + self.y_offset),
        )

    def to_pixels(self, projected: np.ndarray) -> np.ndarray:
        """Vectorized `to_pixel` for an (N, 2) array."""
        arr = np.asarray(projected, dtype=np.float64).reshape(-1, 2)
        out = np.empty_like(arr)
        out[:, 0] = arr[:, 0] * self.scale_x + self.x_offset
        out[:, 1] = self.surface_height - (arr[:, 1] * self.scale_y + self.y_offset)
        return out
