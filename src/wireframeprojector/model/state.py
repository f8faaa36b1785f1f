"""
Render State (Data Model)
=========================
This module defines the data structures of one render run.

Why is this file needed?
------------------------
1. Validation: `RenderSettings` gathers every user input in one place and
   checks it before anything is built.
2. Snapshot: `RenderSession` holds the geometry, formulas, viewport and motion
   of the active run, so replacing a run means replacing one object.
3. Decoupling: Views write settings; the animation driver reads sessions.

Classes:
    RotationPivot: Choice of rotation center.
    CuboidGeometry: Corners, edges, centroid and sampled points.
    RenderSettings: All inputs of a render request.
    RenderSession: The immutable-per-run context owned by the driver.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from enum import StrEnum
import logging
import math
import numbers
from typing import Optional, TYPE_CHECKING

import numpy as np

from wireframeprojector import config
from wireframeprojector.model.errors import InvalidGeometryInput
from wireframeprojector.model.geometry_primitives import ORIGIN, Point3D
from wireframeprojector.model.geometry_utils import (
    CUBOID_EDGES, cuboid_center, cuboid_corners, points_to_array, sample_edges
)
from wireframeprojector.model.motion import MotionParameters
from wireframeprojector.model.projection import Evaluator, ProjectionFormulas
from wireframeprojector.model.viewport import ViewportTransform

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class RotationPivot(StrEnum):
    CUBE_CENTER = "cubeCenter"
    ORIGIN = "origin"


@dataclass(frozen=True)
class CuboidGeometry:
    """Static geometry of one run. Recomputed only when a render starts."""
    corners: tuple[Point3D, ...]
    edges: tuple[tuple[int, int], ...]
    center: Point3D
    sampled_points: tuple[Point3D, ...]
    n_samples: int

    corner_array: npt.NDArray[np.float64] = field(repr=False, compare=False)
    sampled_array: npt.NDArray[np.float64] = field(repr=False, compare=False)

    @classmethod
    def from_corners(cls, p1: Point3D, p2: Point3D, n_samples: int) -> CuboidGeometry:
        """
        Build corners, edges and deduplicated edge samples for a cuboid.

        Raises:
            InvalidGeometryInput: If a coordinate is not finite or
                `n_samples` <= 1.
        """
        if not (p1.is_finite() and p2.is_finite()):
            raise InvalidGeometryInput("Cuboid coordinates must be finite numbers.")

        corners = cuboid_corners(p1, p2)
        sampled = sample_edges(corners, CUBOID_EDGES, n_samples)
        logger.debug(f"Cuboid sampled: {len(corners)} corners, {len(sampled)} unique points (N={n_samples}).")

        return cls(
            corners=tuple(corners),
            edges=CUBOID_EDGES,
            center=cuboid_center(p1, p2),
            sampled_points=tuple(sampled),
            n_samples=n_samples,
            corner_array=points_to_array(corners),
            sampled_array=points_to_array(sampled),
        )


def _require_number(name: str, value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidGeometryInput(f"{name} must be a number, got {value!r}.")
    if not math.isfinite(value):
        raise InvalidGeometryInput(f"{name} must be finite, got {value!r}.")
    return float(value)


@dataclass
class RenderSettings:
    """
    Every input of a render request.

    Logic:
    1. The two corners span the cuboid; they may be given in any order.
    2. Motion values (rpm, amplitudes) may change while a run is active.
    3. Everything else is fixed for the lifetime of a run.
    """
    corner_1: tuple[float, float, float] = config.DEFAULT_CORNER_1
    corner_2: tuple[float, float, float] = config.DEFAULT_CORNER_2
    n_samples: int = config.DEFAULT_SAMPLES

    fov_deg: float = config.DEFAULT_FOV_DEG
    focal_length: float = config.DEFAULT_FOCAL_LENGTH

    rpm_y: float = config.DEFAULT_RPM_Y
    rpm_z: float = config.DEFAULT_RPM_Z
    pivot: RotationPivot = RotationPivot.CUBE_CENTER

    osc_amp_x: float = 0.0
    osc_amp_y: float = 0.0
    osc_amp_z: float = 0.0

    formula_x: str = config.DEFAULT_FORMULA_X
    formula_y: str = config.DEFAULT_FORMULA_Y

    def validate(self) -> None:
        """
        Check all numeric inputs.

        Raises:
            InvalidGeometryInput: On the first invalid value.
        """
        for label, corner in (("Corner 1", self.corner_1), ("Corner 2", self.corner_2)):
            if not isinstance(corner, Sequence) or isinstance(corner, str):
                raise InvalidGeometryInput(f"{label} must be a sequence of 3 numbers, got {corner!r}.")
            if len(corner) != 3:
                raise InvalidGeometryInput(f"{label} must have 3 coordinates, got {len(corner)}.")
            for axis, value in zip("xyz", corner):
                _require_number(f"{label} {axis}", value)

        for axis, a, b in zip("xyz", self.corner_1, self.corner_2):
            if a == b:
                raise InvalidGeometryInput(f"Cuboid has zero extent along {axis}.")

        if isinstance(self.n_samples, bool) or not isinstance(self.n_samples, numbers.Integral) \
                or self.n_samples <= 1:
            raise InvalidGeometryInput(f"Sample count must be an integer greater than 1, got {self.n_samples!r}.")

        fov = _require_number("Field of view", self.fov_deg)
        if not 0.0 < fov < 180.0:
            raise InvalidGeometryInput(f"Field of view must lie in (0, 180) degrees, got {fov}.")
        if _require_number("Focal length", self.focal_length) <= 0.0:
            raise InvalidGeometryInput(f"Focal length must be positive, got {self.focal_length}.")

        self.motion_parameters()

        if self.pivot not in tuple(RotationPivot):
            raise InvalidGeometryInput(f"Unknown rotation pivot {self.pivot!r}.")

    def motion_parameters(self) -> MotionParameters:
        """Validated motion values as a `MotionParameters`."""
        return MotionParameters(
            rpm_y=_require_number("RPM Y", self.rpm_y),
            rpm_z=_require_number("RPM Z", self.rpm_z),
            osc_amp_x=_require_number("Oscillation X", self.osc_amp_x),
            osc_amp_y=_require_number("Oscillation Y", self.osc_amp_y),
            osc_amp_z=_require_number("Oscillation Z", self.osc_amp_z),
        )

    def copy(self, **changes: object) -> RenderSettings:
        return replace(self, **changes)


@dataclass(frozen=True)
class RenderSession:
    """
    Snapshot of one render run, owned by the animation driver.

    A session is created only from fully validated inputs and compiled
    formulas; it is replaced as a whole when a new render starts.
    """
    geometry: CuboidGeometry
    formulas: ProjectionFormulas
    viewport: ViewportTransform
    motion: MotionParameters
    pivot: RotationPivot

    @classmethod
    def build(
        cls,
        settings: RenderSettings,
        surface_size: tuple[int, int],
        evaluator: Optional[Evaluator] = None
    ) -> RenderSession:
        """
        Validate settings, compile formulas and derive geometry and viewport.

        Raises:
            InvalidGeometryInput: If a setting or the surface size is invalid.
            FormulaCompileError: If either formula does not compile.
        """
        settings.validate()
        formulas = ProjectionFormulas.compile(settings.formula_x, settings.formula_y, evaluator)

        geometry = CuboidGeometry.from_corners(
            Point3D(*(float(v) for v in settings.corner_1)),
            Point3D(*(float(v) for v in settings.corner_2)),
            int(settings.n_samples),
        )
        width, height = surface_size
        viewport = ViewportTransform.from_view(
            float(settings.fov_deg), float(settings.focal_length), int(width), int(height)
        )
        return cls(
            geometry=geometry,
            formulas=formulas,
            viewport=viewport,
            motion=settings.motion_parameters(),
            pivot=RotationPivot(settings.pivot),
        )

    @property
    def pivot_point(self) -> Point3D:
        if self.pivot == RotationPivot.CUBE_CENTER:
            return self.geometry.center
        return ORIGIN

    def with_motion(self, motion: MotionParameters) -> RenderSession:
        return replace(self, motion=motion)
