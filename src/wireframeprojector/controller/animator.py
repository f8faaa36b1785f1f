"""
Animation Driver
================
Owns the frame loop: advances time, moves and projects the geometry, and
redraws the drawing surface every frame.

Why is this file needed?
------------------------
1. Lifecycle: It is the only place that creates, replaces and tears down a
   `RenderSession`, and it cancels the outstanding frame callback before a
   new session takes over, so two loops never share the surface.
2. Isolation: Formula failures are recovered per point and per edge here and
   reported through logging and `FrameStats`; they never escape a frame.
3. Decoupling: The scheduler and the surface are protocols, so the loop runs
   the same under Qt and in tests.

Classes:
    DriverState: IDLE / RUNNING.
    FrameScheduler, DrawingSurface: Collaborator protocols.
    Frame, FrameStats: Result of one frame step.
    AnimationDriver: The state machine.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
import logging
from typing import Callable, Optional, Protocol

import numpy as np

from wireframeprojector.config import POINT_RADIUS_PX
from wireframeprojector.model.errors import FormulaEvaluationError
from wireframeprojector.model.geometry_primitives import Point3D
from wireframeprojector.model.geometry_utils import rotate_points
from wireframeprojector.model.motion import MotionParameters, compute_motion
from wireframeprojector.model.projection import Evaluator
from wireframeprojector.model.state import RenderSession, RenderSettings

logger = logging.getLogger(__name__)

Pixel = tuple[float, float]


class DriverState(IntEnum):
    IDLE = 0
    RUNNING = 1


class FrameScheduler(Protocol):
    """Invoke-before-next-repaint primitive."""

    def schedule(self, callback: Callable[[float], None]) -> int:
        """Run `callback(timestamp_ms)` once before the next repaint; return a handle."""
        ...

    def cancel(self, handle: int) -> None:
        """Cancel a pending callback. Unknown or fired handles are ignored."""
        ...


class DrawingSurface(Protocol):
    """2D line/point drawing surface."""

    def surface_size(self) -> tuple[int, int]: ...

    def clear(self) -> None: ...

    def draw_line(self, start: Pixel, end: Pixel) -> None: ...

    def fill_circle(self, center: Pixel, radius: float) -> None: ...

    def present(self) -> None: ...


@dataclass
class FrameStats:
    elapsed_ms: float = 0.0
    points_drawn: int = 0
    failed_points: int = 0
    edges_drawn: int = 0
    skipped_edges: int = 0


@dataclass
class Frame:
    """Pixel-space result of one frame step."""
    points: list[Pixel] = field(default_factory=list)
    edges: list[tuple[Pixel, Pixel]] = field(default_factory=list)
    stats: FrameStats = field(default_factory=FrameStats)


class AnimationDriver:
    """
    Idle -> (render with valid inputs) -> Running -> (render again / stop) -> Idle.

    Only one frame callback is pending at any time.
    """

    def __init__(
        self,
        scheduler: FrameScheduler,
        surface: DrawingSurface,
        evaluator: Optional[Evaluator] = None,
        on_frame: Optional[Callable[[FrameStats], None]] = None,
        point_radius: float = POINT_RADIUS_PX
    ) -> None:
        self.scheduler = scheduler
        self.surface = surface
        self.evaluator = evaluator or Evaluator()
        self.on_frame = on_frame
        self.point_radius = point_radius

        self._state = DriverState.IDLE
        self._session: Optional[RenderSession] = None
        self._handle: Optional[int] = None
        self._origin_ms: Optional[float] = None
        self._run_id = 0
        self._failure_reported = False

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    @property
    def state(self) -> DriverState:
        return self._state

    @property
    def session(self) -> Optional[RenderSession]:
        return self._session

    @property
    def is_running(self) -> bool:
        return self._state == DriverState.RUNNING

    def render(self, settings: RenderSettings) -> RenderSession:
        """
        Start a new run from the given settings.

        All inputs are validated and both formulas compiled before the
        previous run is touched; a rejected request leaves it running.

        Raises:
            InvalidGeometryInput: If a setting is invalid.
            FormulaCompileError: If a formula does not compile.
        """
        try:
            session = RenderSession.build(settings, self.surface.surface_size(), self.evaluator)
        except ValueError as e:
            logger.warning(f"Render rejected: {e}")
            raise

        self._cancel_pending()
        self._session = session
        self._origin_ms = None
        self._failure_reported = False
        self._run_id += 1
        self._state = DriverState.RUNNING
        self._schedule_next()

        logger.info(
            f"Render started: {len(session.geometry.sampled_points)} points, "
            f"{len(session.geometry.edges)} edges, pivot={session.pivot.value}."
        )
        return session

    def stop(self) -> None:
        """Cancel the frame loop and drop the active session."""
        was_running = self.is_running
        self._cancel_pending()
        self._session = None
        self._origin_ms = None
        self._state = DriverState.IDLE
        if was_running:
            logger.info("Animation stopped.")

    def update_motion(self, motion: MotionParameters) -> None:
        """Change angular speeds and amplitudes of the active run in place."""
        if self._session is None:
            return
        self._session = self._session.with_motion(motion)
        logger.debug(f"Motion updated: {motion}")

    def compute_frame(self, elapsed_ms: float) -> Frame:
        """
        Move, rotate, project and scale the active geometry.

        Args:
            elapsed_ms: Milliseconds since the first frame of the run.

        Returns:
            Pixel coordinates of every sampled point and every drawable edge.
        """
        session = self._session
        if session is None:
            raise RuntimeError("No active render session.")

        geometry = session.geometry
        viewport = session.viewport
        formulas = session.formulas
        pose = compute_motion(elapsed_ms, session.motion)
        offset = np.array([pose.offset_x, pose.offset_y, pose.offset_z])
        pivot = session.pivot_point
        stats = FrameStats(elapsed_ms=elapsed_ms)

        # ---- sampled points: failures fall back to the plane origin ----
        moved = rotate_points(geometry.sampled_array + offset, pose.angle_y, pose.angle_z, pivot)
        projected = np.zeros((moved.shape[0], 2), dtype=np.float64)
        for i, row in enumerate(moved):
            try:
                p = formulas.project(Point3D.from_array(row))
            except FormulaEvaluationError as e:
                stats.failed_points += 1
                self._report_failure(e)
                continue
            projected[i] = (p.x, p.y)

        points = [(float(px), float(py)) for px, py in viewport.to_pixels(projected)]
        stats.points_drawn = len(points)

        # ---- edges: use corners only; skip if either end fails ----
        moved_corners = rotate_points(geometry.corner_array + offset, pose.angle_y, pose.angle_z, pivot)
        corner_px: list[Optional[Pixel]] = []
        for row in moved_corners:
            try:
                p = formulas.project(Point3D.from_array(row))
            except FormulaEvaluationError as e:
                self._report_failure(e)
                corner_px.append(None)
                continue
            corner_px.append(viewport.to_pixel(p.x, p.y))

        edges: list[tuple[Pixel, Pixel]] = []
        for start_idx, end_idx in geometry.edges:
            start, end = corner_px[start_idx], corner_px[end_idx]
            if start is None or end is None:
                stats.skipped_edges += 1
                continue
            edges.append((start, end))
        stats.edges_drawn = len(edges)

        return Frame(points=points, edges=edges, stats=stats)

    def draw_frame(self, elapsed_ms: float) -> FrameStats:
        """Compute one frame and redraw the whole surface."""
        frame = self.compute_frame(elapsed_ms)

        self.surface.clear()
        for start, end in frame.edges:
            self.surface.draw_line(start, end)
        for center in frame.points:
            self.surface.fill_circle(center, self.point_radius)
        self.surface.present()

        if self.on_frame is not None:
            self.on_frame(frame.stats)
        return frame.stats

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _schedule_next(self) -> None:
        run_id = self._run_id
        self._handle = self.scheduler.schedule(lambda ts: self._on_tick(run_id, ts))

    def _cancel_pending(self) -> None:
        if self._handle is not None:
            self.scheduler.cancel(self._handle)
            logger.debug(f"Cancelled frame callback {self._handle}.")
            self._handle = None

    def _on_tick(self, run_id: int, timestamp_ms: float) -> None:
        # stale callback from a replaced run
        if run_id != self._run_id or self._state != DriverState.RUNNING:
            return
        self._handle = None

        if self._origin_ms is None:
            self._origin_ms = timestamp_ms
        elapsed = timestamp_ms - self._origin_ms

        try:
            self.draw_frame(elapsed)
        except Exception:
            logger.exception("Frame failed; stopping animation.")
            self.stop()
            raise

        self._schedule_next()

    def _report_failure(self, error: FormulaEvaluationError) -> None:
        if not self._failure_reported:
            self._failure_reported = True
            logger.warning(f"Projection failed at {error.bindings}: {error}.")
        else:
            logger.debug(f"Projection failed at {error.bindings}: {error}")
