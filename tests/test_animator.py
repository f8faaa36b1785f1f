"""Tests for the animation driver with recording scheduler and surface (pure Python)."""

from __future__ import annotations

import dataclasses
import math
import unittest

from tests.fakes import FakeScheduler, FakeSurface
from wireframeprojector.controller.animator import AnimationDriver, DriverState
from wireframeprojector.model.errors import FormulaCompileError, InvalidGeometryInput
from wireframeprojector.model.geometry_primitives import Point3D
from wireframeprojector.model.motion import MotionParameters
from wireframeprojector.model.projection import Evaluator, Formula
from wireframeprojector.model.state import RenderSettings, RotationPivot

LOGGER = "wireframeprojector.controller.animator"


def still_settings(**changes) -> RenderSettings:
    """A motionless 2x2x2 cuboid sampled at 3 points per edge, rotating about the origin."""
    base = RenderSettings(
        corner_1=(0.0, 0.0, 0.0),
        corner_2=(2.0, 2.0, 2.0),
        n_samples=3,
        rpm_y=0.0,
        rpm_z=0.0,
        pivot=RotationPivot.ORIGIN,
        formula_x="x/(y+5)",
        formula_y="z/(y+5)",
    )
    return base.copy(**changes)


class UnresolvedNameEvaluator(Evaluator):
    """Compiles normally, but the X channel fails like a callable missing from its namespace."""

    def compile(self, text: str, channel: str = "") -> Formula:
        formula = super().compile(text, channel)
        if channel != "X":
            return formula

        def unresolved(*args: float) -> float:
            raise NameError("name 'besselj' is not defined")

        return dataclasses.replace(formula, _func=unresolved)


class TestLifecycle(unittest.TestCase):
    def setUp(self) -> None:
        self.scheduler = FakeScheduler()
        self.surface = FakeSurface()
        self.stats = []
        self.driver = AnimationDriver(self.scheduler, self.surface, on_frame=self.stats.append)

    def test_starts_idle(self) -> None:
        self.assertEqual(self.driver.state, DriverState.IDLE)
        self.assertIsNone(self.driver.session)

    def test_render_schedules_one_frame(self) -> None:
        self.driver.render(still_settings())
        self.assertEqual(self.driver.state, DriverState.RUNNING)
        self.assertEqual(len(self.scheduler.pending), 1)

    def test_frame_redraws_whole_surface_and_reschedules(self) -> None:
        self.driver.render(still_settings())
        self.scheduler.fire(1000.0)

        self.assertEqual(self.surface.calls[0], ("clear",))
        self.assertEqual(self.surface.calls[-1], ("present",))
        self.assertEqual(self.surface.count("line"), 12)
        self.assertEqual(self.surface.count("circle"), 8 + 12)
        self.assertEqual(len(self.scheduler.pending), 1)

    def test_elapsed_time_starts_at_first_callback(self) -> None:
        self.driver.render(still_settings())
        self.scheduler.fire(1000.0)
        self.scheduler.fire(1500.0)
        self.assertEqual([s.elapsed_ms for s in self.stats], [0.0, 500.0])

    def test_new_render_resets_elapsed_time(self) -> None:
        self.driver.render(still_settings())
        self.scheduler.fire(1000.0)
        self.driver.render(still_settings())
        self.scheduler.fire(5000.0)
        self.assertEqual(self.stats[-1].elapsed_ms, 0.0)

    def test_render_while_running_cancels_previous_callback(self) -> None:
        self.driver.render(still_settings())
        first = next(iter(self.scheduler.pending))
        self.driver.render(still_settings(n_samples=4))

        self.assertIn(first, self.scheduler.cancelled)
        self.assertEqual(len(self.scheduler.pending), 1)
        self.assertNotIn(first, self.scheduler.pending)

    def test_stale_callback_is_ignored(self) -> None:
        scheduler = FakeScheduler(honour_cancel=False)
        driver = AnimationDriver(scheduler, self.surface, on_frame=self.stats.append)
        driver.render(still_settings())
        driver.render(still_settings(n_samples=4))
        scheduler.fire(100.0)

        # only the second run draws: 8 corners + 2 interior samples on 12 edges
        self.assertEqual(len(self.stats), 1)
        self.assertEqual(self.stats[0].points_drawn, 8 + 12 * 2)
        self.assertEqual(len(scheduler.pending), 1)

    def test_malformed_formula_schedules_nothing(self) -> None:
        with self.assertRaises(FormulaCompileError):
            self.driver.render(still_settings(formula_x="x/("))
        self.assertEqual(self.scheduler.scheduled, 0)
        self.assertEqual(self.driver.state, DriverState.IDLE)

    def test_formula_without_math_equivalent_schedules_nothing(self) -> None:
        with self.assertRaises(FormulaCompileError):
            self.driver.render(still_settings(formula_x="besselj(0, x)"))
        self.assertEqual(self.scheduler.scheduled, 0)
        self.assertEqual(self.driver.state, DriverState.IDLE)

    def test_rejected_render_keeps_previous_run(self) -> None:
        session = self.driver.render(still_settings())
        handle = next(iter(self.scheduler.pending))

        with self.assertRaises(FormulaCompileError):
            self.driver.render(still_settings(formula_y="z/"))
        with self.assertRaises(InvalidGeometryInput):
            self.driver.render(still_settings(n_samples=1))

        self.assertIs(self.driver.session, session)
        self.assertEqual(self.scheduler.cancelled, [])
        self.assertIn(handle, self.scheduler.pending)
        self.assertEqual(self.driver.state, DriverState.RUNNING)

    def test_stop(self) -> None:
        self.driver.render(still_settings())
        self.driver.stop()
        self.assertEqual(self.driver.state, DriverState.IDLE)
        self.assertEqual(self.scheduler.pending, {})
        self.assertIsNone(self.driver.session)

    def test_update_motion_applies_to_running_session(self) -> None:
        self.driver.render(still_settings())
        self.driver.update_motion(MotionParameters(rpm_y=30.0))
        self.assertEqual(self.driver.session.motion.rpm_y, 30.0)

    def test_update_motion_when_idle_is_noop(self) -> None:
        self.driver.update_motion(MotionParameters(rpm_y=30.0))
        self.assertIsNone(self.driver.session)


class TestFramePipeline(unittest.TestCase):
    def setUp(self) -> None:
        self.scheduler = FakeScheduler()
        self.surface = FakeSurface(800, 600)
        self.driver = AnimationDriver(self.scheduler, self.surface)

    def test_orthographic_rest_pose(self) -> None:
        self.driver.render(still_settings(formula_x="x", formula_y="z", corner_2=(1.0, 1.0, 1.0)))
        session = self.driver.session
        frame = self.driver.compute_frame(0.0)
        # fov 90, focal 1 -> 400 px per unit, origin at the surface center
        origin = session.geometry.sampled_points.index(Point3D(0.0, 0.0, 0.0))
        self.assertEqual(frame.points[origin], (400.0, 300.0))

        far = session.geometry.sampled_points.index(Point3D(1.0, 0.0, 1.0))
        px, py = frame.points[far]
        self.assertAlmostEqual(px, 800.0, places=6)
        self.assertAlmostEqual(py, -100.0, places=6)

    def test_quarter_turn_about_y(self) -> None:
        # 15 rpm -> pi/2 after one second
        self.driver.render(still_settings(formula_x="x", formula_y="z", rpm_y=15.0))
        session = self.driver.session
        frame = self.driver.compute_frame(1000.0)

        index = session.geometry.sampled_points.index(Point3D(2.0, 0.0, 0.0))
        px, py = frame.points[index]
        # (2, 0, 0) -> (0, 0, -2)
        self.assertAlmostEqual(px, 400.0, places=6)
        self.assertAlmostEqual(py, 300.0 + 2 * 400.0, places=6)

    def test_oscillation_shifts_points(self) -> None:
        self.driver.render(still_settings(formula_x="x", formula_y="z", osc_amp_x=1.0))
        rest = self.driver.compute_frame(0.0)
        shifted = self.driver.compute_frame(500.0)
        for (x0, y0), (x1, y1) in zip(rest.points, shifted.points):
            self.assertAlmostEqual(x1 - x0, 400.0, places=6)
            self.assertAlmostEqual(y1, y0, places=6)

    def test_division_by_zero_for_one_point(self) -> None:
        # zero only at the sampled point (2, 1, 0)
        self.driver.render(still_settings(formula_x="1/((x-2)^2 + (y-1)^2 + z^2)"))
        session = self.driver.session
        bad = session.geometry.sampled_points.index(Point3D(2.0, 1.0, 0.0))

        with self.assertLogs(LOGGER, level="WARNING"):
            self.scheduler.fire(0.0)

        frame = self.driver.compute_frame(0.0)
        self.assertEqual(frame.points[bad], (400.0, 300.0))
        self.assertEqual(frame.stats.failed_points, 1)
        self.assertEqual(frame.stats.skipped_edges, 0)
        self.assertEqual(len(frame.edges), 12)
        self.assertEqual(self.surface.count("circle"), 20)
        self.assertEqual(len(self.scheduler.pending), 1)

    def test_failing_corner_skips_its_edges(self) -> None:
        self.driver.render(still_settings(formula_x="1/x", formula_y="z"))
        frame = self.driver.compute_frame(0.0)

        # the x = 0 face: 4 corners and 4 edge midpoints
        self.assertEqual(frame.stats.failed_points, 8)
        self.assertEqual(frame.stats.skipped_edges, 8)
        self.assertEqual(len(frame.edges), 4)
        self.assertEqual(len(frame.points), 20)

    def test_only_first_failure_is_a_warning(self) -> None:
        self.driver.render(still_settings(formula_x="1/x"))
        with self.assertLogs(LOGGER, level="WARNING") as logs:
            self.scheduler.fire(0.0)
            self.scheduler.fire(16.0)
        self.assertEqual(len(logs.records), 1)

    def test_unresolved_name_falls_back_per_point(self) -> None:
        driver = AnimationDriver(self.scheduler, self.surface, evaluator=UnresolvedNameEvaluator())
        stats = []
        driver.on_frame = stats.append
        driver.render(still_settings())

        with self.assertLogs(LOGGER, level="WARNING"):
            self.scheduler.fire(0.0)
        self.scheduler.fire(16.0)

        self.assertEqual(driver.state, DriverState.RUNNING)
        self.assertEqual(len(self.scheduler.pending), 1)
        self.assertEqual(len(stats), 2)
        self.assertEqual(stats[0].failed_points, 8 + 12 * 1)
        self.assertEqual(stats[0].skipped_edges, 12)

    def test_frame_values_are_finite(self) -> None:
        self.driver.render(still_settings(rpm_y=12.0, rpm_z=-7.0, osc_amp_z=0.5,
                                          pivot=RotationPivot.CUBE_CENTER))
        for t in (0.0, 333.0, 4321.0):
            frame = self.driver.compute_frame(t)
            for x, y in frame.points:
                self.assertTrue(math.isfinite(x) and math.isfinite(y))

    def test_compute_frame_requires_session(self) -> None:
        with self.assertRaises(RuntimeError):
            self.driver.compute_frame(0.0)


if __name__ == "__main__":
    unittest.main()
