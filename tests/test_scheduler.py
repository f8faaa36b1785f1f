"""Tests for the Qt frame scheduler on a headless event loop."""

from __future__ import annotations

import os
import unittest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtCore import QCoreApplication, QEventLoop, QTimer  # noqa: E402

from wireframeprojector.app.ui.scheduler import QtFrameScheduler  # noqa: E402


class TestQtFrameScheduler(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.app = QCoreApplication.instance() or QCoreApplication([])

    def setUp(self) -> None:
        self.scheduler = QtFrameScheduler(interval_ms=1)
        self.fired: list[tuple[str, float]] = []

    def run_loop(self, timeout_ms: int = 200) -> None:
        loop = QEventLoop()
        QTimer.singleShot(timeout_ms, loop.quit)
        loop.exec()

    def test_handles_are_distinct(self) -> None:
        first = self.scheduler.schedule(lambda ts: None)
        second = self.scheduler.schedule(lambda ts: None)
        self.assertNotEqual(first, second)
        self.assertEqual(self.scheduler.pending_count(), 2)

    def test_cancel_removes_only_that_callback(self) -> None:
        first = self.scheduler.schedule(lambda ts: self.fired.append(("first", ts)))
        self.scheduler.schedule(lambda ts: self.fired.append(("second", ts)))
        self.scheduler.cancel(first)
        self.assertEqual(self.scheduler.pending_count(), 1)

        self.run_loop()
        self.assertEqual([name for name, _ in self.fired], ["second"])

    def test_cancelling_last_callback_stops_timer(self) -> None:
        handle = self.scheduler.schedule(lambda ts: self.fired.append(("only", ts)))
        self.scheduler.cancel(handle)
        self.assertEqual(self.scheduler.pending_count(), 0)
        self.assertFalse(self.scheduler._timer.isActive())

        self.run_loop()
        self.assertEqual(self.fired, [])

    def test_unknown_handle_is_ignored(self) -> None:
        self.scheduler.schedule(lambda ts: None)
        self.scheduler.cancel(12345)
        self.assertEqual(self.scheduler.pending_count(), 1)

    def test_callback_fires_once_with_timestamp(self) -> None:
        self.scheduler.schedule(lambda ts: self.fired.append(("tick", ts)))
        self.run_loop()

        self.assertEqual(len(self.fired), 1)
        _, timestamp = self.fired[0]
        self.assertIsInstance(timestamp, float)
        self.assertGreaterEqual(timestamp, 0.0)
        self.assertEqual(self.scheduler.pending_count(), 0)


if __name__ == "__main__":
    unittest.main()
