from __future__ import annotations

import itertools
import logging
from typing import Callable

from PySide6.QtCore import QElapsedTimer, QObject, QTimer

from wireframeprojector.config import FRAME_INTERVAL_MS

logger = logging.getLogger(__name__)


class QtFrameScheduler(QObject):
    """
    Frame scheduler on the Qt event loop.

    Callbacks fire once on the next timer tick with a monotonic timestamp in
    milliseconds. Cancelling a handle removes its callback before it fires.
    """
    def __init__(self, interval_ms: int = FRAME_INTERVAL_MS, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._clock = QElapsedTimer()
        self._clock.start()
        self._ids = itertools.count(1)
        self._pending: dict[int, Callable[[float], None]] = {}

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._fire)

    def schedule(self, callback: Callable[[float], None]) -> int:
        handle = next(self._ids)
        self._pending[handle] = callback
        if not self._timer.isActive():
            self._timer.start()
        return handle

    def cancel(self, handle: int) -> None:
        self._pending.pop(handle, None)
        if not self._pending:
            self._timer.stop()

    def pending_count(self) -> int:
        return len(self._pending)

    def _fire(self) -> None:
        timestamp = float(self._clock.elapsed())
        due, self._pending = self._pending, {}
        for callback in due.values():
            callback(timestamp)
