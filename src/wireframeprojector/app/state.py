from __future__ import annotations

import logging

from PySide6.QtCore import QObject, Signal

from wireframeprojector.controller.animator import AnimationDriver, DrawingSurface, FrameScheduler, FrameStats
from wireframeprojector.model.errors import FormulaCompileError, InvalidGeometryInput
from wireframeprojector.model.motion import MotionParameters
from wireframeprojector.model.state import RenderSettings

logger = logging.getLogger(__name__)


class Store(QObject):
    """Central state store with signals for panel/canvas sync."""
    render_started = Signal(object)
    render_failed = Signal(str, str)  # (title, message)
    stopped = Signal()
    frame_rendered = Signal(object)

    def __init__(self, scheduler: FrameScheduler, surface: DrawingSurface, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.settings = RenderSettings()
        self.driver = AnimationDriver(scheduler, surface, on_frame=self._on_frame)

    def request_render(self, settings: RenderSettings) -> bool:
        """Start a new run; on rejection emit `render_failed` and keep the previous run."""
        try:
            session = self.driver.render(settings)
        except InvalidGeometryInput as e:
            self.render_failed.emit(self.tr("Invalid input"), str(e))
            return False
        except FormulaCompileError as e:
            self.render_failed.emit(self.tr("Error parsing projection equations"), str(e))
            return False

        self.settings = settings
        self.render_started.emit(session)
        return True

    def stop(self) -> None:
        self.driver.stop()
        self.stopped.emit()

    def update_motion(self, motion: MotionParameters) -> None:
        self.driver.update_motion(motion)

    def _on_frame(self, stats: FrameStats) -> None:
        self.frame_rendered.emit(stats)
