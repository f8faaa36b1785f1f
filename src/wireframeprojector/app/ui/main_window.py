from __future__ import annotations

from PySide6.QtCore import Qt, Slot
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import QMainWindow, QSplitter, QScrollArea, QStatusBar, QMessageBox

from wireframeprojector.app.application import VISIBLE_APP_NAME
from wireframeprojector.app.state import Store
from wireframeprojector.app.ui.canvas import ProjectionCanvas
from wireframeprojector.app.ui.panels.settings import SettingsPanel
from wireframeprojector.app.ui.scheduler import QtFrameScheduler
from wireframeprojector.controller.animator import FrameStats
from wireframeprojector.model.state import RenderSession


class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1200, 720)

        self.canvas = ProjectionCanvas(self)
        self.scheduler = QtFrameScheduler(parent=self)

        # Global store
        self.store = Store(self.scheduler, self.canvas, parent=self)

        self.panel = SettingsPanel(self.store, parent=self)
        scroller = QScrollArea(self)
        scroller.setWidget(self.panel)
        scroller.setWidgetResizable(True)
        scroller.setMinimumWidth(320)

        splitter = QSplitter(Qt.Orientation.Horizontal, self)
        splitter.addWidget(scroller)
        splitter.addWidget(self.canvas)
        splitter.setStretchFactor(1, 1)
        self.setCentralWidget(splitter)

        self.setStatusBar(QStatusBar(self))

        self.store.render_started.connect(self._on_render_started)
        self.store.render_failed.connect(self._on_render_failed)
        self.store.stopped.connect(lambda: self.statusBar().showMessage(self.tr("Stopped")))
        self.store.frame_rendered.connect(self._on_frame)

    @Slot(object)
    def _on_render_started(self, session: RenderSession) -> None:
        self.statusBar().showMessage(
            self.tr("Rendering {n} points").format(n=len(session.geometry.sampled_points))
        )

    @Slot(str, str)
    def _on_render_failed(self, title: str, message: str) -> None:
        QMessageBox.warning(self, title, message)

    @Slot(object)
    def _on_frame(self, stats: FrameStats) -> None:
        msg = self.tr("t = {t:.1f} s | points {p} | edges {e}").format(
            t=stats.elapsed_ms / 1000, p=stats.points_drawn, e=stats.edges_drawn
        )
        if stats.failed_points or stats.skipped_edges:
            msg += self.tr(" | failed points {f} | skipped edges {s}").format(
                f=stats.failed_points, s=stats.skipped_edges
            )
        self.statusBar().showMessage(msg)

    def closeEvent(self, event: QCloseEvent) -> None:
        self.store.stop()
        super().closeEvent(event)
