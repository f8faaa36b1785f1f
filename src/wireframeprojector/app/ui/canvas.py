from __future__ import annotations

from PySide6.QtCore import QPointF, QSize, Qt
from PySide6.QtGui import QBrush, QColor, QPainter, QPaintEvent, QPen
from PySide6.QtWidgets import QSizePolicy, QWidget

from wireframeprojector.config import (
    BACKGROUND_COLOR, DEFAULT_SURFACE_SIZE, EDGE_COLOR, POINT_COLOR
)


class ProjectionCanvas(QWidget):
    """
    Drawing surface for the animation driver.

    Draw calls are collected into a display list between `clear()` and
    `present()`; `paintEvent` replays the latest list.
    """
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMinimumSize(200, 150)

        self._edge_pen = QPen(QColor(EDGE_COLOR), 1.0)
        self._point_brush = QBrush(QColor(POINT_COLOR))
        self._background = QColor(BACKGROUND_COLOR)

        self._lines: list[tuple[QPointF, QPointF]] = []
        self._circles: list[tuple[QPointF, float]] = []

    def sizeHint(self) -> QSize:
        return QSize(*DEFAULT_SURFACE_SIZE)

    # ---- DrawingSurface ----

    def surface_size(self) -> tuple[int, int]:
        return max(1, self.width()), max(1, self.height())

    def clear(self) -> None:
        self._lines = []
        self._circles = []

    def draw_line(self, start: tuple[float, float], end: tuple[float, float]) -> None:
        self._lines.append((QPointF(*start), QPointF(*end)))

    def fill_circle(self, center: tuple[float, float], radius: float) -> None:
        self._circles.append((QPointF(*center), radius))

    def present(self) -> None:
        self.update()

    # ---- Qt ----

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            painter.fillRect(self.rect(), self._background)

            painter.setPen(self._edge_pen)
            for start, end in self._lines:
                painter.drawLine(start, end)

            painter.setPen(Qt.PenStyle.NoPen)
            painter.setBrush(self._point_brush)
            for center, radius in self._circles:
                painter.drawEllipse(center, radius, radius)
        finally:
            painter.end()
