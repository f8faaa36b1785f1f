from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QWidget, QGridLayout, QLabel, QSizePolicy, QDoubleSpinBox, QSlider
)

from wireframeprojector.app.state import Store


class BasePanel(QWidget):
    """Base class for left-side panels. Holds a reference to the global store."""
    def __init__(self, store: Store, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.store = store


class FormGrid(QGridLayout):
    """Two-column label/editor grid with helpers for numeric inputs."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setVerticalSpacing(8)
        self._row = 0

    def _next_row(self) -> int:
        r = self._row
        self._row += 1
        return r

    def add_row(self, label: str, widget: QWidget) -> QWidget:
        row = self._next_row()
        self.addWidget(QLabel(label), row, 0)
        self.addWidget(widget, row, 1)
        return widget

    def add_spin(
        self,
        label: str,
        *,
        min_value: float = -1e6,
        max_value: float = 1e6,
        step: float = 0.1,
        default: float = 0.0,
        suffix: str = "",
        decimals: int = 3
    ) -> QDoubleSpinBox:
        w = QDoubleSpinBox()
        w.setRange(min_value, max_value)
        w.setSingleStep(step)
        w.setDecimals(decimals)
        w.setValue(default)
        w.setKeyboardTracking(False)
        w.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        if suffix:
            w.setSuffix(f" {suffix}")
        self.add_row(label, w)
        return w

    def add_slider(
        self,
        label: str,
        *,
        min_value: int,
        max_value: int,
        default: int,
        scale: float = 1.0,
        fmt: str = "{:g}"
    ) -> QSlider:
        """
        Add a horizontal integer slider with a live value label.

        The displayed value is `slider.value() / scale`.
        """
        row = self._next_row()
        self.addWidget(QLabel(label), row, 0)

        slider = QSlider(Qt.Orientation.Horizontal)
        slider.setRange(min_value, max_value)
        slider.setValue(default)
        value_label = QLabel(fmt.format(default / scale))
        value_label.setMinimumWidth(36)
        slider.valueChanged.connect(lambda v: value_label.setText(fmt.format(v / scale)))

        self.addWidget(slider, row, 1)
        self.addWidget(value_label, row, 2)
        return slider
