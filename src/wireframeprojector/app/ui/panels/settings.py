from __future__ import annotations

from PySide6.QtCore import Slot
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QGroupBox, QSpinBox, QComboBox, QLineEdit, QPushButton, QHBoxLayout
)

from wireframeprojector import config
from wireframeprojector.app.state import Store
from wireframeprojector.app.ui.panels.base import BasePanel, FormGrid
from wireframeprojector.model.motion import MotionParameters
from wireframeprojector.model.state import RenderSettings, RotationPivot

PIVOT_LABELS = {
    RotationPivot.CUBE_CENTER: "Cube center",
    RotationPivot.ORIGIN: "Origin",
}


class SettingsPanel(BasePanel):
    """Inputs for the cuboid, the view, the motion and the projection formulas."""

    def __init__(self, store: Store, parent: QWidget | None = None) -> None:
        super().__init__(store, parent)
        defaults = store.settings
        layout = QVBoxLayout(self)

        # ---- cuboid ----
        box = QGroupBox(self.tr("Cuboid"), self)
        grid = FormGrid(box)
        self._corner_spins = []
        for name, corner in (("1", defaults.corner_1), ("2", defaults.corner_2)):
            for axis, value in zip("xyz", corner):
                self._corner_spins.append(grid.add_spin(f"{axis}{name}:", default=value))
        self.sp_samples = QSpinBox()
        self.sp_samples.setRange(2, 1000)
        self.sp_samples.setValue(defaults.n_samples)
        grid.add_row(self.tr("Samples per edge:"), self.sp_samples)
        layout.addWidget(box)

        # ---- view ----
        box = QGroupBox(self.tr("View"), self)
        grid = FormGrid(box)
        self.sp_fov = grid.add_spin(
            self.tr("Angle of view:"), min_value=1.0, max_value=179.0, step=1.0,
            default=defaults.fov_deg, suffix="°", decimals=1
        )
        self.sp_focal = grid.add_spin(
            self.tr("Focal length:"), min_value=0.001, max_value=1e4, default=defaults.focal_length
        )
        layout.addWidget(box)

        # ---- motion ----
        box = QGroupBox(self.tr("Motion"), self)
        grid = FormGrid(box)
        rpm_min, rpm_max = (int(v) for v in config.RPM_RANGE)
        self.sl_rpm_y = grid.add_slider(
            self.tr("RPM Y:"), min_value=rpm_min, max_value=rpm_max, default=int(defaults.rpm_y)
        )
        self.sl_rpm_z = grid.add_slider(
            self.tr("RPM Z:"), min_value=rpm_min, max_value=rpm_max, default=int(defaults.rpm_z)
        )
        self.cb_pivot = QComboBox()
        for pivot, label in PIVOT_LABELS.items():
            self.cb_pivot.addItem(self.tr(label), pivot)
        self.cb_pivot.setCurrentIndex(list(PIVOT_LABELS).index(defaults.pivot))
        grid.add_row(self.tr("Rotation center:"), self.cb_pivot)

        steps = config.OSC_AMP_SLIDER_STEPS
        amp_min, amp_max = (int(v * steps) for v in config.OSC_AMP_RANGE)
        self._osc_sliders = [
            grid.add_slider(
                self.tr(f"Oscillation {axis.upper()}:"), min_value=amp_min, max_value=amp_max,
                default=int(round(amp * steps)), scale=steps, fmt="{:.1f}"
            )
            for axis, amp in zip("xyz", (defaults.osc_amp_x, defaults.osc_amp_y, defaults.osc_amp_z))
        ]
        for slider in (self.sl_rpm_y, self.sl_rpm_z, *self._osc_sliders):
            slider.valueChanged.connect(self._on_motion_changed)
        layout.addWidget(box)

        # ---- projection ----
        box = QGroupBox(self.tr("Projection"), self)
        grid = FormGrid(box)
        self.le_formula_x = grid.add_row(self.tr("X ="), QLineEdit(defaults.formula_x))
        self.le_formula_y = grid.add_row(self.tr("Y ="), QLineEdit(defaults.formula_y))
        layout.addWidget(box)

        # ---- actions ----
        buttons = QHBoxLayout()
        self.btn_render = QPushButton(self.tr("Render"))
        self.btn_stop = QPushButton(self.tr("Stop"))
        self.btn_render.clicked.connect(self._on_render)
        self.btn_stop.clicked.connect(self.store.stop)
        buttons.addWidget(self.btn_render)
        buttons.addWidget(self.btn_stop)
        layout.addLayout(buttons)
        layout.addStretch()

    def motion_parameters(self) -> MotionParameters:
        steps = config.OSC_AMP_SLIDER_STEPS
        amp_x, amp_y, amp_z = (s.value() / steps for s in self._osc_sliders)
        return MotionParameters(
            rpm_y=float(self.sl_rpm_y.value()),
            rpm_z=float(self.sl_rpm_z.value()),
            osc_amp_x=amp_x,
            osc_amp_y=amp_y,
            osc_amp_z=amp_z,
        )

    def settings(self) -> RenderSettings:
        """Collect the current widget values."""
        values = [w.value() for w in self._corner_spins]
        motion = self.motion_parameters()
        return RenderSettings(
            corner_1=tuple(values[:3]),
            corner_2=tuple(values[3:]),
            n_samples=self.sp_samples.value(),
            fov_deg=self.sp_fov.value(),
            focal_length=self.sp_focal.value(),
            rpm_y=motion.rpm_y,
            rpm_z=motion.rpm_z,
            pivot=self.cb_pivot.currentData(),
            osc_amp_x=motion.osc_amp_x,
            osc_amp_y=motion.osc_amp_y,
            osc_amp_z=motion.osc_amp_z,
            formula_x=self.le_formula_x.text(),
            formula_y=self.le_formula_y.text(),
        )

    @Slot()
    def _on_render(self) -> None:
        self.store.request_render(self.settings())

    @Slot()
    def _on_motion_changed(self) -> None:
        self.store.update_motion(self.motion_parameters())
