from typing import Optional

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QGroupBox, QFormLayout, QHBoxLayout,
    QComboBox, QPushButton, QCheckBox, QSlider, QLabel
)
from PySide6.QtCore import Qt

from phipacking.config import SNAP_TOLERANCE_MAX, SNAP_TOLERANCE_STEP
from phipacking.controller.scene import SceneController
from phipacking.model.state import SnapSettings


class SpheresControlPanel(QWidget):
    """Add/clear spheres and tune the magnet."""

    def __init__(self, controller: SceneController, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.controller = controller

        layout = QVBoxLayout(self)
        layout.setAlignment(Qt.AlignmentFlag.AlignTop)

        # --- 1. SPHERES ---
        group_add = QGroupBox("Spheres")
        form_add = QFormLayout(group_add)

        self.exp_combo = QComboBox()
        for entry in self.controller.engine.size_table.entries():
            self.exp_combo.addItem(entry.label, entry.exponent)
        form_add.addRow("Size:", self.exp_combo)

        self.btn_add = QPushButton("Add sphere")
        self.btn_add.clicked.connect(self.on_add_clicked)
        self.btn_add_set = QPushButton("Add φ set")
        self.btn_add_set.clicked.connect(self.controller.add_size_set)
        self.btn_clear = QPushButton("Clear")
        self.btn_clear.clicked.connect(self.controller.clear_all)

        buttons = QHBoxLayout()
        buttons.addWidget(self.btn_add)
        buttons.addWidget(self.btn_add_set)
        form_add.addRow(buttons)
        form_add.addRow(self.btn_clear)

        layout.addWidget(group_add)

        # --- 2. MAGNET ---
        group_magnet = QGroupBox("Magnet")
        form_magnet = QFormLayout(group_magnet)

        self.chk_magnet = QCheckBox("Snap adjacent sizes")
        self.chk_magnet.setChecked(self.controller.settings.magnet_enabled)
        self.chk_magnet.toggled.connect(self.controller.set_magnet_enabled)
        form_magnet.addRow(self.chk_magnet)

        # Slider works in integer steps of SNAP_TOLERANCE_STEP
        self.slider_snap = QSlider(Qt.Orientation.Horizontal)
        self.slider_snap.setRange(0, round(SNAP_TOLERANCE_MAX / SNAP_TOLERANCE_STEP))
        self.slider_snap.setValue(round(self.controller.settings.snap_tolerance / SNAP_TOLERANCE_STEP))
        self.slider_snap.valueChanged.connect(self.on_snap_slider_changed)
        self.lbl_snap = QLabel()

        snap_row = QHBoxLayout()
        snap_row.addWidget(self.slider_snap, 1)
        snap_row.addWidget(self.lbl_snap)
        form_magnet.addRow("Snap tolerance:", snap_row)

        layout.addWidget(group_magnet)
        layout.addStretch()

        self.controller.settings_changed.connect(self.update_from_settings)
        self.update_from_settings(self.controller.settings)

    def on_add_clicked(self) -> None:
        self.controller.add_sphere(int(self.exp_combo.currentData()))

    def on_snap_slider_changed(self, value: int) -> None:
        self.controller.set_snap_tolerance(value * SNAP_TOLERANCE_STEP)

    def update_from_settings(self, settings: SnapSettings) -> None:
        """Sync widgets without re-triggering their signals."""
        self.lbl_snap.setText(f"{settings.snap_tolerance:.2f}")

        if self.chk_magnet.isChecked() != settings.magnet_enabled:
            self.chk_magnet.blockSignals(True)
            self.chk_magnet.setChecked(settings.magnet_enabled)
            self.chk_magnet.blockSignals(False)

        slider_value = round(settings.snap_tolerance / SNAP_TOLERANCE_STEP)
        if self.slider_snap.value() != slider_value:
            self.slider_snap.blockSignals(True)
            self.slider_snap.setValue(slider_value)
            self.slider_snap.blockSignals(False)
