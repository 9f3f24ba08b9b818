"""
Main Application Window
=======================
The primary GUI container that holds the control panel and the 3D viewport.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects the controller's signals to the status bar.
"""
from typing import Optional

from PySide6.QtWidgets import QMainWindow, QWidget, QVBoxLayout, QSplitter, QLabel
from PySide6.QtCore import Qt

from phipacking.controller.scene import SceneController
from phipacking.view.tabs.tab_spheres import SpheresControlPanel
from phipacking.view.widgets.plot_3d import PackingViewport


VISIBLE_APP_NAME = "Φ Sphere Packing Lab"
HINT_TEXT = "Drag spheres to move; release to snap. Only adjacent φ exponents will connect."


class MainWindow(QMainWindow):
    def __init__(self, controller: SceneController, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.controller = controller

        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1400, 900)

        # --- MAIN CONTAINER ---
        main_widget = QWidget()
        self.setCentralWidget(main_widget)

        main_layout = QVBoxLayout(main_widget)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        main_layout.addWidget(splitter)

        # --- LEFT SIDE: Controls ---
        self.controls = SpheresControlPanel(self.controller)
        splitter.addWidget(self.controls)

        # --- RIGHT SIDE: 3D Visualization ---
        self.visualizer = PackingViewport(self.controller)
        splitter.addWidget(self.visualizer)

        # 1 part sidebar : 4 parts 3D view
        splitter.setSizes([300, 1100])

        # --- STATUS BAR ---
        self.lbl_counts = QLabel()
        self.statusBar().showMessage(HINT_TEXT)
        self.statusBar().addPermanentWidget(self.lbl_counts)

        self.controller.scene_changed.connect(self.update_counts)
        self.update_counts()

    def update_counts(self) -> None:
        stats = self.controller.engine.stats()
        self.lbl_counts.setText(f"Spheres: {stats['nodes']}  Links: {stats['links']}")
