"""
Scene Controller
================
Owns the packing engine and the snap settings and announces every change.

Why is this file needed?
------------------------
1. Signals: the viewport and the control panel never poll the model; they
   redraw when `scene_changed` or `node_moved` fires.
2. Drag session: it tracks which node is being dragged so that only one
   drag is active at a time.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal

from phipacking.model.engine import PackingEngine
from phipacking.model.geometry_primitives import Point
from phipacking.model.state import SnapSettings

logger = logging.getLogger(__name__)


class SceneController(QObject):
    """Central scene store with signals for panel/viewport sync."""
    scene_changed = Signal()  # nodes or links added/removed
    node_moved = Signal(int, object)  # node id, Point
    settings_changed = Signal(object)  # SnapSettings
    drag_state_changed = Signal(object)  # dragged node id or None

    def __init__(self, engine: Optional[PackingEngine] = None, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.engine = engine if engine is not None else PackingEngine()
        self._dragging: Optional[int] = None

    # ---- settings ----

    @property
    def settings(self) -> SnapSettings:
        return self.engine.settings

    def set_magnet_enabled(self, enabled: bool) -> None:
        self.engine.settings = SnapSettings(bool(enabled), self.settings.snap_tolerance)
        logger.info(f"Magnet {'enabled' if enabled else 'disabled'}.")
        self.settings_changed.emit(self.settings)

    def set_snap_tolerance(self, tolerance: float) -> None:
        self.engine.settings = SnapSettings(self.settings.magnet_enabled, tolerance)
        logger.debug(f"Snap tolerance set to {self.settings.snap_tolerance:.2f}.")
        self.settings_changed.emit(self.settings)

    # ---- store actions ----

    def add_sphere(self, exponent: int, position: Optional[Point] = None) -> int:
        node = self.engine.add_node(exponent, position)
        logger.info(f"Added sphere {node.id} (φ^{node.exponent}).")
        self.scene_changed.emit()
        return node.id

    def add_size_set(self) -> list[int]:
        ids = [n.id for n in self.engine.add_size_set()]
        self.scene_changed.emit()
        return ids

    def clear_all(self) -> None:
        self.end_drag_without_snap()
        self.engine.clear_all()
        self.scene_changed.emit()

    # ---- drag session ----

    @property
    def dragging(self) -> Optional[int]:
        return self._dragging

    def begin_drag(self, node_id: int) -> bool:
        """Start dragging a node. Refused while another drag is active or for unknown ids."""
        if self._dragging is not None:
            return False
        if self.engine.get_node(node_id) is None:
            return False
        self._dragging = node_id
        self.drag_state_changed.emit(node_id)
        return True

    def drag_to(self, position: Point) -> None:
        if self._dragging is None:
            return
        node = self.engine.on_drag_move(self._dragging, position)
        if node is not None:
            self.node_moved.emit(node.id, node.position)

    def end_drag(self) -> None:
        """Release the dragged node and let the magnet try to lock it."""
        node_id = self._dragging
        if node_id is None:
            return
        self._dragging = None
        links_before = len(self.engine.get_links())
        node = self.engine.on_drag_end(node_id)
        self.drag_state_changed.emit(None)
        if node is None:
            return
        if len(self.engine.get_links()) != links_before:
            self.scene_changed.emit()
        else:
            self.node_moved.emit(node.id, node.position)

    def end_drag_without_snap(self) -> None:
        if self._dragging is not None:
            self._dragging = None
            self.drag_state_changed.emit(None)
