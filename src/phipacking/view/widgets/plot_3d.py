"""
3D Visualization Widget (PyVista Wrapper)
Draws the spheres and links and turns mouse drags into controller calls.
"""

from __future__ import annotations

from typing import Optional, Tuple

import logging
import numpy as np
import numpy.typing as npt

from PySide6.QtWidgets import QWidget, QVBoxLayout
from PySide6.QtCore import QEvent, QObject, Qt

from pyvistaqt import QtInteractor
import pyvista as pv

from phipacking.config import GRID_SIZE, LINK_COLOR, LINK_MAX_RADIUS, LINK_RADIUS_FRACTION, EPS
from phipacking.controller.scene import SceneController
from phipacking.model.geometry_primitives import ORIGIN, Point
from phipacking.model.state import Link, Node
from phipacking.view.widgets.drag_plane import camera_facing_normal, intersect_ray_plane, pick_nearest_node

logger = logging.getLogger(__name__)


def link_radius(a: Node, b: Node) -> float:
    return min(LINK_MAX_RADIUS, LINK_RADIUS_FRACTION * min(a.radius, b.radius))


class PackingViewport(QWidget):
    """
    PyVista/Qt viewport for the packing scene:
      - perspective camera with orbit controls,
      - ground grid on the XZ plane,
      - one sphere per node, one cylinder per link,
      - left-drag on a sphere moves it (camera interaction is suspended).
    The scene is rebuilt from the controller's engine on every change.
    """
    def __init__(self, controller: SceneController, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.controller = controller

        self.layout_box: QVBoxLayout = QVBoxLayout(self)
        self.layout_box.setContentsMargins(0, 0, 0, 0)

        self.plotter: QtInteractor = QtInteractor(self)
        self.layout_box.addWidget(self.plotter)

        # --- Actors state ---
        self._sphere_actors: dict[int, pv.Actor] = {}
        self._link_actors: list[pv.Actor] = []
        self._grid_actor: Optional[pv.Actor] = None

        self._init_plotter()

        # Mouse events reach us before VTK sees them
        self.plotter.interactor.installEventFilter(self)

        self.controller.scene_changed.connect(self.refresh)
        self.controller.node_moved.connect(lambda *_: self.refresh())

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def refresh(self) -> None:
        """Rebuild every sphere and link actor from the current state."""
        nodes = self.controller.engine.get_nodes()
        links = self.controller.engine.get_links()

        self._clear_scene()
        for node in nodes:
            self._sphere_actors[node.id] = self.plotter.add_mesh(
                pv.Sphere(
                    radius=node.radius,
                    center=node.position.to_array(),
                    theta_resolution=32,
                    phi_resolution=16
                ),
                color=node.color,
                smooth_shading=True,
                specular=0.3,
                pickable=False,
            )

        by_id = {n.id: n for n in nodes}
        for link in links:
            actor = self._add_link_actor(link, by_id)
            if actor is not None:
                self._link_actors.append(actor)

        self.plotter.render()

    def reset_camera(self) -> None:
        cam = self.plotter.camera
        cam.position = (0.0, 2.4, 6.0)
        cam.focal_point = ORIGIN.to_array()
        cam.up = (0.0, 1.0, 0.0)
        cam.view_angle = 60.0
        self.plotter.reset_camera_clipping_range()
        self.plotter.render()

    # ------------------------------------------------------------------------------
    # Internal: Layer Management
    # ------------------------------------------------------------------------------

    def _add_link_actor(self, link: Link, by_id: dict[int, Node]) -> Optional[pv.Actor]:
        a, b = by_id.get(link.a_id), by_id.get(link.b_id)
        if a is None or b is None:
            return None

        start, end = a.position.to_array(), b.position.to_array()
        axis = end - start
        length = float(np.linalg.norm(axis))
        if length < EPS:
            return None

        cylinder = pv.Cylinder(
            center=(start + end) / 2.0,
            direction=axis / length,
            radius=link_radius(a, b),
            height=length,
            resolution=16,
        )
        return self.plotter.add_mesh(cylinder, color=LINK_COLOR, pickable=False)

    def _clear_scene(self) -> None:
        """Remove all sphere and link actors."""
        for actor in self._sphere_actors.values():
            self.plotter.remove_actor(actor, render=False)
        self._sphere_actors.clear()
        for actor in self._link_actors:
            self.plotter.remove_actor(actor, render=False)
        self._link_actors.clear()

    # ------------------------------------------------------------------------------
    # Internal: Setup
    # ------------------------------------------------------------------------------

    def _init_plotter(self) -> None:
        self.plotter.set_background("#101418")
        grid = pv.Plane(
            center=(0.0, 0.0, 0.0),
            direction=(0.0, 1.0, 0.0),
            i_size=GRID_SIZE,
            j_size=GRID_SIZE,
            i_resolution=int(GRID_SIZE),
            j_resolution=int(GRID_SIZE),
        )
        self._grid_actor = self.plotter.add_mesh(
            grid, style="wireframe", color="#444444", opacity=0.6, pickable=False
        )
        self.reset_camera()

    # ------------------------------------------------------------------------------
    # Internal: Mouse handling
    # ------------------------------------------------------------------------------

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        etype = event.type()

        if etype == QEvent.Type.MouseButtonPress and event.button() == Qt.MouseButton.LeftButton:
            node_id = self._pick_node(event)
            if node_id is not None and self.controller.begin_drag(node_id):
                logger.debug(f"Dragging node {node_id}.")
                return True

        elif etype == QEvent.Type.MouseMove and self.controller.dragging is not None:
            target = self._project_to_drag_plane(event)
            if target is not None:
                self.controller.drag_to(target)
            return True

        elif etype == QEvent.Type.MouseButtonRelease and self.controller.dragging is not None:
            if event.button() == Qt.MouseButton.LeftButton:
                self.controller.end_drag()
                return True

        return super().eventFilter(watched, event)

    def _display_coords(self, event) -> Tuple[float, float]:
        """Qt widget coords -> VTK display coords (pixels, origin bottom-left)."""
        ratio = self.plotter.interactor.devicePixelRatioF()
        pos = event.position()
        height = self.plotter.interactor.height() * ratio
        return pos.x() * ratio, height - pos.y() * ratio

    def _pick_ray(self, event) -> Tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        """World-space ray through the pointer (origin on the near plane)."""
        x, y = self._display_coords(event)
        ren = self.plotter.renderer

        def unproject(depth: float) -> npt.NDArray[np.float64]:
            ren.SetDisplayPoint(x, y, depth)
            ren.DisplayToWorld()
            wx, wy, wz, w = ren.GetWorldPoint()
            return np.array([wx, wy, wz]) / (w if w else 1.0)

        near = unproject(0.0)
        far = unproject(1.0)
        return near, far - near

    def _pick_node(self, event) -> Optional[int]:
        origin, direction = self._pick_ray(event)
        return pick_nearest_node(origin, direction, self.controller.engine.get_nodes())

    def _project_to_drag_plane(self, event) -> Optional[Point]:
        """Intersect the pointer ray with the plane through the origin facing the camera."""
        origin, direction = self._pick_ray(event)
        normal = camera_facing_normal(self.plotter.camera.position, ORIGIN.to_array())
        hit = intersect_ray_plane(origin, direction, ORIGIN.to_array(), normal)
        if hit is None:
            return None
        return Point.from_iterable(hit)
