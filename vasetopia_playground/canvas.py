"""Qt canvas: turns clicks and keys into scene events and paints the result."""
from __future__ import annotations

import logging
import math
import time
from typing import Dict, List, Optional, Tuple

import numpy as np
from PySide6.QtCore import QPointF, QSize, Qt, QTimer, Signal
from PySide6.QtGui import QColor, QPainter, QPen, QPolygonF
from PySide6.QtWidgets import QWidget

from vasetopia_core.curve import Curve
from vasetopia_core.events import (
    AxisPointPlaced,
    CurveCleared,
    EventDispatcher,
    LastPointRemoved,
    MeshRebuilt,
    ModeToggled,
    PointPlaced,
    RebuildFailed,
    RebuildRequested,
    Subscription,
    ViewToggled,
)
from vasetopia_core.mesh import Mesh
from vasetopia_core.polyline import distance_to_polyline
from vasetopia_core.scene import EditMode, SceneState, ViewMode

logger = logging.getLogger(__name__)

Point = Tuple[float, float]

LIGHT_DIR = np.array([0.3, 1.0, 0.2]) / np.linalg.norm([0.3, 1.0, 0.2])
BASE_COLOR = np.array([255.0, 0.0, 0.0])
BACKGROUND = QColor(int(0.1 * 255), int(0.2 * 255), int(0.3 * 255))


class Canvas(QWidget):
    """Sketch surface in normalised device coordinates ([-1, 1] on both axes, y up)."""

    status_changed = Signal(dict)

    def __init__(self, dispatcher: EventDispatcher, state: SceneState):
        super().__init__()
        self.setObjectName("VasetopiaCanvas")
        self.setMinimumSize(QSize(640, 480))
        self.setFocusPolicy(Qt.StrongFocus)
        self.setMouseTracking(True)
        self.setToolTip(
            "Left-click: add a point to the active curve. Right-click: add an axis point\n"
            "(the first one replaces the default axis).\n"
            "R: rebuild mesh. P: toggle preview. M: toggle profile/axis mode.\n"
            "Backspace: remove last point. Esc: clear the active curve."
        )

        self._dispatcher = dispatcher
        self._state = state
        self._cursor: Optional[Point] = None
        self._message = ""
        self._anim_start = time.monotonic()

        self._subscriptions: List[Subscription] = [
            dispatcher.subscribe(MeshRebuilt, self._on_mesh_rebuilt),
            dispatcher.subscribe(RebuildFailed, self._on_rebuild_failed),
            dispatcher.subscribe(ModeToggled, lambda _event: self._emit_status()),
            dispatcher.subscribe(ViewToggled, lambda _event: self._emit_status()),
        ]
        self._unsubscribe_curves = [
            state.profile.subscribe(self._on_curve_changed),
            state.axis.subscribe(self._on_curve_changed),
        ]

        self._anim_timer = QTimer(self)
        self._anim_timer.setInterval(33)
        self._anim_timer.timeout.connect(self._tick)
        self._anim_timer.start()

    # ------------------------------------------------------------------
    # View transforms
    def world_from_screen(self, point: Point) -> Point:
        w = max(float(self.width()), 1.0)
        h = max(float(self.height()), 1.0)
        return (2.0 * point[0] / w - 1.0, 1.0 - 2.0 * point[1] / h)

    def screen_from_world(self, point: Point) -> Point:
        w = float(self.width())
        h = float(self.height())
        return ((point[0] + 1.0) * 0.5 * w, (1.0 - point[1]) * 0.5 * h)

    def world_from_event(self, event) -> Point:
        pos = event.position()
        return self.world_from_screen((pos.x(), pos.y()))

    # ------------------------------------------------------------------
    # Status
    def status_payload(self) -> Dict[str, object]:
        state = self._state
        payload: Dict[str, object] = {
            "mode": state.mode.value,
            "view": state.view.value,
            "profile_points": len(state.profile),
            "axis_points": len(state.axis),
            "vertices": state.mesh.vertex_count,
            "triangles": state.mesh.triangle_count,
            "axis_distance": None,
            "message": self._message,
        }
        if self._cursor is not None and len(state.axis):
            payload["axis_distance"] = distance_to_polyline(self._cursor, state.axis.points)
        return payload

    def _emit_status(self) -> None:
        self.status_changed.emit(self.status_payload())
        self.update()

    def post_status_message(self, message: str) -> None:
        self._message = message
        self._emit_status()

    def _on_mesh_rebuilt(self, event: MeshRebuilt) -> None:
        self.post_status_message(f"Mesh rebuilt ({event.mesh.vertex_count} vertices)")

    def _on_rebuild_failed(self, event: RebuildFailed) -> None:
        self.post_status_message(f"Rebuild failed: {event.error}")

    def _on_curve_changed(self, curve: Curve) -> None:
        self._emit_status()

    def _tick(self) -> None:
        if self._state.view is ViewMode.PREVIEW:
            self.update()

    # ------------------------------------------------------------------
    # Input
    def mousePressEvent(self, event):  # pragma: no cover - GUI entry point
        if self._state.view is not ViewMode.SKETCH:
            return
        point = self.world_from_event(event)
        if event.button() == Qt.LeftButton:
            logger.debug("Left click at (%.3f, %.3f)", *point)
            self._dispatcher.publish(PointPlaced(point))
        elif event.button() == Qt.RightButton:
            logger.debug("Right click at (%.3f, %.3f)", *point)
            self._dispatcher.publish(AxisPointPlaced(point))

    def mouseMoveEvent(self, event):  # pragma: no cover - GUI entry point
        self._cursor = self.world_from_event(event)
        self.status_changed.emit(self.status_payload())

    def keyPressEvent(self, event):  # pragma: no cover - GUI entry point
        key = event.key()
        if key == Qt.Key_R:
            self._dispatcher.publish(RebuildRequested())
        elif key == Qt.Key_P:
            self._dispatcher.publish(ViewToggled())
        elif key in (Qt.Key_M, Qt.Key_Tab):
            self._dispatcher.publish(ModeToggled())
        elif key in (Qt.Key_Backspace, Qt.Key_Delete):
            self._dispatcher.publish(LastPointRemoved())
        elif key == Qt.Key_Escape:
            self._dispatcher.publish(CurveCleared())
        else:
            super().keyPressEvent(event)

    def closeEvent(self, event):  # pragma: no cover - GUI entry point
        for subscription in self._subscriptions:
            subscription.cancel()
        for unsubscribe in self._unsubscribe_curves:
            unsubscribe()
        super().closeEvent(event)

    # ------------------------------------------------------------------
    # Painting
    def paintEvent(self, event):  # pragma: no cover - GUI entry point
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.fillRect(self.rect(), BACKGROUND)
        if self._state.view is ViewMode.PREVIEW:
            self._draw_mesh(painter, time.monotonic() - self._anim_start)
        else:
            self._draw_curve(painter, self._state.axis, QColor(230, 230, 230), self._state.mode is EditMode.AXIS)
            self._draw_curve(painter, self._state.profile, QColor(255, 90, 90), self._state.mode is EditMode.PROFILE)
        painter.end()

    def _draw_curve(self, painter: QPainter, curve: Curve, color: QColor, active: bool) -> None:
        strip = curve.line_strip()
        if strip.shape[0] == 0:
            return
        points = [QPointF(*self.screen_from_world((float(x), float(y)))) for x, y, _z in strip]
        painter.setPen(QPen(color, 3 if active else 1.5))
        if len(points) > 1:
            painter.drawPolyline(points)
        painter.setPen(QPen(color, 6))
        for pt in points:
            painter.drawPoint(pt)

    def _draw_mesh(self, painter: QPainter, elapsed: float) -> None:
        mesh: Mesh = self._state.mesh
        bounds = mesh.bounds()
        if bounds is None:
            return
        lo, hi = bounds
        center = 0.5 * (lo.astype(float) + hi.astype(float))
        extent = float(np.max(hi - lo)) or 1.0

        # Orbit around Y like the original turntable camera.
        yaw = elapsed
        c, s = math.cos(yaw), math.sin(yaw)
        rot = np.array([[c, 0.0, s], [0.0, 1.0, 0.0], [-s, 0.0, c]])
        pts = (mesh.positions.astype(float) - center) @ rot.T
        scale = 0.8 * min(self.width(), self.height()) / extent
        sx = self.width() * 0.5 + pts[:, 0] * scale
        sy = self.height() * 0.5 - pts[:, 1] * scale

        tris = mesh.triangles
        depth = pts[tris, 2].mean(axis=1)
        normals = mesh.normals[tris].astype(float).mean(axis=1)
        lengths = np.linalg.norm(normals, axis=1)
        normals = normals / np.where(lengths > 0.0, lengths, 1.0)[:, None]
        shade = np.clip(normals @ LIGHT_DIR, 0.0, 1.0)

        painter.setPen(Qt.NoPen)
        for t in np.argsort(depth):
            a, b, d = tris[t]
            rgb = BASE_COLOR * shade[t]
            painter.setBrush(QColor(int(rgb[0]), int(rgb[1]), int(rgb[2])))
            painter.drawPolygon(
                QPolygonF([QPointF(sx[a], sy[a]), QPointF(sx[b], sy[b]), QPointF(sx[d], sy[d])])
            )


__all__ = ["Canvas"]
