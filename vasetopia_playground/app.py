"""Application bootstrap for the Vasetopia playground."""
from __future__ import annotations

import logging
import sys
from typing import Optional

from PySide6.QtCore import QSize, Qt
from PySide6.QtGui import QAction
from PySide6.QtWidgets import QApplication, QLabel, QMainWindow, QStatusBar, QToolBar

from vasetopia_core.config import AppConfig, load_config
from vasetopia_core.events import (
    CurveCleared,
    EventDispatcher,
    LastPointRemoved,
    ModeToggled,
    RebuildRequested,
    ViewToggled,
)
from vasetopia_core.logging_config import setup_logging
from vasetopia_core.scene import SceneState, bind_scene

from .canvas import Canvas

logger = logging.getLogger(__name__)


class Main(QMainWindow):
    """Top-level window wiring the dispatcher, the scene and the canvas."""

    def __init__(self, config: Optional[AppConfig] = None):
        super().__init__()
        self.setWindowTitle("Vasetopia")
        self.config = config or AppConfig()

        self.dispatcher = EventDispatcher()
        self.state = SceneState.from_config(self.config)
        self._scene_subscriptions = bind_scene(self.dispatcher, self.state)

        self.canvas = Canvas(self.dispatcher, self.state)
        self.setCentralWidget(self.canvas)

        self._status_labels: dict[str, QLabel] = {}
        self._setup_status_bar()
        self._make_toolbar()

        self.canvas.status_changed.connect(self._on_status_changed)
        self.resize(*self.config.window_size)
        self._on_status_changed(self.canvas.status_payload())

    # ------------------------------------------------------------------
    # UI scaffolding
    def _setup_status_bar(self) -> None:
        bar = QStatusBar()
        bar.setSizeGripEnabled(False)
        self.setStatusBar(bar)
        self._status_labels = {
            "mode": QLabel("mode: --"),
            "view": QLabel("view: --"),
            "profile_points": QLabel("profile: --"),
            "axis_points": QLabel("axis: --"),
            "vertices": QLabel("verts: --"),
            "triangles": QLabel("tris: --"),
            "axis_distance": QLabel("dist: --"),
        }
        for label in self._status_labels.values():
            bar.addPermanentWidget(label)

    def _make_toolbar(self) -> None:
        toolbar = QToolBar("Lathe")
        toolbar.setMovable(False)
        toolbar.setIconSize(QSize(24, 24))
        self.addToolBar(Qt.LeftToolBarArea, toolbar)

        definitions = (
            ("Rebuild", "R", "Sweep the profile around the axis.", RebuildRequested),
            ("Mode", "M", "Switch between drawing the profile and the axis.", ModeToggled),
            ("View", "P", "Switch between the sketch and the 3D preview.", ViewToggled),
            ("Undo Point", "Backspace", "Remove the last point of the active curve.", LastPointRemoved),
            ("Clear", "Esc", "Remove every point of the active curve.", CurveCleared),
        )
        for text, shortcut, tip, event_type in definitions:
            action = QAction(text, self)
            action.setToolTip(f"{tip} ({shortcut})")
            action.setStatusTip(tip)
            action.triggered.connect(lambda _checked=False, e=event_type: self.dispatcher.publish(e()))
            toolbar.addAction(action)

    # ------------------------------------------------------------------
    # Event handlers
    def _on_status_changed(self, payload: dict) -> None:
        message = payload.get("message")
        if message:
            self.statusBar().showMessage(str(message), 4000)
        self._status_labels["mode"].setText(f"mode: {payload.get('mode', '--')}")
        self._status_labels["view"].setText(f"view: {payload.get('view', '--')}")
        self._status_labels["profile_points"].setText(f"profile: {payload.get('profile_points', '--')}")
        self._status_labels["axis_points"].setText(f"axis: {payload.get('axis_points', '--')}")
        self._status_labels["vertices"].setText(f"verts: {payload.get('vertices', '--')}")
        self._status_labels["triangles"].setText(f"tris: {payload.get('triangles', '--')}")
        self._status_labels["axis_distance"].setText(self._format_value("dist", payload.get("axis_distance"), 3))

    def _format_value(self, label: str, value: float | None, precision: int) -> str:
        if value is None:
            return f"{label}: --"
        return f"{label}: {value:.{precision}f}"


def run(config: Optional[AppConfig] = None) -> int:
    app = QApplication.instance() or QApplication(sys.argv)
    window = Main(config)
    window.show()
    logger.info("Playground started")
    return app.exec()


def main() -> int:
    config = load_config()
    setup_logging(config.log_level)
    return run(config)


if __name__ == "__main__":
    sys.exit(main())
