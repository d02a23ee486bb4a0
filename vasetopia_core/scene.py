"""Scene state and the command table that applies events to it.

Commands are plain functions ``(state, event) -> follow-up events``. They
never hold on to the state; :func:`bind_scene` closes over one
:class:`SceneState` and wires every command to a dispatcher.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Sequence, Type

from .config import AppConfig
from .curve import Curve
from .errors import LatheError
from .events import (
    AxisPointPlaced,
    CurveCleared,
    Event,
    EventDispatcher,
    LastPointRemoved,
    MeshRebuilt,
    ModeToggled,
    PointPlaced,
    ProfilePointPlaced,
    RebuildFailed,
    RebuildRequested,
    Subscription,
    ViewToggled,
)
from .lathe import LatheSettings, build
from .mesh import Mesh

logger = logging.getLogger(__name__)


class EditMode(str, Enum):
    PROFILE = "profile"
    AXIS = "axis"


class ViewMode(str, Enum):
    SKETCH = "sketch"
    PREVIEW = "preview"


@dataclass
class SceneState:
    """The two sketch curves, the current mesh and the UI toggles."""

    profile: Curve = field(default_factory=lambda: Curve(name="profile"))
    axis: Curve = field(default_factory=lambda: Curve(name="axis"))
    mesh: Mesh = field(default_factory=Mesh.empty)
    mode: EditMode = EditMode.PROFILE
    view: ViewMode = ViewMode.SKETCH
    ring_resolution: int = 128
    settings: LatheSettings = field(default_factory=LatheSettings)
    mesh_revision: int = 0
    # The configured default axis is replaced by the first placed axis point.
    axis_is_preset: bool = False

    @classmethod
    def from_config(cls, config: AppConfig) -> "SceneState":
        return cls(
            axis=Curve(config.default_axis, name="axis"),
            ring_resolution=config.lathe.ring_resolution,
            settings=LatheSettings.from_config(config.lathe),
            axis_is_preset=bool(config.default_axis),
        )

    def active_curve(self) -> Curve:
        return self.axis if self.mode is EditMode.AXIS else self.profile

    def add_point(self, curve: Curve, position) -> None:
        if curve is self.axis and self.axis_is_preset:
            logger.info("Replacing the default axis with a sketched one")
            self.axis_is_preset = False
            curve.set_points([position])
        else:
            curve.append(position)

    def replace_mesh(self, mesh: Mesh) -> None:
        self.mesh = mesh
        self.mesh_revision += 1


Command = Callable[[SceneState, Event], Sequence[Event]]


def place_point(state: SceneState, event: PointPlaced) -> Sequence[Event]:
    state.add_point(state.active_curve(), event.position)
    return ()


def place_profile_point(state: SceneState, event: ProfilePointPlaced) -> Sequence[Event]:
    state.add_point(state.profile, event.position)
    return ()


def place_axis_point(state: SceneState, event: AxisPointPlaced) -> Sequence[Event]:
    state.add_point(state.axis, event.position)
    return ()


def remove_last_point(state: SceneState, event: LastPointRemoved) -> Sequence[Event]:
    if state.mode is EditMode.AXIS:
        state.axis_is_preset = False
    state.active_curve().remove_last()
    return ()


def clear_curve(state: SceneState, event: CurveCleared) -> Sequence[Event]:
    if state.mode is EditMode.AXIS:
        state.axis_is_preset = False
    state.active_curve().clear()
    return ()


def toggle_mode(state: SceneState, event: ModeToggled) -> Sequence[Event]:
    state.mode = EditMode.AXIS if state.mode is EditMode.PROFILE else EditMode.PROFILE
    logger.info("Edit mode: %s", state.mode.value)
    return ()


def toggle_view(state: SceneState, event: ViewToggled) -> Sequence[Event]:
    state.view = ViewMode.PREVIEW if state.view is ViewMode.SKETCH else ViewMode.SKETCH
    logger.info("View: %s", state.view.value)
    return ()


def rebuild(state: SceneState, event: RebuildRequested) -> Sequence[Event]:
    """Recompute the mesh; on failure keep the previous one."""
    try:
        mesh = build(state.profile, state.axis, state.ring_resolution, settings=state.settings)
    except LatheError as exc:
        logger.warning("Rebuild failed, keeping previous mesh: %s", exc)
        return (RebuildFailed(exc),)
    state.replace_mesh(mesh)
    logger.info("Rebuilt mesh: %d vertices, %d triangles", mesh.vertex_count, mesh.triangle_count)
    return (MeshRebuilt(mesh),)


COMMANDS: Dict[Type[Event], Command] = {
    PointPlaced: place_point,
    ProfilePointPlaced: place_profile_point,
    AxisPointPlaced: place_axis_point,
    LastPointRemoved: remove_last_point,
    CurveCleared: clear_curve,
    ModeToggled: toggle_mode,
    ViewToggled: toggle_view,
    RebuildRequested: rebuild,
}


def apply(state: SceneState, event: Event) -> Sequence[Event]:
    """Run the command registered for ``event``'s type."""
    command = COMMANDS.get(type(event))
    if command is None:
        raise KeyError(f"No command registered for {type(event).__name__}")
    return command(state, event)


def bind_scene(dispatcher: EventDispatcher, state: SceneState) -> List[Subscription]:
    """Subscribe every command for ``state``; follow-up events are republished."""
    subscriptions: List[Subscription] = []
    for event_type, command in COMMANDS.items():

        def handler(event: Event, command: Command = command) -> None:
            for follow_up in command(state, event):
                dispatcher.publish(follow_up)

        subscriptions.append(dispatcher.subscribe(event_type, handler))
    return subscriptions


__all__ = [
    "EditMode",
    "ViewMode",
    "SceneState",
    "COMMANDS",
    "apply",
    "bind_scene",
    "rebuild",
]
