import warnings

import numpy as np
import pytest

from vasetopia_core.config import AppConfig, LatheConfig
from vasetopia_core.curve import Curve
from vasetopia_core.errors import DegenerateRingError, InvalidAxisError
from vasetopia_core.events import (
    AxisPointPlaced,
    CurveCleared,
    EventDispatcher,
    LastPointRemoved,
    MeshRebuilt,
    ModeToggled,
    PointPlaced,
    ProfilePointPlaced,
    RebuildFailed,
    RebuildRequested,
    ViewToggled,
)
from vasetopia_core.mesh import Mesh
from vasetopia_core.scene import COMMANDS, EditMode, SceneState, ViewMode, apply, bind_scene

SQUARE = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)]


@pytest.fixture
def wired():
    bus = EventDispatcher()
    state = SceneState(axis=Curve([(0.0, -1.0), (0.0, 2.0)], name="axis"), ring_resolution=8)
    bind_scene(bus, state)
    outputs = []
    bus.subscribe(MeshRebuilt, outputs.append)
    bus.subscribe(RebuildFailed, outputs.append)
    return bus, state, outputs


def test_point_placed_follows_mode(wired):
    bus, state, _ = wired
    bus.publish(PointPlaced((0.5, 0.5)))
    assert state.profile[-1] == (0.5, 0.5, 0.0)
    bus.publish(ModeToggled())
    assert state.mode is EditMode.AXIS
    bus.publish(PointPlaced((0.0, 3.0)))
    assert state.axis[-1] == (0.0, 3.0, 0.0)
    assert len(state.profile) == 1


def test_explicit_curve_events(wired):
    bus, state, _ = wired
    bus.publish(ProfilePointPlaced((0.2, 0.1)))
    bus.publish(AxisPointPlaced((0.0, 4.0)))
    assert len(state.profile) == 1
    assert len(state.axis) == 3


def test_rebuild_replaces_mesh(wired):
    bus, state, outputs = wired
    for pt in SQUARE:
        bus.publish(PointPlaced(pt))
    bus.publish(RebuildRequested())
    assert state.mesh.vertex_count == 32
    assert state.mesh_revision == 1
    assert len(outputs) == 1
    assert isinstance(outputs[0], MeshRebuilt)
    assert outputs[0].mesh is state.mesh


def test_failed_rebuild_keeps_previous_mesh(wired):
    bus, state, outputs = wired
    for pt in SQUARE:
        bus.publish(PointPlaced(pt))
    bus.publish(RebuildRequested())
    good = state.mesh

    bus.publish(ModeToggled())
    bus.publish(CurveCleared())
    bus.publish(PointPlaced((0.0, 0.0)))
    bus.publish(RebuildRequested())

    assert state.mesh is good
    assert state.mesh_revision == 1
    assert isinstance(outputs[-1], RebuildFailed)
    assert isinstance(outputs[-1].error, InvalidAxisError)
    assert len(state.profile) == 4

    # Fixing the axis and retrying works.
    bus.publish(PointPlaced((0.0, 2.0)))
    bus.publish(RebuildRequested())
    assert state.mesh is not good
    assert isinstance(outputs[-1], MeshRebuilt)


def test_bad_ring_resolution_reported():
    state = SceneState(ring_resolution=2)
    state.profile.set_points(SQUARE)
    follow_ups = apply(state, RebuildRequested())
    assert isinstance(follow_ups[0].error, DegenerateRingError)
    assert state.mesh.is_empty


def test_empty_profile_rebuild_gives_empty_mesh(wired):
    bus, state, outputs = wired
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        bus.publish(RebuildRequested())
    assert state.mesh.is_empty
    assert isinstance(outputs[-1], MeshRebuilt)


def test_remove_last_and_clear_act_on_active_curve(wired):
    bus, state, _ = wired
    for pt in SQUARE:
        bus.publish(PointPlaced(pt))
    bus.publish(LastPointRemoved())
    assert len(state.profile) == 3
    bus.publish(CurveCleared())
    assert len(state.profile) == 0
    assert len(state.axis) == 2


def test_view_toggle(wired):
    bus, state, _ = wired
    assert state.view is ViewMode.SKETCH
    bus.publish(ViewToggled())
    assert state.view is ViewMode.PREVIEW
    bus.publish(ViewToggled())
    assert state.view is ViewMode.SKETCH


def test_points_applied_before_queued_rebuild():
    bus = EventDispatcher()
    state = SceneState(axis=Curve([(0.0, -1.0), (0.0, 2.0)]), ring_resolution=4)
    bind_scene(bus, state)

    # A handler that places the last point and asks for a rebuild in one go.
    def place_and_rebuild(event):
        bus.publish(RebuildRequested())

    state.profile.set_points(SQUARE[:3])
    bus.subscribe(ProfilePointPlaced, place_and_rebuild)
    bus.publish(ProfilePointPlaced(SQUARE[3]))
    assert state.mesh.vertex_count == 16


def test_from_config():
    config = AppConfig(lathe=LatheConfig(ring_resolution=6, uv_offset=0.0))
    state = SceneState.from_config(config)
    assert state.ring_resolution == 6
    assert state.settings.uv_offset == 0.0
    assert np.allclose(state.axis.points, [(0, 0, 0), (0, 5, 0)])


def test_first_axis_point_replaces_configured_axis():
    state = SceneState.from_config(AppConfig())
    apply(state, AxisPointPlaced((0.5, -0.5)))
    assert state.axis.points.tolist() == [[0.5, -0.5, 0.0]]
    apply(state, AxisPointPlaced((0.5, 1.5)))
    assert len(state.axis) == 2


def test_axis_mode_click_also_replaces_configured_axis():
    state = SceneState.from_config(AppConfig())
    apply(state, ModeToggled())
    apply(state, PointPlaced((1.0, 1.0)))
    assert len(state.axis) == 1
    apply(state, ModeToggled())
    apply(state, PointPlaced((0.2, 0.2)))
    assert len(state.profile) == 1


def test_editing_the_configured_axis_keeps_it_live():
    state = SceneState.from_config(AppConfig())
    apply(state, ModeToggled())
    apply(state, LastPointRemoved())
    apply(state, AxisPointPlaced((0.0, 3.0)))
    assert state.axis.points.tolist() == [[0.0, 0.0, 0.0], [0.0, 3.0, 0.0]]


def test_every_input_event_has_a_command():
    for event_type in (
        PointPlaced,
        ProfilePointPlaced,
        AxisPointPlaced,
        LastPointRemoved,
        CurveCleared,
        ModeToggled,
        ViewToggled,
        RebuildRequested,
    ):
        assert event_type in COMMANDS


def test_apply_unknown_event():
    with pytest.raises(KeyError):
        apply(SceneState(), MeshRebuilt(Mesh.empty()))
