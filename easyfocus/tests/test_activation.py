from __future__ import annotations

import pytest

from easyfocus.activation import Activation, ActivationState
from easyfocus.client_config import EasyFocusSettings
from easyfocus.geometry import LabelPosition
from easyfocus.sway_client import SwayIpcError
from easyfocus.tests.sway_fixtures import FakeSway, make_leaf, make_rect, single_workspace_tree


class FakeSurface:
    def __init__(self, key_name):
        self.key_name = key_name
        self.placed = []
        self.waits = 0
        self.closed = 0

    def place_label(self, label, position, focused):
        self.placed.append((label, position, focused))

    def wait_for_key(self):
        self.waits += 1
        return self.key_name

    def close(self):
        self.closed += 1


class SurfaceRecorder:
    def __init__(self, key_name=None):
        self.key_name = key_name
        self.surfaces = []
        self.directories = []

    def __call__(self, directory, settings):
        self.directories.append(directory)
        surface = FakeSurface(self.key_name)
        self.surfaces.append(surface)
        return surface


def _settings() -> EasyFocusSettings:
    return EasyFocusSettings(label_margin_x=5, label_margin_y=5)


def test_empty_workspace_creates_no_overlay() -> None:
    client = FakeSway(single_workspace_tree([]))
    recorder = SurfaceRecorder("a")
    activation = Activation(client, _settings(), recorder)

    assert activation.run() is None
    assert recorder.surfaces == []
    assert client.focused == []
    assert activation.state is ActivationState.CLOSED


def test_labels_are_placed_and_key_selects_window() -> None:
    leaves = [
        make_leaf(10, rect=make_rect(100, 50, 400, 300), deco_rect=make_rect(0, 0, 400, 20), focused=True),
        make_leaf(11, rect=make_rect(500, 50, 400, 300), deco_rect=make_rect(0, 0, 400, 20)),
    ]
    client = FakeSway(single_workspace_tree(leaves))
    recorder = SurfaceRecorder("b")

    result = Activation(client, _settings(), recorder).run()

    (surface,) = recorder.surfaces
    assert surface.placed == [
        ("a", LabelPosition(105, 35), True),
        ("b", LabelPosition(505, 35), False),
    ]
    assert result is not None and result.index == 1
    assert client.focused == [11]
    assert surface.waits == 1
    assert surface.closed == 1


def test_positions_are_relative_to_the_output_origin() -> None:
    leaves = [make_leaf(10, rect=make_rect(2000, 100, 100, 100), deco_rect=make_rect(0, 0, 100, 10))]
    tree = single_workspace_tree(leaves, output_rect=make_rect(1920, 0, 1920, 1080))
    recorder = SurfaceRecorder("Escape")

    Activation(FakeSway(tree), _settings(), recorder).run()

    assert recorder.surfaces[0].placed[0][1] == LabelPosition(85, 95)


@pytest.mark.parametrize("key_name", ["Escape", "A", "c", None])
def test_non_selecting_keys_close_without_focus(key_name) -> None:
    client = FakeSway(single_workspace_tree([make_leaf(1), make_leaf(2)]))
    recorder = SurfaceRecorder(key_name)
    activation = Activation(client, _settings(), recorder)

    result = activation.run()

    assert result is not None and not result.selected
    assert client.focused == []
    assert recorder.surfaces[0].closed == 1
    assert activation.state is ActivationState.CLOSED


def test_27_windows_key_a_selects_index_zero() -> None:
    leaves = [make_leaf(100 + i) for i in range(27)]
    client = FakeSway(single_workspace_tree(leaves))
    recorder = SurfaceRecorder("a")

    result = Activation(client, _settings(), recorder).run()

    labels = [label for label, _, _ in recorder.surfaces[0].placed]
    assert labels[0] == labels[26] == "a"
    assert result.index == 0
    assert client.focused == [100]


def test_focus_failure_propagates_and_still_closes_overlay() -> None:
    client = FakeSway(single_workspace_tree([make_leaf(1)]), focus_error=SwayIpcError("boom"))
    recorder = SurfaceRecorder("a")
    activation = Activation(client, _settings(), recorder)

    with pytest.raises(SwayIpcError):
        activation.run()
    assert recorder.surfaces[0].closed == 1
    assert activation.state is ActivationState.CLOSED


def test_activation_is_single_shot() -> None:
    client = FakeSway(single_workspace_tree([make_leaf(1)]))
    activation = Activation(client, _settings(), SurfaceRecorder("a"))
    activation.run()
    with pytest.raises(RuntimeError):
        activation.run()
    assert client.focused == [1]
    assert client.tree_queries == 1


def test_directory_query_failure_creates_no_overlay() -> None:
    class UnreachableSway(FakeSway):
        def get_tree(self):
            raise SwayIpcError("Unable to connect to sway")

    client = UnreachableSway(single_workspace_tree([make_leaf(1)]))
    recorder = SurfaceRecorder("a")
    activation = Activation(client, _settings(), recorder)

    with pytest.raises(SwayIpcError):
        activation.run()
    assert recorder.surfaces == []
    assert recorder.directories == []
    assert client.focused == []
    assert activation.state is ActivationState.CLOSED
