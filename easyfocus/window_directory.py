"""Snapshot of the focused output, its workspace, and the windows shown on it."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from easyfocus.logging_utils import get_logger
from easyfocus.sway_client import SwayIpcError

_LOGGER = get_logger()

_SCRATCHPAD_OUTPUT = "__i3"
_LEAF_TYPES = {"con", "floating_con"}


class MalformedTreeError(ValueError):
    """The compositor returned geometry that cannot describe a real container."""


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    @classmethod
    def from_payload(cls, payload: Any, *, field_name: str = "rect") -> "Rect":
        if not isinstance(payload, Mapping):
            raise MalformedTreeError(f"{field_name} is {type(payload).__name__}, expected an object")
        values = []
        for key in ("x", "y", "width", "height"):
            value = payload.get(key)
            if isinstance(value, bool) or not isinstance(value, int):
                raise MalformedTreeError(f"{field_name}.{key} is {value!r}, expected an integer")
            values.append(value)
        x, y, width, height = values
        if width < 0 or height < 0:
            raise MalformedTreeError(f"{field_name} has negative size {width}x{height}")
        return cls(x, y, width, height)


@dataclass(frozen=True)
class Output:
    name: str
    rect: Rect
    node: Dict[str, Any] = field(repr=False, compare=False, hash=False)


@dataclass(frozen=True)
class Workspace:
    name: str
    output: Output
    node: Dict[str, Any] = field(repr=False, compare=False, hash=False)


@dataclass(frozen=True)
class Window:
    """A focusable leaf container; con_id is the handle used to focus it."""

    con_id: int
    rect: Rect
    window_rect: Rect
    deco_rect: Rect
    focused: bool = False
    name: str = ""
    app_id: str = ""

    @classmethod
    def from_node(cls, node: Mapping[str, Any]) -> "Window":
        con_id = node.get("id")
        if isinstance(con_id, bool) or not isinstance(con_id, int):
            raise MalformedTreeError(f"container id is {con_id!r}, expected an integer")
        app_id = node.get("app_id")
        if not app_id:
            properties = node.get("window_properties") or {}
            app_id = properties.get("class") if isinstance(properties, Mapping) else None
        return cls(
            con_id=con_id,
            rect=Rect.from_payload(node.get("rect"), field_name="rect"),
            window_rect=Rect.from_payload(node.get("window_rect"), field_name="window_rect"),
            deco_rect=Rect.from_payload(node.get("deco_rect"), field_name="deco_rect"),
            focused=bool(node.get("focused")),
            name=str(node.get("name") or ""),
            app_id=str(app_id or ""),
        )


@dataclass(frozen=True)
class Directory:
    output: Output
    workspace: Workspace
    windows: Tuple[Window, ...]


def _children(node: Mapping[str, Any]) -> Iterator[Dict[str, Any]]:
    for key in ("nodes", "floating_nodes"):
        children = node.get(key) or []
        if isinstance(children, list):
            for child in children:
                if isinstance(child, dict):
                    yield child


def _contains_focus(node: Mapping[str, Any]) -> bool:
    stack = [node]
    while stack:
        current = stack.pop()
        if current.get("focused"):
            return True
        stack.extend(_children(current))
    return False


def _output_nodes(tree: Mapping[str, Any]) -> List[Dict[str, Any]]:
    return [
        node
        for node in _children(tree)
        if node.get("type") == "output" and node.get("name") != _SCRATCHPAD_OUTPUT
    ]


def get_focused_output(client) -> Output:
    """Query the compositor tree and return the output holding input focus."""
    tree = client.get_tree()
    for node in _output_nodes(tree):
        if _contains_focus(node):
            output = Output(name=str(node.get("name") or ""), rect=Rect.from_payload(node.get("rect")), node=node)
            _LOGGER.debug("Focused output %s at (%d, %d)", output.name, output.rect.x, output.rect.y)
            return output
    raise SwayIpcError("No focused output found in the sway tree")


def get_focused_workspace(output: Output) -> Workspace:
    """Return the workspace currently shown on ``output``."""
    workspaces = [node for node in _children(output.node) if node.get("type") == "workspace"]
    current_name = output.node.get("current_workspace")
    chosen: Optional[Dict[str, Any]] = None
    if current_name:
        chosen = next((node for node in workspaces if node.get("name") == current_name), None)
    if chosen is None:
        chosen = next((node for node in workspaces if _contains_focus(node)), None)
    if chosen is None:
        raise SwayIpcError(f"Output {output.name} has no current workspace")
    workspace = Workspace(name=str(chosen.get("name") or ""), output=output, node=chosen)
    _LOGGER.debug("Focused workspace %s on %s", workspace.name, output.name)
    return workspace


def get_all_windows(workspace: Workspace) -> List[Window]:
    """Flatten the workspace into its visible leaf windows.

    Depth-first pre-order, tiled children before floating ones, so the same
    tree always yields the same order. Leaves hidden behind a tabbed or
    stacked sibling report ``visible: false`` and are skipped.
    """
    windows: List[Window] = []
    stack = list(reversed(list(_children(workspace.node))))
    while stack:
        node = stack.pop()
        children = list(_children(node))
        if children:
            stack.extend(reversed(children))
            continue
        if node.get("type") not in _LEAF_TYPES:
            continue
        if node.get("visible") is False:
            continue
        windows.append(Window.from_node(node))
    return windows


def build_directory(client) -> Directory:
    output = get_focused_output(client)
    workspace = get_focused_workspace(output)
    windows = get_all_windows(workspace)
    _LOGGER.debug("Workspace %s has %d visible window(s)", workspace.name, len(windows))
    return Directory(output=output, workspace=workspace, windows=tuple(windows))
