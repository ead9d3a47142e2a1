"""Resolve the single overlay keypress into at most one focus command."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from easyfocus.labels import index_for_label
from easyfocus.logging_utils import get_logger
from easyfocus.window_directory import Window

_LOGGER = get_logger()


@dataclass(frozen=True)
class SelectionResult:
    key_name: str
    index: Optional[int] = None

    @property
    def selected(self) -> bool:
        return self.index is not None


def resolve_keypress(key_name: str, window_count: int) -> SelectionResult:
    """Return the window index named by ``key_name``, or a no-selection result.

    Only single lowercase letters select. The letter's offset is used
    literally, so with more than 26 windows only the first 26 are reachable.
    """
    if len(key_name) != 1:
        return SelectionResult(key_name)
    index = index_for_label(key_name)
    if index is None or index >= window_count:
        return SelectionResult(key_name)
    return SelectionResult(key_name, index)


def handle_keypress(client, windows: Sequence[Window], key_name: str) -> SelectionResult:
    result = resolve_keypress(key_name, len(windows))
    if not result.selected:
        _LOGGER.debug("Key %r does not select a window; closing without focus change", key_name)
        return result
    window = windows[result.index]
    _LOGGER.debug(
        "Key %r selects window %d (con_id=%s app_id=%s title=%r)",
        key_name,
        result.index,
        window.con_id,
        window.app_id,
        window.name,
    )
    client.focus(window.con_id)
    return result
