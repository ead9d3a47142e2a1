"""One overlay activation: query, label, wait for a key, focus, tear down."""
from __future__ import annotations

import enum
from typing import Callable, Optional, Protocol

from easyfocus.client_config import EasyFocusSettings
from easyfocus.geometry import LabelPosition, layout_labels
from easyfocus.labels import assign_labels
from easyfocus.logging_utils import get_logger
from easyfocus.selection import SelectionResult, handle_keypress
from easyfocus.window_directory import Directory, build_directory

_LOGGER = get_logger()


class ActivationState(enum.Enum):
    IDLE = "idle"
    WAITING_FOR_KEY = "waiting_for_key"
    CLOSED = "closed"


class OverlaySurface(Protocol):
    def place_label(self, label: str, position: LabelPosition, focused: bool) -> None: ...

    def wait_for_key(self) -> Optional[str]: ...

    def close(self) -> None: ...


SurfaceFactory = Callable[[Directory, EasyFocusSettings], OverlaySurface]


class Activation:
    """Drive a single overlay activation against an explicit compositor handle.

    The sequence is fixed: one directory query, one surface, one key, at most
    one focus command. The surface is closed whatever the outcome.
    """

    def __init__(self, client, settings: EasyFocusSettings, surface_factory: SurfaceFactory) -> None:
        self._client = client
        self._settings = settings
        self._surface_factory = surface_factory
        self.state = ActivationState.IDLE
        self.directory: Optional[Directory] = None

    def run(self) -> Optional[SelectionResult]:
        if self.state is not ActivationState.IDLE:
            raise RuntimeError(f"Activation already used (state={self.state.value})")
        try:
            directory = build_directory(self._client)
        except Exception:
            self.state = ActivationState.CLOSED
            raise
        self.directory = directory
        if not directory.windows:
            _LOGGER.info("No windows on workspace %s; nothing to label", directory.workspace.name)
            self.state = ActivationState.CLOSED
            return None

        positions = layout_labels(
            directory.windows,
            directory.output,
            self._settings.label_margin_x,
            self._settings.label_margin_y,
        )
        surface = self._surface_factory(directory, self._settings)
        try:
            for (label, window), position in zip(assign_labels(directory.windows), positions):
                surface.place_label(label, position, window.focused)
            self.state = ActivationState.WAITING_FOR_KEY
            key_name = surface.wait_for_key()
            if key_name is None:
                _LOGGER.debug("Overlay closed without a keypress")
                return SelectionResult("")
            return handle_keypress(self._client, directory.windows, key_name)
        finally:
            surface.close()
            self.state = ActivationState.CLOSED
