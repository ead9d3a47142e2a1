"""PyQt6 surface that draws the hint labels and captures a single keypress."""
from __future__ import annotations

from typing import List, Optional

from PyQt6.QtCore import QEventLoop, Qt
from PyQt6.QtGui import QCloseEvent, QColor, QGuiApplication, QKeyEvent, QKeySequence, QPainter, QPaintEvent, QScreen
from PyQt6.QtWidgets import QLabel, QWidget

from easyfocus.client_config import EasyFocusSettings
from easyfocus.geometry import LabelPosition
from easyfocus.logging_utils import get_logger
from easyfocus.style import FOCUSED_PROPERTY, LABEL_OBJECT_NAME, build_stylesheet, window_background
from easyfocus.window_directory import Directory

_LOGGER = get_logger()

APP_ID = "sway-easyfocus"


def key_event_name(event: QKeyEvent) -> str:
    """Name a key the way GTK keyvals do.

    Printable keys use their typed text. Letter keys whose text is a control
    character (Ctrl+a) are named by the letter, lowercase unless Shift is held.
    The rest fall back to the Qt key name (`Esc`, `F1`, `Shift`).
    """
    key = event.key()
    text = event.text()
    if len(text) == 1 and text.isprintable():
        return text
    if Qt.Key.Key_A.value <= key <= Qt.Key.Key_Z.value:
        letter = chr(key)
        if event.modifiers() & Qt.KeyboardModifier.ShiftModifier:
            return letter
        return letter.lower()
    return QKeySequence(key).toString()


def _screen_for_output(output_name: str) -> Optional[QScreen]:
    for screen in QGuiApplication.screens():
        if screen.name() == output_name:
            return screen
    fallback = QGuiApplication.primaryScreen()
    _LOGGER.warning(
        "No Qt screen named %s; drawing on %s, labels may be misplaced",
        output_name,
        fallback.name() if fallback is not None else "no screen",
    )
    return fallback


class LabelOverlay(QWidget):
    """Fullscreen translucent overlay covering the focused output."""

    def __init__(self, directory: Directory, settings: EasyFocusSettings) -> None:
        super().__init__()
        self._output_name = directory.output.name
        self._background = QColor(*window_background(settings))
        self._labels: List[QLabel] = []
        self._key_name: Optional[str] = None
        self._loop: Optional[QEventLoop] = None

        self.setWindowTitle(APP_ID)
        self.setWindowFlag(Qt.WindowType.FramelessWindowHint, True)
        self.setWindowFlag(Qt.WindowType.WindowStaysOnTopHint, True)
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground, True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setStyleSheet(build_stylesheet(settings))

        screen = _screen_for_output(self._output_name)
        if screen is not None:
            self.setScreen(screen)
            self.setGeometry(screen.geometry())
        else:
            _LOGGER.warning("No Qt screen available for output %s", self._output_name)

    @property
    def labels(self) -> List[QLabel]:
        return list(self._labels)

    def place_label(self, label: str, position: LabelPosition, focused: bool) -> None:
        widget = QLabel(label, self)
        widget.setObjectName(LABEL_OBJECT_NAME)
        widget.setProperty(FOCUSED_PROPERTY, bool(focused))
        widget.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)
        widget.adjustSize()
        widget.move(position.x, position.y)
        self._labels.append(widget)

    def wait_for_key(self) -> Optional[str]:
        """Show the overlay and block until the first keypress or close."""
        self._key_name = None
        self._loop = QEventLoop()
        self.showFullScreen()
        self.raise_()
        self.activateWindow()
        self.grabKeyboard()
        _LOGGER.debug("Overlay shown on %s with %d label(s)", self._output_name, len(self._labels))
        try:
            if self.isVisible():
                self._loop.exec()
        finally:
            self.releaseKeyboard()
            self._loop = None
        return self._key_name

    def keyPressEvent(self, event: QKeyEvent) -> None:  # noqa: N802 - Qt override
        if self._loop is None or self._key_name is not None:
            event.ignore()
            return
        self._key_name = key_event_name(event)
        _LOGGER.debug("Overlay received key %r", self._key_name)
        event.accept()
        self._loop.quit()

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802 - Qt override
        if self._loop is not None:
            self._loop.quit()
        super().closeEvent(event)

    def paintEvent(self, event: QPaintEvent) -> None:  # noqa: N802 - Qt override
        painter = QPainter(self)
        painter.setCompositionMode(QPainter.CompositionMode.CompositionMode_Source)
        painter.fillRect(self.rect(), self._background)
        painter.end()
