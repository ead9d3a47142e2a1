from __future__ import annotations

import argparse
import os
import sys
from typing import Any, Dict, Optional

from easyfocus import __version__
from easyfocus.activation import Activation
from easyfocus.client_config import (
    EasyFocusSettings,
    apply_overrides,
    load_settings,
    normalise_color,
    resolve_config_path,
)
from easyfocus.logging_utils import configure_logging
from easyfocus.sway_client import SwayClient, SwayIpcError
from easyfocus.window_directory import Directory

_COLOR_OPTIONS = (
    "window-background-color",
    "label-background-color",
    "label-text-color",
    "focused-background-color",
    "focused-text-color",
)
_OPACITY_OPTIONS = (
    "window-background-opacity",
    "label-background-opacity",
    "focused-background-opacity",
)
_INT_OPTIONS = (
    "font-size",
    "label-padding-x",
    "label-padding-y",
    "label-margin-x",
    "label-margin-y",
)


def _color_arg(value: str) -> str:
    try:
        return normalise_color(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sway-easyfocus",
        description="Label the windows on the focused sway workspace and focus one with a single key",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", help="Path to a JSON settings file")
    parser.add_argument("--debug", action="store_true", help="Write debug logs")
    parser.add_argument("--swaymsg", default="swaymsg", help="swaymsg binary to use (default: %(default)s)")
    parser.add_argument("--socket", help="sway IPC socket path (default: swaymsg uses $SWAYSOCK)")
    for option in _COLOR_OPTIONS:
        parser.add_argument(f"--{option}", type=_color_arg, metavar="RRGGBB")
    for option in _OPACITY_OPTIONS:
        parser.add_argument(f"--{option}", type=float, metavar="0.0-1.0")
    parser.add_argument("--font-family")
    parser.add_argument("--font-weight")
    for option in _INT_OPTIONS:
        parser.add_argument(f"--{option}", type=int)
    return parser


def resolve_settings(args: argparse.Namespace) -> EasyFocusSettings:
    overrides: Dict[str, Any] = {key: value for key, value in vars(args).items() if key not in {"config", "debug", "swaymsg", "socket"}}
    settings = load_settings(resolve_config_path(args.config))
    return apply_overrides(settings, overrides)


_QT_APP = None


def _qt_surface_factory(directory: Directory, settings: EasyFocusSettings):
    """Create the Qt overlay, starting the QApplication on first use."""
    global _QT_APP
    from PyQt6.QtWidgets import QApplication

    from easyfocus.overlay_window import APP_ID, LabelOverlay

    if QApplication.instance() is None:
        _QT_APP = QApplication([sys.argv[0]])
        _QT_APP.setApplicationName(APP_ID)
        _QT_APP.setDesktopFileName(APP_ID)
    return LabelOverlay(directory, settings)


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = configure_logging(args.debug)
    settings = resolve_settings(args)
    logger.debug("Starting sway-easyfocus %s (pid=%s)", __version__, os.getpid())

    activation = Activation(SwayClient(args.swaymsg, socket_path=args.socket), settings, _qt_surface_factory)
    try:
        result = activation.run()
    except SwayIpcError as exc:
        logger.error("sway IPC failed: %s", exc)
        return 1
    if result is not None and result.selected:
        logger.info("Focused window %d via key %r", result.index, result.key_name)
    return 0


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover
    run()
