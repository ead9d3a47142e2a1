"""Translate overlay settings into a Qt style sheet."""
from __future__ import annotations

from typing import Tuple

from easyfocus.client_config import EasyFocusSettings, normalise_color

LABEL_OBJECT_NAME = "easyfocusLabel"
FOCUSED_PROPERTY = "focused"

RGBA = Tuple[int, int, int, int]


def hex_to_rgba(color: str, opacity: float) -> RGBA:
    value = normalise_color(color)
    red, green, blue = (int(value[offset : offset + 2], 16) for offset in (0, 2, 4))
    alpha = int(round(max(0.0, min(1.0, opacity)) * 255))
    return red, green, blue, alpha


def _rgba_css(rgba: RGBA) -> str:
    return "rgba({}, {}, {}, {})".format(*rgba)


def window_background(settings: EasyFocusSettings) -> RGBA:
    return hex_to_rgba(settings.window_background_color, settings.window_background_opacity)


def build_stylesheet(settings: EasyFocusSettings) -> str:
    label_bg = hex_to_rgba(settings.label_background_color, settings.label_background_opacity)
    label_fg = hex_to_rgba(settings.label_text_color, 1.0)
    focused_bg = hex_to_rgba(settings.focused_background_color, settings.focused_background_opacity)
    focused_fg = hex_to_rgba(settings.focused_text_color, 1.0)
    return (
        f"QLabel#{LABEL_OBJECT_NAME} {{\n"
        f"    background-color: {_rgba_css(label_bg)};\n"
        f"    color: {_rgba_css(label_fg)};\n"
        f"    font-family: \"{settings.font_family}\";\n"
        f"    font-weight: {settings.font_weight};\n"
        f"    font-size: {settings.font_size}pt;\n"
        f"    padding: {settings.label_padding_y}px {settings.label_padding_x}px;\n"
        "}\n"
        f"QLabel#{LABEL_OBJECT_NAME}[{FOCUSED_PROPERTY}=\"true\"] {{\n"
        f"    background-color: {_rgba_css(focused_bg)};\n"
        f"    color: {_rgba_css(focused_fg)};\n"
        "}\n"
    )
