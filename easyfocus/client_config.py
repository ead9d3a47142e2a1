"""Configuration helpers for the easyfocus overlay."""
from __future__ import annotations

import json
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

from easyfocus.logging_utils import get_logger

_LOGGER = get_logger()

CONFIG_ENV_VAR = "SWAY_EASYFOCUS_CONFIG"
CONFIG_DIR_NAME = "sway-easyfocus"
CONFIG_FILENAME = "config.json"


@dataclass(frozen=True)
class EasyFocusSettings:
    """Overlay styling and label placement; margins feed the geometry, the rest is cosmetic."""

    window_background_color: str = "1d1f21"
    window_background_opacity: float = 0.2
    label_background_color: str = "1d1f21"
    label_background_opacity: float = 1.0
    label_text_color: str = "c5c8c6"
    focused_background_color: str = "285577"
    focused_background_opacity: float = 1.0
    focused_text_color: str = "ffffff"
    font_family: str = "monospace"
    font_weight: str = "bold"
    font_size: int = 12
    label_padding_x: int = 4
    label_padding_y: int = 0
    label_margin_x: int = 4
    label_margin_y: int = 4


def normalise_color(value: Any) -> str:
    """Return a lowercase six-digit hex colour without the leading '#'."""
    text = str(value).strip().lstrip("#").lower()
    if len(text) != 6 or any(ch not in "0123456789abcdef" for ch in text):
        raise ValueError(f"invalid colour {value!r}; expected six hex digits")
    return text


def _opacity(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError(f"invalid opacity {value!r}")
    numeric = float(value)
    if not 0.0 <= numeric <= 1.0:
        raise ValueError(f"opacity {numeric} outside 0.0-1.0")
    return numeric


def _integer(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"invalid integer {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"invalid integer {value!r}")
    return int(value)


def _non_negative(value: Any) -> int:
    numeric = _integer(value)
    if numeric < 0:
        raise ValueError(f"{numeric} must not be negative")
    return numeric


def _positive(value: Any) -> int:
    numeric = _integer(value)
    if numeric <= 0:
        raise ValueError(f"{numeric} must be positive")
    return numeric


def _text(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"invalid text value {value!r}")
    return value.strip()


def _font_family(value: Any) -> str:
    family = _text(value)
    # Emitted inside a quoted style sheet string.
    if any(ch in family for ch in "\"\\\n"):
        raise ValueError(f"font family {family!r} contains a quote, backslash or newline")
    return family


_FONT_WEIGHTS = {"normal", "bold", "100", "200", "300", "400", "500", "600", "700", "800", "900"}


def _font_weight(value: Any) -> str:
    weight = str(value).strip().lower()
    if weight not in _FONT_WEIGHTS:
        raise ValueError(f"font weight {value!r} is not normal, bold or 100-900")
    return weight


_COERCERS: Dict[str, Callable[[Any], Any]] = {
    "window_background_color": normalise_color,
    "window_background_opacity": _opacity,
    "label_background_color": normalise_color,
    "label_background_opacity": _opacity,
    "label_text_color": normalise_color,
    "focused_background_color": normalise_color,
    "focused_background_opacity": _opacity,
    "focused_text_color": normalise_color,
    "font_family": _font_family,
    "font_weight": _font_weight,
    "font_size": _positive,
    "label_padding_x": _non_negative,
    "label_padding_y": _non_negative,
    "label_margin_x": _integer,
    "label_margin_y": _integer,
}


def resolve_config_path(explicit: Optional[str] = None) -> Path:
    if explicit:
        return Path(explicit).expanduser()
    env_override = os.environ.get(CONFIG_ENV_VAR)
    if env_override:
        return Path(env_override).expanduser()
    config_home = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return config_home / CONFIG_DIR_NAME / CONFIG_FILENAME


def settings_from_mapping(data: Mapping[str, Any], base: Optional[EasyFocusSettings] = None) -> EasyFocusSettings:
    """Coerce known keys onto ``base``; invalid values keep the base value."""
    settings = base or EasyFocusSettings()
    updates: Dict[str, Any] = {}
    for key, value in data.items():
        coerce = _COERCERS.get(key)
        if coerce is None:
            _LOGGER.debug("Ignoring unknown setting %r", key)
            continue
        try:
            updates[key] = coerce(value)
        except (TypeError, ValueError) as exc:
            _LOGGER.warning("Ignoring invalid value for '%s': %r (%s)", key, value, exc)
    return replace(settings, **updates)


def load_settings(path: Path) -> EasyFocusSettings:
    """Read settings from a JSON object file, falling back to defaults."""
    defaults = EasyFocusSettings()
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        _LOGGER.debug("Config not found at %s; using defaults", path)
        return defaults
    except OSError as exc:
        _LOGGER.warning("Failed to read %s; using defaults (%s)", path, exc)
        return defaults
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        _LOGGER.warning("Failed to parse %s; using defaults (%s)", path, exc)
        return defaults
    if not isinstance(data, dict):
        _LOGGER.warning("Config at %s is not a JSON object; using defaults", path)
        return defaults
    return settings_from_mapping(data, defaults)


def apply_overrides(settings: EasyFocusSettings, overrides: Mapping[str, Any]) -> EasyFocusSettings:
    """Merge command-line values over ``settings``; ``None`` means not given."""
    known = {item.name for item in fields(EasyFocusSettings)}
    present = {key: value for key, value in overrides.items() if key in known and value is not None}
    return settings_from_mapping(present, settings)
