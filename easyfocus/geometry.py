"""Label anchor placement relative to the focused output."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from easyfocus.window_directory import Output, Window


@dataclass(frozen=True)
class LabelPosition:
    x: int
    y: int


def calculate_label_position(window: Window, output: Output, margin_x: int, margin_y: int) -> LabelPosition:
    """Anchor the label just above the window's decoration, in output-local pixels.

    Overlapping or stacked windows get colliding positions; nothing here
    accounts for occlusion. Negative offsets are kept as-is.
    """
    rect = window.rect
    window_rect = window.window_rect
    deco_rect = window.deco_rect

    rel_x = rect.x + window_rect.x + deco_rect.x + margin_x
    rel_y = rect.y - (deco_rect.height - margin_y)

    return LabelPosition(rel_x - output.rect.x, rel_y - output.rect.y)


def layout_labels(windows: Sequence[Window], output: Output, margin_x: int, margin_y: int) -> List[LabelPosition]:
    return [calculate_label_position(window, output, margin_x, margin_y) for window in windows]
