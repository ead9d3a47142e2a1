from __future__ import annotations

import logging

import pytest

from easyfocus.labels import label_for_index
from easyfocus.selection import SelectionResult, handle_keypress, resolve_keypress
from easyfocus.window_directory import Rect, Window


class RecordingClient:
    def __init__(self) -> None:
        self.focused = []

    def focus(self, con_id: int) -> None:
        self.focused.append(con_id)


def _windows(count: int):
    rect = Rect(0, 0, 10, 10)
    return [
        Window(con_id=100 + i, rect=rect, window_rect=rect, deco_rect=rect, name=f"term {i}", app_id="foot")
        for i in range(count)
    ]


@pytest.mark.parametrize("key_name", ["Escape", "Shift_L", "F1", "Return", "", "ab"])
def test_multi_character_key_names_do_not_select(key_name) -> None:
    result = resolve_keypress(key_name, 5)
    assert not result.selected
    assert result.index is None


@pytest.mark.parametrize("key_name", ["A", "B", "1", " ", ";", "é"])
def test_non_lowercase_or_out_of_alphabet_characters_do_not_select(key_name) -> None:
    assert not resolve_keypress(key_name, 26).selected


def test_each_label_selects_its_own_index() -> None:
    for count in (1, 5, 26):
        for k in range(count):
            assert resolve_keypress(label_for_index(k), count) == SelectionResult(label_for_index(k), k)


def test_letters_beyond_window_count_do_not_select() -> None:
    assert resolve_keypress("c", 2) == SelectionResult("c")
    assert resolve_keypress("a", 0) == SelectionResult("a")


def test_wraparound_labels_resolve_to_the_first_26() -> None:
    count = 27
    assert resolve_keypress(label_for_index(26), count).index == 0
    assert resolve_keypress("a", count).index == 0


def test_resolution_is_deterministic() -> None:
    assert resolve_keypress("d", 10) == resolve_keypress("d", 10)


def test_handle_keypress_focuses_exactly_one_window() -> None:
    client = RecordingClient()
    windows = _windows(3)
    result = handle_keypress(client, windows, "b")
    assert result.index == 1
    assert client.focused == [101]


def test_handle_keypress_no_selection_issues_no_command() -> None:
    client = RecordingClient()
    for key_name in ("Escape", "B", "z"):
        assert not handle_keypress(client, _windows(3), key_name).selected
    assert client.focused == []


def test_selection_log_names_the_window(caplog) -> None:
    logger = logging.getLogger("Sway.EasyFocus")
    logger.addHandler(caplog.handler)
    previous_level = logger.level
    logger.setLevel(logging.DEBUG)
    try:
        handle_keypress(RecordingClient(), _windows(2), "b")
    finally:
        logger.setLevel(previous_level)
        logger.removeHandler(caplog.handler)
    messages = [record.getMessage() for record in caplog.records]
    assert any("'term 1'" in message and "con_id=101" in message for message in messages)
