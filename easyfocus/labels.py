"""Single-character hint labels keyed by window position."""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple, TypeVar

ALPHABET = "abcdefghijklmnopqrstuvwxyz"

T = TypeVar("T")


def label_for_index(index: int) -> str:
    # Wraps past 26 windows, so labels repeat from the 27th window on.
    return ALPHABET[index % len(ALPHABET)]


def index_for_label(char: str) -> Optional[int]:
    """Map a typed character back to the list index it names, without wrapping."""
    if len(char) != 1 or not (char.isalpha() and char.islower()):
        return None
    return ord(char) - ord(ALPHABET[0])


def assign_labels(items: Sequence[T]) -> List[Tuple[str, T]]:
    return [(label_for_index(index), item) for index, item in enumerate(items)]
