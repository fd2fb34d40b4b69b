from __future__ import annotations

from .models import FocusSplit
from .textutils import clean_length, is_word_char


def base_orp_index(length: int) -> int:
    """Focus position in the clean word, roughly a third of the way in."""
    if length <= 4:
        return 1
    if length <= 8:
        return 2
    if length <= 12:
        return 3
    return length // 4


def compute_focus(word: str, orp_offset: int = 0) -> FocusSplit:
    """
    Split ``word`` into prefix, focus character and suffix.

    The focus position is picked on the word characters only and then mapped
    back onto the original string, so surrounding punctuation ends up in the
    prefix or suffix and never becomes the focus.
    """
    length = clean_length(word)
    if length <= 1:
        return FocusSplit(prefix="", focus=word, suffix="")
    if length == 2:
        return FocusSplit(prefix=word[:1], focus=word[1:2], suffix=word[2:])

    orp_index = base_orp_index(length) + orp_offset
    orp_index = max(0, min(length - 1, orp_index))

    position = _nth_word_char(word, orp_index)
    return FocusSplit(
        prefix=word[:position],
        focus=word[position],
        suffix=word[position + 1 :],
    )


def _nth_word_char(word: str, n: int) -> int:
    seen = 0
    for position, char in enumerate(word):
        if not is_word_char(char):
            continue
        if seen == n:
            return position
        seen += 1
    # unreachable while n < clean_length(word)
    return len(word) - 1
