from __future__ import annotations

import re

NON_WORD_RE = re.compile(r"[^\w]", re.UNICODE)
NON_LEXICAL_RE = re.compile(r"[^\w'\-]", re.UNICODE)
WORD_CHAR_RE = re.compile(r"\w", re.UNICODE)


def lexical_form(word: str) -> str:
    """Strip everything except word characters, apostrophes and hyphens."""
    return NON_LEXICAL_RE.sub("", word)


def phrase_form(word: str) -> str:
    """Lowercased form with all punctuation removed, used for phrase matching."""
    return NON_WORD_RE.sub("", word.lower())


def clean_length(word: str) -> int:
    """Number of word characters in ``word``."""
    return len(NON_WORD_RE.sub("", word))


def is_word_char(char: str) -> bool:
    return WORD_CHAR_RE.match(char) is not None
