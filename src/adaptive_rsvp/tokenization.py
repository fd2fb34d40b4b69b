from __future__ import annotations

import re
from typing import List, Sequence

from .lexicon import COLLOCATIONS
from .models import Collocation, Token
from .textutils import phrase_form

PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n")
WHITESPACE_RE = re.compile(r"\s+")


def split_paragraphs(text: str) -> List[List[str]]:
    """Split text on blank lines, then each paragraph on runs of whitespace."""
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    paragraphs: List[List[str]] = []
    for chunk in PARAGRAPH_SPLIT_RE.split(normalized):
        words = [word for word in WHITESPACE_RE.split(chunk) if word]
        if words:
            paragraphs.append(words)
    return paragraphs


def detect_collocation(words: Sequence[str], index: int) -> Collocation | None:
    """Return the first catalog phrase that starts at ``words[index]``."""
    remaining = len(words) - index
    for phrase in COLLOCATIONS:
        if len(phrase) > remaining:
            continue
        candidate = words[index : index + len(phrase)]
        if all(phrase_form(word) == part for word, part in zip(candidate, phrase)):
            return Collocation(words=tuple(candidate), length=len(phrase))
    return None


def preprocess(text: str) -> List[Token]:
    """Tokenize raw text into positional tokens with collocation hints."""
    if not text or not text.strip():
        return []

    paragraphs = split_paragraphs(text)
    tokens: List[Token] = []
    global_index = 0
    for paragraph_index, words in enumerate(paragraphs):
        is_last_paragraph = paragraph_index == len(paragraphs) - 1
        for position, word in enumerate(words):
            is_last_in_paragraph = position == len(words) - 1
            tokens.append(
                Token(
                    text=word,
                    global_index=global_index,
                    paragraph_index=paragraph_index,
                    position_in_paragraph=position,
                    is_last_in_paragraph=is_last_in_paragraph,
                    is_last_overall=is_last_paragraph and is_last_in_paragraph,
                    collocation=detect_collocation(words, position),
                )
            )
            global_index += 1
    return tokens
