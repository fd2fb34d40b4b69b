from __future__ import annotations

from collections import deque
from typing import Deque, Dict

from ..lexicon import RECENT_WINDOW_SIZE


class SessionMemory:
    """Concept counts and a bounded window of recently read content words."""

    def __init__(self, window_size: int = RECENT_WINDOW_SIZE) -> None:
        self.concept_counts: Dict[str, int] = {}
        self.recent_window: Deque[str] = deque(maxlen=window_size)

    def has_seen(self, word: str) -> bool:
        return word in self.concept_counts

    def is_recent(self, word: str) -> bool:
        return word in self.recent_window

    def introduce(self, word: str) -> None:
        self.concept_counts[word] = 1

    def revisit(self, word: str) -> None:
        self.concept_counts[word] = self.concept_counts.get(word, 0) + 1

    def push_recent(self, word: str) -> None:
        # deque(maxlen=...) evicts the oldest entry on overflow
        self.recent_window.append(word)

    def clear(self) -> None:
        self.concept_counts.clear()
        self.recent_window.clear()
