from __future__ import annotations

import re
from abc import ABC, abstractmethod

from .config import ReaderConfig
from .models import AnalysisResult
from .textutils import clean_length

END_PUNCTUATION_RE = re.compile(r"[.!?]$")
MID_PUNCTUATION_RE = re.compile(r"[,;:—–-]$")


def base_interval_ms(words_per_minute: int) -> float:
    return 60000.0 / words_per_minute


class DurationStrategy(ABC):
    """Abstract rule for how long a word stays on screen."""

    @abstractmethod
    def duration_ms(
        self, word: str, analysis: AnalysisResult | None, config: ReaderConfig
    ) -> int:
        """Return the display time for ``word`` in whole milliseconds."""
        raise NotImplementedError


class AdaptiveDuration(DurationStrategy):
    """Scales the base interval by the analyzer's multiplier."""

    def duration_ms(
        self, word: str, analysis: AnalysisResult | None, config: ReaderConfig
    ) -> int:
        multiplier = analysis.multiplier if analysis is not None else 1.0
        return round(base_interval_ms(config.words_per_minute) * multiplier)


class FixedDuration(DurationStrategy):
    """Punctuation and length rules that ignore the analyzer entirely."""

    def duration_ms(
        self, word: str, analysis: AnalysisResult | None, config: ReaderConfig
    ) -> int:
        multiplier = 1.0
        if config.pause_at_punctuation:
            if END_PUNCTUATION_RE.search(word):
                multiplier *= config.punctuation_multiplier * 1.2
            elif MID_PUNCTUATION_RE.search(word):
                multiplier *= config.punctuation_multiplier
        if config.extra_time_for_long_words:
            if clean_length(word) > config.long_word_threshold:
                multiplier *= config.long_word_multiplier
        return round(base_interval_ms(config.words_per_minute) * multiplier)


def select_strategy(config: ReaderConfig) -> DurationStrategy:
    """Pick the adaptive or fixed strategy according to ``adaptive_mode``."""
    if config.adaptive_mode:
        return AdaptiveDuration()
    return FixedDuration()
