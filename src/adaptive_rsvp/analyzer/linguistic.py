from __future__ import annotations

import logging
from typing import List, Protocol

from ..lexicon import (
    COMPLEXITY_TAGS,
    CONCEPT_MIN_LENGTH,
    DEFAULT_MODE,
    HIGH_FREQUENCY_WORDS,
    MAX_MULTIPLIER,
    MIN_MULTIPLIER,
    READING_MODES,
    TIMING,
    find_mode,
)
from ..models import AnalysisResult, ReadingMode, Token
from ..textutils import lexical_form
from .factors import (
    Factor,
    frequency_factors,
    length_factors,
    punctuation_factors,
    semantic_factors,
    token_type_factors,
)
from .memory import SessionMemory

logger = logging.getLogger(__name__)


class FatigueSource(Protocol):
    @property
    def level(self) -> float: ...


class LinguisticAnalyzer:
    """Scores tokens for display time, learning from what has been read.

    The analyzer keeps a :class:`SessionMemory` for the loaded document.
    Memory only grows while reading; moving the cursor backwards does not
    forget words, so a revisited word may score as a recent repeat.
    """

    def __init__(self, fatigue: FatigueSource | None = None) -> None:
        self.memory = SessionMemory()
        self._fatigue = fatigue
        self._mode = READING_MODES[DEFAULT_MODE]

    @property
    def mode(self) -> ReadingMode:
        return self._mode

    def set_mode(self, name: str) -> ReadingMode | None:
        """Switch reading mode; unknown names leave the current mode active."""
        mode = find_mode(name)
        if mode is None:
            return None
        self._mode = mode
        return mode

    def reset(self) -> None:
        self.memory.clear()

    def analyze(self, token: Token) -> AnalysisResult:
        word = token.text
        lexical = lexical_form(word)
        lookup = lexical.lower()
        result = AnalysisResult(source_text=word, display_text=word)

        length, orp_offset = length_factors(lookup)
        self._apply(result, punctuation_factors(token))
        self._apply(result, length)
        result.orp_offset = orp_offset
        self._apply(result, frequency_factors(lookup))
        self._apply(result, semantic_factors(lookup))
        self._apply(result, token_type_factors(word, lexical))
        self._apply(result, self._concept_factors(lookup))

        self._apply_mode(result)
        self._apply_fatigue(result)

        result.multiplier = max(MIN_MULTIPLIER, min(MAX_MULTIPLIER, result.multiplier))
        logger.debug(
            "Analyzed %r x%.3f factors=%s", word, result.multiplier, result.factors
        )
        return result

    def _concept_factors(self, lookup: str) -> List[Factor]:
        if len(lookup) <= CONCEPT_MIN_LENGTH:
            return []
        memory = self.memory
        is_recent = memory.is_recent(lookup)
        factors: List[Factor] = []
        if not memory.has_seen(lookup) and lookup not in HIGH_FREQUENCY_WORDS:
            factors.append(("first-occurrence", TIMING["first_occurrence"]))
            memory.introduce(lookup)
        elif is_recent:
            factors.append(("recent-repeat", TIMING["recent_repeat"]))
            memory.revisit(lookup)
        memory.push_recent(lookup)
        return factors

    def _apply_mode(self, result: AnalysisResult) -> None:
        mode = self._mode
        result.multiplier *= mode.base_multiplier
        complexity = sum(1 for tag in result.factors if tag in COMPLEXITY_TAGS)
        if complexity > 0:
            boost = (mode.complexity_weight - 1) * 0.1 * complexity
            result.multiplier *= 1 + boost

    def _apply_fatigue(self, result: AnalysisResult) -> None:
        level = self._fatigue.level if self._fatigue is not None else 0.0
        if level > 0:
            result.multiplier *= 1 + level * 0.3
            if level > 0.3:
                result.factors.append("fatigue-adjusted")

    @staticmethod
    def _apply(result: AnalysisResult, factors: List[Factor]) -> None:
        for tag, value in factors:
            result.multiplier *= value
            result.factors.append(tag)
