"""
Static word lists, phrase catalog and timing constants shared by every reader.

All tables are immutable module-level data; nothing here holds session state.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from .models import ReadingMode

HIGH_FREQUENCY_WORDS: frozenset[str] = frozenset(
    {
        "the", "a", "an", "is", "are", "was", "were", "be", "been",
        "being", "have", "has", "had", "do", "does", "did", "will",
        "would", "could", "should", "may", "might", "must", "shall",
        "can", "to", "of", "in", "for", "on", "with", "at", "by",
        "from", "as", "into", "through", "during", "before", "after",
        "above", "below", "between", "under", "again", "further",
        "then", "once", "here", "there", "when", "where", "why", "how",
        "all", "each", "few", "more", "most", "other", "some", "such",
        "no", "nor", "not", "only", "own", "same", "so", "than", "too",
        "very", "just", "also", "now", "and", "but", "or", "yet", "both",
        "it", "its", "this", "that", "these", "those", "i", "you", "he",
        "she", "we", "they", "me", "him", "her", "us", "them", "my",
        "your", "his", "our", "their", "what", "which", "who", "whom",
    }
)  # fmt: skip

TRANSITION_WORDS: frozenset[str] = frozenset(
    {
        "however", "therefore", "furthermore", "moreover", "nevertheless",
        "consequently", "meanwhile", "subsequently", "accordingly",
        "hence", "thus", "otherwise", "instead", "alternatively",
    }
)  # fmt: skip

SUBORDINATORS: frozenset[str] = frozenset(
    {
        "although", "because", "since", "while", "whereas", "unless",
        "until", "before", "after", "when", "whenever", "where",
        "wherever", "if", "though", "even", "provided", "assuming",
    }
)  # fmt: skip

# Scanned top to bottom; the first phrase that matches wins.
COLLOCATIONS: tuple[tuple[str, ...], ...] = (
    # prepositional phrases
    ("in", "order", "to"),
    ("as", "well", "as"),
    ("in", "front", "of"),
    ("in", "spite", "of"),
    ("on", "behalf", "of"),
    ("in", "terms", "of"),
    ("by", "means", "of"),
    ("in", "addition", "to"),
    ("with", "respect", "to"),
    ("on", "top", "of"),
    ("in", "case", "of"),
    ("at", "the", "same", "time"),
    # discourse markers
    ("on", "the", "other", "hand"),
    ("as", "a", "result"),
    ("for", "example"),
    ("for", "instance"),
    ("in", "other", "words"),
    ("that", "is"),
    ("in", "fact"),
    ("of", "course"),
    ("at", "least"),
    ("at", "last"),
    ("at", "first"),
    ("first", "of", "all"),
    # verb phrases
    ("going", "to"),
    ("used", "to"),
    ("have", "to"),
    ("has", "to"),
    ("want", "to"),
    ("need", "to"),
    ("able", "to"),
    ("ought", "to"),
    # time expressions
    ("right", "now"),
    ("so", "far"),
    ("up", "to"),
    ("from", "now", "on"),
)

TIMING: Mapping[str, float] = MappingProxyType(
    {
        "sentence_end": 2.0,
        "clause_boundary": 1.4,
        "paragraph_end": 2.5,
        "short_word": 0.85,
        "long_word": 1.25,
        "very_long_word": 1.5,
        "high_frequency": 0.8,
        "transition": 1.5,
        "subordinator": 1.3,
        "number": 1.4,
        "mixed_case": 1.3,
        "all_caps": 1.2,
        "symbols": 1.3,
        "first_occurrence": 1.35,
        "recent_repeat": 0.75,
        "hyphenated": 1.4,
    }
)

MIN_MULTIPLIER = 0.5
MAX_MULTIPLIER = 3.5
RECENT_WINDOW_SIZE = 25
CONCEPT_MIN_LENGTH = 4

# Factor tags that count toward a mode's complexity boost.
COMPLEXITY_TAGS: frozenset[str] = frozenset(
    {"long", "very-long", "first-occurrence", "numeric", "mixed-case"}
)

DEFAULT_MODE = "normal"

READING_MODES: Mapping[str, ReadingMode] = MappingProxyType(
    {
        "scan": ReadingMode(
            key="scan",
            name="Scan",
            description="Quick overview, skip details",
            base_multiplier=0.7,
            punctuation_sensitivity=0.5,
            complexity_weight=0.3,
        ),
        "normal": ReadingMode(
            key="normal",
            name="Normal",
            description="Balanced speed and comprehension",
            base_multiplier=1.0,
            punctuation_sensitivity=1.0,
            complexity_weight=1.0,
        ),
        "study": ReadingMode(
            key="study",
            name="Study",
            description="Deep comprehension, slower pace",
            base_multiplier=1.4,
            punctuation_sensitivity=1.3,
            complexity_weight=1.5,
        ),
        "proofread": ReadingMode(
            key="proofread",
            name="Proofread",
            description="Careful attention to every word",
            base_multiplier=1.8,
            punctuation_sensitivity=1.5,
            complexity_weight=1.8,
        ),
    }
)


def find_mode(name: object) -> ReadingMode | None:
    """Look up a reading mode by key, ignoring case and surrounding space."""
    if not isinstance(name, str):
        return None
    return READING_MODES.get(name.lower().strip())


def available_modes() -> list[ReadingMode]:
    return list(READING_MODES.values())
