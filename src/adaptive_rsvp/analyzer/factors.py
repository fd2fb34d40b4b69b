"""
Stateless scoring rules for the linguistic analyzer.

Each rule inspects one token and returns the ``(tag, multiplier)`` pairs it
contributes. The analyzer multiplies them into its running value and
records the tags in the order returned.
"""

from __future__ import annotations

import re
from typing import List, Tuple

from ..lexicon import HIGH_FREQUENCY_WORDS, SUBORDINATORS, TIMING, TRANSITION_WORDS
from ..models import Token

Factor = Tuple[str, float]

SENTENCE_END_RE = re.compile(r"[.!?]+$")
CLAUSE_BOUNDARY_RE = re.compile(r"[,;:\-–—]")
DIGIT_RE = re.compile(r"\d")
MIXED_CASE_RE = re.compile(r"[A-Z].*[a-z].*[A-Z]|[a-z].*[A-Z]")
ACRONYM_RE = re.compile(r"[A-Z]{2,}")
SYMBOL_RE = re.compile(r"[@#$%&*+=<>]")


def punctuation_factors(token: Token) -> List[Factor]:
    """Sentence/paragraph ends take priority over clause boundaries."""
    word = token.text
    if SENTENCE_END_RE.search(word):
        if token.is_last_in_paragraph:
            return [("paragraph-end", TIMING["paragraph_end"])]
        return [("sentence-end", TIMING["sentence_end"])]
    if CLAUSE_BOUNDARY_RE.search(word):
        return [("clause-boundary", TIMING["clause_boundary"])]
    return []


def length_factors(lookup: str) -> Tuple[List[Factor], int]:
    """Return length factors plus the ORP offset hint for long words."""
    length = len(lookup)
    if length <= 3:
        return [("short", TIMING["short_word"])], 0
    if length <= 7:
        return [], 0
    if length <= 11:
        return [("long", TIMING["long_word"])], 1
    return [("very-long", TIMING["very_long_word"])], 2


def frequency_factors(lookup: str) -> List[Factor]:
    if lookup in HIGH_FREQUENCY_WORDS:
        return [("high-freq", TIMING["high_frequency"])]
    return []


def semantic_factors(lookup: str) -> List[Factor]:
    factors: List[Factor] = []
    if lookup in TRANSITION_WORDS:
        factors.append(("transition", TIMING["transition"]))
    if lookup in SUBORDINATORS:
        factors.append(("subordinator", TIMING["subordinator"]))
    return factors


def token_type_factors(word: str, lexical: str) -> List[Factor]:
    """Independent, stackable premiums for unusual token shapes.

    ``lexical`` is the case-preserving stripped form, used for the acronym
    check so trailing punctuation does not hide an all-caps word.
    """
    factors: List[Factor] = []
    if DIGIT_RE.search(word):
        factors.append(("numeric", TIMING["number"]))
    if MIXED_CASE_RE.search(word):
        factors.append(("mixed-case", TIMING["mixed_case"]))
    if ACRONYM_RE.fullmatch(lexical):
        factors.append(("acronym", TIMING["all_caps"]))
    if SYMBOL_RE.search(word):
        factors.append(("symbols", TIMING["symbols"]))
    if "-" in word and len(word) > 3:
        factors.append(("hyphenated", TIMING["hyphenated"]))
    return factors
