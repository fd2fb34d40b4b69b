from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(slots=True, frozen=True)
class Collocation:
    """A fixed phrase beginning at a token, displayed as one unit."""

    words: tuple[str, ...]
    length: int

    @property
    def display(self) -> str:
        return " ".join(self.words)


@dataclass(slots=True, frozen=True)
class Token:
    """A whitespace-delimited word with its position in the document."""

    text: str
    global_index: int
    paragraph_index: int
    position_in_paragraph: int
    is_last_in_paragraph: bool
    is_last_overall: bool
    collocation: Collocation | None = None


@dataclass(slots=True)
class AnalysisResult:
    """Timing multiplier and factor tags computed for one token visit."""

    source_text: str
    display_text: str
    multiplier: float = 1.0
    factors: list[str] = field(default_factory=list)
    orp_offset: int = 0


@dataclass(slots=True, frozen=True)
class FocusSplit:
    """A word split around its optimal recognition point."""

    prefix: str
    focus: str
    suffix: str


@dataclass(slots=True, frozen=True)
class ReadingMode:
    """Named preset that scales pace and sensitivity to complexity."""

    key: str
    name: str
    description: str
    base_multiplier: float
    punctuation_sensitivity: float
    complexity_weight: float


@dataclass(slots=True)
class FatigueState:
    start_time: float | None = None
    words_read: int = 0
    rewinds: int = 0
    pauses: int = 0
    fatigue_level: float = 0.0
    last_pause_ms: float | None = None


@dataclass(slots=True)
class ComprehensionState:
    rewind_count: int = 0
    pause_count: int = 0


@dataclass(slots=True, frozen=True)
class FatigueStatus:
    """Banded reading fatigue with an optional advisory message."""

    level: float
    status: str
    recommendation: str | None


@dataclass(slots=True, frozen=True)
class ComprehensionAssessment:
    """Behavioral estimate of how well the reader is keeping up."""

    score: float
    issues: tuple[str, ...]
    suggest_slowdown: bool
    suggest_break: bool


class PlaybackStatus(str, Enum):
    EMPTY = "empty"
    LOADED = "loaded"
    PLAYING = "playing"
    PAUSED = "paused"
    COMPLETED = "completed"


@dataclass(slots=True, frozen=True)
class WordView:
    """Everything a display needs to render the word under the cursor."""

    word: str
    display_text: str
    is_collocation: bool
    index: int
    total: int
    progress: float
    prefix: str
    focus: str
    suffix: str
    prev_word: str | None
    next_word: str | None
    analysis: AnalysisResult | None


@dataclass(slots=True, frozen=True)
class ProgressUpdate:
    current: int
    total: int
    progress: float


@dataclass(slots=True, frozen=True)
class CompletionStats:
    """Summary reported once the cursor runs past the last token."""

    word_count: int
    duration_seconds: float
    actual_wpm: int
    fatigue: FatigueStatus
    comprehension: ComprehensionAssessment


@dataclass(slots=True, frozen=True)
class StateChange:
    state: PlaybackStatus
    word_count: int | None = None
    stats: CompletionStats | None = None


@dataclass(slots=True, frozen=True)
class EstimatedTime:
    minutes: int
    seconds: int
    formatted: str


@dataclass(slots=True, frozen=True)
class ReaderStats:
    """Snapshot of the reader for status displays."""

    total_words: int
    current_word: int
    remaining_words: int
    progress: float
    words_per_minute: int
    estimated_time: EstimatedTime
    is_playing: bool
    is_paused: bool
    mode: ReadingMode
    fatigue: FatigueStatus
