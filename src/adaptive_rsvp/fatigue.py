from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

from .models import (
    ComprehensionAssessment,
    ComprehensionState,
    FatigueState,
    FatigueStatus,
)

logger = logging.getLogger(__name__)

FATIGUE_ONSET_MINUTES = 5.0
FATIGUE_RAMP_MINUTES = 20.0
REWIND_PENALTY = 0.05
LONG_PAUSE_PENALTY = 0.03
LONG_PAUSE_MS = 3000.0
RESUME_RECOVERY = 0.02


class FatigueEvent(str, Enum):
    START = "start"
    WORD = "word"
    REWIND = "rewind"
    PAUSE = "pause"
    RESUME = "resume"


def fatigue_status(level: float) -> FatigueStatus:
    """Map a fatigue level onto its band and advisory message."""
    if level < 0.2:
        return FatigueStatus(level=level, status="fresh", recommendation=None)
    if level < 0.5:
        return FatigueStatus(
            level=level,
            status="mild",
            recommendation="Consider taking a short break soon",
        )
    if level < 0.8:
        return FatigueStatus(
            level=level,
            status="moderate",
            recommendation="Speed has been reduced. Break recommended.",
        )
    return FatigueStatus(
        level=level,
        status="high",
        recommendation="Strong fatigue detected. Please rest.",
    )


def assess_comprehension(
    fatigue: FatigueState, comprehension: ComprehensionState
) -> ComprehensionAssessment:
    """Score comprehension from rewind/pause rates and fatigue."""
    words = max(1, fatigue.words_read)
    rewind_rate = comprehension.rewind_count / words
    pause_rate = comprehension.pause_count / words

    score = 1.0
    issues: list[str] = []
    if rewind_rate > 0.05:
        score -= 0.2
        issues.append("frequent-rewinds")
    if pause_rate > 0.03:
        score -= 0.1
        issues.append("frequent-pauses")
    if fatigue.fatigue_level > 0.5:
        score -= 0.2
        issues.append("fatigue")

    # Rounded so repeated float subtraction reports 0.8 rather than 0.7999...
    score = max(0.0, round(score, 6))
    return ComprehensionAssessment(
        score=score,
        issues=tuple(issues),
        suggest_slowdown=score < 0.7,
        suggest_break=score < 0.5 or fatigue.fatigue_level > 0.7,
    )


class FatigueMonitor:
    """Accumulates reading fatigue and comprehension signals from events.

    ``clock`` returns the current time in milliseconds; the playback engine
    passes its scheduler's clock so simulated sessions age consistently.
    """

    def __init__(self, clock: Callable[[], float]) -> None:
        self._clock = clock
        self.state = FatigueState()
        self.comprehension = ComprehensionState()

    @property
    def level(self) -> float:
        return self.state.fatigue_level

    def reset(self) -> None:
        self.state = FatigueState()
        self.comprehension = ComprehensionState()

    def record(self, event: FatigueEvent | str, duration_ms: float = 0.0) -> None:
        """Apply one behavioral event to the fatigue and comprehension state.

        ``PlaybackEngine.pause`` records PAUSE with a zero duration, so the
        long-pause penalty only applies when a caller records a PAUSE with
        the measured length of the break.
        """
        event = FatigueEvent(event)
        state = self.state
        if event is FatigueEvent.START:
            self.reset()
            self.state.start_time = self._clock()
        elif event is FatigueEvent.WORD:
            state.words_read += 1
            if state.start_time is not None:
                minutes = (self._clock() - state.start_time) / 60000.0
                if minutes > FATIGUE_ONSET_MINUTES:
                    state.fatigue_level = min(
                        1.0, (minutes - FATIGUE_ONSET_MINUTES) / FATIGUE_RAMP_MINUTES
                    )
        elif event is FatigueEvent.REWIND:
            state.rewinds += 1
            self.comprehension.rewind_count += 1
            state.fatigue_level = min(1.0, state.fatigue_level + REWIND_PENALTY)
        elif event is FatigueEvent.PAUSE:
            state.pauses += 1
            self.comprehension.pause_count += 1
            if duration_ms > LONG_PAUSE_MS:
                state.fatigue_level = min(1.0, state.fatigue_level + LONG_PAUSE_PENALTY)
        elif event is FatigueEvent.RESUME:
            state.last_pause_ms = duration_ms
            state.fatigue_level = max(0.0, state.fatigue_level - RESUME_RECOVERY)
        logger.debug("Fatigue event %s -> level %.3f", event.value, state.fatigue_level)

    def status(self) -> FatigueStatus:
        return fatigue_status(self.state.fatigue_level)

    def assess_comprehension(self) -> ComprehensionAssessment:
        return assess_comprehension(self.state, self.comprehension)
