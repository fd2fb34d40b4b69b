from __future__ import annotations

from typing import Any

from adaptive_rsvp.config import ReaderConfig
from adaptive_rsvp.engine import PlaybackEngine
from adaptive_rsvp.models import (
    AnalysisResult,
    CompletionStats,
    ProgressUpdate,
    StateChange,
    Token,
    WordView,
)
from adaptive_rsvp.observers import ReaderObserver
from adaptive_rsvp.scheduling import ManualScheduler


class RecordingObserver(ReaderObserver):
    """Collects every notification as ``(kind, payload)`` in arrival order."""

    def __init__(self) -> None:
        self.events: list[tuple[str, Any]] = []

    def on_word_change(self, view: WordView) -> None:
        self.events.append(("word", view))

    def on_progress(self, update: ProgressUpdate) -> None:
        self.events.append(("progress", update))

    def on_complete(self, stats: CompletionStats) -> None:
        self.events.append(("complete", stats))

    def on_state_change(self, change: StateChange) -> None:
        self.events.append(("state", change))

    def on_analysis(self, analysis: AnalysisResult) -> None:
        self.events.append(("analysis", analysis))

    def of(self, kind: str) -> list[Any]:
        return [payload for event_kind, payload in self.events if event_kind == kind]

    @property
    def words(self) -> list[str]:
        return [view.display_text for view in self.of("word")]

    @property
    def states(self) -> list[str]:
        return [change.state.value for change in self.of("state")]

    def clear(self) -> None:
        self.events.clear()


def make_engine(
    **config_values: Any,
) -> tuple[PlaybackEngine, RecordingObserver, ManualScheduler]:
    """Build an engine wired to a recording observer and a virtual clock."""
    observer = RecordingObserver()
    scheduler = ManualScheduler()
    engine = PlaybackEngine(
        ReaderConfig(**config_values), observer=observer, scheduler=scheduler
    )
    return engine, observer, scheduler


def make_token(text: str, *, last_in_paragraph: bool = False, index: int = 0) -> Token:
    return Token(
        text=text,
        global_index=index,
        paragraph_index=0,
        position_in_paragraph=index,
        is_last_in_paragraph=last_in_paragraph,
        is_last_overall=last_in_paragraph,
    )
