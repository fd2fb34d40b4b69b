from __future__ import annotations

from typing import Callable, Iterable

from .models import (
    AnalysisResult,
    CompletionStats,
    ProgressUpdate,
    StateChange,
    WordView,
)


class ReaderObserver:
    """Receives playback notifications. Every hook defaults to a no-op.

    Within one step the engine calls ``on_analysis`` first, then
    ``on_word_change``, ``on_progress`` and finally ``on_state_change``.
    """

    def on_word_change(self, view: WordView) -> None:
        pass

    def on_progress(self, update: ProgressUpdate) -> None:
        pass

    def on_complete(self, stats: CompletionStats) -> None:
        pass

    def on_state_change(self, change: StateChange) -> None:
        pass

    def on_analysis(self, analysis: AnalysisResult) -> None:
        pass


class CallbackObserver(ReaderObserver):
    """Adapt plain callables into the observer interface."""

    def __init__(
        self,
        *,
        on_word_change: Callable[[WordView], None] | None = None,
        on_progress: Callable[[ProgressUpdate], None] | None = None,
        on_complete: Callable[[CompletionStats], None] | None = None,
        on_state_change: Callable[[StateChange], None] | None = None,
        on_analysis: Callable[[AnalysisResult], None] | None = None,
    ) -> None:
        self._on_word_change = on_word_change
        self._on_progress = on_progress
        self._on_complete = on_complete
        self._on_state_change = on_state_change
        self._on_analysis = on_analysis

    def on_word_change(self, view: WordView) -> None:
        if self._on_word_change is not None:
            self._on_word_change(view)

    def on_progress(self, update: ProgressUpdate) -> None:
        if self._on_progress is not None:
            self._on_progress(update)

    def on_complete(self, stats: CompletionStats) -> None:
        if self._on_complete is not None:
            self._on_complete(stats)

    def on_state_change(self, change: StateChange) -> None:
        if self._on_state_change is not None:
            self._on_state_change(change)

    def on_analysis(self, analysis: AnalysisResult) -> None:
        if self._on_analysis is not None:
            self._on_analysis(analysis)


class CompositeObserver(ReaderObserver):
    """Fan notifications out to several observers in registration order."""

    def __init__(self, observers: Iterable[ReaderObserver] = ()) -> None:
        self._observers = list(observers)

    def add(self, observer: ReaderObserver) -> None:
        self._observers.append(observer)

    def on_word_change(self, view: WordView) -> None:
        for observer in self._observers:
            observer.on_word_change(view)

    def on_progress(self, update: ProgressUpdate) -> None:
        for observer in self._observers:
            observer.on_progress(update)

    def on_complete(self, stats: CompletionStats) -> None:
        for observer in self._observers:
            observer.on_complete(stats)

    def on_state_change(self, change: StateChange) -> None:
        for observer in self._observers:
            observer.on_state_change(change)

    def on_analysis(self, analysis: AnalysisResult) -> None:
        for observer in self._observers:
            observer.on_analysis(analysis)
