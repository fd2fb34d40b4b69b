from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, List, Mapping

from .analyzer import LinguisticAnalyzer
from .config import ReaderConfig, clamp_wpm, config_fields
from .fatigue import FatigueEvent, FatigueMonitor
from .lexicon import available_modes
from .models import (
    ComprehensionAssessment,
    CompletionStats,
    EstimatedTime,
    FatigueStatus,
    PlaybackStatus,
    ProgressUpdate,
    ReaderStats,
    ReadingMode,
    StateChange,
    Token,
    WordView,
)
from .observers import ReaderObserver
from .orp import compute_focus
from .scheduling import ManualScheduler, ScheduledHandle, Scheduler
from .timing import select_strategy
from .tokenization import preprocess

logger = logging.getLogger(__name__)


class PlaybackEngine:
    """
    Sequences tokens for rapid serial presentation.

    The engine owns the cursor and at most one pending scheduled step. Any
    transition out of ``playing`` cancels that step before the cursor is
    touched, so a stale timer can never advance a cursor that has moved.

    Parameters
    ----------
    config:
        Reader settings. The engine keeps its own copy.
    observer:
        Receives word, progress, state, analysis and completion events.
    scheduler:
        Timer service. Defaults to a :class:`ManualScheduler`, which only
        moves when its clock is advanced explicitly.
    """

    def __init__(
        self,
        config: ReaderConfig | None = None,
        *,
        observer: ReaderObserver | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._config = replace(config) if config is not None else ReaderConfig()
        requested_wpm = self._config.words_per_minute
        self._config.words_per_minute = ReaderConfig().words_per_minute
        self._observer = observer or ReaderObserver()
        self._scheduler = scheduler or ManualScheduler()
        self.monitor = FatigueMonitor(clock=self._scheduler.now)
        self.analyzer = LinguisticAnalyzer(fatigue=self.monitor)
        self._tokens: List[Token] = []
        self._cursor = 0
        self._skip_count = 0
        self._status = PlaybackStatus.EMPTY
        self._pending: ScheduledHandle | None = None
        self._start_time: float | None = None
        self._paused_at: float | None = None
        self._total_paused = 0.0
        self.set_words_per_minute(requested_wpm)
        if self.analyzer.set_mode(self._config.reading_mode) is None:
            logger.warning(
                "Unknown reading mode %r; using %s",
                self._config.reading_mode,
                self.analyzer.mode.key,
            )
        self._config.reading_mode = self.analyzer.mode.key

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def config(self) -> ReaderConfig:
        return self._config

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def state(self) -> PlaybackStatus:
        return self._status

    @property
    def is_playing(self) -> bool:
        return self._status is PlaybackStatus.PLAYING

    @property
    def is_paused(self) -> bool:
        return self._status is PlaybackStatus.PAUSED

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def skip_count(self) -> int:
        return self._skip_count

    @property
    def tokens(self) -> tuple[Token, ...]:
        return tuple(self._tokens)

    @property
    def word_count(self) -> int:
        return len(self._tokens)

    @property
    def has_pending_step(self) -> bool:
        return self._pending is not None and self._pending.active

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def load(self, text: str) -> int:
        """Tokenize ``text`` and rewind to its first word. Returns the word count."""
        self._cancel_pending()
        self._tokens = preprocess(text)
        self._cursor = 0
        self._skip_count = 0
        self._reset_clock()
        self.analyzer.reset()
        self.monitor.reset()
        self.monitor.record(FatigueEvent.START)
        logger.info("Loaded %d words", len(self._tokens))
        self._set_status(PlaybackStatus.LOADED, word_count=len(self._tokens))
        return len(self._tokens)

    def play(self) -> bool:
        """Start or resume playback; the current word is shown immediately."""
        if not self._tokens or self.is_playing:
            return False
        if self._cursor >= len(self._tokens):
            self._cursor = 0
            self._skip_count = 0
        if self._status is PlaybackStatus.COMPLETED:
            self._reset_clock()

        now = self._scheduler.now()
        if self._paused_at is not None:
            paused_for = now - self._paused_at
            self.monitor.record(FatigueEvent.RESUME, duration_ms=paused_for)
            self._total_paused += paused_for
            self._paused_at = None
        elif self._start_time is None:
            self._start_time = now

        logger.info("Playing from word %d", self._cursor)
        self._set_status(PlaybackStatus.PLAYING)
        self.advance()
        return True

    def pause(self) -> bool:
        if not self.is_playing:
            return False
        self._cancel_pending()
        self._paused_at = self._scheduler.now()
        self.monitor.record(FatigueEvent.PAUSE)
        logger.info("Paused at word %d", self._cursor)
        self._set_status(PlaybackStatus.PAUSED)
        return True

    def toggle(self) -> bool:
        if self.is_playing:
            return self.pause()
        return self.play()

    def restart(self) -> None:
        """Return to the first word with fresh session memory and fatigue."""
        if self._status is PlaybackStatus.EMPTY:
            return
        self.pause()
        self._cancel_pending()
        self._cursor = 0
        self._skip_count = 0
        self._reset_clock()
        self.analyzer.reset()
        self.monitor.record(FatigueEvent.START)

        view = self._word_view(claim_collocation=False)
        if view is not None:
            self._observer.on_word_change(view)
            self._observer.on_progress(
                ProgressUpdate(current=1, total=len(self._tokens), progress=0.0)
            )
        logger.info("Restarted")
        self._set_status(PlaybackStatus.LOADED)

    def seek(self, index: int) -> None:
        if not self._tokens:
            return
        self._move_to(index)

    def next(self) -> None:
        if self._cursor < len(self._tokens) - 1:
            self._move_to(self._cursor + 1)

    def prev(self) -> None:
        if self._tokens and self._cursor > 0:
            self._move_to(self._cursor - 1, rewind=True)

    def jump(self, delta: int) -> None:
        """Move ``delta`` words; any backwards jump counts as one rewind."""
        if not self._tokens:
            return
        self._move_to(self._cursor + delta, rewind=delta < 0)

    def set_words_per_minute(self, wpm: Any) -> int:
        """Clamp and apply ``wpm``; non-numeric values keep the current rate."""
        try:
            self._config.words_per_minute = clamp_wpm(wpm)
        except (TypeError, ValueError, OverflowError):
            logger.warning(
                "Ignoring invalid words per minute %r; keeping %d",
                wpm,
                self._config.words_per_minute,
            )
        return self._config.words_per_minute

    def set_mode(self, name: Any) -> ReadingMode | None:
        mode = self.analyzer.set_mode(name)
        if mode is None:
            logger.warning("Ignoring unknown reading mode %r", name)
            return None
        self._config.reading_mode = mode.key
        return mode

    def set_adaptive_mode(self, enabled: bool) -> None:
        self._config.adaptive_mode = bool(enabled)

    def update_config(self, partial: Mapping[str, Any]) -> ReaderConfig:
        """Apply known configuration keys; unknown keys are ignored."""
        allowed = config_fields()
        for key, value in partial.items():
            if key not in allowed:
                logger.debug("Ignoring unknown config key %r", key)
                continue
            if key == "words_per_minute":
                self.set_words_per_minute(value)
            elif key == "reading_mode":
                self.set_mode(value)
            else:
                setattr(self._config, key, value)
        return self._config

    def destroy(self) -> None:
        self._cancel_pending()
        self._tokens = []
        self._cursor = 0
        self._skip_count = 0
        self._reset_clock()
        self.analyzer.reset()
        self.monitor.reset()
        self._status = PlaybackStatus.EMPTY

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def current_word(self) -> WordView | None:
        """Describe the word under the cursor.

        Runs the analyzer (which updates session memory). When the cursor
        sits on the start of a collocation and no phrase is in progress, the
        phrase is claimed: ``skip_count`` becomes ``length - 1``.
        """
        return self._word_view(claim_collocation=True)

    def word_duration_ms(self, view: WordView) -> int:
        strategy = select_strategy(self._config)
        return strategy.duration_ms(view.word, view.analysis, self._config)

    def fatigue_status(self) -> FatigueStatus:
        return self.monitor.status()

    def comprehension(self) -> ComprehensionAssessment:
        return self.monitor.assess_comprehension()

    def modes(self) -> list[ReadingMode]:
        return available_modes()

    def estimated_remaining_time(self) -> EstimatedTime:
        remaining = max(0, len(self._tokens) - self._cursor)
        total_seconds = round(remaining / self._config.words_per_minute * 60)
        minutes, seconds = divmod(total_seconds, 60)
        return EstimatedTime(
            minutes=minutes,
            seconds=seconds,
            formatted=format_time(total_seconds),
        )

    def stats(self) -> ReaderStats:
        total = len(self._tokens)
        return ReaderStats(
            total_words=total,
            current_word=self._cursor + 1,
            remaining_words=max(0, total - self._cursor),
            progress=(self._cursor / total) * 100 if total else 0.0,
            words_per_minute=self._config.words_per_minute,
            estimated_time=self.estimated_remaining_time(),
            is_playing=self.is_playing,
            is_paused=self.is_paused,
            mode=self.analyzer.mode,
            fatigue=self.fatigue_status(),
        )

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------

    def advance(self) -> None:
        """Show the next word and, while playing, schedule the step after it."""
        self._cancel_pending()
        total = len(self._tokens)

        if self._skip_count > 0:
            # Tail of a phrase already shown as one unit.
            self._skip_count -= 1
            self._cursor += 1
            if self.is_playing:
                self._schedule(self._config.collocation_skip_delay_ms)
            return

        if self._cursor >= total:
            self._complete()
            return

        view = self._word_view(claim_collocation=True)
        if view is None:
            return
        self.monitor.record(FatigueEvent.WORD)
        self._observer.on_word_change(view)
        self._observer.on_progress(self._progress_update(self._cursor + 1))
        self._cursor += 1

        if self.is_playing and self._cursor < total:
            duration = self.word_duration_ms(view)
            logger.debug("Showing %r for %d ms", view.display_text, duration)
            self._schedule(duration)
        elif self._cursor >= total:
            self._complete()

    def _complete(self) -> None:
        self._cancel_pending()
        now = self._scheduler.now()
        paused = self._total_paused
        if self._paused_at is not None:
            paused += now - self._paused_at
        duration = (
            (now - self._start_time - paused) / 1000.0
            if self._start_time is not None
            else 0.0
        )
        count = len(self._tokens)
        stats = CompletionStats(
            word_count=count,
            duration_seconds=duration,
            actual_wpm=round(count / duration * 60) if duration > 0 else 0,
            fatigue=self.fatigue_status(),
            comprehension=self.comprehension(),
        )
        logger.info(
            "Completed %d words in %.1fs (%d wpm)",
            count,
            duration,
            stats.actual_wpm,
        )
        self._set_status(PlaybackStatus.COMPLETED, stats=stats)
        self._observer.on_complete(stats)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _word_view(self, *, claim_collocation: bool) -> WordView | None:
        total = len(self._tokens)
        if self._cursor >= total:
            return None
        token = self._tokens[self._cursor]

        analysis = None
        if self._config.adaptive_mode:
            analysis = self.analyzer.analyze(token)
            self._observer.on_analysis(analysis)
        focus = compute_focus(token.text, analysis.orp_offset if analysis else 0)

        display_text = token.text
        is_collocation = False
        if token.collocation is not None and self._skip_count == 0:
            display_text = token.collocation.display
            is_collocation = True
            if claim_collocation:
                self._skip_count = token.collocation.length - 1

        index = self._cursor
        return WordView(
            word=token.text,
            display_text=display_text,
            is_collocation=is_collocation,
            index=index,
            total=total,
            progress=(index / total) * 100,
            prefix=focus.prefix,
            focus=focus.focus,
            suffix=focus.suffix,
            prev_word=self._tokens[index - 1].text if index > 0 else None,
            next_word=self._tokens[index + 1].text if index < total - 1 else None,
            analysis=analysis,
        )

    def _move_to(self, index: int, *, rewind: bool = False) -> None:
        target = max(0, min(len(self._tokens) - 1, index))
        was_playing = self.is_playing
        if was_playing:
            self.pause()
        self._cancel_pending()
        self._cursor = target
        self._skip_count = 0
        if rewind:
            self.monitor.record(FatigueEvent.REWIND)

        view = self._word_view(claim_collocation=False)
        if view is not None:
            self._observer.on_word_change(view)
            self._observer.on_progress(self._progress_update(self._cursor + 1))
        if was_playing:
            self.play()

    def _progress_update(self, current: int) -> ProgressUpdate:
        total = len(self._tokens)
        return ProgressUpdate(
            current=current,
            total=total,
            progress=(current / total) * 100 if total else 0.0,
        )

    def _schedule(self, delay_ms: float) -> None:
        self._cancel_pending()
        self._pending = self._scheduler.schedule_after(delay_ms, self.advance)

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._scheduler.cancel(self._pending)
            self._pending = None

    def _reset_clock(self) -> None:
        self._start_time = None
        self._paused_at = None
        self._total_paused = 0.0

    def _set_status(
        self,
        status: PlaybackStatus,
        *,
        word_count: int | None = None,
        stats: CompletionStats | None = None,
    ) -> None:
        self._status = status
        self._observer.on_state_change(
            StateChange(state=status, word_count=word_count, stats=stats)
        )


def format_time(total_seconds: float) -> str:
    """Format seconds as ``M:SS``."""
    minutes, seconds = divmod(round(total_seconds), 60)
    return f"{minutes}:{seconds:02d}"
