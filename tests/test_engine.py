import logging

import pytest

from adaptive_rsvp.engine import format_time
from adaptive_rsvp.models import PlaybackStatus, ProgressUpdate
from tests.utils import make_engine

SAMPLE = "Hello world. This is great!"


def test_load_reports_word_count_and_state():
    engine, observer, _ = make_engine()
    assert engine.state is PlaybackStatus.EMPTY

    assert engine.load(SAMPLE) == 5
    assert engine.state is PlaybackStatus.LOADED
    assert engine.cursor == 0
    (change,) = observer.of("state")
    assert change.word_count == 5


def test_empty_text_cannot_play():
    engine, observer, scheduler = make_engine()
    assert engine.load("   \n\n  ") == 0
    assert engine.play() is False
    assert engine.current_word() is None
    assert scheduler.pending == 0
    assert observer.words == []


def test_play_shows_first_word_immediately_in_event_order():
    engine, observer, scheduler = make_engine()
    engine.load(SAMPLE)
    observer.clear()

    assert engine.play() is True
    assert [kind for kind, _ in observer.events] == [
        "state",
        "analysis",
        "word",
        "progress",
    ]
    assert observer.words == ["Hello"]
    assert observer.of("progress")[0] == ProgressUpdate(current=1, total=5, progress=20.0)
    assert engine.cursor == 1
    assert scheduler.pending == 1


def test_fixed_mode_session_end_to_end():
    engine, observer, scheduler = make_engine(adaptive_mode=False)
    engine.load(SAMPLE)
    engine.play()

    scheduler.advance(199)
    assert observer.words == ["Hello"]
    scheduler.advance(1)
    assert observer.words == ["Hello", "world."]
    scheduler.advance(10_000)

    assert observer.words == ["Hello", "world.", "This", "is", "great!"]
    assert observer.states == ["loaded", "playing", "completed"]
    assert observer.of("analysis") == []

    (stats,) = observer.of("complete")
    assert stats.word_count == 5
    assert stats.duration_seconds == pytest.approx(0.96)
    assert stats.actual_wpm == pytest.approx(300, abs=15)
    assert observer.of("state")[-1].stats == stats
    assert engine.state is PlaybackStatus.COMPLETED
    assert not engine.has_pending_step


def test_collocation_is_shown_once_and_skipped():
    engine, observer, _ = make_engine()
    engine.load("in order to succeed")

    engine.advance()
    engine.advance()
    engine.advance()

    assert observer.words == ["in order to"]
    assert observer.of("word")[0].is_collocation is True
    assert engine.cursor == 3
    assert engine.skip_count == 0

    engine.advance()
    assert observer.words == ["in order to", "succeed"]
    assert engine.state is PlaybackStatus.COMPLETED


def test_collocation_tail_uses_short_delay_while_playing():
    engine, observer, scheduler = make_engine(adaptive_mode=False)
    engine.load("in order to succeed")
    engine.play()

    # "in" is shown for 200 ms, then two 10 ms skips
    scheduler.advance(200)
    assert engine.cursor == 2
    scheduler.advance(10)
    assert engine.cursor == 3
    assert observer.words == ["in order to"]
    scheduler.advance(10)
    assert observer.words == ["in order to", "succeed"]


def test_phrase_at_end_of_document_still_completes():
    engine, observer, scheduler = make_engine()
    engine.load("we did it in fact")
    engine.play()
    scheduler.run_until_idle()

    assert observer.words == ["we", "did", "it", "in fact"]
    assert observer.states[-1] == "completed"
    assert len(observer.of("complete")) == 1


def test_pause_cancels_the_pending_step():
    engine, observer, scheduler = make_engine()
    engine.load("one two three four")
    engine.play()
    assert engine.pause() is True

    assert engine.state is PlaybackStatus.PAUSED
    assert not engine.has_pending_step
    scheduler.advance(10_000)
    assert observer.words == ["one"]
    assert engine.pause() is False


def test_paused_time_is_excluded_from_completion_stats():
    engine, observer, scheduler = make_engine(adaptive_mode=False)
    engine.load("one two three")
    engine.play()
    scheduler.advance(100)
    engine.pause()
    scheduler.advance(5000)
    engine.play()
    scheduler.run_until_idle()

    assert observer.words == ["one", "two", "three"]
    (stats,) = observer.of("complete")
    assert stats.duration_seconds == pytest.approx(0.3)
    assert stats.actual_wpm == 600
    assert engine.monitor.state.last_pause_ms == 5000


def test_play_twice_keeps_a_single_pending_step():
    engine, _, scheduler = make_engine()
    engine.load(SAMPLE)
    assert engine.play() is True
    assert engine.play() is False
    assert scheduler.pending == 1


def test_toggle_alternates_play_and_pause():
    engine, observer, _ = make_engine()
    engine.load(SAMPLE)
    assert engine.toggle() is True
    assert engine.is_playing
    assert engine.toggle() is True
    assert engine.is_paused
    assert observer.states == ["loaded", "playing", "paused"]


def test_seek_while_playing_reschedules_from_target():
    engine, observer, scheduler = make_engine()
    engine.load("zero one two three four five six seven eight nine")
    engine.play()
    engine.seek(5)

    assert engine.is_playing
    assert scheduler.pending == 1
    assert engine.cursor == 6
    # preview then replay of the target word
    assert observer.words[-2:] == ["five", "five"]
    assert engine.monitor.state.rewinds == 0


def test_navigation_clamps_and_counts_rewinds():
    engine, observer, _ = make_engine()
    engine.load("a b c d e")

    engine.prev()
    assert engine.cursor == 0
    assert observer.words == []

    engine.jump(3)
    assert engine.cursor == 3
    engine.jump(-10)
    assert engine.cursor == 0
    assert engine.monitor.state.rewinds == 1

    engine.jump(100)
    assert engine.cursor == 4
    engine.next()
    assert engine.cursor == 4
    engine.prev()
    assert engine.cursor == 3
    assert engine.monitor.state.rewinds == 2
    assert observer.words == ["d", "a", "e", "d"]
    assert observer.of("progress")[-1].current == 4


def test_preview_does_not_claim_collocation():
    engine, observer, _ = make_engine()
    engine.load("start in order to finish")
    engine.seek(1)

    assert observer.words == ["in order to"]
    assert engine.skip_count == 0
    view = engine.current_word()
    assert view is not None and view.is_collocation
    assert engine.skip_count == 2


def test_restart_returns_to_first_word():
    engine, observer, scheduler = make_engine()
    engine.load("one two three four")
    engine.play()
    scheduler.advance(50)
    engine.restart()

    assert engine.cursor == 0
    assert engine.state is PlaybackStatus.LOADED
    assert not engine.has_pending_step
    assert observer.states[-2:] == ["paused", "loaded"]
    assert observer.words[-1] == "one"
    assert observer.of("progress")[-1] == ProgressUpdate(current=1, total=4, progress=0.0)
    assert engine.monitor.state.words_read == 0
    assert engine.analyzer.memory.concept_counts == {}


def test_restart_on_empty_engine_is_silent():
    engine, observer, _ = make_engine()
    engine.restart()
    assert observer.events == []


def test_play_after_completion_starts_over():
    engine, observer, scheduler = make_engine()
    engine.load("one two")
    engine.play()
    scheduler.run_until_idle()
    observer.clear()

    assert engine.play() is True
    assert observer.words == ["one"]
    assert engine.cursor == 1


def test_words_per_minute_is_clamped():
    engine, _, _ = make_engine(words_per_minute=20)
    assert engine.config.words_per_minute == 50
    assert engine.set_words_per_minute(5000) == 1500
    assert engine.set_words_per_minute(450) == 450


def test_unknown_mode_is_ignored_with_warning(caplog):
    engine, _, _ = make_engine()
    with caplog.at_level(logging.WARNING, logger="adaptive_rsvp.engine"):
        assert engine.set_mode("warp") is None
    assert "warp" in caplog.text
    assert engine.config.reading_mode == "normal"

    mode = engine.set_mode("SCAN")
    assert mode is not None and mode.key == "scan"
    assert engine.config.reading_mode == "scan"
    assert engine.stats().mode.key == "scan"


def test_update_config_applies_known_keys_only():
    engine, _, _ = make_engine()
    config = engine.update_config(
        {
            "words_per_minute": 2000,
            "reading_mode": "study",
            "adaptive_mode": False,
            "bogus": 1,
        }
    )
    assert config.words_per_minute == 1500
    assert config.reading_mode == "study"
    assert config.adaptive_mode is False
    assert engine.analyzer.mode.key == "study"


def test_estimated_time_and_stats():
    engine, _, _ = make_engine()
    engine.load(" ".join(["word"] * 450))

    estimate = engine.estimated_remaining_time()
    assert (estimate.minutes, estimate.seconds, estimate.formatted) == (1, 30, "1:30")

    stats = engine.stats()
    assert stats.total_words == 450
    assert stats.current_word == 1
    assert stats.remaining_words == 450
    assert stats.progress == 0.0
    assert stats.words_per_minute == 300
    assert stats.is_playing is False
    assert stats.mode.key == "normal"
    assert stats.fatigue.status == "fresh"


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (0, "0:00"),
        (5, "0:05"),
        (59.6, "1:00"),
        (90, "1:30"),
        (3599, "59:59"),
    ],
)
def test_format_time(seconds, expected):
    assert format_time(seconds) == expected


def test_long_session_raises_fatigue_and_slows_words():
    engine, _, scheduler = make_engine()
    engine.load("alpha beta gamma delta")
    engine.advance()
    scheduler.advance(15 * 60_000)
    engine.advance()

    status = engine.fatigue_status()
    assert status.level == pytest.approx(0.5)
    assert status.status == "moderate"

    view = engine.current_word()
    assert view is not None and view.analysis is not None
    assert "fatigue-adjusted" in view.analysis.factors


def test_adaptive_off_skips_analysis():
    engine, observer, scheduler = make_engine(adaptive_mode=False)
    engine.load("extraordinary results")
    engine.play()
    scheduler.run_until_idle()

    assert observer.of("analysis") == []
    first = observer.of("word")[0]
    assert first.analysis is None
    assert (first.prefix, first.focus, first.suffix) == ("ext", "r", "aordinary")
    assert engine.analyzer.memory.concept_counts == {}


def test_comprehension_tracks_rewinds():
    engine, _, _ = make_engine()
    engine.load("a b c d e f g h")
    engine.advance()
    engine.prev()

    result = engine.comprehension()
    assert "frequent-rewinds" in result.issues
    assert result.score == pytest.approx(0.8)


def test_destroy_clears_everything():
    engine, _, scheduler = make_engine()
    engine.load(SAMPLE)
    engine.play()
    engine.destroy()

    assert engine.state is PlaybackStatus.EMPTY
    assert engine.word_count == 0
    assert scheduler.pending == 0
    assert engine.play() is False


def test_modes_and_adaptive_toggle():
    engine, observer, _ = make_engine()
    keys = [mode.key for mode in engine.modes()]
    assert keys == ["scan", "normal", "study", "proofread"]

    engine.set_adaptive_mode(False)
    engine.load("alpha beta")
    engine.advance()
    assert observer.of("analysis") == []
    assert observer.of("word")[0].analysis is None


def test_estimated_time_never_shows_sixty_seconds():
    engine, _, _ = make_engine()
    engine.load(" ".join(["word"] * 299))

    estimate = engine.estimated_remaining_time()
    assert (estimate.minutes, estimate.seconds, estimate.formatted) == (1, 0, "1:00")


def test_invalid_settings_are_ignored(caplog):
    engine, _, _ = make_engine(words_per_minute=450)
    with caplog.at_level(logging.WARNING, logger="adaptive_rsvp.engine"):
        config = engine.update_config(
            {"reading_mode": None, "words_per_minute": "fast"}
        )
    assert config.reading_mode == "normal"
    assert config.words_per_minute == 450
    assert "fast" in caplog.text

    assert engine.set_words_per_minute(None) == 450
    assert engine.set_mode(42) is None


def test_invalid_constructor_settings_fall_back_to_defaults():
    engine, _, _ = make_engine(words_per_minute="fast", reading_mode=None)
    assert engine.config.words_per_minute == 300
    assert engine.config.reading_mode == "normal"
    assert engine.analyzer.mode.key == "normal"
