from adaptive_rsvp.config import ReaderConfig
from adaptive_rsvp.models import AnalysisResult
from adaptive_rsvp.timing import (
    AdaptiveDuration,
    FixedDuration,
    select_strategy,
)


def test_fixed_duration_punctuation_and_length():
    config = ReaderConfig(words_per_minute=300)
    strategy = FixedDuration()

    assert strategy.duration_ms("is", None, config) == 200
    assert strategy.duration_ms("world.", None, config) == 360
    assert strategy.duration_ms("word,", None, config) == 300
    assert strategy.duration_ms("extraordinary", None, config) == 260
    assert strategy.duration_ms("extraordinary!", None, config) == 468


def test_fixed_duration_respects_toggles():
    config = ReaderConfig(
        words_per_minute=300,
        pause_at_punctuation=False,
        extra_time_for_long_words=False,
    )
    strategy = FixedDuration()
    assert strategy.duration_ms("world.", None, config) == 200
    assert strategy.duration_ms("extraordinary", None, config) == 200


def test_fixed_duration_ignores_analysis():
    config = ReaderConfig(words_per_minute=300)
    analysis = AnalysisResult(source_text="is", display_text="is", multiplier=3.0)
    assert FixedDuration().duration_ms("is", analysis, config) == 200


def test_adaptive_duration_scales_base_interval():
    config = ReaderConfig(words_per_minute=600)
    analysis = AnalysisResult(source_text="x", display_text="x", multiplier=1.5)
    assert AdaptiveDuration().duration_ms("x", analysis, config) == 150
    assert AdaptiveDuration().duration_ms("x", None, config) == 100


def test_select_strategy_follows_adaptive_flag():
    assert isinstance(select_strategy(ReaderConfig(adaptive_mode=True)), AdaptiveDuration)
    assert isinstance(select_strategy(ReaderConfig(adaptive_mode=False)), FixedDuration)
