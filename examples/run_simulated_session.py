"""Minimal example that plays a passage against a virtual clock and prints timings."""

from __future__ import annotations

from adaptive_rsvp import CallbackObserver, ManualScheduler, PlaybackEngine, ReaderConfig
from adaptive_rsvp.models import CompletionStats, WordView


def main() -> None:
    scheduler = ManualScheduler()
    config = ReaderConfig(words_per_minute=350, reading_mode="study")

    def show(view: WordView) -> None:
        factors = ", ".join(view.analysis.factors) if view.analysis else ""
        print(f"{scheduler.now():>8.0f} ms  {view.display_text:<24} {factors}")

    def finish(stats: CompletionStats) -> None:
        print(
            f"\n{stats.word_count} words in {stats.duration_seconds:.2f}s "
            f"({stats.actual_wpm} wpm), fatigue: {stats.fatigue.status}"
        )

    engine = PlaybackEngine(
        config,
        observer=CallbackObserver(on_word_change=show, on_complete=finish),
        scheduler=scheduler,
    )
    sample_text = (
        "The gyroscope, in order to stay upright, spins extraordinarily fast. "
        "However, NASA engineers found that friction eventually wins.\n\n"
        "In fact, every gyroscope slows down at last."
    )
    engine.load(sample_text)
    engine.play()
    scheduler.run_until_idle()


if __name__ == "__main__":
    main()
