from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import List, TypedDict

import typer
import yaml

from .analyzer import LinguisticAnalyzer
from .config import ReaderConfig, clamp_wpm, load_config
from .engine import PlaybackEngine
from .lexicon import READING_MODES, find_mode
from .models import AnalysisResult, CompletionStats, Token, WordView
from .observers import CallbackObserver
from .orp import compute_focus
from .scheduling import AsyncioScheduler
from .timing import AdaptiveDuration
from .tokenization import preprocess

app = typer.Typer(help="Adaptive RSVP reader CLI.", no_args_is_help=True)


@app.callback()
def configure_logging(
    log_level: str = typer.Option(
        "WARNING", "--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)."
    ),
) -> None:
    """Adaptive rapid serial visual presentation reader."""
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise typer.BadParameter(f"Unknown log level '{log_level}'.")
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@app.command()
def read(
    input_path: Path = typer.Option(
        ..., exists=True, readable=True, dir_okay=False, file_okay=True
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    wpm: int | None = typer.Option(
        None, "--wpm", help="Words per minute (clamped to 50-1500)."
    ),
    mode: str | None = typer.Option(
        None, "--mode", "-m", help="Reading mode: scan, normal, study or proofread."
    ),
    adaptive: bool | None = typer.Option(
        None,
        "--adaptive/--fixed",
        help="Use cognitive timing or the fixed punctuation/length timing.",
    ),
) -> None:
    """Play a text file word by word in the terminal, then print session stats."""
    # Start from the configured baseline and layer the CLI flags on top.
    cfg = load_config(config)
    _apply_overrides(cfg, wpm, mode, adaptive)
    text = _read_text(input_path)
    # The engine is driven by event-loop timers, one word per scheduled step.
    stats = asyncio.run(_play_session(cfg, text))
    if stats is None:
        raise typer.BadParameter(f"{input_path} contains no words.")
    typer.echo(json.dumps(_stats_dict(stats), indent=2))


@app.command()
def analyze(
    input_path: Path = typer.Option(
        ..., exists=True, readable=True, dir_okay=False, file_okay=True
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    wpm: int | None = typer.Option(None, "--wpm", help="Words per minute."),
    mode: str | None = typer.Option(None, "--mode", "-m", help="Reading mode."),
) -> None:
    """Score every token of a text file and emit the analysis as JSON."""
    cfg = load_config(config)
    _apply_overrides(cfg, wpm, mode, None)
    tokens = preprocess(_read_text(input_path))
    analyzer = LinguisticAnalyzer()
    if analyzer.set_mode(cfg.reading_mode) is None:
        raise typer.BadParameter(f"Unknown reading mode '{cfg.reading_mode}'.")
    # Tokens are analyzed in reading order so session memory builds up as it would live.
    strategy = AdaptiveDuration()
    payload: List[TokenPayload] = []
    for token in tokens:
        analysis = analyzer.analyze(token)
        payload.append(
            _token_dict(token, analysis, strategy.duration_ms(token.text, analysis, cfg))
        )
    typer.echo(
        json.dumps({"mode": analyzer.mode.key, "tokens": payload}, indent=2)
    )


@app.command("print-config")
def print_config() -> None:
    """Print the default configuration as YAML."""
    cfg = ReaderConfig()
    typer.echo(yaml.safe_dump(cfg.to_dict(), sort_keys=False))


def main() -> None:
    app()


class TokenPayload(TypedDict):
    index: int
    text: str
    collocation: str | None
    multiplier: float
    factors: List[str]
    orp_offset: int
    prefix: str
    focus: str
    suffix: str
    duration_ms: int


class FatiguePayload(TypedDict):
    level: float
    status: str
    recommendation: str | None


class ComprehensionPayload(TypedDict):
    score: float
    issues: List[str]
    suggest_slowdown: bool
    suggest_break: bool


class StatsPayload(TypedDict):
    word_count: int
    duration_seconds: float
    actual_wpm: int
    fatigue: FatiguePayload
    comprehension: ComprehensionPayload


def _apply_overrides(
    config: ReaderConfig,
    wpm: int | None,
    mode: str | None,
    adaptive: bool | None,
) -> None:
    """Apply CLI overrides to the reader config when provided."""
    if wpm is not None:
        config.words_per_minute = clamp_wpm(wpm)
    if mode is not None:
        resolved = find_mode(mode)
        if resolved is None:
            choices = ", ".join(READING_MODES)
            raise typer.BadParameter(f"Unknown mode '{mode}'. Choose from: {choices}.")
        config.reading_mode = resolved.key
    if adaptive is not None:
        config.adaptive_mode = adaptive


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise typer.BadParameter(f"{path} is not UTF-8 text.") from exc


async def _play_session(config: ReaderConfig, text: str) -> CompletionStats | None:
    """Run one reading session on the running event loop."""
    loop = asyncio.get_running_loop()
    finished: asyncio.Future[CompletionStats] = loop.create_future()
    observer = CallbackObserver(
        on_word_change=lambda view: typer.echo(render_word(view)),
        on_complete=finished.set_result,
    )
    engine = PlaybackEngine(
        config, observer=observer, scheduler=AsyncioScheduler(loop)
    )
    if engine.load(text) == 0:
        return None
    engine.play()
    return await finished


def render_word(view: WordView) -> str:
    """Render a word with its focus letter bracketed, plus any phrase tail."""
    tail = view.display_text[len(view.word) :] if view.is_collocation else ""
    return f"{view.prefix}[{view.focus}]{view.suffix}{tail}"


def _token_dict(token: Token, analysis: AnalysisResult, duration_ms: int) -> TokenPayload:
    focus = compute_focus(token.text, analysis.orp_offset)
    return {
        "index": token.global_index,
        "text": token.text,
        "collocation": token.collocation.display if token.collocation else None,
        "multiplier": round(analysis.multiplier, 4),
        "factors": list(analysis.factors),
        "orp_offset": analysis.orp_offset,
        "prefix": focus.prefix,
        "focus": focus.focus,
        "suffix": focus.suffix,
        "duration_ms": duration_ms,
    }


def _stats_dict(stats: CompletionStats) -> StatsPayload:
    """Serialize completion stats so they can be emitted as JSON."""
    return {
        "word_count": stats.word_count,
        "duration_seconds": round(stats.duration_seconds, 3),
        "actual_wpm": stats.actual_wpm,
        "fatigue": {
            "level": stats.fatigue.level,
            "status": stats.fatigue.status,
            "recommendation": stats.fatigue.recommendation,
        },
        "comprehension": {
            "score": stats.comprehension.score,
            "issues": list(stats.comprehension.issues),
            "suggest_slowdown": stats.comprehension.suggest_slowdown,
            "suggest_break": stats.comprehension.suggest_break,
        },
    }


if __name__ == "__main__":
    main()
