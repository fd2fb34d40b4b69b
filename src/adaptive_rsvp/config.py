from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Mapping, MutableMapping

import yaml

MIN_WPM = 50
MAX_WPM = 1500


@dataclass(slots=True)
class ReaderConfig:
    """Configuration options for the playback engine."""

    words_per_minute: int = 300
    pause_at_punctuation: bool = True
    extra_time_for_long_words: bool = True
    adaptive_mode: bool = True
    reading_mode: str = "normal"
    long_word_threshold: int = 8
    punctuation_multiplier: float = 1.5
    long_word_multiplier: float = 1.3
    collocation_skip_delay_ms: int = 10

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable dictionary representation of the configuration."""
        return dict(asdict(self))


def clamp_wpm(value: Any) -> int:
    """Clamp a words-per-minute value into the supported range."""
    return max(MIN_WPM, min(MAX_WPM, int(value)))


def config_fields() -> set[str]:
    return {field.name for field in fields(ReaderConfig)}


def _build_kwargs(data: Mapping[str, Any]) -> dict[str, Any]:
    allowed = config_fields()
    return {key: data[key] for key in data if key in allowed}


def config_from_dict(data: Mapping[str, Any] | None) -> ReaderConfig:
    """Build a ReaderConfig from a dictionary-like input, ignoring unknown keys."""
    if data is None:
        return ReaderConfig()
    return ReaderConfig(**_build_kwargs(data))


def config_from_yaml(path: str | Path) -> ReaderConfig:
    """Load configuration from a YAML file."""
    contents = Path(path).read_text(encoding="utf-8")
    parsed = yaml.safe_load(contents) or {}
    if not isinstance(parsed, MutableMapping):
        raise ValueError("Configuration YAML must define a mapping.")
    return config_from_dict(parsed)


def load_config(path: str | Path | None = None) -> ReaderConfig:
    """Load configuration from YAML when provided, otherwise return defaults."""
    if path is None:
        return ReaderConfig()
    return config_from_yaml(path)
