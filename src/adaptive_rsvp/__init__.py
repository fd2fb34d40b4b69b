"""
adaptive_rsvp package exports convenience helpers for library consumers.
"""

from __future__ import annotations

from .analyzer import LinguisticAnalyzer
from .config import ReaderConfig, config_from_dict, config_from_yaml, load_config
from .engine import PlaybackEngine
from .fatigue import FatigueEvent, FatigueMonitor
from .observers import CallbackObserver, CompositeObserver, ReaderObserver
from .orp import compute_focus
from .scheduling import AsyncioScheduler, ManualScheduler, Scheduler
from .tokenization import preprocess

__all__ = [
    "ReaderConfig",
    "config_from_dict",
    "config_from_yaml",
    "load_config",
    "PlaybackEngine",
    "LinguisticAnalyzer",
    "FatigueEvent",
    "FatigueMonitor",
    "ReaderObserver",
    "CallbackObserver",
    "CompositeObserver",
    "compute_focus",
    "Scheduler",
    "ManualScheduler",
    "AsyncioScheduler",
    "preprocess",
]

__version__ = "0.1.0"
