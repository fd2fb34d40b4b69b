from __future__ import annotations

from .linguistic import LinguisticAnalyzer
from .memory import SessionMemory

__all__ = ["LinguisticAnalyzer", "SessionMemory"]
