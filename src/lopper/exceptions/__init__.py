"""Shared exception hierarchy for Lopper."""

from __future__ import annotations

from .analysis import AnalysisError
from .base import LopperError
from .config import ConfigError

__all__ = ["AnalysisError", "ConfigError", "LopperError"]
