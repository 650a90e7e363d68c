"""Configuration-related exceptions."""

from __future__ import annotations

from lopper.exceptions.base import LopperError


class ConfigError(LopperError, ValueError):
    """Raised when analysis configuration or the repository path is invalid."""
