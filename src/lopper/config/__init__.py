"""Configuration loading and request fingerprinting for Lopper."""

from __future__ import annotations

from lopper.config.fingerprint import request_fingerprint
from lopper.config.loader import load_config, resolve_config_path
from lopper.config.model import LopperConfig

__all__ = ["LopperConfig", "load_config", "request_fingerprint", "resolve_config_path"]
