"""Base exception for Lopper."""

from __future__ import annotations


class LopperError(Exception):
    """Root of all errors raised by Lopper."""
