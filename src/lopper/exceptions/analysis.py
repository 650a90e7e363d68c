"""Analysis-related exceptions."""

from __future__ import annotations

from lopper.exceptions.base import LopperError


class AnalysisError(LopperError, RuntimeError):
    """Raised when a language adapter fails to analyse a root."""

    def __init__(self, adapter_id: str, root: str, message: str) -> None:
        super().__init__(f"{adapter_id}: {root}: {message}")
        self.adapter_id = adapter_id
        self.root = root
