"""Exceptions raised while reconstructing drives from scoring rows."""

from __future__ import annotations

from typing import Optional


class ReconstructionError(Exception):
    """Base error for a reconstruction run; optionally tied to an input row."""

    def __init__(self, message: str, *, row_number: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.row_number = row_number

    def __str__(self) -> str:
        if self.row_number is None:
            return self.message
        return f"row {self.row_number}: {self.message}"


class ConfigurationError(ReconstructionError):
    """Raised when required team context is missing or inconsistent."""


class MalformedInputError(ReconstructionError, ValueError):
    """Raised when a scraped row cannot be trusted (bad scores, missing cells)."""
