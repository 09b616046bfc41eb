"""Error types raised by the review engine."""

from __future__ import annotations


class ReviewError(Exception):
    """Base class for review engine errors."""


class ParseError(ReviewError):
    """A file could not be turned into a syntax view."""

    def __init__(self, file_id: str, reason: str) -> None:
        super().__init__(f"{file_id}: {reason}")
        self.file_id = file_id
        self.reason = reason


class ConfigurationError(ReviewError):
    """Invalid analyzer configuration; fatal to the whole run."""
