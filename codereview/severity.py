"""Severity and category definitions for review findings."""

from __future__ import annotations

from enum import Enum
from typing import Sequence


class Severity(str, Enum):
    """Enumerate the supported severity levels for findings."""

    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"

    @property
    def rank(self) -> int:
        """Return an integer ranking; higher means more severe."""

        ordering = {
            Severity.CRITICAL: 3,
            Severity.HIGH: 2,
            Severity.MEDIUM: 1,
            Severity.LOW: 0,
        }
        return ordering[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank


class Category(str, Enum):
    """Finding categories, declared in rule execution order."""

    SECURITY = "SECURITY"
    PERFORMANCE = "PERFORMANCE"
    CODE_SMELL = "CODE_SMELL"
    DOCUMENTATION = "DOCUMENTATION"
    NAMING = "NAMING"
    REFACTORING = "REFACTORING"


SEVERITY_ORDER: Sequence[Severity] = (
    Severity.CRITICAL,
    Severity.HIGH,
    Severity.MEDIUM,
    Severity.LOW,
)
