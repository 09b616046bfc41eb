"""Refactoring priority detectors."""

from __future__ import annotations

from codereview.severity import Category, Severity

from .smells import LongMethodRule

DEFAULT_REFACTORING_THRESHOLD = 30


class RefactoringPriorityRule(LongMethodRule):
    """Stricter long-method variant marking methods that should be split first."""

    name = "refactoring_priority"
    category = Category.REFACTORING
    severity = Severity.MEDIUM

    def __init__(self, threshold: int = DEFAULT_REFACTORING_THRESHOLD) -> None:
        super().__init__(threshold)

    def _message(self, method_name: str, size: int) -> str:
        return (
            f"Method '{method_name}' has {size} statements, more than {self.threshold}; "
            "prioritize it for refactoring."
        )
