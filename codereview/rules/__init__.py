"""Rule protocol shared by all detectors."""

from __future__ import annotations

from typing import List, Optional, Protocol

from codereview.result import Finding, Location
from codereview.severity import Category, Severity
from codereview.syntax import SyntaxNode, SyntaxView


class Rule(Protocol):
    """Protocol implemented by all detector rules.

    ``scan`` must be a pure function of the view: no state survives between
    calls, and the findings of one rule never depend on another rule.
    """

    name: str
    category: Category

    def scan(self, view: SyntaxView) -> List[Finding]:
        """Analyze ``view`` and return its findings in document order."""


def make_finding(
    rule: Rule,
    view: SyntaxView,
    node: Optional[SyntaxNode],
    severity: Severity,
    message: str,
    recommendation: str = "",
) -> Finding:
    """Build a finding stamped with the rule's name and fixed category."""

    location = Location(
        file_id=view.file_id,
        line=node.line if node is not None else None,
        symbol=(node.name or None) if node is not None else None,
    )
    return Finding(
        rule=rule.name,
        category=rule.category,
        severity=severity,
        message=message,
        location=location,
        recommendation=recommendation,
    )


def excerpt(text: str, limit: int = 40) -> str:
    """Collapse whitespace in ``text`` and cut it to ``limit`` characters."""

    text = " ".join(text.split())
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."
