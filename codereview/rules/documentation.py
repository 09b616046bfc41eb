"""Documentation coverage detectors."""

from __future__ import annotations

from typing import List

from codereview.result import Finding
from codereview.severity import Category, Severity
from codereview.syntax import NodeKind, SyntaxView

from . import make_finding


class MissingDocumentationRule:
    """Flag methods with no comment or docstring in their leading trivia."""

    name = "missing_documentation"
    category = Category.DOCUMENTATION

    def scan(self, view: SyntaxView) -> List[Finding]:
        findings = []
        for method in view.nodes(NodeKind.METHOD):
            if any(comment.strip() for comment in method.leading_comments):
                continue
            findings.append(
                make_finding(
                    self,
                    view,
                    method,
                    Severity.LOW,
                    f"Method '{method.name}' lacks documentation/comments.",
                    "Add a docstring or a comment describing the method.",
                )
            )
        return findings
