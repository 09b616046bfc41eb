"""Detect credentials embedded in string literals."""

from __future__ import annotations

from typing import List

from codereview.result import Finding
from codereview.severity import Category, Severity
from codereview.syntax import NodeKind, SyntaxView

from . import excerpt, make_finding

SECRET_MARKERS = ("password", "secret")


class HardcodedSecretRule:
    """Flag string literals that mention a password or secret.

    The match is a case-sensitive substring search over the literal text with
    no word boundaries; it classifies wording, not values.
    """

    name = "hardcoded_secret"
    category = Category.SECURITY

    def scan(self, view: SyntaxView) -> List[Finding]:
        findings = []
        for literal in view.nodes(NodeKind.STRING_LITERAL):
            if not any(marker in literal.text for marker in SECRET_MARKERS):
                continue
            findings.append(
                make_finding(
                    self,
                    view,
                    literal,
                    Severity.CRITICAL,
                    f"Possible hardcoded secret in string literal '{excerpt(literal.text)}'.",
                    "Load credentials from the environment or a secrets manager instead of source code.",
                )
            )
        return findings
