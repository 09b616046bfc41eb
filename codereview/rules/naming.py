"""Naming convention detectors.

Only the first character is inspected. Empty names and names that start
with anything but an ASCII letter (``_private``, digits, non-ASCII)
are never reported.
"""

from __future__ import annotations

from typing import List

from codereview.result import Finding
from codereview.severity import Category, Severity
from codereview.syntax import NodeKind, SyntaxView

from . import make_finding


def _leading_letter(name: str) -> str:
    if not name or not (name[0].isascii() and name[0].isalpha()):
        return ""
    return name[0]


class MethodNamingRule:
    """Methods are expected to start with an uppercase letter."""

    name = "method_naming"
    category = Category.NAMING

    def scan(self, view: SyntaxView) -> List[Finding]:
        findings = []
        for method in view.nodes(NodeKind.METHOD):
            letter = _leading_letter(method.name)
            if not letter or letter.isupper():
                continue
            findings.append(
                make_finding(
                    self,
                    view,
                    method,
                    Severity.LOW,
                    f"Method '{method.name}' should follow PascalCase naming convention.",
                )
            )
        return findings


class VariableNamingRule:
    """Local variables are expected to start with a lowercase letter."""

    name = "variable_naming"
    category = Category.NAMING

    def scan(self, view: SyntaxView) -> List[Finding]:
        findings = []
        for variable in view.nodes(NodeKind.VARIABLE):
            letter = _leading_letter(variable.name)
            if not letter or letter.islower():
                continue
            findings.append(
                make_finding(
                    self,
                    view,
                    variable,
                    Severity.LOW,
                    f"Variable '{variable.name}' should follow camelCase naming convention.",
                )
            )
        return findings
