"""Structural code smell detectors."""

from __future__ import annotations

from typing import List

from codereview.result import Finding
from codereview.severity import Category, Severity
from codereview.syntax import NodeKind, SyntaxView

from . import make_finding

DEFAULT_LONG_METHOD_THRESHOLD = 20
DEFAULT_MAX_PARAMETERS = 5
DEFAULT_MAX_NESTED_CONDITIONALS = 2


class LongMethodRule:
    """Flag methods whose body holds more direct statements than ``threshold``."""

    name = "long_method"
    category = Category.CODE_SMELL
    severity = Severity.LOW

    def __init__(self, threshold: int = DEFAULT_LONG_METHOD_THRESHOLD) -> None:
        self.threshold = threshold

    def scan(self, view: SyntaxView) -> List[Finding]:
        findings = []
        for method in view.nodes(NodeKind.METHOD):
            if method.size <= self.threshold:
                continue
            findings.append(
                make_finding(
                    self,
                    view,
                    method,
                    self.severity,
                    self._message(method.name, method.size),
                    "Split the method into smaller, named steps.",
                )
            )
        return findings

    def _message(self, method_name: str, size: int) -> str:
        return (
            f"Method '{method_name}' has {size} statements, more than {self.threshold} "
            "(consider refactoring)."
        )


class DeepNestingRule:
    """Flag conditionals nested more than ``max_depth`` levels deep.

    The outermost conditional sits at depth one; each enclosing conditional
    adds a level. Loops and other blocks do not count.
    """

    name = "deep_nesting"
    category = Category.CODE_SMELL

    def __init__(self, max_depth: int = DEFAULT_MAX_NESTED_CONDITIONALS) -> None:
        self.max_depth = max_depth

    def scan(self, view: SyntaxView) -> List[Finding]:
        findings = []
        for conditional in view.nodes(NodeKind.CONDITIONAL):
            depth = 1 + sum(1 for ancestor in view.ancestors(conditional) if ancestor.kind is NodeKind.CONDITIONAL)
            if depth <= self.max_depth:
                continue
            findings.append(
                make_finding(
                    self,
                    view,
                    conditional,
                    Severity.MEDIUM,
                    f"Conditional nested {depth} levels deep (limit {self.max_depth}).",
                    "Use guard clauses or extract the inner branches into helpers.",
                )
            )
        return findings


class TooManyParametersRule:
    """Flag methods that accept more than ``max_parameters`` parameters."""

    name = "too_many_parameters"
    category = Category.CODE_SMELL

    def __init__(self, max_parameters: int = DEFAULT_MAX_PARAMETERS) -> None:
        self.max_parameters = max_parameters

    def scan(self, view: SyntaxView) -> List[Finding]:
        findings = []
        for method in view.nodes(NodeKind.METHOD):
            if method.parameter_count <= self.max_parameters:
                continue
            findings.append(
                make_finding(
                    self,
                    view,
                    method,
                    Severity.MEDIUM,
                    f"Method '{method.name}' takes {method.parameter_count} parameters "
                    f"(limit {self.max_parameters}).",
                    "Group related parameters into an object.",
                )
            )
        return findings


class UnusedImportRule:
    """Flag imports whose last name segment never appears as an identifier.

    A heuristic: anything that is used without being named in the file (for
    example through re-exports) is reported as unused.
    """

    name = "unused_import"
    category = Category.CODE_SMELL

    def scan(self, view: SyntaxView) -> List[Finding]:
        identifiers = view.identifiers()
        findings = []
        for directive in view.nodes(NodeKind.IMPORT):
            token = directive.name.rsplit(".", 1)[-1]
            if not token.isidentifier() or token in identifiers:
                continue
            findings.append(
                make_finding(
                    self,
                    view,
                    directive,
                    Severity.LOW,
                    f"Unused import: {directive.name}",
                    "Remove the import or use the imported name.",
                )
            )
        return findings
