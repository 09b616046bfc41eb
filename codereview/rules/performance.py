"""Detect collection pipelines that materialize before filtering."""

from __future__ import annotations

import re
from typing import List

from codereview.result import Finding
from codereview.severity import Category, Severity
from codereview.syntax import NodeKind, SyntaxView

from . import excerpt, make_finding

MATERIALIZE_THEN_FILTER = (".ToList().Where", ".ToArray().Where")
PY_MATERIALIZE_THEN_FILTER = re.compile(r"^filter\(.+,\s*(?:list|tuple)\(", re.DOTALL)
MAX_CALL_EXCERPT = 60


class InefficientCollectionChainRule:
    """Flag calls whose text materializes a sequence and then filters it.

    Matching is on the rendered call chain, not on resolved types, so both
    false positives and false negatives are expected.
    """

    name = "inefficient_collection_chain"
    category = Category.PERFORMANCE

    def scan(self, view: SyntaxView) -> List[Finding]:
        findings = []
        for call in view.nodes(NodeKind.INVOCATION):
            if not _is_materialize_then_filter(call.text):
                continue
            findings.append(
                make_finding(
                    self,
                    view,
                    call,
                    Severity.HIGH,
                    "Collection is materialized before filtering in "
                    f"'{excerpt(call.text, limit=MAX_CALL_EXCERPT)}'.",
                    "Filter the lazy sequence first and materialize the result once.",
                )
            )
        return findings


def _is_materialize_then_filter(text: str) -> bool:
    if any(pattern in text for pattern in MATERIALIZE_THEN_FILTER):
        return True
    return PY_MATERIALIZE_THEN_FILTER.search(text) is not None
