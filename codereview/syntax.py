"""Read-only syntax view consumed by detector rules.

A view is a flat, document-ordered list of tagged nodes. Each node records
the nearest enclosing recorded node, so rules can walk ancestor chains
without knowing anything about the parser that produced the view.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple


class NodeKind(str, Enum):
    """Structural node kinds a syntax view can expose."""

    CLASS = "class"
    METHOD = "method"
    PROPERTY = "property"
    VARIABLE = "variable"
    IMPORT = "import"
    IDENTIFIER = "identifier"
    STRING_LITERAL = "string_literal"
    INVOCATION = "invocation"
    CONDITIONAL = "conditional"


@dataclass(frozen=True)
class SyntaxNode:
    """One structural node.

    ``statement_count``, ``expression_body`` and ``parameter_count`` are only
    meaningful for METHOD nodes; ``leading_comments`` is filled for
    declarations.
    """

    kind: NodeKind
    node_id: int
    name: str = ""
    text: str = ""
    line: Optional[int] = None
    parent_id: Optional[int] = None
    leading_comments: Tuple[str, ...] = ()
    statement_count: int = 0
    expression_body: bool = False
    parameter_count: int = 0

    @property
    def size(self) -> int:
        """Statement count, with an expression body counting as one."""

        if self.expression_body:
            return max(self.statement_count, 1)
        return self.statement_count


class SyntaxView:
    """Queryable tree of one parsed file."""

    def __init__(self, file_id: str, nodes: Sequence[SyntaxNode]) -> None:
        self.file_id = file_id
        self._nodes: Tuple[SyntaxNode, ...] = tuple(nodes)
        self._by_id: Dict[int, SyntaxNode] = {node.node_id: node for node in self._nodes}

    def nodes(self, kind: NodeKind) -> List[SyntaxNode]:
        return [node for node in self._nodes if node.kind is kind]

    def parent(self, node: SyntaxNode) -> Optional[SyntaxNode]:
        if node.parent_id is None:
            return None
        return self._by_id.get(node.parent_id)

    def ancestors(self, node: SyntaxNode) -> Iterator[SyntaxNode]:
        """Yield enclosing nodes, innermost first."""

        current = self.parent(node)
        while current is not None:
            yield current
            current = self.parent(current)

    def identifiers(self) -> Set[str]:
        return {node.name for node in self.nodes(NodeKind.IDENTIFIER) if node.name}

    def declarations(self, kind: NodeKind) -> Tuple[str, ...]:
        return tuple(node.name for node in self.nodes(kind))


class SyntaxViewBuilder:
    """Accumulate nodes in document order and produce a :class:`SyntaxView`."""

    def __init__(self, file_id: str) -> None:
        self.file_id = file_id
        self._nodes: List[SyntaxNode] = []

    def add(self, kind: NodeKind, parent: Optional[SyntaxNode] = None, **fields) -> SyntaxNode:
        node = SyntaxNode(
            kind=kind,
            node_id=len(self._nodes),
            parent_id=parent.node_id if parent is not None else None,
            **fields,
        )
        self._nodes.append(node)
        return node

    def build(self) -> SyntaxView:
        return SyntaxView(self.file_id, self._nodes)
