"""Build syntax views from Python source using ``ast`` and ``tokenize``."""

from __future__ import annotations

import ast
import io
import tokenize
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from codereview.errors import ParseError
from codereview.utils import read_text_file
from codereview.syntax import NodeKind, SyntaxNode, SyntaxView, SyntaxViewBuilder

PROPERTY_DECORATORS = {"property", "cached_property"}
PROPERTY_ACCESSORS = {"setter", "getter", "deleter"}
BOUND_FIRST_PARAMS = {"self", "cls"}

FunctionNode = Union[ast.FunctionDef, ast.AsyncFunctionDef]


def load_view(path: Path) -> SyntaxView:
    """Read ``path`` and parse it, raising :class:`ParseError` on any failure."""

    file_id = str(path)
    try:
        source = read_text_file(Path(path))
    except (OSError, UnicodeDecodeError) as exc:
        raise ParseError(file_id, f"unable to read source: {exc}") from exc
    return parse_source(source, file_id)


def parse_source(source: str, file_id: str) -> SyntaxView:
    """Parse Python ``source`` into a :class:`SyntaxView`."""

    lines = _source_lines(source)
    try:
        tree = ast.parse(source, filename=file_id)
        comments = _collect_comment_lines(source, lines)
        builder = _ViewBuilder(file_id, source, lines, comments)
        builder.visit_body(_without_docstring(tree.body), parent=None, scope="module")
    except (SyntaxError, ValueError, tokenize.TokenError) as exc:
        raise ParseError(file_id, str(exc)) from exc
    except (RecursionError, MemoryError) as exc:
        raise ParseError(file_id, f"source is nested too deeply to analyze: {exc}") from exc
    return builder.build()


def _source_lines(source: str) -> List[str]:
    """Split on line endings only, matching the tokenizer's line numbers.

    ``str.splitlines`` also breaks on form feeds and other separators.
    """

    return io.StringIO(source).readlines()


def _collect_comment_lines(source: str, lines: List[str]) -> Dict[int, str]:
    """Map line numbers to comments that occupy the whole line."""

    comments: Dict[int, str] = {}
    for token in tokenize.generate_tokens(io.StringIO(source).readline):
        if token.type != tokenize.COMMENT:
            continue
        row, col = token.start
        if lines[row - 1][:col].strip():
            continue
        comments[row] = token.string
    return comments


class _ViewBuilder:
    def __init__(self, file_id: str, source: str, lines: List[str], comments: Dict[int, str]) -> None:
        self._source = source
        self._lines = lines
        self._comments = comments
        self._builder = SyntaxViewBuilder(file_id)

    def build(self) -> SyntaxView:
        return self._builder.build()

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------
    def visit_body(self, body: List[ast.stmt], parent: Optional[SyntaxNode], scope: str) -> None:
        for statement in body:
            self.visit_statement(statement, parent, scope)

    def visit_statement(self, node: ast.stmt, parent: Optional[SyntaxNode], scope: str) -> None:
        if isinstance(node, ast.ClassDef):
            self._visit_class(node, parent)
        elif isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
            self._visit_function(node, parent, scope)
        elif isinstance(node, (ast.Import, ast.ImportFrom)):
            self._visit_import(node, parent)
        elif isinstance(node, ast.If):
            self._visit_if(node, parent, scope)
        elif isinstance(node, ast.AnnAssign) and scope == "class" and isinstance(node.target, ast.Name):
            self._builder.add(NodeKind.PROPERTY, parent, name=node.target.id, line=node.lineno)
            self._visit_children(node, parent, scope, skip=(node.target,))
        elif isinstance(node, (ast.Assign, ast.AnnAssign)) and scope == "function":
            targets = node.targets if isinstance(node, ast.Assign) else [node.target]
            for target in targets:
                for name_node in _assigned_names(target):
                    self._builder.add(NodeKind.VARIABLE, parent, name=name_node.id, line=name_node.lineno)
            self._visit_children(node, parent, scope)
        else:
            self._visit_children(node, parent, scope)

    def _visit_class(self, node: ast.ClassDef, parent: Optional[SyntaxNode]) -> None:
        for expr in [*node.decorator_list, *node.bases, *node.keywords]:
            self.visit_expression(expr, parent)
        class_node = self._builder.add(
            NodeKind.CLASS,
            parent,
            name=node.name,
            line=node.lineno,
            leading_comments=self._leading_comments(node),
        )
        self.visit_body(_without_docstring(node.body), class_node, scope="class")

    def _visit_function(self, node: FunctionNode, parent: Optional[SyntaxNode], scope: str) -> None:
        for expr in [*node.decorator_list, *node.args.defaults, *node.args.kw_defaults]:
            if expr is not None:
                self.visit_expression(expr, parent)
        kind = NodeKind.PROPERTY if _is_property(node) else NodeKind.METHOD
        function_node = self._builder.add(
            kind,
            parent,
            name=node.name,
            line=node.lineno,
            leading_comments=self._leading_comments(node),
            statement_count=len(_without_docstring(node.body)),
            parameter_count=_parameter_count(node, in_class=scope == "class"),
        )
        for arg in _all_arguments(node.args):
            if arg.annotation is not None:
                self.visit_expression(arg.annotation, function_node)
        if node.returns is not None:
            self.visit_expression(node.returns, function_node)
        self.visit_body(_without_docstring(node.body), function_node, scope="function")

    def _visit_import(self, node: Union[ast.Import, ast.ImportFrom], parent: Optional[SyntaxNode]) -> None:
        text = self._segment(node)
        for alias in node.names:
            if alias.name == "*":
                continue
            self._builder.add(
                NodeKind.IMPORT,
                parent,
                name=alias.asname or alias.name,
                text=text,
                line=node.lineno,
            )

    def _visit_if(self, node: ast.If, parent: Optional[SyntaxNode], scope: str) -> None:
        conditional = self._builder.add(NodeKind.CONDITIONAL, parent, text=self._segment(node.test), line=node.lineno)
        self.visit_expression(node.test, conditional)
        self.visit_body(node.body, conditional, scope)
        if self._is_elif(node.orelse):
            self._visit_if(node.orelse[0], parent, scope)
        else:
            self.visit_body(node.orelse, conditional, scope)

    def _is_elif(self, orelse: List[ast.stmt]) -> bool:
        """An ``elif`` branch is a sibling of its ``if``, not a nested block."""

        if len(orelse) != 1 or not isinstance(orelse[0], ast.If):
            return False
        branch = orelse[0]
        return self._lines[branch.lineno - 1][branch.col_offset :].startswith("elif")

    def _visit_children(
        self,
        node: ast.AST,
        parent: Optional[SyntaxNode],
        scope: str,
        skip: Tuple[ast.AST, ...] = (),
    ) -> None:
        for child in ast.iter_child_nodes(node):
            if child in skip:
                continue
            if isinstance(child, ast.stmt):
                self.visit_statement(child, parent, scope)
            elif isinstance(child, ast.expr):
                self.visit_expression(child, parent)
            else:
                self._visit_children(child, parent, scope)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------
    def visit_expression(self, node: ast.AST, parent: Optional[SyntaxNode]) -> None:
        if isinstance(node, ast.Name):
            self._builder.add(NodeKind.IDENTIFIER, parent, name=node.id, line=node.lineno)
        elif isinstance(node, ast.Attribute):
            self._builder.add(NodeKind.IDENTIFIER, parent, name=node.attr, line=node.lineno)
        elif isinstance(node, ast.Constant) and isinstance(node.value, str):
            self._builder.add(NodeKind.STRING_LITERAL, parent, text=node.value, line=node.lineno)
        elif isinstance(node, ast.Call):
            self._builder.add(NodeKind.INVOCATION, parent, text=self._segment(node), line=node.lineno)
        for child in ast.iter_child_nodes(node):
            self.visit_expression(child, parent)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _segment(self, node: ast.AST) -> str:
        segment = ast.get_source_segment(self._source, node)
        if segment is None:
            return ast.unparse(node)
        return segment

    def _leading_comments(self, node: Union[FunctionNode, ast.ClassDef]) -> Tuple[str, ...]:
        first_line = min([node.lineno, *(decorator.lineno for decorator in node.decorator_list)])
        collected: List[str] = []
        row = first_line - 1
        while row >= 1:
            if row in self._comments:
                collected.append(self._comments[row])
            elif self._lines[row - 1].strip():
                break
            row -= 1
        collected.reverse()
        docstring = ast.get_docstring(node)
        if docstring:
            collected.append(docstring)
        return tuple(collected)


def _is_property(node: FunctionNode) -> bool:
    for decorator in node.decorator_list:
        if isinstance(decorator, ast.Name) and decorator.id in PROPERTY_DECORATORS:
            return True
        if isinstance(decorator, ast.Attribute) and (
            decorator.attr in PROPERTY_ACCESSORS or decorator.attr in PROPERTY_DECORATORS
        ):
            return True
    return False


def _all_arguments(args: ast.arguments) -> List[ast.arg]:
    collected = [*args.posonlyargs, *args.args]
    if args.vararg is not None:
        collected.append(args.vararg)
    collected.extend(args.kwonlyargs)
    if args.kwarg is not None:
        collected.append(args.kwarg)
    return collected


def _parameter_count(node: FunctionNode, in_class: bool) -> int:
    arguments = _all_arguments(node.args)
    positional = [*node.args.posonlyargs, *node.args.args]
    if in_class and positional and positional[0].arg in BOUND_FIRST_PARAMS:
        return len(arguments) - 1
    return len(arguments)


def _assigned_names(target: ast.AST) -> List[ast.Name]:
    if isinstance(target, ast.Name):
        return [target]
    if isinstance(target, (ast.Tuple, ast.List)):
        names: List[ast.Name] = []
        for element in target.elts:
            names.extend(_assigned_names(element))
        return names
    if isinstance(target, ast.Starred):
        return _assigned_names(target.value)
    return []


def _without_docstring(body: List[ast.stmt]) -> List[ast.stmt]:
    """Drop a leading docstring; it is documentation trivia, not a literal."""

    if body and isinstance(body[0], ast.Expr):
        value = body[0].value
        if isinstance(value, ast.Constant) and isinstance(value.value, str):
            return body[1:]
    return body
