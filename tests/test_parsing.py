import textwrap

import pytest

from codereview.errors import ParseError
from codereview.parsing import load_view, parse_source
from codereview.syntax import NodeKind


def parse(source):
    return parse_source(textwrap.dedent(source), "sample.py")


def test_declarations_are_recorded_in_order():
    view = parse(
        """
        class Account:
            owner: str
            balance: int = 0

            @property
            def Label(self):
                return self.owner

            def Deposit(self, amount):
                self.balance += amount

        def Helper():
            return None
        """
    )

    assert view.declarations(NodeKind.CLASS) == ("Account",)
    assert view.declarations(NodeKind.METHOD) == ("Deposit", "Helper")
    assert view.declarations(NodeKind.PROPERTY) == ("owner", "balance", "Label")


def test_method_shape_excludes_self_and_counts_direct_statements():
    view = parse(
        """
        class Service:
            def Run(self, a, b=1, *args, flag, **kwargs):
                x = a
                for item in args:
                    x += item
                return x
        """
    )

    (method,) = view.nodes(NodeKind.METHOD)
    assert method.parameter_count == 5
    assert method.statement_count == 3
    assert method.size == 3


def test_leading_comments_include_comments_above_decorators_and_docstring():
    view = parse(
        """
        import functools

        # Cached lookup.

        @functools.lru_cache()
        def Lookup(key):
            \"\"\"Return the value for key.\"\"\"
            return key

        value = 1
        def Bare():
            return 2
        """
    )

    lookup, bare = view.nodes(NodeKind.METHOD)
    assert lookup.leading_comments == ("# Cached lookup.", "Return the value for key.")
    assert bare.leading_comments == ()


def test_imports_literals_and_invocations():
    view = parse(
        """
        import os.path
        import numpy as np
        from collections import OrderedDict, defaultdict
        from typing import *

        def Build():
            \"\"\"Docstrings are not literals.\"\"\"
            return np.array(os.path.join("a", "b"))
        """
    )

    assert [node.name for node in view.nodes(NodeKind.IMPORT)] == [
        "os.path",
        "np",
        "OrderedDict",
        "defaultdict",
    ]
    assert [node.text for node in view.nodes(NodeKind.STRING_LITERAL)] == ["a", "b"]
    assert [node.text for node in view.nodes(NodeKind.INVOCATION)] == [
        'np.array(os.path.join("a", "b"))',
        'os.path.join("a", "b")',
    ]
    assert {"np", "array", "os", "path", "join"} <= view.identifiers()


def test_variables_are_only_collected_inside_functions():
    view = parse(
        """
        LIMIT = 3

        def Split(pair):
            first, *Rest = pair
            total: int = len(Rest)
            return first, total
        """
    )

    assert [node.name for node in view.nodes(NodeKind.VARIABLE)] == ["first", "Rest", "total"]


def test_conditionals_track_nesting_but_not_elif_chains():
    view = parse(
        """
        def Route(a, b):
            if a:
                for item in b:
                    if item:
                        return item
            elif b:
                return b
            else:
                if a is None:
                    return None
        """
    )

    outer, inner, elif_branch, else_branch = view.nodes(NodeKind.CONDITIONAL)
    assert view.parent(inner) == outer
    assert view.parent(elif_branch) == view.parent(outer)
    assert view.parent(else_branch) == elif_branch
    assert [node.kind for node in view.ancestors(inner)] == [NodeKind.CONDITIONAL, NodeKind.METHOD]


def test_malformed_source_raises_parse_error():
    with pytest.raises(ParseError) as excinfo:
        parse_source("def broken(:\n    pass\n", "broken.py")

    assert excinfo.value.file_id == "broken.py"


def test_load_view_reports_undecodable_files(tmp_path):
    path = tmp_path / "latin1.py"
    path.write_bytes(b"name = '\xe9'\n")

    with pytest.raises(ParseError):
        load_view(path)


def test_load_view_reads_file(tmp_path):
    path = tmp_path / "module.py"
    path.write_text("class Thing:\n    pass\n", encoding="utf-8")

    view = load_view(path)

    assert view.file_id == str(path)
    assert view.declarations(NodeKind.CLASS) == ("Thing",)


def test_docstring_is_not_counted_as_a_statement():
    view = parse(
        """
        def Documented():
            \"\"\"Explain the method.\"\"\"
            first = 1
            return first
        """
    )

    (method,) = view.nodes(NodeKind.METHOD)
    assert method.statement_count == 2


def test_form_feed_does_not_shift_line_lookups():
    source = (
        "x = 1\x0c\n"
        "\n"
        "# Grade a score.\n"
        "def Grade(score):\n"
        "    if score > 90:\n"
        "        return 1\n"
        "    elif score > 80:\n"
        "        return 2\n"
        "    elif score > 70:\n"
        "        return 3\n"
        "    return 0\n"
    )
    view = parse_source(source, "paged.py")

    (method,) = view.nodes(NodeKind.METHOD)
    assert method.leading_comments == ("# Grade a score.",)
    conditionals = view.nodes(NodeKind.CONDITIONAL)
    assert len(conditionals) == 3
    assert all(view.parent(node) == method for node in conditionals)


def test_deeply_nested_expression_raises_parse_error():
    source = "def Deep():\n    return " + " + ".join(["1"] * 3000) + "\n"

    with pytest.raises(ParseError) as excinfo:
        parse_source(source, "deep.py")

    assert excinfo.value.file_id == "deep.py"


def test_load_view_reports_missing_files(tmp_path):
    with pytest.raises(ParseError) as excinfo:
        load_view(tmp_path / "missing.py")

    assert "unable to read source" in excinfo.value.reason
