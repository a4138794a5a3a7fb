"""Unit tests for tree-sitter node helpers."""

import pytest

from legacy_rewriter.core.analysis import iter_nodes
from legacy_rewriter.core.ast import parse_module
from legacy_rewriter.core.nodes import (
    find_statement,
    following_comma,
    full_start,
    iife_body,
    invoked_function,
    last_return_statement,
    preceding_comma,
    significant_children,
)


@pytest.mark.parametrize(
    "source",
    [
        "var A = (function () {\n  function A() {}\n  return A;\n}());\n",
        "var A = (function () {\n  function A() {}\n  return A;\n})();\n",
    ],
    ids=["call-inside-parens", "call-outside-parens"],
)
def test_iife_body_from_inner_and_outer_declaration(source: str) -> None:
    module = parse_module(source, "/lib/a.js")
    inner = next(iter_nodes(module.root, "function_declaration"))
    outer = next(iter_nodes(module.root, "variable_declarator"))

    body = iife_body(inner)
    assert body is not None
    assert body.type == "statement_block"
    assert iife_body(outer) == body
    assert last_return_statement(body) is not None


def test_iife_body_is_none_for_plain_function() -> None:
    module = parse_module("function NoIife() {}\nvar f = function () { function G() {} };\n", "/lib/a.js")
    for declaration in iter_nodes(module.root, "function_declaration"):
        assert iife_body(declaration) is None


def test_invoked_function_requires_a_call() -> None:
    module = parse_module("var a = (function () {});\nvar b = foo();\n", "/lib/a.js")
    values = [d.child_by_field_name("value") for d in iter_nodes(module.root, "variable_declarator")]
    assert all(value is not None and invoked_function(value) is None for value in values)


def test_full_start_covers_leading_whitespace() -> None:
    source = "var x = 1;\n\n  var y = 2;\n"
    module = parse_module(source, "/lib/a.js")
    second = significant_children(module.root)[1]
    assert full_start(second) == source.index(";") + 1
    assert full_start(significant_children(module.root)[0]) == 0


def test_find_statement_and_commas() -> None:
    source = "X.decorators = [a, b, c];\n"
    module = parse_module(source, "/lib/a.js")
    array = next(iter_nodes(module.root, "array"))
    a, b, c = significant_children(array)

    statement = find_statement(array)
    assert statement is not None
    assert statement.type == "expression_statement"
    assert statement.end_byte == source.index(";") + 1

    comma = following_comma(a)
    assert comma is not None and comma.start_byte == source.index(",")
    assert preceding_comma(a) is None
    assert following_comma(c) is None
    assert preceding_comma(c) is not None
    assert following_comma(b) is not None
