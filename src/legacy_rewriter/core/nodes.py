"""Helpers for locating edit anchors in tree-sitter JavaScript trees."""

from tree_sitter import Node

FUNCTION_EXPRESSION_TYPES = frozenset({"function_expression", "function", "arrow_function"})
STATEMENT_CONTAINER_TYPES = frozenset({"program", "statement_block"})
VARIABLE_DECLARATION_TYPES = frozenset({"variable_declaration", "lexical_declaration"})
TRIVIA_TYPES = frozenset({"comment", "hash_bang_line", "html_comment"})


def node_text(node: Node) -> str:
    return (node.text or b"").decode("utf-8")


def significant_children(node: Node) -> list[Node]:
    """Named children without comments."""
    return [child for child in node.named_children if child.type not in TRIVIA_TYPES]


def full_start(node: Node) -> int:
    """Offset just after the token preceding ``node``, so leading whitespace belongs to the node."""
    previous = node.prev_sibling
    if previous is not None:
        return previous.end_byte
    parent = node.parent
    if parent is None or parent.parent is None:
        return 0
    return parent.start_byte


def unwrap_parens(node: Node) -> Node:
    while node.type == "parenthesized_expression":
        inner = significant_children(node)
        if not inner:
            break
        node = inner[0]
    return node


def find_statement(node: Node) -> Node | None:
    """Return the statement (a direct child of a program or block) enclosing ``node``."""
    current: Node | None = node
    while current is not None:
        parent = current.parent
        if parent is not None and parent.type in STATEMENT_CONTAINER_TYPES:
            return current
        current = parent
    return None


def is_invoked(function: Node) -> bool:
    callee = function
    parent = function.parent
    while parent is not None and parent.type == "parenthesized_expression":
        callee, parent = parent, parent.parent
    return parent is not None and parent.type == "call_expression" and parent.child_by_field_name("function") == callee


def invoked_function(expression: Node) -> Node | None:
    """Return the function of an immediately-invoked expression, in either paren placement."""
    expression = unwrap_parens(expression)
    if expression.type != "call_expression":
        return None
    callee = expression.child_by_field_name("function")
    if callee is None:
        return None
    callee = unwrap_parens(callee)
    return callee if callee.type in FUNCTION_EXPRESSION_TYPES else None


def _block_body(function: Node) -> Node | None:
    body = function.child_by_field_name("body")
    return body if body is not None and body.type == "statement_block" else None


def iife_body(declaration: Node) -> Node | None:
    """Return the body block of the IIFE wrapping ``declaration``, if there is one.

    ``declaration`` may be the class's inner function declaration, or the outer
    ``var X = (function () {...}())`` declaration itself.
    """
    if declaration.type in VARIABLE_DECLARATION_TYPES:
        declarators = [c for c in significant_children(declaration) if c.type == "variable_declarator"]
        if declarators:
            declaration = declarators[0]
    if declaration.type == "variable_declarator":
        value = declaration.child_by_field_name("value")
        function = invoked_function(value) if value is not None else None
        if function is not None:
            return _block_body(function)

    current = declaration.parent
    while current is not None:
        if current.type in FUNCTION_EXPRESSION_TYPES and is_invoked(current):
            body = _block_body(current)
            if body is not None:
                return body
        current = current.parent
    return None


def last_return_statement(block: Node) -> Node | None:
    returns = [child for child in block.named_children if child.type == "return_statement"]
    return returns[-1] if returns else None


def _adjacent_token(node: Node, forward: bool) -> Node | None:
    sibling = node.next_sibling if forward else node.prev_sibling
    while sibling is not None and sibling.type in TRIVIA_TYPES:
        sibling = sibling.next_sibling if forward else sibling.prev_sibling
    return sibling


def following_comma(node: Node) -> Node | None:
    token = _adjacent_token(node, forward=True)
    return token if token is not None and token.type == "," else None


def preceding_comma(node: Node) -> Node | None:
    token = _adjacent_token(node, forward=False)
    return token if token is not None and token.type == "," else None
