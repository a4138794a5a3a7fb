"""Discovery of compiled classes and switch markers in ES5 modules.

Two decorator encodings are recognized inside a class IIFE::

    A.decorators = [{ type: Directive, args: [...] }];
    A = A_1 = tslib_1.__decorate([Directive({...})], A);

Both are reported through the same ``Decorator`` shape, with the array
literal as the container.
"""

import logging
from collections.abc import Callable, Collection, Iterator, Sequence

from tree_sitter import Node

from legacy_rewriter.core.config import RewriteConfig
from legacy_rewriter.core.nodes import invoked_function, node_text, significant_children, unwrap_parens
from legacy_rewriter.models import (
    CompiledClass,
    DecorationAnalysis,
    Decorator,
    SourceModule,
    SwitchableDeclaration,
    SwitchMarkerAnalysis,
)

logger = logging.getLogger(__name__)

DECORATE_HELPER = "__decorate"


def iter_nodes(root: Node, node_type: str) -> Iterator[Node]:
    """Yield every descendant of ``root`` of the given type, in document order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == node_type:
            yield node
        stack.extend(reversed(node.children))


def analyze_decorations(module: SourceModule) -> DecorationAnalysis:
    compiled_classes: list[CompiledClass] = []
    for declarator in iter_nodes(module.root, "variable_declarator"):
        name_node = declarator.child_by_field_name("name")
        value = declarator.child_by_field_name("value")
        if name_node is None or name_node.type != "identifier" or value is None:
            continue
        function = invoked_function(value)
        body = function.child_by_field_name("body") if function is not None else None
        if body is None or body.type != "statement_block":
            continue

        name = node_text(name_node)
        declaration = _inner_declaration(body, name)
        decorators = _decorators_in(body, name)
        if declaration is None or not decorators:
            continue
        compiled_classes.append(CompiledClass(name=name, declaration=declaration, decorators=decorators))
        logger.debug("Found compiled class %s with %d decorator(s) in %s", name, len(decorators), module.path)

    return DecorationAnalysis(module=module, compiled_classes=compiled_classes)


def analyze_switch_markers(module: SourceModule, config: RewriteConfig | None = None) -> SwitchMarkerAnalysis:
    """Collect declarations initialized with an identifier mentioning the pre-R3 marker.

    This is a superset: declarations that do not follow the ``name + marker``
    convention are left for the rewriter to skip.
    """
    marker = (config or RewriteConfig()).pre_marker
    declarations = []
    for declarator in iter_nodes(module.root, "variable_declarator"):
        value = declarator.child_by_field_name("value")
        if value is not None and value.type == "identifier" and marker in node_text(value):
            declarations.append(SwitchableDeclaration(declaration=declarator, initializer=value))
    return SwitchMarkerAnalysis(module=module, declarations=declarations)


def decorators_to_remove(
    compiled_classes: Sequence[CompiledClass], names: Collection[str] | None = None
) -> dict[Node, list[Node]]:
    """Group the decorator nodes to remove by their container."""
    grouped: dict[Node, list[Node]] = {}
    for compiled_class in compiled_classes:
        for decorator in compiled_class.decorators or []:
            if names is None or decorator.name in names:
                grouped.setdefault(decorator.container, []).append(decorator.node)
    return grouped


def _inner_declaration(body: Node, name: str) -> Node | None:
    for statement in significant_children(body):
        if statement.type == "function_declaration":
            name_node = statement.child_by_field_name("name")
            if name_node is not None and node_text(name_node) == name:
                return statement
    return None


def _decorators_in(body: Node, name: str) -> list[Decorator]:
    for statement in significant_children(body):
        if statement.type != "expression_statement":
            continue
        expressions = significant_children(statement)
        if not expressions or expressions[0].type != "assignment_expression":
            continue
        container = _static_decorators_array(expressions[0], name)
        if container is not None:
            return _collect(container, _type_property_name)
        container = _decorate_helper_array(expressions[0], name)
        if container is not None:
            return _collect(container, _callee_name)
    return []


def _static_decorators_array(assignment: Node, name: str) -> Node | None:
    """``Name.decorators = [...]``"""
    left = assignment.child_by_field_name("left")
    right = assignment.child_by_field_name("right")
    if left is None or right is None or left.type != "member_expression" or right.type != "array":
        return None
    target = left.child_by_field_name("object")
    prop = left.child_by_field_name("property")
    if target is None or prop is None:
        return None
    return right if node_text(target) == name and node_text(prop) == "decorators" else None


def _decorate_helper_array(assignment: Node, name: str) -> Node | None:
    """``Name = Name_1 = ns.__decorate([...], Name)``"""
    left = assignment.child_by_field_name("left")
    if left is None or node_text(left) != name:
        return None
    right = assignment.child_by_field_name("right")
    while right is not None and right.type == "assignment_expression":
        right = right.child_by_field_name("right")
    if right is None:
        return None
    call = unwrap_parens(right)
    if call.type != "call_expression" or _callee_name(call) != DECORATE_HELPER:
        return None
    arguments = call.child_by_field_name("arguments")
    args = significant_children(arguments) if arguments is not None else []
    return args[0] if args and args[0].type == "array" else None


def _collect(container: Node, naming: Callable[[Node], str | None]) -> list[Decorator]:
    decorators = []
    for entry in significant_children(container):
        name = naming(entry)
        if name is None or name.startswith("__"):
            # tslib metadata helpers such as __metadata and __param
            continue
        decorators.append(Decorator(name=name, node=entry, container=container))
    return decorators


def _type_property_name(entry: Node) -> str | None:
    if entry.type != "object":
        return None
    for pair in significant_children(entry):
        key = pair.child_by_field_name("key") if pair.type == "pair" else None
        if key is not None and node_text(key).strip("'\"") == "type":
            value = pair.child_by_field_name("value")
            return _identifier_name(value) if value is not None else None
    return None


def _callee_name(entry: Node) -> str | None:
    if entry.type == "call_expression":
        callee = entry.child_by_field_name("function")
        return _identifier_name(callee) if callee is not None else None
    return _identifier_name(entry)


def _identifier_name(node: Node) -> str | None:
    if node.type == "identifier":
        return node_text(node)
    if node.type == "member_expression":
        prop = node.child_by_field_name("property")
        return node_text(prop) if prop is not None else None
    return None
