"""Edits that migrate ES5 modules emitted by the legacy decorator compiler.

Every method records edits on a caller-owned ``PatchBuffer``; nothing here
reads back previous edits, so the methods can be called in any order before
the buffer is materialized.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from tree_sitter import Node

from legacy_rewriter.core.config import RewriteConfig
from legacy_rewriter.core.nodes import (
    find_statement,
    following_comma,
    full_start,
    iife_body,
    last_return_statement,
    preceding_comma,
    significant_children,
)
from legacy_rewriter.core.patch import EditPriority, PatchBuffer
from legacy_rewriter.core.paths import is_same_module, relative_module_specifier
from legacy_rewriter.models import CompiledClass, ExportRequest, ImportRequest, SourceModule, SwitchableDeclaration

logger = logging.getLogger(__name__)

IMPORTS_ANCHOR = "end-of-imports"


class CompiledClassError(ValueError):
    """Raised when a compiled class is not wrapped the way definitions injection expects."""

    def __init__(self, message: str, class_name: str, path: str) -> None:
        super().__init__(message)
        self.class_name = class_name
        self.path = path


def find_end_of_imports(module: SourceModule) -> int:
    """Start of the first statement after the leading imports, or the end of the module."""
    for statement in significant_children(module.root):
        if statement.type != "import_statement":
            return statement.start_byte
    return len(module.source)


class Esm5RenderingFormatter:
    def __init__(self, config: RewriteConfig | None = None) -> None:
        self.config = config or RewriteConfig()

    def add_imports(self, output: PatchBuffer, imports: Sequence[ImportRequest], module: SourceModule) -> None:
        """Add namespace imports directly after the module's imports and any previously added ones."""
        if not imports:
            return
        anchor = output.anchor(IMPORTS_ANCHOR, lambda: find_end_of_imports(module))
        statements = [f"import * as {i.qualifier} from '{i.specifier}';" for i in imports]
        if _ends_without_newline(output, anchor):
            rendered = "".join(f"\n{statement}" for statement in statements)
        else:
            rendered = "".join(f"{statement}\n" for statement in statements)
        output.insert_after(anchor, rendered, EditPriority.IMPORTS)
        logger.debug("Added %d import(s) to %s at offset %d", len(imports), module.path, anchor)

    def add_exports(self, output: PatchBuffer, module: SourceModule, exports: Sequence[ExportRequest]) -> None:
        """Append one export statement per request at the end of the module."""
        end = len(output.source)
        for export in exports:
            if is_same_module(export.from_path, module.path):
                from_clause = ""
            else:
                from_clause = f" from '{relative_module_specifier(module.path, export.from_path)}'"
            output.insert_after(end, f"\nexport {{{export.identifier}}}{from_clause};")
        logger.debug("Appended %d export(s) to %s", len(exports), module.path)

    def add_constants(self, output: PatchBuffer, constants: str, module: SourceModule) -> None:
        """Insert a block of constant statements after the module's original imports."""
        if not constants:
            return
        anchor = output.anchor(IMPORTS_ANCHOR, lambda: find_end_of_imports(module))
        if _ends_without_newline(output, anchor):
            rendered = f"\n\n{constants}"
        else:
            rendered = f"\n{constants}\n"
        output.insert_before(anchor, rendered, EditPriority.CONSTANTS)
        logger.debug("Added constants to %s at offset %d", module.path, anchor)

    def add_definitions(
        self, output: PatchBuffer, compiled_class: CompiledClass, definitions: str, module: SourceModule
    ) -> None:
        """Insert ``definitions`` on a new line right before the return statement of the class IIFE.

        Raises ``CompiledClassError`` when the class is not wrapped in an IIFE or
        the IIFE has no return statement.
        """
        name = compiled_class.name
        body = iife_body(compiled_class.declaration)
        if body is None:
            raise CompiledClassError(
                f"Compiled class declaration is not inside an IIFE: {name} in {module.path}", name, module.path
            )
        return_statement = last_return_statement(body)
        if return_statement is None:
            raise CompiledClassError(
                f"Compiled class wrapper IIFE does not have a return statement: {name} in {module.path}",
                name,
                module.path,
            )
        output.insert_after(full_start(return_statement), f"\n{definitions}", EditPriority.DEFINITIONS)
        logger.debug("Added definitions for %s in %s", name, module.path)

    def remove_decorators(self, output: PatchBuffer, decorators_to_remove: Mapping[Node, Sequence[Node]]) -> None:
        """Remove decorator entries, or the whole decorators statement once no entry would remain."""
        for container, nodes in decorators_to_remove.items():
            if not nodes:
                continue
            removed = {_span(node) for node in nodes}
            retained = [entry for entry in significant_children(container) if _span(entry) not in removed]

            if not retained:
                statement = find_statement(container)
                if statement is None:
                    logger.debug("No statement encloses decorator container at offset %d", container.start_byte)
                    continue
                output.remove_range(full_start(statement), statement.end_byte)
                logger.debug("Removed decorators statement at offset %d", statement.start_byte)
                continue

            last_retained_end = max(entry.end_byte for entry in retained)
            for node in sorted(nodes, key=lambda n: n.start_byte):
                if node.start_byte < last_retained_end:
                    # up to the next token, so the following entry keeps its position
                    comma = following_comma(node)
                    if comma is None:
                        output.remove_range(full_start(node), node.end_byte)
                    else:
                        after = comma.next_sibling
                        output.remove_range(node.start_byte, after.start_byte if after is not None else comma.end_byte)
                else:
                    comma = preceding_comma(node)
                    output.remove_range(comma.start_byte if comma is not None else full_start(node), node.end_byte)
            logger.debug("Removed %d of %d decorator(s)", len(nodes), len(nodes) + len(retained))

    def rewrite_switchable_declarations(
        self, output: PatchBuffer, declarations: Sequence[SwitchableDeclaration]
    ) -> int:
        """Point ``x = foo__PRE_R3__`` style initializers at their ``__POST_R3__`` counterpart.

        Returns the number of declarations rewritten.
        """
        rewritten = 0
        for declaration in declarations:
            replacement = switched_initializer(declaration.initializer_name, self.config)
            if replacement is None:
                logger.debug("Skipping switchable declaration %s = %s", declaration.name, declaration.initializer_name)
                continue
            initializer = declaration.initializer
            output.overwrite(initializer.start_byte, initializer.end_byte, replacement)
            rewritten += 1
        return rewritten


def switched_initializer(initializer_name: str, config: RewriteConfig) -> str | None:
    """Return the post-marker identifier for ``initializer_name``, or None when the pre marker is not its suffix."""
    stem = initializer_name.removesuffix(config.pre_marker)
    if not stem or stem == initializer_name:
        return None
    return f"{stem}{config.post_marker}"


def _span(node: Node) -> tuple[int, int]:
    return node.start_byte, node.end_byte


def _ends_without_newline(output: PatchBuffer, anchor: int) -> bool:
    source = output.source
    return anchor == len(source) and bool(source) and not source.endswith(b"\n")
