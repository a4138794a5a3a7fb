import logging
from collections.abc import Collection, Mapping, Sequence

from legacy_rewriter.core.analysis import analyze_decorations, analyze_switch_markers, decorators_to_remove
from legacy_rewriter.core.config import RewriteConfig
from legacy_rewriter.core.formatter import Esm5RenderingFormatter
from legacy_rewriter.core.patch import PatchBuffer
from legacy_rewriter.models import ExportRequest, ImportRequest, RewriteResult, SourceModule

logger = logging.getLogger(__name__)


def rewrite_module(
    module: SourceModule,
    *,
    decorator_names: Collection[str] | None = None,
    imports: Sequence[ImportRequest] = (),
    exports: Sequence[ExportRequest] = (),
    constants: str = "",
    definitions: Mapping[str, str] | None = None,
    switch_markers: bool = True,
    config: RewriteConfig | None = None,
) -> RewriteResult:
    """Run analysis over ``module`` and apply every requested edit through one patch buffer.

    ``decorator_names`` limits which decorators are stripped (all when None).
    ``definitions`` maps compiled class names to the text injected into their
    IIFE. A ``CompiledClassError`` from injection propagates to the caller.
    """
    config = config or RewriteConfig()
    formatter = Esm5RenderingFormatter(config)
    output = PatchBuffer(module.source)

    compiled_classes = analyze_decorations(module).compiled_classes
    to_remove = decorators_to_remove(compiled_classes, decorator_names)
    formatter.remove_decorators(output, to_remove)

    added_definitions: list[str] = []
    for compiled_class in compiled_classes:
        text = (definitions or {}).get(compiled_class.name)
        if text:
            formatter.add_definitions(output, compiled_class, text, module)
            added_definitions.append(compiled_class.name)

    switched = 0
    if switch_markers:
        declarations = analyze_switch_markers(module, config).declarations
        switched = formatter.rewrite_switchable_declarations(output, declarations)

    formatter.add_imports(output, imports, module)
    formatter.add_constants(output, constants, module)
    formatter.add_exports(output, module, exports)

    removed = sum(len(nodes) for nodes in to_remove.values())
    logger.info(
        "Rewrote %s: %d decorator(s) removed, %d switch marker(s) flipped, %d import(s) added",
        module.path,
        removed,
        switched,
        len(imports),
    )
    return RewriteResult(
        path=module.path,
        text=output.materialize(),
        removed_decorators=removed,
        switched_declarations=switched,
        added_imports=len(imports),
        added_definitions=added_definitions,
    )
