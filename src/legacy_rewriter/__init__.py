from legacy_rewriter.core.analysis import analyze_decorations, analyze_switch_markers, decorators_to_remove
from legacy_rewriter.core.ast import load_module, parse_module
from legacy_rewriter.core.config import RewriteConfig, load_config
from legacy_rewriter.core.formatter import CompiledClassError, Esm5RenderingFormatter
from legacy_rewriter.core.patch import EditPriority, PatchBuffer
from legacy_rewriter.core.rewrite import rewrite_module
from legacy_rewriter.models import (
    CompiledClass,
    Decorator,
    ExportRequest,
    ImportRequest,
    RewriteResult,
    SourceModule,
    SwitchableDeclaration,
)

__all__ = [
    "CompiledClass",
    "CompiledClassError",
    "Decorator",
    "EditPriority",
    "Esm5RenderingFormatter",
    "ExportRequest",
    "ImportRequest",
    "PatchBuffer",
    "RewriteConfig",
    "RewriteResult",
    "SourceModule",
    "SwitchableDeclaration",
    "analyze_decorations",
    "analyze_switch_markers",
    "decorators_to_remove",
    "load_config",
    "load_module",
    "parse_module",
    "rewrite_module",
]
