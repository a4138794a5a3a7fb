from pathlib import Path, PurePath
from typing import cast

from tree_sitter import Node
from tree_sitter_language_pack import SupportedLanguage, get_parser

from legacy_rewriter.core.languages import resolve_language
from legacy_rewriter.models import SourceModule


def parse_module(source: str | bytes, path: str, language: str | None = None) -> SourceModule:
    """Parse module text into an immutable ``SourceModule``.

    ``path`` identifies the module in diagnostics and export specifiers; it is
    normalized to POSIX separators but never read from disk.
    """
    source_bytes = source.encode("utf-8") if isinstance(source, str) else source
    resolved_language = resolve_language(language, Path(path))
    parser = get_parser(cast(SupportedLanguage, resolved_language))
    tree = parser.parse(source_bytes)
    root: Node = tree.root_node
    return SourceModule(path=PurePath(path).as_posix(), source=source_bytes, root=root)


def load_module(path: str, language: str | None = None) -> SourceModule:
    file_path = Path(path)
    resolved_language = resolve_language(language, file_path)

    try:
        source_bytes = file_path.read_bytes()
    except FileNotFoundError:
        raise FileNotFoundError(f"File not found: {path}") from None

    return parse_module(source_bytes, str(file_path.resolve()), resolved_language)
