from pydantic import BaseModel, ConfigDict
from tree_sitter import Node


class ImportRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    specifier: str
    qualifier: str


class ExportRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    from_path: str
    identifier: str
    dts_from_path: str | None = None
    alias: str | None = None  # only meaningful to typings renderers


class Decorator(BaseModel):
    """A single decorator entry and the container (array or argument list) holding it."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    node: Node
    container: Node


class CompiledClass(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    declaration: Node
    decorators: list[Decorator] | None = None


class SwitchableDeclaration(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    declaration: Node
    initializer: Node

    @property
    def name(self) -> str:
        name_node = self.declaration.child_by_field_name("name")
        return _node_text(name_node) if name_node is not None else ""

    @property
    def initializer_name(self) -> str:
        return _node_text(self.initializer)


class SourceModule(BaseModel):
    """An immutable parsed module. Offsets are UTF-8 byte offsets into ``source``."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    path: str
    source: bytes
    root: Node

    @property
    def text(self) -> str:
        return self.source.decode("utf-8")


class DecorationAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    module: SourceModule
    compiled_classes: list[CompiledClass]


class SwitchMarkerAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    module: SourceModule
    declarations: list[SwitchableDeclaration]


class RewriteResult(BaseModel):
    path: str
    text: str
    removed_decorators: int = 0
    switched_declarations: int = 0
    added_imports: int = 0
    added_definitions: list[str] = []


def _node_text(node: Node) -> str:
    return (node.text or b"").decode("utf-8")
