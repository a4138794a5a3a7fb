from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from legacy_rewriter.cli.common import configure_logging
from legacy_rewriter.core.analysis import analyze_decorations, analyze_switch_markers
from legacy_rewriter.core.ast import load_module
from legacy_rewriter.core.config import load_config
from legacy_rewriter.core.formatter import switched_initializer
from legacy_rewriter.core.nodes import iife_body, last_return_statement

console = Console()


def inspect(
    path: Annotated[str, typer.Argument(help="Path to a compiled ES5 module.")],
) -> None:
    """List compiled classes, their decorators and switch markers."""
    configure_logging()
    try:
        module = load_module(path)
    except (FileNotFoundError, ValueError) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from None

    classes = Table(title=f"Compiled classes in {module.path}")
    for header in ("class", "decorators", "wrapper"):
        classes.add_column(header)
    compiled_classes = analyze_decorations(module).compiled_classes
    for compiled_class in compiled_classes:
        body = iife_body(compiled_class.declaration)
        if body is None:
            wrapper = "[red]no IIFE[/red]"
        elif last_return_statement(body) is None:
            wrapper = "[yellow]IIFE without return[/yellow]"
        else:
            wrapper = "IIFE"
        names = ", ".join(d.name for d in compiled_class.decorators or [])
        classes.add_row(compiled_class.name, names, wrapper)
    console.print(classes)
    console.print(f"({len(compiled_classes)} rows)")

    config = load_config()
    markers = Table(title="Switch markers")
    for header in ("declaration", "initializer", "switchable"):
        markers.add_column(header)
    declarations = analyze_switch_markers(module, config).declarations
    for declaration in declarations:
        switchable = switched_initializer(declaration.initializer_name, config) is not None
        markers.add_row(declaration.name, declaration.initializer_name, "yes" if switchable else "no")
    console.print(markers)
    console.print(f"({len(declarations)} rows)")
