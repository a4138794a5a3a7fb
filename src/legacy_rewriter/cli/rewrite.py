from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from legacy_rewriter.cli.common import configure_logging
from legacy_rewriter.core.ast import load_module
from legacy_rewriter.core.config import load_config
from legacy_rewriter.core.rewrite import rewrite_module
from legacy_rewriter.models import ImportRequest

console = Console(stderr=True)


def rewrite(
    path: Annotated[str, typer.Argument(help="Path to a compiled ES5 module.")],
    decorator: Annotated[
        list[str] | None, typer.Option("--decorator", "-d", help="Decorator name to strip (repeatable; default all).")
    ] = None,
    import_: Annotated[
        list[str] | None, typer.Option("--import", "-i", help="Module specifier to namespace-import (repeatable).")
    ] = None,
    switch_markers: Annotated[bool, typer.Option(help="Flip __PRE_R3__ switch markers.")] = True,
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write the result here instead of stdout.")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log every edit.")] = False,
) -> None:
    """Strip legacy decorators and flip switch markers in one module."""
    configure_logging(verbose)
    config = load_config()
    imports = [ImportRequest(specifier=s, qualifier=f"{config.import_prefix}{n}") for n, s in enumerate(import_ or [])]

    try:
        module = load_module(path)
        result = rewrite_module(
            module,
            decorator_names=set(decorator) if decorator else None,
            imports=imports,
            switch_markers=switch_markers,
            config=config,
        )
    except (FileNotFoundError, ValueError) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from None

    if output is None:
        typer.echo(result.text, nl=False)
    else:
        output.write_text(result.text, encoding="utf-8")
        console.print(f"[green]Wrote[/green] {output}")
    console.print(
        f"[green]Removed[/green] {result.removed_decorators} decorator(s), "
        f"[green]flipped[/green] {result.switched_declarations} switch marker(s), "
        f"[green]added[/green] {result.added_imports} import(s)"
    )

