import typer

from legacy_rewriter.cli.inspect import inspect
from legacy_rewriter.cli.rewrite import rewrite

app = typer.Typer(
    name="legacy-rewriter",
    help="Legacy Rewriter CLI: migrate decorator metadata out of compiled ES5 modules.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("inspect")(inspect)
app.command("rewrite")(rewrite)


def main() -> None:
    app()
