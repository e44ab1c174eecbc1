from __future__ import annotations

import typer

from pubseq import __version__
from pubseq.cli.commands.plan import plan
from pubseq.cli.commands.publish import publish
from pubseq.cli.commands.stage import stage


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(publish)
app.command()(stage)
app.command()(plan)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", callback=_print_version, is_eager=True
    ),
) -> None:
    del version


def main() -> None:
    app()
