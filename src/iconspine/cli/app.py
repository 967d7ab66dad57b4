"""
Entry point for the ``iconspine`` command.

Subcommands live in :mod:`iconspine.cli.library`; this module only wires them
onto the Typer app and handles ``--version``.
"""

from __future__ import annotations

import typer

from iconspine.cli.library import export_library, inspect_registry

app = typer.Typer(
    name="iconspine",
    help="iconspine: turn an SVG icon set into a recolored SVG/PNG library.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _print_version(requested: bool) -> None:
    if not requested:
        return
    from iconspine import __version__

    typer.echo(f"iconspine {__version__}")
    raise typer.Exit()


@app.callback()
def main(
    show_version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Print the iconspine version and exit.",
        callback=_print_version,
        is_eager=True,
    ),
) -> None:
    """iconspine CLI: export and inspect icon libraries."""


app.command("export")(export_library)
app.command("inspect")(inspect_registry)
