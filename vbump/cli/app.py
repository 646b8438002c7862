from __future__ import annotations

import typer

from vbump.cli.commands.bump import bump


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Single command: `vbump PATCH`
app.command()(bump)


def main() -> None:
    app()
