"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

import typer

from vbump.core.result import Err, Result
from vbump.output.errors import bump_error_exit_code, print_bump_error
from vbump.services.release.errors import BumpError

if TYPE_CHECKING:
    from vbump.cli.context import CLIContext


T = TypeVar("T")


def exit_on_error[T](result: Result[T, BumpError], ctx: CLIContext) -> None:
    """Print the error and exit with its mapped code if result is Err.

    Replaces the common pattern:
        match result:
            case Err(e):
                print_bump_error(e, ctx.console)
                raise typer.Exit(code=bump_error_exit_code(e))
            case Ok(_):
                pass
    """
    if isinstance(result, Err):
        print_bump_error(result.error, ctx.console)
        raise typer.Exit(code=bump_error_exit_code(result.error))
