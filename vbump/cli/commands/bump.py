from __future__ import annotations

from pathlib import Path

import typer

from vbump import __version__
from vbump.cli.commands._helpers import exit_on_error
from vbump.cli.context import build_context
from vbump.core.config import DEFAULT_CONFIG_NAME
from vbump.services.release.model import ReleaseClass
from vbump.services.release.service import ReleaseService


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


def bump(
    release_class: ReleaseClass = typer.Argument(
        ...,
        case_sensitive=False,
        help="Component to bump: MAJOR, MINOR or PATCH.",
    ),
    config: Path = typer.Option(
        Path(DEFAULT_CONFIG_NAME),
        "--config",
        "-c",
        help="Release config (JSON or TOML) naming the base branch and version files.",
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print actions without mutating"),
    no_branch: bool = typer.Option(
        False,
        "--no-branch",
        help="Rewrite the version files without creating the release branch.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Bump the app version, then cut release/<version> from the base branch."""
    ctx = build_context(config)

    service = ReleaseService(
        config=ctx.config,
        console=ctx.console,
        repository=ctx.repository,
    )
    outcome = service.run(release_class, dry_run=dry_run, create_branch=not no_branch)
    exit_on_error(outcome, ctx)
