from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from vbump.core.config import Config, load_config
from vbump.core.errors import ErrorCode
from vbump.core.result import Err
from vbump.git.repository import Repository
from vbump.output.console import ConsoleProtocol, RichConsole, Style


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    console: ConsoleProtocol
    repository: Repository


def build_context(config_path: Path) -> CLIContext:
    console = RichConsole()
    console.print(f"reading config: {config_path}", Style.DIM)

    config_result = load_config(config_path)
    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    # The config file sits at the project root; git runs from there.
    root = config_path.expanduser().resolve().parent
    return CLIContext(
        config=config_result.value,
        console=console,
        repository=Repository(root),
    )
