"""Git repository abstraction.

Only what the release flow needs: checking whether a branch exists and
cutting a new branch from a base.

Usage:
    repo = Repository(Path("."))

    match repo.create_branch("release/1.2.4", start_point="develop"):
        case Ok(_):
            print("on release/1.2.4")
        case Err(e):
            print(f"checkout failed: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from vbump.core.result import Err, Ok, Result
from vbump.platform.process import ProcessError
from vbump.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0

__all__ = [
    "GitError",
    "Repository",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """A single git working tree.

    Attributes:
        path: Path to the repository root
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def branch_exists(self, name: str) -> bool:
        """True if a local branch with this name exists."""
        result = self._run(["rev-parse", "--verify", "--quiet", f"refs/heads/{name}"])
        return isinstance(result, Ok)

    def create_branch(self, name: str, *, start_point: str) -> Result[str, GitError]:
        """Create branch ``name`` from ``start_point`` and check it out.

        Runs ``git checkout -b <name> <start_point>``.

        Returns:
            Ok(output) on success
            Err(GitError) on failure (unknown base, branch exists, dirty tree...)
        """
        result = self._run(["checkout", "-b", name, start_point])
        match result:
            case Err(e):
                return Err(
                    GitError(
                        command=f"checkout -b {name} {start_point}",
                        message=e.stderr.strip() or e.stdout.strip() or "checkout failed",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                return Ok(stdout.strip())

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        return run_process(
            ["git", "-C", str(self.path), *args],
            cwd=self.path,
            timeout=_GIT_TIMEOUT_SECONDS,
        )
