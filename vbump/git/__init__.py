"""Git operations used to cut release branches.

Usage:
    from vbump.git import Repository

    repo = Repository(Path("."))
    if repo.branch_exists("release/1.2.4"):
        ...
"""

from vbump.git.repository import (
    GitError,
    Repository,
)

__all__ = [
    "GitError",
    "Repository",
]
