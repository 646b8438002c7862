"""Exit codes for the vbump CLI.

The numeric values are the process exit status and should remain stable:
- 0: Success
- 1: User error (bad config, bad arguments)
- 2: Version control error (git missing, release branch already exists);
     a failed `git checkout -b` exits with git's own status instead
- 3: Format error (malformed version, missing field, overflow)
- 5: I/O error (file not found, permission denied, rename failed)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    VCS_ERROR = 2
    FORMAT_ERROR = 3
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")
