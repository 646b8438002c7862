"""Error presentation utilities.

Centralized error formatting and exit code mapping for the release flow.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from vbump.core.errors import ErrorCode
from vbump.output.console import Style
from vbump.platform.files import temp_path_for
from vbump.services.release.errors import (
    BranchCreationError,
    BumpError,
    FieldNotFoundError,
    FileIOError,
    MalformedVersionError,
    MissingFileError,
    ParseError,
    UpgraderConsumedError,
    VersionOverflowError,
)

if TYPE_CHECKING:
    from vbump.output.console import ConsoleProtocol

__all__ = ["print_bump_error", "bump_error_exit_code"]


def print_bump_error(error: BumpError, console: ConsoleProtocol) -> None:
    """Print a release error, naming the file, field or step that failed."""
    console.error(error.message)
    match error:
        case FileIOError(path=path, operation="rewrite") if temp_path_for(path).exists():
            console.print(f"staged content left at {temp_path_for(path)}", Style.DIM)
        case _:
            pass
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def bump_error_exit_code(error: BumpError) -> int:
    """Get exit code for a release error."""
    match error:
        case BranchCreationError(returncode=int(code)) if 0 < code < 256:
            return code
        case BranchCreationError():
            return int(ErrorCode.VCS_ERROR)
        case MalformedVersionError() | FieldNotFoundError() | ParseError():
            return int(ErrorCode.FORMAT_ERROR)
        case VersionOverflowError() | UpgraderConsumedError():
            return int(ErrorCode.FORMAT_ERROR)
        case MissingFileError() | FileIOError():
            return int(ErrorCode.IO_ERROR)
    # Fallback for exhaustiveness
    return int(ErrorCode.USER_ERROR)
