"""Error values for the version bump flow.

Each error is a frozen dataclass carried inside ``Err``; ``message`` and
``hint`` are what the CLI prints.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class MalformedVersionError:
    """Text is not a MAJOR.MINOR.PATCH triple of non-negative integers."""

    text: str
    reason: str
    path: Path | None = None

    @property
    def message(self) -> str:
        where = f" in {self.path}" if self.path is not None else ""
        return f"malformed version '{self.text}'{where}: {self.reason}"

    @property
    def hint(self) -> str | None:
        return "Expected MAJOR.MINOR.PATCH, e.g. 1.2.3"


@dataclass(frozen=True, slots=True)
class FieldNotFoundError:
    path: Path
    marker: str

    @property
    def message(self) -> str:
        return f"no line containing '{self.marker.strip()}' in {self.path}"

    @property
    def hint(self) -> str | None:
        return None


@dataclass(frozen=True, slots=True)
class ParseError:
    """The value token on a marker line is not what the field expects."""

    path: Path
    marker: str
    token: str

    @property
    def message(self) -> str:
        return f"invalid value '{self.token}' for '{self.marker.strip()}' in {self.path}"

    @property
    def hint(self) -> str | None:
        return "Expected a non-negative integer"


@dataclass(frozen=True, slots=True)
class VersionOverflowError:
    field: str
    value: int
    limit: int

    @property
    def message(self) -> str:
        return f"{self.field} would overflow: {self.value} + 1 exceeds {self.limit}"

    @property
    def hint(self) -> str | None:
        return None


@dataclass(frozen=True, slots=True)
class MissingFileError:
    path: Path

    @property
    def message(self) -> str:
        return f"file not found: {self.path}"

    @property
    def hint(self) -> str | None:
        return "Check the paths in the release config"


@dataclass(frozen=True, slots=True)
class FileIOError:
    path: Path
    operation: str
    detail: str

    @property
    def message(self) -> str:
        return f"failed to {self.operation} {self.path}: {self.detail}"

    @property
    def hint(self) -> str | None:
        return None


@dataclass(frozen=True, slots=True)
class UpgraderConsumedError:
    """upgrade() was called twice on the same upgrader."""

    path: Path

    @property
    def message(self) -> str:
        return f"upgrader for {self.path} was already used"

    @property
    def hint(self) -> str | None:
        return "Load a fresh upgrader to read the file's new state"


@dataclass(frozen=True, slots=True)
class BranchCreationError:
    """git refused to cut the release branch.

    returncode is git's own exit status; None when the branch was refused
    before git ran.
    """

    branch: str
    detail: str
    returncode: int | None = None

    @property
    def message(self) -> str:
        return f"failed to create branch {self.branch}"

    @property
    def hint(self) -> str | None:
        return self.detail or None


BumpError = (
    MalformedVersionError
    | FieldNotFoundError
    | ParseError
    | VersionOverflowError
    | MissingFileError
    | FileIOError
    | UpgraderConsumedError
    | BranchCreationError
)


def io_error(
    path: Path, operation: str, exc: OSError | UnicodeDecodeError
) -> MissingFileError | FileIOError:
    """Convert an exception raised at the filesystem boundary."""
    if isinstance(exc, UnicodeDecodeError):
        return FileIOError(path=path, operation="decode", detail=str(exc))
    if isinstance(exc, FileNotFoundError):
        return MissingFileError(path=path)
    return FileIOError(path=path, operation=operation, detail=exc.strerror or str(exc))
