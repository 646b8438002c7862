from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vbump.services.release.semver import SemanticVersion


class ReleaseClass(Enum):
    """Which version component a release bumps."""

    MAJOR = "MAJOR"
    MINOR = "MINOR"
    PATCH = "PATCH"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class UpgradeOutcome:
    """What one upgrader wrote to disk."""

    path: Path
    previous: str
    current: str
    lines_changed: int


@dataclass(frozen=True, slots=True)
class DescriptorOutcome:
    version: UpgradeOutcome
    previous_build_counter: int
    build_counter: int


@dataclass(frozen=True, slots=True)
class ReleasePlan:
    """Everything computed before any file or branch is touched."""

    release_class: ReleaseClass
    current_version: SemanticVersion
    next_version: SemanticVersion
    current_build_counter: int
    next_build_counter: int
    base_branch: str
    manifest_path: Path
    descriptor_path: Path

    @property
    def branch(self) -> str:
        return release_branch_name(self.next_version)


@dataclass(frozen=True, slots=True)
class ReleaseOutcome:
    plan: ReleasePlan
    branch_created: bool
    written: tuple[Path, ...]
    dry_run: bool


def release_branch_name(version: SemanticVersion) -> str:
    return f"release/{version.format()}"
