"""Version fields of the native build descriptor (Android build.gradle).

The descriptor carries a ``versionName "X.Y.Z"`` line and a
``versionCode N`` line. The version name is never read back as the source
of truth: the current version is handed in by the caller (from the
manifest), and only the build counter is parsed from this file.
"""

from __future__ import annotations

from pathlib import Path

from vbump.core.result import Err, Ok, Result
from vbump.platform.files import read_lines
from vbump.services.release.errors import (
    BumpError,
    FieldNotFoundError,
    ParseError,
    UpgraderConsumedError,
    VersionOverflowError,
    io_error,
)
from vbump.services.release.model import DescriptorOutcome, ReleaseClass, UpgradeOutcome
from vbump.services.release.rewrite import FileRewriteJob, LineRule
from vbump.services.release.semver import SemanticVersion

VERSION_NAME_MARKER = "versionName"
# Trailing space keeps identifiers like versionCodeOffset from matching.
BUILD_COUNTER_MARKER = "versionCode "

# Largest versionCode the Android platform accepts.
MAX_BUILD_COUNTER = 2_100_000_000

_QUOTES = "\"'"


class BuildDescriptorUpgrader:
    """One-shot upgrader for the descriptor's version name and build counter.

    Build it with ``load``; after ``upgrade`` the instance is consumed and
    its in-memory values no longer describe the file.
    """

    def __init__(
        self,
        *,
        path: Path,
        current_version: SemanticVersion,
        current_build_counter: int,
        counter_token: str,
        declared_version: str | None,
    ) -> None:
        self._path = path
        self._current_version = current_version
        self._current_build_counter = current_build_counter
        self._counter_token = counter_token
        self._declared_version = declared_version
        self._consumed = False

    @classmethod
    def load(
        cls, path: Path, current_version: SemanticVersion
    ) -> Result[BuildDescriptorUpgrader, BumpError]:
        """Read the build counter from path.

        The last line containing the build-counter marker wins; its last
        whitespace-delimited token must be a non-negative integer.
        """
        try:
            lines = read_lines(path)
        except (OSError, UnicodeDecodeError) as e:
            return Err(io_error(path, "read", e))

        counter_token: str | None = None
        declared_version: str | None = None
        for line in lines:
            if BUILD_COUNTER_MARKER in line:
                counter_token = _last_token(line)
            elif VERSION_NAME_MARKER in line:
                token = _last_token(line)
                declared_version = token.strip(_QUOTES) if token else None

        if counter_token is None:
            return Err(FieldNotFoundError(path=path, marker=BUILD_COUNTER_MARKER))
        if not counter_token.isascii() or not counter_token.isdigit():
            return Err(ParseError(path=path, marker=BUILD_COUNTER_MARKER, token=counter_token))

        return Ok(
            cls(
                path=path,
                current_version=current_version,
                current_build_counter=int(counter_token),
                counter_token=counter_token,
                declared_version=declared_version,
            )
        )

    @property
    def path(self) -> Path:
        return self._path

    @property
    def current_build_counter(self) -> int:
        return self._current_build_counter

    @property
    def declared_version(self) -> str | None:
        """The versionName literally written in the file, if any."""
        return self._declared_version

    @property
    def consumed(self) -> bool:
        return self._consumed

    def next_build_counter(self) -> Result[int, VersionOverflowError]:
        current = self._current_build_counter
        if current >= MAX_BUILD_COUNTER:
            return Err(
                VersionOverflowError(field="versionCode", value=current, limit=MAX_BUILD_COUNTER)
            )
        return Ok(current + 1)

    def current_version_text(self) -> str:
        return self._current_version.format()

    def next_version_text(self, release_class: ReleaseClass) -> Result[str, VersionOverflowError]:
        return self._current_version.next(release_class).map(SemanticVersion.format)

    def rewrite_job(self, release_class: ReleaseClass) -> Result[FileRewriteJob, BumpError]:
        next_name = self.next_version_text(release_class)
        if isinstance(next_name, Err):
            return next_name
        next_counter = self.next_build_counter()
        if isinstance(next_counter, Err):
            return next_counter

        return Ok(
            FileRewriteJob(
                path=self._path,
                rules=(
                    LineRule(
                        marker=BUILD_COUNTER_MARKER,
                        old=self._counter_token,
                        new=str(next_counter.value),
                    ),
                    LineRule(
                        marker=VERSION_NAME_MARKER,
                        old=self.current_version_text(),
                        new=next_name.value,
                    ),
                ),
            )
        )

    def upgrade(self, release_class: ReleaseClass) -> Result[DescriptorOutcome, BumpError]:
        """Rewrite the version name and build counter in place."""
        if self._consumed:
            return Err(UpgraderConsumedError(path=self._path))

        job = self.rewrite_job(release_class)
        if isinstance(job, Err):
            return job

        self._consumed = True
        changed = job.value.run()
        if isinstance(changed, Err):
            return changed

        counter_rule, name_rule = job.value.rules
        return Ok(
            DescriptorOutcome(
                version=UpgradeOutcome(
                    path=self._path,
                    previous=name_rule.old,
                    current=name_rule.new,
                    lines_changed=changed.value,
                ),
                previous_build_counter=self._current_build_counter,
                build_counter=int(counter_rule.new),
            )
        )


def _last_token(line: str) -> str | None:
    tokens = line.split()
    return tokens[-1] if tokens else None
