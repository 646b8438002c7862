"""Version field of the package manifest (package.json).

The manifest is the authority for the project's current version. It is
scanned as plain text, not parsed as JSON: the watched line is the one
containing ``"version"``.
"""

from __future__ import annotations

from pathlib import Path

from vbump.core.result import Err, Ok, Result
from vbump.platform.files import read_lines
from vbump.services.release.errors import (
    BumpError,
    FieldNotFoundError,
    MalformedVersionError,
    UpgraderConsumedError,
    VersionOverflowError,
    io_error,
)
from vbump.services.release.model import ReleaseClass, UpgradeOutcome
from vbump.services.release.rewrite import FileRewriteJob, LineRule
from vbump.services.release.semver import SemanticVersion, parse_version

VERSION_MARKER = '"version"'


class ManifestUpgrader:
    """One-shot upgrader for the manifest's version string."""

    def __init__(self, *, path: Path, current_version: SemanticVersion) -> None:
        self._path = path
        self._current_version = current_version
        self._consumed = False

    @classmethod
    def load(cls, path: Path) -> Result[ManifestUpgrader, BumpError]:
        """Read the current version from path.

        Quotes and commas are stripped from the marker line and its last
        whitespace-delimited token is parsed as the version.
        """
        try:
            lines = read_lines(path)
        except (OSError, UnicodeDecodeError) as e:
            return Err(io_error(path, "read", e))

        raw: str | None = None
        for line in lines:
            if VERSION_MARKER in line:
                tokens = line.replace('"', "").replace(",", "").split()
                raw = tokens[-1] if tokens else ""

        if raw is None:
            return Err(FieldNotFoundError(path=path, marker=VERSION_MARKER))

        parsed = parse_version(raw)
        if isinstance(parsed, Err):
            error = parsed.error
            return Err(MalformedVersionError(text=error.text, reason=error.reason, path=path))

        return Ok(cls(path=path, current_version=parsed.value))

    @property
    def path(self) -> Path:
        return self._path

    @property
    def current_version(self) -> SemanticVersion:
        return self._current_version

    @property
    def consumed(self) -> bool:
        return self._consumed

    def next_version(
        self, release_class: ReleaseClass
    ) -> Result[SemanticVersion, VersionOverflowError]:
        return self._current_version.next(release_class)

    def rewrite_job(self, release_class: ReleaseClass) -> Result[FileRewriteJob, BumpError]:
        nxt = self.next_version(release_class)
        if isinstance(nxt, Err):
            return nxt
        rule = LineRule(
            marker=VERSION_MARKER,
            old=self._current_version.format(),
            new=nxt.value.format(),
        )
        return Ok(FileRewriteJob(path=self._path, rules=(rule,)))

    def upgrade(self, release_class: ReleaseClass) -> Result[UpgradeOutcome, BumpError]:
        """Rewrite the version string in place."""
        if self._consumed:
            return Err(UpgraderConsumedError(path=self._path))

        job = self.rewrite_job(release_class)
        if isinstance(job, Err):
            return job

        self._consumed = True
        changed = job.value.run()
        if isinstance(changed, Err):
            return changed

        (rule,) = job.value.rules
        return Ok(
            UpgradeOutcome(
                path=self._path,
                previous=rule.old,
                current=rule.new,
                lines_changed=changed.value,
            )
        )
