"""Line rewrite rules and the one-shot job that applies them to a file.

Matching is by literal substring: a rule fires on any line containing its
marker and replaces every occurrence of ``old`` on that line. If ``old``
also appears in unrelated text on a matched line, that text is replaced
too. A structured rewriter (e.g. real JSON editing for the manifest) can
replace ``FileRewriteJob.transform`` without touching the upgraders.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from vbump.core.result import Err, Ok, Result
from vbump.platform.files import rewrite_lines, temp_path_for
from vbump.services.release.errors import FileIOError, MissingFileError, io_error


@dataclass(frozen=True, slots=True)
class LineRule:
    marker: str
    old: str
    new: str

    def matches(self, line: str) -> bool:
        return self.marker in line

    def apply(self, line: str) -> str:
        return line.replace(self.old, self.new)


@dataclass(frozen=True, slots=True)
class FileRewriteJob:
    """A file plus the rules to apply to it, staged through ``<path>.new``."""

    path: Path
    rules: tuple[LineRule, ...]

    @property
    def temp_path(self) -> Path:
        return temp_path_for(self.path)

    def transform(self, line: str) -> str:
        # Markers are mutually exclusive per line; first match wins.
        for rule in self.rules:
            if rule.matches(line):
                return rule.apply(line)
        return line

    def run(self) -> Result[int, MissingFileError | FileIOError]:
        """Rewrite the file; returns the number of changed lines."""
        try:
            changed = rewrite_lines(self.path, self.transform, temp_path=self.temp_path)
        except (OSError, UnicodeDecodeError) as e:
            return Err(io_error(self.path, "rewrite", e))
        return Ok(changed)
