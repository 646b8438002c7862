from __future__ import annotations

import re
from dataclasses import dataclass

from vbump.core.result import Err, Ok, Result
from vbump.services.release.errors import MalformedVersionError, VersionOverflowError
from vbump.services.release.model import ReleaseClass

# Upper bound for a single component. The historical format stored each
# component in one byte; nothing here depends on that width.
MAX_COMPONENT = 2**31 - 1

_COMPONENT_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True, slots=True, order=True)
class SemanticVersion:
    major: int
    minor: int
    patch: int

    def format(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def __str__(self) -> str:
        return self.format()

    def next(self, release_class: ReleaseClass) -> Result[SemanticVersion, VersionOverflowError]:
        """Successor for a release class; lower components reset to zero."""
        match release_class:
            case ReleaseClass.MAJOR:
                bumped = _increment("major", self.major)
                if isinstance(bumped, Err):
                    return bumped
                return Ok(SemanticVersion(bumped.value, 0, 0))
            case ReleaseClass.MINOR:
                bumped = _increment("minor", self.minor)
                if isinstance(bumped, Err):
                    return bumped
                return Ok(SemanticVersion(self.major, bumped.value, 0))
            case ReleaseClass.PATCH:
                bumped = _increment("patch", self.patch)
                if isinstance(bumped, Err):
                    return bumped
                return Ok(SemanticVersion(self.major, self.minor, bumped.value))
            case _:
                raise AssertionError(f"unexpected release class: {release_class}")


def parse_version(text: str) -> Result[SemanticVersion, MalformedVersionError]:
    """Parse a strict MAJOR.MINOR.PATCH triple.

    Exactly three dot-separated fields of ASCII digits are required; there
    is no defaulting of missing fields and no pre-release suffix.
    """
    fields = text.strip().split(".")
    if len(fields) != 3:
        return Err(
            MalformedVersionError(
                text=text,
                reason=f"expected 3 components, found {len(fields)}",
            )
        )

    components: list[int] = []
    for name, field in zip(("major", "minor", "patch"), fields):
        if not _COMPONENT_RE.fullmatch(field):
            return Err(MalformedVersionError(text=text, reason=f"{name} is not a number"))
        value = int(field)
        if value > MAX_COMPONENT:
            return Err(MalformedVersionError(text=text, reason=f"{name} exceeds {MAX_COMPONENT}"))
        components.append(value)

    return Ok(SemanticVersion(components[0], components[1], components[2]))


def _increment(field: str, value: int) -> Result[int, VersionOverflowError]:
    if value >= MAX_COMPONENT:
        return Err(VersionOverflowError(field=field, value=value, limit=MAX_COMPONENT))
    return Ok(value + 1)
