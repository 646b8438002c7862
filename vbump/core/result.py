"""Result type for explicit error handling.

Every fallible operation in vbump returns either ``Ok(value)`` or
``Err(error)`` instead of raising. Callers branch on the variant:

    match parse_version("1.2.3"):
        case Ok(version):
            print(version.format())
        case Err(error):
            print(error.message)

or, where pattern matching is noisy:

    loaded = ManifestUpgrader.load(path)
    if isinstance(loaded, Err):
        return loaded
    upgrader = loaded.value
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """A successful result."""

    value: T

    def map[U](self, f: Callable[[T], U]) -> Ok[U]:
        """Apply f to the contained value."""
        return Ok(f(self.value))

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """A failed result; ``map`` passes it through untouched."""

    error: E

    def map(self, f: Callable[..., object]) -> Err[E]:
        return self

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]
