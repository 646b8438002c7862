"""Filesystem helpers for line-oriented rewrites."""

from __future__ import annotations

import os
import shutil
from collections.abc import Callable
from pathlib import Path

__all__ = ["read_lines", "rewrite_lines", "temp_path_for"]

LineTransform = Callable[[str], str]


def temp_path_for(path: Path) -> Path:
    """Sibling temp file used while rewriting ``path``."""
    return path.with_name(f"{path.name}.new")


def read_lines(path: Path, *, encoding: str = "utf-8") -> list[str]:
    """Read a text file into lines without their terminators."""
    with path.open("r", encoding=encoding) as handle:
        return [_strip_terminator(raw) for raw in handle]


def rewrite_lines(
    path: Path,
    transform: LineTransform,
    *,
    temp_path: Path | None = None,
    encoding: str = "utf-8",
) -> int:
    """Stream path through transform into a temp file, then swap it in.

    Every line is passed to ``transform`` without its terminator and
    written back followed by ``\\n``. Lines the transform leaves alone are
    copied byte for byte (modulo terminator normalization). Once the temp
    file is flushed and closed it replaces ``path`` with ``os.replace``,
    so readers see either the old content or the new one.

    Args:
        path: File to rewrite.
        transform: Maps a line to its (possibly unchanged) replacement.
        temp_path: Where to stage the new content; defaults to ``<path>.new``.
        encoding: Text encoding for both files.

    Returns:
        Number of lines the transform changed.

    Raises:
        FileNotFoundError: If path does not exist.
        OSError: On any read, write or replace failure. The staged temp
            file is left in place and the original is untouched.
        Exception: Anything raised by transform, with the same guarantees.
    """
    staged = temp_path if temp_path is not None else temp_path_for(path)
    changed = 0

    with path.open("r", encoding=encoding) as src:
        with staged.open("w", encoding=encoding, newline="", buffering=1) as dst:
            for raw in src:
                line = _strip_terminator(raw)
                rewritten = transform(line)
                if rewritten != line:
                    changed += 1
                dst.write(rewritten + "\n")
            dst.flush()
            os.fsync(dst.fileno())

    shutil.copymode(path, staged)
    os.replace(staged, path)
    return changed


def _strip_terminator(raw: str) -> str:
    # Universal newline mode has already folded \r\n and \r into \n.
    return raw[:-1] if raw.endswith("\n") else raw
